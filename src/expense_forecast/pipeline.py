from __future__ import annotations
from datetime import date
from pathlib import Path

from expense_forecast.analytics.periods import months_of_history
from expense_forecast.config.loader import UnifiedConfig
from expense_forecast.core.dates import following_month, split_month_key
from expense_forecast.core.results import ErrorKind, Failure
from expense_forecast.forecasting.engine import forecast_next_month
from expense_forecast.ingest.transactions import FileTransactionSource, find_latest_export
from expense_forecast.reports import TRAINING_CSV_NAME, export_records_csv, write_error_md, write_forecast_md
from expense_forecast.service import ExpenseForecastService

def run_pipeline(cfg: UnifiedConfig, today: date) -> Path:
  inputs_dir  = cfg.paths.inputs_dir
  data_dir    = cfg.paths.data_dir
  reports_dir = cfg.paths.reports_dir

  target = cfg.options.override_month or following_month(today)
  split_month_key(target)  # fail fast on a malformed override

  # 1) Newest transaction export (contains all time), read once for the whole run
  export_path = find_latest_export(inputs_dir, cfg.source.transactions_glob)
  service = ExpenseForecastService(
    FileTransactionSource(export_path, cfg.source.columns),
    cfg.forecasting,
  )
  agg = service.aggregate_monthly_expenses()
  if not agg.ok:
    failure = Failure(ErrorKind.DATA_AGGREGATION_ERROR, agg.message)
    print(f"[WARN] No forecast for {target}: {failure.describe()}")
    return write_error_md(reports_dir, target, failure)
  records = agg.value
  months = months_of_history(records)

  # 2) Monthly records -> CSV (only once there is enough history)
  exported = export_records_csv(data_dir / TRAINING_CSV_NAME, records, cfg.forecasting.min_months)
  if exported.ok:
    print(f"Wrote monthly records to {exported.value}")
  else:
    print(f"[WARN] Skipped CSV export: {exported.describe()}")

  # 3) Forecast the chosen month from the same records
  res = forecast_next_month(records, target, cfg.forecasting)
  if res.ok:
    report = write_forecast_md(reports_dir, target, res.value, months)
    mode = "basic" if res.value and res.value[0].is_basic_forecast else "standard"
    print(f"Forecast for {target} ({mode}, {len(res.value)} categories, {months} months of history)")
  else:
    report = write_error_md(reports_dir, target, res)
    print(f"[WARN] No forecast for {target}: {res.describe()}")

  return report
