from __future__ import annotations
import csv
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from expense_forecast.analytics.periods import MIN_MONTHS_FOR_FORECAST, months_of_history
from expense_forecast.core.models import CategoryForecast, MonthKey, MonthlyExpenseRecord
from expense_forecast.core.results import ErrorKind, Failure, Result, Success
from expense_forecast.forecasting.engine import confidence_label, total_predicted

CSV_HEADER = ["year", "month", "category", "averageLastThreeMonths", "season", "totalAmount"]
TRAINING_CSV_NAME = "expense_training_data.csv"

def ensure_dir(p: Path):
  p.mkdir(parents=True, exist_ok=True)

def write_records_csv(path: Path, records: Iterable[MonthlyExpenseRecord]) -> Path:
  ensure_dir(path.parent)
  with path.open("w", newline="", encoding="utf-8") as f:
    # minimal quoting: only names with a comma, quote or newline get quoted
    w = csv.writer(f, lineterminator="\n")
    w.writerow(CSV_HEADER)
    for r in records:
      w.writerow([r.year, r.month, r.category_name, r.average_last_three_months, r.season, r.total_amount])
  return path

def export_records_csv(
  path: Path,
  records: Sequence[MonthlyExpenseRecord],
  min_months: int = MIN_MONTHS_FOR_FORECAST,
) -> Result[Path]:
  """Write the monthly records as CSV; refuses (without writing) when history is too short."""
  months = months_of_history(records)
  if months < min_months:
    return Failure(
      ErrorKind.NOT_ENOUGH_DATA,
      f"Insufficient data: {months} month(s) of history, at least {min_months} required.",
    )
  try:
    return Success(write_records_csv(path, records))
  except OSError as e:
    return Failure(ErrorKind.EXPORT_FAILED, f"Could not write {path}: {e}")

def read_records_csv(path: Path) -> List[Tuple[int, int, str, float]]:
  """Return (year, month, category, totalAmount) rows from an exported file."""
  with path.open("r", newline="", encoding="utf-8") as f:
    return [
      (int(r["year"]), int(r["month"]), r["category"], float(r["totalAmount"]))
      for r in csv.DictReader(f)
    ]

def write_forecast_md(
  reports_dir: Path,
  target_month: MonthKey,
  forecasts: Sequence[CategoryForecast],
  months_of_data: int,
) -> Path:
  ensure_dir(reports_dir)
  path = reports_dir / f"forecast_{target_month}.md"

  lines = []
  lines.append(f"# {target_month} — Expense forecast\n")
  lines.append(f"- **Months of history:** {months_of_data}")
  lines.append(f"- **Total predicted spend:** {total_predicted(forecasts):,.2f}")
  if forecasts and forecasts[0].is_basic_forecast:
    lines.append(
      "\n> Basic forecast: fewer than three months of history, so each category is "
      "predicted from its plain average. Keep logging expenses for a trend-based forecast."
    )
  lines.append("")

  lines.append("| Category | Predicted | Historical average | Confidence |")
  lines.append("|---|---:|---:|---|")
  for fc in forecasts:
    lines.append(
      f"| {fc.category_name} | {fc.predicted_amount:,.2f} | {fc.historical_average:,.2f} "
      f"| {fc.confidence:.0%} ({confidence_label(fc.confidence)}) |"
    )
  lines.append("")

  path.write_text("\n".join(lines), encoding="utf-8")
  return path

def write_error_md(reports_dir: Path, target_month: MonthKey, failure: Failure) -> Path:
  ensure_dir(reports_dir)
  path = reports_dir / f"forecast_{target_month}.md"
  if failure.kind == ErrorKind.NOT_ENOUGH_DATA:
    body = "No expense history yet. Add a few transactions to get a forecast."
  else:
    body = f"Forecast unavailable ({failure.describe()})."
  path.write_text(f"# {target_month} — Expense forecast\n\n{body}\n", encoding="utf-8")
  return path
