from __future__ import annotations
import logging
from pathlib import Path
from typing import List

from expense_forecast.analytics.monthly_aggregates import aggregate_monthly_expenses
from expense_forecast.analytics.periods import months_of_history
from expense_forecast.core.models import CategoryForecast, ForecastCfg, MonthKey, MonthlyExpenseRecord
from expense_forecast.core.results import ErrorKind, Failure, Result, Success
from expense_forecast.forecasting.engine import forecast_for_category, forecast_next_month
from expense_forecast.ingest.transactions import TransactionSource
from expense_forecast.reports import export_records_csv

log = logging.getLogger(__name__)

class ExpenseForecastService:
    """
    Entry points for the presentation layer.

    Every call fetches the full transaction set and recomputes from scratch; nothing is cached.
    Expected conditions come back as Failure values, and errors raised by the source are
    logged and translated instead of propagating.
    """

    def __init__(self, source: TransactionSource, cfg: ForecastCfg | None = None):
        self.source = source
        self.cfg = cfg or ForecastCfg()

    def aggregate_monthly_expenses(self) -> Result[List[MonthlyExpenseRecord]]:
        try:
            transactions = self.source.fetch_all_transactions()
        except Exception as e:
            log.warning("Transaction fetch failed: %s", e)
            return Failure(ErrorKind.FETCH_FAILED, str(e))
        try:
            records = aggregate_monthly_expenses(transactions, self.cfg.window_months)
        except Exception as e:
            log.warning("Aggregation failed: %s", e)
            return Failure(ErrorKind.DATA_AGGREGATION_ERROR, str(e))
        return Success(records)

    def months_of_data_count(self) -> int:
        res = self.aggregate_monthly_expenses()
        return months_of_history(res.value) if res.ok else 0

    def has_enough_data_for_forecasting(self) -> bool:
        return self.months_of_data_count() >= self.cfg.min_months

    def has_any_data(self) -> bool:
        return self.months_of_data_count() > 0

    def generate_forecast_for_next_month(self, target_month: MonthKey) -> Result[List[CategoryForecast]]:
        res = self.aggregate_monthly_expenses()
        if not res.ok:
            return Failure(ErrorKind.DATA_AGGREGATION_ERROR, res.message)
        return forecast_next_month(res.value, target_month, self.cfg)

    def generate_forecast(self, category: str, target_month: MonthKey) -> Result[CategoryForecast]:
        res = self.aggregate_monthly_expenses()
        if not res.ok:
            return Failure(ErrorKind.DATA_AGGREGATION_ERROR, res.message)
        return forecast_for_category(res.value, category, target_month, self.cfg)

    def export_to_csv(self, path: Path) -> Result[Path]:
        res = self.aggregate_monthly_expenses()
        if not res.ok:
            return res
        return export_records_csv(Path(path), res.value, self.cfg.min_months)
