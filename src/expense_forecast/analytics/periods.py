from __future__ import annotations
from typing import Iterable, List, Set

from expense_forecast.core.models import MonthlyExpenseRecord

MIN_MONTHS_FOR_FORECAST = 3


def months_present(records: Iterable[MonthlyExpenseRecord]) -> List[str]:
  ms: Set[str] = set(r.month_key for r in records)
  return sorted(ms)


def months_of_history(records: Iterable[MonthlyExpenseRecord]) -> int:
  # global count across every category, not per category
  return len(months_present(records))


def has_enough_data(records: Iterable[MonthlyExpenseRecord], min_months: int = MIN_MONTHS_FOR_FORECAST) -> bool:
  return months_of_history(records) >= min_months
