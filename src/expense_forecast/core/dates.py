from __future__ import annotations
from datetime import date
from typing import List, Tuple

from expense_forecast.core.models import MonthKey

def month_key(year: int, month: int) -> MonthKey:
  return f"{year:04d}-{month:02d}"

def split_month_key(key: MonthKey) -> Tuple[int, int]:
  parts = key.split("-")
  if len(parts) != 2:
    raise ValueError(f"Expected a YYYY-MM month key, got {key!r}")
  y, m = int(parts[0]), int(parts[1])
  if not 1 <= m <= 12:
    raise ValueError(f"Month out of range in {key!r}")
  return y, m

def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
  """Move (year, month) by delta calendar months, wrapping year boundaries."""
  idx = year * 12 + (month - 1) + delta
  return idx // 12, idx % 12 + 1

def previous_months(year: int, month: int, count: int) -> List[Tuple[int, int]]:
  # nearest first, the month itself excluded
  return [shift_month(year, month, -i) for i in range(1, count + 1)]

def following_month(today: date) -> MonthKey:
  y, m = shift_month(today.year, today.month, 1)
  return month_key(y, m)
