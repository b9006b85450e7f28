from __future__ import annotations
from typing import Dict, List

from expense_forecast.core.dates import month_key, previous_months
from expense_forecast.core.models import MonthKey

Buckets = Dict[MonthKey, Dict[str, float]]  # {"YYYY-MM": {category: total}}

def average_last_months(
    category: str,
    year: int,
    month: int,
    buckets: Buckets,
    window: int = 3,
) -> float:
    """
    Mean of the category's totals over the `window` calendar months before (year, month).
    Months without a bucket for the category are left out of the divisor; none found -> 0.0.
    """
    found: List[float] = []
    for y, m in previous_months(year, month, window):
        amt = buckets.get(month_key(y, m), {}).get(category)
        if amt is not None:
            found.append(amt)
    if not found:
        return 0.0
    return sum(found) / len(found)
