from __future__ import annotations
import logging
from typing import Dict, Iterable, List

from expense_forecast.analytics.seasons import season_for_month
from expense_forecast.analytics.trailing import Buckets, average_last_months
from expense_forecast.core.dates import month_key, split_month_key
from expense_forecast.core.models import EXPENSE, MonthlyExpenseRecord, Transaction

log = logging.getLogger(__name__)

def bucket_expenses(transactions: Iterable[Transaction]) -> Buckets:
    """Return { 'YYYY-MM': { category: total } } for expense transactions only."""
    out: Buckets = {}
    skipped = 0
    for t in transactions:
        if t.type != EXPENSE:
            continue
        if t.date is None or not t.category_name:
            skipped += 1
            continue
        m = month_key(t.date.year, t.date.month)
        per_cat: Dict[str, float] = out.setdefault(m, {})
        per_cat[t.category_name] = per_cat.get(t.category_name, 0.0) + t.amount
    if skipped:
        log.debug("Skipped %d expense(s) without a date or category", skipped)
    return out

def records_from_buckets(buckets: Buckets, window: int = 3) -> List[MonthlyExpenseRecord]:
    records: List[MonthlyExpenseRecord] = []
    # trailing averages only look at earlier months, so walk chronologically
    for key in sorted(buckets.keys()):
        year, month = split_month_key(key)
        season = season_for_month(month)
        for category in sorted(buckets[key].keys()):
            records.append(MonthlyExpenseRecord(
                year=year,
                month=month,
                category_name=category,
                total_amount=buckets[key][category],
                average_last_three_months=average_last_months(category, year, month, buckets, window),
                season=season,
            ))
    return records

def aggregate_monthly_expenses(
    transactions: Iterable[Transaction],
    window: int = 3,
) -> List[MonthlyExpenseRecord]:
    """One record per (month, category) with its total and trailing average."""
    return records_from_buckets(bucket_expenses(transactions), window)

def buckets_from_records(records: Iterable[MonthlyExpenseRecord]) -> Buckets:
    out: Buckets = {}
    for r in records:
        out.setdefault(r.month_key, {})[r.category_name] = r.total_amount
    return out
