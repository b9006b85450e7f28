"""Shared transaction builders for the expense forecast tests."""

from datetime import date
from itertools import count

import pytest

from expense_forecast.core.models import Transaction

_ids = count(1)


def tx(day, category, amount, type="expense"):
    """Build a transaction from an ISO date string (or None)."""
    d = date.fromisoformat(day) if day else None
    return Transaction(id=str(next(_ids)), amount=amount, date=d, category_name=category, type=type)


@pytest.fixture
def food_quarter():
    """Food at 1000 / 1100 / 1050 over Jan-Mar 2025, split over several purchases."""
    return [
        tx("2025-01-03", "Food", 400.0),
        tx("2025-01-20", "Food", 600.0),
        tx("2025-02-11", "Food", 1100.0),
        tx("2025-03-02", "Food", 50.0),
        tx("2025-03-28", "Food", 1000.0),
        tx("2025-02-01", "Salary", 3000.0, type="income"),
    ]


@pytest.fixture
def write_transactions_csv(tmp_path):
    def _write(rows, name="transactions.csv"):
        path = tmp_path / name
        lines = ["id,date,amount,category,type"]
        lines += [",".join(str(v) for v in r) for r in rows]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write
