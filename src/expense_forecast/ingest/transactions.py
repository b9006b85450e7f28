from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, List, Optional, Protocol

import pandas as pd
from dateutil import parser as dup

from expense_forecast.core.models import EXPENSE, INCOME, Transaction
from expense_forecast.core.results import TransactionFetchError

log = logging.getLogger(__name__)

class TransactionSource(Protocol):
    def fetch_all_transactions(self) -> List[Transaction]: ...

class InMemoryTransactionSource:
    def __init__(self, transactions: Iterable[Transaction] = ()):
        self._transactions = list(transactions)

    def fetch_all_transactions(self) -> List[Transaction]:
        return list(self._transactions)

@dataclass
class ColumnMap:
    date: str = "date"
    amount: str = "amount"
    category: str = "category"
    type: str = "type"
    id: str = "id"

def _to_str(x) -> str:
    if x is None or pd.isna(x):
        return ""
    return str(x)

def _to_num(x) -> float:
    if x is None or pd.isna(x) or x == "":
        return 0.0
    s = str(x).replace("$", "").replace(",", "").replace("(", "").replace(")", "").strip()
    try:
        return abs(float(s))
    except ValueError:
        return 0.0

# two fill-ins that differ in year and month but share day 1
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 1)

def parse_date_or_none(x: Any) -> Optional[date]:
    if x is None or pd.isna(x):
        return None
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    s = _to_str(x).strip()
    if not s:
        return None
    try:
        a = dup.parse(s, default=_DEFAULT_A)
        b = dup.parse(s, default=_DEFAULT_B)
    except (ValueError, OverflowError):
        return None
    # differing results mean the year or month came from the default
    if (a.year, a.month) != (b.year, b.month):
        return None
    return a.date()

def _to_type(x) -> str:
    s = _to_str(x).strip().lower()
    return INCOME if s == INCOME else EXPENSE

def _find_col(df: pd.DataFrame, name: str) -> str | None:
    low = {c.strip().lower(): c for c in df.columns if isinstance(c, str)}
    return low.get(name.strip().lower())

def _read_frame(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path, dtype=object)
    if suffix == ".xls":
        return pd.read_excel(path, dtype=object, engine="xlrd")
    raise ValueError(f"Unsupported transactions file type: {path.name}")

def transactions_from_frame(df: pd.DataFrame, columns: ColumnMap | None = None) -> List[Transaction]:
    columns = columns or ColumnMap()
    date_col = _find_col(df, columns.date)
    amount_col = _find_col(df, columns.amount)
    category_col = _find_col(df, columns.category)
    type_col = _find_col(df, columns.type)
    id_col = _find_col(df, columns.id)

    if not date_col or not amount_col or not category_col:
        raise ValueError(f"Missing expected columns. Found: {list(df.columns)}")

    out: List[Transaction] = []
    for i, row in df.iterrows():
        amount = _to_num(row.get(amount_col))
        if amount <= 0:
            log.warning("Skipping row %s with non-positive amount", i)
            continue
        category = _to_str(row.get(category_col)).strip() or None
        out.append(Transaction(
            id=_to_str(row.get(id_col)).strip() if id_col else str(i),
            amount=amount,
            date=parse_date_or_none(row.get(date_col)),
            category_name=category,
            type=_to_type(row.get(type_col)) if type_col else EXPENSE,
        ))
    return out

class FileTransactionSource:
    """Transactions exported to a .csv or .xls sheet, re-read on every fetch."""

    def __init__(self, path: Path, columns: ColumnMap | None = None):
        self.path = Path(path)
        self.columns = columns or ColumnMap()

    def fetch_all_transactions(self) -> List[Transaction]:
        try:
            df = _read_frame(self.path)
            rows = transactions_from_frame(df, self.columns)
        except (OSError, ValueError) as e:
            raise TransactionFetchError(f"Could not read {self.path}: {e}") from e
        log.info("Loaded %d transactions from %s", len(rows), self.path.name)
        return rows

def find_latest_export(inputs_dir: Path, pattern: str) -> Path:
    candidates = sorted([p for p in inputs_dir.glob(pattern) if p.is_file()],
                        key=lambda p: p.stat().st_mtime, reverse=True)
    if not candidates:
        raise FileNotFoundError(f"No transaction exports matching {pattern!r} found in {inputs_dir}")
    return candidates[0]
