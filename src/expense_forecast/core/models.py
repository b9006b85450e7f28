from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple

MonthKey = str  # "YYYY-MM"

EXPENSE = "expense"
INCOME = "income"

@dataclass(frozen=True)
class Transaction:
  id: str
  amount: float                   # always positive
  date: Optional[date]            # date or datetime; None when unknown
  category_name: Optional[str]
  type: str = EXPENSE             # "expense" | "income"

@dataclass(frozen=True)
class MonthlyExpenseRecord:
  year: int
  month: int                      # 1..12
  category_name: str
  total_amount: float
  average_last_three_months: float
  season: int                     # 1=Winter 2=Spring 3=Summer 4=Fall

  @property
  def month_key(self) -> MonthKey:
    return f"{self.year:04d}-{self.month:02d}"

@dataclass(frozen=True)
class CategoryForecast:
  category_name: str
  predicted_amount: float
  historical_average: float
  confidence: float               # 0.0 .. 1.0
  is_basic_forecast: bool

def _default_confidence_steps() -> List[Tuple[int, float]]:
  return [(12, 0.9), (6, 0.8), (3, 0.6)]

def _default_multipliers() -> Dict[int, float]:
  return {1: 1.0, 2: 1.0, 3: 1.0, 4: 1.0}

@dataclass
class ForecastCfg:
  min_months: int = 3                  # global months of history for the standard path
  window_months: int = 3               # trailing window length
  basic_confidence: float = 0.3        # fixed confidence of the basic path
  default_confidence: float = 0.5      # standard path, fewer months than any step
  confidence_steps: List[Tuple[int, float]] = field(default_factory=_default_confidence_steps)
  seasonal_multipliers: Dict[int, float] = field(default_factory=_default_multipliers)

  def validate(self) -> List[str]:
    problems: List[str] = []
    if self.min_months < 1:
      problems.append(f"min_months must be >= 1 (got {self.min_months})")
    if self.window_months < 1:
      problems.append(f"window_months must be >= 1 (got {self.window_months})")
    for name, v in (("basic_confidence", self.basic_confidence),
                    ("default_confidence", self.default_confidence)):
      if not 0.0 <= v <= 1.0:
        problems.append(f"{name} must be within [0, 1] (got {v})")
    for months, conf in self.confidence_steps:
      if not 0.0 <= conf <= 1.0:
        problems.append(f"confidence for {months} months must be within [0, 1] (got {conf})")
    for season in (1, 2, 3, 4):
      m = self.seasonal_multipliers.get(season)
      if m is None or m <= 0.0:
        problems.append(f"seasonal multiplier for season {season} must be > 0 (got {m})")
    return problems
