from __future__ import annotations
from typing import Dict

WINTER, SPRING, SUMMER, FALL = 1, 2, 3, 4

SEASON_NAMES = {WINTER: "winter", SPRING: "spring", SUMMER: "summer", FALL: "fall"}

_SEASON_BY_MONTH = {
    12: WINTER, 1: WINTER, 2: WINTER,
    3: SPRING, 4: SPRING, 5: SPRING,
    6: SUMMER, 7: SUMMER, 8: SUMMER,
    9: FALL, 10: FALL, 11: FALL,
}

def season_for_month(month: int) -> int:
    """Map a calendar month to its season id. Out-of-range months fall back to winter."""
    return _SEASON_BY_MONTH.get(month, WINTER)

def seasonal_factor(from_month: int, to_month: int, multipliers: Dict[int, float]) -> float:
    """Multiplicative adjustment taking a baseline observed in from_month to to_month."""
    base = multipliers.get(season_for_month(from_month), 1.0)
    target = multipliers.get(season_for_month(to_month), 1.0)
    return target / base
