from __future__ import annotations
from typing import Dict, List, Sequence

from expense_forecast.analytics.monthly_aggregates import buckets_from_records
from expense_forecast.analytics.periods import months_of_history
from expense_forecast.analytics.seasons import seasonal_factor
from expense_forecast.analytics.trailing import Buckets, average_last_months
from expense_forecast.core.dates import shift_month, split_month_key
from expense_forecast.core.models import CategoryForecast, ForecastCfg, MonthKey, MonthlyExpenseRecord
from expense_forecast.core.results import ErrorKind, Failure, Result, Success

def _history_by_category(records: Sequence[MonthlyExpenseRecord]) -> Dict[str, List[MonthlyExpenseRecord]]:
    out: Dict[str, List[MonthlyExpenseRecord]] = {}
    for r in sorted(records, key=lambda r: (r.month_key, r.category_name)):
        out.setdefault(r.category_name, []).append(r)
    return out

def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0

def standard_confidence(category_months: int, cfg: ForecastCfg) -> float:
    """More months of a category's own history -> higher confidence, capped at 1.0."""
    conf = cfg.default_confidence
    for months, step_conf in sorted(cfg.confidence_steps, reverse=True):
        if category_months >= months:
            conf = step_conf
            break
    return min(max(conf, 0.0), 1.0)

def _standard_forecast(
    category: str,
    history: List[MonthlyExpenseRecord],
    buckets: Buckets,
    target_month: int,
    cfg: ForecastCfg,
) -> CategoryForecast:
    latest = history[-1]
    # trailing mean as the month after the latest bucket would carry it
    ny, nm = shift_month(latest.year, latest.month, 1)
    baseline = average_last_months(category, ny, nm, buckets, cfg.window_months)
    predicted = baseline * seasonal_factor(latest.month, target_month, cfg.seasonal_multipliers)
    return CategoryForecast(
        category_name=category,
        predicted_amount=max(predicted, 0.0),
        historical_average=_mean([r.total_amount for r in history]),
        confidence=standard_confidence(len(history), cfg),
        is_basic_forecast=False,
    )

def _basic_forecast(category: str, history: List[MonthlyExpenseRecord], cfg: ForecastCfg) -> CategoryForecast:
    avg = _mean([r.total_amount for r in history])
    return CategoryForecast(
        category_name=category,
        predicted_amount=max(avg, 0.0),
        historical_average=avg,
        confidence=cfg.basic_confidence,
        is_basic_forecast=True,
    )

def forecast_next_month(
    records: Sequence[MonthlyExpenseRecord],
    target_month: MonthKey,
    cfg: ForecastCfg | None = None,
) -> Result[List[CategoryForecast]]:
    """
    Forecast every category with history for target_month ("YYYY-MM").

    With at least cfg.min_months distinct months of activity (across all categories) each
    category gets the trailing-mean forecast, seasonally adjusted; otherwise every category
    falls back to its plain historical average at a fixed low confidence.
    """
    cfg = cfg or ForecastCfg()
    _, target_m = split_month_key(target_month)

    problems = cfg.validate()
    if problems:
        return Failure(ErrorKind.MODEL_ERROR, "; ".join(problems))
    if not records:
        return Failure(ErrorKind.NOT_ENOUGH_DATA)

    by_category = _history_by_category(records)
    use_standard = months_of_history(records) >= cfg.min_months
    buckets = buckets_from_records(records) if use_standard else {}

    forecasts: List[CategoryForecast] = []
    for category, history in by_category.items():
        if use_standard:
            forecasts.append(_standard_forecast(category, history, buckets, target_m, cfg))
        else:
            forecasts.append(_basic_forecast(category, history, cfg))

    forecasts.sort(key=lambda f: (-f.predicted_amount, f.category_name))
    return Success(forecasts)

def forecast_for_category(
    records: Sequence[MonthlyExpenseRecord],
    category: str,
    target_month: MonthKey,
    cfg: ForecastCfg | None = None,
) -> Result[CategoryForecast]:
    res = forecast_next_month(records, target_month, cfg)
    if not res.ok:
        return res
    for f in res.value:
        if f.category_name == category:
            return Success(f)
    return Failure(ErrorKind.NOT_ENOUGH_DATA, f"No history for category {category!r}")

def total_predicted(forecasts: Sequence[CategoryForecast]) -> float:
    return sum(f.predicted_amount for f in forecasts)

def confidence_label(confidence: float) -> str:
    if confidence >= 0.8:
        return "high"
    if confidence >= 0.6:
        return "medium"
    return "low"
