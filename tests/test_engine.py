"""Tests for the next-month forecast engine."""

import pytest

from conftest import tx
from expense_forecast.analytics.monthly_aggregates import aggregate_monthly_expenses
from expense_forecast.core.models import ForecastCfg
from expense_forecast.core.results import ErrorKind
from expense_forecast.forecasting.engine import (
    confidence_label,
    forecast_for_category,
    forecast_next_month,
    standard_confidence,
    total_predicted,
)


def _monthly(category, amounts, start_year=2025, start_month=1):
    rows = []
    y, m = start_year, start_month
    for amt in amounts:
        if amt is not None:
            rows.append(tx(f"{y:04d}-{m:02d}-15", category, amt))
        m += 1
        if m > 12:
            y, m = y + 1, 1
    return rows


class TestScenarios:

    def test_three_months_of_food_uses_standard_path(self, food_quarter):
        res = forecast_next_month(aggregate_monthly_expenses(food_quarter), "2025-04")
        assert res.ok
        (food,) = res.value
        assert food.category_name == "Food"
        assert food.historical_average == pytest.approx(1050.0)
        assert food.predicted_amount == pytest.approx((1000 + 1100 + 1050) / 3)
        assert food.is_basic_forecast is False
        assert food.confidence == pytest.approx(0.6)

    def test_single_month_uses_basic_path(self):
        records = aggregate_monthly_expenses([tx("2025-01-09", "Transport", 500.0)])
        res = forecast_next_month(records, "2025-02")
        assert res.ok
        (transport,) = res.value
        assert transport.is_basic_forecast is True
        assert transport.predicted_amount == pytest.approx(500.0)
        assert transport.historical_average == pytest.approx(500.0)
        assert transport.confidence == pytest.approx(0.3)

    def test_no_records_is_not_enough_data(self):
        res = forecast_next_month([], "2025-02")
        assert not res.ok
        assert res.kind == ErrorKind.NOT_ENOUGH_DATA


class TestGateBoundary:

    def test_two_months_every_forecast_is_basic(self):
        rows = _monthly("Food", [100.0, 300.0]) + _monthly("Fun", [50.0])
        res = forecast_next_month(aggregate_monthly_expenses(rows), "2025-03")
        assert res.ok
        assert all(f.is_basic_forecast for f in res.value)
        food = next(f for f in res.value if f.category_name == "Food")
        assert food.predicted_amount == pytest.approx(200.0)

    def test_three_months_switches_to_standard(self):
        rows = _monthly("Food", [100.0, 300.0, 200.0])
        res = forecast_next_month(aggregate_monthly_expenses(rows), "2025-04")
        assert res.ok
        assert not any(f.is_basic_forecast for f in res.value)

    def test_gate_is_global_not_per_category(self):
        rows = _monthly("Food", [100.0, 200.0, 300.0]) + [tx("2025-03-20", "Gifts", 80.0)]
        res = forecast_next_month(aggregate_monthly_expenses(rows), "2025-04")
        gifts = next(f for f in res.value if f.category_name == "Gifts")
        assert gifts.is_basic_forecast is False
        assert gifts.predicted_amount == pytest.approx(80.0)
        assert gifts.confidence == pytest.approx(0.5)


class TestStandardPath:

    def test_trailing_mean_uses_last_three_months_only(self):
        rows = _monthly("Rent", [5000.0, 100.0, 200.0, 300.0])
        res = forecast_next_month(aggregate_monthly_expenses(rows), "2025-05")
        (rent,) = res.value
        assert rent.predicted_amount == pytest.approx(200.0)
        assert rent.historical_average == pytest.approx(1400.0)

    def test_gap_in_history_shrinks_the_window(self):
        rows = _monthly("Food", [100.0, None, 200.0, 300.0]) + _monthly("Fun", [1.0, 1.0])
        res = forecast_next_month(aggregate_monthly_expenses(rows), "2025-05")
        food = next(f for f in res.value if f.category_name == "Food")
        assert food.predicted_amount == pytest.approx(250.0)

    def test_seasonal_multiplier_is_applied_multiplicatively(self):
        cfg = ForecastCfg(seasonal_multipliers={1: 1.0, 2: 1.0, 3: 1.5, 4: 1.0})
        rows = _monthly("Energy", [90.0, 100.0, 110.0, 120.0, 130.0])
        # latest month is May (spring), target is July (summer)
        res = forecast_next_month(aggregate_monthly_expenses(rows), "2025-07", cfg)
        (energy,) = res.value
        assert energy.predicted_amount == pytest.approx(120.0 * 1.5)

    def test_basic_path_ignores_seasonality(self):
        cfg = ForecastCfg(seasonal_multipliers={1: 1.0, 2: 1.0, 3: 2.0, 4: 1.0})
        rows = _monthly("Energy", [90.0, 110.0])
        res = forecast_next_month(aggregate_monthly_expenses(rows), "2025-07", cfg)
        (energy,) = res.value
        assert energy.predicted_amount == pytest.approx(100.0)

    @pytest.mark.parametrize("months,expected", [(1, 0.5), (3, 0.6), (5, 0.6), (6, 0.8), (12, 0.9), (30, 0.9)])
    def test_confidence_grows_with_history(self, months, expected):
        assert standard_confidence(months, ForecastCfg()) == pytest.approx(expected)

    def test_confidence_is_capped(self):
        cfg = ForecastCfg(confidence_steps=[(3, 1.4)])
        assert standard_confidence(4, cfg) == 1.0


class TestOutput:

    def test_sorted_by_predicted_amount_then_name(self):
        rows = [
            tx("2025-01-01", "B", 10.0),
            tx("2025-01-01", "A", 10.0),
            tx("2025-01-01", "C", 99.0),
        ]
        res = forecast_next_month(aggregate_monthly_expenses(rows), "2025-02")
        assert [f.category_name for f in res.value] == ["C", "A", "B"]
        assert total_predicted(res.value) == pytest.approx(119.0)

    def test_deterministic(self, food_quarter):
        records = aggregate_monthly_expenses(food_quarter)
        assert forecast_next_month(records, "2025-04") == forecast_next_month(list(reversed(records)), "2025-04")

    def test_invalid_config_is_a_model_error(self, food_quarter):
        res = forecast_next_month(aggregate_monthly_expenses(food_quarter), "2025-04", ForecastCfg(basic_confidence=1.5))
        assert not res.ok
        assert res.kind == ErrorKind.MODEL_ERROR
        assert "basic_confidence" in res.message

    def test_malformed_target_month_raises(self, food_quarter):
        with pytest.raises(ValueError):
            forecast_next_month(aggregate_monthly_expenses(food_quarter), "2025/04")

    def test_single_category_lookup(self, food_quarter):
        records = aggregate_monthly_expenses(food_quarter)
        assert forecast_for_category(records, "Food", "2025-04").value.category_name == "Food"
        missing = forecast_for_category(records, "Travel", "2025-04")
        assert not missing.ok
        assert missing.kind == ErrorKind.NOT_ENOUGH_DATA


@pytest.mark.parametrize("confidence,label", [(0.95, "high"), (0.8, "high"), (0.6, "medium"), (0.3, "low")])
def test_confidence_label(confidence, label):
    assert confidence_label(confidence) == label
