from expense_forecast.analytics.monthly_aggregates import aggregate_monthly_expenses
from expense_forecast.analytics.periods import has_enough_data, months_of_history
from expense_forecast.analytics.seasons import season_for_month
from expense_forecast.core.models import CategoryForecast, ForecastCfg, MonthlyExpenseRecord, Transaction
from expense_forecast.core.results import ErrorKind, Failure, Success
from expense_forecast.forecasting.engine import forecast_next_month
from expense_forecast.service import ExpenseForecastService
