"""统计引擎服务模块"""
from expense.services.period_service import (
    resolve_interval, shift_interval, previous_interval, next_interval, period_display_name
)
from expense.services.transaction_filter import (
    TransactionFilter, filter_by_interval, filter_by_period, filter_by_predicate
)
from expense.services.goal_service import compute_goals, scaled_goal_limit
from expense.services.statistics_service import (
    StatisticsService, aggregate, category_breakdown, payment_method_breakdown,
    category_breakdown_for_period, payment_method_breakdown_for_period,
    period_summary, build_series, total_spending
)

__all__ = [
    "resolve_interval",
    "shift_interval",
    "previous_interval",
    "next_interval",
    "period_display_name",
    "TransactionFilter",
    "filter_by_interval",
    "filter_by_period",
    "filter_by_predicate",
    "compute_goals",
    "scaled_goal_limit",
    "StatisticsService",
    "aggregate",
    "category_breakdown",
    "payment_method_breakdown",
    "category_breakdown_for_period",
    "payment_method_breakdown_for_period",
    "period_summary",
    "build_series",
    "total_spending",
]
