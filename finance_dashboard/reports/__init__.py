"""Reporting package: pure aggregation over the current state."""

from finance_dashboard.reports.aggregation import (
    build_summary,
    by_category,
    by_time_bucket,
    days_remaining,
    expense_transactions,
    filter_by_period,
    goal_progress,
    recent_transactions,
    start_of_period,
    summarize,
    top_expense_categories,
    total_balance,
)
from finance_dashboard.reports.dashboard import build_dashboard_report

__all__ = [
    "build_dashboard_report",
    "build_summary",
    "by_category",
    "by_time_bucket",
    "days_remaining",
    "expense_transactions",
    "filter_by_period",
    "goal_progress",
    "recent_transactions",
    "start_of_period",
    "summarize",
    "top_expense_categories",
    "total_balance",
]
