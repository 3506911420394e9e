"""Assemble every figure the dashboard shows for one reporting period."""

from datetime import date
from typing import Iterable, Optional

from finance_dashboard.models.finance import AppState, Category, ReportPeriod
from finance_dashboard.models.reports import DashboardReport
from finance_dashboard.reports.aggregation import (
    build_summary,
    by_category,
    by_time_bucket,
    filter_by_period,
    goal_progress,
    recent_transactions,
    start_of_period,
)


def build_dashboard_report(
    state: AppState,
    categories: Iterable[Category],
    period: ReportPeriod,
    today: Optional[date] = None,
    recent_limit: int = 5,
) -> DashboardReport:
    """
    Compute the dashboard for `period` as of `today`.

    Period income/expense and both charts derive from the same filtered
    set. The balance card, recent transactions, goals and accounts
    ignore the period.
    """
    reference = today if today is not None else date.today()
    filtered = filter_by_period(state.transactions, period, reference)

    return DashboardReport(
        period=period,
        reference_date=reference,
        period_start=start_of_period(reference, period),
        summary=build_summary(filtered, state.accounts),
        expense_by_category=by_category(filtered, categories),
        income_expense_series=by_time_bucket(filtered, period),
        recent_transactions=recent_transactions(state.transactions, recent_limit),
        goals=[goal_progress(g, reference) for g in state.savings_goals],
        accounts=list(state.accounts),
    )
