"""
Report Models for Personal Finance Dashboard

Shapes returned by the aggregation engine. They are plain results:
recomputed from AppState on every render, never stored.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from finance_dashboard.models.finance import (
    Account,
    ReportPeriod,
    SavingsGoal,
    Transaction,
)


class PeriodSummary(BaseModel):
    """Income and expense totals over the filtered transactions."""

    total_income: Decimal = Field(default=Decimal("0"), ge=0)
    total_expense: Decimal = Field(default=Decimal("0"), ge=0)

    @property
    def net(self) -> Decimal:
        return self.total_income - self.total_expense


class DashboardSummary(PeriodSummary):
    """
    The three stat cards.

    total_balance is a point-in-time snapshot over all accounts and is
    NOT restricted to the reporting period.
    """

    total_balance: Decimal = Decimal("0")


class CategoryTotal(BaseModel):
    """One slice of the expense-by-category chart."""

    name: str
    value: Decimal


class TimeBucket(BaseModel):
    """
    One bar group of the income-vs-expense chart.

    start_date is the day (or first of month) the bucket represents.
    Buckets are ordered by it, not by the display label.
    """

    name: str
    start_date: date
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")


class GoalProgress(BaseModel):
    """A savings goal with its derived progress figures."""

    goal: SavingsGoal
    percent: float = Field(ge=0.0, le=100.0)
    remaining_amount: Decimal
    days_remaining: int = Field(ge=0)


class DashboardReport(BaseModel):
    """Everything the dashboard renders for one reporting period."""

    period: ReportPeriod
    reference_date: date
    period_start: date
    summary: DashboardSummary
    expense_by_category: list[CategoryTotal] = Field(default_factory=list)
    income_expense_series: list[TimeBucket] = Field(default_factory=list)
    recent_transactions: list[Transaction] = Field(default_factory=list)
    goals: list[GoalProgress] = Field(default_factory=list)
    accounts: list[Account] = Field(default_factory=list)

    @property
    def has_period_data(self) -> bool:
        return bool(self.income_expense_series)
