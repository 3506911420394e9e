"""
Aggregation Engine

DESIGN DECISION: Every function here is PURE.
Same inputs, same outputs, no side effects. The dashboard recomputes
all figures from the current state on every render instead of caching.

"today" is always an explicit, optional argument so the functions can
be tested against a fixed calendar.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from finance_dashboard.models.finance import (
    Account,
    Category,
    ReportPeriod,
    SavingsGoal,
    Transaction,
    TransactionType,
)
from finance_dashboard.models.reports import (
    CategoryTotal,
    DashboardSummary,
    GoalProgress,
    PeriodSummary,
    TimeBucket,
)


def _as_date(value: date) -> date:
    """Drop time-of-day (midnight-normalize) if a datetime slipped in."""
    if isinstance(value, datetime):
        return value.date()
    return value


def _today(today: Optional[date]) -> date:
    return _as_date(today) if today is not None else date.today()


# =============================================================================
# PERIODS
# =============================================================================

def start_of_period(reference_date: date, period: ReportPeriod) -> date:
    """
    First day of the period containing reference_date.

    WEEKLY: Monday of the ISO week (a Sunday belongs to the week before)
    MONTHLY: the 1st of the month
    QUARTERLY: the 1st day of the quarter (Jan, Apr, Jul, Oct)
    YEARLY: January 1st
    """
    d = _as_date(reference_date)

    if period == ReportPeriod.WEEKLY:
        return d - timedelta(days=d.weekday())
    if period == ReportPeriod.MONTHLY:
        return d.replace(day=1)
    if period == ReportPeriod.QUARTERLY:
        quarter_month = ((d.month - 1) // 3) * 3 + 1
        return date(d.year, quarter_month, 1)
    if period == ReportPeriod.YEARLY:
        return date(d.year, 1, 1)

    raise ValueError(f"Unknown report period: {period!r}")


def filter_by_period(
    transactions: Iterable[Transaction],
    period: ReportPeriod,
    today: Optional[date] = None,
) -> list[Transaction]:
    """Transactions dated on or after the start of the current period, order kept."""
    boundary = start_of_period(_today(today), period)
    return [t for t in transactions if t.date >= boundary]


# =============================================================================
# TOTALS
# =============================================================================

def expense_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    return [t for t in transactions if t.type == TransactionType.EXPENSE]


def summarize(transactions: Iterable[Transaction]) -> PeriodSummary:
    """Sum amounts by type over an already-filtered set."""
    income = Decimal("0")
    expense = Decimal("0")
    for t in transactions:
        if t.type == TransactionType.INCOME:
            income += t.amount
        else:
            expense += t.amount
    return PeriodSummary(total_income=income, total_expense=expense)


def total_balance(accounts: Iterable[Account]) -> Decimal:
    """Point-in-time sum of all account balances (not period filtered)."""
    return sum((a.balance for a in accounts), Decimal("0"))


def build_summary(
    filtered: Sequence[Transaction],
    accounts: Iterable[Account],
) -> DashboardSummary:
    """The three stat cards: period income, period expense, overall balance."""
    period = summarize(filtered)
    return DashboardSummary(
        total_income=period.total_income,
        total_expense=period.total_expense,
        total_balance=total_balance(accounts),
    )


# =============================================================================
# BREAKDOWNS
# =============================================================================

def _expense_totals_by_name(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
) -> dict[str, Decimal]:
    """
    Sum expenses per resolved category name, in first-seen order.

    Transactions whose category does not resolve are skipped.
    """
    names = {c.id: c.name for c in categories}
    totals: dict[str, Decimal] = {}

    for t in expense_transactions(transactions):
        name = names.get(t.category_id)
        if name is None:
            continue
        totals[name] = totals.get(name, Decimal("0")) + t.amount

    return totals


def by_category(
    filtered: Iterable[Transaction],
    categories: Iterable[Category],
) -> list[CategoryTotal]:
    """Expense-by-category slices, in the order categories first appear."""
    totals = _expense_totals_by_name(filtered, categories)
    return [CategoryTotal(name=name, value=value) for name, value in totals.items()]


def top_expense_categories(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    limit: int = 3,
) -> list[CategoryTotal]:
    """
    Biggest spending categories, descending.

    Ties keep first-seen order (sorted() is stable under reverse=True).
    """
    ranked = sorted(
        by_category(transactions, categories),
        key=lambda c: c.value,
        reverse=True,
    )
    return ranked[:limit]


def by_time_bucket(
    filtered: Iterable[Transaction],
    period: ReportPeriod,
) -> list[TimeBucket]:
    """
    Income/expense series for the bar chart.

    WEEKLY and MONTHLY bucket by day ("Ngày 5"), QUARTERLY and YEARLY by
    month ("Tháng 3"). Each bucket keeps the date it represents and the
    series is sorted on that date.
    """
    buckets: dict[date, TimeBucket] = {}

    for t in filtered:
        if period in (ReportPeriod.WEEKLY, ReportPeriod.MONTHLY):
            start = t.date
            label = f"Ngày {start.day}"
        else:
            start = t.date.replace(day=1)
            label = f"Tháng {start.month}"

        bucket = buckets.get(start)
        if bucket is None:
            bucket = TimeBucket(name=label, start_date=start)
            buckets[start] = bucket

        if t.type == TransactionType.INCOME:
            bucket.income += t.amount
        else:
            bucket.expense += t.amount

    return [buckets[start] for start in sorted(buckets)]


def recent_transactions(
    transactions: Sequence[Transaction],
    limit: int = 5,
) -> list[Transaction]:
    """The last `limit` transactions recorded, most recent first."""
    if limit <= 0:
        return []
    return list(reversed(transactions[-limit:]))


# =============================================================================
# SAVINGS GOALS
# =============================================================================

def days_remaining(target_date: date, today: Optional[date] = None) -> int:
    """Whole days until target_date; 0 when it is today or already past."""
    delta = (_as_date(target_date) - _today(today)).days
    return max(delta, 0)


def goal_progress(goal: SavingsGoal, today: Optional[date] = None) -> GoalProgress:
    """Progress bar figures for one goal."""
    percent = float(goal.current_amount / goal.target_amount * 100)
    return GoalProgress(
        goal=goal,
        percent=min(max(percent, 0.0), 100.0),
        remaining_amount=goal.remaining_amount,
        days_remaining=days_remaining(goal.target_date, today),
    )
