"""Tests for the pure aggregation engine and the dashboard report."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from finance_dashboard.constants import INITIAL_ACCOUNTS, INITIAL_CATEGORIES
from finance_dashboard.models.finance import (
    AppState,
    ReportPeriod,
    SavingsGoal,
    Transaction,
    TransactionType,
)
from finance_dashboard.reports import (
    build_dashboard_report,
    by_category,
    by_time_bucket,
    days_remaining,
    filter_by_period,
    goal_progress,
    recent_transactions,
    start_of_period,
    summarize,
    top_expense_categories,
    total_balance,
)


TODAY = date(2026, 10, 18)  # a Sunday


def make_tx(
    amount,
    on=TODAY,
    tx_type=TransactionType.EXPENSE,
    category_id="food",
    account_id="cash",
    description="Test",
) -> Transaction:
    return Transaction(
        type=tx_type,
        description=description,
        amount=Decimal(str(amount)),
        date=on,
        category_id=category_id,
        account_id=account_id,
    )


class TestStartOfPeriod:
    """Tests for period boundaries."""

    def test_weekly_starts_on_monday(self):
        """Test that a Sunday belongs to the week starting the Monday before."""
        assert start_of_period(TODAY, ReportPeriod.WEEKLY) == date(2026, 10, 12)

    def test_weekly_on_monday_is_same_day(self):
        """Test that Monday is its own week start."""
        assert start_of_period(date(2026, 10, 12), ReportPeriod.WEEKLY) == date(2026, 10, 12)

    def test_monthly(self):
        """Test first of month."""
        assert start_of_period(TODAY, ReportPeriod.MONTHLY) == date(2026, 10, 1)

    @pytest.mark.parametrize("month,expected", [
        (1, 1), (3, 1), (4, 4), (6, 4), (8, 7), (12, 10),
    ])
    def test_quarterly(self, month, expected):
        """Test first day of the quarter."""
        assert start_of_period(date(2026, month, 15), ReportPeriod.QUARTERLY) == date(2026, expected, 1)

    def test_yearly(self):
        """Test January first."""
        assert start_of_period(TODAY, ReportPeriod.YEARLY) == date(2026, 1, 1)

    def test_datetime_is_normalized(self):
        """Test that time-of-day is dropped."""
        assert start_of_period(datetime(2026, 10, 18, 23, 59), ReportPeriod.MONTHLY) == date(2026, 10, 1)


class TestFilterByPeriod:
    """Tests for period filtering."""

    def test_keeps_transactions_on_or_after_boundary(self):
        """Test inclusive lower boundary, order preserved."""
        before = make_tx(1, on=date(2026, 9, 30))
        first = make_tx(2, on=date(2026, 10, 1))
        later = make_tx(3, on=date(2026, 10, 17))
        result = filter_by_period([later, before, first], ReportPeriod.MONTHLY, TODAY)
        assert result == [later, first]

    def test_future_dated_transactions_are_included(self):
        """Test that the window is open-ended after today."""
        future = make_tx(1, on=date(2026, 12, 1))
        assert filter_by_period([future], ReportPeriod.MONTHLY, TODAY) == [future]

    def test_empty_input(self):
        """Test that no transactions yields no transactions."""
        assert filter_by_period([], ReportPeriod.YEARLY, TODAY) == []


class TestTotals:
    """Tests for summaries and balances."""

    def test_summarize(self):
        """Test income and expense sums."""
        summary = summarize([
            make_tx(100, tx_type=TransactionType.INCOME, category_id="salary"),
            make_tx(30),
            make_tx(20),
        ])
        assert summary.total_income == Decimal("100")
        assert summary.total_expense == Decimal("50")
        assert summary.net == Decimal("50")

    def test_summarize_empty(self):
        """Test zero totals for an empty period."""
        summary = summarize([])
        assert summary.total_income == Decimal("0")
        assert summary.total_expense == Decimal("0")

    def test_total_balance(self):
        """Test sum over all seeded accounts."""
        assert total_balance(INITIAL_ACCOUNTS) == Decimal("25000000")


class TestBreakdowns:
    """Tests for category and time-bucket breakdowns."""

    def test_by_category_first_seen_order(self):
        """Test that slices keep the order categories first appear."""
        result = by_category([
            make_tx(10, category_id="transport"),
            make_tx(20, category_id="food"),
            make_tx(5, category_id="transport"),
        ], INITIAL_CATEGORIES)
        assert [(c.name, c.value) for c in result] == [
            ("Di chuyển", Decimal("15")),
            ("Thực phẩm", Decimal("20")),
        ]

    def test_by_category_ignores_income(self):
        """Test that only expenses are broken down."""
        result = by_category([
            make_tx(100, tx_type=TransactionType.INCOME, category_id="salary"),
        ], INITIAL_CATEGORIES)
        assert result == []

    def test_by_category_skips_unknown_category(self):
        """Test that unresolved categories are left out."""
        result = by_category([make_tx(10, category_id="nope")], INITIAL_CATEGORIES)
        assert result == []

    def test_top_expense_categories(self):
        """Test descending order, limit, and stable ties."""
        result = top_expense_categories([
            make_tx(10, category_id="transport"),
            make_tx(50, category_id="food"),
            make_tx(10, category_id="housing"),
            make_tx(5, category_id="health"),
        ], INITIAL_CATEGORIES, limit=3)
        assert [c.name for c in result] == ["Thực phẩm", "Di chuyển", "Nhà ở"]

    def test_time_buckets_by_day_sorted_by_date(self):
        """Test daily buckets ordered by date, not by label."""
        result = by_time_bucket([
            make_tx(10, on=date(2026, 10, 10)),
            make_tx(20, on=date(2026, 10, 2)),
            make_tx(30, on=date(2026, 10, 10), tx_type=TransactionType.INCOME, category_id="salary"),
        ], ReportPeriod.MONTHLY)
        assert [b.name for b in result] == ["Ngày 2", "Ngày 10"]
        assert result[1].income == Decimal("30")
        assert result[1].expense == Decimal("10")

    def test_time_buckets_by_month(self):
        """Test monthly buckets for quarterly and yearly reports."""
        result = by_time_bucket([
            make_tx(10, on=date(2026, 11, 3)),
            make_tx(20, on=date(2026, 2, 14)),
            make_tx(5, on=date(2026, 2, 1)),
        ], ReportPeriod.YEARLY)
        assert [b.name for b in result] == ["Tháng 2", "Tháng 11"]
        assert result[0].expense == Decimal("25")
        assert result[0].start_date == date(2026, 2, 1)

    def test_weekly_buckets_across_month_boundary(self):
        """Test that a week spanning two months keeps date order."""
        result = by_time_bucket([
            make_tx(1, on=date(2026, 11, 1)),
            make_tx(1, on=date(2026, 10, 30)),
        ], ReportPeriod.WEEKLY)
        assert [b.name for b in result] == ["Ngày 30", "Ngày 1"]


class TestRecentTransactions:
    """Tests for the recent transactions list."""

    def test_newest_recorded_first(self):
        """Test the last five in reverse insertion order."""
        txs = [make_tx(i + 1, description=f"t{i}") for i in range(7)]
        result = recent_transactions(txs, 5)
        assert [t.description for t in result] == ["t6", "t5", "t4", "t3", "t2"]

    def test_fewer_than_limit(self):
        """Test that short lists are returned whole, reversed."""
        txs = [make_tx(1, description="a"), make_tx(2, description="b")]
        assert [t.description for t in recent_transactions(txs, 5)] == ["b", "a"]

    def test_insertion_order_not_date_order(self):
        """Test that an older-dated transaction recorded last comes first."""
        txs = [make_tx(1, on=TODAY, description="new"), make_tx(1, on=date(2020, 1, 1), description="old")]
        assert recent_transactions(txs, 5)[0].description == "old"


class TestGoalProgress:
    """Tests for savings goal progress figures."""

    def test_days_remaining(self):
        """Test whole days until the target date."""
        assert days_remaining(date(2026, 10, 28), TODAY) == 10

    def test_days_remaining_never_negative(self):
        """Test that past targets show zero days."""
        assert days_remaining(date(2026, 1, 1), TODAY) == 0

    def test_goal_progress(self):
        """Test percent and remaining amount."""
        goal = SavingsGoal(
            name="Xe",
            target_amount=Decimal("1000"),
            current_amount=Decimal("250"),
            target_date=date(2026, 12, 31),
        )
        progress = goal_progress(goal, TODAY)
        assert progress.percent == 25.0
        assert progress.remaining_amount == Decimal("750")
        assert progress.days_remaining == 74


class TestDashboardReport:
    """Tests for the assembled dashboard report."""

    def test_expense_reduces_balance_and_shows_in_breakdown(self):
        """Test the end-to-end scenario with a 200,000 food expense."""
        accounts = tuple(
            a.model_copy(update={"balance": Decimal("4800000")}) if a.id == "cash" else a
            for a in INITIAL_ACCOUNTS
        )
        state = AppState(
            transactions=(make_tx(200000, category_id="food", account_id="cash"),),
            accounts=accounts,
        )
        report = build_dashboard_report(state, INITIAL_CATEGORIES, ReportPeriod.MONTHLY, TODAY)

        assert report.summary.total_expense == Decimal("200000")
        assert report.summary.total_balance == Decimal("24800000")
        assert [(c.name, c.value) for c in report.expense_by_category] == [
            ("Thực phẩm", Decimal("200000")),
        ]

    def test_balance_ignores_period(self):
        """Test that an empty period still shows the full balance."""
        state = AppState(
            transactions=(make_tx(100, on=date(2025, 1, 1)),),
            accounts=INITIAL_ACCOUNTS,
        )
        report = build_dashboard_report(state, INITIAL_CATEGORIES, ReportPeriod.WEEKLY, TODAY)

        assert report.summary.total_expense == Decimal("0")
        assert report.summary.total_balance == Decimal("25000000")
        assert report.expense_by_category == []
        assert report.has_period_data is False
        assert len(report.recent_transactions) == 1

    def test_report_period_fields(self):
        """Test reference and start dates."""
        report = build_dashboard_report(AppState(), INITIAL_CATEGORIES, ReportPeriod.QUARTERLY, TODAY)
        assert report.reference_date == TODAY
        assert report.period_start == date(2026, 10, 1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
