"""
Tests for Personal Finance Dashboard

Test strategy:
1. Unit tests for individual components (models, aggregation, ledger, validators)
2. Integration tests for the controller (with in-memory storage)
3. No real API calls in tests (use fakes)
"""

import pytest
from datetime import date
from decimal import Decimal

from pydantic import ValidationError

from finance_dashboard.config import AppSettings, GeminiSettings, StorageSettings
from finance_dashboard.constants import INITIAL_ACCOUNTS, INITIAL_CATEGORIES
from finance_dashboard.formatting import format_currency, format_date, format_number
from finance_dashboard.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)
from finance_dashboard.models.finance import (
    Account,
    AppState,
    Category,
    ReportPeriod,
    SavingsGoal,
    Transaction,
    TransactionDraft,
    TransactionType,
    ValidationIssue,
    ValidationResult,
)


class TestFinanceModels:
    """Tests for the core Pydantic entities."""

    def test_transaction_creation(self):
        """Test Transaction model creation with a generated ID."""
        transaction = Transaction(
            type=TransactionType.EXPENSE,
            description="Ăn trưa",
            amount=Decimal("50000"),
            date=date(2026, 10, 18),
            category_id="food",
            account_id="cash",
        )
        assert transaction.id
        assert transaction.amount == Decimal("50000")

    def test_transaction_ids_are_unique(self):
        """Test that two transactions never share an ID."""
        kwargs = dict(
            type=TransactionType.INCOME,
            description="Lương",
            amount=Decimal("1"),
            date=date(2026, 10, 1),
            category_id="salary",
            account_id="bank",
        )
        assert Transaction(**kwargs).id != Transaction(**kwargs).id

    def test_transaction_rejects_non_positive_amount(self):
        """Test that zero and negative amounts are rejected."""
        for amount in (Decimal("0"), Decimal("-100")):
            with pytest.raises(ValidationError):
                Transaction(
                    type=TransactionType.EXPENSE,
                    description="Test",
                    amount=amount,
                    date=date(2026, 10, 18),
                    category_id="food",
                    account_id="cash",
                )

    def test_transaction_is_frozen(self):
        """Test that a recorded transaction cannot be edited."""
        transaction = Transaction(
            type=TransactionType.EXPENSE,
            description="Test",
            amount=Decimal("1"),
            date=date(2026, 10, 18),
            category_id="food",
            account_id="cash",
        )
        with pytest.raises(ValidationError):
            transaction.amount = Decimal("2")

    def test_account_allows_negative_balance(self):
        """Test that credit accounts may go below zero."""
        account = Account(id="credit", name="Thẻ tín dụng", balance=Decimal("-300000"))
        assert account.balance == Decimal("-300000")

    def test_savings_goal_cannot_exceed_target(self):
        """Test that current amount above target is rejected."""
        with pytest.raises(ValidationError):
            SavingsGoal(
                name="Xe",
                target_amount=Decimal("100"),
                current_amount=Decimal("101"),
                target_date=date(2027, 1, 1),
            )

    def test_savings_goal_remaining_and_complete(self):
        """Test derived goal properties."""
        goal = SavingsGoal(
            name="Xe",
            target_amount=Decimal("1000"),
            current_amount=Decimal("400"),
            target_date=date(2027, 1, 1),
        )
        assert goal.remaining_amount == Decimal("600")
        assert goal.is_complete is False
        assert goal.model_copy(update={"current_amount": Decimal("1000")}).is_complete is True

    def test_app_state_lookups(self):
        """Test finding accounts and goals by ID."""
        state = AppState(accounts=INITIAL_ACCOUNTS)
        assert state.find_account("cash").name == "Tiền mặt"
        assert state.find_account("missing") is None
        assert state.find_goal("missing") is None

    def test_transaction_draft_defaults(self):
        """Test that an empty form is a valid draft."""
        draft = TransactionDraft()
        assert draft.type == TransactionType.EXPENSE
        assert draft.amount is None
        assert draft.date is None

    def test_incomplete_draft_does_not_convert(self):
        """Test that a half-filled draft cannot become a strict input."""
        with pytest.raises(ValidationError):
            TransactionDraft(description="Ăn trưa").to_new_transaction()


class TestReportPeriod:
    """Tests for the reporting period enum."""

    def test_period_values(self):
        """Test period string values."""
        assert ReportPeriod("weekly") == ReportPeriod.WEEKLY
        assert ReportPeriod.YEARLY.value == "yearly"

    def test_period_labels(self):
        """Test Vietnamese labels."""
        assert [p.label for p in ReportPeriod] == ["Tuần", "Tháng", "Quý", "Năm"]


class TestCatalogs:
    """Tests for the built-in accounts and categories."""

    def test_initial_accounts(self):
        """Test seeded account balances."""
        balances = {a.id: a.balance for a in INITIAL_ACCOUNTS}
        assert balances == {
            "cash": Decimal("5000000"),
            "bank": Decimal("20000000"),
            "credit": Decimal("0"),
        }

    def test_category_ids_are_unique(self):
        """Test that no two categories share an ID."""
        ids = [c.id for c in INITIAL_CATEGORIES]
        assert len(ids) == len(set(ids))

    def test_both_types_have_categories(self):
        """Test that income and expense each have categories."""
        types = {c.type for c in INITIAL_CATEGORIES}
        assert types == {TransactionType.INCOME, TransactionType.EXPENSE}

    def test_food_category(self):
        """Test the food category used throughout the dashboard."""
        food = next(c for c in INITIAL_CATEGORIES if c.id == "food")
        assert food == Category(id="food", name="Thực phẩm", type=TransactionType.EXPENSE)


class TestActivityModels:
    """Tests for activity event models."""

    def test_activity_event_creation(self):
        """Test ActivityEvent model creation."""
        event = ActivityEvent(
            event_type=ActivityEventType.TRANSACTION_ADDED,
            description="Test transaction added",
        )
        assert event.event_type == ActivityEventType.TRANSACTION_ADDED
        assert event.severity == ActivitySeverity.INFO

    def test_activity_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = ActivityEvent(
            event_type=ActivityEventType.STORAGE_SAVE_FAILED,
            description="Save failed",
            details={"key": "accounts"},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "storage_save_failed"
        assert log_dict["details"]["key"] == "accounts"

    def test_builder_transaction_added(self):
        """Test ActivityEventBuilder.transaction_added."""
        event = ActivityEventBuilder.transaction_added(
            transaction_id="t1",
            transaction_type="EXPENSE",
            amount="200000",
            account_id="cash",
            new_balance="4800000",
        )
        assert event.event_type == ActivityEventType.TRANSACTION_ADDED
        assert event.entity_id == "t1"
        assert event.details["new_balance"] == "4800000"
        assert event.is_user_action is True

    def test_builder_external_service_error(self):
        """Test that service errors are logged at error severity."""
        event = ActivityEventBuilder.external_service_error(
            service="gemini",
            error_message="boom",
        )
        assert event.event_type == ActivityEventType.EXTERNAL_SERVICE_ERROR
        assert event.severity == ActivitySeverity.ERROR


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult.from_issues([
            ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Vui lòng điền tất cả các trường",
            ),
        ])
        assert result.is_valid is False
        assert result.has_errors is True
        assert result.error_count == 1
        assert result.user_message == "Vui lòng điền tất cả các trường"

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult.from_issues([
            ValidationIssue(
                field="date",
                issue_type="future_date",
                message="Date in future",
                severity="warning",
            ),
        ])
        assert result.is_valid is True
        assert result.has_errors is False
        assert result.error_count == 0
        assert result.user_message is None


class TestFormatting:
    """Tests for vi-VN display formatting."""

    def test_format_number_groups_with_dots(self):
        """Test digit grouping."""
        assert format_number(Decimal("1234567")) == "1.234.567"
        assert format_number(0) == "0"

    def test_format_number_rounds_to_whole_dong(self):
        """Test rounding of fractional amounts."""
        assert format_number(Decimal("999.5")) == "1.000"

    def test_format_currency(self):
        """Test the dong suffix."""
        assert format_currency(Decimal("5000000")) == "5.000.000 ₫"

    def test_format_negative_currency(self):
        """Test negative balances keep their sign."""
        assert format_currency(Decimal("-200000")) == "-200.000 ₫"

    def test_format_date(self):
        """Test dd/mm/yyyy dates."""
        assert format_date(date(2026, 10, 8)) == "08/10/2026"


class TestSettings:
    """Tests for configuration models."""

    def test_gemini_without_key_is_not_configured(self):
        """Test that a blank API key disables insights."""
        assert GeminiSettings(api_key=None).is_configured is False
        assert GeminiSettings(api_key="   ").is_configured is False
        assert GeminiSettings(api_key="abc").is_configured is True

    def test_storage_keys_reject_path_separators(self):
        """Test that storage keys cannot name other directories."""
        with pytest.raises(ValidationError):
            StorageSettings(accounts_key="../accounts")

    def test_app_defaults(self):
        """Test display and insights thresholds."""
        settings = AppSettings(log_level="debug")
        assert settings.log_level == "DEBUG"
        assert settings.min_expense_transactions_for_insights >= 1
        assert settings.default_period in {p.value for p in ReportPeriod}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
