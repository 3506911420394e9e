"""Tests for the pure ledger operations."""

import pytest
from datetime import date
from decimal import Decimal

from finance_dashboard.constants import INITIAL_ACCOUNTS
from finance_dashboard.ledger import (
    GoalTargetExceededError,
    LedgerError,
    UnknownAccountError,
    UnknownGoalError,
    add_savings_goal,
    add_transaction,
    contribute_to_goal,
)
from finance_dashboard.models.finance import (
    AppState,
    NewSavingsGoal,
    NewTransaction,
    SavingsGoal,
    TransactionType,
)


@pytest.fixture
def state() -> AppState:
    return AppState(accounts=INITIAL_ACCOUNTS)


@pytest.fixture
def goal_state(state) -> AppState:
    goal = SavingsGoal(
        id="car",
        name="Mua xe mới",
        target_amount=Decimal("1000000"),
        current_amount=Decimal("900000"),
        target_date=date(2027, 6, 1),
    )
    return state.model_copy(update={"savings_goals": (goal,)})


def new_tx(amount, tx_type=TransactionType.EXPENSE, account_id="cash", category_id="food"):
    return NewTransaction(
        type=tx_type,
        description="Test",
        amount=Decimal(str(amount)),
        date=date(2026, 10, 18),
        category_id=category_id,
        account_id=account_id,
    )


class TestAddTransaction:
    """Tests for recording transactions."""

    def test_expense_reduces_account_balance(self, state):
        """Test cash 5,000,000 minus a 200,000 expense."""
        new_state, tx = add_transaction(state, new_tx(200000))
        assert new_state.find_account("cash").balance == Decimal("4800000")
        assert new_state.transactions == (tx,)

    def test_income_increases_account_balance(self, state):
        """Test that income is added to the balance."""
        new_state, _ = add_transaction(
            state, new_tx(1000000, TransactionType.INCOME, "bank", "salary")
        )
        assert new_state.find_account("bank").balance == Decimal("21000000")

    def test_expense_may_overdraw(self, state):
        """Test that balances may go negative (credit card)."""
        new_state, _ = add_transaction(state, new_tx(300000, account_id="credit"))
        assert new_state.find_account("credit").balance == Decimal("-300000")

    def test_other_accounts_untouched(self, state):
        """Test that only the referenced account changes."""
        new_state, _ = add_transaction(state, new_tx(1))
        assert new_state.find_account("bank") == state.find_account("bank")

    def test_input_state_is_not_modified(self, state):
        """Test purity: the input state is unchanged."""
        add_transaction(state, new_tx(200000))
        assert state.transactions == ()
        assert state.find_account("cash").balance == Decimal("5000000")

    def test_appends_in_order_with_unique_ids(self, state):
        """Test append order and fresh IDs."""
        s1, t1 = add_transaction(state, new_tx(1))
        s2, t2 = add_transaction(s1, new_tx(2))
        assert s2.transactions == (t1, t2)
        assert t1.id != t2.id

    def test_unknown_account_fails_loudly(self, state):
        """Test that a missing account raises and creates nothing."""
        with pytest.raises(UnknownAccountError) as exc_info:
            add_transaction(state, new_tx(1, account_id="ghost"))
        assert exc_info.value.account_id == "ghost"
        assert isinstance(exc_info.value, LedgerError)


class TestAddSavingsGoal:
    """Tests for creating savings goals."""

    def test_goal_starts_empty(self, state):
        """Test that new goals have nothing saved."""
        new_state, goal = add_savings_goal(state, NewSavingsGoal(
            name="Du lịch",
            target_amount=Decimal("5000000"),
            target_date=date(2027, 1, 1),
        ))
        assert goal.current_amount == Decimal("0")
        assert new_state.savings_goals == (goal,)
        assert new_state.accounts == state.accounts


class TestContributeToGoal:
    """Tests for moving money into a goal."""

    def test_contribution_moves_money(self, goal_state):
        """Test goal grows and account shrinks by the same amount."""
        new_state = contribute_to_goal(goal_state, "car", Decimal("100000"), "cash")
        assert new_state.find_goal("car").current_amount == Decimal("1000000")
        assert new_state.find_account("cash").balance == Decimal("4900000")

    def test_contribution_over_target_rejected(self, goal_state):
        """Test that overfunding raises with the remaining amount."""
        with pytest.raises(GoalTargetExceededError) as exc_info:
            contribute_to_goal(goal_state, "car", Decimal("100001"), "cash")
        assert exc_info.value.remaining_amount == Decimal("100000")

    def test_unknown_goal(self, goal_state):
        """Test that a missing goal raises."""
        with pytest.raises(UnknownGoalError):
            contribute_to_goal(goal_state, "ghost", Decimal("1"), "cash")

    def test_unknown_account(self, goal_state):
        """Test that a missing account raises and the goal is untouched."""
        with pytest.raises(UnknownAccountError):
            contribute_to_goal(goal_state, "car", Decimal("1"), "ghost")
        assert goal_state.find_goal("car").current_amount == Decimal("900000")

    def test_non_positive_amount(self, goal_state):
        """Test that zero contributions are rejected."""
        with pytest.raises(ValueError):
            contribute_to_goal(goal_state, "car", Decimal("0"), "cash")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
