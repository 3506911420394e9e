"""
Ledger Mutation Operations

DESIGN DECISION: Operations are pure functions over AppState.
Each one takes the current state and returns a NEW state; nothing is
modified in place. A compound change (transaction + balance, goal +
balance) is built completely before it is returned, so callers either
get the whole change or an exception and the untouched old state.

Form validation happens before these are called (see FormValidator).
These functions still refuse to apply a change that references a
missing account or goal, or that would overfund a goal.
"""

from decimal import Decimal

from finance_dashboard.models.finance import (
    Account,
    AppState,
    NewSavingsGoal,
    NewTransaction,
    SavingsGoal,
    Transaction,
    TransactionType,
    new_id,
)


def _replace_account(accounts: tuple[Account, ...], updated: Account) -> tuple[Account, ...]:
    return tuple(updated if a.id == updated.id else a for a in accounts)


def _replace_goal(goals: tuple[SavingsGoal, ...], updated: SavingsGoal) -> tuple[SavingsGoal, ...]:
    return tuple(updated if g.id == updated.id else g for g in goals)


def add_transaction(
    state: AppState,
    new: NewTransaction,
) -> tuple[AppState, Transaction]:
    """
    Record a transaction and adjust its account.

    INCOME adds the amount to the account balance, EXPENSE subtracts it.

    Returns:
        (new_state, created_transaction)

    Raises:
        UnknownAccountError: If new.account_id does not resolve
    """
    account = state.find_account(new.account_id)
    if account is None:
        raise UnknownAccountError(new.account_id)

    transaction = Transaction(id=new_id(), **new.model_dump())

    if transaction.type == TransactionType.INCOME:
        balance = account.balance + transaction.amount
    else:
        balance = account.balance - transaction.amount

    new_state = state.model_copy(update={
        "transactions": state.transactions + (transaction,),
        "accounts": _replace_account(
            state.accounts,
            account.model_copy(update={"balance": balance}),
        ),
    })
    return new_state, transaction


def add_savings_goal(
    state: AppState,
    new: NewSavingsGoal,
) -> tuple[AppState, SavingsGoal]:
    """Append a new goal with nothing saved yet."""
    goal = SavingsGoal(
        id=new_id(),
        name=new.name,
        target_amount=new.target_amount,
        current_amount=Decimal("0"),
        target_date=new.target_date,
    )
    new_state = state.model_copy(update={
        "savings_goals": state.savings_goals + (goal,),
    })
    return new_state, goal


def contribute_to_goal(
    state: AppState,
    goal_id: str,
    amount: Decimal,
    account_id: str,
) -> AppState:
    """
    Move `amount` from an account into a goal.

    The goal's current amount grows and the account balance shrinks by
    the same amount, in one returned state.

    Raises:
        ValueError: If amount is not positive
        UnknownGoalError: If goal_id does not resolve
        UnknownAccountError: If account_id does not resolve
        GoalTargetExceededError: If the goal would pass its target
    """
    if amount <= 0:
        raise ValueError("Contribution amount must be greater than zero")

    goal = state.find_goal(goal_id)
    if goal is None:
        raise UnknownGoalError(goal_id)

    account = state.find_account(account_id)
    if account is None:
        raise UnknownAccountError(account_id)

    if goal.current_amount + amount > goal.target_amount:
        raise GoalTargetExceededError(goal_id, goal.remaining_amount)

    updated_goal = goal.model_copy(update={"current_amount": goal.current_amount + amount})
    updated_account = account.model_copy(update={"balance": account.balance - amount})

    return state.model_copy(update={
        "savings_goals": _replace_goal(state.savings_goals, updated_goal),
        "accounts": _replace_account(state.accounts, updated_account),
    })


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class UnknownAccountError(LedgerError):
    """The referenced account does not exist."""

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account not found: {account_id}")


class UnknownGoalError(LedgerError):
    """The referenced savings goal does not exist."""

    def __init__(self, goal_id: str):
        self.goal_id = goal_id
        super().__init__(f"Savings goal not found: {goal_id}")


class GoalTargetExceededError(LedgerError):
    """A contribution would push a goal beyond its target."""

    def __init__(self, goal_id: str, remaining_amount: Decimal):
        self.goal_id = goal_id
        self.remaining_amount = remaining_amount
        super().__init__(
            f"Contribution exceeds target of goal {goal_id}; "
            f"remaining amount is {remaining_amount}"
        )
