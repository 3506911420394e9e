"""Ledger package: pure state transitions."""

from finance_dashboard.ledger.operations import (
    GoalTargetExceededError,
    LedgerError,
    UnknownAccountError,
    UnknownGoalError,
    add_savings_goal,
    add_transaction,
    contribute_to_goal,
)

__all__ = [
    "GoalTargetExceededError",
    "LedgerError",
    "UnknownAccountError",
    "UnknownGoalError",
    "add_savings_goal",
    "add_transaction",
    "contribute_to_goal",
]
