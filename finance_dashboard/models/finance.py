"""
Core Data Models for Personal Finance Dashboard

These models define the schemas for everything the dashboard stores:
1. Transactions (append-only money movements)
2. Accounts (balance-holding buckets)
3. Categories (static classification catalog)
4. Savings goals (target amount by a target date)

DESIGN DECISION: Entities are frozen Pydantic v2 models.
A change to an account or goal produces a new object via model_copy(),
so an old AppState can never be altered behind the controller's back.

Form input goes through *Draft models first (every field optional, like
a half-filled form). Only a validated draft becomes a strict New* input.
"""

import datetime
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


def new_id() -> str:
    """Generate a fresh unique identifier for an entity."""
    return str(uuid4())


# Length limits shared by the entities and the form validator
MAX_DESCRIPTION_LENGTH = 200
MAX_NAME_LENGTH = 100


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a money movement."""
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class ReportPeriod(str, Enum):
    """
    Reporting window used to filter transactions on the dashboard.

    Every period starts at a calendar boundary (week, month, quarter, year)
    and runs open-ended up to today.
    """
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"

    @property
    def label(self) -> str:
        """Vietnamese label shown in the period selector."""
        return _PERIOD_LABELS[self]


_PERIOD_LABELS = {
    ReportPeriod.WEEKLY: "Tuần",
    ReportPeriod.MONTHLY: "Tháng",
    ReportPeriod.QUARTERLY: "Quý",
    ReportPeriod.YEARLY: "Năm",
}


# =============================================================================
# ENTITIES
# =============================================================================

class Category(BaseModel):
    """
    A classification label for transactions.

    Categories are scoped to one transaction type: an expense category
    can never be attached to an income transaction.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    type: TransactionType


class Account(BaseModel):
    """
    A balance-holding bucket money moves into or out of.

    Balance may be negative (credit cards).
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    balance: Decimal = Field(
        default=Decimal("0"),
        description="Current balance in the dashboard currency"
    )


class Transaction(BaseModel):
    """
    A single recorded money movement.

    CRITICAL: Transactions are immutable once created.
    They are appended to the ledger and never edited or deleted.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        default_factory=new_id,
        description="Unique transaction ID"
    )
    type: TransactionType
    description: str = Field(
        ...,
        min_length=1,
        max_length=MAX_DESCRIPTION_LENGTH,
        description="What the money was for"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Always positive; direction comes from type"
    )
    date: date
    category_id: str = Field(..., min_length=1)
    account_id: str = Field(..., min_length=1)


class SavingsGoal(BaseModel):
    """
    A target amount to be reached by a target date.

    current_amount only grows through contributions and never passes
    target_amount.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        default_factory=new_id,
        description="Unique goal ID"
    )
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    target_amount: Decimal = Field(..., gt=0)
    current_amount: Decimal = Field(default=Decimal("0"), ge=0)
    target_date: date

    @model_validator(mode='after')
    def validate_progress(self) -> 'SavingsGoal':
        """A goal can never be funded beyond its target."""
        if self.current_amount > self.target_amount:
            raise ValueError("Current amount cannot exceed target amount")
        return self

    @property
    def remaining_amount(self) -> Decimal:
        """How much is still needed to reach the target."""
        return self.target_amount - self.current_amount

    @property
    def is_complete(self) -> bool:
        return self.current_amount >= self.target_amount


# =============================================================================
# APPLICATION STATE
# =============================================================================

class AppState(BaseModel):
    """
    The whole mutable state of the dashboard, as one immutable value.

    Mutation operations take an AppState and return a new one.
    The category catalog is static and lives outside the state.
    """
    model_config = ConfigDict(frozen=True)

    transactions: tuple[Transaction, ...] = ()
    accounts: tuple[Account, ...] = ()
    savings_goals: tuple[SavingsGoal, ...] = ()

    def find_account(self, account_id: Optional[str]) -> Optional[Account]:
        """Look up an account by ID."""
        return next((a for a in self.accounts if a.id == account_id), None)

    def find_goal(self, goal_id: Optional[str]) -> Optional[SavingsGoal]:
        """Look up a savings goal by ID."""
        return next((g for g in self.savings_goals if g.id == goal_id), None)


# =============================================================================
# FORM INPUT MODELS
# =============================================================================

class NewTransaction(BaseModel):
    """Validated input for recording a transaction (no ID yet)."""
    model_config = ConfigDict(str_strip_whitespace=True)

    type: TransactionType
    description: str = Field(..., min_length=1, max_length=MAX_DESCRIPTION_LENGTH)
    amount: Decimal = Field(..., gt=0)
    date: date
    category_id: str = Field(..., min_length=1)
    account_id: str = Field(..., min_length=1)


class NewSavingsGoal(BaseModel):
    """Validated input for creating a savings goal."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    target_amount: Decimal = Field(..., gt=0)
    target_date: date


class TransactionDraft(BaseModel):
    """
    What the add-transaction form holds before submission.

    All fields optional - the user may submit a half-filled form.
    Run it through FormValidator before converting.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    type: TransactionType = TransactionType.EXPENSE
    description: Optional[str] = None
    amount: Optional[Decimal] = None
    date: Optional[datetime.date] = None
    category_id: Optional[str] = None
    account_id: Optional[str] = None

    def to_new_transaction(self) -> NewTransaction:
        """
        Convert to a strict input.

        Raises pydantic.ValidationError if a required field is missing.
        """
        return NewTransaction(**self.model_dump())


class SavingsGoalDraft(BaseModel):
    """What the add-goal form holds before submission."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = None
    target_amount: Optional[Decimal] = None
    target_date: Optional[date] = None

    def to_new_savings_goal(self) -> NewSavingsGoal:
        return NewSavingsGoal(**self.model_dump())


class ContributionDraft(BaseModel):
    """What the contribute-to-goal form holds before submission."""
    model_config = ConfigDict(str_strip_whitespace=True)

    goal_id: str
    amount: Optional[Decimal] = None
    account_id: Optional[str] = None


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in a submitted form."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'insufficient_funds')"
    )
    message: str = Field(
        ...,
        description="User-facing message"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    remaining_amount: Optional[Decimal] = Field(
        default=None,
        description="For goal overflows: how much the goal still needs"
    )


class ValidationResult(BaseModel):
    """Result of validating a form before any mutation is applied."""

    is_valid: bool = Field(
        ...,
        description="True when the mutation may be applied"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All issues found"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def user_message(self) -> Optional[str]:
        """The message to show in the blocking notice (first error wins)."""
        for issue in self.issues:
            if issue.severity == "error":
                return issue.message
        return None

    @classmethod
    def ok(cls) -> 'ValidationResult':
        return cls(is_valid=True)

    @classmethod
    def from_issues(cls, issues: list[ValidationIssue]) -> 'ValidationResult':
        return cls(
            is_valid=not any(i.severity == "error" for i in issues),
            issues=issues,
        )
