"""
Data Models Package

This package contains all Pydantic models used in the Personal Finance Dashboard.
All data flowing through the system must conform to these schemas.
"""

from finance_dashboard.models.finance import (
    Account,
    AppState,
    Category,
    ContributionDraft,
    NewSavingsGoal,
    NewTransaction,
    ReportPeriod,
    SavingsGoal,
    SavingsGoalDraft,
    Transaction,
    TransactionDraft,
    TransactionType,
    ValidationIssue,
    ValidationResult,
    new_id,
)
from finance_dashboard.models.reports import (
    CategoryTotal,
    DashboardReport,
    DashboardSummary,
    GoalProgress,
    PeriodSummary,
    TimeBucket,
)
from finance_dashboard.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)

__all__ = [
    # Finance models
    "Account",
    "AppState",
    "Category",
    "ContributionDraft",
    "NewSavingsGoal",
    "NewTransaction",
    "ReportPeriod",
    "SavingsGoal",
    "SavingsGoalDraft",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
    "ValidationIssue",
    "ValidationResult",
    "new_id",
    # Report models
    "CategoryTotal",
    "DashboardReport",
    "DashboardSummary",
    "GoalProgress",
    "PeriodSummary",
    "TimeBucket",
    # Activity models
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
]
