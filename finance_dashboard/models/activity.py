"""
Activity Event Models for Personal Finance Dashboard

Every state change and every call to the AI service emits an event to
the structured local log. This provides:
1. Debugging information when a balance looks wrong
2. Visibility into swallowed storage failures
3. A record of external service errors

DESIGN DECISION: Events go to the local log only. They are never
persisted or replayed; the dashboard keeps no history of its own.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActivityEventType(str, Enum):
    """Types of events we log."""
    # Ledger
    TRANSACTION_ADDED = "transaction_added"
    SAVINGS_GOAL_CREATED = "savings_goal_created"
    GOAL_CONTRIBUTION_APPLIED = "goal_contribution_applied"
    MUTATION_REJECTED = "mutation_rejected"

    # Validation
    VALIDATION_FAILED = "validation_failed"

    # Storage
    STORAGE_DEFAULT_SEEDED = "storage_default_seeded"
    STORAGE_LOAD_FAILED = "storage_load_failed"
    STORAGE_SAVE_FAILED = "storage_save_failed"

    # Insights
    INSIGHTS_REQUESTED = "insights_requested"
    INSIGHTS_GENERATED = "insights_generated"
    INSIGHTS_SKIPPED = "insights_skipped"

    # System events
    EXTERNAL_SERVICE_ERROR = "external_service_error"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ActivityEvent(BaseModel):
    """A single logged event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    event_type: ActivityEventType
    severity: ActivitySeverity = ActivitySeverity.INFO

    # What entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'account', 'goal')"
    )
    entity_id: Optional[str] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None
    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.transaction_added(transaction_id, ...)
        event = ActivityEventBuilder.storage_save_failed("accounts", str(e))
    """

    @staticmethod
    def transaction_added(
        transaction_id: str,
        transaction_type: str,
        amount: str,
        account_id: str,
        new_balance: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"{transaction_type.capitalize()} of {amount} recorded on {account_id}",
            details={
                "type": transaction_type,
                "amount": amount,
                "account_id": account_id,
                "new_balance": new_balance,
            },
            is_user_action=True,
        )

    @staticmethod
    def savings_goal_created(
        goal_id: str,
        name: str,
        target_amount: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.SAVINGS_GOAL_CREATED,
            entity_type="goal",
            entity_id=goal_id,
            description=f"Savings goal created: {name}",
            details={
                "name": name,
                "target_amount": target_amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def goal_contribution_applied(
        goal_id: str,
        account_id: str,
        amount: str,
        goal_amount: str,
        account_balance: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.GOAL_CONTRIBUTION_APPLIED,
            entity_type="goal",
            entity_id=goal_id,
            description=f"Contributed {amount} from {account_id}",
            details={
                "account_id": account_id,
                "amount": amount,
                "goal_current_amount": goal_amount,
                "account_balance": account_balance,
            },
            is_user_action=True,
        )

    @staticmethod
    def mutation_rejected(
        operation: str,
        error_type: str,
        error_message: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.MUTATION_REJECTED,
            severity=ActivitySeverity.WARNING,
            description=f"{operation} rejected: {error_type}",
            error_message=error_message,
            details={
                "operation": operation,
                "error_type": error_type,
            },
        )

    @staticmethod
    def validation_failed(
        form: str,
        issues: list[dict],
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.VALIDATION_FAILED,
            severity=ActivitySeverity.INFO,
            entity_type="form",
            entity_id=form,
            description=f"{form.capitalize()} form failed validation with {len(issues)} issues",
            details={"issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def storage_default_seeded(key: str, item_count: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STORAGE_DEFAULT_SEEDED,
            entity_type="storage_key",
            entity_id=key,
            description=f"No stored value for '{key}', seeded default",
            details={"item_count": item_count},
        )

    @staticmethod
    def storage_load_failed(key: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STORAGE_LOAD_FAILED,
            severity=ActivitySeverity.ERROR,
            entity_type="storage_key",
            entity_id=key,
            description=f"Could not load '{key}', using default",
            error_message=error_message,
        )

    @staticmethod
    def storage_save_failed(key: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STORAGE_SAVE_FAILED,
            severity=ActivitySeverity.ERROR,
            entity_type="storage_key",
            entity_id=key,
            description=f"Could not save '{key}', in-memory state kept",
            error_message=error_message,
        )

    @staticmethod
    def insights_requested(expense_count: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.INSIGHTS_REQUESTED,
            entity_type="insights",
            description="AI insights requested",
            details={"expense_transactions": expense_count},
            is_user_action=True,
        )

    @staticmethod
    def insights_generated(model_name: str, response_length: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.INSIGHTS_GENERATED,
            entity_type="insights",
            description=f"AI insights generated by {model_name}",
            details={
                "model_name": model_name,
                "response_length": response_length,
            },
        )

    @staticmethod
    def insights_skipped(reason: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.INSIGHTS_SKIPPED,
            entity_type="insights",
            description=f"AI insights skipped: {reason}",
            details={"reason": reason},
        )

    @staticmethod
    def external_service_error(
        service: str,
        error_message: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXTERNAL_SERVICE_ERROR,
            severity=ActivitySeverity.ERROR,
            description=f"External service error: {service}",
            error_message=error_message,
            details={
                "service": service,
            },
        )
