"""
Activity Logger

DESIGN DECISION: Every state change and every external call is logged.
This provides:
1. Traceability of balance changes
2. Debugging capability
3. Visibility into failures that are deliberately swallowed

The activity logger:
- Writes to the local structured log only
- Picks the log level from the event severity
"""

import logging
from typing import Optional

import structlog

from finance_dashboard.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivitySeverity,
)


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(ensure_ascii=False)
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route stdlib logging (and so structlog) to stderr at the given level."""
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
    )


class ActivityLogger:
    """
    Central activity logging service.

    Wraps a structlog logger and turns typed ActivityEvents into
    structured log lines.
    """

    def __init__(self, logger: Optional[structlog.stdlib.BoundLogger] = None):
        self._logger = logger or structlog.get_logger("finance_dashboard.activity")

    def log(self, event: ActivityEvent) -> None:
        """Log an activity event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity == ActivitySeverity.ERROR:
            self._logger.error("activity_event", **log_dict)
        elif event.severity == ActivitySeverity.WARNING:
            self._logger.warning("activity_event", **log_dict)
        elif event.severity == ActivitySeverity.DEBUG:
            self._logger.debug("activity_event", **log_dict)
        else:
            self._logger.info("activity_event", **log_dict)

    def log_transaction_added(
        self,
        transaction_id: str,
        transaction_type: str,
        amount: str,
        account_id: str,
        new_balance: str,
    ) -> None:
        """Log a recorded transaction and the balance it produced."""
        self.log(ActivityEventBuilder.transaction_added(
            transaction_id=transaction_id,
            transaction_type=transaction_type,
            amount=amount,
            account_id=account_id,
            new_balance=new_balance,
        ))

    def log_savings_goal_created(
        self,
        goal_id: str,
        name: str,
        target_amount: str,
    ) -> None:
        self.log(ActivityEventBuilder.savings_goal_created(
            goal_id=goal_id,
            name=name,
            target_amount=target_amount,
        ))

    def log_goal_contribution(
        self,
        goal_id: str,
        account_id: str,
        amount: str,
        goal_amount: str,
        account_balance: str,
    ) -> None:
        self.log(ActivityEventBuilder.goal_contribution_applied(
            goal_id=goal_id,
            account_id=account_id,
            amount=amount,
            goal_amount=goal_amount,
            account_balance=account_balance,
        ))

    def log_mutation_rejected(
        self,
        operation: str,
        error: Exception,
    ) -> None:
        """Log a ledger operation that refused to apply."""
        self.log(ActivityEventBuilder.mutation_rejected(
            operation=operation,
            error_type=type(error).__name__,
            error_message=str(error),
        ))

    def log_validation_failed(
        self,
        form: str,
        issues: list[dict],
    ) -> None:
        self.log(ActivityEventBuilder.validation_failed(form=form, issues=issues))

    def log_storage_default_seeded(self, key: str, item_count: int) -> None:
        self.log(ActivityEventBuilder.storage_default_seeded(key, item_count))

    def log_storage_load_failed(self, key: str, error_message: str) -> None:
        self.log(ActivityEventBuilder.storage_load_failed(key, error_message))

    def log_storage_save_failed(self, key: str, error_message: str) -> None:
        self.log(ActivityEventBuilder.storage_save_failed(key, error_message))

    def log_insights_requested(self, expense_count: int) -> None:
        self.log(ActivityEventBuilder.insights_requested(expense_count))

    def log_insights_generated(self, model_name: str, response_length: int) -> None:
        self.log(ActivityEventBuilder.insights_generated(model_name, response_length))

    def log_insights_skipped(self, reason: str) -> None:
        self.log(ActivityEventBuilder.insights_skipped(reason))

    def log_external_service_error(
        self,
        service: str,
        error_message: str,
    ) -> None:
        """Log external service error."""
        self.log(ActivityEventBuilder.external_service_error(
            service=service,
            error_message=error_message,
        ))
