"""Form validation package."""

from finance_dashboard.validation.validator import (
    DESCRIPTION_TOO_LONG_MESSAGE,
    GOAL_EXCEEDED_MESSAGE,
    GOAL_NAME_TOO_LONG_MESSAGE,
    INSUFFICIENT_FUNDS_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    FormValidator,
)

__all__ = [
    "DESCRIPTION_TOO_LONG_MESSAGE",
    "FormValidator",
    "GOAL_EXCEEDED_MESSAGE",
    "GOAL_NAME_TOO_LONG_MESSAGE",
    "INSUFFICIENT_FUNDS_MESSAGE",
    "MISSING_FIELDS_MESSAGE",
]
