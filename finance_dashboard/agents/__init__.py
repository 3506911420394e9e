"""AI Agents package."""

from finance_dashboard.agents.insights import (
    FAILURE_MESSAGE,
    INSUFFICIENT_DATA_MESSAGE,
    TIMEOUT_MESSAGE,
    UNAVAILABLE_MESSAGE,
    InsightsAgent,
    InsightsResult,
    InsightsStatus,
)

__all__ = [
    "FAILURE_MESSAGE",
    "INSUFFICIENT_DATA_MESSAGE",
    "TIMEOUT_MESSAGE",
    "UNAVAILABLE_MESSAGE",
    "InsightsAgent",
    "InsightsResult",
    "InsightsStatus",
]
