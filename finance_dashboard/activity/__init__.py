"""Activity logging package."""

from finance_dashboard.activity.logger import ActivityLogger, configure_logging

__all__ = ["ActivityLogger", "configure_logging"]
