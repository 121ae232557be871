"""
User-facing alerts.
"""

from .notifier import ConsoleNotifier, LoggingNotifier, Notifier

__all__ = ["Notifier", "ConsoleNotifier", "LoggingNotifier"]
