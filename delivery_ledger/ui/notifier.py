"""
User-facing alerts.

The report generator tells the user how a run went through a Notifier;
the CLI prints alerts, other callers may only log them.
"""

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from delivery_ledger.observability.logger import get_logger

logger = get_logger(__name__)


class Notifier(ABC):
    """Shows a titled message to whoever started the operation."""

    @abstractmethod
    def alert(self, title: str, message: str) -> None:
        pass


class ConsoleNotifier(Notifier):
    """Prints alerts, one block per alert."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdout

    def alert(self, title: str, message: str) -> None:
        print(f"[{title}] {message}", file=self.stream)


class LoggingNotifier(Notifier):
    """Sends alerts to the structured log only."""

    def alert(self, title: str, message: str) -> None:
        logger.info(message, extra={"alert_title": title})
