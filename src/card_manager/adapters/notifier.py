"""Notification channel for user-facing notices."""

import logging
from dataclasses import dataclass
from typing import Protocol

from card_manager.domain.notices import Notice, Severity

_logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Fire-and-forget channel for transient user messages."""

    def notify(self, notice: Notice) -> None:
        """Show a notice to the user."""


@dataclass
class LoggingNotifier(Notifier):
    """Notifier that writes notices to the application log."""

    logger: logging.Logger = _logger

    def notify(self, notice: Notice) -> None:
        """Log errors at WARNING and everything else at INFO."""
        level = logging.WARNING if notice.severity is Severity.ERROR else logging.INFO
        self.logger.log(level, "%s: %s", notice.title, notice.description)
