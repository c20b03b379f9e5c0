"""
User-facing notifications (the toast layer).

Stores and checkout report outcomes through a Notifier. The default one
writes to the log; a UI host passes its own implementation.
"""

from typing import Protocol

from luxgifts.utils.logger import get_logger

logger = get_logger("notify")


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingNotifier:
    """Notifier that records toasts in the log."""

    def success(self, message: str) -> None:
        logger.info("toast: level=success message=%s", message)

    def info(self, message: str) -> None:
        logger.info("toast: level=info message=%s", message)

    def warning(self, message: str) -> None:
        logger.warning("toast: level=warning message=%s", message)

    def error(self, message: str) -> None:
        logger.error("toast: level=error message=%s", message)
