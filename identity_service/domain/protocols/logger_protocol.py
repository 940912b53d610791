"""LoggerProtocol definition for structured logging.

All logging calls are structured: message + key-value context.

Security:
    - NEVER log passwords, session tokens or one-time codes
    - Log account ids rather than email addresses where possible

Usage:
    logger: LoggerProtocol = get_logger()
    logger.info("session_issued", account_id=str(account_id))

    request_logger = logger.bind(trace_id=trace_id)
    request_logger.info("Request started")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details."""
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message with optional exception details."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a new logger with context bound to all subsequent logs."""
        ...
