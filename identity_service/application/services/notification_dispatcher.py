"""Background delivery of account notifications.

Sending a code must never block or fail the operation that produced it.
Each delivery runs as its own task, bounded by a timeout; failures are
logged at warning level and otherwise ignored (fail-open).
"""

import asyncio
from collections.abc import Awaitable, Callable

from identity_service.domain.protocols import LoggerProtocol


class NotificationDispatcher:
    """Fire-and-forget runner for notification coroutines.

    Usage:
        dispatcher.dispatch(
            "verification_code",
            lambda: notifier.send_verification_code(email, code, first_name),
        )

    Pending deliveries are tracked so shutdown (and tests) can wait for
    them with ``drain()``.
    """

    def __init__(self, logger: LoggerProtocol, timeout_seconds: float = 10.0) -> None:
        self._logger = logger
        self._timeout = timeout_seconds
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def dispatch(self, kind: str, send: Callable[[], Awaitable[None]]) -> None:
        """Schedule one delivery on the running event loop.

        Args:
            kind: Notification kind, used in log events.
            send: Zero-argument callable producing the delivery coroutine.
        """
        task = asyncio.create_task(self._deliver(kind, send))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait until every scheduled delivery has finished."""
        while self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def _deliver(self, kind: str, send: Callable[[], Awaitable[None]]) -> None:
        try:
            await asyncio.wait_for(send(), timeout=self._timeout)
        except TimeoutError:
            self._logger.warning(
                "notification_timed_out",
                kind=kind,
                timeout_seconds=self._timeout,
            )
        except Exception as e:
            self._logger.warning(
                "notification_failed",
                kind=kind,
                error_type=type(e).__name__,
                error_message=str(e),
            )
        else:
            self._logger.debug("notification_delivered", kind=kind)
