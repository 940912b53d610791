"""Notification protocol (port).

The identity core only needs the capability "send a message containing a
code to an address". Delivery mechanics (SMTP, SES, push) live behind this
port.
"""

from typing import Protocol


class NotificationProtocol(Protocol):
    """Outbound account notifications.

    Implementations:
        - StubNotificationService: logs messages (development/testing)
    """

    async def send_verification_code(
        self, to_email: str, code: str, first_name: str
    ) -> None:
        """Deliver an email verification code."""
        ...

    async def send_password_reset_code(
        self, to_email: str, code: str, first_name: str
    ) -> None:
        """Deliver a password reset code."""
        ...

    async def send_password_changed_notice(self, to_email: str, first_name: str) -> None:
        """Tell the account owner their password was changed."""
        ...
