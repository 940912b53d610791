"""Stub notification service (development/testing).

Composes the account emails and writes them to the structured log instead
of sending them. Implements NotificationProtocol.

One-time codes are only included in the log output when ``reveal_codes``
is set, which the container does for the development environment alone.
"""

from dataclasses import dataclass

from identity_service.domain.protocols import LoggerProtocol


@dataclass(frozen=True, slots=True)
class EmailMessage:
    """Rendered email."""

    to_email: str
    subject: str
    body: str


class StubNotificationService:
    """Logs account emails instead of delivering them.

    Args:
        logger: Structured logger.
        app_name: Product name used in subjects and signatures.
        code_ttl_minutes: Code lifetime quoted in the message body.
        reveal_codes: Include codes in the log (development only).
    """

    def __init__(
        self,
        logger: LoggerProtocol,
        app_name: str = "Identity Service",
        code_ttl_minutes: int = 15,
        reveal_codes: bool = False,
    ) -> None:
        self._logger = logger
        self._app_name = app_name
        self._code_ttl_minutes = code_ttl_minutes
        self._reveal_codes = reveal_codes

    async def send_verification_code(
        self, to_email: str, code: str, first_name: str
    ) -> None:
        message = EmailMessage(
            to_email=to_email,
            subject=f"Verify your {self._app_name} account",
            body=self._code_body(
                first_name,
                "Your verification code is",
                code,
                "If you didn't create an account, please ignore this email.",
            ),
        )
        self._emit("verification_code", message, code)

    async def send_password_reset_code(
        self, to_email: str, code: str, first_name: str
    ) -> None:
        message = EmailMessage(
            to_email=to_email,
            subject=f"Reset your {self._app_name} password",
            body=self._code_body(
                first_name,
                "Your password reset code is",
                code,
                "If you didn't request a password reset, please ignore this email.",
            ),
        )
        self._emit("password_reset_code", message, code)

    async def send_password_changed_notice(self, to_email: str, first_name: str) -> None:
        message = EmailMessage(
            to_email=to_email,
            subject=f"Your {self._app_name} password was changed",
            body=(
                f"Hello {first_name or 'there'},\n\n"
                "The password for your account was just changed and all "
                "devices were signed out.\n\n"
                "If this wasn't you, reset your password immediately.\n\n"
                f"Best regards,\n{self._app_name} Team"
            ),
        )
        self._emit("password_changed", message)

    def _code_body(self, first_name: str, lead: str, code: str, footer: str) -> str:
        shown = code if self._reveal_codes else "******"
        return (
            f"Hello {first_name or 'there'},\n\n"
            f"{lead}: {shown}\n\n"
            f"This code will expire in {self._code_ttl_minutes} minutes.\n\n"
            f"{footer}\n\n"
            f"Best regards,\n{self._app_name} Team"
        )

    def _emit(self, kind: str, message: EmailMessage, code: str | None = None) -> None:
        context: dict[str, str] = {"kind": kind, "subject": message.subject}
        if self._reveal_codes:
            context["to_email"] = message.to_email
            context["body"] = message.body
            if code is not None:
                context["code"] = code
        self._logger.info("notification_stub_sent", **context)
