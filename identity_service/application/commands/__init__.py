"""Identity commands and registration parsing."""

from identity_service.application.commands.identity_commands import (
    ChangePassword,
    ConfirmPasswordReset,
    Login,
    RegisterAccount,
    RequestContext,
    RequestPasswordReset,
    ResendVerification,
    VerifyEmail,
    parse_registration,
)

__all__ = [
    "ChangePassword",
    "ConfirmPasswordReset",
    "Login",
    "RegisterAccount",
    "RequestContext",
    "RequestPasswordReset",
    "ResendVerification",
    "VerifyEmail",
    "parse_registration",
]
