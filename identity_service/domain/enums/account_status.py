"""Account status (closed enumeration persisted with the account)."""

from enum import Enum


class AccountStatus(str, Enum):
    """Lifecycle status of an account.

    PENDING_VERIFICATION is the registration state. ACTIVE is reached only
    through email verification. SUSPENDED and INACTIVE are set by
    administrative action outside this service.
    """

    PENDING_VERIFICATION = "pending_verification"
    ACTIVE = "active"
    SUSPENDED = "suspended"
    INACTIVE = "inactive"
