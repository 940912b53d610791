"""Login attempt guard.

Decides how a failed login changes the lockout counters. The decision is a
pure function of the current counter; persisting it is the repository's job
and must happen as one atomic read-modify-write on the account row, so two
concurrent bad passwords can never both read a stale counter.

Example:
    >>> guard = LoginAttemptGuard(threshold=5)
    >>> guard.register_failure(current_count=4, already_locked=False)
    LockoutDecision(failed_login_attempts=5, account_locked=True, newly_locked=True)
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LockoutDecision:
    """Outcome of one failed login.

    Attributes:
        failed_login_attempts: Counter after the failure.
        account_locked: Lock flag after the failure.
        newly_locked: True only for the failure that performed the lock transition.
    """

    failed_login_attempts: int
    account_locked: bool
    newly_locked: bool


class LoginAttemptGuard:
    """Lockout policy for consecutive failed logins.

    Attributes:
        threshold: Failed attempts that lock the account.
    """

    def __init__(self, threshold: int = 5) -> None:
        if threshold < 1:
            msg = "Lockout threshold must be at least 1"
            raise ValueError(msg)
        self.threshold = threshold

    def register_failure(
        self, current_count: int, already_locked: bool = False
    ) -> LockoutDecision:
        """Compute counters after one more failed login.

        Args:
            current_count: failed_login_attempts as read from the store.
            already_locked: account_locked as read from the store.

        Returns:
            LockoutDecision with the incremented counter. The account is locked
            once the post-increment count reaches the threshold.
        """
        new_count = current_count + 1
        locked = already_locked or new_count >= self.threshold
        return LockoutDecision(
            failed_login_attempts=new_count,
            account_locked=locked,
            newly_locked=locked and not already_locked,
        )
