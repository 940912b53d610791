"""One-time code issuance and checking.

Codes are six random decimal digits. Only a keyed digest is stored on the
account, together with an expiry, an attempt counter and the last send time.

Check order:
    1. Attempt ceiling reached -> TooManyAttemptsError (fail fast, no increment)
    2. No outstanding code -> InvalidCodeError
    3. Attempt claimed in the store; ceiling reached there -> TooManyAttemptsError
    4. Expired -> CodeExpiredError
    5. Mismatch -> InvalidCodeError

Every submission that reaches step 3 counts as an attempt, including a
successful one. The claim is a conditional increment in the store, so
concurrent guesses cannot compare more than max_attempts codes between
them. A success is followed by the caller consuming the slot, which resets
the counter.
"""

import secrets
from dataclasses import replace
from datetime import datetime, timedelta
from typing import TypeAlias

from identity_service.core.result import Failure, Result, Success
from identity_service.domain.entities import Account
from identity_service.domain.enums import CodePurpose
from identity_service.domain.errors import (
    CodeExpiredError,
    InvalidCodeError,
    TooManyAttemptsError,
)
from identity_service.domain.protocols import AccountRepository, CodeHashingProtocol
from identity_service.domain.value_objects import OneTimeCode

CODE_DIGITS = 6

CodeCheckError: TypeAlias = InvalidCodeError | CodeExpiredError | TooManyAttemptsError


class VerificationCodeManager:
    """Issue and check email verification and password reset codes.

    Attributes:
        ttl: Lifetime of an issued code.
        max_attempts: Failed submissions allowed per code.
        resend_interval: Minimum time between two sends to the same slot.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        code_hasher: CodeHashingProtocol,
        ttl: timedelta,
        max_attempts: int,
        resend_interval: timedelta,
    ) -> None:
        self._account_repo = account_repo
        self._code_hasher = code_hasher
        self.ttl = ttl
        self.max_attempts = max_attempts
        self.resend_interval = resend_interval

    @staticmethod
    def generate_code() -> str:
        """Uniformly random six-digit code, leading zeros kept."""
        return f"{secrets.randbelow(10**CODE_DIGITS):0{CODE_DIGITS}d}"

    def mint(self, account: Account, purpose: CodePurpose, now: datetime) -> str:
        """Put a fresh code into the account's slot without persisting it.

        Replaces any outstanding code and resets the attempt counter.

        Returns:
            The raw code, to be delivered to the account owner.
        """
        code = self.generate_code()
        account.replace_code_slot(
            purpose,
            OneTimeCode(
                code_hash=self._code_hasher.hash_code(code),
                expires_at=now + self.ttl,
                attempts=0,
                last_sent_at=now,
            ),
        )
        account.updated_at = now
        return code

    async def issue(self, account: Account, purpose: CodePurpose, now: datetime) -> str:
        """Mint a fresh code and persist the slot.

        Returns:
            The raw code.
        """
        code = self.mint(account, purpose, now)
        await self._account_repo.update(account)
        return code

    def can_resend(self, account: Account, purpose: CodePurpose, now: datetime) -> bool:
        """True when the resend interval for the slot has elapsed."""
        return account.code_slot(purpose).can_resend(now, self.resend_interval)

    async def check(
        self,
        account: Account,
        purpose: CodePurpose,
        submitted: str,
        now: datetime,
    ) -> Result[None, CodeCheckError]:
        """Check a submitted code against the account's slot.

        The attempt is claimed in the store before the code is compared. The
        slot is not consumed here; the caller clears it once the operation
        the code authorizes has been applied.

        Args:
            account: Account owning the slot.
            purpose: Which slot to check.
            submitted: Code as entered by the user.
            now: Current time.

        Returns:
            Success(None) if the code matches, otherwise Failure with the
            reason.
        """
        slot = account.code_slot(purpose)

        if slot.is_exhausted(self.max_attempts):
            return Failure(error=TooManyAttemptsError())

        if not slot.is_outstanding() or slot.code_hash is None:
            return Failure(error=InvalidCodeError())

        attempts = await self._account_repo.claim_code_attempt(
            account.id, purpose, self.max_attempts
        )
        if attempts is None:
            return Failure(error=TooManyAttemptsError())
        account.replace_code_slot(purpose, replace(slot, attempts=attempts))

        if slot.is_expired(now):
            return Failure(error=CodeExpiredError())

        if not self._code_hasher.verify_code(submitted, slot.code_hash):
            return Failure(error=InvalidCodeError())

        return Success(value=None)
