"""AccountRepository - SQLAlchemy implementation of the AccountRepository protocol.

Adapter for hexagonal architecture. Maps between the domain Account entity
and AccountModel.

Concurrency:
    Lockout counters are never written from a previously loaded entity.
    record_failed_login runs a compare-and-swap on failed_login_attempts,
    retrying when another request got there first, so N concurrent bad
    passwords always add exactly N to the counter and exactly one of them
    performs the lock transition.

    Code attempt counters follow the same rule. update() writes a slot's
    counter only when that slot's code changed (minted or consumed);
    otherwise the counter moves only through claim_code_attempt, a
    conditional increment bounded by the attempt ceiling.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from identity_service.core.result import Failure, Result, Success
from identity_service.domain.entities import Account
from identity_service.domain.enums import AccountStatus, CodePurpose
from identity_service.domain.errors import DuplicateIdentityError
from identity_service.domain.policies import LockoutDecision, LoginAttemptGuard
from identity_service.domain.value_objects import OneTimeCode
from identity_service.infrastructure.persistence.models import AccountModel

MAX_LOCKOUT_RETRIES = 10


class AccountRepository:
    """SQLAlchemy implementation of AccountRepository protocol.

    Does NOT inherit from the protocol (structural typing). Every write
    commits immediately.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = AccountRepository(session)
        ...     account = await repo.find_by_identifier("alice")
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, account: Account) -> Result[None, DuplicateIdentityError]:
        """Insert a new account.

        Returns:
            Success(None), or Failure(DuplicateIdentityError) when the unique
            index on email or username rejects the row.
        """
        self.session.add(self._to_model(account))
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            conflicting_field = "username" if "username" in str(e.orig).lower() else "email"
            return Failure(error=DuplicateIdentityError(conflicting_field=conflicting_field))
        return Success(value=None)

    async def find_by_id(self, account_id: UUID) -> Account | None:
        stmt = (
            select(AccountModel)
            .where(AccountModel.id == account_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def find_by_email(self, email: str) -> Account | None:
        """Find account by email address (case-insensitive)."""
        stmt = (
            select(AccountModel)
            .where(func.lower(AccountModel.email) == email.strip().lower())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def find_by_identifier(self, identifier: str) -> Account | None:
        """Find account by email or username (case-insensitive).

        An email match wins over a username match.
        """
        account = await self.find_by_email(identifier)
        if account is not None:
            return account

        stmt = (
            select(AccountModel)
            .where(func.lower(AccountModel.username) == identifier.strip().lower())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def update(self, account: Account) -> None:
        """Persist profile, status and code-slot fields.

        Lockout counters are left untouched, and so is each code slot's
        attempt counter unless that slot's code changed.

        Raises:
            NoResultFound: If the account does not exist.
        """
        stmt = (
            select(AccountModel)
            .where(AccountModel.id == account.id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one()

        model.email = account.email
        model.username = account.username
        model.password_hash = account.password_hash
        model.first_name = account.first_name
        model.last_name = account.last_name
        model.account_status = account.account_status.value
        model.email_verified = account.email_verified
        model.password_last_changed = account.password_last_changed
        self._apply_code_slots(model, account, write_attempts=False)

        await self.session.commit()

    async def record_failed_login(
        self, account_id: UUID, guard: LoginAttemptGuard, locked_until: datetime | None
    ) -> LockoutDecision:
        """Apply one failed login with a compare-and-swap on the counter.

        Raises:
            LookupError: If the account does not exist.
            RuntimeError: If the counter kept changing under contention.
        """
        for _ in range(MAX_LOCKOUT_RETRIES):
            stmt = select(
                AccountModel.failed_login_attempts, AccountModel.account_locked
            ).where(AccountModel.id == account_id)
            row = (await self.session.execute(stmt)).one_or_none()
            if row is None:
                msg = f"Account {account_id} not found"
                raise LookupError(msg)

            current_count, already_locked = row
            decision = guard.register_failure(current_count, already_locked)

            values: dict[str, object] = {
                "failed_login_attempts": decision.failed_login_attempts,
                "account_locked": decision.account_locked,
            }
            if decision.newly_locked:
                values["locked_until"] = locked_until

            swap = (
                update(AccountModel)
                .where(
                    AccountModel.id == account_id,
                    AccountModel.failed_login_attempts == current_count,
                )
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            result = await self.session.execute(swap)
            await self.session.commit()

            if result.rowcount == 1:
                return decision

        msg = f"Failed login for account {account_id} not recorded after retries"
        raise RuntimeError(msg)

    async def reset_failed_logins(self, account_id: UUID) -> None:
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(failed_login_attempts=0)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.commit()

    async def clear_lockout(self, account_id: UUID) -> None:
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(failed_login_attempts=0, account_locked=False, locked_until=None)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.commit()

    async def claim_code_attempt(
        self, account_id: UUID, purpose: CodePurpose, max_attempts: int
    ) -> int | None:
        """Count one submission against a code slot if it is below the ceiling.

        Returns:
            Attempt count after the increment, or None at the ceiling.
        """
        column = (
            AccountModel.verification_attempts
            if purpose == CodePurpose.EMAIL_VERIFICATION
            else AccountModel.reset_attempts
        )
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id, column < max_attempts)
            .values({column: column + 1})
            .returning(column)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        attempts = result.scalar_one_or_none()
        await self.session.commit()
        return attempts

    @staticmethod
    def _apply_code_slots(
        model: AccountModel, account: Account, *, write_attempts: bool
    ) -> None:
        # Counters are compared against the stored digest before it is overwritten
        verification, reset = account.verification, account.password_reset
        if write_attempts or model.verification_code_hash != verification.code_hash:
            model.verification_attempts = verification.attempts
        if write_attempts or model.reset_code_hash != reset.code_hash:
            model.reset_attempts = reset.attempts

        model.verification_code_hash = verification.code_hash
        model.verification_code_expires = verification.expires_at
        model.last_verification_attempt = verification.last_sent_at
        model.reset_code_hash = reset.code_hash
        model.reset_code_expires = reset.expires_at
        model.last_reset_request = reset.last_sent_at

    def _to_domain(self, model: AccountModel) -> Account:
        return Account(
            id=model.id,
            email=model.email,
            username=model.username,
            password_hash=model.password_hash,
            first_name=model.first_name,
            last_name=model.last_name,
            account_status=AccountStatus(model.account_status),
            email_verified=model.email_verified,
            verification=OneTimeCode(
                code_hash=model.verification_code_hash,
                expires_at=model.verification_code_expires,
                attempts=model.verification_attempts,
                last_sent_at=model.last_verification_attempt,
            ),
            password_reset=OneTimeCode(
                code_hash=model.reset_code_hash,
                expires_at=model.reset_code_expires,
                attempts=model.reset_attempts,
                last_sent_at=model.last_reset_request,
            ),
            failed_login_attempts=model.failed_login_attempts,
            account_locked=model.account_locked,
            locked_until=model.locked_until,
            password_last_changed=model.password_last_changed,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, account: Account) -> AccountModel:
        model = AccountModel(
            id=account.id,
            email=account.email,
            username=account.username,
            password_hash=account.password_hash,
            first_name=account.first_name,
            last_name=account.last_name,
            account_status=account.account_status.value,
            email_verified=account.email_verified,
            failed_login_attempts=account.failed_login_attempts,
            account_locked=account.account_locked,
            locked_until=account.locked_until,
            password_last_changed=account.password_last_changed,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )
        self._apply_code_slots(model, account, write_attempts=True)
        return model
