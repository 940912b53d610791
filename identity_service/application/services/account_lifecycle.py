"""Account lifecycle orchestration.

Single entry point for the identity operations: registration, email
verification, login with lockout, password reset and change, and session
sign-out. Each public method returns a Result; store failures are logged
and surfaced as StoreUnavailableError without internal details.

Login decision order (first match wins):
    1. Identifier does not resolve -> InvalidCredentialsError
    2. Account locked (lapsed locks are cleared first) -> AccountLockedError
    3. Email not verified -> VerificationRequiredError
    4. Account suspended or inactive -> AccountDisabledError
    5. Wrong password -> InvalidCredentialsError (counter incremented atomically)
    6. Otherwise -> counter reset, session issued

Every login attempt, successful or not, is appended to the audit trail.
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

from uuid_extensions import uuid7

from identity_service.application.commands import (
    ChangePassword,
    ConfirmPasswordReset,
    Login,
    RegisterAccount,
    RequestContext,
    RequestPasswordReset,
    ResendVerification,
    VerifyEmail,
)
from identity_service.application.dtos import (
    AccountProfile,
    AuthenticatedSession,
    RegisteredAccount,
)
from identity_service.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from identity_service.application.services.session_manager import SessionManager
from identity_service.application.services.verification_code_manager import (
    VerificationCodeManager,
)
from identity_service.core.enums import ErrorCode
from identity_service.core.errors import DomainError, NotFoundError
from identity_service.core.result import Failure, Result, Success
from identity_service.domain.entities import Account, LoginHistoryEntry, Session
from identity_service.domain.enums import CodePurpose, LoginFailureReason
from identity_service.domain.errors import (
    AccountDisabledError,
    AccountLockedError,
    InvalidCodeError,
    InvalidCredentialsError,
    SessionInvalidError,
    StoreUnavailableError,
    VerificationRequiredError,
)
from identity_service.domain.policies import LoginAttemptGuard
from identity_service.domain.protocols import (
    AccountRepository,
    AuditLogProtocol,
    LoggerProtocol,
    NotificationProtocol,
    PasswordHashingProtocol,
)


class AccountLifecycle:
    """Orchestrates account registration, verification, login and recovery.

    Dependencies are injected by the container; the class holds no state of
    its own beyond them.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        session_manager: SessionManager,
        code_manager: VerificationCodeManager,
        login_guard: LoginAttemptGuard,
        password_service: PasswordHashingProtocol,
        audit_log: AuditLogProtocol,
        notifier: NotificationProtocol,
        dispatcher: NotificationDispatcher,
        logger: LoggerProtocol,
        lockout_duration: timedelta | None = timedelta(minutes=15),
    ) -> None:
        """Initialize the lifecycle with its collaborators.

        Args:
            account_repo: Account persistence.
            session_manager: Session issuance and revocation.
            code_manager: One-time code issuance and checks.
            login_guard: Lockout policy.
            password_service: Password hashing and verification.
            audit_log: Login history sink (never raises).
            notifier: Outbound notification channel.
            dispatcher: Background runner for notifications.
            logger: Structured logger.
            lockout_duration: Auto-unlock window; None locks until an
                administrator unlocks the account.
        """
        self._account_repo = account_repo
        self._session_manager = session_manager
        self._code_manager = code_manager
        self._login_guard = login_guard
        self._password_service = password_service
        self._audit_log = audit_log
        self._notifier = notifier
        self._dispatcher = dispatcher
        self._logger = logger
        self._lockout_duration = lockout_duration

    # ------------------------------------------------------------------
    # Registration and verification
    # ------------------------------------------------------------------

    async def register(self, cmd: RegisterAccount) -> Result[RegisteredAccount, DomainError]:
        """Create a pending account and send its verification code.

        Returns:
            Success(RegisteredAccount) with requires_verification=True.
            Failure(DuplicateIdentityError) if the email or username is taken.
        """
        try:
            return await self._register(cmd)
        except Exception as e:
            return self._store_unavailable("register", e)

    async def _register(self, cmd: RegisterAccount) -> Result[RegisteredAccount, DomainError]:
        now = datetime.now(UTC)

        # Step 1: Build the pending account with a hashed password
        account = Account(
            id=uuid7(),
            email=cmd.email,
            username=cmd.username or cmd.email,
            password_hash=self._password_service.hash_password(cmd.password),
            first_name=cmd.first_name,
            last_name=cmd.last_name,
            password_last_changed=now,
            created_at=now,
            updated_at=now,
        )

        # Step 2: Attach the first verification code before the insert
        code = self._code_manager.mint(account, CodePurpose.EMAIL_VERIFICATION, now)

        # Step 3: Insert; uniqueness is enforced by the store
        created = await self._account_repo.create(account)
        if isinstance(created, Failure):
            self._logger.info(
                "registration_rejected",
                reason=created.error.code.value,
                conflicting_field=created.error.conflicting_field,
            )
            return created

        # Step 4: Deliver the code in the background
        self._send_verification_code(account, code)

        self._logger.info("account_registered", account_id=str(account.id))
        return Success(value=RegisteredAccount(account=AccountProfile.from_account(account)))

    async def verify_email(
        self, cmd: VerifyEmail, context: RequestContext | None = None
    ) -> Result[AuthenticatedSession, DomainError]:
        """Confirm an email address and sign the account in.

        Returns:
            Success(AuthenticatedSession) once the account is active.
            Failure(InvalidCodeError | CodeExpiredError | TooManyAttemptsError)
            otherwise. Unknown and already-verified emails read as an
            invalid code.
        """
        try:
            return await self._verify_email(cmd, context or RequestContext())
        except Exception as e:
            return self._store_unavailable("verify_email", e)

    async def _verify_email(
        self, cmd: VerifyEmail, context: RequestContext
    ) -> Result[AuthenticatedSession, DomainError]:
        now = datetime.now(UTC)

        account = await self._account_repo.find_by_email(cmd.email)
        if account is None or account.email_verified:
            return Failure(error=InvalidCodeError())

        if account.is_locked(now):
            return Failure(error=AccountLockedError(locked_until=account.locked_until))

        checked = await self._code_manager.check(
            account, CodePurpose.EMAIL_VERIFICATION, cmd.code, now
        )
        if isinstance(checked, Failure):
            self._logger.info(
                "email_verification_failed",
                account_id=str(account.id),
                reason=checked.error.code.value,
            )
            return checked

        # Verified flag, active status and code clearing are written together
        account.mark_email_verified(now)
        await self._account_repo.update(account)

        issued = await self._session_manager.issue(account.id, context)
        await self._record_attempt(account.id, context, now)

        self._logger.info("email_verified", account_id=str(account.id))
        return Success(
            value=AuthenticatedSession(
                account=AccountProfile.from_account(account), session=issued
            )
        )

    async def resend_verification(self, cmd: ResendVerification) -> Result[None, DomainError]:
        """Send a fresh verification code.

        Always acknowledged the same way: unknown addresses, verified
        accounts and requests inside the resend interval are silently
        ignored.
        """
        try:
            now = datetime.now(UTC)
            account = await self._account_repo.find_by_email(cmd.email)
            if account is None or account.email_verified:
                self._logger.debug("verification_resend_skipped")
                return Success(value=None)

            if not self._code_manager.can_resend(account, CodePurpose.EMAIL_VERIFICATION, now):
                self._logger.info("verification_resend_throttled", account_id=str(account.id))
                return Success(value=None)

            code = await self._code_manager.issue(account, CodePurpose.EMAIL_VERIFICATION, now)
            self._send_verification_code(account, code)
            self._logger.info("verification_code_reissued", account_id=str(account.id))
            return Success(value=None)
        except Exception as e:
            return self._store_unavailable("resend_verification", e)

    # ------------------------------------------------------------------
    # Login
    # ------------------------------------------------------------------

    async def login(
        self, cmd: Login, context: RequestContext | None = None
    ) -> Result[AuthenticatedSession, DomainError]:
        """Authenticate by email or username and issue a session.

        Returns:
            Success(AuthenticatedSession) on valid credentials.
            Failure with InvalidCredentialsError, AccountLockedError,
            VerificationRequiredError or AccountDisabledError otherwise.
        """
        try:
            return await self._login(cmd, context or RequestContext())
        except Exception as e:
            return self._store_unavailable("login", e)

    async def _login(
        self, cmd: Login, context: RequestContext
    ) -> Result[AuthenticatedSession, DomainError]:
        now = datetime.now(UTC)

        # Step 1: Resolve the identifier
        account = await self._account_repo.find_by_identifier(cmd.identifier)
        if account is None:
            await self._record_attempt(
                None, context, now, LoginFailureReason.IDENTITY_NOT_FOUND
            )
            # Same error as a wrong password to prevent account enumeration
            return Failure(error=InvalidCredentialsError())

        # Step 2: Lockout (a lapsed lock is cleared before evaluating)
        if account.lock_has_lapsed(now):
            await self._account_repo.clear_lockout(account.id)
            account.unlock(now)
            self._logger.info("account_lock_expired", account_id=str(account.id))

        if account.is_locked(now):
            await self._record_attempt(account.id, context, now, LoginFailureReason.LOCKED)
            return Failure(error=AccountLockedError(locked_until=account.locked_until))

        # Step 3: Email verification
        if not account.email_verified:
            await self._record_attempt(
                account.id, context, now, LoginFailureReason.UNVERIFIED
            )
            return Failure(error=VerificationRequiredError(email=account.email))

        # Step 4: Administrative status
        if account.is_disabled():
            await self._record_attempt(account.id, context, now, LoginFailureReason.DISABLED)
            return Failure(error=AccountDisabledError())

        # Step 5: Password
        if not self._password_service.verify_password(cmd.password, account.password_hash):
            locked_until = now + self._lockout_duration if self._lockout_duration else None
            decision = await self._account_repo.record_failed_login(
                account.id, self._login_guard, locked_until
            )
            if decision.newly_locked:
                self._logger.warning(
                    "account_locked",
                    account_id=str(account.id),
                    failed_login_attempts=decision.failed_login_attempts,
                    locked_until=locked_until.isoformat() if locked_until else None,
                )
            await self._record_attempt(
                account.id, context, now, LoginFailureReason.BAD_PASSWORD
            )
            return Failure(error=InvalidCredentialsError())

        # Step 6: Success
        if account.failed_login_attempts > 0:
            await self._account_repo.reset_failed_logins(account.id)
            account.failed_login_attempts = 0

        issued = await self._session_manager.issue(account.id, context)
        await self._record_attempt(account.id, context, now)

        self._logger.info("login_succeeded", account_id=str(account.id))
        return Success(
            value=AuthenticatedSession(
                account=AccountProfile.from_account(account), session=issued
            )
        )

    # ------------------------------------------------------------------
    # Password reset and change
    # ------------------------------------------------------------------

    async def request_password_reset(
        self, cmd: RequestPasswordReset
    ) -> Result[None, DomainError]:
        """Email a password reset code.

        Always acknowledged the same way, whether or not the address is
        registered.
        """
        try:
            now = datetime.now(UTC)
            account = await self._account_repo.find_by_email(cmd.email)
            if account is None:
                self._logger.debug("password_reset_skipped")
                return Success(value=None)

            if not self._code_manager.can_resend(account, CodePurpose.PASSWORD_RESET, now):
                self._logger.info("password_reset_throttled", account_id=str(account.id))
                return Success(value=None)

            code = await self._code_manager.issue(account, CodePurpose.PASSWORD_RESET, now)
            self._dispatcher.dispatch(
                "password_reset_code",
                lambda: self._notifier.send_password_reset_code(
                    account.email, code, account.first_name
                ),
            )
            self._logger.info("password_reset_requested", account_id=str(account.id))
            return Success(value=None)
        except Exception as e:
            return self._store_unavailable("request_password_reset", e)

    async def confirm_password_reset(
        self, cmd: ConfirmPasswordReset
    ) -> Result[None, DomainError]:
        """Replace the password with a reset code and revoke all sessions.

        A reset does not lift an account lock.
        """
        try:
            return await self._confirm_password_reset(cmd)
        except Exception as e:
            return self._store_unavailable("confirm_password_reset", e)

    async def _confirm_password_reset(
        self, cmd: ConfirmPasswordReset
    ) -> Result[None, DomainError]:
        now = datetime.now(UTC)

        account = await self._account_repo.find_by_email(cmd.email)
        if account is None:
            return Failure(error=InvalidCodeError())

        checked = await self._code_manager.check(
            account, CodePurpose.PASSWORD_RESET, cmd.code, now
        )
        if isinstance(checked, Failure):
            self._logger.info(
                "password_reset_failed",
                account_id=str(account.id),
                reason=checked.error.code.value,
            )
            return checked

        account.change_password_hash(self._password_service.hash_password(cmd.new_password), now)
        account.password_reset = account.password_reset.consumed()
        await self._account_repo.update(account)

        await self._after_password_change(account)
        return Success(value=None)

    async def change_password(self, cmd: ChangePassword) -> Result[None, DomainError]:
        """Change the password of a signed-in account.

        Requires the current password. Every session of the account,
        including the caller's, is revoked.
        """
        try:
            return await self._change_password(cmd)
        except Exception as e:
            return self._store_unavailable("change_password", e)

    async def _change_password(self, cmd: ChangePassword) -> Result[None, DomainError]:
        now = datetime.now(UTC)

        account = await self._account_repo.find_by_id(cmd.account_id)
        if account is None:
            return Failure(error=self._account_not_found(cmd.account_id))

        if not self._password_service.verify_password(
            cmd.current_password, account.password_hash
        ):
            return Failure(error=InvalidCredentialsError(message="Current password is incorrect"))

        account.change_password_hash(self._password_service.hash_password(cmd.new_password), now)
        await self._account_repo.update(account)

        await self._after_password_change(account)
        return Success(value=None)

    async def _after_password_change(self, account: Account) -> None:
        revoked = await self._session_manager.revoke_all(account.id)
        self._dispatcher.dispatch(
            "password_changed",
            lambda: self._notifier.send_password_changed_notice(
                account.email, account.first_name
            ),
        )
        self._logger.info(
            "password_changed", account_id=str(account.id), revoked_sessions=revoked
        )

    # ------------------------------------------------------------------
    # Sessions and profile
    # ------------------------------------------------------------------

    async def authenticate(self, token: str) -> Result[Session, DomainError]:
        """Resolve a bearer token to its session."""
        try:
            return await self._session_manager.validate(token)
        except Exception as e:
            return self._store_unavailable("authenticate", e)

    async def sign_out(self, session_id: UUID) -> Result[None, DomainError]:
        """Revoke one session."""
        try:
            if not await self._session_manager.revoke(session_id):
                return Failure(error=SessionInvalidError())
            return Success(value=None)
        except Exception as e:
            return self._store_unavailable("sign_out", e)

    async def sign_out_everywhere(self, account_id: UUID) -> Result[int, DomainError]:
        """Revoke every session of an account.

        Returns:
            Success(number of sessions revoked).
        """
        try:
            return Success(value=await self._session_manager.revoke_all(account_id))
        except Exception as e:
            return self._store_unavailable("sign_out_everywhere", e)

    async def list_sessions(self, account_id: UUID) -> Result[list[Session], DomainError]:
        try:
            return Success(value=await self._session_manager.list_active(account_id))
        except Exception as e:
            return self._store_unavailable("list_sessions", e)

    async def get_profile(self, account_id: UUID) -> Result[AccountProfile, DomainError]:
        try:
            account = await self._account_repo.find_by_id(account_id)
        except Exception as e:
            return self._store_unavailable("get_profile", e)
        if account is None:
            return Failure(error=self._account_not_found(account_id))
        return Success(value=AccountProfile.from_account(account))

    async def unlock_account(self, account_id: UUID) -> Result[None, DomainError]:
        """Administrative unlock: clear the lock flag and the counter."""
        try:
            account = await self._account_repo.find_by_id(account_id)
            if account is None:
                return Failure(error=self._account_not_found(account_id))
            await self._account_repo.clear_lockout(account_id)
        except Exception as e:
            return self._store_unavailable("unlock_account", e)

        self._logger.info("account_unlocked", account_id=str(account_id))
        return Success(value=None)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _send_verification_code(self, account: Account, code: str) -> None:
        self._dispatcher.dispatch(
            "verification_code",
            lambda: self._notifier.send_verification_code(
                account.email, code, account.first_name
            ),
        )

    async def _record_attempt(
        self,
        account_id: UUID | None,
        context: RequestContext,
        occurred_at: datetime,
        failure_reason: LoginFailureReason | None = None,
    ) -> None:
        entry = LoginHistoryEntry(
            account_id=account_id,
            success=failure_reason is None,
            failure_reason=failure_reason,
            ip_address=context.ip_address,
            user_agent=context.user_agent,
            occurred_at=occurred_at,
        )
        if failure_reason is not None:
            self._logger.info(
                "login_failed",
                reason=failure_reason.value,
                account_id=str(account_id) if account_id else None,
            )
        try:
            await self._audit_log.record(entry)
        except Exception as e:
            # Audit sinks must not abort authentication
            self._logger.error(
                "login_history_record_failed",
                error=e,
                account_id=str(account_id) if account_id else None,
            )

    @staticmethod
    def _account_not_found(account_id: UUID) -> NotFoundError:
        return NotFoundError(
            code=ErrorCode.ACCOUNT_NOT_FOUND,
            message="Account not found",
            resource_type="account",
            resource_id=str(account_id),
        )

    def _store_unavailable(
        self, operation: str, error: Exception, **context: Any
    ) -> Failure[StoreUnavailableError]:
        self._logger.error(
            "identity_operation_failed",
            error=error,
            operation=operation,
            **context,
        )
        return Failure(error=StoreUnavailableError())
