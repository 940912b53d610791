"""Session issuance, validation and revocation."""

from datetime import UTC, datetime, timedelta
from uuid import UUID

from uuid_extensions import uuid7

from identity_service.application.commands import RequestContext
from identity_service.application.dtos import IssuedSession
from identity_service.core.result import Failure, Result, Success
from identity_service.domain.entities import Session
from identity_service.domain.errors import SessionInvalidError
from identity_service.domain.protocols import (
    LoggerProtocol,
    SessionRepository,
    SessionTokenProtocol,
)


class SessionManager:
    """Creates and checks authenticated sessions.

    Callers are responsible for the lockout and verification checks; this
    class only mints and tracks sessions.

    Attributes:
        ttl: Lifetime of a new session.
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        token_service: SessionTokenProtocol,
        logger: LoggerProtocol,
        ttl: timedelta,
    ) -> None:
        self._session_repo = session_repo
        self._token_service = token_service
        self._logger = logger
        self.ttl = ttl

    async def issue(
        self, account_id: UUID, context: RequestContext | None = None
    ) -> IssuedSession:
        """Create and store a session for an account.

        Returns:
            IssuedSession carrying the raw bearer token.
        """
        context = context or RequestContext()
        now = datetime.now(UTC)
        token, token_hash = self._token_service.generate_token()
        session = Session(
            id=uuid7(),
            account_id=account_id,
            token_hash=token_hash,
            expires_at=now + self.ttl,
            device_info=context.device_info,
            ip_address=context.ip_address,
            user_agent=context.user_agent,
            created_at=now,
        )
        await self._session_repo.save(session)

        self._logger.info(
            "session_issued",
            account_id=str(account_id),
            session_id=str(session.id),
        )
        return IssuedSession(session_id=session.id, token=token, expires_at=session.expires_at)

    async def validate(self, token: str) -> Result[Session, SessionInvalidError]:
        """Resolve a bearer token to a valid session.

        Unknown, revoked and expired tokens are all reported the same way.
        """
        session = await self._session_repo.find_by_token_hash(
            self._token_service.hash_token(token)
        )
        if session is None or not session.is_valid(datetime.now(UTC)):
            return Failure(error=SessionInvalidError())
        return Success(value=session)

    async def revoke(self, session_id: UUID) -> bool:
        """Revoke one session. Returns False if it was not active."""
        revoked = await self._session_repo.revoke(session_id, datetime.now(UTC))
        if revoked:
            self._logger.info("session_revoked", session_id=str(session_id))
        return revoked

    async def revoke_all(self, account_id: UUID) -> int:
        """Revoke every active session of an account."""
        count = await self._session_repo.revoke_all_for_account(
            account_id, datetime.now(UTC)
        )
        self._logger.info(
            "sessions_revoked", account_id=str(account_id), revoked_count=count
        )
        return count

    async def list_active(self, account_id: UUID) -> list[Session]:
        return await self._session_repo.list_active(account_id, datetime.now(UTC))
