"""SessionRepository - SQLAlchemy implementation of the SessionRepository protocol."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from identity_service.domain.entities import Session
from identity_service.infrastructure.persistence.models import SessionModel


class SessionRepository:
    """SQLAlchemy implementation of SessionRepository protocol.

    Sessions are never deleted here; revocation flips is_active and stamps
    revoked_at so the history stays inspectable.

    Attributes:
        session: SQLAlchemy async session (a database session, not a login
            session).
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, session: Session) -> None:
        self.session.add(self._to_model(session))
        await self.session.commit()

    async def find_by_token_hash(self, token_hash: str) -> Session | None:
        stmt = (
            select(SessionModel)
            .where(SessionModel.token_hash == token_hash)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def find_by_id(self, session_id: UUID) -> Session | None:
        stmt = (
            select(SessionModel)
            .where(SessionModel.id == session_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def list_active(self, account_id: UUID, now: datetime) -> list[Session]:
        """Active, unexpired sessions of an account, newest first."""
        stmt = (
            select(SessionModel)
            .where(
                SessionModel.account_id == account_id,
                SessionModel.is_active.is_(True),
                SessionModel.expires_at > now,
            )
            .order_by(SessionModel.created_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def revoke(self, session_id: UUID, now: datetime) -> bool:
        stmt = (
            update(SessionModel)
            .where(SessionModel.id == session_id, SessionModel.is_active.is_(True))
            .values(is_active=False, revoked_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    async def revoke_all_for_account(self, account_id: UUID, now: datetime) -> int:
        stmt = (
            update(SessionModel)
            .where(SessionModel.account_id == account_id, SessionModel.is_active.is_(True))
            .values(is_active=False, revoked_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount

    def _to_domain(self, model: SessionModel) -> Session:
        return Session(
            id=model.id,
            account_id=model.account_id,
            token_hash=model.token_hash,
            expires_at=model.expires_at,
            device_info=model.device_info,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            created_at=model.created_at,
            is_active=model.is_active,
            revoked_at=model.revoked_at,
        )

    def _to_model(self, session: Session) -> SessionModel:
        return SessionModel(
            id=session.id,
            account_id=session.account_id,
            token_hash=session.token_hash,
            expires_at=session.expires_at,
            device_info=session.device_info,
            ip_address=session.ip_address,
            user_agent=session.user_agent,
            created_at=session.created_at,
            is_active=session.is_active,
            revoked_at=session.revoked_at,
        )
