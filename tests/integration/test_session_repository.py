"""Integration tests for SessionRepository.

Tests cover:
- Save and lookup by token hash / id
- Listing active sessions (revoked and expired excluded, newest first)
- Revoking one session and every session of an account

Architecture:
- Integration tests with a REAL database (SQLite file per test)
- An account row is created first for the foreign key
"""

from datetime import UTC, datetime, timedelta

import pytest
from uuid_extensions import uuid7

from identity_service.domain.entities import Account, Session
from identity_service.infrastructure.persistence.repositories import (
    AccountRepository,
    SessionRepository,
)


@pytest.fixture
async def account_id(test_database):
    account = Account(
        id=uuid7(),
        email="alice@x.com",
        username="alice",
        password_hash="$2b$04$hash",
        first_name="Alice",
        last_name="Liddell",
    )
    async with test_database.get_session() as session:
        await AccountRepository(session).create(account)
    return account.id


def create_test_session(account_id, token_hash: str, **overrides) -> Session:
    now = datetime.now(UTC)
    fields = {
        "id": uuid7(),
        "account_id": account_id,
        "token_hash": token_hash,
        "expires_at": now + timedelta(days=30),
        "created_at": now,
        "device_info": "laptop",
        "ip_address": "203.0.113.7",
        "user_agent": "pytest",
    }
    fields.update(overrides)
    return Session(**fields)


@pytest.mark.integration
class TestSessionRepositorySaveAndFind:
    @pytest.mark.asyncio
    async def test_save_and_find_by_token_hash(self, test_database, account_id):
        saved = create_test_session(account_id, "a" * 64)
        async with test_database.get_session() as session:
            await SessionRepository(session).save(saved)

        async with test_database.get_session() as session:
            found = await SessionRepository(session).find_by_token_hash("a" * 64)

        assert found is not None
        assert found.id == saved.id
        assert found.account_id == account_id
        assert found.device_info == "laptop"
        assert found.ip_address == "203.0.113.7"
        assert found.is_active is True
        assert found.expires_at == saved.expires_at

    @pytest.mark.asyncio
    async def test_find_by_unknown_token_hash(self, db_session):
        assert await SessionRepository(db_session).find_by_token_hash("f" * 64) is None

    @pytest.mark.asyncio
    async def test_find_by_id(self, test_database, account_id):
        saved = create_test_session(account_id, "b" * 64)
        async with test_database.get_session() as session:
            repo = SessionRepository(session)
            await repo.save(saved)
            found = await repo.find_by_id(saved.id)

        assert found is not None
        assert found.token_hash == "b" * 64


@pytest.mark.integration
class TestSessionRepositoryListActive:
    @pytest.mark.asyncio
    async def test_excludes_revoked_and_expired_newest_first(self, test_database, account_id):
        now = datetime.now(UTC)
        older = create_test_session(account_id, "1" * 64, created_at=now - timedelta(hours=2))
        newer = create_test_session(account_id, "2" * 64, created_at=now - timedelta(hours=1))
        revoked = create_test_session(account_id, "3" * 64)
        expired = create_test_session(
            account_id, "4" * 64, expires_at=now - timedelta(seconds=1)
        )

        async with test_database.get_session() as session:
            repo = SessionRepository(session)
            for item in (older, newer, revoked, expired):
                await repo.save(item)
            await repo.revoke(revoked.id, now)

            active = await repo.list_active(account_id, now)

        assert [s.id for s in active] == [newer.id, older.id]


@pytest.mark.integration
class TestSessionRepositoryRevoke:
    @pytest.mark.asyncio
    async def test_revoke_is_one_shot(self, test_database, account_id):
        saved = create_test_session(account_id, "c" * 64)
        now = datetime.now(UTC)

        async with test_database.get_session() as session:
            repo = SessionRepository(session)
            await repo.save(saved)
            first = await repo.revoke(saved.id, now)
            second = await repo.revoke(saved.id, now)
            found = await repo.find_by_id(saved.id)

        assert first is True
        assert second is False
        assert found.is_active is False
        assert found.revoked_at == now

    @pytest.mark.asyncio
    async def test_revoke_all_counts_only_active(self, test_database, account_id):
        now = datetime.now(UTC)
        sessions = [create_test_session(account_id, str(i) * 64) for i in range(3)]

        async with test_database.get_session() as session:
            repo = SessionRepository(session)
            for item in sessions:
                await repo.save(item)
            await repo.revoke(sessions[0].id, now)

            count = await repo.revoke_all_for_account(account_id, now)
            remaining = await repo.list_active(account_id, now)

        assert count == 2
        assert remaining == []

    @pytest.mark.asyncio
    async def test_revoke_all_without_sessions(self, db_session):
        count = await SessionRepository(db_session).revoke_all_for_account(
            uuid7(), datetime.now(UTC)
        )
        assert count == 0
