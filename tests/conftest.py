"""Pytest configuration and shared fixtures.

Environment variables are set before any application import so the cached
Settings singleton sees the test configuration (SQLite, cheap bcrypt).

Fixtures:
    - test_database: fresh SQLite file database per test (tables created)
    - db_session: session on test_database
    - audit_log: in-memory login history
    - notifier: records every notification instead of sending it
    - mock_logger: Mock satisfying LoggerProtocol
"""

import os
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-code-digests")
os.environ["ENVIRONMENT"] = "testing"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from uuid_extensions import uuid7  # noqa: E402

from identity_service.application.dtos import IssuedSession  # noqa: E402
from identity_service.application.services import (  # noqa: E402
    AccountLifecycle,
    NotificationDispatcher,
    VerificationCodeManager,
)
from identity_service.core.result import Success  # noqa: E402
from identity_service.domain.entities import LoginHistoryEntry  # noqa: E402
from identity_service.domain.policies import LockoutDecision, LoginAttemptGuard  # noqa: E402
from identity_service.infrastructure.persistence.database import Database  # noqa: E402
from identity_service.infrastructure.security import HmacCodeHasher  # noqa: E402


# =============================================================================
# Test doubles
# =============================================================================


class InMemoryAuditLog:
    """AuditLogProtocol implementation backed by a list."""

    def __init__(self) -> None:
        self.entries: list[LoginHistoryEntry] = []

    async def record(self, entry: LoginHistoryEntry) -> None:
        self.entries.append(entry)


class RecordingNotifier:
    """NotificationProtocol implementation that keeps what it was asked to send."""

    def __init__(self) -> None:
        self.verification_codes: list[tuple[str, str]] = []
        self.reset_codes: list[tuple[str, str]] = []
        self.password_changed: list[str] = []

    async def send_verification_code(self, to_email: str, code: str, first_name: str) -> None:
        self.verification_codes.append((to_email, code))

    async def send_password_reset_code(self, to_email: str, code: str, first_name: str) -> None:
        self.reset_codes.append((to_email, code))

    async def send_password_changed_notice(self, to_email: str, first_name: str) -> None:
        self.password_changed.append(to_email)

    def last_verification_code(self, email: str) -> str:
        return [code for to, code in self.verification_codes if to == email][-1]

    def last_reset_code(self, email: str) -> str:
        return [code for to, code in self.reset_codes if to == email][-1]


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def audit_log() -> InMemoryAuditLog:
    return InMemoryAuditLog()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def mock_logger() -> Mock:
    """Logger double; assert on calls with mock_logger.info.assert_any_call(...)."""
    return Mock()


@pytest_asyncio.fixture
async def test_database(tmp_path):
    """Fresh file-backed SQLite database per test.

    A file (not :memory:) so that several sessions, and therefore several
    connections, see the same data.
    """
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'identity.db'}")
    await database.create_all()
    yield database
    await database.drop_all()
    await database.close()


@pytest_asyncio.fixture
async def db_session(test_database):
    async with test_database.get_session() as session:
        yield session


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line("markers", "integration: Integration tests with real database")
    config.addinivalue_line("markers", "api: HTTP tests through the FastAPI app")


# =============================================================================
# AccountLifecycle harness (unit tests)
# =============================================================================


@dataclass
class LifecycleHarness:
    """AccountLifecycle wired to mocks and recording fakes."""

    lifecycle: AccountLifecycle
    account_repo: AsyncMock
    session_manager: AsyncMock
    password_service: Mock
    code_hasher: HmacCodeHasher
    code_manager: VerificationCodeManager
    login_guard: LoginAttemptGuard
    audit_log: InMemoryAuditLog
    notifier: RecordingNotifier
    dispatcher: NotificationDispatcher
    logger: Mock


@pytest.fixture
def lifecycle_harness(audit_log, notifier, mock_logger) -> LifecycleHarness:
    account_repo = AsyncMock()
    account_repo.find_by_id.return_value = None
    account_repo.find_by_email.return_value = None
    account_repo.find_by_identifier.return_value = None
    account_repo.create.return_value = Success(value=None)
    account_repo.claim_code_attempt.return_value = 1
    account_repo.record_failed_login.return_value = LockoutDecision(
        failed_login_attempts=1, account_locked=False, newly_locked=False
    )

    session_manager = AsyncMock()
    session_manager.issue.return_value = IssuedSession(
        session_id=uuid7(),
        token="session-token",
        expires_at=datetime.now(UTC) + timedelta(days=30),
    )
    session_manager.revoke.return_value = True
    session_manager.revoke_all.return_value = 0

    password_service = Mock()
    password_service.hash_password.return_value = "$2b$04$hashed"
    password_service.verify_password.return_value = True

    code_hasher = HmacCodeHasher(secret_key="unit-test-key")
    code_manager = VerificationCodeManager(
        account_repo=account_repo,
        code_hasher=code_hasher,
        ttl=timedelta(minutes=15),
        max_attempts=5,
        resend_interval=timedelta(seconds=60),
    )
    login_guard = LoginAttemptGuard(threshold=5)
    dispatcher = NotificationDispatcher(logger=mock_logger, timeout_seconds=1.0)

    lifecycle = AccountLifecycle(
        account_repo=account_repo,
        session_manager=session_manager,
        code_manager=code_manager,
        login_guard=login_guard,
        password_service=password_service,
        audit_log=audit_log,
        notifier=notifier,
        dispatcher=dispatcher,
        logger=mock_logger,
        lockout_duration=timedelta(minutes=15),
    )
    return LifecycleHarness(
        lifecycle=lifecycle,
        account_repo=account_repo,
        session_manager=session_manager,
        password_service=password_service,
        code_hasher=code_hasher,
        code_manager=code_manager,
        login_guard=login_guard,
        audit_log=audit_log,
        notifier=notifier,
        dispatcher=dispatcher,
        logger=mock_logger,
    )
