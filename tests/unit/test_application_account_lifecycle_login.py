"""Unit tests for AccountLifecycle.login.

Tests cover:
- Decision order: unknown identifier, locked, unverified, disabled, password
- Enumeration resistance (unknown identifier and wrong password read the same)
- Atomic failed-login recording and the lock transition log event
- Lapsed locks cleared before evaluation
- Counter reset and session issuance on success
- Login history for every attempt
- Store failures surfaced as StoreUnavailableError

Architecture:
- AccountRepository and SessionManager mocked
- Real VerificationCodeManager, LoginAttemptGuard and NotificationDispatcher
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import ANY

import pytest
from uuid_extensions import uuid7

from identity_service.application.commands import Login, RequestContext
from identity_service.application.dtos import AuthenticatedSession
from identity_service.core.result import Failure, Success
from identity_service.domain.entities import Account
from identity_service.domain.enums import AccountStatus, LoginFailureReason
from identity_service.domain.errors import (
    AccountDisabledError,
    AccountLockedError,
    InvalidCredentialsError,
    StoreUnavailableError,
    VerificationRequiredError,
)
from identity_service.domain.policies import LockoutDecision


def create_active_account(**overrides) -> Account:
    fields = {
        "id": uuid7(),
        "email": "alice@x.com",
        "username": "alice",
        "password_hash": "$2b$04$hash",
        "first_name": "Alice",
        "last_name": "Liddell",
        "account_status": AccountStatus.ACTIVE,
        "email_verified": True,
    }
    fields.update(overrides)
    return Account(**fields)


CONTEXT = RequestContext(ip_address="203.0.113.7", user_agent="pytest-agent")


@pytest.mark.unit
class TestLoginSuccess:
    @pytest.mark.asyncio
    async def test_valid_credentials_issue_session(self, lifecycle_harness):
        h = lifecycle_harness
        account = create_active_account()
        h.account_repo.find_by_identifier.return_value = account

        result = await h.lifecycle.login(
            Login(identifier="alice@x.com", password="password123"), CONTEXT
        )

        assert isinstance(result, Success)
        assert isinstance(result.value, AuthenticatedSession)
        assert result.value.account.id == account.id
        assert result.value.session.token == "session-token"
        h.session_manager.issue.assert_awaited_once_with(account.id, CONTEXT)
        h.password_service.verify_password.assert_called_once_with(
            "password123", "$2b$04$hash"
        )

    @pytest.mark.asyncio
    async def test_success_resets_failed_counter(self, lifecycle_harness):
        h = lifecycle_harness
        account = create_active_account(failed_login_attempts=3)
        h.account_repo.find_by_identifier.return_value = account

        await h.lifecycle.login(Login(identifier="alice", password="password123"))

        h.account_repo.reset_failed_logins.assert_awaited_once_with(account.id)

    @pytest.mark.asyncio
    async def test_success_without_failures_skips_reset(self, lifecycle_harness):
        h = lifecycle_harness
        h.account_repo.find_by_identifier.return_value = create_active_account()

        await h.lifecycle.login(Login(identifier="alice", password="password123"))

        h.account_repo.reset_failed_logins.assert_not_called()

    @pytest.mark.asyncio
    async def test_success_is_recorded_in_login_history(self, lifecycle_harness):
        h = lifecycle_harness
        account = create_active_account()
        h.account_repo.find_by_identifier.return_value = account

        await h.lifecycle.login(Login(identifier="alice", password="password123"), CONTEXT)

        assert len(h.audit_log.entries) == 1
        entry = h.audit_log.entries[0]
        assert entry.account_id == account.id
        assert entry.success is True
        assert entry.failure_reason is None
        assert entry.ip_address == "203.0.113.7"
        assert entry.user_agent == "pytest-agent"

    @pytest.mark.asyncio
    async def test_failing_audit_log_does_not_block_login(self, lifecycle_harness):
        h = lifecycle_harness
        h.account_repo.find_by_identifier.return_value = create_active_account()

        async def broken_record(entry):
            raise RuntimeError("audit sink down")

        h.audit_log.record = broken_record

        result = await h.lifecycle.login(Login(identifier="alice", password="password123"))

        assert isinstance(result, Success)
        h.logger.error.assert_any_call("login_history_record_failed", error=ANY, account_id=ANY)


@pytest.mark.unit
class TestLoginRejections:
    @pytest.mark.asyncio
    async def test_unknown_identifier(self, lifecycle_harness):
        h = lifecycle_harness

        result = await h.lifecycle.login(Login(identifier="nobody", password="password123"))

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidCredentialsError)
        h.password_service.verify_password.assert_not_called()
        assert h.audit_log.entries[0].account_id is None
        assert h.audit_log.entries[0].failure_reason == LoginFailureReason.IDENTITY_NOT_FOUND

    @pytest.mark.asyncio
    async def test_unknown_identifier_and_wrong_password_are_indistinguishable(
        self, lifecycle_harness
    ):
        h = lifecycle_harness
        unknown = await h.lifecycle.login(Login(identifier="nobody", password="x" * 8))

        h.account_repo.find_by_identifier.return_value = create_active_account()
        h.password_service.verify_password.return_value = False
        wrong = await h.lifecycle.login(Login(identifier="alice", password="x" * 8))

        assert unknown == wrong

    @pytest.mark.asyncio
    async def test_wrong_password_records_failure_atomically(self, lifecycle_harness):
        h = lifecycle_harness
        account = create_active_account()
        h.account_repo.find_by_identifier.return_value = account
        h.password_service.verify_password.return_value = False
        before = datetime.now(UTC)

        result = await h.lifecycle.login(Login(identifier="alice", password="wrongpass"))

        assert isinstance(result.error, InvalidCredentialsError)
        h.account_repo.record_failed_login.assert_awaited_once()
        account_id, guard, locked_until = h.account_repo.record_failed_login.await_args.args
        assert account_id == account.id
        assert guard is h.login_guard
        assert before + timedelta(minutes=15) <= locked_until
        assert locked_until <= datetime.now(UTC) + timedelta(minutes=15)
        h.session_manager.issue.assert_not_called()
        assert h.audit_log.entries[0].failure_reason == LoginFailureReason.BAD_PASSWORD

    @pytest.mark.asyncio
    async def test_lock_transition_is_logged_once(self, lifecycle_harness):
        h = lifecycle_harness
        h.account_repo.find_by_identifier.return_value = create_active_account(
            failed_login_attempts=4
        )
        h.password_service.verify_password.return_value = False
        h.account_repo.record_failed_login.return_value = LockoutDecision(
            failed_login_attempts=5, account_locked=True, newly_locked=True
        )

        result = await h.lifecycle.login(Login(identifier="alice", password="wrongpass"))

        # The locking attempt itself still reads as bad credentials
        assert isinstance(result.error, InvalidCredentialsError)
        warning_events = [c.args[0] for c in h.logger.warning.call_args_list]
        assert warning_events.count("account_locked") == 1

    @pytest.mark.asyncio
    async def test_manual_only_lockout_stores_no_unlock_time(self, lifecycle_harness):
        h = lifecycle_harness
        h.lifecycle._lockout_duration = None
        h.account_repo.find_by_identifier.return_value = create_active_account()
        h.password_service.verify_password.return_value = False

        await h.lifecycle.login(Login(identifier="alice", password="wrongpass"))

        assert h.account_repo.record_failed_login.await_args.args[2] is None

    @pytest.mark.asyncio
    async def test_locked_account_rejected_even_with_correct_password(self, lifecycle_harness):
        h = lifecycle_harness
        locked_until = datetime.now(UTC) + timedelta(minutes=10)
        h.account_repo.find_by_identifier.return_value = create_active_account(
            failed_login_attempts=5, account_locked=True, locked_until=locked_until
        )

        result = await h.lifecycle.login(Login(identifier="alice", password="password123"))

        assert isinstance(result, Failure)
        assert result.error == AccountLockedError(locked_until=locked_until)
        h.password_service.verify_password.assert_not_called()
        h.account_repo.record_failed_login.assert_not_called()
        h.session_manager.issue.assert_not_called()
        assert h.audit_log.entries[0].failure_reason == LoginFailureReason.LOCKED

    @pytest.mark.asyncio
    async def test_lapsed_lock_is_cleared_and_login_proceeds(self, lifecycle_harness):
        h = lifecycle_harness
        account = create_active_account(
            failed_login_attempts=5,
            account_locked=True,
            locked_until=datetime.now(UTC) - timedelta(seconds=1),
        )
        h.account_repo.find_by_identifier.return_value = account

        result = await h.lifecycle.login(Login(identifier="alice", password="password123"))

        assert isinstance(result, Success)
        h.account_repo.clear_lockout.assert_awaited_once_with(account.id)
        assert account.account_locked is False

    @pytest.mark.asyncio
    async def test_unverified_account_requires_verification(self, lifecycle_harness):
        h = lifecycle_harness
        h.account_repo.find_by_identifier.return_value = create_active_account(
            account_status=AccountStatus.PENDING_VERIFICATION, email_verified=False
        )

        result = await h.lifecycle.login(Login(identifier="alice", password="password123"))

        assert isinstance(result, Failure)
        assert result.error == VerificationRequiredError(email="alice@x.com")
        assert result.error.requires_verification is True
        h.password_service.verify_password.assert_not_called()

    @pytest.mark.asyncio
    async def test_lock_checked_before_verification(self, lifecycle_harness):
        h = lifecycle_harness
        h.account_repo.find_by_identifier.return_value = create_active_account(
            account_status=AccountStatus.PENDING_VERIFICATION,
            email_verified=False,
            account_locked=True,
            locked_until=None,
        )

        result = await h.lifecycle.login(Login(identifier="alice", password="password123"))

        assert isinstance(result.error, AccountLockedError)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [AccountStatus.SUSPENDED, AccountStatus.INACTIVE])
    async def test_disabled_account(self, lifecycle_harness, status):
        h = lifecycle_harness
        h.account_repo.find_by_identifier.return_value = create_active_account(
            account_status=status
        )

        result = await h.lifecycle.login(Login(identifier="alice", password="password123"))

        assert isinstance(result.error, AccountDisabledError)
        h.password_service.verify_password.assert_not_called()
        assert h.audit_log.entries[0].failure_reason == LoginFailureReason.DISABLED


@pytest.mark.unit
class TestLoginStoreFailure:
    @pytest.mark.asyncio
    async def test_repository_error_becomes_store_unavailable(self, lifecycle_harness):
        h = lifecycle_harness
        h.account_repo.find_by_identifier.side_effect = ConnectionError("db down")

        result = await h.lifecycle.login(Login(identifier="alice", password="password123"))

        assert isinstance(result, Failure)
        assert isinstance(result.error, StoreUnavailableError)
        assert "db down" not in result.error.message
        h.logger.error.assert_any_call(
            "identity_operation_failed", error=ANY, operation="login"
        )
