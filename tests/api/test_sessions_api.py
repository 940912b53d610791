"""API tests for the sessions resource.

Tests cover:
- POST /api/v1/sessions (login): success, unknown identity, wrong password,
  unverified email, lockout (423 with locked_until)
- GET /api/v1/sessions: active sessions, current session flagged
- DELETE /api/v1/sessions/current: sign out
- DELETE /api/v1/sessions: sign out everywhere

Architecture:
- Real app, real lifecycle, SQLite per test (see tests/api/conftest.py)
- Verifies RFC 7807 Problem Details on every error
"""

from datetime import datetime

import pytest

from identity_service.core.config import settings
from tests.api.api_client import API, PASSWORD, bearer


def problem_code(response) -> str:
    return response.json()["type"].removeprefix(f"{settings.api_base_url}/errors/")


@pytest.mark.api
class TestCreateSession:
    def test_login_with_email(self, api):
        api.signed_in()

        response = api.login(device_info="Firefox on Linux")

        assert response.status_code == 200
        data = response.json()
        assert data["account"]["email"] == "alice@x.com"
        assert data["session"]["token_type"] == "bearer"
        assert data["session"]["token"]
        assert "password_hash" not in data["account"]

    def test_login_with_username(self, api):
        api.register(username="alice")
        api.verify()

        response = api.login(identifier="ALICE")

        assert response.status_code == 200

    def test_email_alias_accepted(self, api):
        api.signed_in()

        response = api.client.post(
            f"{API}/sessions", json={"email": "alice@x.com", "password": PASSWORD}
        )

        assert response.status_code == 200

    def test_unknown_identity_and_wrong_password_look_the_same(self, api):
        api.signed_in()

        unknown = api.login(identifier="nobody@x.com")
        wrong = api.login(password="Wr0ng!Password")

        assert unknown.status_code == wrong.status_code == 401
        assert problem_code(unknown) == problem_code(wrong) == "invalid_credentials"
        assert unknown.json()["detail"] == wrong.json()["detail"]

    def test_unverified_account(self, api):
        api.register()

        response = api.login()

        assert response.status_code == 401
        body = response.json()
        assert problem_code(response) == "verification_required"
        assert body["requires_verification"] is True
        assert body["email"] == "alice@x.com"

    def test_lockout_returns_423_with_unlock_time(self, api):
        api.signed_in()
        for _ in range(settings.lockout_threshold):
            assert api.login(password="Wr0ng!Password").status_code == 401

        response = api.login()

        assert response.status_code == 423
        body = response.json()
        assert problem_code(response) == "account_locked"
        assert datetime.fromisoformat(body["locked_until"]).tzinfo is not None

    def test_attempts_are_audited(self, api):
        api.signed_in()
        api.login(password="Wr0ng!Password")
        api.login()

        outcomes = [(entry.success, entry.failure_reason) for entry in api.audit_log.entries]
        assert outcomes[-2:] == [(False, "bad_password"), (True, None)]

    def test_missing_password_is_validation_error(self, api):
        response = api.client.post(f"{API}/sessions", json={"identifier": "alice@x.com"})

        assert response.status_code == 400
        assert problem_code(response) == "validation_failed"

    def test_response_carries_trace_id(self, api):
        response = api.login(identifier="nobody@x.com")

        assert response.headers["x-trace-id"] == response.json()["trace_id"]


@pytest.mark.api
class TestListSessions:
    def test_lists_active_sessions_and_flags_current(self, api):
        first = api.signed_in()
        second = api.login().json()["session"]

        response = api.client.get(f"{API}/sessions", headers=bearer(second["token"]))

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        current = [s for s in data["sessions"] if s["is_current"]]
        assert [s["id"] for s in current] == [second["session_id"]]
        assert all("token" not in s for s in data["sessions"])
        assert first != second["token"]

    def test_requires_authentication(self, api):
        response = api.client.get(f"{API}/sessions")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.api
class TestDeleteSessions:
    def test_sign_out_current_session(self, api):
        token = api.signed_in()
        other = api.login().json()["session"]["token"]

        response = api.client.delete(f"{API}/sessions/current", headers=bearer(token))

        assert response.status_code == 204
        assert response.content == b""
        assert api.client.get(f"{API}/accounts/me", headers=bearer(token)).status_code == 401
        assert api.client.get(f"{API}/accounts/me", headers=bearer(other)).status_code == 200

    def test_sign_out_everywhere(self, api):
        token = api.signed_in()
        other = api.login().json()["session"]["token"]

        response = api.client.delete(f"{API}/sessions", headers=bearer(token))

        assert response.status_code == 200
        assert response.json() == {"revoked_count": 2}
        assert api.client.get(f"{API}/accounts/me", headers=bearer(other)).status_code == 401
