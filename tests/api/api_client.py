"""HTTP helpers shared by the API tests."""

from dataclasses import dataclass
from typing import Any

from fastapi.testclient import TestClient

from identity_service.application.services import NotificationDispatcher
from identity_service.core.config import settings
from identity_service.infrastructure.persistence.database import Database

API = settings.api_v1_prefix
PASSWORD = "Str0ng!Passw0rd"


@dataclass
class ApiClient:
    """TestClient plus the doubles wired into the app."""

    client: TestClient
    notifier: Any
    audit_log: Any
    dispatcher: NotificationDispatcher
    database: Database

    def drain(self) -> None:
        """Run queued notifications to completion."""
        self.client.portal.call(self.dispatcher.drain)

    def register(self, email: str = "alice@x.com", **overrides):
        payload = {
            "email": email,
            "password": PASSWORD,
            "confirm_password": PASSWORD,
            "first_name": "Alice",
            "last_name": "Liddell",
            "agree_to_terms": True,
        }
        payload.update(overrides)
        response = self.client.post(f"{API}/accounts", json=payload)
        self.drain()
        return response

    def verify(self, email: str = "alice@x.com"):
        return self.client.post(
            f"{API}/email-verifications",
            json={"email": email, "code": self.notifier.last_verification_code(email)},
        )

    def login(self, identifier: str = "alice@x.com", password: str = PASSWORD, **extra):
        return self.client.post(
            f"{API}/sessions",
            json={"identifier": identifier, "password": password, **extra},
        )

    def signed_in(self, email: str = "alice@x.com") -> str:
        """Register and verify an account; return its bearer token."""
        assert self.register(email).status_code == 201
        response = self.verify(email)
        assert response.status_code == 200
        return response.json()["session"]["token"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
