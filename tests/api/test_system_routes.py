"""API tests for non-versioned system routes.

Validates behavior of the root and health endpoints exposed by the system
router.
"""

import pytest
from fastapi.testclient import TestClient

from identity_service.core.config import settings
from identity_service.main import app


pytestmark = pytest.mark.api

client = TestClient(app)


def test_root_endpoint_returns_status_and_version() -> None:
    """Root endpoint should return operational status and app version."""
    response = client.get("/")

    assert response.status_code == 200
    data = response.json()

    assert data["message"] == settings.app_name
    assert data["status"] == "operational"
    assert data["version"] == settings.app_version


def test_health_endpoint_returns_healthy_status() -> None:
    """Health endpoint should return a healthy status indicator."""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_responses_carry_trace_id_header() -> None:
    response = client.get("/health", headers={"X-Trace-Id": "trace-123"})

    assert response.headers["x-trace-id"] == "trace-123"
