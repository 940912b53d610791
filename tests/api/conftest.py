"""Shared fixtures for API tests.

The app runs against a fresh SQLite file per test. Repositories, lifecycle
and auth run for real; the audit trail, notifier and dispatcher are
replaced through app.dependency_overrides so tests can read the codes that
would have been emailed.

All async work (schema creation, draining notifications, teardown) goes
through the TestClient portal so it shares the app's event loop.
"""

import pytest
from fastapi.testclient import TestClient

from identity_service.application.services import NotificationDispatcher
from identity_service.core.container import (
    get_audit_log,
    get_db_session,
    get_notification_dispatcher,
    get_notification_service,
)
from identity_service.infrastructure.persistence.database import Database
from identity_service.main import app
from tests.api.api_client import ApiClient


@pytest.fixture
def api(tmp_path, notifier, audit_log, mock_logger):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'api.db'}")
    dispatcher = NotificationDispatcher(logger=mock_logger, timeout_seconds=5.0)

    async def override_db_session():
        async with database.get_session() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_audit_log] = lambda: audit_log
    app.dependency_overrides[get_notification_service] = lambda: notifier
    app.dependency_overrides[get_notification_dispatcher] = lambda: dispatcher

    with TestClient(app, raise_server_exceptions=False) as client:
        client.portal.call(database.create_all)
        yield ApiClient(
            client=client,
            notifier=notifier,
            audit_log=audit_log,
            dispatcher=dispatcher,
            database=database,
        )
        client.portal.call(dispatcher.drain)
        client.portal.call(database.drop_all)
        client.portal.call(database.close)

    app.dependency_overrides.clear()
