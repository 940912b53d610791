"""API tests package.

End-to-end tests for REST API endpoints using TestClient.
Tests the complete request/response cycle including:
- Request validation
- Lifecycle orchestration against a per-test SQLite database
- Response formatting
- Error handling (RFC 7807)
- HTTP status codes

Note:
    A few tests stub AccountLifecycle through dependency_overrides to reach
    error states that are impractical to produce over HTTP.
"""
