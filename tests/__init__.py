"""Test suite for the identity service.

Test structure follows the test pyramid:
- unit/: Unit tests - domain logic and services with mocked ports
- integration/: Integration tests - adapters against SQLite and real bcrypt
- api/: API endpoint tests - HTTP request/response cycle through the app

Tests run against SQLite (aiosqlite); no external services are needed.
"""
