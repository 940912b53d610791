"""Integration tests for Bcrypt password hashing service.

Tests the BcryptPasswordService implementation with real bcrypt operations.

Architecture:
- Tests against real bcrypt library (no mocking)
- Low cost factor keeps the suite fast; one test checks the production factor
"""

import pytest

from identity_service.infrastructure.security import BcryptPasswordService


@pytest.mark.integration
class TestBcryptPasswordServiceIntegration:
    def test_hash_password_creates_bcrypt_hash(self):
        service = BcryptPasswordService(cost_factor=4)

        password_hash = service.hash_password("password123")

        # Bcrypt format: $2b$04$...
        assert password_hash.startswith("$2b$04$")
        assert len(password_hash) == 60

    def test_cost_factor_is_embedded(self):
        service = BcryptPasswordService(cost_factor=12)

        assert service.cost_factor == 12
        assert service.hash_password("password123").startswith("$2b$12$")

    def test_same_password_gets_different_salts(self):
        service = BcryptPasswordService(cost_factor=4)

        assert service.hash_password("password123") != service.hash_password("password123")

    def test_verify_password(self):
        service = BcryptPasswordService(cost_factor=4)
        password_hash = service.hash_password("password123")

        assert service.verify_password("password123", password_hash) is True
        assert service.verify_password("password124", password_hash) is False

    def test_unicode_password(self):
        service = BcryptPasswordService(cost_factor=4)
        password_hash = service.hash_password("pässwörd-密码")

        assert service.verify_password("pässwörd-密码", password_hash) is True

    def test_long_password_is_accepted(self):
        """bcrypt only reads 72 bytes; longer inputs must not raise."""
        service = BcryptPasswordService(cost_factor=4)
        password = "p" * 128

        assert service.verify_password(password, service.hash_password(password)) is True

    @pytest.mark.parametrize("bad_hash", ["", "not-a-hash", "$2b$04$short"])
    def test_malformed_hash_fails_closed(self, bad_hash):
        service = BcryptPasswordService(cost_factor=4)

        assert service.verify_password("password123", bad_hash) is False

    @pytest.mark.parametrize("cost", [3, 32])
    def test_cost_factor_out_of_range(self, cost):
        with pytest.raises(ValueError, match="between 4 and 31"):
            BcryptPasswordService(cost_factor=cost)
