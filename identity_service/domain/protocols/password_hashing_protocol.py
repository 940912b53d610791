"""Password hashing protocol (port)."""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Salted, adaptive password hashing.

    Implementations:
        - BcryptPasswordService (production)
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password (salt embedded in the result)."""
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored hash.

        Returns False (never raises) for malformed hashes.
        """
        ...
