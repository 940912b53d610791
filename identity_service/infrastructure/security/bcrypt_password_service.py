"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol (structural typing, no inheritance).

Security:
    - Per-password random salt embedded in the stored hash
    - Cost factor taken from settings.bcrypt_rounds (12 in production,
      lowered in the test environment)
    - bcrypt only looks at the first 72 bytes of the input; the password
      policy caps length at 128 characters
"""

import bcrypt


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        password_service: PasswordHashingProtocol = get_password_service()

        password_hash = password_service.hash_password("SecurePass123!")
        is_valid = password_service.verify_password("SecurePass123!", password_hash)
    """

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor (logarithmic, each +1 doubles
                the work). 12 is about 250ms per hash.

        Raises:
            ValueError: If the cost factor is outside bcrypt's 4..31 range.
        """
        if not 4 <= cost_factor <= 31:
            msg = "Cost factor must be between 4 and 31"
            raise ValueError(msg)

        self._cost_factor = cost_factor

    @property
    def cost_factor(self) -> int:
        return self._cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Returns:
            Bcrypt hash string ($2b$<cost>$<salt><hash>, 60 characters).
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        # bcrypt >= 4.1 rejects inputs over 72 bytes instead of truncating
        password_hash = bcrypt.hashpw(password.encode("utf-8")[:72], salt)
        return password_hash.decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Returns:
            True if the password matches. False for a wrong password or a
            malformed hash (never raises).
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8")[:72], password_hash.encode("utf-8")
            )
        except (ValueError, AttributeError):
            # Invalid hash format: fail closed
            return False
