"""Session token service.

Generates opaque bearer tokens for sessions and the digests stored in
their place.

Token Strategy:
    - Opaque tokens (NOT JWT)
    - 32-byte random string (urlsafe base64)
    - SHA-256 hex digest stored, so a presented token is found by an
      indexed lookup on the digest
"""

import hashlib
import secrets


class SessionTokenService:
    """Session bearer token generation and hashing.

    Usage:
        service = SessionTokenService()
        token, token_hash = service.generate_token()

        # Store token_hash, return token to the client once
        session = Session(..., token_hash=token_hash)

        # Later: look the session up from a presented token
        await session_repo.find_by_token_hash(service.hash_token(token))
    """

    def __init__(self, token_bytes: int = 32) -> None:
        self._token_bytes = token_bytes

    def generate_token(self) -> tuple[str, str]:
        """Generate a session token and its digest.

        Returns:
            Tuple of (token, token_hash).

        Example:
            >>> token, token_hash = SessionTokenService().generate_token()
            >>> len(token_hash)
            64
        """
        # 32 bytes = 256 bits of entropy
        token = secrets.token_urlsafe(self._token_bytes)
        return token, self.hash_token(token)

    @staticmethod
    def hash_token(token: str) -> str:
        """SHA-256 hex digest of a token."""
        return hashlib.sha256(token.encode("utf-8")).hexdigest()
