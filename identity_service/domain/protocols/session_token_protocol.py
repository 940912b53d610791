"""SessionTokenProtocol - port for opaque session bearer tokens.

Infrastructure provides the concrete implementation (SessionTokenService).
Only the digest of a token is ever persisted.
"""

from typing import Protocol


class SessionTokenProtocol(Protocol):
    """Generation and hashing of session bearer tokens.

    Implementations:
        - SessionTokenService: identity_service/infrastructure/security/session_token_service.py
    """

    def generate_token(self) -> tuple[str, str]:
        """Generate a bearer token and its digest.

        Returns:
            Tuple of (token, token_hash):
                - token: Returned to the client once
                - token_hash: Stored with the session
        """
        ...

    def hash_token(self, token: str) -> str:
        """Digest used to look a presented token up."""
        ...
