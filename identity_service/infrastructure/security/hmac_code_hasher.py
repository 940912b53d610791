"""Keyed digests for one-time codes.

A six-digit code has only a million possible values, so a plain hash would
be reversed by enumeration. Codes are digested with HMAC-SHA256 keyed by
the application secret instead; without the key the stored digest reveals
nothing.

Implements CodeHashingProtocol.
"""

import hashlib
import hmac


class HmacCodeHasher:
    """HMAC-SHA256 digests for verification and reset codes.

    Usage:
        hasher = HmacCodeHasher(secret_key=settings.secret_key)
        code_hash = hasher.hash_code("042917")
        hasher.verify_code("042917", code_hash)  # True
    """

    def __init__(self, secret_key: str) -> None:
        if not secret_key:
            msg = "secret_key must not be empty"
            raise ValueError(msg)
        self._key = secret_key.encode("utf-8")

    def hash_code(self, code: str) -> str:
        return hmac.new(self._key, code.encode("utf-8"), hashlib.sha256).hexdigest()

    def verify_code(self, code: str, code_hash: str) -> bool:
        """Constant-time comparison of a submitted code with a stored digest."""
        return hmac.compare_digest(self.hash_code(code), code_hash)
