"""Protocol for hashing one-time codes before storage."""

from typing import Protocol


class CodeHashingProtocol(Protocol):
    """Keyed digest of short numeric codes."""

    def hash_code(self, code: str) -> str:
        """Return the digest stored in place of the code."""
        ...

    def verify_code(self, code: str, code_hash: str) -> bool:
        """Constant-time check of a submitted code against a stored digest."""
        ...
