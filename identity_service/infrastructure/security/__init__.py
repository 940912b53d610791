"""Security services: password hashing, code digests, session tokens."""

from identity_service.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from identity_service.infrastructure.security.hmac_code_hasher import HmacCodeHasher
from identity_service.infrastructure.security.session_token_service import (
    SessionTokenService,
)

__all__ = ["BcryptPasswordService", "HmacCodeHasher", "SessionTokenService"]
