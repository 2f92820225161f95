"""Security utilities."""

from .jwt import TokenVerification, decode_key, sign_jwt, verify_jwt
from .password import hash_password, needs_update, verify_password

__all__ = [
    "hash_password",
    "verify_password",
    "needs_update",
    "TokenVerification",
    "decode_key",
    "sign_jwt",
    "verify_jwt",
]
