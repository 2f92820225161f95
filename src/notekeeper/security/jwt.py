"""JWT token utilities."""

import base64
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JOSEError, jwt

from ..config import get_settings

logger = logging.getLogger(__name__)


@dataclass
class TokenVerification:
    """Outcome of checking a token: the claims when valid, otherwise why not."""

    decoded: Optional[Dict[str, Any]]
    valid: bool
    expired: bool


def decode_key(encoded_key: str) -> str:
    """Keys are configured as base64 encoded PEM text."""
    return base64.b64decode(encoded_key).decode("utf-8")


def sign_jwt(payload: Dict[str, Any], private_key: str, expires_in: int) -> str:
    """Sign `payload` with a base64 encoded PEM private key, valid for `expires_in` seconds."""
    settings = get_settings()
    now = datetime.now(timezone.utc)

    to_encode = payload.copy()
    to_encode.update({
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
        "jti": str(uuid.uuid4()),
    })
    return jwt.encode(to_encode, decode_key(private_key), algorithm=settings.jwt_algorithm)


def verify_jwt(token: Optional[str], public_key: str) -> TokenVerification:
    """Verify signature and expiry. Never raises."""
    if not token:
        return TokenVerification(decoded=None, valid=False, expired=False)

    settings = get_settings()
    try:
        decoded = jwt.decode(token, decode_key(public_key), algorithms=[settings.jwt_algorithm])
        return TokenVerification(decoded=decoded, valid=True, expired=False)
    except ExpiredSignatureError:
        logger.info("JWT verification failed: token expired")
        return TokenVerification(decoded=None, valid=False, expired=True)
    except (JOSEError, ValueError) as e:
        logger.warning(f"JWT verification failed: {type(e).__name__}")
        return TokenVerification(decoded=None, valid=False, expired=False)
