"""Authentication dependencies."""

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config import get_settings
from ..core.blacklist import TokenBlacklist
from ..core.services.token_service import ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE
from ..security.jwt import verify_jwt

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_blacklist(request: Request) -> TokenBlacklist:
    """Blacklist created at startup and kept on the application state."""
    blacklist = getattr(request.app.state, "token_blacklist", None)
    if blacklist is None:
        raise RuntimeError("Token blacklist is not initialised")
    return blacklist


def get_access_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """Access token from the `accessToken` cookie, else the bearer header."""
    return request.cookies.get(ACCESS_TOKEN_COOKIE) or (
        credentials.credentials if credentials else None
    )


def get_refresh_token(request: Request) -> Optional[str]:
    """Refresh token from the `refreshToken` cookie, else the `x-refresh-token` header."""
    return request.cookies.get(REFRESH_TOKEN_COOKIE) or request.headers.get("x-refresh-token")


async def deserialize_user(
    request: Request,
    token: Optional[str] = Depends(get_access_token),
    blacklist: TokenBlacklist = Depends(get_token_blacklist),
) -> Optional[UUID]:
    """
    Resolve the caller's user id, or None for anonymous requests.

    A blacklisted token is treated like no token at all, as is one that
    fails verification. The decoded claims are kept on ``request.state.user``.
    """
    if not token:
        return None

    if await blacklist.contains(token):
        logger.info("Blacklisted access token presented")
        return None

    verification = verify_jwt(token, get_settings().access_token_public_key)
    if not verification.valid:
        return None

    try:
        user_id = UUID(str(verification.decoded.get("sub")))
    except ValueError:
        logger.warning("Access token carries a malformed subject")
        return None

    request.state.user = verification.decoded
    return user_id


async def get_current_user_id(user_id: Optional[UUID] = Depends(deserialize_user)) -> UUID:
    """Get current authenticated user ID."""
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user_id
