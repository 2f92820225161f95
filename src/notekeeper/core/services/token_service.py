"""Issue, verify and rotate JWTs, and carry them in cookies."""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from fastapi import Response
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ...security.jwt import TokenVerification, sign_jwt, verify_jwt
from ..models.user import User
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

ACCESS_TOKEN_COOKIE = "accessToken"
REFRESH_TOKEN_COOKIE = "refreshToken"


@dataclass
class ReissueResult:
    access_token: str
    success: bool


class TokenService:
    """RS256 access/refresh tokens, each kind with its own key pair."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.settings = get_settings()
        self.user_repo = UserRepository(session)

    def sign_access_token(self, user: User) -> str:
        return sign_jwt(
            {"sub": str(user.id)},
            self.settings.access_token_private_key,
            self.settings.access_token_expire_seconds,
        )

    def sign_refresh_token(self, user_id: UUID) -> str:
        return sign_jwt(
            {"sub": str(user_id)},
            self.settings.refresh_token_private_key,
            self.settings.refresh_token_expire_seconds,
        )

    def verify_token(self, token: Optional[str], public_key: str) -> TokenVerification:
        return verify_jwt(token, public_key)

    def verify_access_token(self, token: Optional[str]) -> TokenVerification:
        return verify_jwt(token, self.settings.access_token_public_key)

    def verify_refresh_token(self, token: Optional[str]) -> TokenVerification:
        return verify_jwt(token, self.settings.refresh_token_public_key)

    async def reissue_access_token(self, refresh_token: Optional[str]) -> ReissueResult:
        """Mint a new access token from a valid refresh token. Never raises."""
        failed = ReissueResult(access_token="", success=False)

        verification = self.verify_refresh_token(refresh_token)
        if not verification.valid:
            return failed

        try:
            user_id = UUID(str(verification.decoded.get("sub")))
            user = await self.user_repo.get_by_id(user_id)
            if not user:
                logger.info(f"Access token reissue failed: user {user_id} not found")
                return failed
            access_token = self.sign_access_token(user)
        except Exception as e:
            # any failure here just means no new access token
            logger.warning(f"Access token reissue failed: {type(e).__name__}", exc_info=e)
            return failed

        return ReissueResult(access_token=access_token, success=True)

    def _cookie_options(self) -> dict:
        return {
            "httponly": True,
            "path": "/",
            "domain": self.settings.cookies_domain,
            "secure": self.settings.cookies_secure,
            "samesite": "strict" if self.settings.is_production else "lax",
        }

    def set_tokens(
        self, response: Response, access_token: str, refresh_token: Optional[str] = None
    ) -> None:
        """Attach the tokens to the response as http-only cookies."""
        options = self._cookie_options()
        response.set_cookie(
            ACCESS_TOKEN_COOKIE,
            access_token,
            max_age=self.settings.access_token_expire_seconds,
            **options,
        )
        if refresh_token:
            response.set_cookie(
                REFRESH_TOKEN_COOKIE,
                refresh_token,
                max_age=self.settings.refresh_token_expire_seconds,
                **options,
            )

    def clear_tokens(self, response: Response) -> None:
        options = self._cookie_options()
        response.set_cookie(ACCESS_TOKEN_COOKIE, "", max_age=0, **options)
        response.set_cookie(REFRESH_TOKEN_COOKIE, "", max_age=0, **options)
