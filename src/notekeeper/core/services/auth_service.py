"""Authentication service implementation."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...security.password import needs_update
from ..blacklist import TokenBlacklist
from ..models.user import User
from ..schemas.auth import LoginRequest, SignupRequest
from .interfaces import IAuthService
from .token_service import ReissueResult, TokenService
from .user_service import UserService

logger = logging.getLogger(__name__)


@dataclass
class AuthTokens:
    access_token: str
    refresh_token: str


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession, token_blacklist: Optional[TokenBlacklist] = None):
        self.session = session
        self.user_service = UserService(session)
        self.token_service = TokenService(session)
        self.token_blacklist = token_blacklist

    def _issue_tokens(self, user: User) -> AuthTokens:
        return AuthTokens(
            access_token=self.token_service.sign_access_token(user),
            refresh_token=self.token_service.sign_refresh_token(user.id),
        )

    async def signup(self, request: SignupRequest) -> Tuple[User, AuthTokens]:
        """Register a new user and log them straight in."""
        user = await self.user_service.create_user(request)
        logger.info(f"User signed up: {user.id}")
        return user, self._issue_tokens(user)

    async def login(self, request: LoginRequest) -> AuthTokens:
        """Check credentials and issue a token pair."""
        user = await self.user_service.find_by_email(request.email)
        if not user or not self.user_service.validate_password(user, request.password):
            logger.info("Login failed: invalid email or password")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password"
            )

        # upgrade hashes made with older parameters
        if needs_update(user.password_hash):
            await self.user_service.change_password(user.id, request.password)

        logger.info(f"User logged in: {user.id}")
        return self._issue_tokens(user)

    async def logout(self, access_token: Optional[str], refresh_token: Optional[str]) -> bool:
        """
        Blacklist the access token when the refresh token is still valid.

        Returns True when a token was blacklisted. Callers clear cookies
        either way.
        """
        verification = self.token_service.verify_refresh_token(refresh_token)
        if not verification.valid:
            logger.info("Logout without a valid refresh token")
            return False

        if not access_token:
            return False

        if self.token_blacklist is None:
            raise RuntimeError("Token blacklist is not configured")

        await self.token_blacklist.add(access_token)
        logger.info(f"User logged out: {verification.decoded.get('sub')}")
        return True

    async def refresh(self, refresh_token: Optional[str]) -> ReissueResult:
        result = await self.token_service.reissue_access_token(refresh_token)
        if result.success:
            logger.info("Access token refreshed")
        else:
            logger.info("Access token could not be refreshed")
        return result

    async def get_authenticated_user(self, user_id: UUID) -> User:
        user = await self.user_service.find_by_id(user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="This user does not exist"
            )
        return user
