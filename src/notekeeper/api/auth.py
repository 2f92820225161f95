"""Authentication API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.blacklist import TokenBlacklist
from ..core.schemas.auth import LoginRequest, SignupRequest
from ..core.schemas.users import AccessToken, TokenPair, UserResponse
from ..core.services import AuthService
from ..database import get_db_session
from ..middleware.auth import get_access_token, get_refresh_token, get_token_blacklist
from .responses import api_response

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(request: SignupRequest, session: AsyncSession = Depends(get_db_session)):
    """Register a new user and set the auth cookies."""
    auth_service = AuthService(session)
    user, tokens = await auth_service.signup(request)

    response = api_response(
        status.HTTP_201_CREATED,
        "User registered successfully",
        data=UserResponse.model_validate(user),
    )
    auth_service.token_service.set_tokens(response, tokens.access_token, tokens.refresh_token)
    return response


@router.post("/login")
async def login(request: LoginRequest, session: AsyncSession = Depends(get_db_session)):
    """Login and receive an access/refresh token pair."""
    auth_service = AuthService(session)
    tokens = await auth_service.login(request)

    response = api_response(
        status.HTTP_200_OK,
        "Login successful",
        data=TokenPair(access_token=tokens.access_token, refresh_token=tokens.refresh_token),
    )
    auth_service.token_service.set_tokens(response, tokens.access_token, tokens.refresh_token)
    return response


@router.post("/logout")
async def logout(
    access_token: Optional[str] = Depends(get_access_token),
    refresh_token: Optional[str] = Depends(get_refresh_token),
    blacklist: TokenBlacklist = Depends(get_token_blacklist),
    session: AsyncSession = Depends(get_db_session),
):
    """Revoke the access token and clear the auth cookies."""
    auth_service = AuthService(session, blacklist)
    await auth_service.logout(access_token, refresh_token)

    response = api_response(status.HTTP_200_OK, "Logout successful")
    auth_service.token_service.clear_tokens(response)
    return response


@router.post("/refresh-token")
async def refresh_token(
    refresh_token: Optional[str] = Depends(get_refresh_token),
    session: AsyncSession = Depends(get_db_session),
):
    """Mint a new access token from the refresh token."""
    auth_service = AuthService(session)
    result = await auth_service.refresh(refresh_token)

    if not result.success:
        response = api_response(
            status.HTTP_401_UNAUTHORIZED, "Access token could not be refreshed"
        )
        auth_service.token_service.clear_tokens(response)
        return response

    response = api_response(
        status.HTTP_200_OK,
        "Token refreshed successfully",
        data=AccessToken(access_token=result.access_token),
    )
    auth_service.token_service.set_tokens(response, result.access_token)
    return response
