"""User API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.users import UserResponse
from ..core.services import AuthService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id
from .responses import api_response

router = APIRouter(prefix="/user", tags=["users"])


@router.get("/authenticated")
async def authenticated_user(
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Profile of the logged in user."""
    auth_service = AuthService(session)
    user = await auth_service.get_authenticated_user(current_user_id)
    return api_response(
        status.HTTP_200_OK,
        "User details fetched successfully",
        data=UserResponse.model_validate(user),
    )
