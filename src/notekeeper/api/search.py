"""Search API endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.notes import NoteResponse
from ..core.services import SearchService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id
from .notes import PageParams, page_params
from .responses import api_response

router = APIRouter(prefix="/search", tags=["search"])


@router.get("")
async def search_notes(
    q: Optional[str] = Query(None, description="Search query"),
    params: PageParams = Depends(page_params),
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Search notes the user can read by title, content and tags."""
    search_service = SearchService(session)
    notes, meta = await search_service.search_notes(
        current_user_id, q, params.page, params.per_page
    )
    return api_response(
        status.HTTP_200_OK,
        "Notes fetched successfully",
        data=[NoteResponse.model_validate(note) for note in notes],
        meta=meta,
    )
