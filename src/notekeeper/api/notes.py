"""Notes API endpoints."""

from dataclasses import dataclass
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..core.schemas.notes import NoteCreate, NoteResponse, NoteUpdate, ShareNoteRequest
from ..core.services import NoteService, SharingService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id
from .responses import api_response

router = APIRouter(prefix="/notes", tags=["notes"])

settings = get_settings()


@dataclass
class PageParams:
    page: int
    per_page: int


def page_params(
    page: int = Query(1, ge=1),
    per_page: int = Query(
        settings.default_page_size, ge=1, le=settings.max_page_size, alias="perPage"
    ),
) -> PageParams:
    return PageParams(page=page, per_page=per_page)


@router.get("")
async def list_notes(
    params: PageParams = Depends(page_params),
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """List notes the user owns or that are shared with them."""
    note_service = NoteService(session)
    notes, meta = await note_service.list_notes(current_user_id, params.page, params.per_page)
    return api_response(
        status.HTTP_200_OK,
        "Notes fetched successfully",
        data=[NoteResponse.model_validate(note) for note in notes],
        meta=meta,
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_note(
    request: NoteCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Create a new note."""
    note_service = NoteService(session)
    note = await note_service.create_note(current_user_id, request)
    return api_response(
        status.HTTP_201_CREATED, "Note created successfully", data=NoteResponse.model_validate(note)
    )


@router.get("/{note_id}")
async def get_note(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Get a specific note."""
    note_service = NoteService(session)
    note = await note_service.get_note(note_id, current_user_id)
    return api_response(
        status.HTTP_200_OK, "Note fetched successfully", data=NoteResponse.model_validate(note)
    )


@router.patch("/{note_id}")
async def update_note(
    note_id: UUID,
    request: NoteUpdate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Update a note. Owner only."""
    note_service = NoteService(session)
    note = await note_service.update_note(note_id, current_user_id, request)
    return api_response(
        status.HTTP_200_OK, "Note updated successfully", data=NoteResponse.model_validate(note)
    )


@router.delete("/{note_id}")
async def delete_note(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a note. Owner only."""
    note_service = NoteService(session)
    await note_service.delete_note(note_id, current_user_id)
    return api_response(status.HTTP_200_OK, "Note deleted successfully")


@router.post("/{note_id}/share")
async def share_note(
    note_id: UUID,
    request: ShareNoteRequest,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Give other users read access to a note. Owner only."""
    sharing_service = SharingService(session)
    result = await sharing_service.share_note_by_id(note_id, current_user_id, request.emails)
    if not result.success:
        return api_response(status.HTTP_400_BAD_REQUEST, result.error or "Unable to share note")
    return api_response(status.HTTP_200_OK, "Note shared successfully")
