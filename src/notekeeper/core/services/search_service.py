"""Search service implementation."""

from typing import List, Optional, Tuple
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.note import Note
from ..schemas.common import PaginationMeta
from .interfaces import ISearchService
from .note_service import NoteService


class SearchService(ISearchService):
    """Full-text search restricted to notes the user can read."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_service = NoteService(session)

    async def search_notes(
        self, user_id: UUID, query: Optional[str], page: int, per_page: int
    ) -> Tuple[List[Note], PaginationMeta]:
        if not query or not query.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Search query is required"
            )
        return await self.note_service.list_notes(user_id, page, per_page, query.strip())
