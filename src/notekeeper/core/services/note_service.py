"""Note service implementation."""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.note import Note
from ..pagination import paginate
from ..repositories.note_repository import NoteRepository
from ..schemas.common import PaginationMeta
from ..schemas.notes import NoteCreate, NoteUpdate
from .interfaces import INoteService

logger = logging.getLogger(__name__)


class NoteService(INoteService):
    """Note CRUD guarded by ownership and sharing."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)

    async def count_notes(self, user_id: UUID, query: Optional[str] = None) -> int:
        return await self.note_repo.count_accessible(user_id, query)

    async def get_notes(
        self, user_id: UUID, start: int, limit: int, query: Optional[str] = None
    ) -> List[Note]:
        return await self.note_repo.list_accessible(user_id, start, limit, query)

    async def list_notes(
        self, user_id: UUID, page: int, per_page: int, query: Optional[str] = None
    ) -> Tuple[List[Note], PaginationMeta]:
        total = await self.count_notes(user_id, query)
        pagination = paginate(total, page, per_page)
        notes = await self.get_notes(user_id, pagination.start, pagination.limit, query)
        return notes, pagination.meta

    async def get_note_by_id(self, note_id: UUID) -> Optional[Note]:
        return await self.note_repo.get_by_id(note_id)

    async def _load(self, note_id: UUID) -> Note:
        note = await self.note_repo.get_by_id(note_id)
        if not note:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
        return note

    async def get_note(self, note_id: UUID, user_id: UUID) -> Note:
        note = await self._load(note_id)
        if not note.has_read_access(user_id):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have access to this note",
            )
        return note

    async def get_note_for_write(self, note_id: UUID, user_id: UUID, action: str) -> Note:
        note = await self._load(note_id)
        if not note.has_write_access(user_id):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"You do not have access to {action} this note",
            )
        return note

    async def create_note(self, user_id: UUID, request: NoteCreate) -> Note:
        note = await self.note_repo.create_note({
            "title": request.title,
            "content": request.content,
            "tags": request.tags,
            "owner_id": user_id,
        })
        logger.info(f"Note {note.id} created by user {user_id}")
        return note

    async def update_note(self, note_id: UUID, user_id: UUID, request: NoteUpdate) -> Note:
        note = await self.get_note_for_write(note_id, user_id, "update")
        update_data = request.model_dump(exclude_unset=True, exclude_none=True)
        note = await self.note_repo.update_note(note, update_data)
        logger.info(f"Note {note_id} updated by user {user_id}")
        return note

    async def delete_note(self, note_id: UUID, user_id: UUID) -> None:
        note = await self.get_note_for_write(note_id, user_id, "delete")
        await self.note_repo.delete_note(note)
        logger.info(f"Note {note_id} deleted by user {user_id}")
