"""Note repository for database operations."""

from functools import reduce
from operator import add
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.note import Note
from ..models.share import NoteShare

# per-term relevance weights
TITLE_WEIGHT = 2
TAG_WEIGHT = 3
CONTENT_WEIGHT = 1


def split_terms(query: Optional[str]) -> List[str]:
    """Whitespace separated search terms, empty when there is no query."""
    return query.split() if query else []


class NoteRepository:
    """Repository for note database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_note(self, note_data: dict) -> Note:
        """Create new note."""
        note = Note(**note_data)
        self.session.add(note)
        await self.session.commit()
        return note

    async def get_by_id(self, note_id: UUID) -> Optional[Note]:
        """Get note by ID with its collaborators."""
        stmt = select(Note).where(Note.id == note_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_note(self, note: Note, update_data: dict) -> Note:
        """Apply field updates to a loaded note."""
        for key, value in update_data.items():
            setattr(note, key, value)

        await self.session.commit()
        return note

    async def delete_note(self, note: Note) -> None:
        """Delete a loaded note and its share records."""
        await self.session.delete(note)
        await self.session.commit()

    async def add_shares(self, note: Note, user_ids: Sequence[UUID]) -> Note:
        """Append collaborators in the given order and commit once."""
        position = len(note.shares)
        for offset, user_id in enumerate(user_ids):
            note.shares.append(NoteShare(user_id=user_id, position=position + offset))

        await self.session.commit()
        return note

    def _accessible_filter(self, user_id: UUID, terms: List[str]):
        shared_note_ids = select(NoteShare.note_id).where(NoteShare.user_id == user_id)
        conditions = [or_(Note.owner_id == user_id, Note.id.in_(shared_note_ids))]

        if terms:
            conditions.append(or_(*[
                or_(
                    Note.title.icontains(term, autoescape=True),
                    Note.content.icontains(term, autoescape=True),
                    Note.tags_text.icontains(term, autoescape=True),
                )
                for term in terms
            ]))

        return conditions

    def _relevance(self, terms: List[str]):
        scores = []
        for term in terms:
            scores.append(case((Note.title.icontains(term, autoescape=True), TITLE_WEIGHT), else_=0))
            scores.append(case((Note.tags_text.icontains(term, autoescape=True), TAG_WEIGHT), else_=0))
            scores.append(case((Note.content.icontains(term, autoescape=True), CONTENT_WEIGHT), else_=0))
        return reduce(add, scores)

    async def count_accessible(self, user_id: UUID, query: Optional[str] = None) -> int:
        """Count notes owned by or shared with the user, optionally matching `query`."""
        terms = split_terms(query)
        stmt = select(func.count(Note.id)).where(*self._accessible_filter(user_id, terms))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def list_accessible(
        self,
        user_id: UUID,
        start: int,
        limit: int,
        query: Optional[str] = None,
    ) -> List[Note]:
        """
        Notes owned by or shared with the user.

        Without a query the most recently updated come first; with one,
        the best scoring come first and ties fall back to recency.
        """
        terms = split_terms(query)
        stmt = select(Note).where(*self._accessible_filter(user_id, terms))

        if terms:
            stmt = stmt.order_by(self._relevance(terms).desc(), Note.updated_at.desc())
        else:
            stmt = stmt.order_by(Note.updated_at.desc())

        stmt = stmt.offset(start).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars())
