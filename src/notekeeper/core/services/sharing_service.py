"""Sharing service implementation."""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.note import Note
from ..repositories.note_repository import NoteRepository
from ..repositories.user_repository import UserRepository
from .interfaces import ISharingService

logger = logging.getLogger(__name__)

MAX_SHARE_BATCH_SIZE = 10


@dataclass
class ShareResult:
    success: bool
    error: Optional[str] = None


class SharingService(ISharingService):
    """Grants read-only access to a note, owner only."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)
        self.user_repo = UserRepository(session)

    async def share_note_by_id(
        self, note_id: UUID, requester_id: UUID, emails: Sequence[str]
    ) -> ShareResult:
        note = await self.note_repo.get_by_id(note_id)
        if not note:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
        return await self.share_note(note, requester_id, emails)

    async def share_note(
        self, note: Note, requester_id: UUID, emails: Sequence[str]
    ) -> ShareResult:
        """
        Share `note` with the users owning `emails`.

        Either every email is added, in request order, or nothing changes and
        the result carries the first rule that failed.
        """
        if not emails:
            return ShareResult(success=False, error="No email addresses provided")

        if len(emails) > MAX_SHARE_BATCH_SIZE:
            return ShareResult(
                success=False,
                error=f"Cannot share with more than {MAX_SHARE_BATCH_SIZE} users at once",
            )

        unique_emails = list(dict.fromkeys(email.strip().lower() for email in emails))
        note_id = note.id

        try:
            if not note.has_write_access(requester_id):
                return ShareResult(success=False, error="Only the owner can share this note")

            owner = await self.user_repo.get_by_id(requester_id)
            if not owner:
                return ShareResult(success=False, error="Owner not found")

            users = {user.email: user for user in await self.user_repo.get_by_emails(unique_emails)}

            missing = [email for email in unique_emails if email not in users]
            if missing:
                return ShareResult(success=False, error=f"Users not found: {', '.join(missing)}")

            if owner.email in users:
                return ShareResult(success=False, error="Cannot share note with yourself")

            already_shared = [
                email for email in unique_emails if users[email].id in note.shared_with
            ]
            if already_shared:
                return ShareResult(
                    success=False,
                    error=f"Note already shared with: {', '.join(already_shared)}",
                )

            await self.note_repo.add_shares(note, [users[email].id for email in unique_emails])
        except (SQLAlchemyError, ValueError) as e:
            await self.session.rollback()
            logger.error(f"Sharing note {note_id} failed: {e}")
            return ShareResult(success=False, error=f"Failed to share note: {e}")

        logger.info(f"Note {note_id} shared with {len(unique_emails)} user(s)")
        return ShareResult(success=True)
