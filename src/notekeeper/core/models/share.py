# Note sharing between users
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel

if TYPE_CHECKING:
    from .note import Note


class NoteShare(BaseModel):
    """Read-only access to a note granted to another user."""

    __tablename__ = "note_shares"

    note_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("notes.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    # order in which collaborators were added
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    note: Mapped["Note"] = relationship("Note", back_populates="shares")

    __table_args__ = (
        UniqueConstraint("note_id", "user_id", name="uq_note_shares_note_user"),
        Index("idx_note_shares_note_id", "note_id"),
        Index("idx_note_shares_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<NoteShare(note_id={self.note_id}, user_id={self.user_id})>"
