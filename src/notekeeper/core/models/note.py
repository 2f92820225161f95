# Note model for user content
import uuid
from typing import TYPE_CHECKING, Iterable, List, Optional

from sqlalchemy import ForeignKey, Index, Text, Uuid, event
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from sqlalchemy.orm import attributes as orm_attributes

from .base import BaseModel
from .types import StringListType

if TYPE_CHECKING:
    from .share import NoteShare


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """Trim and lowercase tags, dropping duplicates but keeping first-seen order."""
    normalized: List[str] = []
    for tag in tags or []:
        value = tag.strip().lower()
        if value not in normalized:
            normalized.append(value)
    return normalized


class Note(BaseModel):
    """Note owned by one user and optionally shared read-only with others."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[List[str]] = mapped_column(StringListType, nullable=False, default=list)
    # tag values one per line, the column searched for tag matches
    tags_text: Mapped[str] = mapped_column(Text, nullable=False, default="")

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    shares: Mapped[List["NoteShare"]] = relationship(
        "NoteShare",
        back_populates="note",
        cascade="all, delete-orphan",
        order_by="NoteShare.position",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_notes_owner_id", "owner_id"),
        Index("idx_notes_updated_at", "updated_at"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', owner_id={self.owner_id})>"

    @validates("title")
    def _trim_title(self, key: str, value: str) -> str:
        return value.strip()

    @validates("tags")
    def _normalize_tags(self, key: str, value: Optional[List[str]]) -> List[str]:
        tags = normalize_tags(value)
        self.tags_text = "\n".join(tags)
        return tags

    @validates("owner_id")
    def _freeze_owner(self, key: str, value: uuid.UUID) -> uuid.UUID:
        if self.owner_id is not None and value != self.owner_id:
            raise ValueError("Note owner cannot be changed")
        return value

    @validates("shares")
    def _check_share(self, key: str, share: "NoteShare") -> "NoteShare":
        if share.user_id == self.owner_id:
            raise ValueError("A note cannot be shared with its owner")
        if share.user_id in self.shared_with:
            raise ValueError(f"Note is already shared with user {share.user_id}")
        return share

    @property
    def shared_with(self) -> List[uuid.UUID]:
        """Collaborator ids in the order they were granted access."""
        return [share.user_id for share in self.shares]

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.owner_id == user_id

    def has_read_access(self, user_id: uuid.UUID) -> bool:
        """Owner and collaborators can read."""
        return self.is_owned_by(user_id) or user_id in self.shared_with

    def has_write_access(self, user_id: uuid.UUID) -> bool:
        """Only the owner can modify, delete or share."""
        return self.is_owned_by(user_id)


# Start new notes with an empty, already-loaded share list so reading it never triggers IO
@event.listens_for(Note, "init", propagate=True)
def _init_note_collections(target, args, kwargs):
    if "shares" not in kwargs:
        orm_attributes.set_committed_value(target, "shares", [])
