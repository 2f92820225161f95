"""
Database models for the NoteKeeper application.

Models included:
    - User: account identified by email with an Argon2 password hash
    - Note: note content, tags and owner
    - NoteShare: ordered read-only grants of a note to other users
"""

from .base import BaseModel
from .note import Note
from .share import NoteShare
from .user import User

__all__ = [
    "BaseModel",
    "User",
    "Note",
    "NoteShare",
]
