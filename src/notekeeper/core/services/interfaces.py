"""
Service interfaces for the NoteKeeper application.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from ..models.note import Note
from ..models.user import User
from ..schemas.auth import LoginRequest, SignupRequest
from ..schemas.common import PaginationMeta
from ..schemas.notes import NoteCreate, NoteUpdate


class IUserService(ABC):
    """Credential store use cases."""

    @abstractmethod
    async def create_user(self, request: SignupRequest) -> User:
        """Hash the password and persist a new user."""
        pass

    @abstractmethod
    async def change_password(self, user_id: UUID, new_password: str) -> Optional[User]:
        """Rehash and store a new password."""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        pass

    @abstractmethod
    async def get_users_by_emails(self, emails: Sequence[str]) -> List[User]:
        pass

    @abstractmethod
    def validate_password(self, user: User, candidate: str) -> bool:
        """Check a candidate password against the stored hash."""
        pass


class IAuthService(ABC):
    """Signup, login, logout and token refresh flows."""

    @abstractmethod
    async def signup(self, request: SignupRequest):
        pass

    @abstractmethod
    async def login(self, request: LoginRequest):
        pass

    @abstractmethod
    async def logout(self, access_token: Optional[str], refresh_token: Optional[str]) -> bool:
        pass

    @abstractmethod
    async def refresh(self, refresh_token: Optional[str]):
        pass


class INoteService(ABC):
    """Note service for CRUD operations."""

    @abstractmethod
    async def list_notes(
        self, user_id: UUID, page: int, per_page: int
    ) -> Tuple[List[Note], PaginationMeta]:
        """Notes the user owns or that are shared with them."""
        pass

    @abstractmethod
    async def get_note(self, note_id: UUID, user_id: UUID) -> Note:
        """Get a note the user can read."""
        pass

    @abstractmethod
    async def create_note(self, user_id: UUID, request: NoteCreate) -> Note:
        pass

    @abstractmethod
    async def update_note(self, note_id: UUID, user_id: UUID, request: NoteUpdate) -> Note:
        pass

    @abstractmethod
    async def delete_note(self, note_id: UUID, user_id: UUID) -> None:
        pass


class ISearchService(ABC):
    """Full-text search over accessible notes."""

    @abstractmethod
    async def search_notes(
        self, user_id: UUID, query: Optional[str], page: int, per_page: int
    ) -> Tuple[List[Note], PaginationMeta]:
        pass


class ISharingService(ABC):
    """Grant read access to other users."""

    @abstractmethod
    async def share_note(self, note: Note, requester_id: UUID, emails: Sequence[str]):
        pass
