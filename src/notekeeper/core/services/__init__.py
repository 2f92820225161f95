"""
Service layer interfaces and implementations.
"""

from .interfaces import (
    IAuthService,
    INoteService,
    ISearchService,
    ISharingService,
    IUserService,
)

from .auth_service import AuthService, AuthTokens
from .note_service import NoteService
from .search_service import SearchService
from .sharing_service import MAX_SHARE_BATCH_SIZE, SharingService, ShareResult
from .token_service import ReissueResult, TokenService
from .user_service import UserService

__all__ = [
    # Interfaces
    "IAuthService",
    "INoteService",
    "ISearchService",
    "ISharingService",
    "IUserService",

    # Implementations
    "AuthService",
    "AuthTokens",
    "NoteService",
    "SearchService",
    "SharingService",
    "ShareResult",
    "MAX_SHARE_BATCH_SIZE",
    "TokenService",
    "ReissueResult",
    "UserService",
]
