"""
Pydantic schemas for validating and documenting API requests and responses.
"""

from .auth import LoginRequest, SignupRequest
from .common import ApiResponse, CamelModel, PaginationMeta
from .notes import NoteCreate, NoteResponse, NoteUpdate, ShareNoteRequest
from .users import AccessToken, TokenPair, UserResponse

__all__ = [
    # Auth schemas
    "SignupRequest",
    "LoginRequest",
    "TokenPair",
    "AccessToken",
    "UserResponse",
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    "ShareNoteRequest",
    # Common schemas
    "CamelModel",
    "ApiResponse",
    "PaginationMeta",
]
