"""Middleware for authentication and other cross-cutting concerns."""

from .auth import deserialize_user, get_current_user_id, get_token_blacklist
from .error_handlers import register_error_handlers

__all__ = [
    "deserialize_user",
    "get_current_user_id",
    "get_token_blacklist",
    "register_error_handlers",
]
