"""Credential store use cases."""

import logging
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...errors import EmailAlreadyExistsError
from ...security.password import hash_password, verify_password
from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..schemas.auth import SignupRequest
from .interfaces import IUserService

logger = logging.getLogger(__name__)


class UserService(IUserService):
    """Users and their password hashes. Hashing happens here and nowhere else."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)

    async def create_user(self, request: SignupRequest) -> User:
        user_data = {
            "email": request.email,
            "first_name": request.first_name,
            "last_name": request.last_name,
            "password_hash": hash_password(request.password),
        }
        try:
            user = await self.user_repo.create_user(user_data)
        except IntegrityError:
            await self.session.rollback()
            raise EmailAlreadyExistsError()

        logger.info(f"User created: {user.id}")
        return user

    async def change_password(self, user_id: UUID, new_password: str) -> Optional[User]:
        user = await self.user_repo.update_user(
            user_id, {"password_hash": hash_password(new_password)}
        )
        if user:
            logger.info(f"Password changed for user {user_id}")
        return user

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self.user_repo.get_by_email(email)

    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        return await self.user_repo.get_by_id(user_id)

    async def get_users_by_emails(self, emails: Sequence[str]) -> List[User]:
        return await self.user_repo.get_by_emails(emails)

    def validate_password(self, user: User, candidate: str) -> bool:
        try:
            return verify_password(candidate, user.password_hash)
        except (ValueError, TypeError) as e:
            logger.error(f"Password check failed for user {user.id}: {type(e).__name__}")
            return False
