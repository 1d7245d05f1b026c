"""
User Repository

Data access layer for User and Profile models.
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_

from saarthi.repositories.base import BaseRepository
from saarthi.models import User, Profile
from saarthi.schemas.auth import UserRegister
from saarthi.core.security import get_password_hash


class UserRepository(BaseRepository[User]):
    """Repository for User model."""

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    # =================
    # Lookups
    # =================
    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def exists_with(self, username: str, email: str) -> bool:
        """True if either the username or the email is already taken."""
        result = await self.db.execute(
            select(User.id).where(
                or_(User.username == username, User.email == email)
            ).limit(1)
        )
        return result.scalar_one_or_none() is not None

    # =================
    # Create user
    # =================
    async def create_user(self, user_data: UserRegister) -> User:
        """
        Create a user together with an empty profile.

        Both rows are committed in one transaction.
        """
        user = User(
            username=user_data.username,
            email=user_data.email,
            phone=user_data.phone,
            password_hash=get_password_hash(user_data.password),
            is_active=True,
        )
        self.db.add(user)
        await self.db.flush()

        self.db.add(Profile(user_id=user.id, gender="", bio=""))

        await self.db.commit()
        await self.db.refresh(user)

        return user

    # =================
    # Profile
    # =================
    async def get_profile(self, user_id: UUID) -> Optional[Profile]:
        result = await self.db.execute(
            select(Profile).where(Profile.user_id == user_id)
        )
        return result.scalar_one_or_none()
