from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User
from src.domain.errors import AlreadyExistsError


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """
        Create a new user.

        The unique index on email settles concurrent registrations: exactly
        one insert wins, the others surface as AlreadyExistsError.
        """
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise AlreadyExistsError(f"User with email {user.email} already exists") from exc
        await self.session.refresh(user)
        return user

    async def update(self, user_id: UUID, changes: Dict[str, Any]) -> Optional[User]:
        """Apply a partial update to an existing user"""
        user = await self.get_by_id(user_id)
        if user is None:
            return None
        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = datetime.utcnow()
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise AlreadyExistsError("Email already registered") from exc
        await self.session.refresh(user)
        return user

    async def delete(self, user_id: UUID) -> bool:
        """Delete a user by ID"""
        user = await self.get_by_id(user_id)
        if user is None:
            return False
        await self.session.delete(user)
        await self.session.flush()
        return True
