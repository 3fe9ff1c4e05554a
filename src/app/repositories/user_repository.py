from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (normalized) email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user. Raises AlreadyExistsError on duplicate email."""
        pass

    @abstractmethod
    async def update(self, user_id: UUID, changes: Dict[str, Any]) -> Optional[User]:
        """Apply a partial update. Returns None if the user does not exist."""
        pass

    @abstractmethod
    async def delete(self, user_id: UUID) -> bool:
        """Delete a user. Returns True if a row was removed."""
        pass
