from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import OAuthAccount


class IOAuthAccountRepository(ABC):
    """OAuthAccount repository interface - application layer"""

    @abstractmethod
    async def find_by_provider(
        self, provider: str, provider_account_id: str
    ) -> Optional[OAuthAccount]:
        """Find the link for a provider account"""
        pass

    @abstractmethod
    async def find_by_user_id_and_provider(
        self, user_id: UUID, provider: str
    ) -> Optional[OAuthAccount]:
        """Find a user's link for a specific provider"""
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: UUID) -> List[OAuthAccount]:
        """Get all links of a user, newest first"""
        pass

    @abstractmethod
    async def create(self, account: OAuthAccount) -> OAuthAccount:
        """Create a new link. Raises AlreadyExistsError on a unique violation."""
        pass

    @abstractmethod
    async def update_tokens(
        self,
        account_id: UUID,
        access_token: Optional[str],
        refresh_token: Optional[str],
        expires_at: Optional[datetime],
        id_token: Optional[str],
        token_type: Optional[str],
        scope: Optional[str],
    ) -> Optional[OAuthAccount]:
        """Replace the stored provider token bundle"""
        pass

    @abstractmethod
    async def delete(self, account_id: UUID) -> bool:
        """Delete a link by ID"""
        pass

    @abstractmethod
    async def delete_by_user_id_and_provider(self, user_id: UUID, provider: str) -> bool:
        """Delete a user's link for a provider"""
        pass

    @abstractmethod
    async def count_by_user_id(self, user_id: UUID) -> int:
        """Count links of a user"""
        pass

    @abstractmethod
    async def has_provider(self, user_id: UUID, provider: str) -> bool:
        """Check whether a user has linked a provider"""
        pass
