from abc import ABC, abstractmethod
from typing import List, Optional


class ISessionStore(ABC):
    """
    Session store interface - application layer

    TTL-bearing mapping of opaque token -> user id. Every method is a single
    atomic store operation; expiry is enforced by the store itself.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Resolve a token to its user id, or None if unknown/expired"""
        pass

    @abstractmethod
    async def create(self, key: str, user_id: str, ttl_seconds: int) -> None:
        """Store a token for a user with an absolute TTL"""
        pass

    @abstractmethod
    async def refresh(self, key: str, ttl_seconds: int) -> bool:
        """Reset the TTL of a live token. Returns False if it no longer exists."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a token. Returns True if this call removed it."""
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check whether a token is live"""
        pass

    @abstractmethod
    async def delete_all_for_user(self, user_id: str) -> int:
        """Delete every live token of a user. Returns how many were removed."""
        pass

    @abstractmethod
    async def get_all_for_user(self, user_id: str) -> List[str]:
        """List every live token of a user"""
        pass

    @abstractmethod
    async def count_for_user(self, user_id: str) -> int:
        """Count live tokens of a user"""
        pass
