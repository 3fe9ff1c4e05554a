"""
Revoke Sessions Use Case

Handles session listing and forced revocation.
"""

import logging
from typing import List
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class RevokeSessionsUseCase:
    """
    Use case for inspecting and revoking user sessions.

    Business Rules:
    - Revocation deletes every live refresh token of the user at once
    - Access tokens already issued stay valid until they expire
    - Authorization (self vs admin) is enforced by the caller
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def revoke_all_sessions(self, user_id: UUID) -> int:
        """
        Revoke all sessions for a user.

        Returns:
            Number of sessions removed
        """
        async with self.uow:
            count = await self.uow.sessions.delete_all_for_user(str(user_id))

        logger.info(f"Revoked {count} sessions for user {user_id}")
        return count

    async def get_active_sessions(self, user_id: UUID) -> List[str]:
        """Refresh tokens of every live session of the user"""
        async with self.uow:
            return await self.uow.sessions.get_all_for_user(str(user_id))

    async def get_session_count(self, user_id: UUID) -> int:
        async with self.uow:
            return await self.uow.sessions.count_for_user(str(user_id))
