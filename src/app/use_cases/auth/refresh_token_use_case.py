"""
Refresh Token Use Case

Exchanges a refresh token for a new access token, optionally rotating the
refresh token itself.
"""

import logging
from uuid import UUID

from config import ApplicationConfig
from src.api.utils.jwt import generate_jwt, generate_refresh_token
from src.app.services.owner_lookup import resolve_owner
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserRole
from src.domain.errors import ForbiddenError, UnauthorizedError
from .dtos import RefreshTokenResponse

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for refreshing JWT access tokens.

    Business Rules:
    - Unknown and expired refresh tokens are indistinguishable
    - A session whose user was deleted is removed, then rejected
    - A session whose user was suspended is removed, then rejected
    - rotate=True: old token is deleted before the new one is created, with
      no grace window; losing a concurrent rotation race is rejected
    - rotate=False: TTL is extended and the same token is returned
    - Store errors while loading the user leave the session untouched
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, refresh_token: str, rotate: bool = False) -> RefreshTokenResponse:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token to exchange
            rotate: Whether to replace the refresh token

        Returns:
            RefreshTokenResponse with the new access token and the refresh
            token to use next time

        Raises:
            UnauthorizedError: unknown/expired token or deleted owner
            ForbiddenError: owner is suspended
        """
        async with self.uow:
            user_id = await self.uow.sessions.get(refresh_token)
            if user_id is None:
                raise UnauthorizedError("Invalid or expired refresh token")

            lookup = await resolve_owner(self.uow.users, UUID(user_id))
            if lookup.is_dangling:
                await self.uow.sessions.delete(refresh_token)
                logger.warning(f"Removed orphaned session of deleted user {user_id}")
                raise UnauthorizedError("User not found")

            user = lookup.user
            if user.suspended:
                await self.uow.sessions.delete(refresh_token)
                logger.warning(f"Removed session of suspended user {user.id}")
                raise ForbiddenError("Your account has been suspended")

            if rotate:
                if not await self.uow.sessions.delete(refresh_token):
                    # Another request rotated or revoked it first
                    logger.warning(f"Refresh token reuse detected for user {user.id}")
                    raise UnauthorizedError("Invalid or expired refresh token")
                next_refresh_token = generate_refresh_token()
                await self.uow.sessions.create(
                    next_refresh_token, str(user.id), ApplicationConfig.SESSION_TTL_SECONDS
                )
            else:
                extended = await self.uow.sessions.refresh(
                    refresh_token, ApplicationConfig.SESSION_TTL_SECONDS
                )
                if not extended:
                    raise UnauthorizedError("Invalid or expired refresh token")
                next_refresh_token = refresh_token

            access_token = generate_jwt(user.id, UserRole(user.role).value)

        return RefreshTokenResponse(
            access_token=access_token,
            refresh_token=next_refresh_token,
        )
