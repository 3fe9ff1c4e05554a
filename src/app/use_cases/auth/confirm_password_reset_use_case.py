"""
Confirm Password Reset Use Case

Consumes a password reset grant and sets a new password.
"""

import hashlib
import logging
from uuid import UUID

from src.api.utils.password import hash_password
from src.app.services.owner_lookup import resolve_owner
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import NotFoundError, UnauthorizedError

logger = logging.getLogger(__name__)


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - Token is looked up by its SHA-256 hash
    - Grant is consumed (deleted) before the password update is committed,
      so it can be used at most once even under concurrent requests
    - A grant whose user was deleted is removed, then rejected
    - All user sessions are revoked after the new password is stored
    - Any other outstanding reset grant of the user is removed as well
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str, new_password: str) -> None:
        """
        Execute confirm password reset use case.

        Args:
            token: Password reset token (plain text)
            new_password: New password to set

        Raises:
            UnauthorizedError: token unknown, expired or already consumed
            NotFoundError: the grant's user no longer exists
            InvalidPasswordError: new password longer than bcrypt accepts; the
                grant is left unused
        """
        token_hash = hashlib.sha256(token.encode()).hexdigest()

        async with self.uow:
            user_id = await self.uow.password_reset_tokens.get(token_hash)
            if user_id is None:
                raise UnauthorizedError("Invalid or expired reset token")

            lookup = await resolve_owner(self.uow.users, UUID(user_id))
            if lookup.is_dangling:
                await self.uow.password_reset_tokens.delete(token_hash)
                logger.warning(f"Removed orphaned reset grant of deleted user {user_id}")
                raise NotFoundError("User not found")
            user = lookup.user

            password_hash = await hash_password(new_password)

            if not await self.uow.password_reset_tokens.delete(token_hash):
                raise UnauthorizedError("Invalid or expired reset token")

            await self.uow.users.update(user.id, {"password_hash": password_hash})
            await self.uow.commit()

            revoked_count = await self.uow.sessions.delete_all_for_user(str(user.id))
            # Other grants issued before this reset are void too
            await self.uow.password_reset_tokens.delete_all_for_user(str(user.id))

        logger.info(f"Password reset for user {user.id}, {revoked_count} sessions revoked")
