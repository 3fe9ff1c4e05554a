import logging
from uuid import UUID

from src.api.utils.password import hash_password, verify_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import InvalidCredentialsError, NotFoundError

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Use case for changing a password with the current one.

    Business Rules:
    - Current password must verify; federated-only accounts have none
    - New password is hashed with bcrypt
    - By default every session of the user is revoked afterwards
    - Outstanding password reset grants are always removed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: UUID,
        current_password: str,
        new_password: str,
        revoke_all_sessions: bool = True,
    ) -> None:
        """
        Execute change password use case.

        Raises:
            NotFoundError: user does not exist
            InvalidCredentialsError: no password set or current password wrong
            InvalidPasswordError: new password longer than bcrypt accepts
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                raise NotFoundError("User not found")

            if not await verify_password(current_password, user.password_hash):
                raise InvalidCredentialsError("Current password is incorrect")

            password_hash = await hash_password(new_password)
            await self.uow.users.update(user.id, {"password_hash": password_hash})
            await self.uow.commit()

            revoked_count = 0
            if revoke_all_sessions:
                revoked_count = await self.uow.sessions.delete_all_for_user(str(user.id))

            await self.uow.password_reset_tokens.delete_all_for_user(str(user.id))

        logger.info(f"Password changed for user {user.id}, {revoked_count} sessions revoked")
