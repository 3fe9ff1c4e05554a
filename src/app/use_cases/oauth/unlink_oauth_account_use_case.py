from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import InvalidCredentialsError, NotFoundError


class UnlinkOAuthAccountUseCase:
    """
    Use case for removing a provider from a user.

    A user without a password cannot remove their last provider, otherwise
    they would have no way to sign in.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, provider: str) -> None:
        """
        Raises:
            NotFoundError: user or link does not exist
            InvalidCredentialsError: this is the user's only authentication method
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                raise NotFoundError("User not found")

            account = await self.uow.oauth_accounts.find_by_user_id_and_provider(
                user_id, provider
            )
            if account is None:
                raise NotFoundError(f"No {provider} account linked to your account")

            link_count = await self.uow.oauth_accounts.count_by_user_id(user_id)
            if link_count == 1 and user.password_hash is None:
                raise InvalidCredentialsError(
                    "Cannot unlink your only authentication method. Please set a password first."
                )

            await self.uow.oauth_accounts.delete_by_user_id_and_provider(user_id, provider)
            await self.uow.commit()
