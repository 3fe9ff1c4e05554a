from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import OAuthAccount
from src.domain.errors import AlreadyExistsError, NotFoundError
from .dtos import OAuthProfile, OAuthTokenBundle


class LinkOAuthAccountUseCase:
    """
    Use case for adding a provider to an authenticated user.

    Business Rules:
    - A user links each provider at most once
    - A provider account belongs to at most one user
    - The unique indexes settle concurrent link attempts
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: UUID,
        provider: str,
        profile: OAuthProfile,
        tokens: OAuthTokenBundle,
    ) -> OAuthAccount:
        """
        Raises:
            NotFoundError: user does not exist
            AlreadyExistsError: provider already linked to this user, or the
                provider account is linked to any user
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                raise NotFoundError("User not found")

            if await self.uow.oauth_accounts.find_by_user_id_and_provider(user_id, provider):
                raise AlreadyExistsError(f"{provider} account is already linked to your account")

            if await self.uow.oauth_accounts.find_by_provider(provider, profile.id):
                raise AlreadyExistsError(f"This {provider} account is already linked to another user")

            account = await self.uow.oauth_accounts.create(
                OAuthAccount(
                    user_id=user_id,
                    provider=provider,
                    provider_account_id=profile.id,
                    access_token=tokens.access_token,
                    refresh_token=tokens.refresh_token,
                    expires_at=tokens.expires_at(),
                    token_type=tokens.token_type,
                    scope=tokens.scope,
                    id_token=tokens.id_token,
                    session_state=None,
                )
            )
            await self.uow.commit()

        return account
