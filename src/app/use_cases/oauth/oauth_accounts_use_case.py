from typing import List, Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import OAuthAccount
from src.domain.errors import NotFoundError
from .dtos import OAuthTokenBundle


class OAuthAccountsUseCase:
    """Reads of a user's provider links and provider token refresh"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def get_user_oauth_accounts(self, user_id: UUID) -> List[OAuthAccount]:
        async with self.uow:
            return await self.uow.oauth_accounts.find_by_user_id(user_id)

    async def has_oauth_provider(self, user_id: UUID, provider: str) -> bool:
        async with self.uow:
            return await self.uow.oauth_accounts.has_provider(user_id, provider)

    async def get_oauth_account(self, user_id: UUID, provider: str) -> Optional[OAuthAccount]:
        async with self.uow:
            return await self.uow.oauth_accounts.find_by_user_id_and_provider(
                user_id, provider
            )

    async def refresh_oauth_tokens(
        self, user_id: UUID, provider: str, tokens: OAuthTokenBundle
    ) -> OAuthAccount:
        """
        Store a new provider token bundle.

        Raises:
            NotFoundError: the user has no link for this provider
        """
        async with self.uow:
            account = await self.uow.oauth_accounts.find_by_user_id_and_provider(
                user_id, provider
            )
            if account is None:
                raise NotFoundError(f"No {provider} account linked to your account")

            updated = await self.uow.oauth_accounts.update_tokens(
                account.id,
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
                expires_at=tokens.expires_at(),
                id_token=tokens.id_token,
                token_type=tokens.token_type,
                scope=tokens.scope,
            )
            await self.uow.commit()

        return updated
