from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.oauth_account_repository import IOAuthAccountRepository
from src.domain.entities import OAuthAccount
from src.domain.errors import AlreadyExistsError


class OAuthAccountRepository(IOAuthAccountRepository):
    """OAuthAccount repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_provider(
        self, provider: str, provider_account_id: str
    ) -> Optional[OAuthAccount]:
        stmt = select(OAuthAccount).where(
            OAuthAccount.provider == provider,
            OAuthAccount.provider_account_id == provider_account_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def find_by_user_id_and_provider(
        self, user_id: UUID, provider: str
    ) -> Optional[OAuthAccount]:
        stmt = select(OAuthAccount).where(
            OAuthAccount.user_id == user_id, OAuthAccount.provider == provider
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def find_by_user_id(self, user_id: UUID) -> List[OAuthAccount]:
        stmt = (
            select(OAuthAccount)
            .where(OAuthAccount.user_id == user_id)
            .order_by(OAuthAccount.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, account: OAuthAccount) -> OAuthAccount:
        """Create a new OAuth link, mapping unique violations to AlreadyExistsError"""
        self.session.add(account)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise AlreadyExistsError(
                f"{account.provider} account is already linked"
            ) from exc
        await self.session.refresh(account)
        return account

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
        account = await self.session.get(OAuthAccount, account_id)
        if account is None:
            return None
        account.access_token = access_token
        account.refresh_token = refresh_token
        account.expires_at = expires_at
        account.id_token = id_token
        account.token_type = token_type
        account.scope = scope
        account.updated_at = datetime.utcnow()
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account

    async def delete(self, account_id: UUID) -> bool:
        stmt = delete(OAuthAccount).where(OAuthAccount.id == account_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_by_user_id_and_provider(self, user_id: UUID, provider: str) -> bool:
        stmt = delete(OAuthAccount).where(
            OAuthAccount.user_id == user_id, OAuthAccount.provider == provider
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def count_by_user_id(self, user_id: UUID) -> int:
        stmt = select(func.count()).select_from(OAuthAccount).where(
            OAuthAccount.user_id == user_id
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def has_provider(self, user_id: UUID, provider: str) -> bool:
        return await self.find_by_user_id_and_provider(user_id, provider) is not None
