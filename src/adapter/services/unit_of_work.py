from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.oauth_account_repository import OAuthAccountRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.repositories.session_store import ISessionStore
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(
        self,
        session: AsyncSession,
        sessions: ISessionStore,
        password_reset_tokens: ISessionStore,
    ):
        self.session = session
        self.sessions = sessions
        self.password_reset_tokens = password_reset_tokens

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.oauth_accounts = OAuthAccountRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        # Only a failed block is rolled back; loaded entities stay readable
        if exc_type is not None:
            await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
