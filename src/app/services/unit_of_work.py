from abc import ABC, abstractmethod

from src.app.repositories.oauth_account_repository import IOAuthAccountRepository
from src.app.repositories.session_store import ISessionStore
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """
    Abstract UnitOfWork - defines repository access and transaction management

    users and oauth_accounts are transactional; sessions and
    password_reset_tokens are TTL stores whose writes apply immediately.
    """

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    oauth_accounts: IOAuthAccountRepository
    sessions: ISessionStore
    password_reset_tokens: ISessionStore

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
