from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.memory_session_store import InMemorySessionStore
from src.adapter.repositories.redis_session_store import RedisSessionStore
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.repositories.session_store import ISessionStore
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import VerifyTokenUseCase
from src.domain.entities import User
from src.domain.errors import ForbiddenError
from src.domain.permissions import has_permission

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()


@lru_cache(maxsize=None)
def get_session_store(namespace: str) -> ISessionStore:
    """One shared store per namespace for the lifetime of the process"""
    if ApplicationConfig.SESSION_BACKEND == "memory":
        return InMemorySessionStore()
    return RedisSessionStore.from_url(ApplicationConfig.REDIS_URL, namespace)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(
            session,
            sessions=get_session_store("session"),
            password_reset_tokens=get_session_store("password_reset"),
        )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> User:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        The token's user, re-read from the store

    Raises:
        TokenExpiredError / TokenInvalidError: 401 via the auth error handler
        NotFoundError: 404 if the user was deleted
        ForbiddenError: 403 if the user is suspended
    """
    return await VerifyTokenUseCase(uow).execute(credentials.credentials)


def require_permission(permission: str):
    """Dependency factory rejecting users whose role lacks a permission"""

    async def check_permission(user: User = Depends(get_current_user)) -> User:
        if not has_permission(user.role, permission):
            raise ForbiddenError(f"Missing permission {permission}")
        return user

    return check_permission
