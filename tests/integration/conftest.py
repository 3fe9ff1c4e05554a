import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.memory_session_store import InMemorySessionStore
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_stores():
    return InMemorySessionStore(), InMemorySessionStore()


@pytest_asyncio.fixture
async def uow_factory(engine, session_stores):
    """Builds units of work with their own database session and shared TTL stores"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    opened = []

    def _make_uow():
        session = Session()
        opened.append(session)
        sessions, password_reset_tokens = session_stores
        return SqlAlchemyUnitOfWork(session, sessions, password_reset_tokens)

    yield _make_uow
    for session in opened:
        await session.close()


@pytest_asyncio.fixture
async def uow(uow_factory):
    return uow_factory()
