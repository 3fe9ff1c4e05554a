import pytest
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import bcrypt

from src.adapter.repositories.memory_session_store import InMemorySessionStore
from src.domain.entities import User, UserRole


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork: mocked SQL repositories, real in-memory TTL stores"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock()
    uow.users.delete = AsyncMock()

    uow.oauth_accounts = MagicMock()
    uow.oauth_accounts.find_by_provider = AsyncMock(return_value=None)
    uow.oauth_accounts.find_by_user_id_and_provider = AsyncMock(return_value=None)
    uow.oauth_accounts.find_by_user_id = AsyncMock(return_value=[])
    uow.oauth_accounts.create = AsyncMock(side_effect=lambda account: account)
    uow.oauth_accounts.update_tokens = AsyncMock()
    uow.oauth_accounts.delete = AsyncMock(return_value=True)
    uow.oauth_accounts.delete_by_user_id_and_provider = AsyncMock(return_value=True)
    uow.oauth_accounts.count_by_user_id = AsyncMock(return_value=0)
    uow.oauth_accounts.has_provider = AsyncMock(return_value=False)

    uow.sessions = InMemorySessionStore()
    uow.password_reset_tokens = InMemorySessionStore()
    return uow


@pytest.fixture
def make_user():
    """Factory for User entities; pass password to get a bcrypt hash"""

    def _make_user(password=None, **overrides):
        password_hash = None
        if password is not None:
            password_hash = bcrypt.hashpw(password.encode(), bcrypt.gensalt(4)).decode()
        fields = {
            "id": uuid4(),
            "email": "u@test.com",
            "password_hash": password_hash,
            "name": "Test Student",
            "role": UserRole.student,
            "suspended": False,
        }
        fields.update(overrides)
        return User(**fields)

    return _make_user
