import pytest

from config import ApplicationConfig


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Cost factor 4 keeps hashing fast in tests"""
    monkeypatch.setattr(ApplicationConfig, "BCRYPT_ROUNDS", 4)
