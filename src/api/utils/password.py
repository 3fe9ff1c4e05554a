import asyncio
from functools import lru_cache
from typing import Optional

import bcrypt

from config import ApplicationConfig
from src.domain.errors import InvalidPasswordError

# bcrypt only reads this many bytes of input and bcrypt>=5 rejects longer values
MAX_PASSWORD_BYTES = 72


def _hash(password: str, rounds: int) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode("utf-8")


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> str:
    return _hash("dummy_password", rounds)


def _check(password: str, password_hash: Optional[str]) -> bool:
    encoded = password.encode("utf-8")
    if password_hash is None or len(encoded) > MAX_PASSWORD_BYTES:
        # Hash a dummy password to maintain constant time
        bcrypt.checkpw(
            b"dummy_password",
            _dummy_hash(ApplicationConfig.BCRYPT_ROUNDS).encode("utf-8"),
        )
        return False
    return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))


async def hash_password(password: str) -> str:
    """
    Hash a password with bcrypt (cost factor BCRYPT_ROUNDS).

    bcrypt is CPU bound, so it runs in a worker thread instead of the event loop.

    Raises:
        InvalidPasswordError: password is longer than MAX_PASSWORD_BYTES in UTF-8
    """
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise InvalidPasswordError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"
        )
    return await asyncio.to_thread(_hash, password, ApplicationConfig.BCRYPT_ROUNDS)


async def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """
    Constant-time password verification.

    A missing hash (federated-only account) or an oversized password still
    costs one bcrypt check and returns False, so callers cannot be timed into
    revealing which case failed.
    """
    return await asyncio.to_thread(_check, password, password_hash)
