"""
In-Memory Session Store

Process-local TTL store used for tests and single-process development.
Expiry is checked against a monotonic clock on every access.
"""

import time
from typing import Callable, Dict, List, Optional, Tuple

from src.app.repositories.session_store import ISessionStore


class InMemorySessionStore(ISessionStore):
    """Session store implementation backed by a dict"""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, Tuple[str, float]] = {}

    def _live(self, key: str) -> Optional[Tuple[str, float]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry[1] <= self._clock():
            del self._entries[key]
            return None
        return entry

    async def get(self, key: str) -> Optional[str]:
        entry = self._live(key)
        return entry[0] if entry else None

    async def create(self, key: str, user_id: str, ttl_seconds: int) -> None:
        self._entries[key] = (user_id, self._clock() + ttl_seconds)

    async def refresh(self, key: str, ttl_seconds: int) -> bool:
        entry = self._live(key)
        if entry is None:
            return False
        self._entries[key] = (entry[0], self._clock() + ttl_seconds)
        return True

    async def delete(self, key: str) -> bool:
        if self._live(key) is None:
            return False
        del self._entries[key]
        return True

    async def exists(self, key: str) -> bool:
        return self._live(key) is not None

    async def delete_all_for_user(self, user_id: str) -> int:
        tokens = await self.get_all_for_user(user_id)
        for token in tokens:
            del self._entries[token]
        return len(tokens)

    async def get_all_for_user(self, user_id: str) -> List[str]:
        tokens = []
        for key in list(self._entries):
            entry = self._live(key)
            if entry is not None and entry[0] == user_id:
                tokens.append(key)
        return tokens

    async def count_for_user(self, user_id: str) -> int:
        return len(await self.get_all_for_user(user_id))
