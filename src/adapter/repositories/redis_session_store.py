"""
Redis Session Store

Token entries live under ``{namespace}:token:{token}`` with a native Redis
TTL. Each user also has an index set ``{namespace}:user:{user_id}`` so that
listing, counting and bulk revocation never scan the keyspace. Index members
whose token key has expired are pruned lazily on read.
"""

from typing import List, Optional

import redis.asyncio as aioredis

from src.app.repositories.session_store import ISessionStore


class RedisSessionStore(ISessionStore):
    """Session store implementation using redis.asyncio"""

    def __init__(self, client: aioredis.Redis, namespace: str = "session"):
        self.client = client
        self.namespace = namespace

    @classmethod
    def from_url(
        cls, redis_url: str, namespace: str = "session", *, socket_timeout: float = 5.0
    ) -> "RedisSessionStore":
        client = aioredis.from_url(
            redis_url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        return cls(client, namespace)

    def _token_key(self, token: str) -> str:
        return f"{self.namespace}:token:{token}"

    def _user_key(self, user_id: str) -> str:
        return f"{self.namespace}:user:{user_id}"

    async def get(self, key: str) -> Optional[str]:
        return await self.client.get(self._token_key(key))

    async def create(self, key: str, user_id: str, ttl_seconds: int) -> None:
        user_key = self._user_key(user_id)
        pipe = self.client.pipeline(transaction=True)
        pipe.set(self._token_key(key), user_id, ex=ttl_seconds)
        pipe.sadd(user_key, key)
        # All entries in a namespace share one TTL, so the index never
        # needs to outlive the newest entry
        pipe.expire(user_key, ttl_seconds)
        await pipe.execute()

    async def refresh(self, key: str, ttl_seconds: int) -> bool:
        token_key = self._token_key(key)
        pipe = self.client.pipeline(transaction=True)
        pipe.expire(token_key, ttl_seconds)
        pipe.get(token_key)
        extended, user_id = await pipe.execute()
        if not extended or user_id is None:
            return False
        await self.client.expire(self._user_key(user_id), ttl_seconds)
        return True

    async def delete(self, key: str) -> bool:
        token_key = self._token_key(key)
        user_id = await self.client.get(token_key)
        pipe = self.client.pipeline(transaction=True)
        pipe.delete(token_key)
        if user_id is not None:
            pipe.srem(self._user_key(user_id), key)
        results = await pipe.execute()
        return results[0] > 0

    async def exists(self, key: str) -> bool:
        return await self.client.exists(self._token_key(key)) == 1

    async def delete_all_for_user(self, user_id: str) -> int:
        user_key = self._user_key(user_id)
        tokens = await self.client.smembers(user_key)
        if not tokens:
            return 0

        # Only the members read above leave the index; a token added by a
        # concurrent create stays listed and revocable
        pipe = self.client.pipeline(transaction=True)
        for token in tokens:
            pipe.delete(self._token_key(token))
        pipe.srem(user_key, *tokens)
        results = await pipe.execute()
        # Last result is the index removal; expired members count as 0
        return sum(results[:-1])

    async def get_all_for_user(self, user_id: str) -> List[str]:
        user_key = self._user_key(user_id)
        tokens = sorted(await self.client.smembers(user_key))
        if not tokens:
            return []

        pipe = self.client.pipeline(transaction=False)
        for token in tokens:
            pipe.exists(self._token_key(token))
        alive = await pipe.execute()

        live_tokens = [token for token, flag in zip(tokens, alive) if flag]
        stale_tokens = [token for token, flag in zip(tokens, alive) if not flag]
        if stale_tokens:
            await self.client.srem(user_key, *stale_tokens)
        return live_tokens

    async def count_for_user(self, user_id: str) -> int:
        return len(await self.get_all_for_user(user_id))

    async def close(self) -> None:
        await self.client.aclose()
