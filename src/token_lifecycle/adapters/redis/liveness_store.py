from __future__ import annotations

from typing import Any, Iterable, Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from ...domain.entities import LivenessRecord
from ...domain.exceptions import RecordNotFoundError, StoreUnavailableError
from ...domain.ports import LivenessStore
from ...logging import get_logger

logger = get_logger(__name__)

DEFAULT_KEY_PREFIX = "token:"


class RedisLivenessStore(LivenessStore):
    """
    Liveness store backed by Redis string keys with native expiry.

    Each record is `SET <prefix><token_id> <user_id> EX <ttl>`; Redis
    owns the TTL countdown, so a lapsed record simply disappears.
    """

    def __init__(
        self,
        client: Any,
        *,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> None:
        self.client = client
        self._prefix = key_prefix

    @classmethod
    def from_url(
        cls,
        redis_url: str,
        *,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        socket_timeout: float = 5.0,
    ) -> "RedisLivenessStore":
        client = aioredis.from_url(
            redis_url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        return cls(client, key_prefix=key_prefix)

    def _key(self, token_id: str) -> str:
        return f"{self._prefix}{token_id}"

    @staticmethod
    def _ttl(ttl_seconds: int) -> int:
        # Redis rejects non-positive expiry values.
        return max(1, int(ttl_seconds))

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    async def put(self, token_id: str, user_id: str, ttl_seconds: int) -> None:
        try:
            await self.client.set(self._key(token_id), user_id, ex=self._ttl(ttl_seconds))
        except RedisError as exc:
            logger.error("liveness_store_error", operation="put", error=str(exc))
            raise StoreUnavailableError(f"Could not write token record: {exc}") from exc

    async def put_many(self, records: Iterable[LivenessRecord]) -> None:
        records = list(records)
        if not records:
            return
        try:
            async with self.client.pipeline(transaction=True) as pipe:
                for record in records:
                    pipe.set(
                        self._key(record.token_id),
                        record.user_id,
                        ex=self._ttl(record.ttl_seconds),
                    )
                await pipe.execute()
        except RedisError as exc:
            logger.error("liveness_store_error", operation="put_many", error=str(exc))
            raise StoreUnavailableError(f"Could not write token records: {exc}") from exc

    async def get(self, token_id: str) -> str:
        try:
            user_id: Optional[str] = await self.client.get(self._key(token_id))
        except RedisError as exc:
            logger.error("liveness_store_error", operation="get", error=str(exc))
            raise StoreUnavailableError(f"Could not read token record: {exc}") from exc

        if user_id is None:
            raise RecordNotFoundError(token_id)
        if isinstance(user_id, bytes):
            user_id = user_id.decode("utf-8")
        return user_id

    async def delete(self, token_id: str) -> None:
        await self.delete_many([token_id])

    async def delete_many(self, token_ids: Iterable[str]) -> None:
        keys = [self._key(t) for t in token_ids]
        if not keys:
            return
        try:
            await self.client.delete(*keys)
        except RedisError as exc:
            logger.error("liveness_store_error", operation="delete", error=str(exc))
            raise StoreUnavailableError(f"Could not delete token records: {exc}") from exc

    async def close(self) -> None:
        await self.client.aclose()

    async def ping(self) -> bool:
        try:
            return bool(await self.client.ping())
        except RedisError as exc:
            logger.error("liveness_store_error", operation="ping", error=str(exc))
            raise StoreUnavailableError(f"Redis is unreachable: {exc}") from exc
