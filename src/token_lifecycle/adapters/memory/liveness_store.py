from __future__ import annotations

import time
from typing import Callable, Dict, Iterable, Tuple

from ...domain.entities import LivenessRecord
from ...domain.exceptions import RecordNotFoundError
from ...domain.ports import LivenessStore


class InMemoryLivenessStore(LivenessStore):
    """
    Process-local liveness store.

    Suitable for tests and single-process deployments. Entries expire
    lazily: a lapsed record is dropped the next time it is read.
    Every method runs without awaiting, so each call is atomic with
    respect to other coroutines on the same event loop.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._records: Dict[str, Tuple[str, float]] = {}

    async def put(self, token_id: str, user_id: str, ttl_seconds: int) -> None:
        self._records[token_id] = (user_id, self._clock() + max(1, ttl_seconds))

    async def put_many(self, records: Iterable[LivenessRecord]) -> None:
        now = self._clock()
        staged = {
            r.token_id: (r.user_id, now + max(1, r.ttl_seconds))
            for r in records
        }
        self._records.update(staged)

    async def get(self, token_id: str) -> str:
        entry = self._records.get(token_id)
        if entry is None:
            raise RecordNotFoundError(token_id)

        user_id, deadline = entry
        if self._clock() >= deadline:
            self._records.pop(token_id, None)
            raise RecordNotFoundError(token_id)
        return user_id

    async def delete(self, token_id: str) -> None:
        self._records.pop(token_id, None)

    async def delete_many(self, token_ids: Iterable[str]) -> None:
        for token_id in token_ids:
            self._records.pop(token_id, None)

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self._records.clear()

    # ------------------------------------------------------------------ #
    # Inspection helpers (tests, admin tooling)
    # ------------------------------------------------------------------ #

    def __len__(self) -> int:
        now = self._clock()
        return sum(1 for _, deadline in self._records.values() if deadline > now)

    def __contains__(self, token_id: object) -> bool:
        entry = self._records.get(token_id)  # type: ignore[arg-type]
        return entry is not None and entry[1] > self._clock()
