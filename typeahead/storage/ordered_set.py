"""
Sorted-set stores.

The completion engine only needs a handful of sorted-set commands. They
are described by ``OrderedSetStore`` and provided by two backends:

- ``RedisOrderedSetStore`` issues ZADD/ZREM/ZRANK/ZRANGE/ZREMRANGEBYRANK/
  ZCARD/DEL on a ``redis.asyncio.Redis`` client.
- ``MemoryOrderedSetStore`` keeps sorted Python lists and mirrors the Redis
  rank semantics (inclusive bounds, negative indexes count from the end).
  Handy for tests and one-off runs without a server.

Members are ordered by score, then by their UTF-8 bytes. The engine always
scores 0, so the order is purely lexicographic. Comparing Python ``str``
by code point gives the same order as comparing UTF-8 bytes.
"""

from __future__ import annotations

import bisect
import logging
from typing import Optional, Protocol, runtime_checkable

from redis.asyncio import Redis
from redis.exceptions import RedisError

from typeahead.exceptions import StoreError

logger = logging.getLogger(__name__)


@runtime_checkable
class OrderedSetStore(Protocol):
    """Async sorted-set operations the completion engine relies on."""

    async def insert(self, key: str, score: float, member: str) -> int:
        """Add *member*. Returns 1 if it is new, 0 if it was already present."""
        ...

    async def remove(self, key: str, member: str) -> int:
        ...

    async def rank(self, key: str, member: str) -> Optional[int]:
        ...

    async def range_by_rank(self, key: str, start: int, end: int) -> list[str]:
        """Members with rank in ``[start, end]``, ascending, clipped to the set."""
        ...

    async def remove_range_by_rank(self, key: str, start: int, end: int) -> int:
        ...

    async def cardinality(self, key: str) -> int:
        ...

    async def delete_key(self, key: str) -> int:
        ...


def _decode(member) -> str:
    if isinstance(member, bytes):
        return member.decode("utf-8")
    return member


class RedisOrderedSetStore:
    """``OrderedSetStore`` on top of a ``redis.asyncio`` client."""

    def __init__(self, client: Redis) -> None:
        self._client = client

    @property
    def client(self) -> Redis:
        return self._client

    async def insert(self, key: str, score: float, member: str) -> int:
        try:
            return int(await self._client.zadd(key, {member: score}))
        except RedisError as e:
            raise StoreError(f"ZADD {key} failed: {e}") from e

    async def remove(self, key: str, member: str) -> int:
        try:
            return int(await self._client.zrem(key, member))
        except RedisError as e:
            raise StoreError(f"ZREM {key} failed: {e}") from e

    async def rank(self, key: str, member: str) -> Optional[int]:
        try:
            return await self._client.zrank(key, member)
        except RedisError as e:
            raise StoreError(f"ZRANK {key} failed: {e}") from e

    async def range_by_rank(self, key: str, start: int, end: int) -> list[str]:
        try:
            members = await self._client.zrange(key, start, end)
        except RedisError as e:
            raise StoreError(f"ZRANGE {key} failed: {e}") from e
        return [_decode(m) for m in members]

    async def remove_range_by_rank(self, key: str, start: int, end: int) -> int:
        try:
            return int(await self._client.zremrangebyrank(key, start, end))
        except RedisError as e:
            raise StoreError(f"ZREMRANGEBYRANK {key} failed: {e}") from e

    async def cardinality(self, key: str) -> int:
        try:
            return int(await self._client.zcard(key))
        except RedisError as e:
            raise StoreError(f"ZCARD {key} failed: {e}") from e

    async def delete_key(self, key: str) -> int:
        try:
            return int(await self._client.delete(key))
        except RedisError as e:
            raise StoreError(f"DEL {key} failed: {e}") from e

    async def close(self) -> None:
        await self._client.aclose()


class MemoryOrderedSetStore:
    """
    In-process ``OrderedSetStore``.

    Each key maps to a list of ``(score, member)`` pairs kept sorted with
    ``bisect``; a side dict gives the score of each member. Empty sets are
    dropped, as Redis drops empty keys.
    """

    def __init__(self) -> None:
        self._entries: dict[str, list[tuple[float, str]]] = {}
        self._scores: dict[str, dict[str, float]] = {}

    @staticmethod
    def _bounds(start: int, end: int, size: int) -> Optional[tuple[int, int]]:
        if start < 0:
            start += size
        if end < 0:
            end += size
        start = max(start, 0)
        end = min(end, size - 1)
        if start > end:
            return None
        return start, end

    def _drop_if_empty(self, key: str) -> None:
        if not self._entries.get(key):
            self._entries.pop(key, None)
            self._scores.pop(key, None)

    async def insert(self, key: str, score: float, member: str) -> int:
        entries = self._entries.setdefault(key, [])
        scores = self._scores.setdefault(key, {})
        added = 1
        if member in scores:
            if scores[member] == score:
                return 0
            entries.remove((scores[member], member))
            added = 0
        scores[member] = score
        bisect.insort(entries, (score, member))
        return added

    async def remove(self, key: str, member: str) -> int:
        scores = self._scores.get(key)
        if not scores or member not in scores:
            return 0
        score = scores.pop(member)
        self._entries[key].remove((score, member))
        self._drop_if_empty(key)
        return 1

    async def rank(self, key: str, member: str) -> Optional[int]:
        scores = self._scores.get(key)
        if not scores or member not in scores:
            return None
        return bisect.bisect_left(self._entries[key], (scores[member], member))

    async def range_by_rank(self, key: str, start: int, end: int) -> list[str]:
        entries = self._entries.get(key, [])
        bounds = self._bounds(start, end, len(entries))
        if bounds is None:
            return []
        return [member for _, member in entries[bounds[0]:bounds[1] + 1]]

    async def remove_range_by_rank(self, key: str, start: int, end: int) -> int:
        entries = self._entries.get(key, [])
        bounds = self._bounds(start, end, len(entries))
        if bounds is None:
            return 0
        doomed = entries[bounds[0]:bounds[1] + 1]
        del entries[bounds[0]:bounds[1] + 1]
        scores = self._scores[key]
        for _, member in doomed:
            del scores[member]
        self._drop_if_empty(key)
        return len(doomed)

    async def cardinality(self, key: str) -> int:
        return len(self._entries.get(key, []))

    async def delete_key(self, key: str) -> int:
        existed = key in self._entries
        self._entries.pop(key, None)
        self._scores.pop(key, None)
        return int(existed)

    async def close(self) -> None:
        logger.debug("Memory store closed (%d keys)", len(self._entries))
