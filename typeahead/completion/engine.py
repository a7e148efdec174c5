"""
Prefix completion over a single Redis sorted set.

The sorted set emulates a trie (see ``codec``): every word owns a leaf
member ``word*`` and shares the bare members for its strict prefixes. All
scores are 0, so ranks follow lexicographic order and every prefix owns a
contiguous run of ranks. Reads and the ancestor cleanup in ``remove`` walk
that order in windows of ``window_size`` members per round trip.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field
from typing import AsyncIterator, Iterable, Optional

from typeahead.completion.codec import EntryCodec
from typeahead.completion.normalizer import normalize_word
from typeahead.config.settings import CompletionSettings, Settings, StoreSettings, get_settings
from typeahead.exceptions import EmptyInputError, ImproperlyConfigured, PartialAddError
from typeahead.storage.connection import build_store
from typeahead.storage.ordered_set import OrderedSetStore

logger = logging.getLogger(__name__)

SCORE = 0


@dataclass
class Completion:
    """Result of a prefix query."""

    prefix: str
    words: list[str] = field(default_factory=list)


@dataclass
class Statistics:
    """Space usage of a corpus."""

    leaf_count: int = 0
    leaf_char_total: int = 0
    prefix_char_total: int = 0
    total: int = 0


def _shared_length(a: str, b: str) -> int:
    n = 0
    for x, y in zip(a, b):
        if x != y:
            break
        n += 1
    return n


def _raise_first(results: Iterable[object]) -> None:
    for result in results:
        if isinstance(result, BaseException):
            raise result


class CompletionEngine:
    """Add, remove and complete words stored in one sorted set."""

    def __init__(
        self,
        store: Optional[OrderedSetStore] = None,
        store_settings: Optional[StoreSettings] = None,
        completion_settings: Optional[CompletionSettings] = None,
    ) -> None:
        if store_settings is None or completion_settings is None:
            settings: Settings = get_settings()
            store_settings = store_settings or settings.store
            completion_settings = completion_settings or settings.completion
        self._store_settings = store_settings
        self._cfg = completion_settings
        if self._cfg.window_size < 1:
            raise ImproperlyConfigured(
                f"window_size must be positive, got {self._cfg.window_size}"
            )
        self._codec = EntryCodec(self._cfg.sentinel)
        self._store = store if store is not None else build_store(self._store_settings)
        self._key = self._store_settings.key
        self._window = self._cfg.window_size
        self._lock = asyncio.Lock() if self._cfg.serialize_mutations else None

    @property
    def key(self) -> str:
        """Name of the sorted set holding this corpus."""
        return self._key

    @property
    def store(self) -> OrderedSetStore:
        return self._store

    @property
    def codec(self) -> EntryCodec:
        return self._codec

    def _mutation_guard(self):
        if self._lock is None:
            return contextlib.nullcontext()
        return self._lock

    def _normalize(self, value: object) -> str:
        return normalize_word(value, self._codec.sentinel)

    # ---- writes ----

    async def add(self, word: object) -> Optional[str]:
        """
        Learn *word*.

        Returns the normalized word if it was new, ``None`` if it was
        already known. Raises ``EmptyInputError`` for blank input.
        """
        word = self._normalize(word)
        async with self._mutation_guard():
            if not await self._store.insert(self._key, SCORE, self._codec.leaf(word)):
                logger.debug("Already known: %r", word)
                return None

            # Idempotent inserts, any completion order
            results = await asyncio.gather(
                *(self._store.insert(self._key, SCORE, p) for p in self._codec.prefixes(word)),
                return_exceptions=True,
            )
        _raise_first(results)
        logger.debug("Added %r (%d prefixes)", word, len(results))
        return word

    async def add_many(self, words: Iterable[object]) -> list[str]:
        """
        Add every element of *words* concurrently.

        Returns the newly added words in input order. If any element fails,
        waits for the rest to settle and raises ``PartialAddError``;
        insertions that succeeded are kept.
        """
        results = await asyncio.gather(
            *(self.add(w) for w in words),
            return_exceptions=True,
        )
        added = [r for r in results if isinstance(r, str)]
        errors = [r for r in results if isinstance(r, BaseException)]
        if errors:
            logger.warning("add_many: %d failed, %d added", len(errors), len(added))
            raise PartialAddError(added, errors) from errors[0]
        logger.info("add_many: %d of %d words were new", len(added), len(results))
        return added

    async def remove(self, word: object) -> bool:
        """
        Forget *word*. Returns True if it was present.

        Blank input is a no-op. Prefix members no other word needs are
        deleted along with the leaf.
        """
        try:
            word = self._normalize(word)
        except EmptyInputError:
            return False

        async with self._mutation_guard():
            # A bare member equal to the word means a longer word extends
            # it, so every ancestor is still in use.
            if await self._store.rank(self._key, word) is None:
                await self._prune_ancestors(word)
            removed = await self._store.remove(self._key, self._codec.leaf(word)) == 1

        logger.debug("Removed %r: %s", word, removed)
        return removed

    async def _prune_ancestors(self, word: str) -> int:
        """
        Delete the prefix members only *word* was using.

        Its strict prefixes sit just below its leaf, shortest first. Walk
        backwards from the leaf until a member that must stay: another leaf,
        a member at least as long as the word (a different branch), or a
        prefix short enough to be shared with the member right after the
        leaf. Everything strictly between that member and the leaf goes.

        When the stop is the leaf of a shorter word the removed word
        extended, that word's own bare member goes as well unless the
        member after the leaf still extends it.
        """
        start = await self._store.rank(self._key, self._codec.leaf(word))
        if start is None or start == 0:
            return 0

        following = await self._store.range_by_rank(self._key, start + 1, start + 1)
        shared = _shared_length(word, following[0]) if following else -1

        right = start
        while right > 0:
            left = max(0, right - self._window)
            window = await self._store.range_by_rank(self._key, left, right - 1)
            for offset in range(len(window) - 1, -1, -1):
                member = window[offset]
                if self._codec.is_leaf(member):
                    count = await self._delete_between(left + offset, start)
                    shorter = self._codec.word_of(member)
                    if word.startswith(shorter) and shared < len(shorter):
                        count += await self._store.remove(self._key, shorter)
                    return count
                if len(member) >= len(word) or len(member) <= shared:
                    return await self._delete_between(left + offset, start)
            right = left

        return await self._delete_between(-1, start)

    async def _delete_between(self, boundary: int, leaf_rank: int) -> int:
        first, last = boundary + 1, leaf_rank - 1
        if first > last:
            return 0
        count = await self._store.remove_range_by_rank(self._key, first, last)
        logger.debug("Pruned %d orphaned prefixes (ranks %d..%d)", count, first, last)
        return count

    async def flush(self) -> int:
        """Delete the whole corpus. Returns the number of keys deleted (0 or 1)."""
        deleted = await self._store.delete_key(self._key)
        logger.info("Flushed %s (%d key deleted)", self._key, deleted)
        return deleted

    # ---- reads ----

    async def complete(self, prefix: object, limit: Optional[int] = None) -> Completion:
        """
        Return up to *limit* known words starting with *prefix*, ascending.

        Blank input yields no completions rather than the whole corpus.
        """
        if limit is None:
            limit = self._cfg.default_limit
        try:
            prefix = self._normalize(prefix)
        except EmptyInputError:
            return Completion(prefix="")
        if limit <= 0:
            return Completion(prefix=prefix)

        start = await self._store.rank(self._key, prefix)
        if start is None:
            # Not a prefix of anything, but it may still be a word itself
            if await self._store.rank(self._key, self._codec.leaf(prefix)) is not None:
                return Completion(prefix=prefix, words=[prefix])
            return Completion(prefix=prefix)

        words: list[str] = []
        while True:
            window = await self._store.range_by_rank(self._key, start, start + self._window - 1)
            for member in window:
                # Past the contiguous run of members under this prefix
                if not member.startswith(prefix):
                    return Completion(prefix=prefix, words=words)
                if self._codec.is_leaf(member):
                    words.append(self._codec.word_of(member))
                    if len(words) >= limit:
                        return Completion(prefix=prefix, words=words)
            if len(window) < self._window:
                return Completion(prefix=prefix, words=words)
            start += self._window

    async def words(self) -> AsyncIterator[str]:
        """Yield every known word in ascending order."""
        start = 0
        while True:
            window = await self._store.range_by_rank(self._key, start, start + self._window - 1)
            for member in window:
                if self._codec.is_leaf(member):
                    yield self._codec.word_of(member)
            if len(window) < self._window:
                return
            start += self._window

    async def statistics(self) -> Statistics:
        """Count leaves and characters stored. Read only."""
        stats = Statistics(total=await self._store.cardinality(self._key))
        start = 0
        while True:
            window = await self._store.range_by_rank(self._key, start, start + self._window - 1)
            for member in window:
                if self._codec.is_leaf(member):
                    stats.leaf_count += 1
                    stats.leaf_char_total += len(member) - 1
                else:
                    stats.prefix_char_total += len(member)
            if len(window) < self._window:
                return stats
            start += self._window
