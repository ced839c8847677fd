"""
Translation History

Keeps the most recent completed translations, newest first, and mirrors
them to a single Redis key as a JSON array.

Example:
- "Hello" (auto -> es) completes as "Hola" -> stored at the head
- The same "Hola" completes again -> ignored (matches the head)
- An 11th distinct translation arrives -> the oldest entry is dropped

Only the head is compared for duplicates, so an older identical entry
further down the list is kept.
"""
from typing import Iterable, Iterator, Optional
import logging

from pydantic import TypeAdapter, ValidationError
from redis.exceptions import RedisError

from lingosync.config.constants import HISTORY_MAX_ITEMS, HISTORY_STORAGE_KEY
from lingosync.schemas.translation import HistoryItem
from lingosync.services.protocols import KeyValueStoreProtocol

logger = logging.getLogger(__name__)

_history_adapter = TypeAdapter(list[HistoryItem])


class BoundedHistory:
    """Most-recent-first sequence that never grows past its capacity."""

    def __init__(self, items: Iterable[HistoryItem] = (), capacity: int = HISTORY_MAX_ITEMS):
        self._capacity = capacity
        self._items: list[HistoryItem] = list(items)[:capacity]

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def head(self) -> Optional[HistoryItem]:
        return self._items[0] if self._items else None

    def prepend(self, item: HistoryItem) -> list[HistoryItem]:
        """Insert at the front and return whatever fell off the end."""
        self._items.insert(0, item)
        evicted = self._items[self._capacity:]
        del self._items[self._capacity:]
        return evicted

    def clear(self):
        self._items.clear()

    def to_json(self) -> str:
        return _history_adapter.dump_json(self._items, by_alias=True).decode("utf-8")

    @classmethod
    def from_json(cls, raw: str, capacity: int = HISTORY_MAX_ITEMS) -> "BoundedHistory":
        """Raises ValidationError when raw is not a list of history items."""
        return cls(_history_adapter.validate_json(raw), capacity=capacity)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[HistoryItem]:
        return iter(self._items)

    def __getitem__(self, index: int) -> HistoryItem:
        return self._items[index]


class HistoryCache:
    """
    Owns the in-memory history and is the only writer of the stored copy.
    """

    def __init__(
        self,
        store: KeyValueStoreProtocol,
        key: str = HISTORY_STORAGE_KEY,
        capacity: int = HISTORY_MAX_ITEMS,
    ):
        self._store = store
        self._key = key
        self._history = BoundedHistory(capacity=capacity)

    @property
    def items(self) -> list[HistoryItem]:
        return list(self._history)

    async def load(self) -> list[HistoryItem]:
        """
        Read the stored list. Missing or corrupted data yields an empty history.
        """
        try:
            raw = await self._store.get(self._key)
        except (RedisError, OSError) as e:
            logger.error(f"[History] Failed to read stored history: {e}, starting empty")
            raw = None

        if raw is None:
            self._history = BoundedHistory(capacity=self._history.capacity)
            return self.items

        try:
            self._history = BoundedHistory.from_json(raw, capacity=self._history.capacity)
            logger.info(f"[History] Loaded {len(self._history)} entries")
        except ValidationError as e:
            logger.error(f"[History] Failed to load history: {e.error_count()} errors, starting empty")
            self._history = BoundedHistory(capacity=self._history.capacity)

        return self.items

    async def record(
        self,
        source_text: str,
        translated_text: str,
        source_lang: str,
        target_lang: str,
        detected_language: Optional[str] = None,
    ) -> Optional[HistoryItem]:
        """
        Remember a completed translation.

        Returns the new item, or None when the translation was skipped
        (blank input/output, or same output as the current head).
        """
        if not source_text.strip() or not translated_text.strip():
            return None

        head = self._history.head
        if head is not None and head.translated_text == translated_text:
            logger.debug("[History] Skipping duplicate of most recent entry")
            return None

        item = HistoryItem(
            translated_text=translated_text,
            detected_language=detected_language,
            source_language=source_lang,
            target_language=target_lang,
        )
        evicted = self._history.prepend(item)
        if evicted:
            logger.debug(f"[History] Evicted {len(evicted)} oldest entries")

        await self._persist()
        return item

    async def clear(self):
        """Forget every entry and remove the stored copy."""
        self._history.clear()
        try:
            await self._store.delete(self._key)
        except (RedisError, OSError) as e:
            logger.error(f"[History] Failed to delete stored history: {e}")
            return
        logger.info("[History] Cleared")

    async def _persist(self):
        """Write the whole list. A store outage leaves the in-memory list authoritative."""
        try:
            await self._store.set(self._key, self._history.to_json())
        except (RedisError, OSError) as e:
            logger.error(f"[History] Failed to persist {len(self._history)} entries: {e}")


# Global singleton instance
_history_cache: Optional[HistoryCache] = None


async def get_history_cache() -> HistoryCache:
    """Get or create the global history cache, loading it on first use."""
    global _history_cache
    if _history_cache is None:
        from lingosync.config.redis import get_redis

        cache = HistoryCache(await get_redis())
        await cache.load()
        _history_cache = cache
    return _history_cache
