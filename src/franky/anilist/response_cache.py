"""Time-bounded cache for AniList airing queries.

Entries live for a fixed TTL measured from the moment they are written.
Expiry is enforced lazily: an entry is removed the first time a lookup sees
it past its deadline. There is no sweep task, no size bound and no LRU; the
key space is small (distinct searched titles times a few page sizes), so
memory grows only with the number of distinct titles queried during the
process lifetime.
"""

from __future__ import annotations

import time
from typing import Callable, Dict, Iterable, Optional, Tuple

from franky.datatypes.anime_datatypes import AiringItem, CacheEntry, CacheKind
from franky.util.logger import get_logger

logger = get_logger("response_cache")

DEFAULT_TTL_SECONDS = 90.0


def build_cache_key(kind: CacheKind, query: Optional[str], page: int, per_page: int) -> str:
    """Return the cache key for one airing query shape.

    Two requests with the same kind, query text, page and page size always
    map to the same key.
    """
    return f"{kind.value}:{query or ''}:{page}:{per_page}"


class ResponseCache:
    """In-memory cache of airing query results with a fixed TTL.

    Parameters
    ----------
    ttl_seconds:
        Lifetime of an entry from the time it is stored.
    clock:
        Callable returning the current time in seconds. Tests inject a fake.
    """

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.time) -> None:
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self.entries: Dict[str, CacheEntry] = {}

    def get(self, kind: CacheKind, key: str) -> Optional[Tuple[AiringItem, ...]]:
        """Return cached items for ``key``, or ``None`` when absent or expired.

        An expired entry is deleted as a side effect.
        """
        entry = self.entries.get(key)
        if entry is None:
            return None
        if self.clock() > entry.expires_at:
            del self.entries[key]
            logger.debug("[AIRING] cache expired kind=%s key=%s", kind, key)
            return None
        logger.debug("[AIRING] cache hit kind=%s", kind)
        return entry.data

    def set(self, kind: CacheKind, key: str, data: Iterable[AiringItem]) -> None:
        """Store ``data`` under ``key``, replacing any previous entry."""
        self.entries[key] = CacheEntry(
            kind=kind,
            key=key,
            data=tuple(data),
            expires_at=self.clock() + self.ttl_seconds,
        )

    def clear(self) -> None:
        """Drop every cached entry."""
        self.entries.clear()

    def __len__(self) -> int:
        return len(self.entries)
