"""Upcoming-episode retrieval from AniList.

A single service covers both query shapes:

- **general**: the global schedule of not-yet-aired episodes, ordered by
  AniList by airing time.
- **search**: the next airing episode of every title matching a search string.

Results are normalized into :class:`AiringItem`, incomplete records are
dropped, the list is sorted by airing time and cached per query shape.
Network failures are not retried here; :class:`NetworkError` reaches the
caller, which is expected to show a "try again later" reply.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from franky.anilist.client import AniListClient
from franky.anilist.response_cache import ResponseCache, build_cache_key
from franky.datatypes.anime_datatypes import AiringItem, CacheKind
from franky.util.logger import get_logger

logger = get_logger("airing_service")

UNKNOWN_TITLE = "Unknown"

GENERAL_QUERY = """
query ($page: Int!, $perPage: Int!) {
  Page(page: $page, perPage: $perPage) {
    airingSchedules(notYetAired: true, sort: TIME) {
      airingAt
      episode
      media {
        title { english romaji native }
      }
    }
  }
}
"""

SEARCH_QUERY = """
query ($search: String!, $page: Int!, $perPage: Int!) {
  Page(page: $page, perPage: $perPage) {
    media(search: $search, type: ANIME) {
      title { english romaji native }
      nextAiringEpisode { airingAt episode }
    }
  }
}
"""


def _mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _positive_int(value: Any) -> int:
    """Coerce ``value`` to int, returning 0 for anything missing or malformed."""
    if isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def pick_title(title: Any) -> str:
    """Return the preferred display title: english, romaji, native, then ``"Unknown"``."""
    title = _mapping(title)
    return title.get("english") or title.get("romaji") or title.get("native") or UNKNOWN_TITLE


def parse_general_schedule(payload: Dict[str, Any]) -> List[AiringItem]:
    """Map a general-schedule response to airing items (unfiltered, unsorted)."""
    page = _mapping(_mapping(payload.get("data")).get("Page"))
    schedules = page.get("airingSchedules") or []
    return [
        AiringItem(
            title=pick_title(_mapping(_mapping(entry).get("media")).get("title")),
            episode=_positive_int(_mapping(entry).get("episode")),
            airing_at=_positive_int(_mapping(entry).get("airingAt")),
        )
        for entry in schedules
    ]


def parse_search_results(payload: Dict[str, Any]) -> List[AiringItem]:
    """Map a title-search response to airing items (unfiltered, unsorted)."""
    page = _mapping(_mapping(payload.get("data")).get("Page"))
    media = page.get("media") or []
    items: List[AiringItem] = []
    for entry in media:
        entry = _mapping(entry)
        next_episode = _mapping(entry.get("nextAiringEpisode"))
        items.append(
            AiringItem(
                title=pick_title(entry.get("title")),
                episode=_positive_int(next_episode.get("episode")),
                airing_at=_positive_int(next_episode.get("airingAt")),
            )
        )
    return items


def normalize_items(items: Iterable[AiringItem]) -> List[AiringItem]:
    """Drop incomplete items and sort the rest by airing time (stable)."""
    valid = [item for item in items if item.episode > 0 and item.airing_at > 0]
    return sorted(valid, key=lambda item: item.airing_at)


def within_window(items: Iterable[AiringItem], now: float, window_seconds: float) -> List[AiringItem]:
    """Keep items airing from ``now`` (inclusive) up to ``now + window_seconds`` (exclusive)."""
    end = now + window_seconds
    return [item for item in items if now <= item.airing_at < end]


class AiringService:
    """Fetches upcoming episodes through a response cache.

    Parameters
    ----------
    client:
        AniList client used on cache misses.
    cache:
        Response cache shared across requests.
    """

    def __init__(self, client: AniListClient, cache: ResponseCache) -> None:
        self.client = client
        self.cache = cache

    async def fetch_upcoming(
        self,
        query: Optional[str] = None,
        page: int = 1,
        per_page: int = 10,
    ) -> List[AiringItem]:
        """Return upcoming episodes sorted ascending by airing time.

        Parameters
        ----------
        query:
            Title to search for. Empty or ``None`` selects the global schedule.
        page, per_page:
            AniList paging parameters.

        Raises
        ------
        NetworkError
            AniList was unreachable or returned a non-success status.
        """
        kind = CacheKind.SEARCH if query else CacheKind.GENERAL
        cache_key = build_cache_key(kind, query, page, per_page)

        cached = self.cache.get(kind, cache_key)
        if cached is not None:
            return list(cached)

        if kind is CacheKind.SEARCH:
            payload = await self.client.post_query(
                SEARCH_QUERY, {"search": query, "page": page, "perPage": per_page}
            )
            raw_items = parse_search_results(payload)
        else:
            payload = await self.client.post_query(
                GENERAL_QUERY, {"page": page, "perPage": per_page}
            )
            raw_items = parse_general_schedule(payload)

        items = normalize_items(raw_items)
        logger.debug(
            "[AIRING] fetched kind=%s raw=%d kept=%d", kind, len(raw_items), len(items)
        )
        self.cache.set(kind, cache_key, items)
        return items
