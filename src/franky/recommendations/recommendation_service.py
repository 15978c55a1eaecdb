"""Recommendation retrieval from AniList.

Two strategies back :meth:`RecommendationService.fetch`:

- **similar**: look the title up and read its curated ``recommendations``
  relation (rating order, decided by AniList). A title without any
  recommendations but with genres falls back to a filtered search over its
  first two genres.
- **filtered**: a server-side ``Page.media`` filter over genres (match any),
  episode bounds and, for "underrated" requests, a popularity ceiling,
  restricted to finished anime.

Recommendations are a best-effort feature: every failure is logged and
turned into an empty result instead of surfacing to the user.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List

from franky.anilist.client import AniListClient
from franky.datatypes.anime_datatypes import (
    EnhancedRecommendation,
    RecommendationQuery,
    RecommendationType,
    SortBy,
)
from franky.util.logger import get_logger

logger = get_logger("recommendation_service")

DEFAULT_UNDERRATED_POPULARITY_THRESHOLD = 50000
DESCRIPTION_MAX_CHARS = 150
MAX_THEMES = 5
FALLBACK_GENRE_COUNT = 2

MEDIA_FIELDS = """
      id
      title { english romaji }
      episodes
      averageScore
      siteUrl
      genres
      tags { name }
      description(asHtml: false)
"""

SIMILAR_QUERY = """
query ($search: String, $perPage: Int) {
  Media(search: $search, type: ANIME) {
    id
    title { english romaji }
    genres
    tags { name }
    recommendations(perPage: $perPage, sort: RATING_DESC) {
      nodes {
        mediaRecommendation {%s}
      }
    }
  }
}
""" % MEDIA_FIELDS

FILTERED_QUERY = """
query (
  $page: Int,
  $perPage: Int,
  $genres: [String],
  $episodesGreater: Int,
  $episodesLesser: Int,
  $popularityLesser: Int,
  $sort: [MediaSort]
) {
  Page(page: $page, perPage: $perPage) {
    media(
      genre_in: $genres,
      episodes_greater: $episodesGreater,
      episodes_lesser: $episodesLesser,
      popularity_lesser: $popularityLesser,
      type: ANIME,
      status: FINISHED,
      sort: $sort
    ) {%s}
  }
}
""" % MEDIA_FIELDS

HTML_TAG_PATTERN = re.compile(r"<[^>]*>")

HTML_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)


def strip_html(html: str) -> str:
    """Remove tags and decode the handful of entities AniList descriptions use.

    Not an HTML parser: malformed or nested markup can leave literal text.
    """
    text = HTML_TAG_PATTERN.sub("", html)
    for entity, replacement in HTML_ENTITIES:
        text = text.replace(entity, replacement)
    return text.strip()


def _mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def map_media(media: Dict[str, Any]) -> EnhancedRecommendation:
    """Convert a raw AniList media record into an :class:`EnhancedRecommendation`."""
    title = _mapping(media.get("title"))
    genres = [str(genre) for genre in (media.get("genres") or []) if genre]
    tags = [str(_mapping(tag).get("name")) for tag in (media.get("tags") or []) if _mapping(tag).get("name")]
    themes = (genres[:3] + tags[:2])[:MAX_THEMES]

    raw_description = media.get("description")
    description = None
    if isinstance(raw_description, str) and raw_description:
        description = strip_html(raw_description)[:DESCRIPTION_MAX_CHARS]

    return EnhancedRecommendation(
        title=title.get("english") or title.get("romaji") or "Unknown",
        episodes=_optional_int(media.get("episodes")),
        score=_optional_int(media.get("averageScore")),
        site_url=str(media.get("siteUrl") or ""),
        themes=themes,
        description=description,
    )


class RecommendationService:
    """Executes structured recommendation queries against AniList.

    Parameters
    ----------
    client:
        AniList client.
    underrated_popularity_threshold:
        Popularity ceiling applied when a query asks for underrated titles.
    """

    def __init__(
        self,
        client: AniListClient,
        underrated_popularity_threshold: int = DEFAULT_UNDERRATED_POPULARITY_THRESHOLD,
    ) -> None:
        self.client = client
        self.underrated_popularity_threshold = underrated_popularity_threshold

    async def fetch(self, query: RecommendationQuery, limit: int = 10) -> List[EnhancedRecommendation]:
        """Return up to ``limit`` recommendations; an empty list on any failure."""
        try:
            if query.type is RecommendationType.SIMILAR_TO and query.similar_to_title:
                return await self.fetch_similar(query.similar_to_title, limit)
            return await self.fetch_filtered(query, limit)
        except Exception:
            logger.exception("[RECOMMEND] Error fetching recommendations for %s query", query.type)
            return []

    async def fetch_similar(self, title: str, limit: int) -> List[EnhancedRecommendation]:
        """Recommendations curated for ``title``, with a genre fallback."""
        payload = await self.client.post_query(SIMILAR_QUERY, {"search": title, "perPage": limit})
        media = _mapping(_mapping(payload.get("data")).get("Media"))
        if not media:
            logger.info("[RECOMMEND] No AniList match for title %r", title)
            return []

        nodes = _mapping(media.get("recommendations")).get("nodes") or []
        recommended = [
            _mapping(node).get("mediaRecommendation")
            for node in nodes
            if _mapping(_mapping(node).get("mediaRecommendation"))
        ]

        if not recommended:
            genres = [genre for genre in (media.get("genres") or []) if genre]
            if not genres:
                return []
            logger.info("[RECOMMEND] No recommendations for %r; falling back to genres %s", title, genres[:FALLBACK_GENRE_COUNT])
            fallback = RecommendationQuery(
                type=RecommendationType.FILTERED,
                genres=genres[:FALLBACK_GENRE_COUNT],
                sort_by=SortBy.POPULARITY,
            )
            return await self.fetch_filtered(fallback, limit)

        return [map_media(entry) for entry in recommended[:limit]]

    def build_filter_variables(self, query: RecommendationQuery, limit: int) -> Dict[str, Any]:
        """GraphQL variables for a filtered search. ``None`` means "no constraint"."""
        genres = query.filter_genres
        return {
            "page": 1,
            "perPage": limit,
            "genres": genres or None,
            "episodesGreater": query.episode_min,
            "episodesLesser": query.episode_max,
            "popularityLesser": self.underrated_popularity_threshold if query.underrated else None,
            "sort": [query.sort_by.anilist_sort],
        }

    async def fetch_filtered(self, query: RecommendationQuery, limit: int) -> List[EnhancedRecommendation]:
        """Titles matching the query's genre, length and popularity filters."""
        payload = await self.client.post_query(FILTERED_QUERY, self.build_filter_variables(query, limit))
        page = _mapping(_mapping(payload.get("data")).get("Page"))
        media_list = page.get("media") or []
        return [map_media(_mapping(media)) for media in media_list[:limit]]
