"""
Data types shared by the AniList integration, recommendation engine and cogs.

Key types:
- `AiringItem`: One upcoming episode (title, episode number, unix airing time).
- `CacheKind` / `CacheEntry`: Response cache bookkeeping for airing queries.
- `RecommendationQuery`: Structured form of a free-text recommendation request.
- `EnhancedRecommendation`: One recommended anime ready for display.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


@dataclass(frozen=True, slots=True)
class AiringItem:
    """A not-yet-aired episode.

    Attributes:
        title: Display title (english, romaji, native, then ``"Unknown"``).
        episode: Episode number, always positive.
        airing_at: Scheduled broadcast time in unix seconds, always positive.
    """

    title: str
    episode: int
    airing_at: int


class CacheKind(Enum):
    """Shape of an airing query: the global schedule or a title search."""

    GENERAL = "general"
    SEARCH = "search"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """Cached result of one airing query. Never mutated after creation."""

    kind: CacheKind
    key: str
    data: Tuple[AiringItem, ...]
    expires_at: float


class RecommendationType(Enum):
    """Strategy a recommendation query resolves to."""

    GENRE_MOOD = "genre_mood"
    SIMILAR_TO = "similar_to"
    FILTERED = "filtered"

    def __str__(self) -> str:
        return self.value


class SortBy(Enum):
    """Result ordering for filtered recommendations."""

    POPULARITY = "popularity"
    SCORE = "score"
    TRENDING = "trending"

    def __str__(self) -> str:
        return self.value

    @property
    def anilist_sort(self) -> str:
        """AniList ``MediaSort`` value for this ordering."""
        return {
            SortBy.POPULARITY: "POPULARITY_DESC",
            SortBy.SCORE: "SCORE_DESC",
            SortBy.TRENDING: "TRENDING_DESC",
        }[self]


@dataclass(slots=True)
class RecommendationQuery:
    """Structured recommendation request.

    For ``SIMILAR_TO`` queries only ``similar_to_title`` is meaningful; for
    ``FILTERED`` queries the genre, mood, episode and sort fields are.
    """

    type: RecommendationType
    genres: List[str] = field(default_factory=list)
    moods: List[str] = field(default_factory=list)
    similar_to_title: Optional[str] = None
    episode_min: Optional[int] = None
    episode_max: Optional[int] = None
    sort_by: SortBy = SortBy.POPULARITY
    underrated: bool = False

    @property
    def filter_genres(self) -> List[str]:
        """Genres and mood tags combined, in order, without duplicates."""
        combined: List[str] = []
        for name in [*self.genres, *self.moods]:
            if name not in combined:
                combined.append(name)
        return combined


@dataclass(slots=True)
class EnhancedRecommendation:
    """A recommended anime as shown to users.

    Attributes:
        title: Display title (english, romaji, then ``"Unknown"``).
        episodes: Episode count when known.
        score: AniList average score on a 0-100 scale when known.
        site_url: AniList page for the title.
        themes: Up to three genres followed by up to two tags, five at most.
        description: Plain-text synopsis cut to 150 characters.
    """

    title: str
    episodes: Optional[int] = None
    score: Optional[int] = None
    site_url: str = ""
    themes: List[str] = field(default_factory=list)
    description: Optional[str] = None


@dataclass(frozen=True, slots=True)
class AnimeQuote:
    """A quote line and the character who said it."""

    quote: str
    character: str
