"""Free-text recommendation query classification.

This is a best-effort keyword classifier, not a grammar. Ambiguous input is
resolved by a fixed precedence:

1. an explicit similarity phrase ("like X", "based on X", ...),
2. a short phrase with no genre or mood words, treated as a title,
3. a filtered query built from genre, mood, length and "underrated" keywords.
"""

from __future__ import annotations

import re
from typing import Dict, List

from franky.datatypes.anime_datatypes import RecommendationQuery, RecommendationType, SortBy

DEFAULT_EPISODE_WINDOW = 5
SHORT_SERIES_MAX_EPISODES = 13
LONG_SERIES_MIN_EPISODES = 50
DEFAULT_GENRE = "Action"

SIMILARITY_PATTERN = re.compile(r"^(like|similar to|if you liked|recommend|based on)\s+(.+)$", re.IGNORECASE)

MOOD_KEYWORDS = (
    "dark", "light", "short", "long", "underrated", "emotional", "chill", "slow",
    "fast", "intense", "relaxing", "sad", "happy", "funny", "serious",
)

GENRE_NAME_PATTERN = re.compile(
    r"\b(shonen|shoujo|seinen|josei|action|romance|comedy|drama|fantasy|horror|mystery|thriller"
    r"|slice of life|sol|sports|supernatural|mecha|isekai|scifi|sci-fi)\b"
)

EPISODE_COUNT_PATTERN = re.compile(r"(\d+)\s*episodes?")
SHORT_PATTERN = re.compile(r"\b(short|quick)\b")
LONG_PATTERN = re.compile(r"\b(long[- ]?running|long series)\b")
UNDERRATED_PATTERN = re.compile(r"\b(underrated|hidden gem|sleeper)\b")

# Casual words -> AniList genre names
GENRE_MAP: Dict[str, str] = {
    "shonen": "Shounen",
    "shoujo": "Shoujo",
    "seinen": "Seinen",
    "josei": "Josei",
    "action": "Action",
    "romance": "Romance",
    "comedy": "Comedy",
    "drama": "Drama",
    "fantasy": "Fantasy",
    "sci-fi": "Sci-Fi",
    "scifi": "Sci-Fi",
    "sci fi": "Sci-Fi",
    "horror": "Horror",
    "mystery": "Mystery",
    "thriller": "Thriller",
    "slice of life": "Slice of Life",
    "sol": "Slice of Life",
    "sports": "Sports",
    "supernatural": "Supernatural",
    "mecha": "Mecha",
    "isekai": "Isekai",
}

# Mood words -> the genre or tag that best matches them
MOOD_MAP: Dict[str, str] = {
    "dark": "Dark",
    "light": "Light",
    "emotional": "Drama",
    "chill": "Slice of Life",
    "slow": "Slice of Life",
    "fast": "Action",
    "intense": "Action",
    "relaxing": "Slice of Life",
    "sad": "Drama",
    "happy": "Comedy",
    "funny": "Comedy",
    "serious": "Drama",
}


def looks_like_genre_query(lower_text: str) -> bool:
    """Return True when the lower-cased text mentions a mood keyword or a genre name."""
    if any(keyword in lower_text for keyword in MOOD_KEYWORDS):
        return True
    return GENRE_NAME_PATTERN.search(lower_text) is not None


def _append_unique(values: List[str], value: str) -> None:
    if value not in values:
        values.append(value)


def parse_recommendation_query(text: str, episode_window: int = DEFAULT_EPISODE_WINDOW) -> RecommendationQuery:
    """Classify free text into a :class:`RecommendationQuery`.

    Parameters
    ----------
    text:
        What the user typed after ``/recommend``.
    episode_window:
        Tolerance applied around an explicit "N episodes" request.

    Returns
    -------
    RecommendationQuery
        A ``SIMILAR_TO`` query carrying a title, or a ``FILTERED`` query.
    """
    stripped = text.strip()
    lower = stripped.lower()

    like_match = SIMILARITY_PATTERN.match(stripped)
    if like_match:
        return RecommendationQuery(
            type=RecommendationType.SIMILAR_TO,
            similar_to_title=like_match.group(2).strip(),
        )

    if not looks_like_genre_query(lower) and len(stripped.split()) <= 3 and len(stripped) > 2:
        return RecommendationQuery(
            type=RecommendationType.SIMILAR_TO,
            similar_to_title=stripped,
        )

    episode_min = None
    episode_max = None
    episode_match = EPISODE_COUNT_PATTERN.search(lower)
    if episode_match:
        count = int(episode_match.group(1))
        episode_min = count - episode_window
        episode_max = count + episode_window
    elif SHORT_PATTERN.search(lower):
        episode_max = SHORT_SERIES_MAX_EPISODES
    elif LONG_PATTERN.search(lower):
        episode_min = LONG_SERIES_MIN_EPISODES

    underrated = UNDERRATED_PATTERN.search(lower) is not None

    genres: List[str] = []
    for keyword, genre in GENRE_MAP.items():
        if keyword in lower:
            _append_unique(genres, genre)

    moods: List[str] = []
    for keyword, mood in MOOD_MAP.items():
        if keyword in lower and mood not in genres:
            _append_unique(moods, mood)

    if not genres and not moods and lower:
        genres.append(DEFAULT_GENRE)

    return RecommendationQuery(
        type=RecommendationType.FILTERED,
        genres=genres,
        moods=moods,
        episode_min=episode_min,
        episode_max=episode_max,
        sort_by=SortBy.SCORE if underrated else SortBy.POPULARITY,
        underrated=underrated,
    )
