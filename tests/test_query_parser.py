import pytest

from franky.datatypes.anime_datatypes import RecommendationType, SortBy
from franky.recommendations.query_parser import (
    LONG_SERIES_MIN_EPISODES,
    SHORT_SERIES_MAX_EPISODES,
    looks_like_genre_query,
    parse_recommendation_query,
)


def test_like_phrase_selects_similar_to_and_keeps_case():
    query = parse_recommendation_query("like Naruto")

    assert query.type is RecommendationType.SIMILAR_TO
    assert query.similar_to_title == "Naruto"


@pytest.mark.parametrize(
    "text, title",
    [
        ("similar to Fullmetal Alchemist", "Fullmetal Alchemist"),
        ("If you liked Steins;Gate", "Steins;Gate"),
        ("based on   Mob Psycho 100  ", "Mob Psycho 100"),
        ("recommend Bocchi the Rock", "Bocchi the Rock"),
    ],
)
def test_similarity_phrases(text, title):
    query = parse_recommendation_query(text)

    assert query.type is RecommendationType.SIMILAR_TO
    assert query.similar_to_title == title


def test_mood_keyword_produces_filtered_mood():
    query = parse_recommendation_query("dark")

    assert query.type is RecommendationType.FILTERED
    assert "Dark" in query.moods
    assert query.genres == []


def test_short_action():
    query = parse_recommendation_query("short action")

    assert query.type is RecommendationType.FILTERED
    assert "Action" in query.genres
    assert query.episode_max == SHORT_SERIES_MAX_EPISODES
    assert query.episode_min is None


def test_underrated_isekai():
    query = parse_recommendation_query("underrated isekai")

    assert query.type is RecommendationType.FILTERED
    assert "Isekai" in query.genres
    assert query.sort_by is SortBy.SCORE
    assert query.underrated is True


def test_short_title_without_keywords_is_a_title_lookup():
    query = parse_recommendation_query("Frieren")

    assert query.type is RecommendationType.SIMILAR_TO
    assert query.similar_to_title == "Frieren"


def test_two_character_text_is_not_a_title():
    query = parse_recommendation_query("ab")

    assert query.type is RecommendationType.FILTERED
    assert query.genres == ["Action"]


def test_long_text_without_keywords_defaults_to_action():
    query = parse_recommendation_query("something to watch this weekend")

    assert query.type is RecommendationType.FILTERED
    assert query.genres == ["Action"]
    assert query.moods == []


def test_explicit_episode_count_uses_window():
    query = parse_recommendation_query("romance with 12 episodes", episode_window=3)

    assert query.genres == ["Romance"]
    assert (query.episode_min, query.episode_max) == (9, 15)


def test_long_running_sets_minimum():
    query = parse_recommendation_query("long-running shonen")

    assert query.episode_min == LONG_SERIES_MIN_EPISODES
    assert query.episode_max is None
    assert query.genres == ["Shounen"]


def test_mood_duplicating_a_genre_is_dropped():
    query = parse_recommendation_query("funny comedy")

    assert query.genres == ["Comedy"]
    assert query.moods == []


def test_chill_maps_to_slice_of_life():
    query = parse_recommendation_query("something chill and sad")

    assert query.moods == ["Slice of Life", "Drama"]
    assert query.filter_genres == ["Slice of Life", "Drama"]


def test_hidden_gem_counts_as_underrated():
    query = parse_recommendation_query("a hidden gem mystery")

    assert query.underrated is True
    assert query.sort_by is SortBy.SCORE
    assert query.genres == ["Mystery"]


def test_popularity_is_the_default_sort():
    assert parse_recommendation_query("fantasy").sort_by is SortBy.POPULARITY


def test_looks_like_genre_query():
    assert looks_like_genre_query("slice of life")
    assert looks_like_genre_query("something intense")
    assert not looks_like_genre_query("one piece")
