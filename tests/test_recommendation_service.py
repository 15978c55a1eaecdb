from unittest.mock import AsyncMock

import pytest

from franky.anilist.errors import NetworkError
from franky.datatypes.anime_datatypes import RecommendationQuery, RecommendationType, SortBy
from franky.recommendations.recommendation_service import (
    FILTERED_QUERY,
    SIMILAR_QUERY,
    RecommendationService,
    map_media,
    strip_html,
)


def _media(title="Frieren", **overrides):
    media = {
        "id": 1,
        "title": {"english": title, "romaji": f"{title} (romaji)"},
        "episodes": 28,
        "averageScore": 91,
        "siteUrl": "https://anilist.co/anime/1",
        "genres": ["Adventure", "Drama", "Fantasy", "Slice of Life"],
        "tags": [{"name": "Elf"}, {"name": "Time Skip"}, {"name": "Magic"}],
        "description": "An elf <i>mage</i> travels&nbsp;on.<br>",
    }
    media.update(overrides)
    return media


def _similar_payload(nodes, genres=("Action", "Comedy", "Drama")):
    return {
        "data": {
            "Media": {
                "id": 10,
                "title": {"english": "Naruto"},
                "genres": list(genres),
                "recommendations": {"nodes": nodes},
            }
        }
    }


def _page_payload(*media):
    return {"data": {"Page": {"media": list(media)}}}


def test_strip_html_removes_tags_and_entities():
    assert strip_html("<p>Tom &amp; Jerry&#39;s&nbsp;show</p> ") == "Tom & Jerry's show"


def test_map_media_builds_display_fields():
    rec = map_media(_media())

    assert rec.title == "Frieren"
    assert rec.episodes == 28
    assert rec.score == 91
    assert rec.themes == ["Adventure", "Drama", "Fantasy", "Elf", "Time Skip"]
    assert rec.description == "An elf mage travels on."


def test_map_media_handles_missing_fields():
    rec = map_media({"title": {"english": None, "romaji": None}})

    assert rec.title == "Unknown"
    assert rec.episodes is None
    assert rec.score is None
    assert rec.themes == []
    assert rec.description is None


def test_map_media_cuts_description():
    rec = map_media(_media(description="x" * 400))

    assert len(rec.description) == 150


@pytest.mark.asyncio
async def test_similar_query_returns_curated_recommendations():
    client = AsyncMock()
    nodes = [{"mediaRecommendation": _media("Bleach")}, {"mediaRecommendation": None}, {"mediaRecommendation": _media("One Piece")}]
    client.post_query = AsyncMock(return_value=_similar_payload(nodes))
    service = RecommendationService(client)

    query = RecommendationQuery(type=RecommendationType.SIMILAR_TO, similar_to_title="Naruto")
    recs = await service.fetch(query, limit=5)

    assert [rec.title for rec in recs] == ["Bleach", "One Piece"]
    client.post_query.assert_awaited_once_with(SIMILAR_QUERY, {"search": "Naruto", "perPage": 5})


@pytest.mark.asyncio
async def test_similar_query_respects_limit():
    client = AsyncMock()
    nodes = [{"mediaRecommendation": _media(f"Show {index}")} for index in range(6)]
    client.post_query = AsyncMock(return_value=_similar_payload(nodes))
    service = RecommendationService(client)

    recs = await service.fetch_similar("Naruto", limit=3)

    assert len(recs) == 3


@pytest.mark.asyncio
async def test_unknown_title_returns_empty_list():
    client = AsyncMock()
    client.post_query = AsyncMock(return_value={"data": {"Media": None}})
    service = RecommendationService(client)

    assert await service.fetch_similar("Nonexistent", limit=5) == []


@pytest.mark.asyncio
async def test_no_recommendations_falls_back_to_first_two_genres():
    client = AsyncMock()
    client.post_query = AsyncMock(side_effect=[_similar_payload([]), _page_payload(_media("Gintama"))])
    service = RecommendationService(client)

    recs = await service.fetch_similar("Naruto", limit=4)

    assert [rec.title for rec in recs] == ["Gintama"]
    query_text, variables = client.post_query.await_args_list[1].args
    assert query_text == FILTERED_QUERY
    assert variables["genres"] == ["Action", "Comedy"]
    assert variables["sort"] == ["POPULARITY_DESC"]
    assert variables["perPage"] == 4


@pytest.mark.asyncio
async def test_no_recommendations_and_no_genres_returns_empty():
    client = AsyncMock()
    client.post_query = AsyncMock(return_value=_similar_payload([], genres=()))
    service = RecommendationService(client)

    assert await service.fetch_similar("Naruto", limit=4) == []
    assert client.post_query.await_count == 1


def test_filter_variables_for_underrated_query():
    service = RecommendationService(AsyncMock(), underrated_popularity_threshold=20000)
    query = RecommendationQuery(
        type=RecommendationType.FILTERED,
        genres=["Isekai"],
        moods=["Dark"],
        episode_max=13,
        sort_by=SortBy.SCORE,
        underrated=True,
    )

    variables = service.build_filter_variables(query, limit=5)

    assert variables == {
        "page": 1,
        "perPage": 5,
        "genres": ["Isekai", "Dark"],
        "episodesGreater": None,
        "episodesLesser": 13,
        "popularityLesser": 20000,
        "sort": ["SCORE_DESC"],
    }


def test_filter_variables_without_constraints():
    service = RecommendationService(AsyncMock())
    variables = service.build_filter_variables(RecommendationQuery(type=RecommendationType.FILTERED), limit=10)

    assert variables["genres"] is None
    assert variables["popularityLesser"] is None
    assert variables["sort"] == ["POPULARITY_DESC"]


@pytest.mark.asyncio
async def test_filtered_fetch_caps_results():
    client = AsyncMock()
    client.post_query = AsyncMock(return_value=_page_payload(*[_media(f"Show {index}") for index in range(8)]))
    service = RecommendationService(client)

    recs = await service.fetch(RecommendationQuery(type=RecommendationType.FILTERED, genres=["Action"]), limit=5)

    assert len(recs) == 5
    assert client.post_query.await_args.args[0] == FILTERED_QUERY


@pytest.mark.asyncio
async def test_similar_without_title_uses_filter_strategy():
    client = AsyncMock()
    client.post_query = AsyncMock(return_value=_page_payload())
    service = RecommendationService(client)

    await service.fetch(RecommendationQuery(type=RecommendationType.SIMILAR_TO, similar_to_title=None), limit=5)

    assert client.post_query.await_args.args[0] == FILTERED_QUERY


@pytest.mark.asyncio
async def test_errors_are_swallowed():
    client = AsyncMock()
    client.post_query = AsyncMock(side_effect=NetworkError(None, "timeout"))
    service = RecommendationService(client)

    query = RecommendationQuery(type=RecommendationType.SIMILAR_TO, similar_to_title="Naruto")

    assert await service.fetch(query) == []


@pytest.mark.asyncio
async def test_malformed_payload_is_swallowed():
    client = AsyncMock()
    client.post_query = AsyncMock(return_value={"data": {"Page": {"media": "not a list"}}})
    service = RecommendationService(client)

    recs = await service.fetch(RecommendationQuery(type=RecommendationType.FILTERED), limit=5)

    assert isinstance(recs, list)
