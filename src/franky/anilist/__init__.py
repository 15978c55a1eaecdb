"""
AniList integration for Franky.

- **client.py**: Async GraphQL client over a shared aiohttp session.
- **errors.py**: ``NetworkError`` raised when AniList is unreachable or answers
  with a non-success status.
- **response_cache.py**: Time-bounded memoization of airing queries.
- **airing_service.py**: Upcoming-episode retrieval for a single title or the
  global schedule, normalized and sorted by airing time.
"""
