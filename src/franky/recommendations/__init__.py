"""
Anime recommendations.

- **query_parser.py**: Classifies a free-text vibe into a structured query.
- **recommendation_service.py**: Runs the query against AniList, either through
  a title's curated recommendations or a genre/episode filter.
"""
