"""
Franky - Anime Community Discord Bot

Franky answers slash commands for an anime-themed Discord community, keeps
scam messages out of its channels, and runs a small guess-the-anime trivia
game. Anime data comes from the public AniList GraphQL API.

Core Components:

- **AniList Integration**: Async GraphQL client, a short-lived response cache,
  and the airing-schedule service that normalizes and sorts upcoming episodes
- **Recommendations**: Free-text vibe parser ("short action", "like Naruto")
  and a fetch service with similarity and filter strategies
- **Formatting**: Time-zone aware, length-capped message rendering
- **Cogs**: Slash commands, trivia lifecycle, and scam moderation on messages

Usage:
    from franky.main import main
    main()
"""
