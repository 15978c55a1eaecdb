"""
Shared state for the Franky bot.

Everything the cogs share lives on one :class:`BotState` object: the AniList
client and response cache, the airing and recommendation services, and the
trivia games. Cogs receive it explicitly, which keeps tests free of module
globals.
"""

import time

from franky.anilist.airing_service import AiringService
from franky.anilist.client import AniListClient
from franky.anilist.response_cache import ResponseCache
from franky.configuration.app_configuration import AppConfig, app_config
from franky.games.trivia import TriviaManager
from franky.recommendations.recommendation_service import RecommendationService
from franky.scheduler.task_scheduler import TaskScheduler
from franky.util.logger import get_logger

logger = get_logger("bot_state")


class BotState:
    """
    Centralized state for the bot's services.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self.started_at = time.time()
        self.anilist_client = AniListClient(config.anilist_api_url)
        self.response_cache = ResponseCache(ttl_seconds=config.cache_ttl_seconds)
        self.airing_service = AiringService(self.anilist_client, self.response_cache)
        self.recommendation_service = RecommendationService(
            self.anilist_client,
            underrated_popularity_threshold=config.underrated_popularity_threshold,
        )
        self.scheduler = TaskScheduler()
        self.trivia = TriviaManager(self.scheduler, timeout_seconds=config.trivia_timeout_seconds)
        logger.info("Bot state initialized")

    @property
    def uptime_seconds(self) -> int:
        return int(time.time() - self.started_at)

    async def shutdown(self) -> None:
        """Stop trivia timers and close the AniList session."""
        self.trivia.cancel_all()
        await self.scheduler.shutdown()
        await self.anilist_client.close()
        logger.info("Bot state shut down")


bot_state = BotState(app_config)
