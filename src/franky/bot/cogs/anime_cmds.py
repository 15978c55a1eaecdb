"""
Anime cog: airing schedules and recommendations backed by AniList.

Commands
- ``/airing <title> [timezone]``: next episode for titles matching a search.
- ``/calendar [timezone] [days]``: global schedule for the coming days,
  grouped by calendar day in the requested time zone.
- ``/recommend [vibe]``: free-text recommendations ("like Naruto",
  "short action", "underrated isekai").

AniList outages surface as :class:`NetworkError` from the airing service; the
cog answers with a generic unavailable message and logs the details.
Recommendations never raise; an empty result renders as a friendly line.
"""

import time

import discord
from discord import Option
from discord.ext import commands

from franky.anilist.errors import NetworkError
from franky.anilist.airing_service import within_window
from franky.bot.bot_state import BotState, bot_state
from franky.recommendations.query_parser import parse_recommendation_query
from franky.util.constants import AIRING_USAGE, ANILIST_UNAVAILABLE
from franky.util.format_utils import format_airing_list, format_recommendations
from franky.util.logger import get_logger

logger = get_logger("anime_cog")

SECONDS_PER_DAY = 24 * 60 * 60
DEFAULT_VIBE = "action"


class AnimeCog(commands.Cog):
    """Slash commands that read from AniList."""

    def __init__(self, discord_bot_instance, state: BotState | None = None):
        self.discord_bot_instance = discord_bot_instance
        self.state = state or bot_state
        logger.info("Anime cog loaded")

    @commands.slash_command(name="airing", description="Show the next episodes for an anime")
    async def airing(
        self,
        application_context: discord.ApplicationContext,
        title: Option(str, description="Anime title to look up"),  # type: ignore
        timezone: Option(str, description="IANA time zone, e.g. Asia/Tokyo", required=False, default=None),  # type: ignore
    ) -> None:
        """Search AniList for ``title`` and list its upcoming episodes."""
        title = title.strip()
        if not title:
            await application_context.respond(AIRING_USAGE, ephemeral=True)
            return

        await application_context.defer()
        config = self.state.config
        tz = timezone or config.default_timezone

        try:
            items = await self.state.airing_service.fetch_upcoming(
                query=title,
                per_page=config.airing_per_page,
            )
        except NetworkError as exc:
            logger.error("Airing lookup for %r failed: %s", title, exc)
            await application_context.send_followup(ANILIST_UNAVAILABLE)
            return

        reply = format_airing_list(
            items,
            limit=config.airing_list_limit,
            tz=tz,
            header=f"📺 **Upcoming: {title}**",
            max_chars=config.max_chars,
        )
        await application_context.send_followup(reply)
        logger.debug("[AIRING] %s -> %d item(s)", title, len(items))

    @commands.slash_command(name="calendar", description="Show what airs over the next few days")
    async def calendar(
        self,
        application_context: discord.ApplicationContext,
        timezone: Option(str, description="IANA time zone, e.g. Europe/Berlin", required=False, default=None),  # type: ignore
        days: Option(int, description="How many days ahead", required=False, default=None, min_value=1, max_value=14),  # type: ignore
    ) -> None:
        """List the global airing schedule grouped by day."""
        await application_context.defer()
        config = self.state.config
        tz = timezone or config.default_timezone
        days = days or config.calendar_days

        try:
            items = await self.state.airing_service.fetch_upcoming(per_page=config.calendar_per_page)
        except NetworkError as exc:
            logger.error("Calendar lookup failed: %s", exc)
            await application_context.send_followup(ANILIST_UNAVAILABLE)
            return

        upcoming = within_window(items, time.time(), days * SECONDS_PER_DAY)
        reply = format_airing_list(
            upcoming,
            limit=config.calendar_per_page,
            tz=tz,
            header=f"🗓️ **Airing in the next {days} day{'s' if days != 1 else ''}**",
            group_by_day=True,
            max_chars=config.max_chars,
        )
        await application_context.send_followup(reply)

    @commands.slash_command(name="recommend", description="Get anime recommendations")
    async def recommend(
        self,
        application_context: discord.ApplicationContext,
        vibe: Option(str, description="e.g. 'like Naruto', 'dark', 'short action'", required=False, default=None),  # type: ignore
    ) -> None:
        """Turn a free-text vibe into AniList recommendations."""
        await application_context.defer()
        config = self.state.config
        text = (vibe or "").strip() or DEFAULT_VIBE

        query = parse_recommendation_query(text, episode_window=config.episode_window)
        logger.debug("[RECOMMEND] %r parsed as %s", text, query)
        recs = await self.state.recommendation_service.fetch(query, limit=config.recommendation_limit)
        await application_context.send_followup(format_recommendations(recs, text))


def setup(discord_bot_instance):
    discord_bot_instance.add_cog(AnimeCog(discord_bot_instance))
