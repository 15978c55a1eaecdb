"""
Fun cog: help, quotes, trivia and a couple of diagnostics.

``/guess_anime`` starts a timed trivia round in the channel. Answers are
picked up by the message listener; when nobody gets it in time the timeout
announces the answer here.
"""

import datetime
import random

import discord
from discord.ext import commands

from franky.bot.bot_state import BotState, bot_state
from franky.games.trivia import TriviaGame
from franky.util.constants import ADMIN_ONLY, ANIME_QUOTES, HELP_TEXT
from franky.util.discord_utils import has_permissions
from franky.util.logger import get_logger

logger = get_logger("fun_cog")


class FunCog(commands.Cog):
    """Light-hearted commands for the community."""

    def __init__(self, discord_bot_instance, state: BotState | None = None):
        self.discord_bot_instance = discord_bot_instance
        self.state = state or bot_state
        logger.info("Fun cog loaded")

    @commands.slash_command(name="help", description="List Franky's commands")
    async def help(self, application_context: discord.ApplicationContext) -> None:
        await application_context.respond(HELP_TEXT.format(name=self.state.config.bot_name), ephemeral=True)

    @commands.slash_command(name="quote", description="Get a random anime quote")
    async def quote(self, application_context: discord.ApplicationContext) -> None:
        picked = random.choice(ANIME_QUOTES)
        await application_context.respond(f'💬 "{picked.quote}"\n— *{picked.character}*')

    @commands.slash_command(name="guess_anime", description="Start a guess-the-anime round (admins only)")
    async def guess_anime(self, application_context: discord.ApplicationContext) -> None:
        """Start a trivia round unless one is already running in this channel."""
        if not has_permissions(application_context, administrator=True):
            await application_context.respond(ADMIN_ONLY, ephemeral=True)
            return

        channel = application_context.channel

        async def announce_timeout(game: TriviaGame) -> None:
            await channel.send(f"⏰ Time's up! Answer: **{game.answer}**")

        game = self.state.trivia.start_game(channel.id, announce_timeout)
        if game is None:
            await application_context.respond("A trivia round is already running here!", ephemeral=True)
            return

        seconds = int(self.state.trivia.timeout_seconds)
        await application_context.respond(f"🎮 **Guess the anime!** ({seconds}s)\n{game.clue}")

    @commands.slash_command(name="ping", description="Check Franky's latency")
    async def ping(self, application_context: discord.ApplicationContext) -> None:
        latency_ms = round(self.discord_bot_instance.latency * 1000)
        await application_context.respond(f"🏓 Pong! {latency_ms} ms")

    @commands.slash_command(name="diag", description="Show bot diagnostics")
    async def diag(self, application_context: discord.ApplicationContext) -> None:
        uptime = datetime.timedelta(seconds=self.state.uptime_seconds)
        lines = [
            "🩺 **Diagnostics**",
            f"Uptime: {uptime}",
            f"Channel: {application_context.channel.id}",
            f"User: {application_context.user.id}",
            f"Cached lookups: {len(self.state.response_cache)}",
            f"Active trivia: {len(self.state.trivia.games)}",
        ]
        await application_context.respond("\n".join(lines), ephemeral=True)


def setup(discord_bot_instance):
    discord_bot_instance.add_cog(FunCog(discord_bot_instance))
