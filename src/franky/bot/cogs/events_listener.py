"""Event listener Cog for Franky.

Handles the bot lifecycle (``on_ready``) and application command errors.
Message events are handled by :mod:`franky.bot.cogs.message_listener`.
"""

import discord
from discord.ext import commands

from franky.util.logger import get_logger

logger = get_logger("events_listener_cog")


class EventsListenerCog(commands.Cog):
    """Cog containing bot lifecycle and command error handlers."""

    def __init__(self, discord_bot_instance):
        self.bot = discord_bot_instance
        logger.info("Events listener cog loaded")

    @commands.Cog.listener(name="on_ready")
    async def on_ready(self) -> None:
        if self.bot.user:
            await self.bot.change_presence(
                status=discord.Status.online,
                activity=discord.Activity(type=discord.ActivityType.watching, name="the airing schedule"),
            )
            logger.info(f"Bot connected as {self.bot.user} (ID: {self.bot.user.id})")
        else:
            logger.warning("Bot partially connected, but user information not yet available.")

        logger.info("--==--==--==--==--==--==--==--==--==--==--==--==--==--==--==--==--")

    @commands.Cog.listener(name="on_application_command_error")
    async def on_application_command_error(
        self,
        application_context: discord.ApplicationContext,
        error: discord.DiscordException,
    ) -> None:
        """Log unhandled command errors and tell the invoker something went wrong."""
        command_name = getattr(application_context.command, "qualified_name", "unknown")
        logger.error(f"Error in /{command_name}: {error}", exc_info=error)

        message = "❌ Something went wrong while running that command."
        try:
            if application_context.response.is_done():
                await application_context.send_followup(message, ephemeral=True)
            else:
                await application_context.respond(message, ephemeral=True)
        except discord.HTTPException as exc:
            logger.warning(f"Could not report command error to user: {exc}")


def setup(discord_bot_instance):
    discord_bot_instance.add_cog(EventsListenerCog(discord_bot_instance))
