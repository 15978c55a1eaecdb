"""
Moderation cog: ban, mute and purge.

Every command runs the same pre-checks before touching the target: the
invoker must hold the relevant permission, the target must be a member of
this server, moderators cannot act on themselves and administrators are off
limits. Failures are reported ephemerally to the invoker.
"""

import datetime

import discord
from discord import Option
from discord.ext import commands

from franky.util.constants import DURATION_CHOICES, DURATIONS, PURGE_MAX, PURGE_MIN
from franky.util.discord_utils import has_permissions
from franky.util.logger import get_logger

logger = get_logger("moderation_cog")


class ModerationCog(commands.Cog):
    """Cog containing moderation slash commands."""

    def __init__(self, discord_bot_instance):
        self.discord_bot_instance = discord_bot_instance
        logger.info("Moderation cog loaded")

    async def check_moderation_permissions(
        self,
        application_context: discord.ApplicationContext,
        target_user: discord.Member,
        required_permission_name: str,
    ) -> bool:
        """Run shared pre-checks for moderation commands.

        Parameters
        ----------
        application_context:
            Slash command context for the invoking moderator.
        target_user:
            Guild member the moderation action targets.
        required_permission_name:
            Permission attribute name required for the action.

        Returns
        -------
        bool
            ``True`` when allowed to proceed; ``False`` if an error was sent to invoker.
        """
        if not has_permissions(application_context, **{required_permission_name: True}):
            await application_context.respond("You do not have permission to use this command.", ephemeral=True)
            return False

        if not isinstance(target_user, discord.Member):
            await application_context.respond("The specified user is not a member of this server.", ephemeral=True)
            return False

        if target_user.id == application_context.user.id:
            await application_context.respond("You cannot perform moderation actions on yourself.", ephemeral=True)
            return False

        if target_user.guild_permissions.administrator:
            await application_context.respond(
                "You cannot perform moderation actions against administrators.", ephemeral=True
            )
            return False

        return True

    @commands.slash_command(name="ban", description="Ban a member from the server")
    async def ban(
        self,
        application_context: discord.ApplicationContext,
        user: Option(discord.Member, description="Member to ban"),  # type: ignore
        reason: Option(str, description="Reason for the ban", required=False, default="No reason provided"),  # type: ignore
    ) -> None:
        if not await self.check_moderation_permissions(application_context, user, "ban_members"):
            return

        try:
            await user.ban(reason=reason)
        except discord.HTTPException as exc:
            logger.error(f"Failed to ban {user}: {exc}")
            await application_context.respond(f"❌ Could not ban {user.mention}.", ephemeral=True)
            return

        logger.info(f"[BAN] {user} banned by {application_context.user}: {reason}")
        await application_context.respond(f"🔨 {user.mention} was banned. Reason: {reason}")

    @commands.slash_command(name="mute", description="Time out a member")
    async def mute(
        self,
        application_context: discord.ApplicationContext,
        user: Option(discord.Member, description="Member to mute"),  # type: ignore
        duration: Option(str, description="How long", choices=DURATION_CHOICES, default="10 mins"),  # type: ignore
    ) -> None:
        if not await self.check_moderation_permissions(application_context, user, "moderate_members"):
            return

        seconds = DURATIONS.get(duration)
        if seconds is None:
            await application_context.respond(f"Unknown duration: {duration}", ephemeral=True)
            return

        try:
            await user.timeout_for(datetime.timedelta(seconds=seconds), reason=f"Muted by {application_context.user}")
        except discord.HTTPException as exc:
            logger.error(f"Failed to mute {user}: {exc}")
            await application_context.respond(f"❌ Could not mute {user.mention}.", ephemeral=True)
            return

        logger.info(f"[MUTE] {user} muted for {duration} by {application_context.user}")
        await application_context.respond(f"🔇 {user.mention} muted for {duration}.")

    @commands.slash_command(name="purge", description="Delete recent messages in this channel")
    async def purge(
        self,
        application_context: discord.ApplicationContext,
        count: Option(int, description="Number of messages", min_value=PURGE_MIN, max_value=PURGE_MAX),  # type: ignore
    ) -> None:
        if not has_permissions(application_context, manage_messages=True):
            await application_context.respond("You do not have permission to use this command.", ephemeral=True)
            return

        if not PURGE_MIN <= count <= PURGE_MAX:
            await application_context.respond(f"Count must be between {PURGE_MIN} and {PURGE_MAX}.", ephemeral=True)
            return

        await application_context.defer(ephemeral=True)
        try:
            deleted = await application_context.channel.purge(limit=count)
        except discord.HTTPException as exc:
            logger.error(f"Error in purge command: {exc}")
            await application_context.send_followup(content=f"❌ Error: {exc}", ephemeral=True)
            return

        logger.info(f"[PURGE] {len(deleted)} message(s) removed from {application_context.channel} by {application_context.user}")
        await application_context.send_followup(content=f"🧹 Deleted {len(deleted)} message(s).", ephemeral=True)


def setup(discord_bot_instance):
    discord_bot_instance.add_cog(ModerationCog(discord_bot_instance))
