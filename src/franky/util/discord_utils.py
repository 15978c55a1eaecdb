"""
discord_utils.py
================

Low-level Discord helpers for Franky: permission checks and message deletion.
Nothing here keeps state.
"""

from typing import Union

import discord

from franky.util.logger import get_logger

logger = get_logger("discord_utils")


def has_permissions(application_context: discord.ApplicationContext, **required_permissions) -> bool:
    """
    Check if the command issuer has all specified permissions in the guild.

    Args:
        application_context (discord.ApplicationContext): The command context.
        **required_permissions: Permission flags to check.

    Returns:
        bool: True if all permissions are present, False otherwise.
    """
    if not isinstance(application_context.author, discord.Member):
        return False
    return all(getattr(application_context.author.guild_permissions, name, False) for name in required_permissions)


def is_administrator(member: Union[discord.User, discord.Member]) -> bool:
    """True only for guild members holding the administrator permission."""
    if not isinstance(member, discord.Member):
        return False
    return bool(member.guild_permissions.administrator)


def bot_can_manage_messages(channel: discord.abc.GuildChannel, guild: discord.Guild | None) -> bool:
    """
    Determine if the bot may delete messages in ``channel``.

    Args:
        channel: The channel to check permissions for.
        guild: Guild used to resolve the bot's member object.

    Returns:
        bool: True if the bot can read and manage messages, False otherwise.
    """
    me = getattr(guild, "me", None)
    if me is None:
        return False

    permissions = channel.permissions_for(me)
    return permissions.read_messages and permissions.manage_messages


async def safe_delete_message(message: discord.Message) -> bool:
    """
    Attempt to delete a Discord message, suppressing recoverable errors.

    Args:
        message (discord.Message): The message to delete.

    Returns:
        bool: True if deletion succeeded, False otherwise.
    """
    try:
        await message.delete()
        return True
    except discord.NotFound:
        return False
    except discord.Forbidden:
        logger.warning(f"No permission to delete message {message.id}")
    except discord.HTTPException as exc:
        logger.error(f"Error deleting message {message.id}: {exc}")
    return False
