"""Message listener Cog for Franky.

Every non-bot message goes through three steps, in order:

1. trivia: a correct guess ends the channel's running round;
2. mentions: canned replies when someone talks to Franky;
3. scam filter: known scam phrases are deleted when the author is not an
   administrator and the bot may manage messages in the channel.
"""

import discord
from discord.ext import commands

from franky.bot.bot_state import BotState, bot_state
from franky.bot.mention_replies import is_bot_mentioned, reply_for_mention
from franky.moderation.scam_filter import is_scam_or_spam
from franky.util.discord_utils import bot_can_manage_messages, is_administrator, safe_delete_message
from franky.util.logger import get_logger

logger = get_logger("message_listener_cog")


class MessageListenerCog(commands.Cog):
    """Cog responsible for handling message creation events."""

    def __init__(self, discord_bot_instance, state: BotState | None = None):
        """
        Initialize the message listener cog.

        Parameters
        ----------
        discord_bot_instance:
            The Discord bot instance to attach this cog to.
        state:
            Shared services; the module-level state when omitted.
        """
        self.bot = discord_bot_instance
        self.state = state or bot_state
        logger.info("Message listener cog loaded")

    @commands.Cog.listener(name="on_message")
    async def on_message(self, message: discord.Message) -> None:
        if message.author.bot or message.author == self.bot.user:
            return

        content = message.content or ""

        game = self.state.trivia.check_answer(message.channel.id, content)
        if game is not None:
            logger.info(f"[TRIVIA] {message.author} answered {game.answer!r} in channel {message.channel.id}")
            await message.channel.send(f"✅ Correct, {message.author.mention}! Answer: **{game.answer}**")
            return

        bot_name = self.state.config.bot_name
        mentioned = self.bot.user is not None and self.bot.user in message.mentions
        if is_bot_mentioned(content, bot_name, mentioned):
            reply = reply_for_mention(content, bot_name)
            if reply is not None:
                await message.channel.send(reply)
                return

        await self.moderate_message(message)

    async def moderate_message(self, message: discord.Message) -> bool:
        """Delete ``message`` if it looks like a scam. Returns True when deleted."""
        if not is_scam_or_spam(message.content or "", self.state.config.scam_keywords):
            return False
        if is_administrator(message.author):
            return False
        if not bot_can_manage_messages(message.channel, message.guild):
            logger.warning(f"Scam message from {message.author} in {message.channel}, but cannot manage messages")
            return False

        deleted = await safe_delete_message(message)
        if deleted:
            logger.info(f"[SCAM] Deleted message from {message.author} in {message.channel}")
        return deleted


def setup(discord_bot_instance):
    discord_bot_instance.add_cog(MessageListenerCog(discord_bot_instance))
