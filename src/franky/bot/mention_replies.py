"""Canned replies for messages that address the bot by name."""

from __future__ import annotations

import re
from typing import Optional

GREETING_PATTERN = re.compile(r"\b(hi|hello)\b")


def is_bot_mentioned(message: str, bot_name: str, mentioned: bool = False) -> bool:
    """True for a real mention or when the bot's name appears anywhere in the text."""
    return mentioned or bot_name.lower() in message.lower()


def reply_for_mention(message: str, bot_name: str) -> Optional[str]:
    """Return the canned reply for a message addressed to the bot, if any.

    Checks run in a fixed order, so "hi, who are you franky" greets first.
    """
    lower = message.lower()
    name = bot_name.lower()

    if GREETING_PATTERN.search(lower):
        return "Hi there 👋"
    if f"who are you {name}" in lower:
        return f"I'm {bot_name}, the super cyborg of AnimeTown!🌸"
    if f"bye {name}" in lower:
        return "See ya later!"
    if f"thanks {name}" in lower or f"thank you {name}" in lower:
        return "Anytime, nakama! 🙌"
    return None
