"""Keyword-based scam and spam detection."""

from __future__ import annotations

from typing import Iterable

from franky.configuration.app_configuration import DEFAULT_SCAM_KEYWORDS

SCAM_KEYWORDS = tuple(DEFAULT_SCAM_KEYWORDS)


def is_scam_or_spam(message: str, keywords: Iterable[str] = SCAM_KEYWORDS) -> bool:
    """Return True when the message contains any scam keyword (case-insensitive)."""
    lower = message.lower()
    return any(keyword.lower() in lower for keyword in keywords)
