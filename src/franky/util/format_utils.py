"""Text formatting for Discord replies.

All renderers return plain UTF-8 text and respect a character budget: when
content does not fit, trailing sections are replaced with a ``…and more``
marker instead of raising or overflowing.
"""

from __future__ import annotations

import math
import time
from datetime import datetime, tzinfo
from typing import Dict, List, Optional, Sequence
from zoneinfo import ZoneInfo

from franky.datatypes.anime_datatypes import AiringItem, EnhancedRecommendation
from franky.util.logger import get_logger

logger = get_logger("format_utils")

DEFAULT_MAX_CHARS = 900
RECOMMENDATION_MAX_CHARS = 1900
ELLIPSIS = "…"
MORE_MARKER = "…and more"
NO_UPCOMING_EPISODES = "No upcoming episodes found."

BULLET = "•"
CLOCK_EMOJI = "🕒"
DAY_EMOJI = "📅"

NOW_THRESHOLD_MS = 60_000


def truncate(text: str, limit: int) -> str:
    """Cut ``text`` to at most ``limit`` characters, ending with an ellipsis when cut."""
    if len(text) <= limit:
        return text
    if limit <= 1:
        return ELLIPSIS
    return text[: limit - 1] + ELLIPSIS


def rel_time(target_unix_seconds: float, now_ms: Optional[float] = None, past_label: str = "ended") -> str:
    """Describe how far ``target_unix_seconds`` is from now.

    Args:
        target_unix_seconds: Moment to describe.
        now_ms: Current time in milliseconds; defaults to the wall clock.
        past_label: Label for moments at least a minute in the past
            (``"ended"`` or ``"started"``).

    Returns:
        ``past_label``, ``"now"`` within a minute either way, or ``in 5m``,
        ``in 2h 10m``, ``in 3d 4h`` style labels without zero sub-units.
    """
    if now_ms is None:
        now_ms = time.time() * 1000
    diff_ms = target_unix_seconds * 1000 - now_ms

    if diff_ms <= -NOW_THRESHOLD_MS:
        return past_label
    if abs(diff_ms) < NOW_THRESHOLD_MS:
        return "now"

    minutes = math.floor(diff_ms / 60_000 + 0.5)
    if minutes < 60:
        return f"in {minutes}m"

    hours, leftover_minutes = divmod(minutes, 60)
    if hours < 24:
        return f"in {hours}h {leftover_minutes}m" if leftover_minutes else f"in {hours}h"

    days, leftover_hours = divmod(hours, 24)
    return f"in {days}d {leftover_hours}h" if leftover_hours else f"in {days}d"


def fit_sections(
    sections: Sequence[str],
    header: Optional[str] = None,
    max_chars: int = DEFAULT_MAX_CHARS,
    joiner: str = "\n",
    more_available: bool = False,
) -> str:
    """Join ``header`` and ``sections`` without exceeding ``max_chars``.

    Sections are appended one at a time. The first one that would overflow is
    dropped along with everything after it and a ``…and more`` marker takes
    its place; earlier sections are then removed newest first until the
    marker fits. ``more_available`` forces the marker even when everything
    fits (content was already cut upstream). If the header and marker alone
    still overflow, the header goes too.
    """
    parts: List[str] = [header] if header else []
    content_start = len(parts)
    needs_marker = more_available

    for section in sections:
        parts.append(section)
        if len(joiner.join(parts)) > max_chars:
            parts.pop()
            needs_marker = True
            break

    if not needs_marker:
        return truncate(joiner.join(parts), max_chars)

    parts.append(MORE_MARKER)
    while len(parts) > content_start + 1 and len(joiner.join(parts)) > max_chars:
        del parts[-2]

    if len(joiner.join(parts)) > max_chars:
        parts = [MORE_MARKER]
    return truncate(joiner.join(parts), max_chars)


def bullet_list(
    items: Sequence[str],
    header: Optional[str] = None,
    max_chars: int = DEFAULT_MAX_CHARS,
    joiner: str = "\n\n",
) -> str:
    """Join pre-rendered entries under an optional header within ``max_chars``.

    A header with no entries renders as an empty string so callers never post
    a header-only block; callers that show their own header must handle the
    empty case themselves.
    """
    if not items and header:
        return ""
    return fit_sections(items, header=header, max_chars=max_chars, joiner=joiner)


def resolve_timezone(tz_name: Optional[str]) -> Optional[tzinfo]:
    """Return the zone called ``tz_name``, or ``None`` when it is unknown."""
    if not tz_name:
        return None
    try:
        return ZoneInfo(tz_name)
    except (KeyError, ValueError):
        logger.warning("Unknown time zone %r; using local time", tz_name)
        return None


def to_datetime(unix_seconds: float, zone: Optional[tzinfo]) -> datetime:
    """Convert unix seconds to a datetime in ``zone`` (naive local time when ``None``)."""
    if zone is None:
        return datetime.fromtimestamp(unix_seconds)
    return datetime.fromtimestamp(unix_seconds, tz=zone)


def format_clock(value: datetime) -> str:
    """``7:05 PM`` style time of day."""
    hour = value.hour % 12 or 12
    return f"{hour}:{value:%M} {value:%p}"


def format_date_time(value: datetime) -> str:
    """``Oct 18, 2026, 7:05 PM`` style date and time."""
    return f"{value:%b} {value.day}, {value.year}, {format_clock(value)}"


def format_day(value: datetime) -> str:
    """``Sun, Oct 18`` style calendar day."""
    return f"{value:%a}, {value:%b} {value.day}"


def format_airing_list(
    items: Sequence[AiringItem],
    limit: int = 5,
    tz: Optional[str] = "UTC",
    header: Optional[str] = None,
    group_by_day: bool = False,
    max_chars: int = DEFAULT_MAX_CHARS,
    now_ms: Optional[float] = None,
) -> str:
    """Render upcoming episodes as a reply no longer than ``max_chars``.

    Args:
        items: Episodes sorted by airing time.
        limit: Maximum number of episodes shown; extra ones add ``…and more``.
        tz: IANA zone used for dates and day grouping. Unknown zones fall
            back to local time.
        header: Optional first line (also kept above the empty-result line).
        group_by_day: Bucket entries under per-day headers in ``tz``.
        max_chars: Character budget for the whole reply.
        now_ms: Current time in milliseconds for relative labels.

    Returns:
        The rendered text, or ``"No upcoming episodes found."`` (after the
        header, when given) for an empty list.
    """
    if not items:
        return f"{header}\n{NO_UPCOMING_EPISODES}" if header else NO_UPCOMING_EPISODES

    if now_ms is None:
        now_ms = time.time() * 1000
    zone = resolve_timezone(tz)
    shown = list(items[:limit])
    more_available = len(items) > limit

    if not group_by_day:
        sections = []
        for item in shown:
            when = format_date_time(to_datetime(item.airing_at, zone))
            relative = rel_time(item.airing_at, now_ms)
            sections.append(f"{BULLET} {item.title} — Ep {item.episode} at {when} ({relative})")
        return fit_sections(sections, header=header, max_chars=max_chars, joiner="\n", more_available=more_available)

    groups: Dict[str, List[str]] = {}
    labels: Dict[str, str] = {}
    for item in shown:
        aired = to_datetime(item.airing_at, zone)
        day_key = f"{aired:%Y-%m-%d}"
        labels.setdefault(day_key, format_day(aired))
        relative = rel_time(item.airing_at, now_ms)
        entry = f"{CLOCK_EMOJI} {format_clock(aired)} {BULLET} {item.title} — Ep {item.episode} ({relative})"
        groups.setdefault(day_key, []).append(entry)

    sections = [f"{DAY_EMOJI} {labels[day_key]}\n" + "\n".join(entries) for day_key, entries in groups.items()]
    return fit_sections(sections, header=header, max_chars=max_chars, joiner="\n\n", more_available=more_available)


def format_score(score: Optional[int]) -> str:
    """AniList 0-100 score as ``8.5``, or ``N/A``."""
    if score is None:
        return "N/A"
    return f"{score / 10:.1f}"


def format_episodes(episodes: Optional[int]) -> str:
    return "?" if episodes is None else str(episodes)


def format_themes(themes: Sequence[str]) -> str:
    if not themes:
        return "—"
    return ", ".join(themes[:4])


def format_recommendations(
    recs: Sequence[EnhancedRecommendation],
    query: str,
    max_chars: int = RECOMMENDATION_MAX_CHARS,
) -> str:
    """Render recommendations as a numbered list, or a "nothing found" line echoing ``query``."""
    if not recs:
        return f'No recommendations found for "{query}". Try a different query!'

    header = f"🎯 **{len(recs)} Recommendation{'s' if len(recs) > 1 else ''}**"
    blocks = []
    for index, rec in enumerate(recs, start=1):
        lines = [
            f"{index}. **{rec.title}**",
            f"   {format_episodes(rec.episodes)} eps {BULLET} {format_score(rec.score)}/10 {BULLET} {format_themes(rec.themes)}",
        ]
        if rec.description:
            description = rec.description[:120] + "..." if len(rec.description) > 120 else rec.description
            lines.append(f"   {description}")
        blocks.append("\n".join(lines))

    return fit_sections(blocks, header=header, max_chars=max_chars, joiner="\n\n")
