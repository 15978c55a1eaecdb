"""
Utility functions and helpers for Franky.

This package provides reusable utilities:

- **logger.py**: Centralized logging configuration with colored console output,
  per-session log files, and suppression of noisy library loggers (Discord
  internals, aiohttp). Uses prompt_toolkit for console output.

- **format_utils.py**: Text rendering for Discord replies. Relative time labels,
  ellipsis truncation, length-budgeted bullet lists, airing schedules grouped
  by day in a target time zone, and recommendation listings.

- **discord_utils.py**: Permission checks and safe message deletion.

- **constants.py**: Reply strings, mute durations, help text and quotes.
"""
