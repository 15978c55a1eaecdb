"""Discord cogs for Franky.

Each module exposes a ``setup(bot)`` function registering its cog:

- **anime_cmds.py**: ``/airing``, ``/calendar`` and ``/recommend``.
- **fun_cmds.py**: ``/help``, ``/quote``, ``/guess_anime``, ``/ping``, ``/diag``.
- **moderation_cmds.py**: ``/ban``, ``/mute`` and ``/purge``.
- **message_listener.py**: Trivia answers, mention replies and scam removal.
- **events_listener.py**: Ready logging and command error handling.
"""
