"""
Scheduled task execution for time-delayed bot actions.

This package manages delayed callbacks:

- **task_scheduler.py**: Cancellable one-shot tasks backed by asyncio. Used by
  the trivia game to announce the answer when nobody guessed it in time.
"""
