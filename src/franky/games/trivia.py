"""Guess-the-anime trivia game state.

At most one game is live per channel. The whole lifecycle runs on the bot's
event loop, so no locks are used; instead every mutation happens in a
synchronous step:

- :meth:`TriviaManager.start_game` checks for a live game and registers the
  new one without awaiting in between.
- :meth:`TriviaManager.check_answer` marks the winner, cancels the timeout
  and removes the game before returning, so a pending timeout can never
  announce the answer for a game that was already won.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Optional

from franky.scheduler.task_scheduler import ScheduledTask, TaskScheduler
from franky.util.logger import get_logger

logger = get_logger("trivia")

DEFAULT_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class TriviaQuestion:
    clue: str
    answer: str


TRIVIA_QUESTIONS = (
    TriviaQuestion("What anime features a young ninja with a nine-tailed fox sealed inside him?", "Naruto"),
    TriviaQuestion(
        "In which anime do humans fight giant humanoid creatures called Titans behind three massive walls?",
        "Attack on Titan",
    ),
    TriviaQuestion(
        "What anime follows Izuku Midoriya as he trains to become the world's greatest hero?",
        "My Hero Academia",
    ),
    TriviaQuestion(
        "Which anime features a boy who can turn into a Titan and fights to protect humanity?",
        "Attack on Titan",
    ),
    TriviaQuestion("What shonen anime follows a team of ninjas from the Hidden Leaf Village?", "Naruto"),
)


@dataclass(slots=True)
class TriviaGame:
    """A live game in one channel."""

    channel_id: int
    answer: str
    clue: str
    has_winner: bool = False
    timer: Optional[ScheduledTask] = None


TimeoutHandler = Callable[[TriviaGame], Awaitable[None]]


def check_trivia_answer(message: str, answer: str) -> bool:
    """Return True when the message contains the answer, ignoring case and outer spaces."""
    return answer.lower().strip() in message.lower().strip()


class TriviaManager:
    """Owns the live trivia games, keyed by channel id.

    Parameters
    ----------
    scheduler:
        Anything with ``schedule(delay_seconds, callback)`` returning a
        cancellable handle.
    timeout_seconds:
        Time players have to answer.
    """

    def __init__(self, scheduler: TaskScheduler, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self.scheduler = scheduler
        self.timeout_seconds = timeout_seconds
        self.games: Dict[int, TriviaGame] = {}

    def is_active(self, channel_id: int) -> bool:
        return channel_id in self.games

    def start_game(
        self,
        channel_id: int,
        on_timeout: TimeoutHandler,
        question: Optional[TriviaQuestion] = None,
    ) -> Optional[TriviaGame]:
        """Create a game for ``channel_id`` unless one is already live.

        Parameters
        ----------
        channel_id:
            Channel the game runs in.
        on_timeout:
            Awaited with the game when time runs out without a winner.
        question:
            Question to ask; a random one when omitted.

        Returns
        -------
        TriviaGame | None
            The new game, or ``None`` when the channel already has one.
        """
        if channel_id in self.games:
            return None

        question = question or random.choice(TRIVIA_QUESTIONS)
        game = TriviaGame(channel_id=channel_id, answer=question.answer, clue=question.clue)

        async def expire() -> None:
            if self.games.get(channel_id) is game:
                del self.games[channel_id]
            if game.has_winner:
                return
            logger.info("[TRIVIA] Time's up in channel %s (answer: %s)", channel_id, game.answer)
            await on_timeout(game)

        game.timer = self.scheduler.schedule(self.timeout_seconds, expire, name=f"franky-trivia-{channel_id}")
        self.games[channel_id] = game
        logger.info("[TRIVIA] Game started in channel %s", channel_id)
        return game

    def check_answer(self, channel_id: int, message: str) -> Optional[TriviaGame]:
        """Resolve the channel's game if ``message`` contains its answer.

        Returns the won game, or ``None`` when there is no live game or the
        guess is wrong.
        """
        game = self.games.get(channel_id)
        if game is None or game.has_winner or not check_trivia_answer(message, game.answer):
            return None

        game.has_winner = True
        if game.timer is not None:
            game.timer.cancel()
        del self.games[channel_id]
        return game

    def cancel_game(self, channel_id: int) -> bool:
        """Stop the channel's game without announcing anything."""
        game = self.games.pop(channel_id, None)
        if game is None:
            return False
        if game.timer is not None:
            game.timer.cancel()
        return True

    def cancel_all(self) -> None:
        """Stop every live game (used at shutdown)."""
        for channel_id in list(self.games):
            self.cancel_game(channel_id)
