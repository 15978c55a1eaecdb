import asyncio
from unittest.mock import AsyncMock

import pytest

from franky.games.trivia import TRIVIA_QUESTIONS, TriviaManager, TriviaQuestion, check_trivia_answer
from franky.scheduler.task_scheduler import TaskScheduler

QUESTION = TriviaQuestion("Ninja with a nine-tailed fox?", "Naruto")


class FakeHandle:
    def __init__(self, callback):
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> bool:
        self.cancelled = True
        return True

    async def fire(self) -> None:
        await self.callback()


class FakeScheduler:
    """Records scheduled callbacks so tests decide when timeouts fire."""

    def __init__(self) -> None:
        self.handles: list[FakeHandle] = []

    def schedule(self, delay_seconds, callback, *, name=None):
        handle = FakeHandle(callback)
        self.handles.append(handle)
        return handle


def test_check_trivia_answer_is_case_insensitive_substring():
    assert check_trivia_answer("I think it's NARUTO!", "Naruto")
    assert check_trivia_answer("  attack on titan ", "Attack on Titan")
    assert not check_trivia_answer("Bleach", "Naruto")


def test_trivia_questions_have_answers():
    assert TRIVIA_QUESTIONS
    assert all(question.clue and question.answer for question in TRIVIA_QUESTIONS)


def test_only_one_game_per_channel():
    manager = TriviaManager(FakeScheduler())

    first = manager.start_game(1, AsyncMock(), QUESTION)
    second = manager.start_game(1, AsyncMock(), QUESTION)
    other_channel = manager.start_game(2, AsyncMock(), QUESTION)

    assert first is not None
    assert second is None
    assert other_channel is not None
    assert manager.is_active(1) and manager.is_active(2)


def test_correct_answer_wins_and_cancels_timer():
    scheduler = FakeScheduler()
    manager = TriviaManager(scheduler)
    game = manager.start_game(1, AsyncMock(), QUESTION)

    assert manager.check_answer(1, "is it bleach?") is None
    won = manager.check_answer(1, "naruto")

    assert won is game
    assert game.has_winner is True
    assert scheduler.handles[0].cancelled is True
    assert not manager.is_active(1)
    assert manager.check_answer(1, "naruto") is None


@pytest.mark.asyncio
async def test_timeout_after_win_does_not_announce():
    scheduler = FakeScheduler()
    manager = TriviaManager(scheduler)
    on_timeout = AsyncMock()
    manager.start_game(1, on_timeout, QUESTION)

    manager.check_answer(1, "Naruto")
    await scheduler.handles[0].fire()

    on_timeout.assert_not_awaited()


@pytest.mark.asyncio
async def test_timeout_without_winner_announces_and_clears():
    scheduler = FakeScheduler()
    manager = TriviaManager(scheduler)
    on_timeout = AsyncMock()
    game = manager.start_game(1, on_timeout, QUESTION)

    await scheduler.handles[0].fire()

    on_timeout.assert_awaited_once_with(game)
    assert not manager.is_active(1)
    assert manager.check_answer(1, "Naruto") is None


@pytest.mark.asyncio
async def test_stale_timeout_does_not_touch_newer_game():
    scheduler = FakeScheduler()
    manager = TriviaManager(scheduler)
    first_timeout = AsyncMock()
    manager.start_game(1, first_timeout, QUESTION)
    manager.check_answer(1, "Naruto")
    newer = manager.start_game(1, AsyncMock(), QUESTION)

    await scheduler.handles[0].fire()

    first_timeout.assert_not_awaited()
    assert manager.games[1] is newer


def test_cancel_all_stops_every_game():
    scheduler = FakeScheduler()
    manager = TriviaManager(scheduler)
    manager.start_game(1, AsyncMock(), QUESTION)
    manager.start_game(2, AsyncMock(), QUESTION)

    manager.cancel_all()

    assert manager.games == {}
    assert all(handle.cancelled for handle in scheduler.handles)
    assert manager.cancel_game(1) is False


@pytest.mark.asyncio
async def test_real_scheduler_timeout_fires():
    scheduler = TaskScheduler()
    manager = TriviaManager(scheduler, timeout_seconds=0)
    on_timeout = AsyncMock()
    manager.start_game(5, on_timeout, QUESTION)

    await asyncio.sleep(0.01)

    on_timeout.assert_awaited_once()
    assert not manager.is_active(5)


@pytest.mark.asyncio
async def test_real_scheduler_win_cancels_timeout():
    scheduler = TaskScheduler()
    manager = TriviaManager(scheduler, timeout_seconds=0.05)
    on_timeout = AsyncMock()
    manager.start_game(5, on_timeout, QUESTION)

    manager.check_answer(5, "naruto")
    await asyncio.sleep(0.1)

    on_timeout.assert_not_awaited()
    await scheduler.shutdown()
