"""
Cancellable one-shot delayed callbacks.

Callers schedule an async callback to run after a delay and keep the returned
:class:`ScheduledTask` to cancel it. Anything exposing the same
``schedule``/``cancel`` pair can stand in for :class:`TaskScheduler`, which is
how the trivia tests drive timeouts deterministically.
"""
import asyncio
from typing import Awaitable, Callable, Set

from franky.util.logger import get_logger

logger = get_logger("task_scheduler")

Callback = Callable[[], Awaitable[None]]


class ScheduledTask:
    """Handle for one scheduled callback backed by an asyncio task."""

    def __init__(self, task: asyncio.Task[None]) -> None:
        self.task = task
        self._cancelled = False

    def cancel(self) -> bool:
        """Prevent the callback from running. Returns False if it already finished."""
        if self.task.done():
            return False
        self._cancelled = True
        self.task.cancel()
        return True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self.task.done()


class TaskScheduler:
    """
    Runs async callbacks after a delay on the running event loop.

    Attributes:
        tasks (Set[asyncio.Task]): Tasks that have not finished yet; kept so
            they are not garbage collected and can be cancelled at shutdown.
    """

    def __init__(self) -> None:
        self.tasks: Set[asyncio.Task[None]] = set()

    def schedule(self, delay_seconds: float, callback: Callback, *, name: str | None = None) -> ScheduledTask:
        """
        Run ``callback`` once after ``delay_seconds``.

        Must be called from inside a running event loop. Exceptions raised by
        the callback are logged, never propagated.
        """
        loop = asyncio.get_running_loop()
        task = loop.create_task(self.run_after(delay_seconds, callback), name=name)
        self.tasks.add(task)
        task.add_done_callback(self.tasks.discard)
        return ScheduledTask(task)

    async def run_after(self, delay_seconds: float, callback: Callback) -> None:
        await asyncio.sleep(max(0.0, delay_seconds))
        try:
            await callback()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.exception("Scheduled callback failed: %s", exc)

    async def shutdown(self) -> None:
        """Cancel every pending task and wait for them to settle."""
        pending = list(self.tasks)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self.tasks.clear()
