"""
Periodic tick driver for the genetic solver.

Runs a synchronous tick function at a fixed interval inside a background
asyncio task, with explicit start/stop handles so the loop can be shut down
cleanly instead of living for the whole process.
"""

import asyncio
import contextlib
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

__all__ = ["TickDriver"]


class TickDriver:
    """Manage the lifecycle of one periodic tick loop."""

    def __init__(
        self,
        tick: Callable[[], None],
        interval: Callable[[], float],
        name: str = "genetic-solver-driver"
    ) -> None:
        """
        Args:
            tick: Function run once per tick; one call finishes before the next
            interval: Returns the delay between ticks, read before every sleep
            name: Name given to the background task
        """
        self._tick = tick
        self._interval = interval
        self._name = name
        self._task: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Launch the tick loop in the background (idempotent)."""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._run(), name=self._name)
            self._task.add_done_callback(self._report_failure)
            logger.info(f"[TickDriver] {self._name} started")

    async def stop(self) -> None:
        """
        Cancel the tick loop and wait for it to finish.

        Raises:
            Exception: Whatever made the tick loop fail, if it failed
        """
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info(f"[TickDriver] {self._name} stopped")

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def raise_if_stopped(self) -> None:
        """Raise if the tick loop is no longer running."""
        task = self._task
        if task is None or task.cancelled():
            raise RuntimeError(f"{self._name} is not running")
        if task.done():
            exc = task.exception()
            if exc is not None:
                raise exc
            raise RuntimeError(f"{self._name} exited")

    @property
    def task(self) -> Optional[asyncio.Task]:
        return self._task

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _run(self) -> None:
        while True:
            self._tick()
            await asyncio.sleep(self._interval())

    def _report_failure(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"[TickDriver] {self._name} crashed: {exc}", exc_info=exc)
