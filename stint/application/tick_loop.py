"""Shared polling loop.

A single recurring asyncio task that calls a tick handler at a fixed
period. It is created lazily, cancelled when the handler decides nothing
needs ticking, and can be created again afterwards.

To stop the loop from outside, call ``stop()``; to stop it from inside the
tick handler, call ``stop()`` as well. The current sleep is not interrupted
in that case, the loop simply does not come around again.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL = 1.0


class Ticker(Protocol):
    """What the timer engine needs from a polling loop."""

    @property
    def running(self) -> bool: ...

    def ensure_running(self, on_tick: Callable[[], None]) -> bool: ...

    def stop(self) -> None: ...


class TickLoop:
    """asyncio implementation of the shared polling loop."""

    def __init__(self, interval_seconds: float = DEFAULT_TICK_INTERVAL) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._interval = float(interval_seconds)
        self._task: asyncio.Task | None = None
        self._on_tick: Callable[[], None] | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        """Check if the loop task exists and has not finished."""
        return self._task is not None and not self._task.done()

    def ensure_running(self, on_tick: Callable[[], None]) -> bool:
        """Start the loop unless it already runs.

        Args:
            on_tick: Handler called once per period.

        Returns:
            True if a new loop task was created, False if one was already
            running or there is no running event loop to host it.
        """
        self._on_tick = on_tick
        if self.running:
            return False

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; live timer updates are disabled")
            return False

        self._task = loop.create_task(self._run(), name="stint-tick-loop")
        logger.debug(f"Tick loop started (interval={self._interval}s)")
        return True

    def stop(self) -> None:
        """Cancel the loop. Safe to call when it is not running."""
        task, self._task = self._task, None
        if task is None or task.done():
            return

        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None

        # Called from inside the loop: let _run notice and return.
        if task is not current:
            task.cancel()
        logger.debug("Tick loop stopped")

    async def _run(self) -> None:
        me = asyncio.current_task()
        while self._task is me:
            await asyncio.sleep(self._interval)
            if self._task is not me or self._on_tick is None:
                break
            try:
                self._on_tick()
            except Exception:
                logger.exception("Tick handler failed")
