"""Named periodic timers on the running asyncio loop."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

FireCallback = Callable[[str], Awaitable[object]]


class PeriodicTimer:
    """Fires named timers: once after an initial delay, then every period.

    Timers run independently of any other refresh trigger. A callback that
    raises is logged and the timer keeps going.

    Example:
        ```python
        timer = PeriodicTimer(on_fire=lambda name: dispatcher.dispatch(TimerFired(name)))
        timer.register("refreshDpaList", initial_delay=60, period=86400)
        ...
        await timer.shutdown()
        ```
    """

    def __init__(self, on_fire: FireCallback) -> None:
        self._on_fire = on_fire
        self._tasks: dict[str, asyncio.Task] = {}

    def register(self, name: str, initial_delay: float, period: float) -> None:
        """Start (or restart) a named timer on the running loop.

        Args:
            name: Timer name passed to the callback on every fire
            initial_delay: Seconds before the first fire
            period: Seconds between fires
        """
        if period <= 0:
            raise ValueError("Timer period must be positive")
        self.cancel(name)
        self._tasks[name] = asyncio.create_task(
            self._run(name, initial_delay, period), name=f"timer:{name}"
        )

    async def _run(self, name: str, initial_delay: float, period: float) -> None:
        await asyncio.sleep(initial_delay)
        while True:
            logger.info("Periodic timer %s fired", name)
            try:
                await self._on_fire(name)
            except Exception:
                logger.exception("Timer %s callback failed", name)
            await asyncio.sleep(period)

    def cancel(self, name: str) -> bool:
        """Stop a timer.

        Returns:
            True if a running timer was cancelled
        """
        task = self._tasks.pop(name, None)
        if task is None:
            return False
        task.cancel()
        return True

    async def shutdown(self) -> None:
        """Cancel all timers and wait for them to finish."""
        tasks = list(self._tasks.values())
        self._tasks.clear()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    @property
    def names(self) -> list[str]:
        return list(self._tasks)
