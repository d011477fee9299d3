import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Run ``func`` every ``interval`` seconds on the running event loop.

    The first call happens one interval after ``start()``. Errors raised by
    ``func`` are logged and the loop keeps going; the next tick is the retry.
    """

    def __init__(self, name: str, interval: float, func: Callable[[], Awaitable]):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.name = name
        self.interval = interval
        self._func = func
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            logger.warning("Periodic task %s already running", self.name)
            return
        logger.info("Starting periodic task %s (every %ss)", self.name, self.interval)
        self._task = asyncio.create_task(self._run(), name=self.name)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self._func()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Periodic task %s failed; retrying next tick", self.name)

    async def stop(self) -> None:
        if self._task is None:
            return
        logger.info("Stopping periodic task %s", self.name)
        if not self._task.done():
            self._task.cancel()
        await asyncio.gather(self._task, return_exceptions=True)
        self._task = None
