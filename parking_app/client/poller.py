# parking_app/client/poller.py
"""
Periodic refresh task for the polling client.

start()    runs the refresh coroutine once right away, then every `interval` seconds
trigger()  forces an immediate refresh (the "Refresh Now" button)
stop()     cancels the loop and waits for it to finish (teardown)

A failing refresh is logged and the loop keeps going; the next tick is the retry.
"""

import asyncio
from typing import Awaitable, Callable, Optional

from parking_app.utils.logger import get_logger

logger = get_logger(__name__)


class PeriodicTask:
    def __init__(self, refresh: Callable[[], Awaitable[None]], interval: float, name: str = "refresh"):
        self.refresh = refresh
        self.interval = interval
        self.name = name
        self._task: Optional[asyncio.Task] = None
        self._wake: Optional[asyncio.Event] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        if self.running:
            return
        self._wake = asyncio.Event()
        self._task = asyncio.create_task(self._run(), name=f"poller-{self.name}")
        logger.debug(f"[POLL] {self.name} started (every {self.interval}s)")

    def trigger(self):
        if self._wake is not None:
            self._wake.set()

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.debug(f"[POLL] {self.name} stopped")

    async def _tick(self):
        try:
            await self.refresh()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"[POLL] {self.name} refresh failed: {e}", exc_info=True)

    async def _run(self):
        while True:
            await self._tick()
            try:
                await asyncio.wait_for(self._wake.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                pass
            self._wake.clear()
