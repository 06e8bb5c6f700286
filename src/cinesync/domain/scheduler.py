"""Fixed-period timer loop for reconciliation ticks."""

from __future__ import annotations

import asyncio
from datetime import timedelta
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

log = getLogger(__name__)

DEFAULT_INTERVAL = timedelta(minutes=5)


class Scheduler:
    """Fire ``tick`` once immediately and then every ``interval``.

    Ticks are started in the background so a slow tick does not shift the period.
    At most one tick runs at a time: a tick that comes due while another is still
    in flight is skipped. Running ticks are never cancelled; ``stop`` waits for them.
    """

    def __init__(
        self,
        tick: Callable[[], Awaitable[object]],
        *,
        interval: timedelta = DEFAULT_INTERVAL,
    ) -> None:
        if interval <= timedelta(0):
            raise ValueError("Scheduler interval must be positive")
        self._tick = tick
        self._interval = interval
        self._stopping = asyncio.Event()
        self._in_flight: asyncio.Task[None] | None = None
        self.fired = 0
        self.completed = 0
        self.skipped = 0

    @property
    def running(self) -> bool:
        return self._in_flight is not None

    async def run(self, *, max_fires: int | None = None) -> None:
        """Loop until :meth:`stop` is called or ``max_fires`` ticks were due."""

        self._stopping.clear()
        due = 0
        try:
            while not self._stopping.is_set():
                self._fire()
                due += 1
                if max_fires is not None and due >= max_fires:
                    break
                try:
                    await asyncio.wait_for(
                        self._stopping.wait(), timeout=self._interval.total_seconds()
                    )
                except TimeoutError:
                    continue
        finally:
            await self._drain()

    def stop(self) -> None:
        self._stopping.set()

    def _fire(self) -> None:
        if self._in_flight is not None:
            self.skipped += 1
            log.warning("Previous sync still running, skipping this tick")
            return
        self.fired += 1
        self._in_flight = asyncio.create_task(self._run_tick())

    async def _run_tick(self) -> None:
        try:
            await self._tick()
        except Exception:
            log.exception("Sync tick failed")
        finally:
            self.completed += 1
            self._in_flight = None

    async def _drain(self) -> None:
        task = self._in_flight
        if task is not None:
            await asyncio.shield(task)
