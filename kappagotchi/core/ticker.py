# kappagotchi/core/ticker.py
"""
Asynchronous driver for the lifecycle tick.

LifecycleTicker calls an async ``tick_fn`` every ``interval`` seconds until
stopped. It carries no game rules itself: the Manager hands it ``Manager.tick``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

_logger = logging.getLogger("kappagotchi.core.ticker")


class LifecycleTicker:
    """Background task that advances the simulation periodically."""

    def __init__(
        self,
        tick_fn: Callable[[], Awaitable[Any]],
        *,
        interval: float = 1.0,
        on_tick: Optional[Callable[[Any], None]] = None,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.tick_fn = tick_fn
        self.interval = interval
        self.on_tick = on_tick
        self._task: Optional[asyncio.Task] = None
        self._running = False
        self._tick_count: int = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def tick_count(self) -> int:
        return self._tick_count

    async def start(self) -> None:
        """Start the async ticker loop."""
        if self._running:
            _logger.debug("LifecycleTicker already running")
            return
        _logger.info("LifecycleTicker started (interval=%.2fs)", self.interval)
        self._running = True
        self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        """Stop the async ticker loop."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        _logger.info("LifecycleTicker stopped after %d ticks", self._tick_count)

    async def _loop(self) -> None:
        while self._running:
            try:
                await self._tick()
                await asyncio.sleep(self.interval)
            except asyncio.CancelledError:
                break
            except Exception as e:
                _logger.warning("LifecycleTicker error: %s", e, exc_info=True)
                await asyncio.sleep(self.interval)

    async def _tick(self) -> None:
        result = await self.tick_fn()
        self._tick_count += 1
        if self.on_tick:
            try:
                self.on_tick(result)
            except Exception as e:
                _logger.debug("on_tick callback failed: %s", e)
