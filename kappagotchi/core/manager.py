from __future__ import annotations
import asyncio
import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from kappagotchi.config.config import get_state_path, load_config
from kappagotchi.core import actions, lifecycle
from kappagotchi.core.events import EventEmitter
from kappagotchi.core.rng import RandomSource, make_random_source
from kappagotchi.core.rules import RuleTable
from kappagotchi.core.ticker import LifecycleTicker
from kappagotchi.data.state_types import (
    CoreState, ErrorCode, FoodKind, IdleMode, RaisingMode, Result, ReviewingMode,
)
from kappagotchi.storage.snapshot import DEFAULT_MIN_INTERVAL, SnapshotStore

logger = logging.getLogger("kappagotchi.core.manager")

SCREEN_FISHING = "fishing"
SCREEN_CATCH = "catch"
SCREEN_ROOM = "room"

MSG_ALREADY_RAISING = "You are already raising a kappa."


class Manager:
    """Single owner of the game state.

    Every operation runs the matching engine function at ``now`` (the wall
    clock unless given), keeps the new state on success, fans the events out
    through the emitter and asks the store to save. Operations are serialized
    with an asyncio lock so the ticker never interleaves with a player action.
    """

    def __init__(self, *, config: Optional[Dict[str, Any]] = None, rules: Optional[RuleTable] = None,
                 rng: Optional[RandomSource] = None, store: Optional[SnapshotStore] = None,
                 emitter: Optional[EventEmitter] = None, state: Optional[CoreState] = None,
                 clock: Callable[[], float] = time.time):
        self.config = config or {}
        self.rules = rules
        self.rng = rng
        self.store = store
        self.emitter = emitter or EventEmitter()
        self.state = state
        self.clock = clock
        self._lock = asyncio.Lock()
        self._ticker: Optional[LifecycleTicker] = None
        self._bootstrap_done = False

    # ------------------------------------------------------------------
    # bootstrap
    # ------------------------------------------------------------------
    def bootstrap(self, config_path: Union[str, Path, None] = None) -> None:
        """Fill in whatever the constructor was not given: config, rules, rng, store, state."""
        if self._bootstrap_done:
            return
        logger.info("Manager: bootstrap starting")

        if not self.config:
            self.config = load_config(config_path)

        if self.rules is None:
            self.rules = RuleTable.from_config(self.config)

        if self.rng is None:
            seed = self.config.get("main", {}).get("seed", -1)
            self.rng = make_random_source(seed)

        if self.store is None:
            interval = self.config.get("storage", {}).get("min_save_interval", DEFAULT_MIN_INTERVAL)
            self.store = SnapshotStore(get_state_path(self.config), min_interval=interval)

        if self.state is None:
            self.state = self.store.load()

        self._bootstrap_done = True
        logger.info("Manager: bootstrap complete (screen=%s)", self.screen)

    def _require_bootstrap(self) -> None:
        if not self._bootstrap_done:
            self.bootstrap()

    # ------------------------------------------------------------------
    # views
    # ------------------------------------------------------------------
    @property
    def screen(self) -> str:
        mode = self.state.mode if self.state is not None else IdleMode()
        if isinstance(mode, RaisingMode):
            return SCREEN_ROOM
        if isinstance(mode, ReviewingMode):
            return SCREEN_CATCH
        return SCREEN_FISHING

    def now(self) -> float:
        return self.clock()

    # ------------------------------------------------------------------
    # commit path
    # ------------------------------------------------------------------
    async def _apply(self, label: str, operation: Callable[[CoreState, float], Result],
                     now: Optional[float] = None) -> Result:
        self._require_bootstrap()
        async with self._lock:
            at = self.now() if now is None else now
            result = operation(self.state, at)
            if not result.ok:
                logger.info("%s refused: %s", label, result.error.message)
                return result
            self.state = result.state
            if result.events:
                logger.debug("%s -> %s", label, [e.type.value for e in result.events])
            self.store.save(self.state)
        await self.emitter.emit_all(result.events)
        return result

    # ------------------------------------------------------------------
    # operations
    # ------------------------------------------------------------------
    async def tick(self, now: Optional[float] = None) -> Result:
        return await self._apply(
            "tick", lambda s, at: lifecycle.tick(s, at, self.rng, rules=self.rules), now)

    async def fish(self, now: Optional[float] = None) -> Result:
        def _fish(state: CoreState, at: float) -> Result:
            if state.kappa is not None:
                return Result.failure(state, ErrorCode.NOT_ALLOWED, MSG_ALREADY_RAISING)
            candidate = actions.roll_catch(self.rng, self.rules)
            return Result.success(actions.set_caught(state, candidate))
        return await self._apply("fish", _fish, now)

    async def adopt(self, now: Optional[float] = None) -> Result:
        return await self._apply("adopt", lambda s, at: actions.adopt_caught(s, at, self.rules), now)

    async def release(self, now: Optional[float] = None) -> Result:
        return await self._apply("release", lambda s, at: Result.success(actions.release_caught(s)), now)

    async def water(self, now: Optional[float] = None) -> Result:
        return await self._apply("water", actions.apply_water, now)

    async def feed(self, kind: Union[FoodKind, str], now: Optional[float] = None) -> Result:
        kind = FoodKind(kind)
        return await self._apply(
            f"feed {kind.value}", lambda s, at: actions.apply_feed(s, kind, at, self.rules), now)

    async def buy(self, kind: Union[FoodKind, str], now: Optional[float] = None) -> Result:
        kind = FoodKind(kind)
        return await self._apply(
            f"buy {kind.value}", lambda s, at: actions.buy_shop_item(s, kind, self.rules), now)

    async def grant_coins(self, amount: int, now: Optional[float] = None) -> Result:
        return await self._apply("grant_coins", lambda s, at: actions.grant_coins(s, amount), now)

    async def claim_ad_reward(self, now: Optional[float] = None) -> Result:
        return await self._apply("ad_reward", lambda s, at: actions.claim_ad_reward(s, self.rules), now)

    # ------------------------------------------------------------------
    # runtime
    # ------------------------------------------------------------------
    def flush(self) -> bool:
        """Write any throttled save now."""
        if self.store is None or self.state is None:
            return True
        return self.store.save(self.state, force=True)

    async def run(self, stop_event: Optional[asyncio.Event] = None,
                  on_tick: Optional[Callable[[Result], None]] = None) -> None:
        """Tick until ``stop_event`` is set or the task is cancelled."""
        self._require_bootstrap()
        interval = float(self.config.get("ticker", {}).get("interval", 1.0))
        self._ticker = LifecycleTicker(self.tick, interval=interval, on_tick=on_tick)
        stop_event = stop_event or asyncio.Event()
        await self._ticker.start()
        try:
            await stop_event.wait()
        finally:
            await self._ticker.stop()
            self.flush()
            logger.info("Manager: stopped")

    @classmethod
    async def bootstrap_and_run(cls, config_path: Union[str, Path, None] = None,
                                on_tick: Optional[Callable[[Result], None]] = None) -> int:
        manager = cls()
        manager.bootstrap(config_path)
        try:
            await manager.run(on_tick=on_tick)
        except asyncio.CancelledError:
            logger.info("Manager: run cancelled")
        return 0
