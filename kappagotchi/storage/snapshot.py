# kappagotchi/storage/snapshot.py
from __future__ import annotations
import json
import logging
import time
from pathlib import Path
from typing import Any, Callable, Optional, Union

from pydantic import ValidationError

from kappagotchi.core.exceptions import SnapshotError
from kappagotchi.core.lifecycle import create_initial_state
from kappagotchi.data.state_types import CoreState

from .file_io import atomically_save_data, load_data

LOGGER = logging.getLogger(__name__)

DEFAULT_MIN_INTERVAL = 1.5


def decode_snapshot(data: Any) -> CoreState:
    """Validate a decoded JSON payload into a CoreState.

    Raises SnapshotError when the payload is not a structurally valid state.
    """
    if not isinstance(data, dict):
        raise SnapshotError(f"snapshot must be an object, got {type(data).__name__}")
    try:
        return CoreState.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(str(e)) from e


class SnapshotStore:
    """
    Saved game on disk.

    - load(): never fails; a missing, corrupted or invalid file means "no save"
      and yields a fresh initial state.
    - save(): skips unchanged payloads and writes at most once per
      ``min_interval`` seconds unless forced. Writes are atomic.
    """

    def __init__(
        self,
        path: Union[str, Path],
        min_interval: float = DEFAULT_MIN_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.path = Path(path).expanduser()
        self.min_interval = float(min_interval)
        self._clock = clock
        self._last_saved_json: Optional[str] = None
        self._last_save_at: Optional[float] = None
        self._pending: Optional[CoreState] = None

    # ------------------------------------------------------------------
    def load(self) -> CoreState:
        data = load_data(str(self.path), default=None)
        if data is None:
            LOGGER.info("No saved state at %s; starting fresh.", self.path)
            return create_initial_state()
        try:
            state = decode_snapshot(data)
        except SnapshotError as e:
            LOGGER.warning("Saved state at %s is invalid; starting fresh. (%s)", self.path, e)
            return create_initial_state()
        self._last_saved_json = self._encode(state)
        LOGGER.info("Loaded saved state from %s", self.path)
        return state

    # ------------------------------------------------------------------
    @staticmethod
    def _encode(state: CoreState) -> str:
        return json.dumps(state.safe_dump(), sort_keys=True)

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def save(self, state: CoreState, force: bool = False) -> bool:
        """Persist ``state``. Returns True when the file is up to date afterwards.

        A throttled save is remembered and written by the next ``flush()`` or
        the next save outside the throttle window.
        """
        encoded = self._encode(state)
        if encoded == self._last_saved_json:
            self._pending = None
            return True

        now = self._clock()
        if not force and self._last_save_at is not None and now - self._last_save_at < self.min_interval:
            self._pending = state
            LOGGER.debug("Save throttled (%.2fs since last write)", now - self._last_save_at)
            return False

        ok = atomically_save_data(str(self.path), json.loads(encoded))
        if ok:
            self._last_saved_json = encoded
            self._last_save_at = now
            self._pending = None
        return ok

    def flush(self) -> bool:
        """Write any throttled state now."""
        if self._pending is None:
            return True
        return self.save(self._pending, force=True)
