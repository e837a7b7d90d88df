# kappagotchi/core/rng.py
"""
Randomness sources for the lifecycle engine.

The engine only ever asks for ``next_int(n)`` and compares the draw to an
integer threshold, so swapping in ``SequenceRandomSource`` replays a session
exactly.
"""
from __future__ import annotations
import logging
import random
from typing import Iterable, List, Optional, Protocol, runtime_checkable

_LOG = logging.getLogger("kappagotchi.core.rng")


@runtime_checkable
class RandomSource(Protocol):
    def next_int(self, exclusive_upper_bound: int) -> int:
        """Uniform integer in ``[0, exclusive_upper_bound)``."""
        ...


class SystemRandomSource:
    """Default source. Seeded sessions use ``random.Random``, others the OS entropy pool."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed) if seed is not None else random.SystemRandom()
        self.seed = seed
        _LOG.debug("SystemRandomSource initialized (seed=%s)", seed)

    def next_int(self, exclusive_upper_bound: int) -> int:
        if exclusive_upper_bound <= 0:
            raise ValueError("exclusive_upper_bound must be positive")
        return self._rng.randrange(exclusive_upper_bound)


class SequenceRandomSource:
    """Replays a fixed list of draws, cycling when exhausted.

    Each draw is reduced modulo the requested bound so a sequence written for
    one denominator stays in range for another.
    """

    def __init__(self, draws: Iterable[int]):
        self._draws: List[int] = list(draws)
        if not self._draws:
            raise ValueError("SequenceRandomSource needs at least one draw")
        self._index = 0
        self.calls: List[int] = []

    def next_int(self, exclusive_upper_bound: int) -> int:
        if exclusive_upper_bound <= 0:
            raise ValueError("exclusive_upper_bound must be positive")
        value = self._draws[self._index % len(self._draws)]
        self._index += 1
        self.calls.append(exclusive_upper_bound)
        return value % exclusive_upper_bound


def make_random_source(seed: Optional[int] = None) -> RandomSource:
    """Build the default source; a negative seed means unseeded."""
    if seed is not None and seed < 0:
        seed = None
    return SystemRandomSource(seed)
