"""Injectable sources of uniform random floats.

The solver never touches a global random state; it only calls an
``EntropySource`` that returns the next float in [0, 1). Seeded sources make a
solve reproducible, ``system_source`` is for runs that should differ.
"""

import random
from typing import Optional, Protocol


class EntropySource(Protocol):
    """Callable returning the next uniform float in [0, 1)."""

    def __call__(self) -> float: ...


def seeded_source(seed: Optional[int]) -> EntropySource:
    """Deterministic source; the same seed always yields the same stream."""
    return random.Random(seed).random


def system_source() -> EntropySource:
    """OS-entropy backed source for non-reproducible runs."""
    return random.SystemRandom().random


def random_index(rng: EntropySource, n: int) -> int:
    """Draw an index in ``range(n)`` from a single uniform value."""
    return min(int(rng() * n), n - 1)
