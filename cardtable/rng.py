from __future__ import annotations

from typing import Callable, Iterator

# Linear congruential generator. Constants are the Numerical Recipes pair;
# they only need to be reproducible, not strong.
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
UINT32_MASK = 0xFFFFFFFF

Rng = Callable[[], float]


def rng_stream(seed: int) -> Iterator[float]:
    """Yield an endless, reproducible sequence of floats for ``seed``."""
    state = seed & UINT32_MASK
    while True:
        state = (state * LCG_MULTIPLIER + LCG_INCREMENT) & UINT32_MASK
        yield state / UINT32_MASK


def create_rng(seed: int) -> Rng:
    stream = rng_stream(seed)
    return lambda: next(stream)
