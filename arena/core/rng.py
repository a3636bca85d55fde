"""
Randomness sources for the combat engine.

Every roll in the engine goes through an explicit ``RandomSource`` passed by
the caller, so a run can be replayed exactly by handing in a seeded
``random.Random`` or a ``ScriptedRandom``.
"""

import math
import random
from typing import Iterable, Optional, Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """A uniform source of floats in [0, 1). ``random.Random`` satisfies it."""

    def random(self) -> float: ...


class ScriptedRandom:
    """
    Replays a fixed sequence of uniform draws.

    Used to force specific branches (dodges, crits, procs) in tests. Running
    out of values is a programming error in the caller and raises.
    """

    def __init__(self, values: Iterable[float]) -> None:
        self._values: list[float] = list(values)
        self._position: int = 0
        for value in self._values:
            if not 0.0 <= value < 1.0:
                raise ValueError(f"Scripted draws must lie in [0, 1), got {value}")

    @property
    def consumed(self) -> int:
        """Number of draws handed out so far."""
        return self._position

    @property
    def remaining(self) -> int:
        """Number of draws still available."""
        return len(self._values) - self._position

    def random(self) -> float:
        if self._position >= len(self._values):
            raise RuntimeError(
                f"ScriptedRandom exhausted after {self._position} draws"
            )
        value = self._values[self._position]
        self._position += 1
        return value


def ensure_source(rng: Optional[RandomSource]) -> RandomSource:
    """
    Returns the given source, or a fresh private generator when None.

    Args:
        rng (RandomSource | None): The caller-supplied source.

    Returns:
        RandomSource: A usable randomness source.

    """
    return rng if rng is not None else random.Random()


def roll_chance(rng: RandomSource, chance: float) -> bool:
    """Draws once and succeeds when the draw falls below ``chance``."""
    return rng.random() < chance


def roll_between(rng: RandomSource, low: int, high: int) -> int:
    """
    Rolls an integer uniformly over [low, high], inclusive of both bounds.

    A single uniform draw is consumed. A degenerate range where ``high`` is
    below ``low`` returns ``low`` without drawing.

    Args:
        rng (RandomSource): The randomness source.
        low (int): The lower bound.
        high (int): The upper bound.

    Returns:
        int: The rolled value.

    """
    if high < low:
        return low
    return math.floor(rng.random() * (high - low + 1)) + low
