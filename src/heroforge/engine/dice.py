"""Injectable randomness for the simulation engine.

Every random draw the engine makes goes through one ``DiceRoller``. In
production it wraps a seeded ``random.Random``; in tests it wraps a
``FixedRandomSource`` or ``SequenceRandomSource`` so that outcomes can be
pinned exactly.
"""

from __future__ import annotations

import math
import random as _random
from collections.abc import Sequence
from itertools import cycle
from typing import Protocol, TypeVar, runtime_checkable

from heroforge.core.constants import PERCENT_DIE
from heroforge.core.exceptions import RandomSourceError, ValidationError
from heroforge.core.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")


@runtime_checkable
class RandomSource(Protocol):
    """Anything producing floats in ``[0, 1)``."""

    def random(self) -> float: ...


class FixedRandomSource:
    """Random source that returns the same value for every draw.

    Example:
        >>> roller = DiceRoller(source=FixedRandomSource(0.5))
        >>> roller.roll_percent()
        51
    """

    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


class SequenceRandomSource:
    """Random source that cycles through a fixed list of values."""

    def __init__(self, values: Sequence[float]) -> None:
        if not values:
            raise RandomSourceError("SequenceRandomSource needs at least one value")
        self.values = list(values)
        self._iter = cycle(self.values)

    def random(self) -> float:
        return next(self._iter)


class DiceRoller:
    """The single random source shared by every engine component.

    Example:
        >>> roller = DiceRoller(seed=42)
        >>> 1 <= roller.roll_percent() <= 100
        True
    """

    def __init__(
        self,
        *,
        seed: int | None = None,
        source: RandomSource | None = None,
    ) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional seed for a private ``random.Random``. Ignored when
                ``source`` is given.
            source: Explicit random source, typically a test double.
        """
        self._seed = seed
        self._source: RandomSource = source if source is not None else _random.Random(seed)
        logger.debug("DiceRoller initialized", seed=seed, source=type(self._source).__name__)

    def random(self) -> float:
        """Draw a float in ``[0, 1)``.

        Raises:
            RandomSourceError: If the underlying source leaves ``[0, 1)``.
        """
        value = self._source.random()
        if not 0.0 <= value < 1.0:
            raise RandomSourceError("Random source produced a value outside [0, 1)", value=value)
        return value

    def uniform_int(self, low: int, high: int) -> int:
        """Draw an integer uniformly from ``[low, high]`` inclusive.

        Raises:
            ValidationError: If ``low > high``.
        """
        if low > high:
            raise ValidationError(
                f"Invalid integer range [{low}, {high}]",
                field_name="low",
                invalid_value=low,
            )
        return low + math.floor(self.random() * (high - low + 1))

    def roll_percent(self) -> int:
        """Roll the 1..100 percentile die."""
        return self.uniform_int(1, PERCENT_DIE)

    def chance(self, probability: float) -> bool:
        """Return True with the given probability.

        Probabilities at or below 0 never succeed and at or above 1 always
        succeed; a draw is still consumed so that call sequences stay stable.
        """
        return self.random() < probability

    def choice(self, options: Sequence[T]) -> T:
        """Pick one element uniformly.

        Raises:
            RandomSourceError: If ``options`` is empty.
        """
        if not options:
            raise RandomSourceError("Cannot choose from an empty sequence")
        return options[self.uniform_int(0, len(options) - 1)]


__all__ = [
    "RandomSource",
    "FixedRandomSource",
    "SequenceRandomSource",
    "DiceRoller",
]
