"""
Module: builder.generation.random_source

Purpose:
    Random number sources for problem generation. The generator only
    ever asks for "next integer in [low, high]", so tests can replace
    the live source with a fixed sample sequence.

Key Classes:
    - RandomSource: Protocol
    - SystemRandomSource: Wraps random.Random (optionally seeded)
    - SequenceRandomSource: Replays a fixed list of samples

Dependencies:
    - random (std)

Used By:
    - builder.generation.generator
    - builder.controller: Session-level source
"""

from __future__ import annotations

import random
from collections import deque
from typing import Iterable, Optional, Protocol, runtime_checkable

from worksheet_toolkit.core.errors import RandomSourceExhausted


@runtime_checkable
class RandomSource(Protocol):
    """Anything that can produce the next integer in a closed range."""

    def next_int(self, low: int, high: int) -> int:
        """Return an integer N with low <= N <= high."""
        ...


class SystemRandomSource:
    """
    Uniform source backed by `random.Random`.

    Example:
        >>> rng = SystemRandomSource(seed=42)
        >>> 1 <= rng.next_int(1, 9) <= 9
        True
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def next_int(self, low: int, high: int) -> int:
        return self._rng.randint(low, high)


class SequenceRandomSource:
    """
    Replays a fixed list of samples in order.

    Samples are returned as given (no range check) so a test can pin
    exactly which operands the generator sees.

    Raises:
        RandomSourceExhausted: When asked for more samples than supplied

    Example:
        >>> rng = SequenceRandomSource([3, 7])
        >>> rng.next_int(1, 9), rng.next_int(1, 9)
        (3, 7)
    """

    def __init__(self, values: Iterable[int]) -> None:
        self._values = deque(values)

    @property
    def remaining(self) -> int:
        return len(self._values)

    def next_int(self, low: int, high: int) -> int:
        if not self._values:
            raise RandomSourceExhausted(
                f"No samples left for range [{low}, {high}]"
            )
        return self._values.popleft()
