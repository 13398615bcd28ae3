"""
Module: builder.generation

Purpose:
    Randomised arithmetic problem generation with an injectable
    random source for deterministic tests.

Key Functions:
    - generate_problems(): Produce `count` problems for an operator

Key Classes:
    - RandomSource: Protocol for "next integer in range"
    - SystemRandomSource: random.Random-backed source
    - SequenceRandomSource: Replays fixed samples (tests)
"""

from .random_source import RandomSource, SystemRandomSource, SequenceRandomSource
from .generator import generate_problems

__all__ = [
    "RandomSource",
    "SystemRandomSource",
    "SequenceRandomSource",
    "generate_problems",
]
