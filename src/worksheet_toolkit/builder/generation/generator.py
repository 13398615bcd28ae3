"""
Module: builder.generation.generator

Purpose:
    Produce a sequence of arithmetic problems for an operator, count and
    operand range.

Algorithm:
    Per problem:
    1. Draw a, b uniformly from [range.min, range.max] (a first)
    2. subtract: first = max(a, b), second = min(a, b)
    3. divide: second = max(1, b), first = a * second (exact division;
       only the quotient and divisor are range-bound)
    4. add / multiply: first = a, second = b

Key Functions:
    - generate_problems(): Main entry point

Dependencies:
    - core.models: Operator, Problem, OperandRange
    - .random_source: RandomSource

Used By:
    - builder.controller: Worksheet regeneration
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from worksheet_toolkit.core.errors import ConfigurationError
from worksheet_toolkit.core.models import Operator, OperandRange, Problem

from .random_source import RandomSource, SystemRandomSource

logger = logging.getLogger(__name__)


def generate_problems(
    operator: Union[Operator, str],
    count: int,
    operand_range: OperandRange,
    rng: Optional[RandomSource] = None,
) -> List[Problem]:
    """
    Generate `count` random problems for `operator`.

    Stateless: nothing is retained between calls. Output is only
    reproducible when `rng` is seeded or replays fixed samples.

    Args:
        operator: Operator (or its name/symbol)
        count: Number of problems; 0 yields an empty list
        operand_range: Inclusive bounds for sampled operands
        rng: Random source (default: unseeded SystemRandomSource)

    Returns:
        List of exactly `count` Problems

    Raises:
        ConfigurationError: If count < 0, range.min > range.max or the
            operator is unknown
        RandomSourceExhausted: If a bounded rng runs out of samples

    Example:
        >>> rng = SequenceRandomSource([3, 7, 2, 9])
        >>> [p.as_text() for p in generate_problems("add", 2, OperandRange(1, 9), rng)]
        ['3 + 7', '2 + 9']
    """
    op = Operator.parse(operator)
    if isinstance(count, bool) or not isinstance(count, int):
        raise ConfigurationError(f"count must be an integer: {count!r}")
    if count < 0:
        raise ConfigurationError(f"count must be non-negative: {count}")
    # OperandRange validates itself, but callers may hand in a duck-typed range
    if operand_range.min > operand_range.max:
        raise ConfigurationError(
            f"Operand range min ({operand_range.min}) must be <= max ({operand_range.max})"
        )

    if rng is None:
        rng = SystemRandomSource()

    problems: List[Problem] = []
    for _ in range(count):
        a = rng.next_int(operand_range.min, operand_range.max)
        b = rng.next_int(operand_range.min, operand_range.max)
        problems.append(_build_problem(op, a, b))

    logger.debug(
        f"Generated {count} {op.value} problems in [{operand_range.min}, {operand_range.max}]"
    )
    return problems


def _build_problem(op: Operator, a: int, b: int) -> Problem:
    """Apply the operator-specific operand rules to a sampled pair."""
    if op is Operator.SUBTRACT:
        return Problem(max(a, b), min(a, b), op)
    if op is Operator.DIVIDE:
        divisor = max(1, b)  # ranges may include 0
        return Problem(a * divisor, divisor, op)
    return Problem(a, b, op)
