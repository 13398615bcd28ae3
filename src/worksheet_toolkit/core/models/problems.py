"""
Module: core.models.problems

Purpose:
    Operator, Problem and OperandRange models. Problems validate their
    operator-specific invariants on construction so an invalid problem
    can never reach the layout or export stages.

Key Classes:
    - Operator: add/subtract/multiply/divide with symbol and display name
    - Problem: first_operand, second_operand, operator
    - OperandRange: Inclusive [min, max] integer bounds

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - builder.generation.generator: Produces Problems
    - builder.layout: Places Problems on a grid
    - builder.output.rasterizer: Draws Problems
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from ..errors import ConfigurationError


class Operator(str, Enum):
    """
    Supported arithmetic operators.

    Values are the plain names used in settings payloads; `symbol` is
    what gets printed on the worksheet.

    Example:
        >>> Operator.parse("÷")
        <Operator.DIVIDE: 'divide'>
        >>> Operator.DIVIDE.symbol
        '÷'
    """

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def display_name(self) -> str:
        """Heading name, e.g. "Addition"."""
        return _DISPLAY_NAMES[self]

    def apply(self, first: int, second: int) -> int:
        """Compute the answer for `first <op> second` (integer division)."""
        if self is Operator.ADD:
            return first + second
        if self is Operator.SUBTRACT:
            return first - second
        if self is Operator.MULTIPLY:
            return first * second
        return first // second

    @classmethod
    def parse(cls, value: Union["Operator", str]) -> "Operator":
        """
        Resolve an operator from an enum member, its value or its symbol.

        Args:
            value: Operator, "add"/"subtract"/..., or "+"/"-"/"×"/"÷"

        Returns:
            Matching Operator

        Raises:
            ConfigurationError: If value names no supported operator
        """
        if isinstance(value, Operator):
            return value
        if isinstance(value, str):
            key = value.strip()
            for op in cls:
                if key.lower() == op.value or key == op.symbol:
                    return op
            # ASCII fallbacks for the printed symbols
            if key in ("*", "x"):
                return cls.MULTIPLY
            if key == "/":
                return cls.DIVIDE
        raise ConfigurationError(f"Unsupported operator: {value!r}")


_SYMBOLS = {
    Operator.ADD: "+",
    Operator.SUBTRACT: "-",
    Operator.MULTIPLY: "×",
    Operator.DIVIDE: "÷",
}

_DISPLAY_NAMES = {
    Operator.ADD: "Addition",
    Operator.SUBTRACT: "Subtraction",
    Operator.MULTIPLY: "Multiplication",
    Operator.DIVIDE: "Division",
}


@dataclass(frozen=True)
class Problem:
    """
    A single arithmetic problem (immutable).

    Attributes:
        first_operand: Left-hand operand (dividend for division)
        second_operand: Right-hand operand (divisor for division)
        operator: Operator joining the operands

    Invariants:
        - subtract: first_operand >= second_operand (non-negative result)
        - divide: second_operand >= 1 and first_operand % second_operand == 0

    Example:
        >>> Problem(12, 3, Operator.DIVIDE).answer
        4
    """

    first_operand: int
    second_operand: int
    operator: Operator

    def __post_init__(self) -> None:
        """Validate operator-specific invariants on construction."""
        if not isinstance(self.operator, Operator):
            object.__setattr__(self, "operator", Operator.parse(self.operator))

        if self.operator is Operator.SUBTRACT and self.first_operand < self.second_operand:
            raise ValueError(
                f"Subtraction would be negative: {self.first_operand} - {self.second_operand}"
            )
        if self.operator is Operator.DIVIDE:
            if self.second_operand < 1:
                raise ValueError(f"Divisor must be >= 1: {self.second_operand}")
            if self.first_operand % self.second_operand != 0:
                raise ValueError(
                    f"Division must be exact: {self.first_operand} ÷ {self.second_operand}"
                )

    @property
    def answer(self) -> int:
        return self.operator.apply(self.first_operand, self.second_operand)

    def as_text(self) -> str:
        """Single-line rendering like "12 ÷ 3"."""
        return f"{self.first_operand} {self.operator.symbol} {self.second_operand}"


@dataclass(frozen=True)
class OperandRange:
    """
    Inclusive integer bounds for sampled operands.

    Attributes:
        min: Smallest value that may be drawn
        max: Largest value that may be drawn

    Invariants:
        - min <= max

    Example:
        >>> OperandRange(1, 9).span
        9
    """

    min: int
    max: int

    def __post_init__(self) -> None:
        """Validate bounds on construction."""
        if self.min > self.max:
            raise ConfigurationError(
                f"Operand range min ({self.min}) must be <= max ({self.max})"
            )

    @property
    def span(self) -> int:
        """Number of integers in the range."""
        return self.max - self.min + 1

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max
