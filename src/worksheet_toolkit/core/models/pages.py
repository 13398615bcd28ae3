"""
Module: core.models.pages

Purpose:
    Page model: one printable unit holding a fixed problem set and its
    ordinal page number. A worksheet is an ordered sequence of Pages.

Key Classes:
    - Page: Immutable problem set + page number

Dependencies:
    - dataclasses (std)
    - .problems: Problem, Operator

Used By:
    - builder.layout.paginator: Chunks problems into Pages
    - builder.controller: Worksheet session
    - builder.output: Rasterizer and exporter
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional

from .problems import Operator, Problem


@dataclass(frozen=True)
class Page:
    """
    A single worksheet page (immutable).

    Pages are replaced wholesale whenever their problem set is
    invalidated; use `with_problems()` to get the replacement.

    Attributes:
        problems: Ordered tuple of Problems
        page_number: 1-based ordinal page number

    Example:
        >>> page = Page(problems=(Problem(3, 7, Operator.ADD),), page_number=1)
        >>> page.problem_count
        1
    """

    problems: tuple[Problem, ...]
    page_number: int

    def __post_init__(self) -> None:
        """Validate page on construction."""
        if not isinstance(self.problems, tuple):
            object.__setattr__(self, "problems", tuple(self.problems))
        if self.page_number < 1:
            raise ValueError(f"page_number must be >= 1: {self.page_number}")

    @property
    def problem_count(self) -> int:
        return len(self.problems)

    @property
    def operator(self) -> Optional[Operator]:
        """Operator of the first problem, or None for an empty page."""
        if not self.problems:
            return None
        return self.problems[0].operator

    @property
    def is_empty(self) -> bool:
        return len(self.problems) == 0

    def with_problems(self, problems: Iterable[Problem]) -> "Page":
        """Return a copy of this page holding `problems` instead."""
        return replace(self, problems=tuple(problems))
