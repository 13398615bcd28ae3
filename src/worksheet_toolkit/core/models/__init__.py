"""
Module: core.models

Purpose:
    Immutable data models for arithmetic problems and worksheet pages.

Key Classes:
    - Operator: The four supported arithmetic operators
    - Problem: A single arithmetic problem with validated invariants
    - OperandRange: Inclusive operand bounds
    - Page: Ordered problem set with a page number
"""

from .problems import Operator, Problem, OperandRange
from .pages import Page

__all__ = [
    "Operator",
    "Problem",
    "OperandRange",
    "Page",
]
