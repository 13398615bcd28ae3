"""
Module: core

Purpose:
    Shared data models and error taxonomy used by every stage of the
    worksheet pipeline.
"""

from .errors import (
    WorksheetError,
    ConfigurationError,
    RenderUnavailable,
    RandomSourceExhausted,
    ExportCancelled,
)
from .models import Operator, Problem, OperandRange, Page

__all__ = [
    "WorksheetError",
    "ConfigurationError",
    "RenderUnavailable",
    "RandomSourceExhausted",
    "ExportCancelled",
    "Operator",
    "Problem",
    "OperandRange",
    "Page",
]
