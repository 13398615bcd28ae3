"""
Module: core.errors

Purpose:
    Exception hierarchy for the worksheet pipeline.

    - ConfigurationError: invalid settings, raised before generation or
      export starts. Fatal to the requested operation only.
    - RenderUnavailable: a page surface could not be captured. The
      exporter records it and moves on to the next page.
    - RandomSourceExhausted: a bounded (test) random source ran out.
    - ExportCancelled: export aborted between pages; no document returned.

Used By:
    - core.models: Model validation
    - builder.generation: Problem generation
    - builder.output.exporter: PDF composition
"""

from __future__ import annotations

from typing import Optional


class WorksheetError(Exception):
    """Base class for all worksheet toolkit errors."""
    pass


class ConfigurationError(WorksheetError, ValueError):
    """Invalid settings (range, count, page size, margins...)."""
    pass


class RenderUnavailable(WorksheetError):
    """
    A page's visual surface could not be captured.
    
    Attributes:
        page_index: 0-based index of the page in the worksheet
        surface_id: Identifier passed to the rasterizer
    """

    def __init__(self, page_index: int, surface_id: Optional[str] = None, reason: str = "") -> None:
        self.page_index = page_index
        self.surface_id = surface_id
        self.reason = reason
        message = f"Page {page_index} could not be rendered"
        if surface_id:
            message += f" (surface {surface_id!r})"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class RandomSourceExhausted(WorksheetError):
    """A bounded random source has no samples left."""
    pass


class ExportCancelled(WorksheetError):
    """Export was cancelled between pages."""
    pass
