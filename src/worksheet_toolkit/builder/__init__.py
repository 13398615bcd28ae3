"""
Module: builder

Purpose:
    Worksheet building pipeline: generate arithmetic problems, place
    them on a grid, rasterize pages and compose them into a PDF.

Key Functions:
    - generate_problems(): Random problems for an operator
    - place_problems(): Row-major grid placement
    - export_document(): Sequential capture + PDF composition
    - compose_pdf(): Compose already-rendered pages

Key Classes:
    - WorksheetSession: Owns pages and settings
    - WorksheetSettings / PageSettings: Immutable configuration
    - GridSpec: Grid cell geometry
    - ExportResult: PDF bytes and warnings

Dependencies:
    - reportlab: PDF generation
    - PIL: Page images
    - worksheet_toolkit.core: Models and errors
"""

from worksheet_toolkit.core.errors import (
    WorksheetError,
    ConfigurationError,
    RenderUnavailable,
    RandomSourceExhausted,
    ExportCancelled,
)

from .config import (
    PAGE_SIZES,
    Margins,
    PageNumbering,
    PageSettings,
    WorksheetSettings,
)
from .generation import (
    RandomSource,
    SequenceRandomSource,
    SystemRandomSource,
    generate_problems,
)
from .layout import GridSpec, PageLayout, CellPlacement, place_problems, paginate_problems
from .output import (
    ExportResult,
    PageRasterizer,
    PageSurface,
    PillowPageRasterizer,
    compose_pdf,
    export_document,
)
from .controller import WorksheetSession, BuildError, DEFAULT_FILENAME

__all__ = [
    # Errors
    "WorksheetError",
    "ConfigurationError",
    "RenderUnavailable",
    "RandomSourceExhausted",
    "ExportCancelled",
    "BuildError",
    # Config
    "PAGE_SIZES",
    "Margins",
    "PageNumbering",
    "PageSettings",
    "WorksheetSettings",
    "GridSpec",
    # Generation
    "RandomSource",
    "SequenceRandomSource",
    "SystemRandomSource",
    "generate_problems",
    # Layout
    "PageLayout",
    "CellPlacement",
    "place_problems",
    "paginate_problems",
    # Output
    "ExportResult",
    "PageRasterizer",
    "PageSurface",
    "PillowPageRasterizer",
    "compose_pdf",
    "export_document",
    # Controller
    "WorksheetSession",
    "DEFAULT_FILENAME",
]
