"""
Module: builder.output

Purpose:
    Page rasterization and PDF export.
    Turns worksheet pages into images and composes them into a PDF
    using ReportLab.

Key Functions:
    - export_document(): Capture pages sequentially and compose a PDF
    - compose_pdf(): Compose already-rendered pages
    - render_surface(): Draw a page with Pillow

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling

Used By:
    - builder.controller: Pipeline orchestration
"""

from .rasterizer import (
    PageRasterizer,
    PageSurface,
    PillowPageRasterizer,
    render_surface,
    surface_id_for,
)
from .exporter import (
    ExportResult,
    ExportState,
    PagePlacement,
    compose_pdf,
    compute_placement,
    export_document,
)

__all__ = [
    "PageRasterizer",
    "PageSurface",
    "PillowPageRasterizer",
    "render_surface",
    "surface_id_for",
    "ExportResult",
    "ExportState",
    "PagePlacement",
    "compose_pdf",
    "compute_placement",
    "export_document",
]
