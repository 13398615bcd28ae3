"""
Module: builder.output.rasterizer

Purpose:
    Page rasterizer interface plus a Pillow reference implementation.
    The exporter only depends on `PageRasterizer`: anything that can
    turn a page surface identifier into an image (or None when the
    surface cannot be found) will do.

Key Functions:
    - surface_id_for(): Surface identifier for a worksheet page index
    - render_surface(): Draw one page surface to a PIL image

Key Classes:
    - PageRasterizer: Async capture protocol
    - PageSurface: Everything needed to draw one page
    - PillowPageRasterizer: Registry-backed reference rasterizer

Dependencies:
    - PIL: Image drawing
    - builder.layout: Grid placement

Used By:
    - builder.output.exporter: export_document()
    - builder.controller: WorksheetSession.build_rasterizer()
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Protocol, Tuple, runtime_checkable

from PIL import Image, ImageDraw, ImageFont

from worksheet_toolkit.core.models import Page, Problem

from ..config import PageSettings
from ..layout import GridSpec, place_problems

logger = logging.getLogger(__name__)

# Surfaces are laid out in CSS pixels
CSS_PX_PER_INCH = 96

TITLE_FONT_SIZE = 30
TITLE_BLOCK_HEIGHT = 68  # title line + gap above the grid
CELL_PADDING = 8
PROBLEM_FONT_SIZE = 18
LABEL_FONT_SIZE = 14
FOOTER_FONT_SIZE = 14

MARGIN_GUIDE_COLOR = (200, 200, 200)
LABEL_COLOR = (75, 85, 99)
TEXT_COLOR = "black"


def surface_id_for(page_index: int) -> str:
    """Identifier of the on-screen surface for a 0-based page index."""
    return f"worksheet-{page_index}"


@runtime_checkable
class PageRasterizer(Protocol):
    """Turns a page surface into an image; None if it cannot be found."""

    async def capture(self, surface_id: str) -> Optional[Image.Image]:
        ...


@dataclass(frozen=True)
class PageSurface:
    """
    A page as it would appear on screen.

    Attributes:
        page: Problems and page number
        grid: Cell geometry
        settings: Page size, margins and numbering
    """

    page: Page
    grid: GridSpec
    settings: PageSettings


class PillowPageRasterizer:
    """
    Reference rasterizer drawing registered surfaces with Pillow.

    Captures are serialised with a lock because the rasterizer stands
    in for a single shared viewport; the drawing itself runs in a
    worker thread.

    Example:
        >>> rasterizer = PillowPageRasterizer(scale=2)
        >>> rasterizer.register(surface_id_for(0), PageSurface(page, grid, settings))
        >>> image = asyncio.run(rasterizer.capture("worksheet-0"))
    """

    def __init__(
        self,
        surfaces: Optional[Mapping[str, PageSurface]] = None,
        *,
        scale: float = 1.0,
    ) -> None:
        if scale <= 0:
            raise ValueError(f"scale must be positive: {scale}")
        self.scale = scale
        self._surfaces: Dict[str, PageSurface] = dict(surfaces or {})
        self._lock = asyncio.Lock()

    def register(self, surface_id: str, surface: PageSurface) -> None:
        self._surfaces[surface_id] = surface

    def unregister(self, surface_id: str) -> None:
        self._surfaces.pop(surface_id, None)

    @property
    def surface_ids(self) -> list[str]:
        return list(self._surfaces.keys())

    async def capture(self, surface_id: str) -> Optional[Image.Image]:
        """Render a registered surface; None if the id is unknown."""
        async with self._lock:
            surface = self._surfaces.get(surface_id)
            if surface is None:
                logger.debug(f"No surface registered for {surface_id!r}")
                return None
            return await asyncio.to_thread(render_surface, surface, self.scale)


def render_surface(surface: PageSurface, scale: float = 1.0) -> Image.Image:
    """
    Draw a page surface to an RGB image.

    Draws, in order: margin guides (if `show_margins`), the
    "<Operation> Practice" title, one cell per problem at its grid
    placement, and a "Page N" footer when numbering is enabled.

    Args:
        surface: Page, grid and page settings
        scale: Pixels per CSS pixel (2 = 192 dpi)

    Returns:
        New RGB image sized to the physical page
    """
    settings = surface.settings
    width_in, height_in = settings.size_inches
    px = CSS_PX_PER_INCH * scale

    width_px = round(width_in * px)
    height_px = round(height_in * px)
    image = Image.new("RGB", (width_px, height_px), color="white")
    draw = ImageDraw.Draw(image)

    margins = settings.margins
    left = margins.left * px
    top = margins.top * px
    right = width_px - margins.right * px
    bottom = height_px - margins.bottom * px

    if settings.show_margins:
        draw.rectangle((left, top, right, bottom), outline=MARGIN_GUIDE_COLOR)

    page = surface.page
    title = f"{page.operator.display_name} Practice" if page.operator else "Practice"
    title_font = _load_font(round(TITLE_FONT_SIZE * scale))
    title_width, _ = _text_size(draw, title, title_font)
    draw.text(((width_px - title_width) / 2, top), title, fill=TEXT_COLOR, font=title_font)

    # Centre the grid in the content area when it fits, else pin it left
    grid = surface.grid
    grid_left = left + max(0.0, ((right - left) - grid.grid_width * scale) / 2)
    grid_top = top + TITLE_BLOCK_HEIGHT * scale

    layout = place_problems(grid, page.problems)
    problem_font = _load_font(round(PROBLEM_FONT_SIZE * scale))
    label_font = _load_font(round(LABEL_FONT_SIZE * scale))
    for placement in layout.placements:
        box = (
            grid_left + placement.x * scale,
            grid_top + placement.y * scale,
            grid_left + placement.right * scale,
            grid_top + placement.bottom * scale,
        )
        _draw_cell(draw, box, placement.index + 1, placement.problem, problem_font, label_font, scale)

    if settings.page_numbering.enabled:
        footer = f"Page {page.page_number}"
        footer_font = _load_font(round(FOOTER_FONT_SIZE * scale))
        footer_width, footer_height = _text_size(draw, footer, footer_font)
        if settings.page_numbering.centered:
            x = (width_px - footer_width) / 2
        else:
            x = right - footer_width
        draw.text((x, bottom - footer_height - 4 * scale), footer, fill=LABEL_COLOR, font=footer_font)

    if layout.is_overflowing:
        logger.debug(f"Page {page.page_number}: {layout.overflow_count} problems drawn below the grid")

    return image


def _draw_cell(
    draw: ImageDraw.ImageDraw,
    box: Tuple[float, float, float, float],
    number: int,
    problem: Problem,
    problem_font: ImageFont.ImageFont,
    label_font: ImageFont.ImageFont,
    scale: float,
) -> None:
    """Draw "n)" label, right-aligned operands and the answer rule."""
    x1, y1, x2, y2 = box
    pad = CELL_PADDING * scale
    height = y2 - y1

    draw.text((x1 + pad, y1 + pad), f"{number})", fill=LABEL_COLOR, font=label_font)

    lines = (
        str(problem.first_operand),
        f"{problem.operator.symbol} {problem.second_operand}",
    )
    for line, offset in zip(lines, (0.30, 0.54)):
        line_width, _ = _text_size(draw, line, problem_font)
        draw.text((x2 - pad - line_width, y1 + height * offset), line, fill=TEXT_COLOR, font=problem_font)

    rule_y = y1 + height * 0.80
    draw.line((x1 + pad, rule_y, x2 - pad, rule_y), fill=TEXT_COLOR, width=max(1, round(scale)))


def _text_size(draw: ImageDraw.ImageDraw, text: str, font) -> Tuple[float, float]:
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    return right - left, bottom - top


def _load_font(size: int) -> ImageFont.ImageFont:
    """
    Load a TrueType font for text rendering.

    Falls back to Pillow's default font if none is available.

    Args:
        size: Font size in pixels

    Returns:
        Font object
    """
    font_options = [
        "DejaVuSans.ttf",
        "arial.ttf",        # Windows
        "Arial.ttf",        # Mac
        "LiberationSans-Regular.ttf",
    ]

    for font_name in font_options:
        try:
            return ImageFont.truetype(font_name, size)
        except (IOError, OSError):
            continue

    logger.debug("Could not load TrueType font, using default")
    return ImageFont.load_default()
