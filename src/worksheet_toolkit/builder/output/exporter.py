"""
Module: builder.output.exporter

Purpose:
    Compose rendered page images into a single multi-page PDF using
    ReportLab. One PDF page per exported worksheet page, holding one
    embedded raster image and an optional page number.

Placement (document unit: inches, origin top-left):
    documentWidth = full page width
    drawnHeight   = image.height * documentWidth / image.width
    image box     = (margins.left, margins.top,
                     documentWidth - margins.left - margins.right,
                     drawnHeight - margins.top - margins.bottom)
    page number   = str(startFrom + pageIndex) at y = drawnHeight
                    - margins.bottom + 0.3, centred or right-aligned
                    at documentWidth - margins.right

    Margins shrink the scaled image in place; they do not define an
    inset box the image is fitted into.

Key Functions:
    - compose_pdf(): Compose already-rendered (Page, image) pairs
    - export_document(): Capture pages one at a time and compose
    - compute_placement(): Pure geometry for one page

Key Classes:
    - ExportResult: PDF bytes plus skipped pages and warnings
    - PagePlacement: Computed geometry for one page
    - ExportState: Composer lifecycle

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
    - builder.output.rasterizer: PageRasterizer

Used By:
    - builder.controller: WorksheetSession.export()
"""

from __future__ import annotations

import asyncio
import io
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from PIL import Image
from reportlab.lib.units import inch
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from worksheet_toolkit.core.errors import ExportCancelled, RenderUnavailable
from worksheet_toolkit.core.models import Page

from ..config import PageSettings, page_size_inches
from .rasterizer import PageRasterizer, surface_id_for

logger = logging.getLogger(__name__)

# Page number text
PAGE_NUMBER_FONT = "Helvetica"
PAGE_NUMBER_FONT_SIZE = 16
PAGE_NUMBER_OFFSET_IN = 0.3  # Below the bottom edge of the drawn image


class ExportState(Enum):
    """Composer lifecycle: Idle -> Composing -> Finalized (or Cancelled)."""

    IDLE = "idle"
    COMPOSING = "composing"
    FINALIZED = "finalized"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class PagePlacement:
    """
    Geometry for one exported page, in inches from the top-left corner.

    Attributes:
        document_width: Full page width
        document_height: Full page height
        drawn_height: Width-driven scaled image height
        image_x: Left edge of the drawn image (margins.left)
        image_y: Top edge of the drawn image (margins.top)
        image_width: documentWidth - left - right
        image_height: drawnHeight - top - bottom
        number_text: Page number text, or None when numbering is off
        number_x: Left edge of the page number text
        number_y: Baseline of the page number text

    Example:
        >>> p = compute_placement((1600, 800), PageSettings(), page_index=0)
        >>> p.drawn_height, p.image_width
        (4.25, 7.5)
    """

    document_width: float
    document_height: float
    drawn_height: float
    image_x: float
    image_y: float
    image_width: float
    image_height: float
    number_text: Optional[str] = None
    number_x: Optional[float] = None
    number_y: Optional[float] = None

    @property
    def is_drawable(self) -> bool:
        """Whether the image box has a positive area."""
        return self.image_width > 0 and self.image_height > 0


@dataclass(frozen=True)
class ExportResult:
    """
    Composed document plus diagnostics (immutable).

    Attributes:
        pdf_bytes: The complete PDF document
        page_count: Worksheet pages drawn into the document
        exported_indices: 0-based worksheet indices that were drawn
        skipped: One RenderUnavailable per page that could not be drawn
        warnings: Human-readable warnings for the caller
        state: Composer state when the result was produced
    """

    pdf_bytes: bytes
    page_count: int
    exported_indices: tuple[int, ...]
    skipped: tuple[RenderUnavailable, ...] = ()
    warnings: tuple[str, ...] = ()
    state: ExportState = ExportState.FINALIZED

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


def _text_width_in(text: str) -> float:
    return stringWidth(text, PAGE_NUMBER_FONT, PAGE_NUMBER_FONT_SIZE) / inch


def compute_placement(
    image_size: Tuple[int, int],
    settings: PageSettings,
    page_index: int,
    *,
    text_width: Callable[[str], float] = _text_width_in,
) -> PagePlacement:
    """
    Compute image box and page number position for one page.

    Args:
        image_size: (width, height) of the rendered image in pixels
        settings: Page settings (size, margins, numbering)
        page_index: 0-based worksheet index of the page
        text_width: Measures text width in inches (default: Helvetica 16pt)

    Returns:
        PagePlacement in inches, origin top-left

    Raises:
        ConfigurationError: If the page size is unsupported
        ValueError: If the image has no width
    """
    document_width, document_height = page_size_inches(settings.page_size)
    image_width_px, image_height_px = image_size
    if image_width_px <= 0:
        raise ValueError(f"Rendered image has no width: {image_size}")

    margins = settings.margins
    drawn_height = image_height_px * document_width / image_width_px

    number_text = number_x = number_y = None
    numbering = settings.page_numbering
    if numbering.enabled:
        number_text = str(numbering.start_from + page_index)
        width = text_width(number_text)
        if numbering.centered:
            number_x = (document_width - width) / 2
        else:
            number_x = document_width - margins.right - width
        number_y = drawn_height - margins.bottom + PAGE_NUMBER_OFFSET_IN

    return PagePlacement(
        document_width=document_width,
        document_height=document_height,
        drawn_height=drawn_height,
        image_x=margins.left,
        image_y=margins.top,
        image_width=document_width - (margins.left + margins.right),
        image_height=drawn_height - (margins.top + margins.bottom),
        number_text=number_text,
        number_x=number_x,
        number_y=number_y,
    )


class _DocumentComposer:
    """
    Accumulates pages onto a single ReportLab canvas.

    Pages are added strictly in order; skipped pages consume no PDF
    page. The page size is resolved on construction so an unsupported
    size fails before anything is drawn.
    """

    def __init__(self, settings: PageSettings) -> None:
        self.settings = settings
        self.width_in, self.height_in = page_size_inches(settings.page_size)
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(
            self._buffer,
            pagesize=(self.width_in * inch, self.height_in * inch),
        )
        self._canvas.setTitle("Math Worksheet")
        self.state = ExportState.IDLE
        self._exported: List[int] = []
        self._skipped: List[RenderUnavailable] = []
        self._warnings: List[str] = []

    def add_page(
        self,
        page_index: int,
        image: Optional[Image.Image],
        surface_id: Optional[str] = None,
    ) -> bool:
        """
        Draw one worksheet page as a new PDF page.

        Returns:
            True if drawn, False if skipped
        """
        if self.state is ExportState.IDLE:
            logger.debug(f"Composer {self.state.value} -> {ExportState.COMPOSING.value}")
        self.state = ExportState.COMPOSING

        if image is None:
            self.skip(RenderUnavailable(page_index, surface_id, "surface not found"))
            return False

        placement = compute_placement(image.size, self.settings, page_index)
        if not placement.is_drawable:
            self.skip(RenderUnavailable(
                page_index,
                surface_id,
                f"margins leave no room for the image "
                f"({placement.image_width:.2f}in x {placement.image_height:.2f}in)",
            ))
            return False

        c = self._canvas
        c.drawImage(
            _pil_to_reader(image),
            placement.image_x * inch,
            self._flip_y(placement.image_y + placement.image_height),
            width=placement.image_width * inch,
            height=placement.image_height * inch,
        )

        if placement.number_text is not None:
            c.saveState()
            c.setFont(PAGE_NUMBER_FONT, PAGE_NUMBER_FONT_SIZE)
            c.setFillColorRGB(0, 0, 0)
            c.drawString(
                placement.number_x * inch,
                self._flip_y(placement.number_y),
                placement.number_text,
            )
            c.restoreState()

        c.showPage()
        self._exported.append(page_index)
        logger.debug(f"Composed worksheet page {page_index} as PDF page {len(self._exported)}")
        return True

    def skip(self, error: RenderUnavailable) -> None:
        """Record a page that could not be drawn and carry on."""
        logger.warning(f"Skipping page: {error}")
        self._skipped.append(error)
        self._warnings.append(str(error))

    def warn(self, message: str) -> None:
        logger.warning(message)
        self._warnings.append(message)

    def finalize(self) -> ExportResult:
        """Close the document and return its bytes."""
        if not self._exported:
            self.warn("No pages were exported, creating empty document")
            # Blank page so the PDF is still valid
            self._canvas.showPage()

        self._canvas.save()
        self.state = ExportState.FINALIZED

        logger.info(
            f"Export {self.state.value}: {len(self._exported)} pages ({len(self._skipped)} skipped)"
        )
        return ExportResult(
            pdf_bytes=self._buffer.getvalue(),
            page_count=len(self._exported),
            exported_indices=tuple(self._exported),
            skipped=tuple(self._skipped),
            warnings=tuple(self._warnings),
            state=self.state,
        )

    def discard(self) -> None:
        """Drop the partial document."""
        self.state = ExportState.CANCELLED
        self._buffer = io.BytesIO()
        logger.info(
            f"Export {self.state.value} after {len(self._exported)} pages, document discarded"
        )

    def _flip_y(self, y_from_top_in: float) -> float:
        """Convert a top-down inch offset to a bottom-up PDF coordinate."""
        return (self.height_in - y_from_top_in) * inch


def _selected_indices(page_count: int, composer: _DocumentComposer) -> List[int]:
    """Worksheet indices to export, in order; warns about unknown indices."""
    settings = composer.settings
    if settings.exports_all_pages:
        return list(range(page_count))

    missing = [i for i in settings.pages_to_download if i >= page_count]
    if missing:
        composer.warn(
            f"Requested pages {missing} do not exist (worksheet has {page_count} pages)"
        )
    return [i for i in range(page_count) if settings.includes_page(i)]


def compose_pdf(
    rendered: Sequence[Tuple[Page, Optional[Image.Image]]],
    settings: PageSettings,
) -> ExportResult:
    """
    Compose already-rendered pages into one PDF.

    Args:
        rendered: (Page, image) pairs in worksheet order; image None
            means the page surface could not be rendered
        settings: Page settings

    Returns:
        ExportResult with PDF bytes

    Raises:
        ConfigurationError: If the page size is unsupported (before
            anything is drawn)

    Example:
        >>> result = compose_pdf([(page, img)], PageSettings())
        >>> result.page_count
        1
    """
    composer = _DocumentComposer(settings)
    for page_index in _selected_indices(len(rendered), composer):
        _, image = rendered[page_index]
        composer.add_page(page_index, image)
    return composer.finalize()


async def export_document(
    pages: Sequence[Page],
    settings: PageSettings,
    rasterizer: PageRasterizer,
    *,
    cancel_event: Optional[asyncio.Event] = None,
) -> ExportResult:
    """
    Capture and compose worksheet pages strictly one at a time.

    Page i+1 is not captured until page i has been captured and
    embedded: the rasterizer works against a single shared surface.
    Cancellation is checked between pages only.

    Args:
        pages: Worksheet pages in order
        settings: Page settings
        rasterizer: Async capture capability
        cancel_event: Set to abort before the next page starts

    Returns:
        ExportResult with PDF bytes

    Raises:
        ConfigurationError: If the page size is unsupported
        ExportCancelled: If cancel_event was set mid-export
    """
    composer = _DocumentComposer(settings)
    selected = _selected_indices(len(pages), composer)
    logger.info(f"Exporting {len(selected)} of {len(pages)} pages ({settings.page_size})")

    try:
        for page_index in selected:
            if cancel_event is not None and cancel_event.is_set():
                raise ExportCancelled(f"Export cancelled before page {page_index}")

            surface_id = surface_id_for(page_index)
            try:
                image = await rasterizer.capture(surface_id)
            except RenderUnavailable as e:
                composer.skip(e)
                continue
            except ExportCancelled:
                raise
            except Exception as e:
                # CancelledError is not an Exception and still propagates
                composer.skip(RenderUnavailable(page_index, surface_id, f"{type(e).__name__}: {e}"))
                continue
            composer.add_page(page_index, image, surface_id=surface_id)
    except (ExportCancelled, asyncio.CancelledError):
        composer.discard()
        raise

    return composer.finalize()


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.

    Args:
        img: PIL Image object

    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)
