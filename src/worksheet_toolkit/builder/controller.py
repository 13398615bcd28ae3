"""
Module: builder.controller

Purpose:
    Own the worksheet (ordered page list) and current settings, and
    orchestrate the pipeline:
    Settings → Generate → Place → Rasterize → Compose → Save

    The session is the single source of truth for pages. Generation
    and layout are stateless calls made with a snapshot of the current
    settings; pages are replaced wholesale, never patched, and only
    appended, never removed automatically.

Key Classes:
    - WorksheetSession: Session state and operations
    - BuildError: Exception for save failures

Dependencies:
    - builder.generation: Problem generation
    - builder.layout: Grid placement
    - builder.output: Rasterizer and PDF export

Used By:
    - scripts/generate_sample_worksheet.py
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from worksheet_toolkit.core.errors import ConfigurationError
from worksheet_toolkit.core.models import Operator, Page, Problem

from .config import (
    DEFAULT_OPERATOR,
    DEFAULT_PROBLEM_COUNT,
    PageSettings,
    WorksheetSettings,
)
from .generation import RandomSource, SystemRandomSource, generate_problems
from .layout import PageLayout, paginate_problems, place_problems
from .output import (
    ExportResult,
    PageRasterizer,
    PageSurface,
    PillowPageRasterizer,
    export_document,
    surface_id_for,
)

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "math-worksheet.pdf"


class BuildError(Exception):
    """Error writing the exported worksheet."""
    pass


class WorksheetSession:
    """
    A worksheet being edited: pages plus the settings they came from.

    Any setting that invalidates problems (operator, problem count,
    operand range) regenerates every page. New problems are generated
    for all pages before any page is swapped in, so a failed
    regeneration leaves the session exactly as it was.

    Attributes:
        operator: Current operator
        problem_count: Problems per page
        worksheet_settings: Grid and operand range
        page_settings: Page size, margins, numbering, export subset
        current_page: 0-based index of the selected page

    Example:
        >>> session = WorksheetSession(rng=SystemRandomSource(seed=1))
        >>> page = session.add_page()
        >>> len(session.pages)
        2
    """

    def __init__(
        self,
        *,
        operator: Union[Operator, str] = DEFAULT_OPERATOR,
        problem_count: int = DEFAULT_PROBLEM_COUNT,
        worksheet_settings: Optional[WorksheetSettings] = None,
        page_settings: Optional[PageSettings] = None,
        rng: Optional[RandomSource] = None,
        pages: Optional[Sequence[Page]] = None,
    ) -> None:
        self.operator = Operator.parse(operator)
        self.problem_count = problem_count
        self.worksheet_settings = worksheet_settings or WorksheetSettings()
        self.page_settings = page_settings or PageSettings()
        self._rng = rng or SystemRandomSource()
        if pages:
            self._pages: List[Page] = list(pages)
        else:
            self._pages = [Page(problems=tuple(self._generate()), page_number=1)]
        self.current_page = 0

    @classmethod
    def from_problems(
        cls,
        problems: Sequence[Problem],
        *,
        problem_count: int = DEFAULT_PROBLEM_COUNT,
        **kwargs,
    ) -> "WorksheetSession":
        """
        Build a session whose pages hold an existing problem sequence.

        Problems are split into pages of `problem_count`; the operator
        is taken from the first problem unless given explicitly.

        Raises:
            ConfigurationError: If problems is empty or problem_count < 1
        """
        if not problems:
            raise ConfigurationError("Cannot build a worksheet from an empty problem list")
        kwargs.setdefault("operator", problems[0].operator)
        pages = paginate_problems(problems, problem_count)
        return cls(problem_count=problem_count, pages=pages, **kwargs)

    # ─────────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def pages(self) -> tuple[Page, ...]:
        """Snapshot of the worksheet pages in order."""
        return tuple(self._pages)

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def select_page(self, index: int) -> None:
        if not 0 <= index < len(self._pages):
            raise IndexError(f"Page index {index} out of range (0..{len(self._pages) - 1})")
        self.current_page = index

    # ─────────────────────────────────────────────────────────────────────────
    # Settings changes
    # ─────────────────────────────────────────────────────────────────────────

    def set_operator(self, operator: Union[Operator, str]) -> None:
        """Switch operator and regenerate every page."""
        op = Operator.parse(operator)
        self._regenerate_all(operator=op)
        self.operator = op
        logger.info(f"Operator set to {op.value}")

    def set_problem_count(self, count: int) -> None:
        """Change problems per page and regenerate every page."""
        self._regenerate_all(count=count)
        self.problem_count = count
        logger.info(f"Problem count set to {count}")

    def update_worksheet_settings(self, settings: WorksheetSettings) -> None:
        """Apply new grid/operand settings and regenerate every page."""
        self._regenerate_all(operand_range=settings.operands)
        self.worksheet_settings = settings

    def update_page_settings(self, settings: PageSettings) -> None:
        """Replace page settings; problems are unaffected."""
        self.page_settings = settings

    # ─────────────────────────────────────────────────────────────────────────
    # Page operations
    # ─────────────────────────────────────────────────────────────────────────

    def regenerate(self) -> None:
        """Draw fresh problems for every page with the current settings."""
        self._regenerate_all()

    def regenerate_page(self, index: int) -> Page:
        """Draw fresh problems for a single page."""
        if not 0 <= index < len(self._pages):
            raise IndexError(f"Page index {index} out of range (0..{len(self._pages) - 1})")
        page = self._pages[index].with_problems(self._generate())
        self._pages[index] = page
        return page

    def add_page(self) -> Page:
        """Append a freshly generated page and select it."""
        page = Page(problems=tuple(self._generate()), page_number=len(self._pages) + 1)
        self._pages.append(page)
        self.current_page = len(self._pages) - 1
        logger.debug(f"Added page {page.page_number}")
        return page

    def layout_for(self, index: int) -> PageLayout:
        """Grid placement of a page with the current grid settings."""
        return place_problems(self.worksheet_settings.grid, self._pages[index].problems)

    # ─────────────────────────────────────────────────────────────────────────
    # Export
    # ─────────────────────────────────────────────────────────────────────────

    def build_rasterizer(self, *, scale: float = 2.0) -> PillowPageRasterizer:
        """Pillow rasterizer with one surface registered per page."""
        rasterizer = PillowPageRasterizer(scale=scale)
        for index, page in enumerate(self._pages):
            rasterizer.register(
                surface_id_for(index),
                PageSurface(page, self.worksheet_settings.grid, self.page_settings),
            )
        return rasterizer

    async def export(
        self,
        rasterizer: Optional[PageRasterizer] = None,
        *,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> ExportResult:
        """
        Export the worksheet to PDF bytes.

        Args:
            rasterizer: Capture capability (default: build_rasterizer())
            cancel_event: Set to abort between pages

        Returns:
            ExportResult with PDF bytes and warnings

        Raises:
            ConfigurationError: If page settings are invalid
            ExportCancelled: If cancelled mid-export
        """
        if rasterizer is None:
            rasterizer = self.build_rasterizer()
        # Snapshot so edits during the export cannot change what is composed
        pages = tuple(self._pages)
        return await export_document(
            pages,
            self.page_settings,
            rasterizer,
            cancel_event=cancel_event,
        )

    def export_sync(self, rasterizer: Optional[PageRasterizer] = None) -> ExportResult:
        """Blocking wrapper around export() for scripts."""
        return asyncio.run(self.export(rasterizer))

    @staticmethod
    def save(result: ExportResult, output_dir: Path, filename: str = DEFAULT_FILENAME) -> Path:
        """
        Write an export result to `output_dir/filename`.

        Raises:
            BuildError: If writing fails
        """
        output_path = Path(output_dir) / filename
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_bytes(result.pdf_bytes)
        except OSError as e:
            raise BuildError(f"Failed to write worksheet: {e}") from e
        logger.info(f"Wrote {result.page_count} pages to {output_path}")
        return output_path

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _generate(
        self,
        operator: Optional[Operator] = None,
        count: Optional[int] = None,
        operand_range=None,
    ) -> List[Problem]:
        return generate_problems(
            operator or self.operator,
            self.problem_count if count is None else count,
            operand_range or self.worksheet_settings.operands,
            self._rng,
        )

    def _regenerate_all(self, **overrides) -> None:
        """Generate for every page first, then swap all pages in."""
        fresh: Sequence[List[Problem]] = [self._generate(**overrides) for _ in self._pages]
        self._pages = [page.with_problems(problems) for page, problems in zip(self._pages, fresh)]
        logger.debug(f"Regenerated {len(self._pages)} pages")
