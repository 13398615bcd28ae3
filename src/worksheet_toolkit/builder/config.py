"""
Module: builder.config

Purpose:
    Configuration dataclasses for worksheet generation and export.
    Immutable configuration with validation on construction. The core
    only ever receives these as values; it never reads or writes a
    settings store.

Key Classes:
    - WorksheetSettings: GridSpec + OperandRange
    - Margins: Page margins in inches
    - PageNumbering: Page number options
    - PageSettings: Page size, margins, numbering, page subset

Dependencies:
    - dataclasses (std)
    - reportlab.lib.pagesizes / units: Physical page sizes

Used By:
    - builder.controller: Worksheet session
    - builder.output.exporter: PDF composition
    - builder.output.rasterizer: Page drawing
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Tuple, Union

from reportlab.lib.pagesizes import A4, letter
from reportlab.lib.units import inch

from worksheet_toolkit.core.errors import ConfigurationError
from worksheet_toolkit.core.models import Operator, OperandRange

from .layout.config import GridSpec


# Page sizes as (width, height) in inches
PAGE_SIZES: dict[str, Tuple[float, float]] = {
    "letter": (letter[0] / inch, letter[1] / inch),  # 8.5in × 11in
    "a4": (A4[0] / inch, A4[1] / inch),  # 210mm × 297mm
}

# Problems-per-page choices offered by the settings panel
PROBLEM_COUNT_CHOICES = (10, 15, 20, 25, 30)

DEFAULT_OPERATOR = Operator.ADD
DEFAULT_PROBLEM_COUNT = 25
DEFAULT_OPERAND_MIN = 1
DEFAULT_OPERAND_MAX = 9
DEFAULT_MARGIN_IN = 0.5

ALL_PAGES = "all"

_BOOL_STRINGS = {"true": True, "false": False}


def page_size_inches(page_size: str) -> Tuple[float, float]:
    """
    Look up (width, height) in inches for a page size name.

    Raises:
        ConfigurationError: If the page size is not letter or a4
    """
    try:
        return PAGE_SIZES[page_size]
    except (KeyError, TypeError):
        raise ConfigurationError(
            f"Unsupported page size: {page_size!r} (expected one of {sorted(PAGE_SIZES)})"
        ) from None


@dataclass(frozen=True)
class WorksheetSettings:
    """
    Grid and operand configuration for a worksheet (immutable).

    Attributes:
        grid: Cell geometry for the layout engine
        operands: Inclusive bounds for sampled operands

    Example:
        >>> settings = WorksheetSettings()
        >>> settings.grid.columns, settings.operands.max
        (5, 9)
    """

    grid: GridSpec = field(default_factory=GridSpec)
    operands: OperandRange = field(
        default_factory=lambda: OperandRange(DEFAULT_OPERAND_MIN, DEFAULT_OPERAND_MAX)
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WorksheetSettings":
        """
        Build settings from a plain dict such as a JSON payload.

        Accepts the camelCase keys of the settings panel
        (``itemWidth``, ``rowSpacing``...) as well as snake_case.

        Raises:
            ConfigurationError: If a value is missing its expected type
        """
        grid_data = dict(data.get("grid") or {})
        operand_data = dict(data.get("operands") or {})
        try:
            grid = GridSpec(
                columns=int(_pick(grid_data, "columns", default=GridSpec.columns)),
                rows=int(_pick(grid_data, "rows", default=GridSpec.rows)),
                item_width=float(_pick(grid_data, "item_width", "itemWidth", default=GridSpec.item_width)),
                item_height=float(_pick(grid_data, "item_height", "itemHeight", default=GridSpec.item_height)),
                row_spacing=float(_pick(grid_data, "row_spacing", "rowSpacing", default=GridSpec.row_spacing)),
                column_spacing=float(
                    _pick(grid_data, "column_spacing", "columnSpacing", default=GridSpec.column_spacing)
                ),
            )
            operands = OperandRange(
                min=int(operand_data.get("min", DEFAULT_OPERAND_MIN)),
                max=int(operand_data.get("max", DEFAULT_OPERAND_MAX)),
            )
        except (TypeError, ValueError) as e:
            if isinstance(e, ConfigurationError):
                raise
            raise ConfigurationError(f"Invalid worksheet settings: {e}") from e
        return cls(grid=grid, operands=operands)


@dataclass(frozen=True)
class Margins:
    """Page margins in inches."""

    top: float = DEFAULT_MARGIN_IN
    bottom: float = DEFAULT_MARGIN_IN
    left: float = DEFAULT_MARGIN_IN
    right: float = DEFAULT_MARGIN_IN

    def __post_init__(self) -> None:
        for side in ("top", "bottom", "left", "right"):
            value = getattr(self, side)
            if value < 0:
                raise ConfigurationError(f"Margin {side} must be non-negative: {value}")

    @property
    def horizontal(self) -> float:
        return self.left + self.right

    @property
    def vertical(self) -> float:
        return self.top + self.bottom


@dataclass(frozen=True)
class PageNumbering:
    """
    Page number options.

    Attributes:
        enabled: Draw page numbers
        start_from: Number printed on the first worksheet page
        centered: Centre the number; otherwise right-align at the margin
    """

    enabled: bool = True
    start_from: int = 1
    centered: bool = True


@dataclass(frozen=True)
class PageSettings:
    """
    Page configuration for preview and export (immutable).

    Attributes:
        page_size: "letter" or "a4"
        margins: Margins in inches
        page_numbering: Page number options
        show_margins: Draw margin guides on rendered pages
        pages_to_download: "all" or 0-based page indices to export

    Invariants:
        - page_size is a supported size
        - left + right margins < page width, top + bottom < page height
        - explicit page indices are non-negative

    Example:
        >>> settings = PageSettings(page_size="a4", pages_to_download=[1])
        >>> settings.includes_page(1), settings.includes_page(0)
        (True, False)
    """

    page_size: str = "letter"
    margins: Margins = field(default_factory=Margins)
    page_numbering: PageNumbering = field(default_factory=PageNumbering)
    show_margins: bool = True
    pages_to_download: Union[str, Tuple[int, ...]] = ALL_PAGES

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        width, height = page_size_inches(self.page_size)
        if self.margins.horizontal >= width:
            raise ConfigurationError("Margins exceed page width")
        if self.margins.vertical >= height:
            raise ConfigurationError("Margins exceed page height")

        subset = self.pages_to_download
        if isinstance(subset, str):
            if subset != ALL_PAGES:
                raise ConfigurationError(f"pages_to_download must be 'all' or indices: {subset!r}")
        else:
            try:
                indices = tuple(sorted({int(i) for i in subset}))
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid page indices: {subset!r}") from e
            if any(i < 0 for i in indices):
                raise ConfigurationError(f"Page indices must be non-negative: {list(indices)}")
            object.__setattr__(self, "pages_to_download", indices)

    @property
    def size_inches(self) -> Tuple[float, float]:
        return page_size_inches(self.page_size)

    @property
    def exports_all_pages(self) -> bool:
        return self.pages_to_download == ALL_PAGES

    def includes_page(self, page_index: int) -> bool:
        """Whether the 0-based page index is part of the export."""
        if self.exports_all_pages:
            return True
        return page_index in self.pages_to_download

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PageSettings":
        """
        Build settings from a plain dict such as a JSON payload.

        Accepts camelCase (``pageSize``, ``pageNumbering.startFrom``...)
        or snake_case keys. Missing keys fall back to defaults.

        Raises:
            ConfigurationError: If a value is malformed
        """
        margin_data = dict(data.get("margins") or {})
        numbering_data = dict(_pick(data, "page_numbering", "pageNumbering", default=None) or {})
        subset = _pick(data, "pages_to_download", "pagesToDownload", default=ALL_PAGES)
        try:
            margins = Margins(**{
                side: float(margin_data.get(side, DEFAULT_MARGIN_IN))
                for side in ("top", "bottom", "left", "right")
            })
            numbering = PageNumbering(
                enabled=_as_bool(numbering_data.get("enabled", True), "pageNumbering.enabled"),
                start_from=int(_pick(numbering_data, "start_from", "startFrom", default=1)),
                centered=_as_bool(numbering_data.get("centered", True), "pageNumbering.centered"),
            )
            show_margins = _as_bool(
                _pick(data, "show_margins", "showMargins", default=True), "showMargins"
            )
            if not isinstance(subset, str):
                subset = tuple(_as_indices(subset))
        except (TypeError, ValueError) as e:
            if isinstance(e, ConfigurationError):
                raise
            raise ConfigurationError(f"Invalid page settings: {e}") from e

        return cls(
            page_size=str(_pick(data, "page_size", "pageSize", default="letter")).lower(),
            margins=margins,
            page_numbering=numbering,
            show_margins=show_margins,
            pages_to_download=subset,
        )


def _pick(data: Mapping[str, Any], *keys: str, default: Any) -> Any:
    """Return the first present key's value, else default."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def _as_bool(value: Any, name: str) -> bool:
    """Accept real booleans and the strings "true"/"false" (any case)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _BOOL_STRINGS:
        return _BOOL_STRINGS[value.strip().lower()]
    raise ConfigurationError(f"{name} must be true or false: {value!r}")


def _as_indices(values: Iterable[Any]) -> Iterable[int]:
    for value in values:
        if isinstance(value, bool):
            raise ConfigurationError(f"Invalid page index: {value!r}")
        yield int(value)
