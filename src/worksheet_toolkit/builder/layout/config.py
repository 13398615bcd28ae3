"""
Module: builder.layout.config

Purpose:
    Grid configuration for the layout engine. Defines visual cell
    geometry only; how many problems go on a page is configured
    separately (problem count is not derived from columns × rows).

Key Classes:
    - GridSpec: Immutable grid configuration

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.grid: Placement
    - builder.config: WorksheetSettings
"""

from __future__ import annotations

from dataclasses import dataclass

from worksheet_toolkit.core.errors import ConfigurationError


# Defaults match the on-screen worksheet (CSS pixels)
DEFAULT_COLUMNS = 5
DEFAULT_ROWS = 5
DEFAULT_ITEM_WIDTH = 120
DEFAULT_ITEM_HEIGHT = 100
DEFAULT_SPACING = 16


@dataclass(frozen=True)
class GridSpec:
    """
    Grid layout configuration (immutable).
    
    Attributes:
        columns: Problems per row (>= 1)
        rows: Nominal rows per page (>= 1)
        item_width: Cell width (> 0)
        item_height: Cell height (> 0)
        row_spacing: Vertical gap between rows (>= 0)
        column_spacing: Horizontal gap between columns (>= 0)
        
    Example:
        >>> grid = GridSpec(columns=4, rows=3)
        >>> grid.capacity
        12
    """
    
    columns: int = DEFAULT_COLUMNS
    rows: int = DEFAULT_ROWS
    item_width: float = DEFAULT_ITEM_WIDTH
    item_height: float = DEFAULT_ITEM_HEIGHT
    row_spacing: float = DEFAULT_SPACING
    column_spacing: float = DEFAULT_SPACING
    
    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.columns < 1:
            raise ConfigurationError(f"columns must be >= 1: {self.columns}")
        if self.rows < 1:
            raise ConfigurationError(f"rows must be >= 1: {self.rows}")
        if self.item_width <= 0:
            raise ConfigurationError(f"item_width must be positive: {self.item_width}")
        if self.item_height <= 0:
            raise ConfigurationError(f"item_height must be positive: {self.item_height}")
        if self.row_spacing < 0:
            raise ConfigurationError(f"row_spacing must be non-negative: {self.row_spacing}")
        if self.column_spacing < 0:
            raise ConfigurationError(f"column_spacing must be non-negative: {self.column_spacing}")
    
    @property
    def capacity(self) -> int:
        """Number of cells in the nominal grid (columns × rows)."""
        return self.columns * self.rows
    
    @property
    def cell_pitch(self) -> tuple[float, float]:
        """(horizontal, vertical) distance between neighbouring cell origins."""
        return (self.item_width + self.column_spacing, self.item_height + self.row_spacing)
    
    @property
    def grid_width(self) -> float:
        """Width of a full row of cells including inner spacing."""
        return self.columns * self.item_width + (self.columns - 1) * self.column_spacing
