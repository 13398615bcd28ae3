"""
Module: builder.layout.models

Purpose:
    Data models for grid placement.
    Immutable dataclasses describing where each problem sits on a page.

Key Classes:
    - CellPlacement: A problem's grid cell
    - PageLayout: Complete placement for one page

Dependencies:
    - dataclasses (std)
    - .config: GridSpec

Used By:
    - builder.layout.grid: Creates PageLayouts
    - builder.output.rasterizer: Draws cells
"""

from __future__ import annotations

from dataclasses import dataclass

from worksheet_toolkit.core.models import Problem

from .config import GridSpec


@dataclass(frozen=True)
class CellPlacement:
    """
    A problem positioned in the grid.
    
    Coordinates are relative to the top-left of the grid area, in the
    same unit as the GridSpec cell sizes.
    
    Attributes:
        index: Position of the problem in the page's sequence
        problem: The placed Problem
        row: 0-based row (index // columns)
        column: 0-based column (index % columns)
        x: Left edge of the cell
        y: Top edge of the cell
        width: Cell width (GridSpec.item_width)
        height: Cell height (GridSpec.item_height)
        
    Example:
        >>> placement.right
        120  # x + width
    """
    
    index: int
    problem: Problem
    row: int
    column: int
    x: float
    y: float
    width: float
    height: float
    
    @property
    def right(self) -> float:
        return self.x + self.width
    
    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class PageLayout:
    """
    Grid placement for a single page.
    
    Attributes:
        grid: GridSpec the placement was computed with
        placements: One CellPlacement per problem, in sequence order
        overflow_count: Problems placed past the nominal last row
    """
    
    grid: GridSpec
    placements: tuple[CellPlacement, ...]
    overflow_count: int = 0
    
    @property
    def placement_count(self) -> int:
        return len(self.placements)
    
    @property
    def rows_used(self) -> int:
        """Number of rows actually occupied (may exceed grid.rows)."""
        if not self.placements:
            return 0
        return self.placements[-1].row + 1
    
    @property
    def is_overflowing(self) -> bool:
        return self.overflow_count > 0
    
    def positions(self) -> list[tuple[int, int]]:
        """(row, column) per problem in sequence order."""
        return [(p.row, p.column) for p in self.placements]
