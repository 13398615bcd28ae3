"""
Module: builder.layout.grid

Purpose:
    Pure row-major placement of a page's problems onto a grid.
    Problem i goes to row i // columns, column i % columns.
    No reflow or auto-sizing: cell geometry passes straight through
    from the GridSpec.

Key Functions:
    - place_problems(): Main placement function

Dependencies:
    - builder.layout.models: CellPlacement, PageLayout
    - builder.layout.config: GridSpec

Used By:
    - builder.controller: WorksheetSession.layout_for()
    - builder.output.rasterizer: Cell drawing
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from worksheet_toolkit.core.models import Problem

from .config import GridSpec
from .models import CellPlacement, PageLayout

logger = logging.getLogger(__name__)


def place_problems(grid: GridSpec, problems: Sequence[Problem]) -> PageLayout:
    """
    Assign every problem a grid cell in row-major order.
    
    More problems than `grid.capacity` is not an error: placement keeps
    going past the nominal last row and the extra count is reported in
    `PageLayout.overflow_count`.
    
    Args:
        grid: Grid configuration
        problems: Problems for one page, in display order
        
    Returns:
        PageLayout with one CellPlacement per problem
        
    Example:
        >>> layout = place_problems(GridSpec(columns=5), problems[:7])
        >>> layout.positions()[5]
        (1, 0)
    """
    pitch_x, pitch_y = grid.cell_pitch
    placements: List[CellPlacement] = []
    
    for i, problem in enumerate(problems):
        row, column = divmod(i, grid.columns)
        placements.append(CellPlacement(
            index=i,
            problem=problem,
            row=row,
            column=column,
            x=column * pitch_x,
            y=row * pitch_y,
            width=grid.item_width,
            height=grid.item_height,
        ))
    
    overflow = max(0, len(placements) - grid.capacity)
    if overflow:
        logger.debug(
            f"{overflow} problems placed past row {grid.rows} "
            f"({len(placements)} problems, capacity {grid.capacity})"
        )
    
    return PageLayout(grid=grid, placements=tuple(placements), overflow_count=overflow)
