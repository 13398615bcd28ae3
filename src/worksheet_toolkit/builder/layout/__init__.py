"""
Module: builder.layout

Purpose:
    Deterministic grid placement of problems on a page and chunking
    of problem sequences into pages.

Key Functions:
    - place_problems(): Row-major grid placement for one page
    - paginate_problems(): Split a problem sequence into Pages

Key Classes:
    - GridSpec: Grid and cell geometry configuration
    - CellPlacement: One problem's row/column and cell box
    - PageLayout: All placements for a page

Dependencies:
    - core.models: Problem, Page

Used By:
    - builder.controller: Session layout queries
    - builder.output.rasterizer: Drawing problem cells
"""

from .config import GridSpec
from .models import CellPlacement, PageLayout
from .grid import place_problems
from .paginator import paginate_problems

__all__ = [
    # Config
    "GridSpec",
    # Models
    "CellPlacement",
    "PageLayout",
    # Functions
    "place_problems",
    "paginate_problems",
]
