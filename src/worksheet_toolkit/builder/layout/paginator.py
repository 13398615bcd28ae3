"""
Module: builder.layout.paginator

Purpose:
    Chunk an ordered problem sequence into Pages of a fixed size.

Key Functions:
    - paginate_problems(): Main pagination function

Dependencies:
    - core.models: Page, Problem

Used By:
    - builder.controller: Building a multi-page worksheet in one go
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from worksheet_toolkit.core.errors import ConfigurationError
from worksheet_toolkit.core.models import Page, Problem

logger = logging.getLogger(__name__)


def paginate_problems(
    problems: Sequence[Problem],
    per_page: int,
    start_number: int = 1,
) -> tuple[Page, ...]:
    """
    Split problems into consecutive pages of `per_page` problems.
    
    The last page holds the remainder and may be shorter. An empty
    sequence yields no pages.
    
    Args:
        problems: Problems in worksheet order
        per_page: Problems per page (>= 1)
        start_number: Page number of the first page
        
    Returns:
        Tuple of Pages numbered start_number, start_number + 1, ...
        
    Raises:
        ConfigurationError: If per_page < 1 or start_number < 1
    """
    if per_page < 1:
        raise ConfigurationError(f"per_page must be >= 1: {per_page}")
    if start_number < 1:
        raise ConfigurationError(f"start_number must be >= 1: {start_number}")
    
    pages: List[Page] = []
    for offset in range(0, len(problems), per_page):
        pages.append(Page(
            problems=tuple(problems[offset:offset + per_page]),
            page_number=start_number + len(pages),
        ))
    
    logger.info(f"Paginated {len(problems)} problems onto {len(pages)} pages")
    return tuple(pages)
