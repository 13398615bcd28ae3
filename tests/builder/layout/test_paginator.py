"""
Unit tests for splitting problems into pages.
"""

import pytest

from worksheet_toolkit.builder.layout import paginate_problems
from worksheet_toolkit.core.errors import ConfigurationError
from worksheet_toolkit.core.models import Operator, Problem


@pytest.fixture
def problems():
    return [Problem(i, 1, Operator.MULTIPLY) for i in range(1, 24)]


class TestPaginateProblems:

    def test_paginate_when_remainder_then_last_page_shorter(self, problems):
        pages = paginate_problems(problems, 10)

        assert [p.problem_count for p in pages] == [10, 10, 3]
        assert [p.page_number for p in pages] == [1, 2, 3]

    def test_paginate_when_pages_joined_then_original_order_preserved(self, problems):
        pages = paginate_problems(problems, 5)

        assert [q for page in pages for q in page.problems] == problems

    def test_paginate_when_start_number_given_then_numbers_offset(self, problems):
        pages = paginate_problems(problems, 20, start_number=4)

        assert [p.page_number for p in pages] == [4, 5]

    def test_paginate_when_empty_then_no_pages(self):
        assert paginate_problems([], 10) == ()

    def test_paginate_when_per_page_zero_then_raises(self, problems):
        with pytest.raises(ConfigurationError, match="per_page"):
            paginate_problems(problems, 0)

    def test_paginate_when_start_number_zero_then_raises(self, problems):
        with pytest.raises(ConfigurationError, match="start_number"):
            paginate_problems(problems, 5, start_number=0)
