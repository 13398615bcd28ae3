"""
Unit tests for WorksheetSession.
"""

import asyncio
from pathlib import Path

import pytest
from PIL import Image

from worksheet_toolkit.builder import (
    BuildError,
    ConfigurationError,
    PageSettings,
    RandomSourceExhausted,
    SequenceRandomSource,
    SystemRandomSource,
    WorksheetSession,
    WorksheetSettings,
)
from worksheet_toolkit.builder.layout import GridSpec
from worksheet_toolkit.core.models import Operator, OperandRange, Problem


@pytest.fixture
def session(seeded_rng):
    return WorksheetSession(problem_count=10, rng=seeded_rng)


def _pairs(page):
    return [(p.first_operand, p.second_operand) for p in page.problems]


class TestSessionInit:

    def test_init_when_defaults_then_one_page_of_25_addition_problems(self):
        session = WorksheetSession(rng=SystemRandomSource(seed=0))

        assert session.page_count == 1
        assert session.pages[0].problem_count == 25
        assert session.pages[0].operator is Operator.ADD
        assert session.current_page == 0

    def test_init_when_fixed_samples_then_first_page_uses_them(self, add_samples):
        session = WorksheetSession(problem_count=5, rng=add_samples)

        assert _pairs(session.pages[0]) == [(3, 7), (2, 9), (1, 4), (5, 6), (8, 2)]

    def test_init_when_operator_unknown_then_raises(self):
        with pytest.raises(ConfigurationError):
            WorksheetSession(operator="modulo")

    def test_from_problems_when_23_problems_then_three_pages(self):
        problems = [Problem(i, 1, Operator.SUBTRACT) for i in range(1, 24)]

        session = WorksheetSession.from_problems(problems, problem_count=10)

        assert [p.problem_count for p in session.pages] == [10, 10, 3]
        assert session.operator is Operator.SUBTRACT

    def test_from_problems_when_empty_then_raises(self):
        with pytest.raises(ConfigurationError, match="empty"):
            WorksheetSession.from_problems([])

    def test_pages_when_returned_then_snapshot(self, session):
        snapshot = session.pages
        session.add_page()

        assert len(snapshot) == 1
        assert session.page_count == 2


class TestSessionPages:

    def test_add_page_when_called_then_appended_numbered_and_selected(self, session):
        page = session.add_page()

        assert page.page_number == 2
        assert page.problem_count == 10
        assert session.current_page == 1

    def test_select_page_when_out_of_range_then_raises(self, session):
        with pytest.raises(IndexError):
            session.select_page(3)

    def test_regenerate_page_when_called_then_only_that_page_changes(self):
        session = WorksheetSession(
            problem_count=1,
            rng=SequenceRandomSource([1, 2, 3, 4, 5, 6]),
        )
        session.add_page()
        first = session.pages[0]

        session.regenerate_page(1)

        assert session.pages[0] == first
        assert _pairs(session.pages[1]) == [(5, 6)]
        assert session.pages[1].page_number == 2

    def test_regenerate_page_when_index_missing_then_raises(self, session):
        with pytest.raises(IndexError):
            session.regenerate_page(4)

    def test_layout_for_when_default_grid_then_one_cell_per_problem(self, session):
        layout = session.layout_for(0)

        assert layout.placement_count == 10
        assert layout.positions()[5] == (1, 0)


class TestSessionSettings:

    def test_set_operator_when_changed_then_every_page_regenerated(self, session):
        session.add_page()

        session.set_operator("÷")

        assert session.operator is Operator.DIVIDE
        assert all(p.operator is Operator.DIVIDE for p in session.pages)
        assert [p.page_number for p in session.pages] == [1, 2]

    def test_set_operator_when_samples_run_out_then_session_unchanged(self):
        session = WorksheetSession(
            problem_count=1,
            rng=SequenceRandomSource([1, 2, 3, 4, 5, 6, 7]),
        )
        session.add_page()
        before = session.pages

        with pytest.raises(RandomSourceExhausted):
            session.set_operator("subtract")

        assert session.pages == before
        assert session.operator is Operator.ADD

    def test_set_problem_count_when_changed_then_pages_resized(self, session):
        session.add_page()

        session.set_problem_count(15)

        assert [p.problem_count for p in session.pages] == [15, 15]
        assert session.problem_count == 15

    def test_set_problem_count_when_negative_then_raises_and_keeps_pages(self, session):
        before = session.pages

        with pytest.raises(ConfigurationError):
            session.set_problem_count(-5)

        assert session.pages == before
        assert session.problem_count == 10

    def test_update_worksheet_settings_when_range_changes_then_problems_in_new_range(self, session):
        settings = WorksheetSettings(grid=GridSpec(columns=4), operands=OperandRange(50, 60))

        session.update_worksheet_settings(settings)

        assert session.worksheet_settings is settings
        for problem in session.pages[0].problems:
            assert 50 <= problem.first_operand <= 60
            assert 50 <= problem.second_operand <= 60

    def test_update_page_settings_when_changed_then_problems_untouched(self, session):
        before = session.pages

        session.update_page_settings(PageSettings(page_size="a4"))

        assert session.pages == before
        assert session.page_settings.page_size == "a4"


class FakeRasterizer:
    def __init__(self, missing=()):
        self.missing = set(missing)

    async def capture(self, surface_id):
        if surface_id in self.missing:
            return None
        return Image.new("RGB", (850, 1100), color="white")


class TestSessionExport:

    def test_export_sync_when_default_rasterizer_then_pdf_per_page(self, session):
        session.add_page()

        result = session.export_sync()

        assert result.page_count == 2
        assert result.pdf_bytes.startswith(b"%PDF")

    def test_export_when_surface_missing_then_skipped_and_warned(self, session):
        session.add_page()
        session.add_page()

        result = asyncio.run(session.export(FakeRasterizer(missing={"worksheet-1"})))

        assert result.exported_indices == (0, 2)
        assert len(result.warnings) == 1

    def test_export_when_page_subset_then_only_selected_pages(self, session):
        session.add_page()
        session.update_page_settings(PageSettings(pages_to_download=[1]))

        result = asyncio.run(session.export(FakeRasterizer()))

        assert result.exported_indices == (1,)

    def test_build_rasterizer_when_pages_exist_then_surface_per_page(self, session):
        session.add_page()

        rasterizer = session.build_rasterizer(scale=1)

        assert rasterizer.surface_ids == ["worksheet-0", "worksheet-1"]

    def test_save_when_directory_writable_then_default_filename(self, session, tmp_path):
        result = asyncio.run(session.export(FakeRasterizer()))

        path = WorksheetSession.save(result, tmp_path / "out")

        assert path == tmp_path / "out" / "math-worksheet.pdf"
        assert path.read_bytes() == result.pdf_bytes

    def test_save_when_output_dir_is_a_file_then_raises_build_error(self, session, tmp_path):
        result = asyncio.run(session.export(FakeRasterizer()))
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(BuildError, match="Failed to write"):
            WorksheetSession.save(result, blocker)
