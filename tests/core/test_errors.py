"""
Unit tests for the error taxonomy.
"""

from worksheet_toolkit.core.errors import (
    ConfigurationError,
    ExportCancelled,
    RenderUnavailable,
    WorksheetError,
)


class TestRenderUnavailable:
    """Tests for RenderUnavailable details."""

    def test_init_when_surface_and_reason_given_then_in_message(self):
        error = RenderUnavailable(2, "worksheet-2", "surface not found")

        assert error.page_index == 2
        assert error.surface_id == "worksheet-2"
        assert "worksheet-2" in str(error)
        assert "surface not found" in str(error)

    def test_init_when_only_index_then_short_message(self):
        assert str(RenderUnavailable(0)) == "Page 0 could not be rendered"


class TestHierarchy:
    """All pipeline errors share one base class."""

    def test_subclasses_when_checked_then_derive_from_worksheet_error(self):
        assert issubclass(ConfigurationError, WorksheetError)
        assert issubclass(ExportCancelled, WorksheetError)
        assert issubclass(RenderUnavailable, WorksheetError)
