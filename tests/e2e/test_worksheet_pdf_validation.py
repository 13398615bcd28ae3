"""
End-to-end PDF validation: generate, rasterize with Pillow, export and
inspect the document with pypdf.
"""

import io

import pytest

from worksheet_toolkit.builder import (
    PageSettings,
    SystemRandomSource,
    WorksheetSession,
)
from worksheet_toolkit.builder.config import PageNumbering

# Try to import pypdf for PDF inspection
try:
    from pypdf import PdfReader
    PYPDF_AVAILABLE = True
except ImportError:
    PYPDF_AVAILABLE = False


LETTER_WIDTH_PT = 612.0
LETTER_HEIGHT_PT = 792.0
TOLERANCE_PT = 1.0


@pytest.fixture
def three_page_session():
    session = WorksheetSession(operator="divide", problem_count=20, rng=SystemRandomSource(seed=11))
    session.add_page()
    session.add_page()
    return session


@pytest.mark.skipif(not PYPDF_AVAILABLE, reason="pypdf not installed")
class TestWorksheetPdf:

    def test_pdf_when_three_pages_then_three_letter_pages(self, three_page_session):
        result = three_page_session.export_sync(three_page_session.build_rasterizer(scale=1))

        reader = PdfReader(io.BytesIO(result.pdf_bytes))
        assert len(reader.pages) == 3
        for page in reader.pages:
            assert abs(float(page.mediabox.width) - LETTER_WIDTH_PT) < TOLERANCE_PT
            assert abs(float(page.mediabox.height) - LETTER_HEIGHT_PT) < TOLERANCE_PT

    def test_pdf_when_start_from_5_then_pages_carry_5_6_7(self, three_page_session):
        three_page_session.update_page_settings(
            PageSettings(page_numbering=PageNumbering(start_from=5))
        )

        result = three_page_session.export_sync(three_page_session.build_rasterizer(scale=1))

        reader = PdfReader(io.BytesIO(result.pdf_bytes))
        texts = [page.extract_text() for page in reader.pages]
        for text, expected in zip(texts, ["5", "6", "7"]):
            assert expected in text

    def test_pdf_when_subset_then_only_selected_page(self, three_page_session):
        three_page_session.update_page_settings(PageSettings(pages_to_download=[1]))

        result = three_page_session.export_sync(three_page_session.build_rasterizer(scale=1))

        reader = PdfReader(io.BytesIO(result.pdf_bytes))
        assert len(reader.pages) == 1
        assert result.exported_indices == (1,)

    def test_pdf_when_saved_then_file_readable(self, three_page_session, tmp_path):
        result = three_page_session.export_sync(three_page_session.build_rasterizer(scale=1))

        path = WorksheetSession.save(result, tmp_path)

        assert len(PdfReader(path).pages) == 3
