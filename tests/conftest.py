import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import worksheet_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from worksheet_toolkit.builder.generation import SequenceRandomSource, SystemRandomSource
from worksheet_toolkit.core.models import Operator, Page, Problem


# Common test fixtures
@pytest.fixture
def seeded_rng():
    """Return a deterministic random source."""
    return SystemRandomSource(seed=1234)


@pytest.fixture
def add_samples():
    """Return a replaying source for five addition problems."""
    return SequenceRandomSource([3, 7, 2, 9, 1, 4, 5, 6, 8, 2])


@pytest.fixture
def sample_page():
    """Create a small addition page."""
    problems = tuple(Problem(a, b, Operator.ADD) for a, b in [(3, 7), (2, 9), (1, 4)])
    return Page(problems=problems, page_number=1)


@pytest.fixture
def page_image():
    """Create a 2:1 landscape page image."""
    return Image.new("RGB", (1600, 800), color="white")


@pytest.fixture
def letter_image():
    """Create an image with letter proportions (8.5 x 11 at 100 dpi)."""
    return Image.new("RGB", (850, 1100), color="white")
