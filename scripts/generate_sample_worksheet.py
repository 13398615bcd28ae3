"""
Generate a sample worksheet PDF for manual review.

Builds a multi-page worksheet with the Pillow rasterizer and writes it
to workspace/sample_worksheets/ (or --output).
"""

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if SRC.exists() and SRC.as_posix() not in sys.path:
    sys.path.insert(0, SRC.as_posix())

from worksheet_toolkit.builder import (
    DEFAULT_FILENAME,
    BuildError,
    ConfigurationError,
    PageSettings,
    SystemRandomSource,
    WorksheetSession,
)
from worksheet_toolkit.builder.config import PROBLEM_COUNT_CHOICES
from worksheet_toolkit.utils import configure_logging

OUTPUT_DIR = ROOT / "workspace" / "sample_worksheets"

logger = logging.getLogger("worksheet_toolkit.scripts")


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a sample math worksheet PDF")
    parser.add_argument("--operator", default="add", help="add, subtract, multiply or divide")
    parser.add_argument("--problems", type=int, default=25, choices=PROBLEM_COUNT_CHOICES)
    parser.add_argument("--pages", type=int, default=3, help="Number of worksheet pages")
    parser.add_argument("--page-size", default="letter", choices=("letter", "a4"))
    parser.add_argument("--start-from", type=int, default=1, help="First printed page number")
    parser.add_argument("--right-aligned", action="store_true", help="Right-align page numbers")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output", type=Path, default=OUTPUT_DIR)
    parser.add_argument("--filename", default=DEFAULT_FILENAME)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        page_settings = PageSettings.from_dict({
            "pageSize": args.page_size,
            "pageNumbering": {
                "enabled": True,
                "startFrom": args.start_from,
                "centered": not args.right_aligned,
            },
        })
        session = WorksheetSession(
            operator=args.operator,
            problem_count=args.problems,
            page_settings=page_settings,
            rng=SystemRandomSource(seed=args.seed),
        )
    except ConfigurationError as e:
        logger.error(f"Invalid settings: {e}")
        return 2

    for _ in range(args.pages - 1):
        session.add_page()

    result = session.export_sync()
    for warning in result.warnings:
        logger.warning(warning)

    try:
        path = WorksheetSession.save(result, args.output, args.filename)
    except BuildError as e:
        logger.error(str(e))
        return 1

    print(f"[OK] {result.page_count} pages -> {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
