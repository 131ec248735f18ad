"""Command-line entry point: combine fragment files and optionally validate the result.

Usage:
    table-merge page_01.csv page_02.csv -o combined.csv --validate
    python -m table_merge.cli extracted/*.csv --check-structure

Fragment files are processed in lexicographic filename order, matching the
order in which source images are sent for extraction.  Files that cannot be
read count as failed fragments.
"""

import argparse
import logging
import sys
from pathlib import Path

from table_merge.combine.combiner import combine
from table_merge.combine.schema import FragmentResult
from table_merge.config import load_settings
from table_merge.errors import TableMergeError
from table_merge.grid.csv_text import to_text
from table_merge.validation.deltas import validate
from table_merge.validation.report import render_summary
from table_merge.validation.structure import check_structure

logger = logging.getLogger(__name__)


def load_fragments(paths: list[Path]) -> list[FragmentResult]:
    """Read fragment files sorted by filename; unreadable files become failed fragments."""
    fragments: list[FragmentResult] = []
    for order, path in enumerate(sorted(paths, key=lambda p: p.name)):
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s: %s", path, exc)
            fragments.append(FragmentResult(success=False, content="", source_order=order))
            continue
        fragments.append(FragmentResult(success=True, content=content, source_order=order))
    return fragments


def main(argv: list[str] | None = None) -> int:
    """Combine fragment files, write the canonical CSV, and print requested reports."""
    parser = argparse.ArgumentParser(description="Combine per-image CSV fragments into one table")
    parser.add_argument("fragments", nargs="+", type=Path, help="Fragment files (processed in filename order)")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Write the combined CSV here instead of stdout")
    parser.add_argument("--validate", action="store_true", help="Print sequential-delta validation findings")
    parser.add_argument("--check-structure", action="store_true", help="Print column-count and header checks")
    args = parser.parse_args(argv)

    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(message)s")

    try:
        table = combine(load_fragments(args.fragments))
    except TableMergeError as exc:
        logger.error("Combination failed: %s", exc)
        return 1

    # Structure is checked before padding so ragged fragments are still reported
    report = check_structure(table) if args.check_structure else None
    table.make_rectangular()
    text = to_text(table)
    if args.output is not None:
        args.output.write_text(text + "\n", encoding="utf-8")
        logger.info("Wrote %d rows to %s", table.row_count, args.output)
    else:
        print(text)

    if report is not None:
        print("Structure OK" if report.is_valid else "\n".join(report.issues))

    if args.validate:
        print(render_summary(validate(table)))

    return 0


if __name__ == "__main__":
    sys.exit(main())
