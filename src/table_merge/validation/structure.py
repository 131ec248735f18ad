"""Structural sanity checks: column counts and header labels."""

import logging
from collections import Counter

from table_merge.grid.table import Table
from table_merge.validation.schema import StructureReport

logger = logging.getLogger(__name__)


def check_structure(table: Table) -> StructureReport:
    """Report ragged rows, empty header cells, and duplicate header labels.

    Row and column numbers in the messages are 1-based.
    """
    if table.row_count == 0:
        return StructureReport(is_valid=False, issues=["No data found"], row_count=0, column_count=0)

    issues: list[str] = []
    header = table.row(0)
    expected = len(header)

    ragged = [str(idx + 1) for idx, row in enumerate(table.rows) if len(row) != expected]
    if ragged:
        issues.append(f"Rows with inconsistent column count: {', '.join(ragged)}")

    empty = [str(idx + 1) for idx, label in enumerate(header) if not label.strip()]
    if empty:
        issues.append(f"Empty headers in columns: {', '.join(empty)}")

    counts = Counter(label.strip().lower() for label in header)
    duplicates = [label for label, count in counts.items() if count > 1]
    if duplicates:
        issues.append(f"Duplicate headers: {', '.join(duplicates)}")

    if issues:
        logger.debug("Structure check found %d issue(s)", len(issues))
    return StructureReport(is_valid=not issues, issues=issues, row_count=table.row_count, column_count=expected)
