"""Sequential-delta consistency check for numeric columns.

Columns extracted from photographed tables are frequently sequences with a
constant step (indices, timestamps, cumulative readings).  For every column
this module collects the numeric cells, computes the step between each
consecutive pair, takes the median step as the expected one and flags every
step that differs from it.

The comparison tolerance is exactly zero: any step not equal to the median
is flagged.  Row 0 is scanned like any other row; a numeric-looking header
cell takes part in the check.
"""

import logging
from dataclasses import dataclass

from table_merge.config import DELTA_TOLERANCE, MIN_NUMERIC_CELLS
from table_merge.grid.table import Table
from table_merge.numeric import median, parse_number
from table_merge.validation.report import format_suggestion, format_value
from table_merge.validation.schema import ValidationIssue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NumericCell:
    row: int
    value: float
    original: str


@dataclass(frozen=True)
class Delta:
    delta: float
    from_cell: NumericCell
    to_cell: NumericCell


# ─── Column Helpers ──────────────────────────────────────────────────────────


def numeric_cells(table: Table, col: int) -> list[NumericCell]:
    """Collect the cells of column *col* that parse as a number, in row order."""
    cells: list[NumericCell] = []
    for row_idx, cell in enumerate(table.column(col)):
        value = parse_number(cell)
        if value is not None:
            cells.append(NumericCell(row_idx, value, cell))
    return cells


def consecutive_deltas(cells: list[NumericCell]) -> list[Delta]:
    return [Delta(later.value - earlier.value, earlier, later) for earlier, later in zip(cells, cells[1:])]


# ─── Validation ──────────────────────────────────────────────────────────────


def validate_column(table: Table, col: int) -> list[ValidationIssue]:
    """Flag every step in column *col* that deviates from the column's median step."""
    cells = numeric_cells(table, col)
    if len(cells) < MIN_NUMERIC_CELLS:
        return []

    deltas = consecutive_deltas(cells)
    median_delta = median([d.delta for d in deltas])

    issues: list[ValidationIssue] = []
    for d in deltas:
        deviation = d.delta - median_delta
        if abs(deviation) <= DELTA_TOLERANCE:
            continue
        suggestion = d.from_cell.value + median_delta
        issues.append(
            ValidationIssue(
                row=d.to_cell.row,
                col=col,
                from_row=d.from_cell.row,
                observed=d.to_cell.original,
                from_value=d.from_cell.value,
                to_value=d.to_cell.value,
                expected_delta=median_delta,
                actual_delta=d.delta,
                deviation=deviation,
                tolerance=DELTA_TOLERANCE,
                suggestion=suggestion,
                message=f"Inconsistent value: expected ~{format_suggestion(suggestion)}, got {format_value(d.to_cell.value)}",
            )
        )
    return issues


def validate(table: Table) -> list[ValidationIssue]:
    """Run the delta check over every column; issues are ordered by column, then row."""
    issues: list[ValidationIssue] = []
    for col in range(table.max_row_length):
        issues.extend(validate_column(table, col))
    logger.info("Validation found %d issue(s) across %d column(s)", len(issues), table.max_row_length)
    return issues
