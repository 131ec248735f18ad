"""Mutable grid of string cells.

A Table is an ordered list of rows, each an ordered list of string cells.
There is no separate header field: by convention row 0 holds the column
labels.  Tables produced by the combiner may be ragged (a fragment with a
different column count contributes shorter or longer rows);
``make_rectangular`` restores the invariant that every row is as long as
row 0 before the table is edited, validated, or exported.
"""

import logging

from table_merge.errors import OutOfRange

logger = logging.getLogger(__name__)


class Table:
    """Ordered grid of string cells with structural mutation helpers."""

    def __init__(self, rows: list[list[str]] | None = None):
        self._rows: list[list[str]] = [list(row) for row in rows or []]

    # ─── Shape ───────────────────────────────────────────────────────────────

    @property
    def rows(self) -> list[list[str]]:
        """Return a deep copy of the rows (mutating it does not affect the table)."""
        return [list(row) for row in self._rows]

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def column_count(self) -> int:
        """Number of columns, taken from row 0 (0 for an empty table)."""
        return len(self._rows[0]) if self._rows else 0

    @property
    def max_row_length(self) -> int:
        return max((len(row) for row in self._rows), default=0)

    def is_rectangular(self) -> bool:
        """Return True if every row has as many cells as row 0."""
        width = self.column_count
        return all(len(row) == width for row in self._rows)

    def make_rectangular(self) -> int:
        """Pad every row with empty cells up to the widest row.

        Returns the number of rows that were padded.
        """
        width = self.max_row_length
        padded = 0
        for row in self._rows:
            if len(row) < width:
                row.extend([""] * (width - len(row)))
                padded += 1
        if padded:
            logger.debug("Padded %d ragged rows to %d columns", padded, width)
        return padded

    # ─── Cell Access ─────────────────────────────────────────────────────────

    def _check_cell(self, row: int, col: int) -> None:
        if not 0 <= row < len(self._rows):
            raise OutOfRange(f"Row {row} is out of range (table has {len(self._rows)} rows)")
        if not 0 <= col < len(self._rows[row]):
            raise OutOfRange(f"Column {col} is out of range for row {row} ({len(self._rows[row])} cells)")

    def get_cell(self, row: int, col: int) -> str:
        self._check_cell(row, col)
        return self._rows[row][col]

    def set_cell(self, row: int, col: int, value: str) -> str:
        """Write *value* into a cell and return the previous value."""
        self._check_cell(row, col)
        old = self._rows[row][col]
        self._rows[row][col] = str(value)
        return old

    def row(self, row: int) -> list[str]:
        if not 0 <= row < len(self._rows):
            raise OutOfRange(f"Row {row} is out of range (table has {len(self._rows)} rows)")
        return list(self._rows[row])

    def column(self, col: int) -> list[str]:
        """Return column *col*; rows too short to reach it contribute an empty string."""
        return [row[col] if col < len(row) else "" for row in self._rows]

    # ─── Structural Mutation ─────────────────────────────────────────────────

    def append_row(self, cells: list[str] | None = None) -> int:
        """Append a row (empty cells sized to the column count by default) and return its index."""
        self._rows.append(list(cells) if cells is not None else [""] * self.column_count)
        return len(self._rows) - 1

    def append_column(self, fill: str = "") -> int:
        """Append one cell to every row and return the new column index."""
        for row in self._rows:
            row.append(fill)
        return self.column_count - 1

    def delete_row(self, row: int) -> list[str]:
        if not 0 <= row < len(self._rows):
            raise OutOfRange(f"Row {row} is out of range (table has {len(self._rows)} rows)")
        return self._rows.pop(row)

    def delete_column(self, col: int) -> list[str]:
        """Remove column *col* from every row that has it; returns the removed cells."""
        if not 0 <= col < self.column_count:
            raise OutOfRange(f"Column {col} is out of range (table has {self.column_count} columns)")
        return [row.pop(col) for row in self._rows if col < len(row)]

    def move_row(self, src: int, dst: int) -> None:
        """Move row *src* so that it ends up at index *dst*."""
        n = len(self._rows)
        if not 0 <= src < n or not 0 <= dst < n:
            raise OutOfRange(f"Cannot move row {src} to {dst} (table has {n} rows)")
        self._rows.insert(dst, self._rows.pop(src))

    def move_column(self, src: int, dst: int) -> None:
        """Move column *src* so that it ends up at index *dst* in every row."""
        n = self.column_count
        if not 0 <= src < n or not 0 <= dst < n:
            raise OutOfRange(f"Cannot move column {src} to {dst} (table has {n} columns)")
        if not self.is_rectangular():
            raise ValueError("Cannot move columns of a ragged table")
        for row in self._rows:
            row.insert(dst, row.pop(src))

    # ─── Misc ────────────────────────────────────────────────────────────────

    def copy(self) -> "Table":
        return Table(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        return self._rows == other._rows

    def __repr__(self) -> str:
        return f"Table(rows={self.row_count}, columns={self.column_count})"
