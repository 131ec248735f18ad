"""EditSession: the single owner of a table while it is being edited.

Holds one Table together with everything whose indices depend on it:

  - the dirty set (cells changed since the last save, with their saved value
    so an edit that restores the saved value is no longer dirty),
  - the current selection,
  - the issues produced by the last validation run.

Structural edits (delete / move of rows and columns) rewrite the dirty set
and the selection through one index-remap function (see remap.py).
Validation issues are never remapped: any mutation discards them and the
caller re-runs ``validate()``.

Each instance carries its own lock; hosts that share a session between
threads get serialised access, and one session per open document is the
intended use.
"""

import logging
import threading
from typing import Iterable, Mapping

from table_merge.combine.combiner import combine
from table_merge.combine.schema import FragmentResult
from table_merge.config import load_settings
from table_merge.errors import LastColumn, NoSelection, OutOfRange, ProtectedRow
from table_merge.grid.csv_text import parse_text, to_text
from table_merge.grid.table import Table
from table_merge.session.remap import Axis, IndexMap, move_map, remap_cells, removal_map
from table_merge.validation.deltas import validate
from table_merge.validation.report import format_suggestion
from table_merge.validation.schema import ValidationIssue

logger = logging.getLogger(__name__)

DIRECTIONS = ("tab", "horizontal", "vertical")


class EditSession:
    """Editable table with dirty tracking, structural edits, and quick fixes."""

    def __init__(self, table: Table, protect_header: bool | None = None, suggestion_decimals: int | None = None):
        if protect_header is None or suggestion_decimals is None:
            settings = load_settings()
            protect_header = settings.protect_header if protect_header is None else protect_header
            suggestion_decimals = settings.suggestion_decimals if suggestion_decimals is None else suggestion_decimals
        self.protect_header = protect_header
        self.suggestion_decimals = suggestion_decimals

        self._table = table.copy()
        padded = self._table.make_rectangular()
        if padded:
            logger.info("Padded %d ragged row(s) to %d columns", padded, self._table.column_count)

        self._saved: dict[tuple[int, int], str] = {}  # (row, col) -> value at last save
        self._selection: tuple[int, int] | None = None
        self._issues: list[ValidationIssue] = []
        self._lock = threading.RLock()

    @classmethod
    def from_fragments(cls, fragments: Iterable[FragmentResult | Mapping | str], **kwargs) -> "EditSession":
        """Start a session on a freshly combined table."""
        return cls(combine(fragments), **kwargs)

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "EditSession":
        """Restore a session from previously exported text."""
        return cls(parse_text(text), **kwargs)

    # ─── Read Access ─────────────────────────────────────────────────────────

    @property
    def table(self) -> Table:
        """Snapshot of the current table."""
        with self._lock:
            return self._table.copy()

    @property
    def row_count(self) -> int:
        with self._lock:
            return self._table.row_count

    @property
    def column_count(self) -> int:
        with self._lock:
            return self._table.column_count

    def get_cell(self, row: int, col: int) -> str:
        with self._lock:
            return self._table.get_cell(row, col)

    def export_text(self) -> str:
        """Render the current table in the canonical quoted-CSV format."""
        with self._lock:
            return to_text(self._table)

    # ─── Dirty Tracking ──────────────────────────────────────────────────────

    def dirty_count(self) -> int:
        with self._lock:
            return len(self._saved)

    def dirty_cells(self) -> set[tuple[int, int]]:
        with self._lock:
            return set(self._saved)

    def is_dirty(self, row: int, col: int) -> bool:
        with self._lock:
            return (row, col) in self._saved

    def mark_saved(self) -> None:
        """Forget all edits; the current contents become the saved state."""
        with self._lock:
            logger.debug("Marking %d dirty cell(s) as saved", len(self._saved))
            self._saved.clear()

    # ─── Cell Edits ──────────────────────────────────────────────────────────

    def set_cell(self, row: int, col: int, value: str) -> None:
        """Write one cell; marks it dirty only if it now differs from its saved value."""
        with self._lock:
            value = str(value)
            old = self._table.get_cell(row, col)
            if value == old:
                return
            self._table.set_cell(row, col, value)

            key = (row, col)
            if key not in self._saved:
                self._saved[key] = old
            elif self._saved[key] == value:
                del self._saved[key]
            self._invalidate_issues()

    def apply_fix(self, issue: ValidationIssue) -> list[ValidationIssue]:
        """Write an issue's suggested value into its cell and re-validate."""
        with self._lock:
            value = format_suggestion(issue.suggestion, self.suggestion_decimals)
            logger.info("Quick fix: row %d, column %d -> %s", issue.row + 1, issue.col + 1, value)
            self.set_cell(issue.row, issue.col, value)
            return self.validate()

    # ─── Structural Edits ────────────────────────────────────────────────────

    def add_row(self) -> int:
        """Append an empty row sized to the column count; returns its index."""
        with self._lock:
            index = self._table.append_row()
            self._invalidate_issues()
            return index

    def add_column(self) -> int:
        """Append an empty cell to every row; returns the new column index."""
        with self._lock:
            index = self._table.append_column()
            self._invalidate_issues()
            return index

    def delete_row(self, row: int) -> None:
        with self._lock:
            if row == 0 and self.protect_header:
                raise ProtectedRow("Cannot delete the header row")
            self._table.delete_row(row)
            self._apply_remap("row", removal_map(row))
            self._selection = None
            logger.debug("Deleted row %d", row)

    def delete_column(self, col: int) -> None:
        with self._lock:
            if not 0 <= col < self._table.column_count:
                raise OutOfRange(f"Column {col} is out of range (table has {self._table.column_count} columns)")
            if self._table.column_count <= 1:
                raise LastColumn("Cannot delete the last column")
            self._table.delete_column(col)
            self._apply_remap("col", removal_map(col))
            self._selection = None
            logger.debug("Deleted column %d", col)

    def move_row(self, src: int, dst: int) -> None:
        """Move row *src* to index *dst* (drag-to-reorder)."""
        with self._lock:
            if self.protect_header and 0 in (src, dst) and src != dst:
                raise ProtectedRow("Cannot move rows into or out of the header position")
            self._table.move_row(src, dst)
            self._apply_remap("row", move_map(src, dst))

    def move_column(self, src: int, dst: int) -> None:
        """Move column *src* to index *dst* (drag-to-reorder)."""
        with self._lock:
            self._table.move_column(src, dst)
            self._apply_remap("col", move_map(src, dst))

    def _apply_remap(self, axis: Axis, index_map: IndexMap) -> None:
        self._saved = remap_cells(self._saved, axis, index_map)
        if self._selection is not None:
            remapped = remap_cells({self._selection: None}, axis, index_map)
            self._selection = next(iter(remapped), None)
        self._invalidate_issues()

    # ─── Selection ───────────────────────────────────────────────────────────

    @property
    def selection(self) -> tuple[int, int] | None:
        with self._lock:
            return self._selection

    def select(self, row: int, col: int) -> None:
        with self._lock:
            self._table.get_cell(row, col)
            self._selection = (row, col)

    def clear_selection(self) -> None:
        with self._lock:
            self._selection = None

    def delete_selected_row(self) -> None:
        with self._lock:
            if self._selection is None:
                raise NoSelection("No row selected")
            self.delete_row(self._selection[0])

    def delete_selected_column(self) -> None:
        with self._lock:
            if self._selection is None:
                raise NoSelection("No column selected")
            self.delete_column(self._selection[1])

    # ─── Navigation ──────────────────────────────────────────────────────────

    @property
    def _first_row(self) -> int:
        return 1 if self.protect_header else 0

    def next_cell(self, row: int, col: int, direction: str = "tab") -> tuple[int, int] | None:
        """Cell after (row, col): below, to the right, or next in reading order."""
        if direction not in DIRECTIONS:
            raise ValueError(f"Unknown direction: {direction}")
        with self._lock:
            n_rows, n_cols = self._table.row_count, self._table.column_count
        if direction == "vertical":
            return (row + 1, col) if row + 1 < n_rows else None
        if col + 1 < n_cols:
            return (row, col + 1)
        if direction == "tab" and row + 1 < n_rows and n_cols > 0:
            return (row + 1, 0)
        return None

    def previous_cell(self, row: int, col: int, direction: str = "tab") -> tuple[int, int] | None:
        """Cell before (row, col); never steps into a protected header row."""
        if direction not in DIRECTIONS:
            raise ValueError(f"Unknown direction: {direction}")
        with self._lock:
            first_row, n_cols = self._first_row, self._table.column_count
        if direction == "vertical":
            return (row - 1, col) if row - 1 >= first_row else None
        if col > 0:
            return (row, col - 1)
        if direction == "tab" and row - 1 >= first_row:
            return (row - 1, n_cols - 1)
        return None

    # ─── Validation ──────────────────────────────────────────────────────────

    @property
    def issues(self) -> list[ValidationIssue]:
        """Issues from the last validation run (empty after any edit)."""
        with self._lock:
            return list(self._issues)

    def validate(self) -> list[ValidationIssue]:
        with self._lock:
            self._issues = validate(self._table)
            return list(self._issues)

    def _invalidate_issues(self) -> None:
        self._issues = []
