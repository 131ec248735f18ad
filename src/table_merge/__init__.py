"""Consolidation, editing, and validation of tables extracted from images.

Subpackages:
  grid        -- Table data model and the canonical quoted-CSV text format
  combine     -- merge per-image CSV fragments, resolving repeated headers
  validation  -- sequential-delta consistency checks and structure checks
  session     -- EditSession: dirty tracking, structural edits, quick fixes
"""

from table_merge.combine.combiner import combine, combine_text
from table_merge.errors import (
    LastColumn,
    MalformedFragment,
    NoSelection,
    NoUsableFragments,
    OutOfRange,
    ProtectedRow,
    TableMergeError,
)
from table_merge.grid.table import Table
from table_merge.session.edit_session import EditSession
from table_merge.validation.deltas import validate

__all__ = [
    "EditSession",
    "LastColumn",
    "MalformedFragment",
    "NoSelection",
    "NoUsableFragments",
    "OutOfRange",
    "ProtectedRow",
    "Table",
    "TableMergeError",
    "combine",
    "combine_text",
    "validate",
]
