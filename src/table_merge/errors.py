"""Exception types raised by the table_merge engine.

Combination-level errors abort the whole combine call.  Edit-level errors
abort only the requested operation and leave the table untouched.
"""


class TableMergeError(Exception):
    """Base class for every error raised by table_merge."""


class NoUsableFragments(TableMergeError, ValueError):
    """Every fragment failed or produced no non-blank lines."""


class MalformedFragment(TableMergeError, ValueError):
    """A fragment's text could not be split into any row."""


class OutOfRange(TableMergeError, IndexError):
    """A row/column address is outside the current table bounds."""


class ProtectedRow(TableMergeError, ValueError):
    """The header row (index 0) cannot be deleted or moved while protected."""


class LastColumn(TableMergeError, ValueError):
    """The only remaining column of a table cannot be deleted."""


class NoSelection(TableMergeError, ValueError):
    """A delete-selected operation was requested with nothing selected."""
