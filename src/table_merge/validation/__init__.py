"""Consistency checks over a Table.

Submodules:
  schema     -- ValidationIssue Pydantic model
  deltas     -- sequential-delta consistency check (validate / validate_column)
  structure  -- column-count and header sanity checks (check_structure)
  report     -- grouping, suggestion formatting, and plain-text summaries
"""
