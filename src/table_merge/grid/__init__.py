"""Table data model and canonical text format.

Submodules:
  table     -- Table: ordered grid of string cells with structural edits
  csv_text  -- simple quoted-CSV parsing and the canonical export format
"""
