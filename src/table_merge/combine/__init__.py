"""Merge per-image CSV fragments into one Table.

Submodules:
  patterns      -- compiled regex patterns and the header keyword tuple
  schema        -- FragmentResult Pydantic model (one extraction result)
  header_rules  -- ordered, named rules deciding whether a row is a repeated header
  combiner      -- combine() entry point
"""
