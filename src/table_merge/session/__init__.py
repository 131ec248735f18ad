"""Interactive editing of a combined table.

Submodules:
  remap         -- index-remap functions applied after structural edits
  edit_session  -- EditSession: cell edits, dirty tracking, structural edits, quick fixes
"""
