"""Unit tests for EditSession: dirty tracking, structural edits, selection, quick fixes."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import threading

import pytest

from table_merge.errors import LastColumn, NoSelection, NoUsableFragments, OutOfRange, ProtectedRow
from table_merge.grid.table import Table
from table_merge.session.edit_session import EditSession


def make_session(**kwargs) -> EditSession:
    table = Table([["Time", "Value"], ["1", "10"], ["2", "20"], ["3", "35"], ["4", "40"]])
    kwargs.setdefault("protect_header", True)
    return EditSession(table, **kwargs)


class TestConstruction:

    def test_ragged_table_made_rectangular(self):
        session = EditSession(Table([["A", "B"], ["1", "2"], ["X"], ["5"]]))
        assert session.table.is_rectangular()
        assert session.table.row(2) == ["X", ""]

    def test_session_owns_a_copy(self):
        table = Table([["A"], ["1"]])
        session = EditSession(table)
        table.set_cell(1, 0, "changed")
        assert session.get_cell(1, 0) == "1"

    def test_from_fragments(self):
        session = EditSession.from_fragments(["A,B\n1,2", "A,B\n3,4"])
        assert session.export_text() == '"A","B"\n"1","2"\n"3","4"'

    def test_from_fragments_without_usable_input(self):
        with pytest.raises(NoUsableFragments):
            EditSession.from_fragments([{"success": False, "content": ""}])

    def test_from_text_round_trip(self):
        session = make_session()
        restored = EditSession.from_text(session.export_text())
        assert restored.table == session.table
        assert restored.dirty_count() == 0

    def test_explicit_arguments_skip_environment(self, monkeypatch):
        monkeypatch.setenv("TABLE_MERGE_PROTECT_HEADER", "maybe")
        session = EditSession(Table([["A"]]), protect_header=True, suggestion_decimals=0)
        assert session.protect_header is True
        assert session.suggestion_decimals == 0

    def test_missing_argument_reads_environment(self, monkeypatch):
        monkeypatch.setenv("TABLE_MERGE_PROTECT_HEADER", "maybe")
        with pytest.raises(ValueError):
            EditSession(Table([["A"]]), suggestion_decimals=0)


class TestDirtyTracking:

    def test_edit_marks_dirty(self):
        session = make_session()
        session.set_cell(1, 1, "11")
        assert session.dirty_cells() == {(1, 1)}
        assert session.dirty_count() == 1

    def test_noop_write_not_dirty(self):
        session = make_session()
        session.set_cell(1, 1, "10")
        assert session.dirty_count() == 0

    def test_net_zero_edit_clears_dirty(self):
        session = make_session()
        session.set_cell(1, 1, "99")
        session.set_cell(1, 1, "50")
        session.set_cell(1, 1, "10")
        assert session.is_dirty(1, 1) is False

    def test_mark_saved_clears_without_changing_cells(self):
        session = make_session()
        session.set_cell(2, 0, "x")
        session.mark_saved()
        assert session.dirty_count() == 0
        assert session.get_cell(2, 0) == "x"

    def test_edit_after_save_compares_to_saved_value(self):
        session = make_session()
        session.set_cell(2, 0, "x")
        session.mark_saved()
        session.set_cell(2, 0, "2")
        assert session.is_dirty(2, 0) is True

    def test_out_of_range_edit(self):
        session = make_session()
        with pytest.raises(OutOfRange):
            session.set_cell(9, 0, "x")
        assert session.dirty_count() == 0


class TestStructuralEdits:

    def test_add_row_and_column_keep_rectangular(self):
        session = make_session()
        session.add_row()
        session.add_column()
        session.add_row()
        table = session.table
        assert table.is_rectangular()
        assert (table.row_count, table.column_count) == (7, 3)

    def test_delete_header_row_protected(self):
        session = make_session()
        with pytest.raises(ProtectedRow):
            session.delete_row(0)
        assert session.row_count == 5

    def test_delete_header_row_unprotected(self):
        session = make_session(protect_header=False)
        session.delete_row(0)
        assert session.get_cell(0, 0) == "1"

    def test_delete_row_shifts_dirty_cells(self):
        session = make_session()
        session.set_cell(1, 0, "a")
        session.set_cell(2, 0, "b")
        session.set_cell(4, 1, "c")
        session.delete_row(2)
        assert session.dirty_cells() == {(1, 0), (3, 1)}
        assert session.get_cell(3, 1) == "c"

    def test_delete_row_out_of_range(self):
        session = make_session()
        with pytest.raises(OutOfRange):
            session.delete_row(10)

    def test_delete_column_shifts_dirty_cells(self):
        session = make_session()
        session.add_column()
        session.set_cell(1, 0, "a")
        session.set_cell(1, 2, "b")
        session.delete_column(1)
        assert session.dirty_cells() == {(1, 0), (1, 1)}
        assert session.get_cell(1, 1) == "b"

    def test_delete_last_column(self):
        session = EditSession(Table([["A"], ["1"]]))
        with pytest.raises(LastColumn):
            session.delete_column(0)
        assert session.column_count == 1

    def test_delete_column_out_of_range(self):
        session = make_session()
        with pytest.raises(OutOfRange):
            session.delete_column(2)

    def test_dirty_cells_always_exist(self):
        session = make_session()
        session.set_cell(4, 1, "x")
        session.set_cell(3, 0, "y")
        session.delete_row(4)
        session.delete_column(0)
        table = session.table
        for row, col in session.dirty_cells():
            assert row < table.row_count and col < table.column_count
        assert session.dirty_cells() == set()

    def test_move_row_remaps_dirty_cells(self):
        session = make_session()
        session.set_cell(1, 1, "x")
        session.move_row(1, 3)
        assert session.dirty_cells() == {(3, 1)}
        assert session.get_cell(3, 1) == "x"

    def test_move_into_header_protected(self):
        session = make_session()
        with pytest.raises(ProtectedRow):
            session.move_row(2, 0)

    def test_move_column_remaps_dirty_cells(self):
        session = make_session()
        session.set_cell(2, 0, "x")
        session.move_column(0, 1)
        assert session.dirty_cells() == {(2, 1)}
        assert session.table.row(0) == ["Value", "Time"]

    def test_export_text(self):
        session = EditSession(Table([["A", "B"], ["1", "2"]]))
        session.add_row()
        assert session.export_text() == '"A","B"\n"1","2"\n"",""'


class TestSelection:

    def test_delete_selected_row_clears_selection(self):
        session = make_session()
        session.select(2, 1)
        session.delete_selected_row()
        assert session.selection is None
        assert session.row_count == 4

    def test_delete_selected_column(self):
        session = make_session()
        session.select(1, 0)
        session.delete_selected_column()
        assert session.table.row(0) == ["Value"]

    def test_delete_without_selection(self):
        session = make_session()
        with pytest.raises(NoSelection):
            session.delete_selected_row()
        with pytest.raises(NoSelection):
            session.delete_selected_column()

    def test_select_out_of_range(self):
        with pytest.raises(OutOfRange):
            make_session().select(0, 5)

    def test_selection_follows_moved_row(self):
        session = make_session()
        session.select(1, 1)
        session.move_row(1, 4)
        assert session.selection == (4, 1)


class TestNavigation:

    def test_tab_wraps_to_next_row(self):
        session = make_session()
        assert session.next_cell(1, 0) == (1, 1)
        assert session.next_cell(1, 1) == (2, 0)
        assert session.next_cell(4, 1) is None

    def test_horizontal_stops_at_edge(self):
        assert make_session().next_cell(1, 1, "horizontal") is None

    def test_vertical(self):
        session = make_session()
        assert session.next_cell(3, 1, "vertical") == (4, 1)
        assert session.previous_cell(2, 1, "vertical") == (1, 1)

    def test_previous_never_enters_protected_header(self):
        session = make_session()
        assert session.previous_cell(1, 0) is None
        assert session.previous_cell(1, 0, "vertical") is None
        assert session.previous_cell(2, 0) == (1, 1)

    def test_previous_enters_unprotected_header(self):
        session = make_session(protect_header=False)
        assert session.previous_cell(1, 0) == (0, 1)

    def test_unknown_direction(self):
        with pytest.raises(ValueError):
            make_session().next_cell(1, 0, "diagonal")


class TestValidationFlow:

    def test_validate_stores_issues(self):
        session = make_session()
        issues = session.validate()
        assert [issue.cell for issue in issues] == [(3, 1), (4, 1)]
        assert session.issues == issues

    def test_any_edit_invalidates_issues(self):
        session = make_session()
        session.validate()
        session.add_column()
        assert session.issues == []

    def test_apply_fix_writes_suggestion_and_revalidates(self):
        session = make_session()
        first = session.validate()[0]
        remaining = session.apply_fix(first)
        assert session.get_cell(3, 1) == "30"
        assert session.is_dirty(3, 1)
        assert remaining == []
        assert session.issues == []

    def test_apply_fix_with_decimals(self):
        session = EditSession(Table([["v"], ["0.5"], ["1.0"], ["1.7"], ["2.0"]]), suggestion_decimals=1)
        issue = session.validate()[0]
        session.apply_fix(issue)
        assert session.get_cell(issue.row, issue.col) == "1.5"


class TestLocking:

    @pytest.mark.parametrize(
        "read",
        [
            lambda s: s.row_count,
            lambda s: s.column_count,
            lambda s: s.dirty_count(),
            lambda s: s.is_dirty(1, 1),
            lambda s: s.selection,
            lambda s: s.issues,
            lambda s: s.next_cell(1, 0),
            lambda s: s.previous_cell(2, 0),
            lambda s: s.clear_selection(),
        ],
    )
    def test_reads_wait_for_lock(self, read):
        session = make_session()
        done = threading.Event()

        def worker():
            read(session)
            done.set()

        with session._lock:  # pylint: disable=protected-access
            thread = threading.Thread(target=worker)
            thread.start()
            assert not done.wait(0.1)
        thread.join(timeout=2)
        assert done.is_set()
