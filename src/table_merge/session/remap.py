"""Index remapping after structural edits.

A structural edit (delete or move of a row or column) shifts the indices of
everything after it.  Each edit is described by one IndexMap, a function
from an old index to its new index (or None when the index disappeared),
and the same map is applied uniformly to every coordinate-keyed structure
the session keeps.
"""

from typing import Callable, Literal, TypeVar

IndexMap = Callable[[int], "int | None"]
Axis = Literal["row", "col"]
V = TypeVar("V")


def removal_map(removed: int) -> IndexMap:
    """Map for deleting index *removed*: later indices shift down by one."""

    def _map(index: int) -> int | None:
        if index == removed:
            return None
        return index - 1 if index > removed else index

    return _map


def move_map(src: int, dst: int) -> IndexMap:
    """Map for ``items.insert(dst, items.pop(src))``."""

    def _map(index: int) -> int | None:
        if index == src:
            return dst
        if src < index <= dst:
            return index - 1
        if dst <= index < src:
            return index + 1
        return index

    return _map


def remap_cells(cells: dict[tuple[int, int], V], axis: Axis, index_map: IndexMap) -> dict[tuple[int, int], V]:
    """Apply *index_map* to the row or column part of every coordinate key.

    Entries whose index maps to None are dropped.
    """
    remapped: dict[tuple[int, int], V] = {}
    for (row, col), value in cells.items():
        if axis == "row":
            new_row = index_map(row)
            if new_row is not None:
                remapped[(new_row, col)] = value
        else:
            new_col = index_map(col)
            if new_col is not None:
                remapped[(row, new_col)] = value
    return remapped
