"""Lenient number parsing and the median used by the delta check.

Cells coming back from the extraction API often carry units or footnote
markers after the number ("12.5 mm", "40*").  ``parse_number`` reads the
leading decimal number of a cell and ignores whatever follows; cells with
no leading number, blank cells, NaN and infinities are not numeric.
"""

import math
import re

LEADING_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII)


def parse_number(cell: str) -> float | None:
    """Return the leading decimal number of *cell*, or None if there is none."""
    if cell is None:
        return None
    match = LEADING_NUMBER_RE.match(cell)
    if not match:
        return None
    value = float(match.group(1))
    if not math.isfinite(value):
        return None
    return value


def is_numeric(cell: str) -> bool:
    return parse_number(cell) is not None


def median(values: list[float]) -> float:
    """Standard median: the mean of the two middle values for an even count (0.0 if empty)."""
    if not values:
        return 0.0
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]
