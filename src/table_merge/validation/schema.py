"""Pydantic models for validation findings."""

from pydantic import BaseModel


class ValidationIssue(BaseModel):
    """One inconsistent step in a numeric column.

    The issue sits on the later cell of a consecutive numeric pair
    (``row``/``col``).  ``suggestion`` is what that cell would hold had the
    step equalled the column's median step.  Issues describe one snapshot of
    a table and go stale as soon as the table is edited.
    """

    kind: str = "inconsistent_delta"
    row: int
    col: int
    from_row: int
    observed: str
    from_value: float
    to_value: float
    expected_delta: float
    actual_delta: float
    deviation: float
    tolerance: float
    suggestion: float
    message: str

    @property
    def expected_value(self) -> float:
        return self.suggestion

    @property
    def cell(self) -> tuple[int, int]:
        return (self.row, self.col)


class StructureReport(BaseModel):
    """Outcome of the structural sanity checks on a table."""

    is_valid: bool
    issues: list[str]
    row_count: int
    column_count: int
