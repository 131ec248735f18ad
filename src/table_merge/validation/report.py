"""Presentation helpers for validation results.

Turns ValidationIssue lists into the pieces a front end needs: issues
grouped by column, the value written by a quick fix, a per-cell tooltip
and a plain-text summary.  Row and column numbers shown to people are
1-based; the issue objects themselves stay 0-based.
"""

from decimal import ROUND_HALF_UP, Decimal

from table_merge.validation.schema import ValidationIssue


def format_value(value: float) -> str:
    """Render a parsed cell value without a spurious trailing '.0'."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_suggestion(value: float, decimals: int = 0) -> str:
    """Round *value* half away from zero to *decimals* places for writing into a cell."""
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded == 0:
        rounded = abs(rounded)
    return f"{rounded:f}"


def group_issues_by_column(issues: list[ValidationIssue]) -> dict[int, list[ValidationIssue]]:
    """Group issues by column index, keeping first-seen column order."""
    groups: dict[int, list[ValidationIssue]] = {}
    for issue in issues:
        groups.setdefault(issue.col, []).append(issue)
    return groups


def describe_issue(issue: ValidationIssue) -> str:
    """Multi-line tooltip text for the flagged cell."""
    return "\n".join(
        [
            "Inconsistent value detected!",
            f"Expected delta: ~{format_suggestion(issue.expected_delta)}",
            f"Actual delta: {format_suggestion(issue.actual_delta)}",
            f"Deviation: {format_suggestion(issue.deviation)}",
            f"Suggested value: {format_suggestion(issue.suggestion)}",
            f"From: {format_value(issue.from_value)} → To: {format_value(issue.to_value)}",
        ]
    )


def render_summary(issues: list[ValidationIssue]) -> str:
    """Plain-text summary of a validation run, grouped by column."""
    if not issues:
        return "Data Validation Complete: no consistency issues found in the data."

    lines = [f"Data Validation Issues Found ({len(issues)})"]
    for col, col_issues in group_issues_by_column(issues).items():
        lines.append(f"Column {col + 1}:")
        for issue in col_issues:
            lines.append(f"  Row {issue.row + 1}: Value {format_value(issue.to_value)} (expected ~{format_suggestion(issue.suggestion)})")
    return "\n".join(lines)
