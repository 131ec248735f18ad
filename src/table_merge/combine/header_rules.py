"""Ordered rules deciding whether a fragment's first row repeats the header.

Every fragment after the first is extracted from a separate image, and the
extraction model may or may not repeat the column labels at its top.  Each
rule below looks at the fragment's first row (and, for some rules, the rest
of the fragment) and either returns a verdict or ``None`` to defer to the
next rule.  Rules are evaluated in order and the first verdict wins.

The final ``default`` rule leans towards treating the first row as a header:
duplicating a header into the data is worse than occasionally dropping one
data row that merely resembles a header.
"""

from dataclasses import dataclass
from typing import Callable

from table_merge.combine.patterns import HEADER_KEYWORD_RE
from table_merge.numeric import is_numeric

RuleCheck = Callable[[list[str], list[str], list[list[str]]], "bool | None"]


@dataclass(frozen=True)
class HeaderRule:
    name: str
    check: RuleCheck


@dataclass(frozen=True)
class HeaderDecision:
    rule: str
    is_header: bool


# ─── Rules ───────────────────────────────────────────────────────────────────


def shape_mismatch(first_row: list[str], reference: list[str], rows: list[list[str]]) -> bool | None:
    """A row with a different column count cannot be a repeated header."""
    if len(first_row) != len(reference):
        return False
    return None


def exact_match(first_row: list[str], reference: list[str], rows: list[list[str]]) -> bool | None:
    """Case-insensitive, trimmed equality with the reference header."""
    if all(cell.strip().lower() == ref.strip().lower() for cell, ref in zip(first_row, reference)):
        return True
    return None


def numeric_shift(first_row: list[str], reference: list[str], rows: list[list[str]]) -> bool | None:
    """Text in the first row followed by numbers in the second looks like header + data."""
    if len(rows) < 2:
        return None
    has_text = any(cell.strip() != "" and not is_numeric(cell) for cell in first_row)
    next_has_number = any(is_numeric(cell) for cell in rows[1])
    if has_text and next_has_number:
        return True
    return None


def keyword(first_row: list[str], reference: list[str], rows: list[list[str]]) -> bool | None:
    """Any cell starting with a header-ish word ("Name", "Date", "#", ...)."""
    if any(HEADER_KEYWORD_RE.match(cell) for cell in first_row):
        return True
    return None


def default(first_row: list[str], reference: list[str], rows: list[list[str]]) -> bool | None:
    # Multi-row fragments drop their first row; a lone row is kept as data
    return len(rows) > 1


HEADER_RULES: tuple[HeaderRule, ...] = (
    HeaderRule("shape_mismatch", shape_mismatch),
    HeaderRule("exact_match", exact_match),
    HeaderRule("numeric_shift", numeric_shift),
    HeaderRule("keyword", keyword),
    HeaderRule("default", default),
)


# ─── Decision ────────────────────────────────────────────────────────────────


def decide_header(rows: list[list[str]], reference: list[str] | None) -> HeaderDecision:
    """Decide whether ``rows[0]`` is a repeated header, first matching rule wins."""
    if not rows:
        return HeaderDecision("empty", False)
    if reference is None:
        # Nothing to compare against: the first row is the header by definition
        return HeaderDecision("no_reference", True)

    first_row = rows[0]
    for rule in HEADER_RULES:
        verdict = rule.check(first_row, reference, rows)
        if verdict is not None:
            return HeaderDecision(rule.name, verdict)

    # Unreachable while "default" is last, which always returns a verdict
    return HeaderDecision("none", False)
