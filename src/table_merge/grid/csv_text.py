"""Simple quoted-CSV text handling.

This is deliberately not an RFC-4180 parser: fields are comma-delimited,
may carry one layer of surrounding double quotes, and never contain an
embedded delimiter.  The canonical export quotes every field, so any value
without a double quote survives ``parse_text(to_text(table))`` unchanged.
"""

from table_merge.config import DELIMITER, QUOTE
from table_merge.grid.table import Table


def unquote(cell: str) -> str:
    """Trim whitespace, then strip one leading and one trailing double quote."""
    cell = cell.strip()
    if cell.startswith(QUOTE):
        cell = cell[1:]
    if cell.endswith(QUOTE):
        cell = cell[:-1]
    return cell


def parse_line(line: str) -> list[str]:
    """Split one line on the delimiter and clean each cell."""
    return [unquote(cell) for cell in line.split(DELIMITER)]


def split_lines(text: str) -> list[str]:
    """Return the non-blank lines of *text*.

    Only ``\\n`` (optionally preceded by ``\\r``) ends a line; other Unicode
    line separators stay inside their cell.
    """
    lines = (line.rstrip("\r") for line in text.split("\n"))
    return [line for line in lines if line.strip()]


def parse_rows(text: str) -> list[list[str]]:
    return [parse_line(line) for line in split_lines(text)]


def parse_text(text: str) -> Table:
    """Parse quoted-CSV text (e.g. a previous export) into a Table."""
    return Table(parse_rows(text or ""))


def format_row(row: list[str]) -> str:
    return DELIMITER.join(f"{QUOTE}{cell}{QUOTE}" for cell in row)


def to_text(table: Table) -> str:
    """Render *table* in the canonical export format.

    Every cell is wrapped in double quotes, cells are joined with a comma
    and rows with a newline.
    """
    return "\n".join(format_row(row) for row in table.rows)
