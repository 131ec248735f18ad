"""Combine per-image CSV fragments into a single Table.

Each source image is sent to the extraction API separately, so a multi-page
table comes back as several CSV fragments.  This module:

  1. Drops failed extractions.
  2. Cleans each fragment (code fences, blank lines, quotes) into rows.
  3. Takes the first fragment's first row as the reference header.
  4. Decides, per later fragment, whether its first row repeats the header
     (see header_rules.py) and skips it if so.
  5. Concatenates the retained rows in the caller-supplied order, which is
     the source images' filename order.

Fragments that fail to parse are logged and contribute no rows; the whole
call fails only when nothing usable is left.
"""

import logging
from typing import Iterable, Mapping

from table_merge.combine.header_rules import decide_header
from table_merge.combine.patterns import CODE_FENCE_RE
from table_merge.combine.schema import FragmentResult
from table_merge.errors import MalformedFragment, NoUsableFragments
from table_merge.grid.csv_text import parse_rows, to_text
from table_merge.grid.table import Table

logger = logging.getLogger(__name__)


# ─── Fragment Cleaning ───────────────────────────────────────────────────────


def strip_code_fences(content: str) -> str:
    """Remove markdown code-fence markers the extraction model wraps its CSV in."""
    return CODE_FENCE_RE.sub("", content or "").strip()


def parse_fragment(content: str) -> list[list[str]]:
    """Clean one fragment and split it into rows of cells.

    Raises MalformedFragment if nothing but whitespace and fences remains.
    """
    rows = parse_rows(strip_code_fences(content))
    if not rows:
        raise MalformedFragment("Fragment contains no non-blank lines")
    return rows


def _coerce(fragment: FragmentResult | Mapping | str) -> FragmentResult:
    """Accept FragmentResult objects, plain dicts, or bare strings (treated as successful)."""
    if isinstance(fragment, FragmentResult):
        return fragment
    if isinstance(fragment, str):
        return FragmentResult(success=True, content=fragment)
    return FragmentResult.model_validate(fragment)


# ─── Main Entry Point ────────────────────────────────────────────────────────


def combine(fragments: Iterable[FragmentResult | Mapping | str]) -> Table:
    """Merge extraction fragments into one Table, skipping repeated headers.

    Rows keep their order within a fragment and fragments keep the order they
    were given in.  The result may be ragged when a fragment's column count
    differs from the reference header.
    """
    results = [_coerce(fragment) for fragment in fragments]
    successful = [(idx, result) for idx, result in enumerate(results) if result.success]
    if len(successful) < len(results):
        logger.warning("Ignoring %d failed fragment(s)", len(results) - len(successful))
    if not successful:
        raise NoUsableFragments("No images were successfully processed")

    combined: list[list[str]] = []
    reference: list[str] | None = None

    for idx, result in successful:
        try:
            rows = parse_fragment(result.content)
        except MalformedFragment as exc:
            logger.warning("Fragment %d (source order %d) skipped: %s", idx + 1, result.source_order, exc)
            continue

        if reference is None:
            # First usable fragment: its first row is the reference header
            reference = rows[0]
            combined.extend(rows)
            logger.debug("Fragment %d sets reference header %s", idx + 1, reference)
            continue

        decision = decide_header(rows, reference)
        start = 1 if decision.is_header else 0
        if decision.is_header:
            logger.debug("Skipping header row in fragment %d (rule=%s): %s", idx + 1, decision.rule, rows[0])
        else:
            logger.debug("No header detected in fragment %d (rule=%s), including all rows", idx + 1, decision.rule)
        combined.extend(rows[start:])

    if reference is None:
        raise NoUsableFragments("Every successful fragment was empty")

    table = Table(combined)
    logger.info("Combined %d fragment(s) into %d rows", len(successful), table.row_count)
    return table


def combine_text(fragments: Iterable[FragmentResult | Mapping | str]) -> str:
    """Combine fragments and return the canonical quoted-CSV text."""
    return to_text(combine(fragments))
