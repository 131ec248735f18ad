"""Compiled regex patterns and constant tuples used while combining fragments."""

import re

# ─── Fragment Cleaning ────────────────────────────────────────────────────────

# Markdown code-fence marker, with or without a language tag ("```csv", "```")
CODE_FENCE_RE = re.compile(r"```[A-Za-z0-9_+-]*[ \t]*\r?\n?")


# ─── Header Detection ─────────────────────────────────────────────────────────

# Cell prefixes that mark a row as header-like (matched case-insensitively)
HEADER_KEYWORDS = (
    "column",
    "col",
    "header",
    "field",
    "name",
    "time",
    "date",
    "value",
    "data",
    "row",
    "#",
)

HEADER_KEYWORD_RE = re.compile(r"^(?:" + "|".join(re.escape(word) for word in HEADER_KEYWORDS) + ")", re.IGNORECASE)
