"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")


@pytest.fixture(autouse=True)
def _clean_table_merge_env(monkeypatch):
    """Keep TABLE_MERGE_* settings from a developer's .env out of unit tests."""
    for key in ("TABLE_MERGE_LOG_LEVEL", "TABLE_MERGE_PROTECT_HEADER", "TABLE_MERGE_SUGGESTION_DECIMALS"):
        monkeypatch.delenv(key, raising=False)
