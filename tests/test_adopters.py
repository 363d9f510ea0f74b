"""Tests for adopter table scraping."""

import sys
from pathlib import Path
from unittest.mock import Mock

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from orgmetrics.adopters import fetch_adopter_list, parse_adopters

ADOPTERS_MD = """\
# Adopters

Some introduction text that is not a table.

| Organization | Contact | Description of Use |
| ------------ | ------- | ------------------ |
| Acme Corp | @acme | Developer portal |
| [Globex](https://globex.example) | @globex | Service catalog |
| Acme Corp | @acme-two | Duplicate row |
|  | @nobody | Row without a name |
| `Initech` | @initech | TechDocs |
"""


def test_parse_adopters_returns_first_cells_in_document_order():
    """Verify the first cell of each body row is collected, links reduced to their label."""
    assert parse_adopters(ADOPTERS_MD) == ["Acme Corp", "Globex", "Initech"]


def test_parse_adopters_collapses_duplicate_rows():
    """Verify duplicate adopter rows produce exactly one entry."""
    markdown = (
        "| Organization | Contact |\n"
        "| --- | --- |\n"
        "| Acme Corp | one |\n"
        "| Acme Corp | two |\n"
    )

    assert parse_adopters(markdown) == ["Acme Corp"]


def test_parse_adopters_ignores_header_cells_and_non_table_content():
    """Verify header rows and text outside table bodies are never scraped."""
    markdown = "Acme Corp\n\n| Organization |\n| --- |\n"

    assert parse_adopters(markdown) == []


def test_parse_adopters_is_idempotent():
    """Verify scraping the same document twice yields the same adopters."""
    assert parse_adopters(ADOPTERS_MD) == parse_adopters(ADOPTERS_MD)


def test_parse_adopters_reads_every_table_body():
    """Verify rows from multiple tables are all collected."""
    markdown = (
        "| Organization |\n| --- |\n| Acme Corp |\n\n"
        "Between tables.\n\n"
        "| Organization |\n| --- |\n| Umbrella |\n"
    )

    assert parse_adopters(markdown) == ["Acme Corp", "Umbrella"]


def test_fetch_adopter_list_fetches_document_through_client():
    """Verify the adopter document is fetched from the configured URL."""
    client = Mock()
    client.fetch_text.return_value = ADOPTERS_MD

    adopters = fetch_adopter_list(client, "https://example.com/ADOPTERS.md")

    client.fetch_text.assert_called_once_with("https://example.com/ADOPTERS.md")
    assert adopters == ["Acme Corp", "Globex", "Initech"]
