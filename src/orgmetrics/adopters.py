"""Adopter list scraping from a community-maintained markdown table."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .github_client import GitHubClient

logger = logging.getLogger(__name__)

_TEXT_TOKEN_TYPES = ("text", "code_inline")


class _ScanState(Enum):
    OUTSIDE = "outside"
    IN_TABLE_BODY = "in_table_body"
    EXPECTING_ROW = "expecting_row"
    EXPECTING_CELL = "expecting_cell"


def _cell_text(token: Token) -> str:
    """Return the plain text of an inline cell token, links reduced to their label."""
    if token.children:
        text = "".join(child.content for child in token.children if child.type in _TEXT_TOKEN_TYPES)
    else:
        text = token.content
    return text.strip()


def parse_adopters(markdown: str) -> List[str]:
    """Extract the first cell of every table-body row in ``markdown``.

    Names are de-duplicated and returned in document order. Rows whose first
    cell is empty are skipped.
    """
    tokens = MarkdownIt("commonmark").enable("table").parse(markdown)
    adopters: Dict[str, None] = {}
    state = _ScanState.OUTSIDE
    skipped_rows = 0

    for token in tokens:
        if token.type == "tbody_open":
            state = _ScanState.EXPECTING_ROW
        elif token.type == "tbody_close":
            state = _ScanState.OUTSIDE
        elif state is _ScanState.OUTSIDE:
            continue
        elif token.type == "tr_open":
            state = _ScanState.EXPECTING_CELL
        elif token.type == "tr_close":
            state = _ScanState.EXPECTING_ROW
        elif state is _ScanState.EXPECTING_CELL and token.type == "inline":
            name = _cell_text(token)
            if name:
                adopters.setdefault(name, None)
            else:
                skipped_rows += 1
            # Remaining cells of the row are ignored.
            state = _ScanState.IN_TABLE_BODY

    if skipped_rows:
        logger.debug("Skipped adopter rows without a name", extra={"skipped_rows": skipped_rows})

    return list(adopters)


def fetch_adopter_list(client: GitHubClient, url: str) -> List[str]:
    """Fetch the adopters document at ``url`` and scrape its names."""
    logger.info("Fetching adopter list from %s", url)
    adopters = parse_adopters(client.fetch_text(url))
    logger.info("Found %d adopters", len(adopters))
    return adopters
