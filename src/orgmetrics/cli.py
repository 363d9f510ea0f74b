"""Command-line argument parsing for the GitHub org metrics generator."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from .config import (
    DEFAULT_ADOPTERS_URL,
    DEFAULT_DAYS,
    DEFAULT_METRICS_PATH,
    DEFAULT_ORGANIZATION,
    DEFAULT_REPO_NAME,
)


def _positive_int(value: str) -> int:
    """Parse and validate a positive integer CLI value.

    Args:
        value: Raw command-line argument value.

    Returns:
        The validated positive integer.

    Raises:
        argparse.ArgumentTypeError: If value is not a positive integer.
    """
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be an integer") from exc

    if parsed <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0")

    return parsed


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for metrics generation.

    Returns:
        Parsed CLI arguments containing the feature flags, organization,
        target repository, trailing window and file locations.
    """
    parser = argparse.ArgumentParser(
        prog="github-org-metrics",
        description=(
            "Generate pull request, issue, contributor and adopter metrics for a "
            "GitHub organization and optionally commit them back as a JSON file."
        ),
    )

    parser.add_argument(
        "--commit-changes",
        action="store_true",
        help="Commit the metrics file back to the target repository (default: dry run).",
    )
    parser.add_argument(
        "--with-metrics",
        action="store_true",
        help="Fetch pull request and issue metrics for every repository.",
    )
    parser.add_argument(
        "--with-adopter-list",
        action="store_true",
        help="Scrape the adopter list from the adopters markdown document.",
    )
    parser.add_argument(
        "--org",
        default=DEFAULT_ORGANIZATION,
        help=f"GitHub organization to analyze (default: {DEFAULT_ORGANIZATION}).",
    )
    parser.add_argument(
        "--repo",
        default=DEFAULT_REPO_NAME,
        help=f"Repository the metrics file is committed to (default: {DEFAULT_REPO_NAME}).",
    )
    parser.add_argument(
        "--days",
        type=_positive_int,
        default=DEFAULT_DAYS,
        help=f"Length of the trailing window in days (default: {DEFAULT_DAYS}).",
    )
    parser.add_argument(
        "--metrics-file",
        default=DEFAULT_METRICS_PATH,
        help=f"Local checkout of the metrics file (default: {DEFAULT_METRICS_PATH}).",
    )
    parser.add_argument(
        "--remote-path",
        default=None,
        help=(
            "Path of the metrics file relative to the target repository root "
            "(default: the --metrics-file path)."
        ),
    )
    parser.add_argument(
        "--adopters-url",
        default=DEFAULT_ADOPTERS_URL,
        help="Raw URL of the adopters markdown document.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser.parse_args(argv)
