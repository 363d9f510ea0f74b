"""Tests for command-line argument parsing."""

import sys
from pathlib import Path

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from orgmetrics.cli import parse_args


def test_parse_args_defaults_to_dry_run_without_features():
    """Verify presence-based flags are off and defaults apply when omitted."""
    args = parse_args([])

    assert args.commit_changes is False
    assert args.with_metrics is False
    assert args.with_adopter_list is False
    assert args.org == "backstage"
    assert args.repo == "tempo"
    assert args.days == 30
    assert args.metrics_file == "metrics.json"
    assert args.remote_path is None


def test_parse_args_with_all_flags_and_values():
    """Verify CLI parsing picks up every flag and value option."""
    args = parse_args(
        [
            "--commit-changes",
            "--with-metrics",
            "--with-adopter-list",
            "--org",
            "my-org",
            "--repo",
            "my-repo",
            "--days",
            "14",
            "--metrics-file",
            "out/metrics.json",
            "--remote-path",
            "reports/metrics.json",
            "--verbose",
        ]
    )

    assert args.commit_changes is True
    assert args.with_metrics is True
    assert args.with_adopter_list is True
    assert args.org == "my-org"
    assert args.repo == "my-repo"
    assert args.days == 14
    assert args.metrics_file == "out/metrics.json"
    assert args.remote_path == "reports/metrics.json"
    assert args.verbose is True


@pytest.mark.parametrize("days", ["0", "-1", "abc"])
def test_parse_args_with_invalid_days_fails_validation(days):
    """Verify CLI parsing exits with an error when --days is not a positive integer."""
    with pytest.raises(SystemExit):
        parse_args(["--days", days])
