"""Tests for committing the metrics file back to the repository."""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from orgmetrics.config import Config
from orgmetrics.errors import ConfigurationError
from orgmetrics.writeback import commit_metrics, get_current_metrics_file_sha, resolve_repository_path


def _config(metrics_path, remote_path=None) -> Config:
    return Config(
        organization="org",
        repo_name="tempo",
        days=30,
        token="secret",
        metrics_path=str(metrics_path),
        remote_path=remote_path,
    )


def test_get_current_metrics_file_sha_creates_blob_from_local_file(tmp_path):
    """Verify the previous sha is derived from the local copy of the metrics file."""
    metrics_file = tmp_path / "metrics.json"
    metrics_file.write_text('{"old": true}', encoding="utf-8")
    client = Mock()
    client.create_blob.return_value = "old-sha"

    sha = get_current_metrics_file_sha(client, _config(metrics_file))

    assert sha == "old-sha"
    client.create_blob.assert_called_once_with("org", "tempo", b'{"old": true}')


def test_get_current_metrics_file_sha_missing_file_returns_none(tmp_path):
    """Verify no blob is created when there is no previous metrics file."""
    client = Mock()

    sha = get_current_metrics_file_sha(client, _config(tmp_path / "metrics.json"))

    assert sha is None
    client.create_blob.assert_not_called()


def test_resolve_repository_path_keeps_relative_directories():
    """Verify a metrics file below a directory is committed to the same directory."""
    assert resolve_repository_path(_config("docs/metrics.json")) == "docs/metrics.json"
    assert resolve_repository_path(_config("metrics.json")) == "metrics.json"


def test_resolve_repository_path_prefers_remote_path(tmp_path):
    """Verify an explicit repository path overrides the local file location."""
    config = _config(tmp_path / "metrics.json", remote_path="reports/metrics.json")

    assert resolve_repository_path(config) == "reports/metrics.json"


@pytest.mark.parametrize("path", ["/tmp/metrics.json", "../metrics.json"])
def test_resolve_repository_path_rejects_paths_outside_repository(path):
    """Verify absolute or escaping paths need an explicit repository path."""
    with pytest.raises(ConfigurationError, match="--remote-path"):
        resolve_repository_path(_config(path))


def test_commit_metrics_updates_file_at_repository_path(tmp_path, monkeypatch):
    """Verify the update targets the relative path and carries sha, message and committer."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "metrics.json").write_text("{}", encoding="utf-8")
    client = Mock()
    client.create_blob.return_value = "old-sha"
    client.update_file_contents.return_value = {"content": {"sha": "new-sha"}}

    result = commit_metrics(client, _config("docs/metrics.json"), '{\n  "a": 1\n}')

    assert result == {"content": {"sha": "new-sha"}}
    client.create_blob.assert_called_once_with("org", "tempo", b"{}")
    client.update_file_contents.assert_called_once_with(
        owner="org",
        repo_name="tempo",
        path="docs/metrics.json",
        content=b'{\n  "a": 1\n}',
        message="Updated metrics",
        sha="old-sha",
        committer={"name": "Backstage Bot", "email": "bot@backstage.io"},
    )


def test_commit_metrics_invalid_path_fails_before_any_request(tmp_path):
    """Verify a path outside the repository aborts before the blob is created."""
    metrics_file = tmp_path / "metrics.json"
    metrics_file.write_text("{}", encoding="utf-8")
    client = Mock()

    with pytest.raises(ConfigurationError):
        commit_metrics(client, _config(metrics_file), "{}")

    client.create_blob.assert_not_called()
    client.update_file_contents.assert_not_called()
