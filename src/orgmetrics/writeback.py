"""Commit the generated metrics file back to the target repository."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Optional

from .config import Config
from .errors import ConfigurationError
from .github_client import GitHubClient

logger = logging.getLogger(__name__)


def get_current_metrics_file_sha(client: GitHubClient, config: Config) -> Optional[str]:
    """Return the blob sha of the locally checked-out metrics file.

    The sha is obtained by creating a blob with the current contents, which
    yields the same sha as the committed version. ``None`` is returned when no
    local copy exists, so the file is created rather than updated.
    """
    metrics_file = Path(config.metrics_path)
    if not metrics_file.is_file():
        logger.warning("No existing metrics file at %s; it will be created", metrics_file)
        return None

    return client.create_blob(config.organization, config.repo_name, metrics_file.read_bytes())


def resolve_repository_path(config: Config) -> str:
    """Return the repository-root-relative path the metrics file is committed to.

    ``config.remote_path`` wins; otherwise the local ``config.metrics_path`` is
    used as-is, so ``docs/metrics.json`` is committed to ``docs/metrics.json``.

    Raises:
        ConfigurationError: If the path is absolute or escapes the repository root.
    """
    raw_path = config.remote_path or config.metrics_path
    repository_path = PurePosixPath(Path(raw_path).as_posix())

    if repository_path.is_absolute() or ".." in repository_path.parts:
        raise ConfigurationError(
            f"Invalid repository path '{raw_path}': expected a path relative to the repository root. "
            "Pass --remote-path when the local metrics file lives outside the checkout."
        )

    return repository_path.as_posix()


def commit_metrics(client: GitHubClient, config: Config, metrics_json: str) -> Dict[str, Any]:
    """Update the metrics file in ``config.repo_name`` with ``metrics_json``."""
    path = resolve_repository_path(config)
    sha = get_current_metrics_file_sha(client, config)

    result = client.update_file_contents(
        owner=config.organization,
        repo_name=config.repo_name,
        path=path,
        content=metrics_json.encode("utf-8"),
        message=config.commit_message,
        sha=sha,
        committer={"name": config.committer_name, "email": config.committer_email},
    )

    logger.info(
        "Committed metrics file",
        extra={"repo": config.repo_name, "repository_path": path, "previous_sha": sha},
    )
    return result
