"""Configuration parsing and validation for the GitHub org metrics generator."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .errors import AuthenticationError, ConfigurationError

TOKEN_ENV_VAR = "GITHUB_TOKEN"

DEFAULT_ORGANIZATION = "backstage"
DEFAULT_REPO_NAME = "tempo"
DEFAULT_METRICS_PATH = "metrics.json"
DEFAULT_DAYS = 30
DEFAULT_ADOPTERS_URL = (
    "https://raw.githubusercontent.com/backstage/backstage/master/ADOPTERS.md"
)
DEFAULT_COMMIT_MESSAGE = "Updated metrics"
DEFAULT_COMMITTER_NAME = "Backstage Bot"
DEFAULT_COMMITTER_EMAIL = "bot@backstage.io"
DEFAULT_BOT_ACCOUNTS: Tuple[str, ...] = ("snyk-bot",)


@dataclass(frozen=True)
class Config:
    """Validated runtime settings used by the metrics generator."""

    organization: str
    repo_name: str
    days: int
    token: str
    metrics_path: str = DEFAULT_METRICS_PATH
    remote_path: Optional[str] = None
    adopters_url: str = DEFAULT_ADOPTERS_URL
    commit_message: str = DEFAULT_COMMIT_MESSAGE
    committer_name: str = DEFAULT_COMMITTER_NAME
    committer_email: str = DEFAULT_COMMITTER_EMAIL
    bot_accounts: Tuple[str, ...] = field(default=DEFAULT_BOT_ACCOUNTS)


def load_config(
    organization: str,
    repo_name: str,
    days: int,
    metrics_path: str = DEFAULT_METRICS_PATH,
    adopters_url: str = DEFAULT_ADOPTERS_URL,
    remote_path: Optional[str] = None,
) -> Config:
    """Build and validate application configuration.

    Args:
        organization: GitHub organization whose repositories are analyzed.
        repo_name: Repository the metrics file is committed back to.
        days: Positive length of the trailing window in days.
        metrics_path: Local checkout of the metrics file.
        adopters_url: Raw URL of the markdown document listing adopters.
        remote_path: Path of the metrics file relative to the repository root;
            defaults to ``metrics_path`` when omitted.

    Returns:
        A validated ``Config`` instance.

    Raises:
        ConfigurationError: If ``days`` is not greater than ``0``.
        AuthenticationError: If ``GITHUB_TOKEN`` is not configured.
    """
    if days <= 0:
        raise ConfigurationError("Invalid value for 'days': expected an integer greater than 0.")

    token: str = os.getenv(TOKEN_ENV_VAR, "").strip()
    if not token:
        raise AuthenticationError(
            f"{TOKEN_ENV_VAR} is not set. "
            f"Set the '{TOKEN_ENV_VAR}' environment variable to a GitHub token before running."
        )

    return Config(
        organization=organization,
        repo_name=repo_name,
        days=days,
        token=token,
        metrics_path=metrics_path,
        remote_path=remote_path,
        adopters_url=adopters_url,
    )
