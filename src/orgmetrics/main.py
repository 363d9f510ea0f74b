"""Entry point orchestrating GitHub organization metrics generation."""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from .adopters import fetch_adopter_list
from .cli import parse_args
from .config import load_config
from .errors import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    DataValidationError,
)
from .github_client import GitHubClient
from .metrics import collect_metrics, finalize_summary
from .models import MetricsAccumulator
from .stats import format_duration
from .writeback import commit_metrics

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_DATA_VALIDATION_ERROR = 3
EXIT_API_ERROR = 4


def _configure_logging(verbose: bool) -> None:
    """Send log records to stderr, at DEBUG level when ``verbose`` is set."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def orchestrate_metrics_generation(
    argv: Optional[Sequence[str]] = None,
    now: Optional[datetime] = None,
) -> int:
    """Run the full metrics workflow and return a process exit code."""
    try:
        args = parse_args(argv)
        _configure_logging(args.verbose)

        config = load_config(
            organization=args.org,
            repo_name=args.repo,
            days=args.days,
            metrics_path=args.metrics_file,
            adopters_url=args.adopters_url,
            remote_path=args.remote_path,
        )

        if not args.commit_changes:
            logger.warning("Running in dry-run mode, no metrics will be committed back")

        client = GitHubClient(config=config)
        accumulator = MetricsAccumulator()

        if args.with_metrics:
            accumulator = collect_metrics(
                client,
                config,
                now=now or datetime.now(timezone.utc),
                accumulator=accumulator,
            )

        adopters: List[str] = []
        if args.with_adopter_list:
            adopters = fetch_adopter_list(client, config.adopters_url)

        summary = finalize_summary(accumulator, adopters)
        logger.info(
            "Pull requests closed in the last %d days: p50=%s mean=%s",
            config.days,
            format_duration(summary.p50_seconds_to_close_pulls),
            format_duration(summary.mean_seconds_to_close_pulls),
        )

        metrics_json = summary.to_json()
        print(metrics_json)

        if args.commit_changes:
            commit_metrics(client, config, metrics_json)

        return EXIT_SUCCESS
    except (AuthenticationError, ConfigurationError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    except DataValidationError as exc:
        logger.error("Invalid GitHub payload: %s", exc)
        return EXIT_DATA_VALIDATION_ERROR
    except ApiError as exc:
        logger.error("GitHub API failure: %s", exc)
        return EXIT_API_ERROR
    except Exception:
        logger.exception("Unexpected error while generating metrics")
        return EXIT_FAILURE


def main() -> None:
    raise SystemExit(orchestrate_metrics_generation())


if __name__ == "__main__":
    main()
