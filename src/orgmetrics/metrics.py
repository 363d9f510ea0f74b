"""Metric extraction logic for GitHub organization pull requests and issues.

This module folds closed work items into a ``MetricsAccumulator``:
- close-duration samples for pull requests and issues inside the trailing window
- historical and recent (inside the window) contributor logins
- weekly pull request counts and first-seen contributors per ISO week

``finalize_summary`` derives the immutable ``MetricsSummary`` from the stores.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from .config import Config
from .github_client import GitHubClient
from .models import MetricsAccumulator, MetricsSummary, WorkItem, WorkItemKind
from .stats import compute_statistics

logger = logging.getLogger(__name__)

BOT_SUFFIX = "[bot]"


def compute_seconds_to_close(item: WorkItem) -> Optional[float]:
    """Compute elapsed seconds from creation to close.

    Returns ``None`` when the item has no ``closed_at`` or when the timestamps
    would yield a negative duration.
    """
    if item.closed_at is None:
        return None

    duration_seconds = (item.closed_at - item.created_at).total_seconds()
    if duration_seconds < 0:
        logger.debug(
            "Skipping close duration due to negative duration",
            extra={"repo": item.repo_name, "number": item.number, "duration_seconds": duration_seconds},
        )
        return None

    return duration_seconds


def is_within_window(item: WorkItem, now: datetime, days: int) -> bool:
    """Return True when ``item`` was created less than ``days`` before ``now``."""
    return now - item.created_at < timedelta(days=days)


def bucket_key(item: WorkItem) -> str:
    """Return the ``"<iso year>:<iso week>"`` bucket of the item's creation."""
    iso_year, iso_week, _ = item.created_at.isocalendar()
    return f"{iso_year}:{iso_week}"


def is_bot(login: str, bot_accounts: Iterable[str] = ()) -> bool:
    """Return True for logins ending in ``[bot]`` or listed in ``bot_accounts``."""
    return login.endswith(BOT_SUFFIX) or login in bot_accounts


def record_work_item(
    accumulator: MetricsAccumulator,
    item: WorkItem,
    now: datetime,
    days: int,
    bot_accounts: Sequence[str] = (),
) -> None:
    """Extract the metrics of one pull request or issue into ``accumulator``."""
    key = bucket_key(item)
    seconds_to_close = compute_seconds_to_close(item)
    in_window = is_within_window(item, now, days)

    if item.kind is WorkItemKind.PULL_REQUEST:
        accumulator.bucket_pull_count[key] = accumulator.bucket_pull_count.get(key, 0) + 1
        samples = accumulator.seconds_to_close_pulls
    else:
        samples = accumulator.seconds_to_close_issues

    if in_window and seconds_to_close is not None:
        samples.append(seconds_to_close)

    if not item.author or is_bot(item.author, bot_accounts):
        return

    accumulator.add_new_contributor_to_bucket(key, item.author)

    if in_window:
        accumulator.recent_contributors.add(item.author)
    else:
        accumulator.contributors.add(item.author)


def collect_metrics(
    client: GitHubClient,
    config: Config,
    now: datetime,
    accumulator: Optional[MetricsAccumulator] = None,
) -> MetricsAccumulator:
    """Walk every repository of the organization and accumulate metrics.

    Repositories are processed one at a time: all pages of closed pull
    requests first, then all pages of closed issues.
    """
    accumulator = accumulator if accumulator is not None else MetricsAccumulator()
    repositories = 0

    for repository in client.iter_org_repositories(config.organization):
        repositories += 1
        logger.info("Processing repo: %s", repository.name)

        for page in client.iter_closed_pull_requests(config.organization, repository.name):
            logger.info("Processing pulls: %d", len(page))
            for pull in page:
                record_work_item(accumulator, pull, now, config.days, config.bot_accounts)

        for page in client.iter_closed_issues(config.organization, repository.name):
            logger.info("Processing issues: %d", len(page))
            for issue in page:
                record_work_item(accumulator, issue, now, config.days, config.bot_accounts)

    logger.info(
        "Collected metric samples",
        extra={
            "organization": config.organization,
            "repositories": repositories,
            "pull_samples": len(accumulator.seconds_to_close_pulls),
            "issue_samples": len(accumulator.seconds_to_close_issues),
            "weeks": len(accumulator.bucket_new_contributors),
        },
    )

    return accumulator


def reconcile_contributors(accumulator: MetricsAccumulator) -> None:
    """Drop every recent contributor that was also seen before the window."""
    accumulator.recent_contributors -= accumulator.contributors


def finalize_summary(accumulator: MetricsAccumulator, adopters: Sequence[str] = ()) -> MetricsSummary:
    """Reconcile contributor sets and derive the final statistics."""
    reconcile_contributors(accumulator)

    pull_stats = compute_statistics(accumulator.seconds_to_close_pulls)
    issue_stats = compute_statistics(accumulator.seconds_to_close_issues)
    pull_counts: List[float] = list(accumulator.bucket_pull_count.values())
    contributor_counts: List[float] = [
        len(contributors) for contributors in accumulator.bucket_new_contributors.values()
    ]
    weekly_pull_stats = compute_statistics(pull_counts)
    weekly_contributor_stats = compute_statistics(contributor_counts)

    return MetricsSummary(
        names_of_adopters=list(adopters),
        names_of_contributors=sorted(accumulator.contributors),
        names_of_contributors_new=sorted(accumulator.recent_contributors),
        number_of_pull_request_new=len(accumulator.seconds_to_close_pulls),
        p50_number_of_new_pulls_per_week=weekly_pull_stats["p50"],
        p50_number_of_new_contributors_per_week=weekly_contributor_stats["p50"],
        p50_seconds_to_close_pulls=pull_stats["p50"],
        p50_seconds_to_close_issues=issue_stats["p50"],
        mean_number_of_new_pulls_per_week=weekly_pull_stats["mean"],
        mean_number_of_new_contributors_per_week=weekly_contributor_stats["mean"],
        mean_seconds_to_close_pulls=pull_stats["mean"],
        mean_seconds_to_close_issues=issue_stats["mean"],
    )
