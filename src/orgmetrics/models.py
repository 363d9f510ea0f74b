"""Domain models for GitHub organization metrics processing.

These dataclasses intentionally model only the subset of API payload fields that
are required for metric computation.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Set


class WorkItemKind(Enum):
    """Tag distinguishing the two kinds of closed work items."""

    PULL_REQUEST = "pull_request"
    ISSUE = "issue"


@dataclass(slots=True)
class Repository:
    """Represents a repository returned by the organization listing."""

    name: str
    full_name: str


@dataclass(slots=True)
class WorkItem:
    """Represents the minimal pull request or issue data required for metrics."""

    kind: WorkItemKind
    number: int
    repo_name: str
    created_at: datetime
    closed_at: Optional[datetime]
    author: Optional[str]


@dataclass(slots=True)
class MetricsAccumulator:
    """Mutable metric stores filled while walking every repository."""

    contributors: Set[str] = field(default_factory=set)
    recent_contributors: Set[str] = field(default_factory=set)
    seconds_to_close_pulls: List[float] = field(default_factory=list)
    seconds_to_close_issues: List[float] = field(default_factory=list)
    bucket_pull_count: Dict[str, int] = field(default_factory=dict)
    bucket_new_contributors: Dict[str, Set[str]] = field(default_factory=dict)

    def add_new_contributor_to_bucket(self, bucket_key: str, contributor: str) -> None:
        """Record ``contributor`` in ``bucket_key`` unless any bucket already holds them.

        The bucket itself is always created so that weeks without a new
        contributor still count as zero.
        """
        bucket = self.bucket_new_contributors.setdefault(bucket_key, set())

        for contributors in self.bucket_new_contributors.values():
            if contributor in contributors:
                return

        bucket.add(contributor)


@dataclass(frozen=True)
class MetricsSummary:
    """Final, serializable metrics document."""

    names_of_adopters: List[str]
    names_of_contributors: List[str]
    names_of_contributors_new: List[str]
    number_of_pull_request_new: int
    p50_number_of_new_pulls_per_week: Optional[float]
    p50_number_of_new_contributors_per_week: Optional[float]
    p50_seconds_to_close_pulls: Optional[float]
    p50_seconds_to_close_issues: Optional[float]
    mean_number_of_new_pulls_per_week: Optional[float]
    mean_number_of_new_contributors_per_week: Optional[float]
    mean_seconds_to_close_pulls: Optional[float]
    mean_seconds_to_close_issues: Optional[float]

    def to_dict(self) -> Dict[str, Any]:
        """Return the summary keyed by the camelCase names of the metrics document."""
        return {
            "namesOfAdopters": list(self.names_of_adopters),
            "namesOfContributors": list(self.names_of_contributors),
            "namesOfContributorsNew": list(self.names_of_contributors_new),
            "numberOfPullRequestNew": self.number_of_pull_request_new,
            "p50NumberOfNewPullsPerWeek": self.p50_number_of_new_pulls_per_week,
            "p50NumberOfNewContributorsPerWeek": self.p50_number_of_new_contributors_per_week,
            "p50SecondsToClosePulls": self.p50_seconds_to_close_pulls,
            "p50SecondsToCloseIssues": self.p50_seconds_to_close_issues,
            "meanNumberOfNewPullsPerWeek": self.mean_number_of_new_pulls_per_week,
            "meanNumberOfNewContributorsPerWeek": self.mean_number_of_new_contributors_per_week,
            "meanSecondsToClosePulls": self.mean_seconds_to_close_pulls,
            "meanSecondsToCloseIssues": self.mean_seconds_to_close_issues,
        }

    def to_json(self) -> str:
        """Serialize as pretty-printed JSON with a 2-space indent."""
        return json.dumps(self.to_dict(), indent=2)
