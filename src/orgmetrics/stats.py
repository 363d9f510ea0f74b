"""Statistics and formatting helpers for organization metrics.

This module provides utilities for:
- Computing nearest-rank or linear-interpolation percentiles from pre-sorted samples.
- Computing the arithmetic mean of a sample list.
- Aggregating the summary statistics reported per sample list (P50, mean, count).
- Formatting second-based durations as ``HH:MM:SS``.

Empty sample lists never raise; every statistic of an empty list is ``None``.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence

PERCENTILE_METHODS = ("nearest-rank", "linear")


def calculate_percentile(
    sorted_values: Sequence[float],
    p: float,
    method: str = "nearest-rank",
) -> Optional[float]:
    """Calculate a percentile of ascending ``sorted_values``.

    ``nearest-rank`` returns the sample at rank ``ceil(n * p / 100)``;
    ``linear`` interpolates between adjacent ranks.

    Args:
        sorted_values: Sorted numeric samples.
        p: Percentile in the inclusive range ``[0, 100]``.
        method: One of ``nearest-rank`` or ``linear``.

    Returns:
        Percentile value or ``None`` when input is empty.

    Raises:
        ValueError: If ``p`` is outside ``[0, 100]`` or ``method`` is unknown.
    """
    if not 0 <= p <= 100:
        raise ValueError("Percentile 'p' must be in the range [0, 100].")

    if method not in PERCENTILE_METHODS:
        raise ValueError(f"Unknown percentile method '{method}'.")

    if not sorted_values:
        return None

    if p <= 0:
        return sorted_values[0]

    if p >= 100:
        return sorted_values[-1]

    if method == "nearest-rank":
        rank = math.ceil(len(sorted_values) * p / 100.0)
        return sorted_values[max(rank, 1) - 1]

    position = (len(sorted_values) - 1) * (p / 100.0)
    lower_index = math.floor(position)
    upper_index = math.ceil(position)

    if lower_index == upper_index:
        return sorted_values[int(position)]

    lower_value = sorted_values[lower_index]
    upper_value = sorted_values[upper_index]
    return lower_value + (upper_value - lower_value) * (position - lower_index)


def calculate_mean(values: Sequence[float]) -> Optional[float]:
    """Return the arithmetic mean, or ``None`` for an empty sequence."""
    if not values:
        return None
    return math.fsum(values) / len(values)


def compute_statistics(samples: Sequence[float]) -> Dict[str, Optional[float]]:
    """Compute P50, mean and sample count.

    Samples are sorted internally before percentile calculation.

    Returns:
        Dictionary with keys ``p50``, ``mean`` and ``count``.
    """
    ordered: List[float] = sorted(samples)

    return {
        "p50": calculate_percentile(ordered, 50),
        "mean": calculate_mean(ordered),
        "count": len(ordered),
    }


def format_duration(seconds: Optional[float]) -> str:
    """Format seconds as ``HH:MM:SS``; ``None`` becomes ``"n/a"``."""
    if seconds is None:
        return "n/a"

    total_seconds = int(round(seconds))
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    remaining_seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{remaining_seconds:02d}"
