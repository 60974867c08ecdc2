"""
Time bucketing of mood observations.

Groups observations into day, week or month periods and computes the
per-period averages used for trend charts.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, timedelta, tzinfo
from enum import Enum
from typing import Iterable, Optional

from .observations import UTC, MoodObservation
from .stats import MetricAverages, MetricSums

logger = logging.getLogger(__name__)


class Granularity(str, Enum):
    """Size of a trend bucket."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"


def week_start(day: date) -> date:
    """Monday of the ISO week containing ``day``."""
    return day - timedelta(days=day.weekday())


def period_key(day: date, granularity: Granularity) -> str:
    """Bucket key for a calendar day."""
    if granularity is Granularity.DAY:
        return day.isoformat()
    if granularity is Granularity.WEEK:
        return week_start(day).isoformat()
    return f"{day.year:04d}-{day.month:02d}"


@dataclass
class Bucket:
    """Aggregate of all observations falling into one period."""

    period: str
    count: int
    sums: MetricSums
    averages: MetricAverages
    mood_types: list[str] = field(default_factory=list)

    @property
    def mood_distribution(self) -> dict[str, int]:
        return dict(sorted(Counter(self.mood_types).items()))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "period": self.period,
            "count": self.count,
            "averages": self.averages.to_dict(),
            "mood_types": list(self.mood_types),
            "mood_distribution": self.mood_distribution,
        }


@dataclass
class TrendStatistics:
    """Overall statistics for a list of observations."""

    total_entries: int
    averages: MetricAverages
    mood_distribution: dict[str, int]

    def to_dict(self) -> dict:
        return {
            "total_entries": self.total_entries,
            "averages": self.averages.to_dict(),
            "mood_distribution": dict(self.mood_distribution),
        }


def aggregate(
    observations: Iterable[MoodObservation],
    granularity,
    tz: tzinfo = UTC,
) -> list[Bucket]:
    """
    Group observations into buckets ordered ascending by period key.

    Args:
        observations: Observations in any order
        granularity: "day", "week" or "month"
        tz: Reference timezone used to find each observation's calendar day

    Returns:
        One bucket per non-empty period; an empty input gives an empty list.
    """
    granularity = Granularity(granularity)

    sums: dict[str, MetricSums] = {}
    mood_types: dict[str, list[str]] = {}

    # Sort first so mood_types keeps chronological order within a bucket
    for obs in sorted(observations, key=lambda o: (o.timestamp, o.id)):
        key = period_key(obs.local_date(tz), granularity)
        if key not in sums:
            sums[key] = MetricSums()
            mood_types[key] = []
        sums[key].add(obs)
        mood_types[key].append(obs.mood_type.value)

    buckets = [
        Bucket(
            period=key,
            count=group.count,
            sums=group,
            averages=group.averages(),
            mood_types=mood_types[key],
        )
        for key, group in sorted(sums.items())
    ]

    logger.debug(f"[TRENDS] Aggregated into {len(buckets)} {granularity.value} buckets")
    return buckets


def summarize(observations: Iterable[MoodObservation]) -> Optional[TrendStatistics]:
    """Overall averages and mood distribution, or None when there is no data."""
    observations = list(observations)
    if not observations:
        return None

    sums = MetricSums.of(observations)
    distribution = Counter(obs.mood_type.value for obs in observations)
    return TrendStatistics(
        total_entries=sums.count,
        averages=sums.averages(),
        mood_distribution=dict(sorted(distribution.items())),
    )
