"""
Dashboard assembly and rule-based recommendations.

Combines overall averages, the tracking streak, a week-over-week trend and
the correlation report into one snapshot, then evaluates a fixed list of
threshold rules to produce recommendations.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta, tzinfo
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional

from .correlations import CorrelationReport, correlate
from .errors import InsufficientData
from .observations import UTC, MoodObservation
from .stats import MetricAverages, MetricSums, mean, round_half_away
from .streaks import compute_streak, longest_streak

logger = logging.getLogger(__name__)

TREND_WINDOW_DAYS = 7
RECOMMENDED_SLEEP_HOURS = 7
LOW_ACTIVITY_MOOD = 6
WEEKLY_SHIFT_MARGIN = Decimal("0.5")


class Trend(str, Enum):
    """Direction of the week-over-week mood change."""

    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


@dataclass
class WeeklyTrend:
    """Mean mood of the last 7 days against the 7 days before."""

    recent_average: float
    previous_average: float
    recent_count: int
    previous_count: int
    trend: Trend
    change_percent: float

    def to_dict(self) -> dict:
        return {
            "recent_average": self.recent_average,
            "previous_average": self.previous_average,
            "recent_count": self.recent_count,
            "previous_count": self.previous_count,
            "trend": self.trend.value,
            "change_percent": self.change_percent,
        }


@dataclass
class DailyMood:
    """Mean mood of one calendar day, None when nothing was logged."""

    date: date
    mood: Optional[float]

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "mood": self.mood}


@dataclass
class DashboardSnapshot:
    """Everything the dashboard shows for one user at one reference date."""

    as_of: date
    total_entries: int
    averages: Optional[MetricAverages]
    current_streak: int
    longest_streak: int
    weekly_trend: WeeklyTrend
    recent_mood: list[DailyMood]
    correlations: Optional[CorrelationReport]
    recommendations: list[str]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "as_of": self.as_of.isoformat(),
            "total_entries": self.total_entries,
            "averages": self.averages.to_dict() if self.averages else None,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "weekly_trend": self.weekly_trend.to_dict(),
            "recent_mood": [day.to_dict() for day in self.recent_mood],
            "correlations": self.correlations.to_dict() if self.correlations else None,
            "recommendations": list(self.recommendations),
        }


def _in_window(obs: MoodObservation, start: date, end: date, tz: tzinfo) -> bool:
    return start <= obs.local_date(tz) <= end


def weekly_trend(
    observations: list[MoodObservation],
    today: date,
    tz: tzinfo = UTC,
) -> WeeklyTrend:
    """
    Compare the 7 days ending at ``today`` with the 7 days before them.

    An empty window counts as a mean of 0, and an empty previous window
    makes the trend stable. When the previous mean is 0 the change is
    reported as 0 percent rather than an infinite improvement.
    """
    recent_start = today - timedelta(days=TREND_WINDOW_DAYS - 1)
    previous_end = recent_start - timedelta(days=1)
    previous_start = previous_end - timedelta(days=TREND_WINDOW_DAYS - 1)

    recent = [o.mood_score for o in observations if _in_window(o, recent_start, today, tz)]
    previous = [
        o.mood_score for o in observations if _in_window(o, previous_start, previous_end, tz)
    ]

    recent_mean = mean(recent) or Decimal(0)
    previous_mean = mean(previous) or Decimal(0)

    # Nothing to compare against without a previous week
    if not previous:
        trend = Trend.STABLE
    elif recent_mean > previous_mean:
        trend = Trend.IMPROVING
    elif recent_mean < previous_mean:
        trend = Trend.DECLINING
    else:
        trend = Trend.STABLE

    if previous_mean == 0:
        change = 0.0
    else:
        change = round_half_away((recent_mean - previous_mean) / previous_mean * 100)

    return WeeklyTrend(
        recent_average=round_half_away(recent_mean, 2),
        previous_average=round_half_away(previous_mean, 2),
        recent_count=len(recent),
        previous_count=len(previous),
        trend=trend,
        change_percent=change,
    )


def recent_mood(
    observations: list[MoodObservation],
    today: date,
    tz: tzinfo = UTC,
) -> list[DailyMood]:
    """Daily mean mood for the 7 days ending at ``today``, oldest first."""
    by_day: dict[date, list[int]] = {}
    for obs in observations:
        by_day.setdefault(obs.local_date(tz), []).append(obs.mood_score)

    days = []
    for offset in range(TREND_WINDOW_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        scores = by_day.get(day)
        days.append(DailyMood(date=day, mood=round_half_away(mean(scores)) if scores else None))
    return days


def build_recommendations(
    sums: MetricSums,
    correlations: Optional[CorrelationReport],
    observations: list[MoodObservation],
    today: date,
    tz: tzinfo = UTC,
) -> list[str]:
    """
    Evaluate the recommendation rules in order.

    Several rules may fire. When none does, a single default message is
    returned so the list is never empty.
    """
    recommendations = []

    overall_mood = sums.mean_mood()
    overall_sleep = sums.sleep / sums.count if sums.count else None

    if overall_sleep is not None and overall_sleep < RECOMMENDED_SLEEP_HOURS:
        recommendations.append(
            f"Your average sleep is {round_half_away(overall_sleep)} hours. "
            "Try improving your sleep hygiene: aim for 7 or more hours with a consistent bedtime."
        )

    ranking = correlations.activities.ranking if correlations else []
    if ranking:
        recommendations.append(
            f"Keep making time for {ranking[0].label}: it lines up with your best moods."
        )
        bottom = ranking[-1]
        if bottom.mean_mood < LOW_ACTIVITY_MOOD:
            recommendations.append(
                f"Your mood averages {bottom.average_mood} around {bottom.label}. "
                "Consider reducing it or pairing it with something you enjoy."
            )

    recent_start = today - timedelta(days=TREND_WINDOW_DAYS - 1)
    recent_mean = mean(
        o.mood_score for o in observations if _in_window(o, recent_start, today, tz)
    )
    if recent_mean is not None and overall_mood is not None:
        if recent_mean > overall_mood + WEEKLY_SHIFT_MARGIN:
            recommendations.append(
                "Your mood this week is above your usual level. "
                "Whatever you have been doing lately is working, keep it up!"
            )
        elif recent_mean < overall_mood - WEEKLY_SHIFT_MARGIN:
            recommendations.append(
                "Your mood this week has dipped below your usual level. "
                "Be gentle with yourself and consider reaching out to someone you trust."
            )

    if not recommendations:
        recommendations.append(
            "Keep tracking your mood every day to unlock more personalized insights."
        )
    return recommendations


def build_dashboard(
    observations: Iterable[MoodObservation],
    today: date,
    tz: tzinfo = UTC,
) -> DashboardSnapshot:
    """
    Assemble the dashboard snapshot for ``today``.

    Correlations need at least five observations; below that the snapshot
    carries ``correlations=None`` and every other field is still filled.
    """
    observations = list(observations)
    sums = MetricSums.of(observations)

    try:
        correlations = correlate(observations, tz)
    except InsufficientData as e:
        logger.info(f"[DASHBOARD] Correlations skipped: {e}")
        correlations = None

    snapshot = DashboardSnapshot(
        as_of=today,
        total_entries=len(observations),
        averages=sums.averages(),
        current_streak=compute_streak(observations, today, tz),
        longest_streak=longest_streak(observations, tz),
        weekly_trend=weekly_trend(observations, today, tz),
        recent_mood=recent_mood(observations, today, tz),
        correlations=correlations,
        recommendations=build_recommendations(sums, correlations, observations, today, tz),
    )

    logger.debug(
        f"[DASHBOARD] Built snapshot: entries={snapshot.total_entries}, "
        f"streak={snapshot.current_streak}, trend={snapshot.weekly_trend.trend.value}, "
        f"recommendations={len(snapshot.recommendations)}"
    )
    return snapshot
