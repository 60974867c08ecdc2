"""
Correlation Engine for mood observations.

Ranks how four independent factors relate to the user's mood score:

- sleep duration (good vs poor sleep nights)
- free-text activity labels
- social context
- day of week

Each analysis is a pure function over the same observation list. The
report also carries short template-based insight sentences built from
the top-ranked slice of each analysis.
"""

import logging
from dataclasses import dataclass, field
from datetime import tzinfo
from decimal import Decimal
from typing import Callable, Hashable, Iterable, Optional

from .errors import InsufficientData
from .observations import UTC, MoodObservation, SocialContext
from .stats import ZERO, mean, round_half_away, to_decimal

logger = logging.getLogger(__name__)

# Below this many observations no ranking is reported
MIN_OBSERVATIONS = 5

GOOD_SLEEP_HOURS = 7.0
POOR_SLEEP_HOURS = 6.0
SLEEP_INSIGHT_MARGIN = 1

MIN_ACTIVITY_OCCURRENCES = 3
TOP_POSITIVE_LIMIT = 5
TOP_NEGATIVE_LIMIT = 3

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass
class CorrelationSlice:
    """One value of a dimension with its sample count and mean mood."""

    label: str
    count: int
    average_mood: float
    mean_mood: Decimal = field(default=ZERO, repr=False, compare=False)

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "count": self.count,
            "average_mood": self.average_mood,
        }


@dataclass
class WeekdaySlice(CorrelationSlice):
    """Day-of-week slice, which also tracks mean stress."""

    average_stress: float = 0.0

    def to_dict(self) -> dict:
        result = super().to_dict()
        result["average_stress"] = self.average_stress
        return result


@dataclass
class SleepImpact:
    """Mood on good sleep nights (>= 7h) versus poor ones (< 6h)."""

    good_sleep: Optional[CorrelationSlice]
    poor_sleep: Optional[CorrelationSlice]
    impact: Optional[float]

    @property
    def slices(self) -> list[CorrelationSlice]:
        return [s for s in (self.good_sleep, self.poor_sleep) if s is not None]

    def to_dict(self) -> dict:
        return {
            "good_sleep": self.good_sleep.to_dict() if self.good_sleep else None,
            "poor_sleep": self.poor_sleep.to_dict() if self.poor_sleep else None,
            "impact": self.impact,
        }


@dataclass
class ActivityImpact:
    """Activity labels ranked by mean mood, best first."""

    ranking: list[CorrelationSlice]

    @property
    def top_positive(self) -> list[CorrelationSlice]:
        return self.ranking[:TOP_POSITIVE_LIMIT]

    @property
    def top_negative(self) -> list[CorrelationSlice]:
        """Lowest-ranked activities, worst first."""
        return list(reversed(self.ranking[-TOP_NEGATIVE_LIMIT:]))

    def to_dict(self) -> dict:
        return {
            "ranking": [s.to_dict() for s in self.ranking],
            "top_positive": [s.to_dict() for s in self.top_positive],
            "top_negative": [s.to_dict() for s in self.top_negative],
        }


@dataclass
class CorrelationReport:
    """Result of all four correlation analyses."""

    data_points_analyzed: int
    sleep: SleepImpact
    activities: ActivityImpact
    social_context: list[CorrelationSlice]
    weekly_pattern: list[WeekdaySlice]
    insights: list[str]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "data_points_analyzed": self.data_points_analyzed,
            "sleep": self.sleep.to_dict(),
            "activities": self.activities.to_dict(),
            "social_context": [s.to_dict() for s in self.social_context],
            "weekly_pattern": [s.to_dict() for s in self.weekly_pattern],
            "insights": list(self.insights),
        }


def _make_slice(label: str, scores: list) -> CorrelationSlice:
    exact = mean(scores)
    return CorrelationSlice(
        label=label,
        count=len(scores),
        average_mood=round_half_away(exact),
        mean_mood=exact,
    )


def _group_scores(
    observations: Iterable[MoodObservation],
    keys: Callable[[MoodObservation], Iterable[Hashable]],
) -> dict:
    """Map every key produced for an observation to the mood scores seen with it."""
    groups: dict = {}
    for obs in observations:
        for key in keys(obs):
            groups.setdefault(key, []).append(obs.mood_score)
    return groups


def _ranked(slices: Iterable[CorrelationSlice]) -> list[CorrelationSlice]:
    """Sort by mean mood descending; ties go to the larger sample, then label."""
    return sorted(slices, key=lambda s: (-s.mean_mood, -s.count, s.label))


def sleep_impact(observations: Iterable[MoodObservation]) -> SleepImpact:
    """
    Compare mean mood after good sleep against mean mood after poor sleep.

    Nights in the 6-7 hour band belong to neither group.
    """
    good = []
    poor = []
    for obs in observations:
        if obs.sleep_hours >= GOOD_SLEEP_HOURS:
            good.append(obs.mood_score)
        elif obs.sleep_hours < POOR_SLEEP_HOURS:
            poor.append(obs.mood_score)

    good_slice = _make_slice("good_sleep", good) if good else None
    poor_slice = _make_slice("poor_sleep", poor) if poor else None

    impact = None
    if good_slice and poor_slice:
        impact = round_half_away(good_slice.mean_mood - poor_slice.mean_mood)

    return SleepImpact(good_sleep=good_slice, poor_sleep=poor_slice, impact=impact)


def activity_impact(observations: Iterable[MoodObservation]) -> ActivityImpact:
    """Rank activity labels seen at least three times by mean mood."""
    groups = _group_scores(observations, lambda obs: obs.activities)
    slices = [
        _make_slice(label, scores)
        for label, scores in groups.items()
        if len(scores) >= MIN_ACTIVITY_OCCURRENCES
    ]
    return ActivityImpact(ranking=_ranked(slices))


def social_impact(observations: Iterable[MoodObservation]) -> list[CorrelationSlice]:
    """Rank social contexts by mean mood. Entries without a context are skipped."""
    groups = _group_scores(
        observations,
        lambda obs: [obs.social_context.value] if obs.social_context else [],
    )
    return _ranked(_make_slice(context, scores) for context, scores in groups.items())


def weekday_pattern(
    observations: Iterable[MoodObservation],
    tz: tzinfo = UTC,
) -> list[WeekdaySlice]:
    """Mean mood and stress per weekday, Monday first, sampled days only."""
    moods: dict[int, list[int]] = {}
    stress: dict[int, list[int]] = {}
    for obs in observations:
        weekday = obs.local_date(tz).weekday()
        moods.setdefault(weekday, []).append(obs.mood_score)
        stress.setdefault(weekday, []).append(obs.stress)

    pattern = []
    for weekday in sorted(moods):
        exact = mean(moods[weekday])
        pattern.append(
            WeekdaySlice(
                label=WEEKDAYS[weekday],
                count=len(moods[weekday]),
                average_mood=round_half_away(exact),
                mean_mood=exact,
                average_stress=round_half_away(mean(stress[weekday])),
            )
        )
    return pattern


def build_insights(
    sleep: SleepImpact,
    activities: ActivityImpact,
    social: list[CorrelationSlice],
    weekly: list[WeekdaySlice],
) -> list[str]:
    """Template sentences from the top-ranked slice of each analysis."""
    insights = []

    if (
        sleep.good_sleep
        and sleep.poor_sleep
        # Compared on the displayed one-decimal averages
        and to_decimal(sleep.good_sleep.average_mood)
        > to_decimal(sleep.poor_sleep.average_mood) + SLEEP_INSIGHT_MARGIN
    ):
        insights.append(
            f"Good sleep (7+ hours) improves your mood by {sleep.impact} points on average"
        )

    if activities.ranking:
        insights.append(
            f"{activities.ranking[0].label} appears to have the most positive impact on your mood"
        )

    if social:
        phrase = SocialContext(social[0].label).phrase
        insights.append(f"You tend to feel best when {phrase}")

    if weekly:
        best_day = _ranked(weekly)[0]
        insights.append(f"Your mood tends to be highest on {best_day.label}s")

    return insights


def correlate(
    observations: Iterable[MoodObservation],
    tz: tzinfo = UTC,
) -> CorrelationReport:
    """
    Run all four correlation analyses.

    Raises:
        InsufficientData: fewer than MIN_OBSERVATIONS observations
    """
    observations = list(observations)
    if len(observations) < MIN_OBSERVATIONS:
        raise InsufficientData(required=MIN_OBSERVATIONS, available=len(observations))

    sleep = sleep_impact(observations)
    activities = activity_impact(observations)
    social = social_impact(observations)
    weekly = weekday_pattern(observations, tz)

    logger.debug(
        f"[CORRELATION] Analyzed {len(observations)} observations: "
        f"{len(activities.ranking)} ranked activities, {len(social)} social contexts, "
        f"{len(weekly)} weekdays"
    )

    return CorrelationReport(
        data_points_analyzed=len(observations),
        sleep=sleep,
        activities=activities,
        social_context=social,
        weekly_pattern=weekly,
        insights=build_insights(sleep, activities, social, weekly),
    )
