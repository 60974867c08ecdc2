"""Correlation analysis data models."""
from typing import Optional

from .base import ApiModel


class CorrelationSlice(ApiModel):
    """One dimension value with its sample count and mean mood."""

    label: str
    count: int
    average_mood: float


class WeekdaySlice(CorrelationSlice):
    average_stress: float


class SleepImpact(ApiModel):
    good_sleep: Optional[CorrelationSlice] = None
    poor_sleep: Optional[CorrelationSlice] = None
    impact: Optional[float] = None


class ActivityImpact(ApiModel):
    ranking: list[CorrelationSlice]
    top_positive: list[CorrelationSlice]
    top_negative: list[CorrelationSlice]


class CorrelationResponse(ApiModel):
    """Mood correlations across sleep, activities, social context and weekday."""

    data_points_analyzed: int
    sleep: SleepImpact
    activities: ActivityImpact
    social_context: list[CorrelationSlice]
    weekly_pattern: list[WeekdaySlice]
    insights: list[str]
