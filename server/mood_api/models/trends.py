"""Mood trend data models."""
from datetime import date
from typing import Optional

from mood_analytics import Granularity, TrendPeriod

from .base import ApiModel


class Averages(ApiModel):
    """Rounded means of the numeric mood metrics."""

    mood: float
    energy: float
    anxiety: float
    stress: float
    sleep: float


class TrendBucket(ApiModel):
    """Aggregate of one day, week or month."""

    period: str
    count: int
    averages: Averages
    mood_types: list[str]
    mood_distribution: dict[str, int]


class TrendStatistics(ApiModel):
    """Overall statistics for the requested period."""

    total_entries: int
    averages: Averages
    mood_distribution: dict[str, int]


class DateRange(ApiModel):
    start: date
    end: date


class TrendsResponse(ApiModel):
    """Bucketed mood trends for one period."""

    period: TrendPeriod
    granularity: Granularity
    date_range: DateRange
    trend_data: list[TrendBucket]
    statistics: Optional[TrendStatistics] = None
