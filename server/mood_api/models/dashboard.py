"""Dashboard data models."""
from datetime import date
from typing import Optional

from mood_analytics.dashboard import Trend

from .base import ApiModel
from .correlations import CorrelationResponse
from .trends import Averages


class WeeklyTrend(ApiModel):
    """Last 7 days compared with the 7 days before."""

    recent_average: float
    previous_average: float
    recent_count: int
    previous_count: int
    trend: Trend
    change_percent: float


class DailyMood(ApiModel):
    date: date
    mood: Optional[float] = None


class DashboardResponse(ApiModel):
    """Dashboard snapshot for one user."""

    as_of: date
    total_entries: int
    averages: Optional[Averages] = None
    current_streak: int
    longest_streak: int
    weekly_trend: WeeklyTrend
    recent_mood: list[DailyMood]
    correlations: Optional[CorrelationResponse] = None
    recommendations: list[str]
