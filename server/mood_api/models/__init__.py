"""Pydantic models for mood analytics API responses."""
from .observation import MoodEntry
from .trends import Averages, TrendBucket, TrendStatistics, TrendsResponse
from .correlations import CorrelationSlice, CorrelationResponse
from .dashboard import DashboardResponse

__all__ = [
    "MoodEntry",
    "Averages",
    "TrendBucket",
    "TrendStatistics",
    "TrendsResponse",
    "CorrelationSlice",
    "CorrelationResponse",
    "DashboardResponse",
]
