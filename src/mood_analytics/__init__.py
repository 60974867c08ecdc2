"""
Mood Analytics Module.

Turns a user's mood observations into time-bucketed trends, tracking
streaks, correlation rankings, a dashboard snapshot and exports.
"""

from .bucketing import Bucket, Granularity, aggregate, summarize
from .correlations import CorrelationReport, CorrelationSlice, correlate
from .dashboard import DashboardSnapshot, build_dashboard
from .errors import (
    FetchFailure,
    InsufficientData,
    InvalidObservation,
    InvalidRange,
    MoodAnalyticsError,
)
from .export import ExportFormat, export_observations
from .observations import MoodObservation, MoodType, SocialContext
from .service import MoodAnalyticsService, ObservationStore, TrendPeriod
from .streaks import compute_streak, longest_streak

__all__ = [
    "Bucket",
    "Granularity",
    "aggregate",
    "summarize",
    "CorrelationReport",
    "CorrelationSlice",
    "correlate",
    "DashboardSnapshot",
    "build_dashboard",
    "FetchFailure",
    "InsufficientData",
    "InvalidObservation",
    "InvalidRange",
    "MoodAnalyticsError",
    "ExportFormat",
    "export_observations",
    "MoodObservation",
    "MoodType",
    "SocialContext",
    "MoodAnalyticsService",
    "ObservationStore",
    "TrendPeriod",
    "compute_streak",
    "longest_streak",
]
