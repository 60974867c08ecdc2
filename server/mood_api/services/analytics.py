"""Wiring between the API layer and the mood analytics engine."""
import logging
from typing import NoReturn

from fastapi import Depends, HTTPException

from mood_analytics import (
    FetchFailure,
    InsufficientData,
    InvalidRange,
    MoodAnalyticsError,
    MoodAnalyticsService,
)

from ..config import get_settings
from ..database import get_observation_store

log = logging.getLogger(__name__)


def get_analytics_service(store=Depends(get_observation_store)) -> MoodAnalyticsService:
    """Build a per-request analytics service over the configured store."""
    settings = get_settings()
    return MoodAnalyticsService(
        store,
        tz=settings.tzinfo,
        fetch_timeout=settings.fetch_timeout_seconds,
        dashboard_window_days=settings.dashboard_window_days,
        correlation_window_days=settings.correlation_window_days,
    )


def raise_http_error(error: MoodAnalyticsError) -> NoReturn:
    """Translate an engine error into the matching HTTP error response."""
    if isinstance(error, InvalidRange):
        raise HTTPException(status_code=400, detail=str(error)) from error
    if isinstance(error, InsufficientData):
        raise HTTPException(
            status_code=422,
            detail={
                "error": "Insufficient Data",
                "message": str(error),
                "required": error.required,
                "available": error.available,
            },
        ) from error
    if isinstance(error, FetchFailure):
        log.error(f"[API] Record store unavailable: {error}")
        raise HTTPException(
            status_code=504 if error.timed_out else 503,
            detail=f"Mood records are temporarily unavailable: {error}",
        ) from error
    raise HTTPException(status_code=500, detail=f"Analytics error: {error}") from error
