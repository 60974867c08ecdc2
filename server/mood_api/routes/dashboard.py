"""Mood dashboard API routes."""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from mood_analytics import MoodAnalyticsError, MoodAnalyticsService

from ..models.dashboard import DashboardResponse
from ..services.analytics import get_analytics_service, raise_http_error

router = APIRouter(prefix="/api/mood", tags=["Dashboard"])


@router.get("/dashboard", response_model=DashboardResponse, response_model_by_alias=True)
async def get_dashboard(
    user_id: str = Query(..., min_length=1, description="Owner of the mood records"),
    as_of: Optional[date] = Query(default=None, description="Reference day, defaults to today"),
    service: MoodAnalyticsService = Depends(get_analytics_service),
):
    """
    Get the dashboard snapshot for a user.
    Combines averages, the current streak, the weekly trend, correlations
    and recommendations. Correlations are null below five entries.
    """
    try:
        snapshot = await service.get_dashboard(user_id, as_of=as_of)
    except MoodAnalyticsError as e:
        raise_http_error(e)

    return DashboardResponse.model_validate(snapshot)
