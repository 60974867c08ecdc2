"""Mood correlation API routes."""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from mood_analytics import MoodAnalyticsError, MoodAnalyticsService

from ..models.correlations import CorrelationResponse
from ..services.analytics import get_analytics_service, raise_http_error

router = APIRouter(prefix="/api/mood", tags=["Correlations"])


@router.get("/correlations", response_model=CorrelationResponse, response_model_by_alias=True)
async def get_correlations(
    user_id: str = Query(..., min_length=1),
    days: Optional[int] = Query(default=None, description="Days of history, defaults to 30"),
    as_of: Optional[date] = Query(default=None),
    service: MoodAnalyticsService = Depends(get_analytics_service),
):
    """
    Get correlations between sleep, activities, social context,
    day of week and mood. Requires at least five entries.
    """
    try:
        report = await service.get_correlations(user_id, days=days, as_of=as_of)
    except MoodAnalyticsError as e:
        raise_http_error(e)

    return CorrelationResponse.model_validate(report)
