"""Mood trends API routes."""
from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from mood_analytics import MoodAnalyticsError, MoodAnalyticsService

from ..models.trends import TrendsResponse
from ..services.analytics import get_analytics_service, raise_http_error

router = APIRouter(prefix="/api/mood", tags=["Trends"])


@router.get("/trends", response_model=TrendsResponse, response_model_by_alias=True)
async def get_mood_trends(
    user_id: str = Query(..., min_length=1),
    period: Literal["week", "month", "quarter", "year"] = Query(default="month"),
    granularity: Literal["day", "week", "month"] = Query(default="day", alias="groupBy"),
    as_of: Optional[date] = Query(default=None),
    service: MoodAnalyticsService = Depends(get_analytics_service),
):
    """Get mood averages grouped by day, week or month over a period."""
    try:
        report = await service.get_trends(user_id, period, granularity, as_of=as_of)
    except MoodAnalyticsError as e:
        raise_http_error(e)

    return TrendsResponse.model_validate(report)
