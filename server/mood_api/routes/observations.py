"""Mood observation API routes."""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from mood_analytics import MoodAnalyticsError, MoodAnalyticsService

from ..models.observation import MoodEntry
from ..services.analytics import get_analytics_service, raise_http_error

router = APIRouter(prefix="/api/mood", tags=["Observations"])


@router.get("/observations", response_model=list[MoodEntry], response_model_by_alias=True)
async def get_observations(
    user_id: str = Query(..., min_length=1),
    days: int = Query(default=7, le=366, description="Number of days of history"),
    as_of: Optional[date] = Query(default=None),
    service: MoodAnalyticsService = Depends(get_analytics_service),
):
    """Get mood entries for the specified number of days, newest first."""
    try:
        observations = await service.get_observations(user_id, days=days, as_of=as_of)
    except MoodAnalyticsError as e:
        raise_http_error(e)

    return [MoodEntry.from_observation(obs, service.tz) for obs in observations]
