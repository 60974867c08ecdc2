"""Mood data export API routes."""
from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from mood_analytics import ExportFormat, MoodAnalyticsError, MoodAnalyticsService

from ..services.analytics import get_analytics_service, raise_http_error

router = APIRouter(prefix="/api/mood", tags=["Export"])


@router.get("/export")
async def export_mood_data(
    user_id: str = Query(..., min_length=1),
    start_date: Optional[date] = Query(default=None, alias="startDate"),
    end_date: Optional[date] = Query(default=None, alias="endDate"),
    export_format: Literal["structured", "tabular"] = Query(default="structured", alias="format"),
    service: MoodAnalyticsService = Depends(get_analytics_service),
):
    """Download raw observations and derived analytics as JSON or CSV."""
    export_format = ExportFormat(export_format)
    try:
        payload = await service.export(user_id, start_date, end_date, export_format)
    except MoodAnalyticsError as e:
        raise_http_error(e)

    return Response(
        content=payload,
        media_type=export_format.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="mood-data.{export_format.extension}"'
        },
    )
