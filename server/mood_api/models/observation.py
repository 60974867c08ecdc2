"""Mood observation data models."""
from datetime import date, datetime
from typing import Optional

from pydantic import Field

from mood_analytics import MoodObservation, MoodType, SocialContext

from .base import ApiModel


class MoodEntry(ApiModel):
    """A single stored mood observation."""

    id: str
    timestamp: datetime
    date: date
    mood_score: int = Field(ge=1, le=10)
    mood_type: MoodType
    energy: int = Field(ge=1, le=10)
    anxiety: int = Field(ge=1, le=10)
    stress: int = Field(ge=1, le=10)
    sleep_hours: float = Field(ge=0, le=24)
    activities: list[str]
    social_context: Optional[SocialContext] = None
    notes: str = ""

    @classmethod
    def from_observation(cls, obs: MoodObservation, tz) -> "MoodEntry":
        return cls(
            id=obs.id,
            timestamp=obs.timestamp,
            date=obs.local_date(tz),
            mood_score=obs.mood_score,
            mood_type=obs.mood_type,
            energy=obs.energy,
            anxiety=obs.anxiety,
            stress=obs.stress,
            sleep_hours=obs.sleep_hours,
            activities=obs.sorted_activities,
            social_context=obs.social_context,
            notes=obs.notes,
        )
