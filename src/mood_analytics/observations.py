"""
Mood observation data model.

A MoodObservation is one user's mood record: a 1-10 mood score plus the
auxiliary metrics (energy, anxiety, stress, sleep) and context captured at
the same time. Observations are immutable once created; every derived
structure in this package is recomputed from them per request.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo
from enum import Enum
from typing import Iterable, Optional

from .errors import InvalidObservation

UTC = timezone.utc

SCORE_MIN = 1
SCORE_MAX = 10
SLEEP_MIN = 0.0
SLEEP_MAX = 24.0


class MoodType(str, Enum):
    """Named mood category. Informational only, never averaged."""

    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    OKAY = "OKAY"
    BAD = "BAD"
    TERRIBLE = "TERRIBLE"


class SocialContext(str, Enum):
    """Who the user was with when the mood was logged."""

    ALONE = "alone"
    WITH_FRIENDS = "with_friends"
    WITH_FAMILY = "with_family"
    WORK = "work"
    PUBLIC = "public"

    @property
    def phrase(self) -> str:
        """Human readable phrase used in insight sentences."""
        return _CONTEXT_PHRASES[self]


_CONTEXT_PHRASES = {
    SocialContext.ALONE: "alone",
    SocialContext.WITH_FRIENDS: "with friends",
    SocialContext.WITH_FAMILY: "with family",
    SocialContext.WORK: "at work",
    SocialContext.PUBLIC: "in public",
}


def normalize_activities(labels: Optional[Iterable[str]]) -> frozenset:
    """Strip labels, drop empty ones and collapse duplicates."""
    if not labels:
        return frozenset()
    labels = [labels] if isinstance(labels, str) else list(labels)
    for label in labels:
        if not isinstance(label, str):
            raise InvalidObservation(f"Activity labels must be strings, got {label!r}")
    return frozenset(label.strip() for label in labels if label.strip())


def _check_score(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidObservation(f"{name} must be an integer, got {value!r}")
    if not SCORE_MIN <= value <= SCORE_MAX:
        raise InvalidObservation(
            f"{name} must be between {SCORE_MIN} and {SCORE_MAX}, got {value}"
        )


@dataclass(frozen=True)
class MoodObservation:
    """A single mood record owned by one user."""

    id: str
    user_id: str
    timestamp: datetime
    mood_score: int
    mood_type: MoodType
    energy: int
    anxiety: int
    stress: int
    sleep_hours: float
    activities: frozenset = field(default_factory=frozenset)
    social_context: Optional[SocialContext] = None
    notes: str = ""

    def __post_init__(self):
        if not isinstance(self.timestamp, datetime):
            raise InvalidObservation(f"timestamp must be a datetime, got {self.timestamp!r}")
        # Naive timestamps are taken to be UTC already
        if self.timestamp.tzinfo is None:
            ts = self.timestamp.replace(tzinfo=UTC)
        else:
            ts = self.timestamp.astimezone(UTC)
        object.__setattr__(self, "timestamp", ts)

        for name in ("mood_score", "energy", "anxiety", "stress"):
            _check_score(name, getattr(self, name))

        try:
            sleep = float(self.sleep_hours)
        except (TypeError, ValueError):
            raise InvalidObservation(f"sleep_hours must be a number, got {self.sleep_hours!r}")
        if not SLEEP_MIN <= sleep <= SLEEP_MAX:
            raise InvalidObservation(f"sleep_hours must be between 0 and 24, got {sleep}")
        object.__setattr__(self, "sleep_hours", sleep)

        try:
            object.__setattr__(self, "mood_type", MoodType(self.mood_type))
        except ValueError:
            raise InvalidObservation(f"Unknown mood type: {self.mood_type!r}")

        if self.social_context is not None:
            try:
                object.__setattr__(self, "social_context", SocialContext(self.social_context))
            except ValueError:
                raise InvalidObservation(f"Unknown social context: {self.social_context!r}")

        object.__setattr__(self, "activities", normalize_activities(self.activities))
        object.__setattr__(self, "notes", self.notes or "")

    @property
    def sorted_activities(self) -> list[str]:
        return sorted(self.activities)

    def local_date(self, tz: tzinfo = UTC) -> date:
        """Calendar day of this observation in the given reference timezone."""
        return self.timestamp.astimezone(tz).date()

    def to_dict(self, tz: tzinfo = UTC) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "timestamp": self.timestamp.isoformat(),
            "date": self.local_date(tz).isoformat(),
            "mood_score": self.mood_score,
            "mood_type": self.mood_type.value,
            "energy": self.energy,
            "anxiety": self.anxiety,
            "stress": self.stress,
            "sleep_hours": self.sleep_hours,
            "activities": self.sorted_activities,
            "social_context": self.social_context.value if self.social_context else None,
            "notes": self.notes,
        }
