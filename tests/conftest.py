"""
Pytest fixtures for Mood Analytics tests.
"""
import asyncio
import json
import sqlite3
from datetime import date, datetime, time, timezone
from itertools import count
from typing import Optional

import pytest
from dotenv import load_dotenv

from mood_analytics import MoodObservation

# Load environment variables
load_dotenv()


# ============================================================================
# Observation Fixtures
# ============================================================================

_ids = count(1)


def make_observation(
    day: date,
    mood_score: int = 7,
    *,
    hour: int = 12,
    user_id: str = "user-1",
    mood_type: str = "GOOD",
    energy: int = 6,
    anxiety: int = 3,
    stress: int = 4,
    sleep_hours: float = 7.5,
    activities=(),
    social_context: Optional[str] = None,
    notes: str = "",
) -> MoodObservation:
    """Build a valid observation logged at ``hour`` UTC on ``day``."""
    return MoodObservation(
        id=f"obs-{next(_ids):04d}",
        user_id=user_id,
        timestamp=datetime.combine(day, time(hour=hour), tzinfo=timezone.utc),
        mood_score=mood_score,
        mood_type=mood_type,
        energy=energy,
        anxiety=anxiety,
        stress=stress,
        sleep_hours=sleep_hours,
        activities=list(activities),
        social_context=social_context,
        notes=notes,
    )


@pytest.fixture
def observation_factory():
    """Return the observation builder."""
    return make_observation


@pytest.fixture
def scenario_week():
    """
    Observations for 2025-07-25..2025-07-31 with mood [8,7,9,6,8,7,8];
    "Exercise" is logged on every day scoring 8.
    """
    scores = [8, 7, 9, 6, 8, 7, 8]
    return [
        make_observation(
            date(2025, 7, 25 + i),
            score,
            activities=["Exercise"] if score == 8 else [],
        )
        for i, score in enumerate(scores)
    ]


# ============================================================================
# Record Store Fixtures
# ============================================================================


class InMemoryObservationStore:
    """Record store double holding observations in a list."""

    def __init__(self, observations=(), delay: float = 0.0, error: Optional[Exception] = None):
        self.observations = list(observations)
        self.delay = delay
        self.error = error
        self.calls = []

    async def fetch_observations(self, user_id, start, end):
        self.calls.append((user_id, start, end))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return [
            obs
            for obs in self.observations
            if obs.user_id == user_id
            and (start is None or obs.local_date() >= start)
            and (end is None or obs.local_date() <= end)
        ]


@pytest.fixture
def memory_store():
    """Factory for in-memory record stores."""
    return InMemoryObservationStore


MOOD_TABLE_SQL = """
CREATE TABLE mood_observations (
    id TEXT PRIMARY KEY, user_id TEXT, timestamp TEXT, mood_score TEXT,
    mood_type TEXT, energy TEXT, anxiety TEXT, stress TEXT, sleep_hours TEXT,
    activities TEXT, social_context TEXT, notes TEXT
)
"""


@pytest.fixture
def create_mood_database(tmp_path):
    """
    Factory fixture writing observations into a temporary SQLite file.

    Returns a function that accepts a list of row dicts and returns the
    database path.
    """

    def _create(rows: list[dict]) -> str:
        db_path = tmp_path / "mood.db"
        conn = sqlite3.connect(db_path)
        conn.execute(MOOD_TABLE_SQL)
        for row in rows:
            values = dict(row)
            if isinstance(values.get("activities"), list):
                values["activities"] = json.dumps(values["activities"])
            conn.execute(
                f"INSERT INTO mood_observations ({', '.join(values)}) "
                f"VALUES ({', '.join('?' * len(values))})",
                list(values.values()),
            )
        conn.commit()
        conn.close()
        return str(db_path)

    return _create
