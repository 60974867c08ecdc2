"""
Unit tests for the SQLite record store.

Tests the row conversion that turns SQLite rows into MoodObservation
objects, and the calendar-day range filter applied in SQL.

Usage:
    pytest tests/test_record_store.py -v
"""
from datetime import date, timezone
from zoneinfo import ZoneInfo

import pytest

from mood_analytics import InvalidObservation
from server.mood_api.database import SQLiteObservationStore, _row_to_observation


def _row(**overrides) -> dict:
    row = {
        "id": "MOOD-001",
        "user_id": "user-1",
        "timestamp": "2025-07-30T12:00:00+00:00",
        "mood_score": "7",
        "mood_type": "GOOD",
        "energy": "6",
        "anxiety": "3",
        "stress": "4",
        "sleep_hours": "7.5",
        "activities": '["Exercise", "Reading"]',
        "social_context": "with_friends",
        "notes": "",
    }
    row.update(overrides)
    return row


class TestRowToObservation:
    """Test _row_to_observation handles the stored text values."""

    def test_float_strings(self):
        """
        Scores written by some clients arrive as float strings like '8.0'.
        The conversion must still produce integers.
        """
        obs = _row_to_observation(
            _row(mood_score="8.0", energy="5.0", anxiety="2.0", stress="3.0")
        )

        assert obs.mood_score == 8
        assert obs.energy == 5
        assert obs.anxiety == 2
        assert obs.stress == 3

    def test_json_activities(self):
        obs = _row_to_observation(_row())
        assert obs.activities == frozenset({"Exercise", "Reading"})

    def test_legacy_comma_activities(self):
        obs = _row_to_observation(_row(activities="Exercise, Reading,,Exercise"))
        assert obs.activities == frozenset({"Exercise", "Reading"})

    def test_empty_optional_columns(self):
        obs = _row_to_observation(_row(activities=None, social_context="", notes=None))

        assert obs.activities == frozenset()
        assert obs.social_context is None
        assert obs.notes == ""

    def test_non_string_activity_names_row(self):
        with pytest.raises(InvalidObservation, match="MOOD-001"):
            _row_to_observation(_row(activities='["Exercise", 1]'))

    def test_unparseable_score_names_row(self):
        with pytest.raises(InvalidObservation, match="MOOD-001"):
            _row_to_observation(_row(mood_score="high"))

    def test_timestamp_is_utc(self):
        obs = _row_to_observation(_row(timestamp="2025-07-30T14:00:00+02:00"))
        assert obs.timestamp.tzinfo is not None
        assert obs.timestamp.hour == 12


class TestSQLiteObservationStore:
    """Test range filtering against a temporary database."""

    @pytest.fixture
    def rows(self):
        return [
            _row(id="a", timestamp="2025-07-28T23:30:00+00:00"),
            _row(id="b", timestamp="2025-07-29T00:00:00+00:00"),
            _row(id="c", timestamp="2025-07-30T23:59:59+00:00"),
            _row(id="d", timestamp="2025-07-31T00:00:00+00:00"),
            _row(id="e", timestamp="2025-07-30T12:00:00+00:00", user_id="user-2"),
        ]

    @pytest.mark.asyncio
    async def test_inclusive_day_range(self, create_mood_database, rows):
        store = SQLiteObservationStore(create_mood_database(rows), tz=timezone.utc)

        observations = await store.fetch_observations("user-1", date(2025, 7, 29), date(2025, 7, 30))

        assert [o.id for o in observations] == ["b", "c"]

    @pytest.mark.asyncio
    async def test_open_range(self, create_mood_database, rows):
        store = SQLiteObservationStore(create_mood_database(rows), tz=timezone.utc)

        observations = await store.fetch_observations("user-1", None, None)

        assert [o.id for o in observations] == ["a", "b", "c", "d"]

    @pytest.mark.asyncio
    async def test_local_day_boundaries(self, create_mood_database, rows):
        # 2025-07-29 in Berlin (UTC+2) runs from 07-28T22:00Z to 07-29T22:00Z
        store = SQLiteObservationStore(create_mood_database(rows), tz=ZoneInfo("Europe/Berlin"))

        observations = await store.fetch_observations("user-1", date(2025, 7, 29), date(2025, 7, 29))

        assert [o.id for o in observations] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_unknown_user(self, create_mood_database, rows):
        store = SQLiteObservationStore(create_mood_database(rows), tz=timezone.utc)
        assert await store.fetch_observations("nobody", None, None) == []
