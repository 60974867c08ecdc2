"""Read-only SQLite record store for mood observations."""
import asyncio
import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import date, datetime, time, timedelta, timezone
from typing import Generator, Optional

from mood_analytics import InvalidObservation, MoodObservation

from .config import get_settings

log = logging.getLogger(__name__)

TABLE_NAME = "mood_observations"


def to_utc_text(value: datetime) -> str:
    """Fixed-width UTC text so timestamps compare lexicographically."""
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S+00:00")


def _parse_activities(raw) -> list[str]:
    if not raw:
        return []
    if raw.startswith("["):
        return json.loads(raw)
    # Older rows store a plain comma separated list
    return [part for part in raw.split(",") if part.strip()]


def _row_to_observation(row) -> MoodObservation:
    """Convert SQLite row to MoodObservation."""
    # Helper to safely convert to int (handles float strings like '7.0')
    def to_int(val):
        return int(float(val))

    try:
        return MoodObservation(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            timestamp=datetime.fromisoformat(row["timestamp"]),
            mood_score=to_int(row["mood_score"]),
            mood_type=row["mood_type"],
            energy=to_int(row["energy"]),
            anxiety=to_int(row["anxiety"]),
            stress=to_int(row["stress"]),
            sleep_hours=float(row["sleep_hours"] or 0),
            activities=_parse_activities(row["activities"]),
            social_context=row["social_context"] or None,
            notes=row["notes"] or "",
        )
    except ValueError as e:
        # Covers bad numbers, timestamps and JSON as well as InvalidObservation
        raise InvalidObservation(f"Malformed mood row {row['id']}: {e}") from e


class SQLiteObservationStore:
    """
    Read-only SQLite store of mood observations.
    Opens a separate read-only connection per query so it never
    interferes with the external write path.
    """

    def __init__(self, db_path: Optional[str] = None, tz=None):
        settings = get_settings()
        self.db_path = db_path or settings.mood_db_path
        self.tz = tz or settings.tzinfo

    async def fetch_observations(
        self,
        user_id: str,
        start: Optional[date],
        end: Optional[date],
    ) -> list[MoodObservation]:
        """Observations whose local calendar day lies in [start, end]."""
        return await asyncio.to_thread(self._fetch, user_id, start, end)

    def _fetch(self, user_id: str, start: Optional[date], end: Optional[date]) -> list[MoodObservation]:
        clauses = ["user_id = ?"]
        params: list = [user_id]

        if start is not None:
            clauses.append("timestamp >= ?")
            params.append(to_utc_text(datetime.combine(start, time.min, tzinfo=self.tz)))
        if end is not None:
            clauses.append("timestamp < ?")
            params.append(to_utc_text(datetime.combine(end + timedelta(days=1), time.min, tzinfo=self.tz)))

        with self.connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                SELECT * FROM {TABLE_NAME}
                WHERE {' AND '.join(clauses)}
                ORDER BY timestamp ASC
                """,
                params,
            )
            rows = cursor.fetchall()

        log.debug(f"[STORE] Loaded {len(rows)} rows for user={user_id} range={start}..{end}")
        return [_row_to_observation(row) for row in rows]

    @contextmanager
    def connect(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Create a read-only connection with proper isolation.
        Uses URI mode with mode=ro to ensure read-only access.
        """
        uri = f"file:{self.db_path}?mode=ro"
        conn = sqlite3.connect(uri, uri=True, check_same_thread=False)
        conn.row_factory = sqlite3.Row  # Enable dict-like row access
        try:
            yield conn
        finally:
            conn.close()


# Singleton instance
observation_store = SQLiteObservationStore()


def get_observation_store() -> SQLiteObservationStore:
    """FastAPI dependency returning the configured record store."""
    return observation_store
