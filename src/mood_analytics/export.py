"""
Export of mood observations and their analytics.

Two formats are supported:

- structured: a JSON document holding the raw observations plus every
  derived result. Serialization is deterministic, so loading the bytes and
  passing the result back through ``dump_structured`` is byte-identical.
- tabular: CSV with one row per observation. Every column is a field of
  the structured observation record, activities joined with ";".
"""

import csv
import io
import json
import logging
from datetime import date, tzinfo
from enum import Enum
from typing import Iterable, Optional

from .bucketing import Granularity, aggregate, summarize
from .dashboard import build_dashboard
from .observations import UTC, MoodObservation

logger = logging.getLogger(__name__)

ACTIVITY_DELIMITER = ";"

TABULAR_COLUMNS = [
    "id",
    "date",
    "timestamp",
    "mood_score",
    "mood_type",
    "energy",
    "anxiety",
    "stress",
    "sleep_hours",
    "activities",
    "social_context",
    "notes",
]


class ExportFormat(str, Enum):
    """Supported export formats."""

    STRUCTURED = "structured"
    TABULAR = "tabular"

    @property
    def media_type(self) -> str:
        return "application/json" if self is ExportFormat.STRUCTURED else "text/csv"

    @property
    def extension(self) -> str:
        return "json" if self is ExportFormat.STRUCTURED else "csv"


def _chronological(observations: Iterable[MoodObservation]) -> list[MoodObservation]:
    return sorted(observations, key=lambda o: (o.timestamp, o.id))


def build_export_document(
    observations: Iterable[MoodObservation],
    as_of: date,
    start: Optional[date] = None,
    end: Optional[date] = None,
    tz: tzinfo = UTC,
) -> dict:
    """Nested export document: raw observations plus all derived analytics."""
    observations = _chronological(observations)
    statistics = summarize(observations)
    dashboard = build_dashboard(observations, as_of, tz)

    return {
        "export_date": as_of.isoformat(),
        "date_range": {
            "start": start.isoformat() if start else "all time",
            "end": end.isoformat() if end else "present",
        },
        "summary": {"mood_entries": len(observations)},
        "observations": [obs.to_dict(tz) for obs in observations],
        "analytics": {
            "daily_trends": [b.to_dict() for b in aggregate(observations, Granularity.DAY, tz)],
            "statistics": statistics.to_dict() if statistics else None,
            "dashboard": dashboard.to_dict(),
        },
    }


def dump_structured(document: dict) -> bytes:
    """Deterministic JSON encoding of an export document."""
    text = json.dumps(document, sort_keys=True, indent=2, ensure_ascii=False)
    return (text + "\n").encode("utf-8")


def _tabular_row(record: dict) -> dict:
    row = {column: record[column] for column in TABULAR_COLUMNS}
    row["activities"] = ACTIVITY_DELIMITER.join(record["activities"])
    row["social_context"] = record["social_context"] or ""
    return row


def dump_tabular(observations: Iterable[MoodObservation], tz: tzinfo = UTC) -> bytes:
    """CSV with a header row and one row per observation."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=TABULAR_COLUMNS, lineterminator="\n")
    writer.writeheader()
    for obs in _chronological(observations):
        writer.writerow(_tabular_row(obs.to_dict(tz)))
    return buffer.getvalue().encode("utf-8")


def export_observations(
    observations: Iterable[MoodObservation],
    export_format,
    as_of: date,
    start: Optional[date] = None,
    end: Optional[date] = None,
    tz: tzinfo = UTC,
) -> bytes:
    """
    Serialize observations in the requested format.

    Args:
        observations: Observations to export, any order
        export_format: "structured" or "tabular"
        as_of: Reference date for the derived dashboard and export date
        start, end: Requested range, recorded in the structured document

    Returns:
        UTF-8 encoded bytes
    """
    export_format = ExportFormat(export_format)
    observations = list(observations)

    if export_format is ExportFormat.TABULAR:
        payload = dump_tabular(observations, tz)
    else:
        payload = dump_structured(build_export_document(observations, as_of, start, end, tz))

    logger.info(
        f"[EXPORT] Exported {len(observations)} observations as {export_format.value} "
        f"({len(payload)} bytes)"
    )
    return payload
