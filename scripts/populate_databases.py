#!/usr/bin/env python3
"""
Populate the SQLite mood database read by the Mood Analytics API.

Loads observations from a CSV file, or generates a demo data set for a
single user when no CSV is available.

Usage:
    python scripts/populate_databases.py
    python scripts/populate_databases.py --csv CSV_Data/mood_observations.csv
    python scripts/populate_databases.py --demo --days 60 --user demo-user
"""
import argparse
import csv
import json
import os
import random
import sqlite3
import sys
from datetime import datetime, time, timedelta, timezone
from pathlib import Path

# Base directory (project root)
BASE_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(BASE_DIR))
sys.path.insert(0, str(BASE_DIR / "src"))

from server.mood_api.database import TABLE_NAME, to_utc_text  # noqa: E402

DEFAULT_CSV = BASE_DIR / "CSV_Data" / "mood_observations.csv"
DEFAULT_DB = BASE_DIR / "mood.db"

COLUMNS = [
    "id",
    "user_id",
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

DEMO_ACTIVITIES = ["Exercise", "Reading", "Meditation", "Work", "Socializing", "Gaming", "Cooking"]
DEMO_CONTEXTS = ["alone", "with_friends", "with_family", "work", "public", None]


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the observations table and its lookup index."""
    columns = ", ".join(
        f"{name} TEXT PRIMARY KEY" if name == "id" else f"{name} TEXT" for name in COLUMNS
    )
    conn.execute(f"CREATE TABLE {TABLE_NAME} ({columns})")
    conn.execute(f"CREATE INDEX idx_{TABLE_NAME}_user_ts ON {TABLE_NAME} (user_id, timestamp)")


def insert_rows(conn: sqlite3.Connection, rows: list[dict]) -> int:
    """Insert observation rows and return the table's row count."""
    placeholders = ", ".join(["?"] * len(COLUMNS))
    conn.executemany(
        f"INSERT INTO {TABLE_NAME} ({', '.join(COLUMNS)}) VALUES ({placeholders})",
        [[row.get(col) for col in COLUMNS] for row in rows],
    )
    conn.commit()
    return conn.execute(f"SELECT COUNT(*) FROM {TABLE_NAME}").fetchone()[0]


def mood_type_for(score: int) -> str:
    """Map a 1-10 score onto the named mood categories."""
    if score >= 9:
        return "EXCELLENT"
    if score >= 7:
        return "GOOD"
    if score >= 5:
        return "OKAY"
    if score >= 3:
        return "BAD"
    return "TERRIBLE"


def load_csv_rows(csv_path: Path) -> list[dict]:
    """Read observation rows from CSV, normalizing timestamps and activities."""
    with open(csv_path, "r", newline="", encoding="utf-8-sig") as f:
        rows = list(csv.DictReader(f))

    for row in rows:
        ts = datetime.fromisoformat(row["timestamp"])
        row["timestamp"] = to_utc_text(ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc))
        labels = [a.strip() for a in (row.get("activities") or "").split(";") if a.strip()]
        row["activities"] = json.dumps(labels)
    return rows


def generate_demo_rows(user_id: str, days: int, seed: int = 42) -> list[dict]:
    """One observation per day for ``days`` days ending today."""
    rng = random.Random(seed)
    today = datetime.now(timezone.utc).date()
    rows = []

    for offset in range(days):
        day = today - timedelta(days=days - 1 - offset)
        # Skip a few days so streaks are not trivially the whole range
        if rng.random() < 0.1:
            continue

        sleep = round(rng.uniform(4.5, 9.0), 1)
        activities = rng.sample(DEMO_ACTIVITIES, k=rng.randint(0, 3))
        score = 5 + (1 if sleep >= 7 else -1 if sleep < 6 else 0)
        score += 1 if "Exercise" in activities else 0
        score -= 1 if "Work" in activities else 0
        score = max(1, min(10, score + rng.randint(-1, 2)))

        logged_at = datetime.combine(day, time(hour=rng.randint(7, 22)), tzinfo=timezone.utc)
        rows.append(
            {
                "id": f"MOOD-{day.strftime('%Y%m%d')}-{user_id}",
                "user_id": user_id,
                "timestamp": to_utc_text(logged_at),
                "mood_score": str(score),
                "mood_type": mood_type_for(score),
                "energy": str(max(1, min(10, score + rng.randint(-2, 1)))),
                "anxiety": str(rng.randint(1, 8)),
                "stress": str(rng.randint(1, 9)),
                "sleep_hours": str(sleep),
                "activities": json.dumps(activities),
                "social_context": rng.choice(DEMO_CONTEXTS),
                "notes": "",
            }
        )
    return rows


def main():
    """Create the mood database from CSV or demo data."""
    parser = argparse.ArgumentParser(description="Populate the mood observation database")
    parser.add_argument("--csv", type=Path, default=DEFAULT_CSV, help="CSV file to load")
    parser.add_argument("--db", type=Path, default=DEFAULT_DB, help="SQLite file to create")
    parser.add_argument("--demo", action="store_true", help="Generate demo data instead of loading CSV")
    parser.add_argument("--user", default="demo-user", help="User id for demo data")
    parser.add_argument("--days", type=int, default=60, help="Days of demo data")
    args = parser.parse_args()

    print("=" * 60)
    print("Mood Analytics Database Population Script")
    print("=" * 60)

    if args.demo or not args.csv.exists():
        if not args.demo:
            print(f"  CSV file not found: {args.csv}, generating demo data")
        rows = generate_demo_rows(args.user, args.days)
    else:
        print(f"Processing: {args.csv} -> {args.db}")
        rows = load_csv_rows(args.csv)

    # Remove existing database file
    if args.db.exists():
        os.remove(args.db)
        print(f"  Removed existing: {args.db.name}")

    conn = sqlite3.connect(args.db)
    try:
        create_schema(conn)
        count = insert_rows(conn, rows)
    finally:
        conn.close()

    print(f"  Created table: {TABLE_NAME}")
    print(f"  Rows inserted: {count}")
    size_kb = args.db.stat().st_size / 1024
    print(f"\nDatabase file created: {args.db} ({size_kb:.1f} KB)")


if __name__ == "__main__":
    main()
