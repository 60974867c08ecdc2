"""
Mood analytics service.

Fetches one user's observations from a record store and runs the pure
analytics functions over them. The fetch is the only I/O: it runs under a
deadline, and a cancelled request never reaches the computation step.
"""

import asyncio
import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from enum import Enum
from typing import Optional, Protocol

from .bucketing import Bucket, Granularity, TrendStatistics, aggregate, summarize
from .correlations import CorrelationReport, correlate
from .dashboard import DashboardSnapshot, build_dashboard
from .errors import FetchFailure, InsufficientData, InvalidRange
from .export import ExportFormat, export_observations
from .observations import UTC, MoodObservation

logger = logging.getLogger(__name__)


class ObservationStore(Protocol):
    """Read-only access to a user's stored mood observations."""

    async def fetch_observations(
        self,
        user_id: str,
        start: Optional[date],
        end: Optional[date],
    ) -> list[MoodObservation]:
        """
        Observations whose calendar day lies in [start, end], any order.

        A None bound leaves that side of the range open.
        """
        ...


class TrendPeriod(str, Enum):
    """Look-back window for trend reports."""

    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


_PERIOD_MONTHS = {
    TrendPeriod.MONTH: 1,
    TrendPeriod.QUARTER: 3,
    TrendPeriod.YEAR: 12,
}


def subtract_months(day: date, months: int) -> date:
    """Same day ``months`` calendar months earlier, clamped to month length."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def period_range(period, as_of: date) -> tuple[date, date]:
    """Start and end dates (inclusive) of a trend period ending at ``as_of``."""
    period = TrendPeriod(period)
    if period is TrendPeriod.WEEK:
        return as_of - timedelta(days=7), as_of
    return subtract_months(as_of, _PERIOD_MONTHS[period]), as_of


def days_range(days: int, as_of: date) -> tuple[date, date]:
    """The ``days`` calendar days ending at ``as_of``."""
    if days <= 0:
        raise InvalidRange(f"Day count must be positive, got {days}")
    return as_of - timedelta(days=days - 1), as_of


def check_range(start: Optional[date], end: Optional[date]) -> None:
    if start is not None and end is not None and start > end:
        raise InvalidRange(f"Start date {start} is after end date {end}")


@dataclass
class TrendReport:
    """Bucketed trend data for one period."""

    period: TrendPeriod
    granularity: Granularity
    start: date
    end: date
    trend_data: list[Bucket]
    statistics: Optional[TrendStatistics]

    @property
    def date_range(self) -> dict:
        return {"start": self.start, "end": self.end}

    def to_dict(self) -> dict:
        return {
            "period": self.period.value,
            "granularity": self.granularity.value,
            "date_range": {"start": self.start.isoformat(), "end": self.end.isoformat()},
            "trend_data": [b.to_dict() for b in self.trend_data],
            "statistics": self.statistics.to_dict() if self.statistics else None,
        }


class MoodAnalyticsService:
    """
    Per-request analytics over one user's observations.

    Holds no mutable state; concurrent calls for the same or different
    users are independent.

    Configuration:
        tz: Reference timezone for calendar days
        fetch_timeout: Default deadline in seconds for the store call
        dashboard_window_days: History considered by the dashboard
        correlation_window_days: Default history for correlation analysis
    """

    def __init__(
        self,
        store: ObservationStore,
        tz: tzinfo = UTC,
        fetch_timeout: Optional[float] = 10.0,
        dashboard_window_days: int = 90,
        correlation_window_days: int = 30,
    ):
        self.store = store
        self.tz = tz
        self.fetch_timeout = fetch_timeout
        self.dashboard_window_days = dashboard_window_days
        self.correlation_window_days = correlation_window_days

    def today(self) -> date:
        return datetime.now(self.tz).date()

    async def fetch(
        self,
        user_id: str,
        start: Optional[date],
        end: Optional[date],
        timeout: Optional[float] = None,
    ) -> list[MoodObservation]:
        """
        Fetch observations under a deadline.

        Raises:
            InvalidRange: start is after end (checked before fetching)
            FetchFailure: the store raised or the deadline expired
        """
        check_range(start, end)
        timeout = self.fetch_timeout if timeout is None else timeout

        try:
            observations = await asyncio.wait_for(
                self.store.fetch_observations(user_id, start, end),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"[SERVICE] Fetch for user={user_id} timed out after {timeout}s")
            raise FetchFailure(f"Record store timed out after {timeout}s", timed_out=True) from e
        except FetchFailure:
            raise
        except Exception as e:
            logger.warning(f"[SERVICE] Fetch for user={user_id} failed: {e}")
            raise FetchFailure(f"Record store request failed: {e}") from e

        logger.debug(
            f"[SERVICE] Fetched {len(observations)} observations for user={user_id} "
            f"range={start}..{end}"
        )
        return list(observations)

    async def get_observations(
        self,
        user_id: str,
        days: int = 7,
        as_of: Optional[date] = None,
        timeout: Optional[float] = None,
    ) -> list[MoodObservation]:
        """Raw observations for the last ``days`` days, newest first."""
        start, end = days_range(days, as_of or self.today())
        observations = await self.fetch(user_id, start, end, timeout)
        return sorted(observations, key=lambda o: (o.timestamp, o.id), reverse=True)

    async def get_dashboard(
        self,
        user_id: str,
        as_of: Optional[date] = None,
        timeout: Optional[float] = None,
    ) -> DashboardSnapshot:
        as_of = as_of or self.today()
        start, end = days_range(self.dashboard_window_days, as_of)
        observations = await self.fetch(user_id, start, end, timeout)

        logger.info(f"[SERVICE] Building dashboard for user={user_id} as_of={as_of}")
        return build_dashboard(observations, as_of, self.tz)

    async def get_trends(
        self,
        user_id: str,
        period="month",
        granularity="day",
        as_of: Optional[date] = None,
        timeout: Optional[float] = None,
    ) -> TrendReport:
        period = TrendPeriod(period)
        granularity = Granularity(granularity)
        start, end = period_range(period, as_of or self.today())
        observations = await self.fetch(user_id, start, end, timeout)

        logger.info(
            f"[SERVICE] Trends for user={user_id} period={period.value} "
            f"granularity={granularity.value}: {len(observations)} observations"
        )
        return TrendReport(
            period=period,
            granularity=granularity,
            start=start,
            end=end,
            trend_data=aggregate(observations, granularity, self.tz),
            statistics=summarize(observations),
        )

    async def get_correlations(
        self,
        user_id: str,
        days: Optional[int] = None,
        as_of: Optional[date] = None,
        timeout: Optional[float] = None,
    ) -> CorrelationReport:
        """
        Raises:
            InsufficientData: fewer than five observations in the window
        """
        days = self.correlation_window_days if days is None else days
        start, end = days_range(days, as_of or self.today())
        observations = await self.fetch(user_id, start, end, timeout)

        try:
            return correlate(observations, self.tz)
        except InsufficientData as e:
            logger.warning(f"[SERVICE] Correlations unavailable for user={user_id}: {e}")
            raise

    async def export(
        self,
        user_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
        export_format="structured",
        as_of: Optional[date] = None,
        timeout: Optional[float] = None,
    ) -> bytes:
        export_format = ExportFormat(export_format)
        check_range(start, end)
        observations = await self.fetch(user_id, start, end, timeout)
        return export_observations(
            observations,
            export_format,
            as_of=as_of or end or self.today(),
            start=start,
            end=end,
            tz=self.tz,
        )
