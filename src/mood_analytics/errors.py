"""Exceptions raised by the mood analytics engine."""

from typing import Optional


class MoodAnalyticsError(Exception):
    """Base class for all mood analytics errors."""


class InvalidObservation(MoodAnalyticsError, ValueError):
    """A mood observation carries an out-of-range or unknown value."""


class InvalidRange(MoodAnalyticsError):
    """A requested date range or day count is malformed.

    Raised before any fetch against the record store is attempted.
    """


class FetchFailure(MoodAnalyticsError):
    """The record store call failed or timed out.

    The underlying exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, timed_out: bool = False):
        super().__init__(message)
        self.timed_out = timed_out


class InsufficientData(MoodAnalyticsError):
    """Too few observations for a meaningful ranking."""

    def __init__(self, required: int, available: int, message: Optional[str] = None):
        self.required = required
        self.available = available
        super().__init__(
            message
            or f"At least {required} mood entries required for correlation analysis "
            f"({available} available)"
        )
