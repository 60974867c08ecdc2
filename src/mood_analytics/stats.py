"""
Exact averaging helpers shared by the analytics modules.

Sums are accumulated as Decimal so that rounding happens once, on the
final mean, and always half away from zero (7.25 -> 7.3, 7.15 -> 7.2).
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from .observations import MoodObservation

ZERO = Decimal(0)


def to_decimal(value) -> Decimal:
    # str() gives the shortest repr of a float, so 7.15 stays 7.15
    return value if isinstance(value, Decimal) else Decimal(str(value))


def mean(values: Iterable) -> Optional[Decimal]:
    """Exact arithmetic mean, or None for an empty input."""
    total = ZERO
    count = 0
    for value in values:
        total += to_decimal(value)
        count += 1
    if count == 0:
        return None
    return total / count


def round_half_away(value, places: int = 1) -> float:
    """Round to ``places`` decimals, halves away from zero."""
    quantum = Decimal(1).scaleb(-places)
    return float(to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


@dataclass
class MetricAverages:
    """Rounded means of the numeric observation metrics."""

    mood: float
    energy: float
    anxiety: float
    stress: float
    sleep: float

    def to_dict(self) -> dict:
        return {
            "mood": self.mood,
            "energy": self.energy,
            "anxiety": self.anxiety,
            "stress": self.stress,
            "sleep": self.sleep,
        }


@dataclass
class MetricSums:
    """Running sums of every numeric metric across a group of observations."""

    count: int = 0
    mood: Decimal = ZERO
    energy: Decimal = ZERO
    anxiety: Decimal = ZERO
    stress: Decimal = ZERO
    sleep: Decimal = ZERO

    def add(self, obs: MoodObservation) -> None:
        self.count += 1
        self.mood += obs.mood_score
        self.energy += obs.energy
        self.anxiety += obs.anxiety
        self.stress += obs.stress
        self.sleep += to_decimal(obs.sleep_hours)

    def mean_mood(self) -> Optional[Decimal]:
        if self.count == 0:
            return None
        return self.mood / self.count

    def averages(self) -> Optional[MetricAverages]:
        """Rounded averages, or None when nothing was added."""
        if self.count == 0:
            return None
        return MetricAverages(
            mood=round_half_away(self.mood / self.count),
            energy=round_half_away(self.energy / self.count),
            anxiety=round_half_away(self.anxiety / self.count),
            stress=round_half_away(self.stress / self.count),
            sleep=round_half_away(self.sleep / self.count),
        )

    @classmethod
    def of(cls, observations: Iterable[MoodObservation]) -> "MetricSums":
        sums = cls()
        for obs in observations:
            sums.add(obs)
        return sums
