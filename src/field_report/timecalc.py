"""Hour/minute arithmetic for logged service time."""
from dataclasses import dataclass
from typing import Iterable, Protocol


class Timed(Protocol):
    hours: int
    minutes: int


@dataclass(frozen=True)
class TimeTotal:
    hours: int
    minutes: int

    @property
    def fractional_hours(self) -> float:
        return self.hours + self.minutes / 60

    def __iter__(self):
        yield self.hours
        yield self.minutes


def normalize(hours: int, minutes: int) -> TimeTotal:
    """Re-split hours and minutes so that minutes carry into hours.

    Negative input is not rejected; it yields a negative total.
    """
    total = hours * 60 + minutes
    return TimeTotal(hours=total // 60, minutes=total % 60)


def format_time(hours: int, minutes: int) -> str:
    total = normalize(hours, minutes)
    if total.minutes == 0:
        return f"{total.hours}h"
    return f"{total.hours}h {total.minutes}m"


def sum_time(records: Iterable[Timed]) -> TimeTotal:
    # Accumulate raw minutes and normalize once at the end.
    total_minutes = sum(r.hours * 60 + r.minutes for r in records)
    return normalize(0, total_minutes)
