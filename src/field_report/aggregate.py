"""Monthly totals, goal progress and the three-month trend."""
from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from field_report.models import DailyEntry, ExtraActivity, UserProfile
from field_report.periods import (
    current_month_records, select_month, short_month_label, trailing_months,
)
from field_report.timecalc import TimeTotal, sum_time

# Smallest bar height so an empty month is still drawn.
MIN_BAR_HEIGHT = 0.12
REMINDER_DAY = 25


@dataclass(frozen=True)
class TrendPoint:
    label: str
    year: int
    month: int
    hours: float
    display_hours: int
    height: float


@dataclass
class MonthSummary:
    year: int
    month: int
    field_time: TimeTotal
    studies: int
    credit_time: TimeTotal
    goal: float
    progress: float
    trend: list[TrendPoint] = field(default_factory=list)


def total_field(entries: Sequence[DailyEntry], today: date | None = None) -> TimeTotal:
    return sum_time(current_month_records(entries, today))


def total_studies(entries: Sequence[DailyEntry], today: date | None = None) -> int:
    return sum(e.bible_studies for e in current_month_records(entries, today))


def total_credits(extras: Sequence[ExtraActivity], today: date | None = None) -> TimeTotal:
    return sum_time(current_month_records(extras, today))


def trend(entries: Sequence[DailyEntry], goal: float, today: date | None = None) -> list[TrendPoint]:
    """Field time for the current month and the two before it, oldest first.

    Bar heights are scaled against the largest month or the goal, whichever
    is bigger, and never drop below MIN_BAR_HEIGHT.
    """
    today = today or date.today()
    months = []
    for year, month in trailing_months(today.year, today.month, 3):
        total = sum_time(select_month(entries, year, month))
        months.append((year, month, total))

    denominator = max([t.fractional_hours for _, _, t in months] + [goal, 1])
    points = []
    for year, month, total in months:
        value = total.fractional_hours
        points.append(TrendPoint(
            label=short_month_label(month),
            year=year,
            month=month,
            hours=value,
            display_hours=total.hours,
            height=max(MIN_BAR_HEIGHT, value / denominator),
        ))
    return points


def goal_progress(total: TimeTotal, goal: float) -> float:
    """Fraction of the monthly goal reached, capped at 1.0."""
    if goal <= 0:
        return 0.0
    return min(total.hours / goal, 1.0)


def is_nearing_deadline(today: date | None = None) -> bool:
    today = today or date.today()
    return today.day >= REMINDER_DAY


def summarize(
    entries: Sequence[DailyEntry],
    extras: Sequence[ExtraActivity],
    profile: UserProfile,
    today: date | None = None,
) -> MonthSummary:
    today = today or date.today()
    field_total = total_field(entries, today)
    return MonthSummary(
        year=today.year,
        month=today.month,
        field_time=field_total,
        studies=total_studies(entries, today),
        credit_time=total_credits(extras, today),
        goal=profile.monthly_goal,
        progress=goal_progress(field_total, profile.monthly_goal),
        trend=trend(entries, profile.monthly_goal, today),
    )
