# tests/test_aggregate.py
from datetime import date

from field_report.aggregate import (
    MIN_BAR_HEIGHT, goal_progress, is_nearing_deadline, summarize, total_credits,
    total_field, total_studies, trend,
)
from field_report.models import ActivityKind, DailyEntry, ExtraActivity, UserProfile
from field_report.timecalc import TimeTotal

TODAY = date(2026, 10, 19)


def _entry(entry_id, when, hours, minutes, studies=0):
    return DailyEntry(id=entry_id, date=when, hours=hours, minutes=minutes, bible_studies=studies)


def test_month_totals_scenario():
    entries = [
        _entry("a", "2026-10-03", 2, 30, 3),
        _entry("b", "2026-10-04", 1, 45, 0),
        _entry("c", "2026-09-30", 9, 0, 7),
    ]
    assert total_field(entries, TODAY) == TimeTotal(4, 15)
    assert total_studies(entries, TODAY) == 3


def test_credits_independent_of_field_time():
    extras = [
        ExtraActivity(id="x", type=ActivityKind.LDC, hours=3, minutes=40, date="2026-10-10"),
        ExtraActivity(id="y", type=ActivityKind.ASSEMBLY_HALL, hours=0, minutes=30, date="2026-10-11"),
        ExtraActivity(id="z", type=ActivityKind.LDC, hours=5, minutes=0, date="2026-08-11"),
    ]
    assert total_credits(extras, TODAY) == TimeTotal(4, 10)
    assert total_field([], TODAY) == TimeTotal(0, 0)


def test_goal_progress_half():
    assert goal_progress(TimeTotal(15, 0), 30) == 0.5


def test_goal_progress_capped_and_zero_goal():
    assert goal_progress(TimeTotal(45, 0), 30) == 1.0
    assert goal_progress(TimeTotal(10, 0), 0) == 0.0


def test_trend_covers_three_months_oldest_first():
    entries = [
        _entry("a", "2026-08-05", 10, 30),
        _entry("b", "2026-09-05", 20, 0),
        _entry("c", "2026-10-05", 5, 0),
    ]
    points = trend(entries, goal=30, today=TODAY)
    assert [(p.year, p.month) for p in points] == [(2026, 8), (2026, 9), (2026, 10)]
    assert [p.label for p in points] == ["Ago", "Set", "Out"]
    assert points[0].hours == 10.5
    assert points[0].display_hours == 10
    assert points[1].height == 20 / 30


def test_trend_scales_against_largest_month_above_goal():
    entries = [_entry("a", "2026-09-05", 60, 0)]
    points = trend(entries, goal=30, today=TODAY)
    assert points[1].height == 1.0
    assert points[2].height == MIN_BAR_HEIGHT


def test_trend_all_zero_does_not_divide_by_zero():
    points = trend([], goal=0, today=TODAY)
    assert len(points) == 3
    assert all(p.height == MIN_BAR_HEIGHT for p in points)
    assert all(p.hours == 0 for p in points)


def test_trend_crosses_year_boundary():
    entries = [_entry("a", "2025-11-20", 4, 0)]
    points = trend(entries, goal=30, today=date(2026, 1, 10))
    assert [(p.year, p.month) for p in points] == [(2025, 11), (2025, 12), (2026, 1)]
    assert points[0].display_hours == 4


def test_is_nearing_deadline():
    assert is_nearing_deadline(date(2026, 10, 25)) is True
    assert is_nearing_deadline(date(2026, 10, 31)) is True
    assert is_nearing_deadline(date(2026, 10, 24)) is False


def test_summarize():
    profile = UserProfile(monthly_goal=30)
    entries = [_entry("a", "2026-10-01", 15, 0, 2)]
    extras = [ExtraActivity(id="x", type=ActivityKind.LDC, hours=1, minutes=0, date="2026-10-02")]
    summary = summarize(entries, extras, profile, TODAY)
    assert (summary.year, summary.month) == (2026, 10)
    assert summary.field_time == TimeTotal(15, 0)
    assert summary.studies == 2
    assert summary.credit_time == TimeTotal(1, 0)
    assert summary.progress == 0.5
    assert len(summary.trend) == 3
