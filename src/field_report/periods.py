"""Calendar-month selection and month labels."""
from datetime import date, datetime
from typing import Iterable, Protocol, TypeVar

MONTH_NAMES_PT = (
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
)


class Dated(Protocol):
    date: str


D = TypeVar("D", bound=Dated)


def parse_record_date(value: str) -> date | None:
    """Return the calendar date a stored record belongs to, or None.

    Date-only and naive timestamps are taken as written. Timestamps with an
    offset (such as the trailing "Z" of browser-made records) are converted
    to local time first, so a late-evening entry stays in its local month.
    """
    if not isinstance(value, str) or not value:
        return None
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.date()


def select_month(records: Iterable[D], year: int, month: int) -> list[D]:
    selected = []
    for record in records:
        d = parse_record_date(record.date)
        if d is not None and d.year == year and d.month == month:
            selected.append(record)
    return selected


def current_month_records(records: Iterable[D], today: date | None = None) -> list[D]:
    today = today or date.today()
    return select_month(records, today.year, today.month)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def trailing_months(year: int, month: int, count: int = 3) -> list[tuple[int, int]]:
    """Months ending at (year, month), oldest first."""
    return [shift_month(year, month, -offset) for offset in range(count - 1, -1, -1)]


def month_year_label(day: date | None = None) -> str:
    day = day or date.today()
    return f"{MONTH_NAMES_PT[day.month - 1]} de {day.year}"


def short_month_label(month: int) -> str:
    return MONTH_NAMES_PT[month - 1][:3].capitalize()
