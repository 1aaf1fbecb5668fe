"""Working copies of the profile, entries and extras for one session.

Every mutation is written through to the store before it returns.
"""
import base64
import logging
import mimetypes
import uuid
from datetime import date, datetime
from pathlib import Path

from field_report import store as slots
from field_report.aggregate import MonthSummary, summarize
from field_report.errors import ImageTooLargeError
from field_report.models import (
    DEFAULT_COVER, ActivityKind, DailyEntry, ExtraActivity, ServiceType, UserProfile,
)
from field_report.periods import current_month_records, parse_record_date
from field_report.store import KeyValueStore

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 2 * 1024 * 1024
IMAGE_FIELDS = ("cover_photo", "profile_picture")
PROFILE_FIELDS = ("name", "monthly_goal", "whatsapp_number", "cover_photo", "profile_picture")


def encode_image(path: str, limit: int = MAX_IMAGE_BYTES) -> str:
    """Read an image file into a data URL, rejecting files above the limit."""
    file = Path(path)
    size = file.stat().st_size
    if size > limit:
        raise ImageTooLargeError(size, limit)
    mime = mimetypes.guess_type(file.name)[0] or "application/octet-stream"
    encoded = base64.b64encode(file.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def _sort_key(record) -> date:
    return parse_record_date(record.date) or date.min


class Journal:
    def __init__(self, store: KeyValueStore):
        self.store = store
        self._load()

    def _load(self) -> None:
        self.profile = slots.load_profile(self.store)
        self.entries = slots.load_entries(self.store)
        self.extras = slots.load_extras(self.store)

    # --- Entries ---

    def add_entry(
        self,
        hours: int,
        minutes: int,
        bible_studies: int = 0,
        notes: str | None = None,
        entry_date: str | None = None,
    ) -> DailyEntry:
        entry = DailyEntry(
            id=str(uuid.uuid4()),
            date=entry_date or datetime.now().isoformat(),
            hours=hours,
            minutes=minutes,
            bible_studies=bible_studies,
            notes=notes,
        )
        self.entries = [*self.entries, entry]
        slots.save_entries(self.store, self.entries)
        logger.info("added entry %s for %s", entry.id, entry.date)
        return entry

    def delete_entry(self, entry_id: str) -> bool:
        remaining = [e for e in self.entries if e.id != entry_id]
        if len(remaining) == len(self.entries):
            return False
        self.entries = remaining
        slots.save_entries(self.store, self.entries)
        return True

    def history(self, today: date | None = None) -> list[DailyEntry]:
        """Current-month entries, newest first."""
        return sorted(current_month_records(self.entries, today), key=_sort_key, reverse=True)

    # --- Extras ---

    def add_extra(
        self,
        kind: ActivityKind,
        hours: int,
        minutes: int,
        activity_date: str | None = None,
    ) -> ExtraActivity:
        extra = ExtraActivity(
            id=str(uuid.uuid4()),
            type=kind,
            hours=hours,
            minutes=minutes,
            date=activity_date or datetime.now().isoformat(),
        )
        self.extras = [*self.extras, extra]
        slots.save_extras(self.store, self.extras)
        return extra

    def delete_extra(self, extra_id: str) -> bool:
        remaining = [x for x in self.extras if x.id != extra_id]
        if len(remaining) == len(self.extras):
            return False
        self.extras = remaining
        slots.save_extras(self.store, self.extras)
        return True

    def extras_history(self, today: date | None = None) -> list[ExtraActivity]:
        return sorted(current_month_records(self.extras, today), key=_sort_key, reverse=True)

    # --- Profile ---

    def update_profile(self, **changes) -> UserProfile:
        # Reject the whole call before touching the working copy.
        unknown = [name for name in changes if name not in PROFILE_FIELDS]
        if unknown:
            raise ValueError(f"unknown profile field: {', '.join(unknown)}")
        if "monthly_goal" in changes and not changes["monthly_goal"] > 0:
            raise ValueError("monthly goal must be positive")
        for name, value in changes.items():
            setattr(self.profile, name, value)
        slots.save_profile(self.store, self.profile)
        return self.profile

    def choose_service_type(self, service_type: ServiceType) -> UserProfile:
        self.profile.service_type = service_type
        self.profile.monthly_goal = service_type.default_goal
        slots.save_profile(self.store, self.profile)
        return self.profile

    def set_image(self, field: str, path: str) -> UserProfile:
        if field not in IMAGE_FIELDS:
            raise ValueError(f"not an image field: {field}")
        # Validation happens before the profile is touched.
        data_url = encode_image(path)
        return self.update_profile(**{field: data_url})

    def clear_profile_picture(self) -> UserProfile:
        return self.update_profile(profile_picture=None)

    def restore_default_cover(self) -> UserProfile:
        return self.update_profile(cover_photo=DEFAULT_COVER)

    # --- Whole store ---

    def reset(self) -> None:
        slots.reset(self.store)
        self._load()

    def summary(self, today: date | None = None) -> MonthSummary:
        return summarize(self.entries, self.extras, self.profile, today)

    def month_notes(self, today: date | None = None) -> list[str]:
        return [e.notes for e in current_month_records(self.entries, today) if e.notes]
