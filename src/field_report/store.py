"""Key/value persistence for the profile, entries and extras slots.

Each collection lives in its own slot and is rewritten in full on every
change. There is no transaction across slots.
"""
import json
import logging
from datetime import datetime
from typing import Protocol

from field_report.db import get_connection, init_db
from field_report.errors import StorageCorruptedError
from field_report.models import DailyEntry, ExtraActivity, UserProfile

logger = logging.getLogger(__name__)

PROFILE_KEY = "user_profile"
ENTRIES_KEY = "daily_entries"
EXTRAS_KEY = "extra_activities"


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def put(self, key: str, value: str) -> None: ...

    def clear(self) -> None: ...


class SqliteStore:
    def __init__(self, db_path: str):
        self.db_path = db_path
        init_db(db_path)

    def get(self, key: str) -> str | None:
        conn = get_connection(self.db_path)
        row = conn.execute("SELECT value FROM slots WHERE key = ?", (key,)).fetchone()
        conn.close()
        return row["value"] if row else None

    def put(self, key: str, value: str) -> None:
        conn = get_connection(self.db_path)
        conn.execute(
            "INSERT INTO slots (key, value, updated_at) VALUES (?, ?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at",
            (key, value, datetime.now().isoformat()),
        )
        conn.commit()
        conn.close()

    def clear(self) -> None:
        conn = get_connection(self.db_path)
        conn.execute("DELETE FROM slots")
        conn.commit()
        conn.close()


class MemoryStore:
    def __init__(self, data: dict[str, str] | None = None):
        self.data = dict(data or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def put(self, key: str, value: str) -> None:
        self.data[key] = value

    def clear(self) -> None:
        self.data.clear()


def _decode(store: KeyValueStore, key: str):
    raw = store.get(key)
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise StorageCorruptedError(key, str(e)) from e


def _decode_list(store: KeyValueStore, key: str, factory) -> list:
    data = _decode(store, key)
    if data is None:
        return []
    if not isinstance(data, list):
        raise StorageCorruptedError(key, "expected a list")
    try:
        return [factory(item) for item in data]
    except (KeyError, TypeError, ValueError) as e:
        raise StorageCorruptedError(key, repr(e)) from e


def _write(store: KeyValueStore, key: str, payload) -> None:
    store.put(key, json.dumps(payload, ensure_ascii=False))
    logger.debug("saved slot %s", key)


def load_profile(store: KeyValueStore) -> UserProfile:
    data = _decode(store, PROFILE_KEY)
    if data is None:
        return UserProfile()
    try:
        return UserProfile.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise StorageCorruptedError(PROFILE_KEY, repr(e)) from e


def load_entries(store: KeyValueStore) -> list[DailyEntry]:
    return _decode_list(store, ENTRIES_KEY, DailyEntry.from_dict)


def load_extras(store: KeyValueStore) -> list[ExtraActivity]:
    return _decode_list(store, EXTRAS_KEY, ExtraActivity.from_dict)


def save_profile(store: KeyValueStore, profile: UserProfile) -> None:
    _write(store, PROFILE_KEY, profile.to_dict())


def save_entries(store: KeyValueStore, entries: list[DailyEntry]) -> None:
    _write(store, ENTRIES_KEY, [e.to_dict() for e in entries])


def save_extras(store: KeyValueStore, extras: list[ExtraActivity]) -> None:
    _write(store, EXTRAS_KEY, [x.to_dict() for x in extras])


def reset(store: KeyValueStore) -> None:
    """Erase every slot. Callers reload defaults afterwards."""
    store.clear()
    logger.info("all slots erased")
