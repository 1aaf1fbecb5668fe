import pytest

from field_report.store import MemoryStore


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_report.db")
    return db_path


@pytest.fixture
def memory_store():
    return MemoryStore()
