"""Runtime settings loaded from the environment and an optional .env file."""
import os
from dataclasses import dataclass
from pathlib import Path

from field_report.db import DEFAULT_DB_PATH

DEFAULT_NOTE_MODEL = "gemini-3-flash-preview"
DEFAULT_INSIGHT_MODEL = "gemini-3-pro-preview"
DEFAULT_TIMEOUT_SECONDS = 45.0


@dataclass(frozen=True)
class Settings:
    database_path: str
    llm_enabled: bool
    llm_api_key: str | None
    note_model: str
    insight_model: str
    llm_timeout_seconds: float
    log_level: str


def _read_env_file(path: Path) -> dict[str, str]:
    """Parse KEY=VALUE lines; blank lines, comments and `export ` prefixes are allowed."""
    if not path.is_file():
        return {}
    values = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        values[key] = value.strip().strip("\"'")
    return values


TRUE_WORDS = {"1", "true", "yes", "on"}
FALSE_WORDS = {"0", "false", "no", "off"}


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    word = value.strip().lower()
    if word in TRUE_WORDS:
        return True
    if word in FALSE_WORDS:
        return False
    return default


def _parse_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def load_settings(env_file: Path = Path(".env")) -> Settings:
    # Values already in the environment take precedence over the file.
    for key, value in _read_env_file(env_file).items():
        os.environ.setdefault(key, value)

    api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or None
    return Settings(
        database_path=os.getenv("FIELD_REPORT_DB", DEFAULT_DB_PATH),
        llm_enabled=_parse_bool(os.getenv("LLM_ENABLED"), default=api_key is not None),
        llm_api_key=api_key,
        note_model=os.getenv("NOTE_MODEL", DEFAULT_NOTE_MODEL),
        insight_model=os.getenv("INSIGHT_MODEL", DEFAULT_INSIGHT_MODEL),
        llm_timeout_seconds=_parse_float(os.getenv("LLM_TIMEOUT_SECONDS"), DEFAULT_TIMEOUT_SECONDS),
        log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
    )
