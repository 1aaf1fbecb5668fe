# tests/test_config.py
from field_report.config import DEFAULT_NOTE_MODEL, DEFAULT_TIMEOUT_SECONDS, load_settings

ENV_VARS = [
    "FIELD_REPORT_DB", "GEMINI_API_KEY", "API_KEY", "LLM_ENABLED", "NOTE_MODEL",
    "INSIGHT_MODEL", "LLM_TIMEOUT_SECONDS", "LOG_LEVEL",
]


def _clear(monkeypatch):
    # setenv first so teardown also undoes values written by the .env loader
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_defaults_without_key(monkeypatch, tmp_path):
    _clear(monkeypatch)
    settings = load_settings(tmp_path / ".env")
    assert settings.llm_api_key is None
    assert settings.llm_enabled is False
    assert settings.note_model == DEFAULT_NOTE_MODEL
    assert settings.llm_timeout_seconds == DEFAULT_TIMEOUT_SECONDS
    assert settings.log_level == "WARNING"


def test_env_file_is_read(monkeypatch, tmp_path):
    _clear(monkeypatch)
    env = tmp_path / ".env"
    env.write_text('# comment\nGEMINI_API_KEY="abc"\nFIELD_REPORT_DB=/tmp/x.db\nLOG_LEVEL=debug\n')
    settings = load_settings(env)
    assert settings.llm_api_key == "abc"
    assert settings.llm_enabled is True
    assert settings.database_path == "/tmp/x.db"
    assert settings.log_level == "DEBUG"


def test_environment_wins_over_env_file(monkeypatch, tmp_path):
    _clear(monkeypatch)
    monkeypatch.setenv("NOTE_MODEL", "from-env")
    env = tmp_path / ".env"
    env.write_text("NOTE_MODEL=from-file\n")
    assert load_settings(env).note_model == "from-env"


def test_api_key_fallback_and_explicit_disable(monkeypatch, tmp_path):
    _clear(monkeypatch)
    monkeypatch.setenv("API_KEY", "legacy")
    monkeypatch.setenv("LLM_ENABLED", "0")
    settings = load_settings(tmp_path / ".env")
    assert settings.llm_api_key == "legacy"
    assert settings.llm_enabled is False


def test_invalid_timeout_falls_back(monkeypatch, tmp_path):
    _clear(monkeypatch)
    monkeypatch.setenv("LLM_TIMEOUT_SECONDS", "soon")
    assert load_settings(tmp_path / ".env").llm_timeout_seconds == DEFAULT_TIMEOUT_SECONDS


def test_env_file_export_prefix_and_junk_lines(monkeypatch, tmp_path):
    _clear(monkeypatch)
    env = tmp_path / ".env"
    env.write_text("export GEMINI_API_KEY='abc'\nnot a setting\n=orphan\n#NOTE_MODEL=x\n")
    settings = load_settings(env)
    assert settings.llm_api_key == "abc"
    assert settings.note_model == DEFAULT_NOTE_MODEL


def test_unrecognized_bool_keeps_default(monkeypatch, tmp_path):
    _clear(monkeypatch)
    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    monkeypatch.setenv("LLM_ENABLED", "maybe")
    assert load_settings(tmp_path / ".env").llm_enabled is True
    monkeypatch.setenv("LLM_ENABLED", "off")
    assert load_settings(tmp_path / ".env").llm_enabled is False
