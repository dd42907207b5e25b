"""Tests for settings loading."""

from echonote.core.config import Settings, get_settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("DEEPGRAM_API_KEY", raising=False)
    settings = Settings(_env_file=None)
    assert settings.stt_provider == "deepgram"
    assert settings.deepgram_url == "https://api.deepgram.com/v1/listen"
    assert settings.stt_timeout is None
    assert settings.app_port == 5000
    assert "http://localhost:8501" in settings.cors_origins


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DEEPGRAM_API_KEY", "from-env")
    monkeypatch.setenv("APP_PORT", "8080")
    monkeypatch.setenv("STT_TIMEOUT", "12.5")
    settings = Settings(_env_file=None)
    assert settings.deepgram_api_key == "from-env"
    assert settings.app_port == 8080
    assert settings.stt_timeout == 12.5


def test_env_file(tmp_path, monkeypatch):
    monkeypatch.delenv("AUTH_URL", raising=False)
    env = tmp_path / ".env"
    env.write_text("AUTH_URL=https://auth.example.com\nUNRELATED=1\n")
    settings = Settings(_env_file=env)
    assert settings.auth_url == "https://auth.example.com"


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
