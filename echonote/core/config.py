"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """EchoNote settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive).

    Attributes:
        database_url: Async SQLAlchemy connection string for the transcript store.
        stt_provider: Speech-to-text backend ("deepgram").
        deepgram_api_key: Credential for the external recognition service.
        api_base_url: Base URL the Streamlit client uses to reach the API server.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- Speech-to-text ---
    stt_provider: str = "deepgram"
    deepgram_api_key: str = ""
    deepgram_url: str = "https://api.deepgram.com/v1/listen"
    deepgram_model: str = ""  # Empty = provider default model
    stt_timeout: float | None = None  # Seconds; None waits indefinitely

    # --- Application ---
    app_host: str = "0.0.0.0"  # Bind address for the FastAPI server
    app_port: int = 5000
    log_level: str = "INFO"  # Python logging level
    cors_origins: list[str] = [
        "http://localhost:8501",  # Streamlit
        "http://localhost:5173",  # Dev frontend
    ]

    # --- Storage ---
    database_url: str = "sqlite+aiosqlite:///data/echonote.db"
    upload_dir: str = ""  # Temp dir for staged uploads; empty = system default

    # --- Client ---
    auth_url: str = ""  # Identity provider base URL
    auth_anon_key: str = ""  # Identity provider public (anon) key
    api_base_url: str = "http://localhost:5000"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
