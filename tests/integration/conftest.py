"""Integration test fixtures for EchoNote.

Provides an async HTTP client against a fresh application wired to an
in-memory SQLite store and a mock STT provider.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from echonote.api.app import create_app
from echonote.core.config import Settings


@pytest.fixture
def upload_dir(tmp_path):
    """Directory the app stages uploads in, so tests can check cleanup."""
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def settings(upload_dir):
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite:///:memory:",
        deepgram_api_key="test-key",
        upload_dir=str(upload_dir),
    )


@pytest.fixture
def app(database, mock_stt, settings):
    """Create a FastAPI application bound to the test store and mock STT."""
    return create_app(database=database, stt=mock_stt, settings=settings)


@pytest.fixture
async def async_client(app):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def audio_file(sample_wav_bytes):
    """Multipart ``files`` argument carrying a WAV clip in the ``audio`` field."""
    return {"audio": ("clip.wav", sample_wav_bytes, "audio/wav")}
