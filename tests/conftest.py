"""Shared pytest fixtures for EchoNote test suite.

Provides common test fixtures used across unit and integration tests,
including a mock STT provider, sample audio, and database setup helpers.
"""

import struct
from unittest.mock import AsyncMock

import pytest

# ---------------------------------------------------------------------------
# STT Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_stt():
    """Create a mock STT provider for unit testing.

    Returns:
        AsyncMock: A mock implementing the BaseSTT interface with a
        default transcript.
    """
    from echonote.services.transcription.base import BaseSTT

    stt = AsyncMock(spec=BaseSTT)
    stt.transcribe.return_value = "This is a test transcription."
    return stt


# ---------------------------------------------------------------------------
# Audio Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_wav_bytes():
    """Generate a short 440Hz sine-wave WAV clip (16kHz, 16-bit, mono).

    Returns:
        bytes: A complete WAV file.
    """
    import io
    import math
    import wave

    sample_rate = 16000
    frames = b"".join(
        struct.pack("<h", int(16000 * math.sin(2 * math.pi * 440.0 * i / sample_rate)))
        for i in range(sample_rate // 4)
    )
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(sample_rate)
        wf.writeframes(frames)
    return buf.getvalue()


# ---------------------------------------------------------------------------
# Database Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
async def database():
    """Open an in-memory SQLite store with tables, close after test."""
    from echonote.services.storage import Database

    db = Database("sqlite+aiosqlite:///:memory:")
    await db.open()
    yield db
    await db.close()


@pytest.fixture
async def db_session(database):
    """Yield an AsyncSession bound to the test store; rolls back after test."""
    async with database.session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def repository(db_session):
    """Return a TranscriptRepository bound to the test session."""
    from echonote.services.storage.repository import TranscriptRepository

    return TranscriptRepository(db_session)
