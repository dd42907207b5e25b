"""Tests for the Database store handle lifecycle."""

import pytest
from sqlalchemy import inspect

from echonote.services.storage import Database
from echonote.services.storage.repository import TranscriptRepository


async def test_session_before_open_raises():
    db = Database("sqlite+aiosqlite:///:memory:")
    assert not db.is_open
    with pytest.raises(RuntimeError):
        async with db.session():
            pass


async def test_engine_before_open_raises():
    with pytest.raises(RuntimeError):
        Database("sqlite+aiosqlite:///:memory:").engine


async def test_open_creates_tables_and_is_idempotent(database):
    engine = database.engine
    await database.open()
    assert database.engine is engine

    async with database.engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    assert "transcripts" in tables


async def test_close_is_safe_twice():
    db = Database("sqlite+aiosqlite:///:memory:")
    await db.open()
    await db.close()
    await db.close()
    assert not db.is_open


async def test_file_database_creates_parent_dir(tmp_path):
    path = tmp_path / "nested" / "store.db"
    db = Database(f"sqlite+aiosqlite:///{path}")
    await db.open()
    try:
        assert path.parent.is_dir()
    finally:
        await db.close()


async def test_session_rolls_back_on_error(database):
    with pytest.raises(RuntimeError):
        async with database.session() as session:
            await TranscriptRepository(session).create_transcript(
                owner_id="user-a", text="lost", mime_type="audio/wav"
            )
            raise RuntimeError("abort")

    async with database.session() as session:
        assert await TranscriptRepository(session).count_transcripts() == 0
