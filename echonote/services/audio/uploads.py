"""Scoped staging of uploaded audio on local disk.

Each upload is copied into its own temporary file for the duration of a
request. The file is removed when the ``async with`` block exits, whether
the block finished normally or raised.
"""

import asyncio
import logging
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import UploadFile

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024


def _suffix_for(filename: str | None) -> str:
    if not filename:
        return ".audio"
    return Path(filename).suffix.lower() or ".audio"


async def _copy_upload(upload: UploadFile, tmp) -> int:
    """Stream ``upload`` into the open temp file and return the byte count."""
    written = 0
    while chunk := await upload.read(_CHUNK_SIZE):
        await asyncio.to_thread(tmp.write, chunk)
        written += len(chunk)
    await asyncio.to_thread(tmp.flush)
    return written


@asynccontextmanager
async def stage_upload(upload: UploadFile, upload_dir: str | None = None) -> AsyncIterator[Path]:
    """Write an uploaded file to a temporary path and yield it.

    Args:
        upload: The multipart file part received by the route.
        upload_dir: Directory for the temp file; empty or ``None`` uses the
            system temp directory.

    Yields:
        Path to the staged copy. It no longer exists after the block exits.
    """
    directory = upload_dir or None
    if directory:
        Path(directory).mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        prefix="echonote-",
        suffix=_suffix_for(upload.filename),
        dir=directory,
        delete=False,
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            size = await _copy_upload(upload, tmp)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise

    logger.debug("Staged upload %r (%d bytes) at %s", upload.filename, size, tmp_path)
    try:
        yield tmp_path
    finally:
        tmp_path.unlink(missing_ok=True)
