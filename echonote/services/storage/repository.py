"""
CRUD repository for the ``transcripts`` table.

``TranscriptRepository`` receives an ``AsyncSession`` and provides all
data-access methods.  It calls ``flush()`` rather than ``commit()`` so
that transaction boundaries are controlled by the caller (typically
:meth:`Database.session`).
"""

import logging
from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from echonote.core.exceptions import TranscriptNotFoundError
from echonote.services.storage.models_db import Transcript

logger = logging.getLogger(__name__)


class TranscriptRepository:
    """Data-access layer for transcript records.

    Every read and delete is scoped to an owner; a record belonging to
    someone else behaves exactly like a missing one.

    Args:
        session: An active SQLAlchemy ``AsyncSession``.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_transcript(
        self,
        owner_id: str,
        text: str,
        mime_type: str,
        created_at: datetime | None = None,
    ) -> Transcript:
        """Insert and return a new transcript.

        Args:
            owner_id: Identity of the caller that owns the record.
            text: Recognized speech; must not be blank.
            mime_type: Content type of the uploaded audio.
            created_at: Creation time override (imports and tests); defaults to now.

        Raises:
            ValueError: If ``owner_id`` or ``text`` is blank.
        """
        if not owner_id:
            raise ValueError("owner_id must not be empty")
        if not text or not text.strip():
            raise ValueError("text must not be empty")

        transcript = Transcript(owner_id=owner_id, text=text, mime_type=mime_type)
        if created_at is not None:
            transcript.created_at = created_at
        self._session.add(transcript)
        await self._session.flush()
        logger.debug("Created transcript %s for owner %s", transcript.id, owner_id)
        return transcript

    async def get_transcript(self, transcript_id: str, owner_id: str) -> Transcript:
        """Return an owned transcript or raise :class:`TranscriptNotFoundError`."""
        stmt = select(Transcript).where(
            Transcript.id == transcript_id,
            Transcript.owner_id == owner_id,
        )
        result = await self._session.execute(stmt)
        transcript = result.scalar_one_or_none()
        if transcript is None:
            raise TranscriptNotFoundError(transcript_id)
        return transcript

    async def list_transcripts(self, owner_id: str, limit: int | None = None) -> list[Transcript]:
        """Return the owner's transcripts, newest first."""
        stmt = (
            select(Transcript)
            .where(Transcript.owner_id == owner_id)
            .order_by(Transcript.created_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def delete_transcript(self, transcript_id: str, owner_id: str) -> None:
        """Delete an owned transcript in a single statement.

        Raises:
            TranscriptNotFoundError: If no row matched both id and owner.
        """
        stmt = delete(Transcript).where(
            Transcript.id == transcript_id,
            Transcript.owner_id == owner_id,
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise TranscriptNotFoundError(transcript_id)
        await self._session.flush()

    async def count_transcripts(self, owner_id: str | None = None) -> int:
        """Count transcripts, optionally for a single owner."""
        stmt = select(func.count()).select_from(Transcript)
        if owner_id is not None:
            stmt = stmt.where(Transcript.owner_id == owner_id)
        result = await self._session.execute(stmt)
        return result.scalar_one()
