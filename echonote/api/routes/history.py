"""
Transcript history endpoints.

Both endpoints are scoped to the ``x-user-id`` caller and delegate to
``TranscriptRepository``: no business logic here.
"""

import logging

from fastapi import APIRouter

from echonote.api.dependencies import DatabaseDep, UserId
from echonote.core.models import DeleteTranscriptResponse, TranscriptRecord
from echonote.services.storage.models_db import Transcript
from echonote.services.storage.repository import TranscriptRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/history", tags=["history"])


def _to_record(transcript: Transcript) -> TranscriptRecord:
    """Convert an ORM Transcript object to its API response model."""
    return TranscriptRecord(
        id=transcript.id,
        text=transcript.text,
        owner_id=transcript.owner_id,
        mime_type=transcript.mime_type,
        created_at=transcript.created_at,
    )


@router.get("", response_model=list[TranscriptRecord])
async def list_history(user_id: UserId, database: DatabaseDep):
    """List the caller's transcripts, newest first."""
    async with database.session() as session:
        repo = TranscriptRepository(session)
        transcripts = await repo.list_transcripts(owner_id=user_id)
    return [_to_record(t) for t in transcripts]


@router.delete("/{transcript_id}", response_model=DeleteTranscriptResponse)
async def delete_history_item(transcript_id: str, user_id: UserId, database: DatabaseDep):
    """Delete one of the caller's transcripts."""
    async with database.session() as session:
        repo = TranscriptRepository(session)
        await repo.delete_transcript(transcript_id=transcript_id, owner_id=user_id)
    logger.info("Deleted transcript %s for owner %s", transcript_id, user_id)
    return DeleteTranscriptResponse()
