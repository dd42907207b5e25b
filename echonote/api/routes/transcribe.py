"""
Transcription endpoint.

``POST /transcribe`` runs the whole pipeline for one upload: validate,
stage the file, call the STT provider, persist the transcript, respond.
"""

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, File, UploadFile
from starlette.datastructures import UploadFile as StarletteUploadFile

from echonote.api.dependencies import DatabaseDep, SettingsDep, STTDep, UserId
from echonote.core.exceptions import (
    BadGatewayError,
    NoAudioProvidedError,
    TransportError,
    UpstreamServiceError,
)
from echonote.core.models import TranscribeResponse
from echonote.services.audio import stage_upload
from echonote.services.storage.repository import TranscriptRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["transcription"])

_DEFAULT_MIME_TYPE = "application/octet-stream"


@router.post("/transcribe", response_model=TranscribeResponse)
async def transcribe(
    user_id: UserId,
    database: DatabaseDep,
    stt: STTDep,
    settings: SettingsDep,
    audio: Annotated[UploadFile | str | None, File()] = None,
) -> TranscribeResponse:
    """Transcribe an uploaded audio file and save it to the caller's history."""
    # A plain form field named "audio" carries no file.
    if not isinstance(audio, StarletteUploadFile):
        raise NoAudioProvidedError()

    mime_type = audio.content_type or _DEFAULT_MIME_TYPE

    async with stage_upload(audio, settings.upload_dir) as path:
        audio_bytes = await asyncio.to_thread(path.read_bytes)
        if not audio_bytes:
            raise NoAudioProvidedError()

        try:
            text = await stt.transcribe(audio_bytes, mime_type)
        except (UpstreamServiceError, TransportError) as exc:
            logger.error("STT failed for owner %s: %s", user_id, exc.detail)
            raise BadGatewayError() from exc

    async with database.session() as session:
        repo = TranscriptRepository(session)
        transcript = await repo.create_transcript(
            owner_id=user_id,
            text=text,
            mime_type=mime_type,
        )

    logger.info("Saved transcript %s for owner %s", transcript.id, user_id)
    return TranscribeResponse(transcript=transcript.text, id=transcript.id)
