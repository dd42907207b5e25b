"""
Pydantic v2 request / response models used across the API layer.

Transcript records are serialized with camelCase keys (``ownerId``,
``mimeType``, ``createdAt``) to match what the browser client consumes.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """GET / response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: datetime


# ---------------------------------------------------------------------------
# Transcripts
# ---------------------------------------------------------------------------


class TranscribeResponse(BaseModel):
    """POST /transcribe response."""

    transcript: str
    id: str


class TranscriptRecord(BaseModel):
    """A stored transcript as returned by GET /history."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    text: str
    owner_id: str
    mime_type: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite returns naive datetimes; stored values are always UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class DeleteTranscriptResponse(BaseModel):
    """DELETE /history/{id} response."""

    success: bool = True


# ---------------------------------------------------------------------------
# Recognition service payload
# ---------------------------------------------------------------------------


class RecognitionAlternative(BaseModel):
    """One candidate transcription for a channel."""

    transcript: str | None = None
    confidence: float | None = None


class RecognitionChannel(BaseModel):
    """Per-audio-channel recognition output."""

    alternatives: list[RecognitionAlternative] | None = None


class RecognitionResults(BaseModel):
    channels: list[RecognitionChannel] | None = None


class RecognitionResponse(BaseModel):
    """Subset of the recognition API's JSON body that the gateway relies on."""

    results: RecognitionResults | None = None


# ---------------------------------------------------------------------------
# Error
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Error envelope returned by the API."""

    error: str
