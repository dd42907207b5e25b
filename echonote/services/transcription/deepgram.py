"""Deepgram STT implementation over its pre-recorded ``/v1/listen`` REST API.

Each call is a single ``POST`` with the audio as the request body; there is
no retry. The JSON reply is validated into :class:`RecognitionResponse` and
the transcript is pulled out by :func:`extract_transcript`.
"""

import logging

import httpx
from pydantic import ValidationError

from echonote.core.config import get_settings
from echonote.core.exceptions import (
    NoSpeechDetectedError,
    TransportError,
    UpstreamServiceError,
)
from echonote.core.models import RecognitionResponse
from echonote.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)


def extract_transcript(payload: RecognitionResponse) -> str:
    """Return the first alternative of the first channel.

    Raises:
        NoSpeechDetectedError: If the path is absent or the transcript is blank.
    """
    if payload.results is None or not payload.results.channels:
        raise NoSpeechDetectedError()
    alternatives = payload.results.channels[0].alternatives
    if not alternatives:
        raise NoSpeechDetectedError()
    text = (alternatives[0].transcript or "").strip()
    if not text:
        raise NoSpeechDetectedError()
    return text


class DeepgramSTT(BaseSTT):
    """Speech-to-text provider backed by the Deepgram HTTP API.

    Args:
        api_key: Deepgram credential (falls back to settings).
        url: Listen endpoint URL (falls back to settings).
        model: Optional model name sent as the ``model`` query parameter.
        timeout: Request timeout in seconds; ``None`` waits indefinitely.
        client: Pre-built ``httpx.AsyncClient`` (tests inject a mock transport).
    """

    def __init__(
        self,
        api_key: str | None = None,
        url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
        settings=None,
    ) -> None:
        self._settings = settings or get_settings()
        self._api_key = api_key if api_key is not None else self._settings.deepgram_api_key
        self._url = url or self._settings.deepgram_url
        self._model = model if model is not None else self._settings.deepgram_model
        if timeout is None:
            timeout = self._settings.stt_timeout
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))
        self._owns_client = client is None

    def _params(self) -> dict[str, str]:
        params = {"punctuate": "true"}
        if self._model:
            params["model"] = self._model
        return params

    async def transcribe(self, audio: bytes, mime_type: str) -> str:
        """Send ``audio`` to Deepgram and return the transcript text."""
        if not audio:
            raise ValueError("audio must not be empty")

        try:
            resp = await self._client.post(
                self._url,
                params=self._params(),
                headers={
                    "Authorization": f"Token {self._api_key}",
                    "Content-Type": mime_type,
                },
                content=audio,
            )
        except httpx.HTTPError as exc:
            logger.warning("Deepgram request failed: %s", exc)
            raise TransportError(f"Deepgram request failed: {exc}") from exc

        if not resp.is_success:
            logger.warning("Deepgram returned HTTP %s: %s", resp.status_code, resp.text[:200])
            raise UpstreamServiceError(resp.status_code)

        try:
            payload = RecognitionResponse.model_validate_json(resp.content)
        except ValidationError as exc:
            logger.warning("Deepgram returned an unreadable body: %s", exc)
            raise TransportError("Deepgram returned an unreadable body") from exc

        text = extract_transcript(payload)
        logger.info(
            "Deepgram transcribed %d bytes of %s into %d chars", len(audio), mime_type, len(text)
        )
        return text

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
