"""
Abstract base class for Speech-to-Text providers.

All STT implementations must implement this interface, enabling
provider-agnostic transcription in the API layer.
"""

from abc import ABC, abstractmethod


class BaseSTT(ABC):
    """Interface that every STT provider must implement."""

    @abstractmethod
    async def transcribe(self, audio: bytes, mime_type: str) -> str:
        """Transcribe an in-memory audio clip to text.

        Args:
            audio: Raw audio bytes exactly as uploaded (no transcoding).
            mime_type: Content type of ``audio``, e.g. ``audio/webm``.

        Returns:
            The recognized, non-empty transcript.

        Raises:
            UpstreamServiceError: The provider answered with a failure status.
            TransportError: The provider could not be reached or its reply was unreadable.
            NoSpeechDetectedError: The provider succeeded but found no speech.
        """

    async def aclose(self) -> None:
        """Release network resources held by the provider."""
