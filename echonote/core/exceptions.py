"""
EchoNote exception hierarchy.

All application-specific exceptions inherit from EchoNoteError,
enabling centralized error handling in the API middleware layer.
"""

from datetime import UTC, datetime


class EchoNoteError(Exception):
    """Base exception for all EchoNote errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "ECHONOTE_ERROR",
        status_code: int = 500,
    ) -> None:
        self.detail = detail
        self.code = code
        self.status_code = status_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


# ---------------------------------------------------------------------------
# HTTP-facing errors
# ---------------------------------------------------------------------------


class UnauthorizedError(EchoNoteError):
    """Raised when the caller identity header is missing."""

    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(detail=detail, code="UNAUTHORIZED", status_code=401)


class BadRequestError(EchoNoteError):
    """Raised for malformed or incomplete requests."""

    def __init__(self, detail: str = "Bad request", code: str = "BAD_REQUEST") -> None:
        super().__init__(detail=detail, code=code, status_code=400)


class NoAudioProvidedError(BadRequestError):
    """Raised when a transcribe request carries no audio file."""

    def __init__(self) -> None:
        super().__init__(detail="No audio file provided", code="NO_AUDIO")


class BadGatewayError(EchoNoteError):
    """Raised when the external recognition service cannot be used."""

    def __init__(self, detail: str = "STT service failed") -> None:
        super().__init__(detail=detail, code="BAD_GATEWAY", status_code=502)


class TranscriptNotFoundError(EchoNoteError):
    """Raised when a transcript ID does not exist for the given owner."""

    def __init__(self, transcript_id: str) -> None:
        self.transcript_id = transcript_id
        super().__init__(
            detail="Transcript not found",
            code="TRANSCRIPT_NOT_FOUND",
            status_code=404,
        )


class RouteNotFoundError(EchoNoteError):
    """Raised for requests that match no route."""

    def __init__(self) -> None:
        super().__init__(detail="Route not found", code="ROUTE_NOT_FOUND", status_code=404)


# ---------------------------------------------------------------------------
# Transcription gateway
# ---------------------------------------------------------------------------


class TranscriptionError(EchoNoteError):
    """Raised when STT processing fails."""

    def __init__(
        self,
        detail: str = "Transcription failed",
        code: str = "TRANSCRIPTION_ERROR",
        status_code: int = 502,
    ) -> None:
        super().__init__(detail=detail, code=code, status_code=status_code)


class UpstreamServiceError(TranscriptionError):
    """The recognition service answered with a non-success status."""

    def __init__(self, upstream_status: int, detail: str | None = None) -> None:
        self.upstream_status = upstream_status
        super().__init__(
            detail=detail or f"Recognition service returned HTTP {upstream_status}",
            code="UPSTREAM_ERROR",
        )


class TransportError(TranscriptionError):
    """The recognition call failed on the network or returned an unreadable body."""

    def __init__(self, detail: str = "Recognition service unreachable") -> None:
        super().__init__(detail=detail, code="TRANSPORT_ERROR")


class NoSpeechDetectedError(TranscriptionError):
    """The recognition service succeeded but produced no transcript."""

    def __init__(self) -> None:
        super().__init__(detail="No speech detected", code="NO_SPEECH", status_code=400)


# ---------------------------------------------------------------------------
# Client-side recording
# ---------------------------------------------------------------------------


class RecordingAlreadyActiveError(EchoNoteError):
    """Raised when trying to start a recording while one is already active."""

    def __init__(self) -> None:
        super().__init__(
            detail="A recording is already active",
            code="RECORDING_ALREADY_ACTIVE",
            status_code=409,
        )


class RecordingNotActiveError(EchoNoteError):
    """Raised when feeding or stopping a recorder that is idle."""

    def __init__(self) -> None:
        super().__init__(
            detail="No recording is active",
            code="RECORDING_NOT_ACTIVE",
            status_code=409,
        )
