"""
Client application state machine, independent of Streamlit.

``AppController`` holds everything one browser session knows: auth phase,
current user, selected file, last transcript, history, in-flight flags and a
one-shot notice. Streamlit components call its actions and render its state.

Auth phases: loading -> {unauthenticated, authenticated}
Recorder:    idle -> recording -> idle
"""

import logging
from dataclasses import dataclass
from enum import StrEnum

from echonote.core.exceptions import RecordingAlreadyActiveError, RecordingNotActiveError
from echonote.ui.api_client import APIClient, APIError
from echonote.ui.auth import AuthError, AuthEvent, AuthSession, AuthUser, IdentityProvider

logger = logging.getLogger(__name__)


class AuthPhase(StrEnum):
    loading = "loading"
    unauthenticated = "unauthenticated"
    authenticated = "authenticated"


class RecorderState(StrEnum):
    idle = "idle"
    recording = "recording"


@dataclass(frozen=True)
class AudioPayload:
    """An audio clip ready for upload."""

    data: bytes
    mime_type: str = "audio/webm"
    filename: str = "recording.webm"


@dataclass(frozen=True)
class Notice:
    """A transient message; shown once, then discarded."""

    message: str
    level: str = "error"  # "error" | "info"


class RecordingSession:
    """Two-state recorder: ``start()`` opens a capture, ``stop()`` returns its payload.

    Audio reaches the session through ``add_chunk()`` while it is recording.

    Args:
        mime_type: Content type of the captured audio.
        filename: File name sent with the upload.
    """

    def __init__(self, mime_type: str = "audio/wav", filename: str = "recording.wav") -> None:
        self._mime_type = mime_type
        self._filename = filename
        self._state = RecorderState.idle
        self._chunks: list[bytes] = []

    @property
    def state(self) -> RecorderState:
        return self._state

    @property
    def is_recording(self) -> bool:
        return self._state is RecorderState.recording

    def start(self) -> None:
        if self.is_recording:
            raise RecordingAlreadyActiveError()
        self._chunks = []
        self._state = RecorderState.recording

    def add_chunk(self, data: bytes) -> None:
        if not self.is_recording:
            raise RecordingNotActiveError()
        if data:
            self._chunks.append(data)

    def stop(self) -> AudioPayload:
        """Finish the capture and return everything recorded since ``start()``."""
        if not self.is_recording:
            raise RecordingNotActiveError()
        payload = AudioPayload(
            data=b"".join(self._chunks),
            mime_type=self._mime_type,
            filename=self._filename,
        )
        self.reset()
        return payload

    def reset(self) -> None:
        """Discard any capture in progress and return to idle."""
        self._chunks = []
        self._state = RecorderState.idle


class AppController:
    """State and actions for one browser session.

    The identity provider's auth-state-change notification is the only thing
    that moves the controller between ``unauthenticated`` and ``authenticated``.

    Args:
        auth: Identity provider client owned by this session.
        api: Backend API client.
        recorder: Recording session (a fresh one by default).
    """

    def __init__(
        self,
        auth: IdentityProvider,
        api: APIClient,
        recorder: RecordingSession | None = None,
    ) -> None:
        self._auth = auth
        self._api = api
        self.recorder = recorder or RecordingSession()
        self.phase = AuthPhase.loading
        self.user: AuthUser | None = None
        self.notice: Notice | None = None
        self._clear_session_state()
        self._unsubscribe = auth.on_auth_state_change(self._on_auth_state_change)

    def _clear_session_state(self) -> None:
        self.selected_file: AudioPayload | None = None
        self.transcript = ""
        self.history: list[dict] = []
        self.uploading = False

    # -- derived flags --

    @property
    def busy(self) -> bool:
        return self.uploading or self.recorder.is_recording

    @property
    def can_upload(self) -> bool:
        return self.phase is AuthPhase.authenticated and not self.busy

    @property
    def can_start_recording(self) -> bool:
        return self.phase is AuthPhase.authenticated and not self.busy

    # -- notices --

    def _notify(self, message: str, level: str = "error") -> None:
        self.notice = Notice(message=message, level=level)

    def consume_notice(self) -> Notice | None:
        """Return the pending notice (if any) and clear it."""
        notice, self.notice = self.notice, None
        return notice

    # -- auth --

    def bootstrap(self) -> None:
        """Leave ``loading`` based on the identity provider's current session."""
        self._apply_session(self._auth.get_session())

    def _on_auth_state_change(self, event: AuthEvent, session: AuthSession | None) -> None:
        logger.debug("Auth state change: %s", event)
        self._apply_session(session)

    def _apply_session(self, session: AuthSession | None) -> None:
        if session is None:
            self.phase = AuthPhase.unauthenticated
            self.user = None
            self.recorder.reset()
            self._clear_session_state()
            return

        previous = self.user.id if self.user else None
        self.user = session.user
        self.phase = AuthPhase.authenticated
        if previous != session.user.id:
            self._clear_session_state()
            self.refresh_history()

    def sign_in(self, email: str, password: str) -> None:
        self.notice = None
        try:
            self._auth.sign_in(email, password)
        except AuthError as exc:
            self._notify(exc.message)

    def sign_up(self, email: str, password: str) -> None:
        self.notice = None
        try:
            session = self._auth.sign_up(email, password)
        except AuthError as exc:
            self._notify(exc.message)
            return
        if session is None:
            self._notify("Check your email to confirm signup", level="info")

    def sign_out(self) -> None:
        try:
            self._auth.sign_out()
        except AuthError as exc:
            self._notify(exc.message)

    # -- history --

    def refresh_history(self) -> None:
        if self.user is None:
            return
        try:
            self.history = self._api.list_history(self.user.id)
        except APIError as exc:
            logger.warning("History refresh failed: %s", exc.message)
            self._notify("Failed to load history")

    def delete(self, transcript_id: str) -> bool:
        """Delete one history item; on success it is dropped locally without a re-fetch."""
        if self.user is None:
            return False
        try:
            self._api.delete_history(self.user.id, transcript_id)
        except APIError as exc:
            self._notify(exc.message)
            return False
        self.history = [item for item in self.history if item.get("id") != transcript_id]
        self._notify("Deleted successfully", level="info")
        return True

    # -- upload --

    def select_file(self, payload: AudioPayload | None) -> None:
        self.selected_file = payload

    def upload(self, payload: AudioPayload | None = None) -> bool:
        """Send ``payload`` (or the selected file) to ``/transcribe``.

        Returns:
            True when a transcript came back.
        """
        if self.user is None or self.uploading:
            return False
        payload = payload or self.selected_file
        if payload is None:
            self._notify("Please select an audio file")
            return False

        self.uploading = True
        self.transcript = ""
        self.notice = None
        try:
            result = self._api.transcribe(
                self.user.id,
                payload.data,
                filename=payload.filename,
                mime_type=payload.mime_type,
            )
        except APIError as exc:
            self._notify(exc.message)
            return False
        finally:
            self.uploading = False

        self.transcript = result.get("transcript", "")
        self.refresh_history()
        return True

    # -- recording --

    def start_recording(self) -> bool:
        """Begin a capture. Returns False if an upload is in flight."""
        if self.phase is not AuthPhase.authenticated or self.uploading:
            return False
        self.recorder.start()
        return True

    def stop_recording(self) -> bool:
        """End the capture and upload it through the same path as file uploads."""
        payload = self.recorder.stop()
        if not payload.data:
            self._notify("No audio captured")
            return False
        return self.upload(payload)

    def close(self) -> None:
        self._unsubscribe()
