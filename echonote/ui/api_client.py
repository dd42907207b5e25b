"""
Synchronous HTTP client for the EchoNote backend API.

Uses ``httpx.Client`` (sync) because Streamlit scripts run synchronously.
Every call that touches history or transcription carries the caller
identity in the ``x-user-id`` header.
"""

import logging

import httpx
import streamlit as st

logger = logging.getLogger(__name__)

USER_HEADER = "x-user-id"


class APIError(Exception):
    """User-friendly API error with categorized message.

    Categories: "connection", "timeout", "http", "network", "unknown".
    Used by the UI to display appropriate error messages.
    """

    def __init__(self, message: str, category: str = "unknown", status_code: int | None = None):
        self.message = message
        self.category = category
        self.status_code = status_code
        super().__init__(message)


class APIClient:
    """Thin synchronous wrapper around httpx for calling the FastAPI backend.

    All methods return parsed JSON or raise ``APIError`` carrying the
    server's ``error`` message for display in the UI.
    """

    def __init__(self, base_url: str = "http://localhost:5000") -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL of the EchoNote FastAPI backend.
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self._base_url, timeout=30.0)

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request with user-friendly error handling.

        Args:
            method: HTTP method name ("get", "post", "delete").
            path: API endpoint path (e.g. "/history").
            **kwargs: Passed through to httpx (headers, files, timeout, etc.).

        Returns:
            The httpx Response object with a successful status code.

        Raises:
            APIError: On connection, timeout, HTTP status, or network errors.
        """
        try:
            resp = getattr(self._client, method)(path, **kwargs)
            resp.raise_for_status()
            return resp
        except httpx.ConnectError:
            raise APIError(
                "Backend server is not running. Start it with: `echonote-server`",
                category="connection",
            ) from None
        except httpx.TimeoutException:
            raise APIError(
                "Request timed out. The server may be overloaded.",
                category="timeout",
            ) from None
        except httpx.HTTPStatusError as exc:
            try:
                body = exc.response.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get("error"):
                detail = body["error"]
            else:
                detail = exc.response.text or str(exc)
            raise APIError(
                str(detail), category="http", status_code=exc.response.status_code
            ) from None
        except httpx.HTTPError as exc:
            raise APIError(f"Network error: {exc}", category="network") from None

    # -- health --

    def health_check(self) -> dict:
        return self._request("get", "/").json()

    def check_connection(self) -> tuple[bool, str]:
        """Check if the backend is reachable. Returns (ok, message)."""
        try:
            self.health_check()
            return True, "Connected"
        except APIError as exc:
            return False, exc.message

    # -- transcription --

    def transcribe(
        self,
        user_id: str,
        audio: bytes,
        filename: str = "recording.webm",
        mime_type: str = "audio/webm",
    ) -> dict:
        """Upload audio for transcription. Returns ``{"transcript", "id"}``."""
        return self._request(
            "post",
            "/transcribe",
            headers={USER_HEADER: user_id},
            files={"audio": (filename, audio, mime_type)},
            timeout=300.0,
        ).json()

    # -- history --

    def list_history(self, user_id: str) -> list[dict]:
        return self._request("get", "/history", headers={USER_HEADER: user_id}).json()

    def delete_history(self, user_id: str, transcript_id: str) -> dict:
        return self._request(
            "delete", f"/history/{transcript_id}", headers={USER_HEADER: user_id}
        ).json()


@st.cache_resource
def get_api_client(base_url: str = "http://localhost:5000") -> APIClient:
    """Return a cached APIClient, keyed by base_url.

    Uses Streamlit's ``cache_resource`` to persist the client across reruns.
    The client holds no per-user state, so sharing it between sessions is safe.
    """
    return APIClient(base_url=base_url)
