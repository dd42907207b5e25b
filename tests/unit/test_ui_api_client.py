"""Unit tests for the Streamlit-side APIClient.

Validates that every history and transcription call carries the caller
identity header, hits the right endpoint, and turns failures into
``APIError`` with the server's ``error`` message.
"""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from echonote.ui.api_client import APIClient, APIError


@pytest.fixture
def client():
    """Create an APIClient with a mocked httpx.Client."""
    with patch("echonote.ui.api_client.httpx.Client") as mock_cls:
        mock_http = MagicMock()
        mock_cls.return_value = mock_http
        api = APIClient(base_url="http://test:5000/")
        api._mock_http = mock_http  # expose for assertions
        yield api


def _status_error(status: int, **kwargs) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "http://test:5000/history")
    response = httpx.Response(status, request=request, **kwargs)
    return httpx.HTTPStatusError("error", request=request, response=response)


class TestTranscribe:
    def test_sends_audio_field_and_identity(self, client):
        resp = MagicMock()
        resp.json.return_value = {"transcript": "hello", "id": "abc"}
        client._mock_http.post.return_value = resp

        result = client.transcribe("user-a", b"RIFF", filename="clip.wav", mime_type="audio/wav")

        client._mock_http.post.assert_called_once_with(
            "/transcribe",
            headers={"x-user-id": "user-a"},
            files={"audio": ("clip.wav", b"RIFF", "audio/wav")},
            timeout=300.0,
        )
        resp.raise_for_status.assert_called_once()
        assert result == {"transcript": "hello", "id": "abc"}

    def test_defaults_to_webm(self, client):
        client._mock_http.post.return_value = MagicMock()
        client.transcribe("user-a", b"data")
        files = client._mock_http.post.call_args[1]["files"]
        assert files["audio"] == ("recording.webm", b"data", "audio/webm")


class TestHistory:
    def test_list_sends_identity(self, client):
        resp = MagicMock()
        resp.json.return_value = [{"id": "1", "text": "a"}]
        client._mock_http.get.return_value = resp

        result = client.list_history("user-a")

        client._mock_http.get.assert_called_once_with("/history", headers={"x-user-id": "user-a"})
        assert result == [{"id": "1", "text": "a"}]

    def test_delete_targets_record(self, client):
        resp = MagicMock()
        resp.json.return_value = {"success": True}
        client._mock_http.delete.return_value = resp

        result = client.delete_history("user-a", "abc123")

        client._mock_http.delete.assert_called_once_with(
            "/history/abc123", headers={"x-user-id": "user-a"}
        )
        assert result == {"success": True}


class TestErrors:
    def test_server_error_message_is_surfaced(self, client):
        resp = MagicMock()
        resp.raise_for_status.side_effect = _status_error(404, json={"error": "Transcript not found"})
        client._mock_http.delete.return_value = resp

        with pytest.raises(APIError) as exc_info:
            client.delete_history("user-a", "missing")

        assert exc_info.value.message == "Transcript not found"
        assert exc_info.value.category == "http"
        assert exc_info.value.status_code == 404

    def test_non_json_error_body_falls_back_to_text(self, client):
        resp = MagicMock()
        resp.raise_for_status.side_effect = _status_error(502, text="Bad Gateway")
        client._mock_http.get.return_value = resp

        with pytest.raises(APIError) as exc_info:
            client.list_history("user-a")

        assert exc_info.value.message == "Bad Gateway"

    def test_connection_error(self, client):
        client._mock_http.get.side_effect = httpx.ConnectError("refused")
        with pytest.raises(APIError) as exc_info:
            client.list_history("user-a")
        assert exc_info.value.category == "connection"

    def test_timeout(self, client):
        client._mock_http.post.side_effect = httpx.ReadTimeout("slow")
        with pytest.raises(APIError) as exc_info:
            client.transcribe("user-a", b"data")
        assert exc_info.value.category == "timeout"

    def test_check_connection_reports_failure(self, client):
        client._mock_http.get.side_effect = httpx.ConnectError("refused")
        ok, message = client.check_connection()
        assert ok is False
        assert "not running" in message


def test_base_url_trailing_slash_stripped():
    with patch("echonote.ui.api_client.httpx.Client") as mock_cls:
        APIClient(base_url="http://test:5000/")
    mock_cls.assert_called_once_with(base_url="http://test:5000", timeout=30.0)
