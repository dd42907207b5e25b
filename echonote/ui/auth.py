"""
Identity provider client.

Talks to a GoTrue-compatible auth REST API (the ``/auth/v1`` surface) with
the project's public anon key. Keeps the current session in memory and
notifies subscribers whenever it changes, which is what drives the UI
between the auth screen and the main screen.

One instance belongs to one browser session; never share it across users.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

import httpx

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Sign-in, sign-up or sign-out failed; ``message`` is safe to show."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthEvent(StrEnum):
    """Kinds of session change delivered to listeners."""

    signed_in = "SIGNED_IN"
    signed_out = "SIGNED_OUT"


@dataclass(frozen=True)
class AuthUser:
    id: str
    email: str | None = None


@dataclass(frozen=True)
class AuthSession:
    access_token: str
    user: AuthUser
    refresh_token: str | None = None


AuthListener = Callable[[AuthEvent, AuthSession | None], None]


def _parse_user(data: dict) -> AuthUser:
    return AuthUser(id=str(data["id"]), email=data.get("email"))


def _parse_session(data: dict) -> AuthSession | None:
    """Build a session from a token/signup response, or ``None`` if it has no token."""
    token = data.get("access_token")
    user = data.get("user")
    if not token or not isinstance(user, dict):
        return None
    return AuthSession(
        access_token=token,
        user=_parse_user(user),
        refresh_token=data.get("refresh_token"),
    )


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"Authentication failed (HTTP {resp.status_code})"
    if isinstance(body, dict):
        for key in ("msg", "error_description", "message", "error"):
            if body.get(key):
                return str(body[key])
    return f"Authentication failed (HTTP {resp.status_code})"


class IdentityProvider:
    """Session-holding client for the identity provider.

    Args:
        base_url: Identity provider base URL (the part before ``/auth/v1``).
        anon_key: Public API key sent as the ``apikey`` header.
        client: Pre-built ``httpx.Client`` (tests inject a mock transport).
    """

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._anon_key = anon_key
        self._client = client or httpx.Client(timeout=30.0)
        self._session: AuthSession | None = None
        self._listeners: list[AuthListener] = []

    # -- session state --

    def get_session(self) -> AuthSession | None:
        return self._session

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        """Subscribe to session changes. Returns a function that unsubscribes."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_session(self, event: AuthEvent, session: AuthSession | None) -> None:
        self._session = session
        for listener in list(self._listeners):
            listener(event, session)

    # -- HTTP --

    def _post(self, path: str, json: dict | None = None, **kwargs) -> dict:
        headers = {"apikey": self._anon_key, **kwargs.pop("headers", {})}
        try:
            resp = self._client.post(
                f"{self._base_url}/auth/v1{path}", json=json, headers=headers, **kwargs
            )
        except httpx.HTTPError as exc:
            logger.warning("Identity provider unreachable: %s", exc)
            raise AuthError("Authentication service is unreachable") from exc
        if not resp.is_success:
            raise AuthError(_error_message(resp))
        if not resp.content:
            return {}
        try:
            body = resp.json()
        except ValueError as exc:
            raise AuthError("Authentication service returned an invalid response") from exc
        return body if isinstance(body, dict) else {}

    @staticmethod
    def _require_credentials(email: str, password: str) -> None:
        if not email or not password:
            raise AuthError("Email and password are required")

    # -- actions --

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange e-mail and password for a session."""
        self._require_credentials(email, password)
        data = self._post(
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        session = _parse_session(data)
        if session is None:
            raise AuthError("Authentication service returned no session")
        logger.info("Signed in user %s", session.user.id)
        self._set_session(AuthEvent.signed_in, session)
        return session

    def sign_up(self, email: str, password: str) -> AuthSession | None:
        """Register a new account.

        Returns:
            The new session when the provider signs the user in immediately,
            or ``None`` when e-mail confirmation is still pending.
        """
        self._require_credentials(email, password)
        data = self._post("/signup", json={"email": email, "password": password})
        session = _parse_session(data)
        if session is not None:
            self._set_session(AuthEvent.signed_in, session)
        return session

    def sign_out(self) -> None:
        """End the current session.

        The local session is always cleared and listeners notified; a failed
        remote revocation is re-raised afterwards as :class:`AuthError`.
        """
        session = self._session
        if session is None:
            return
        error: AuthError | None = None
        try:
            self._post("/logout", headers={"Authorization": f"Bearer {session.access_token}"})
        except AuthError as exc:
            logger.warning("Remote sign-out failed: %s", exc.message)
            error = exc
        self._set_session(AuthEvent.signed_out, None)
        if error is not None:
            raise error

    def close(self) -> None:
        self._client.close()
