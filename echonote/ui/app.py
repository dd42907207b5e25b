"""
EchoNote Streamlit UI: main entry point.

Run with: ``streamlit run echonote/ui/app.py``
"""

# ---------------------------------------------------------------------------
# Ensure project root is on sys.path so ``from echonote.xxx`` imports work.
# Streamlit replaces sys.path[0] with the script directory (echonote/ui/),
# which removes the project root needed for absolute imports.
# ---------------------------------------------------------------------------
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

from echonote.core.config import get_settings  # noqa: E402
from echonote.ui.api_client import get_api_client  # noqa: E402
from echonote.ui.auth import IdentityProvider  # noqa: E402
from echonote.ui.components.auth_form import render_auth_form  # noqa: E402
from echonote.ui.components.history import render_history  # noqa: E402
from echonote.ui.components.recorder import render_recorder, render_uploader  # noqa: E402
from echonote.ui.state import AppController, AuthPhase  # noqa: E402

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="EchoNote",
    page_icon="\U0001f399️",
    layout="centered",
)

# ---------------------------------------------------------------------------
# Session state defaults
# ---------------------------------------------------------------------------
_DEFAULTS = {
    "uploader_key": 0,
    "recorder_key": 0,
}

for key, value in _DEFAULTS.items():
    if key not in st.session_state:
        st.session_state[key] = value

if "controller" not in st.session_state:
    _settings = get_settings()
    # The identity provider holds this user's session, so it lives in
    # session_state rather than a shared cache.
    st.session_state.controller = AppController(
        auth=IdentityProvider(_settings.auth_url, _settings.auth_anon_key),
        api=get_api_client(_settings.api_base_url),
    )

controller: AppController = st.session_state.controller

if controller.phase is AuthPhase.loading:
    with st.spinner("Loading…"):
        controller.bootstrap()

# Notices auto-dismiss: each is shown once as a toast.
_notice = controller.consume_notice()
if _notice is not None:
    st.toast(_notice.message, icon="⚠️" if _notice.level == "error" else "ℹ️")

# ---------------------------------------------------------------------------
# Screens
# ---------------------------------------------------------------------------
if controller.phase is AuthPhase.unauthenticated:
    render_auth_form(controller)
    st.stop()

header_col, logout_col = st.columns([5, 1])
with header_col:
    st.title("\U0001f399️ Speech-to-Text")
    if controller.user is not None and controller.user.email:
        st.caption(controller.user.email)
with logout_col:
    if st.button("Logout"):
        controller.sign_out()
        st.rerun()

with st.container(border=True):
    render_uploader(controller)
    st.divider()
    render_recorder(controller)

if controller.transcript:
    st.subheader("Latest Transcript")
    st.write(controller.transcript)

render_history(controller)
