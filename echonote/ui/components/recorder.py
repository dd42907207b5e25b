"""
Uploader and recorder components.

Recorder states: idle -> recording -> idle. While recording, the browser
captures audio through ``st.audio_input``; pressing Stop hands the clip to
the controller, which uploads it through the same path as a chosen file.
"""

import streamlit as st

from echonote.ui.state import AppController, AudioPayload


def render_uploader(controller: AppController) -> None:
    """File picker plus Upload button (disabled while busy)."""
    uploaded = st.file_uploader(
        "Audio file",
        type=["mp3", "wav", "webm", "ogg", "m4a", "flac"],
        key=f"uploader-{st.session_state.uploader_key}",
        disabled=controller.busy,
    )
    if uploaded is not None:
        controller.select_file(
            AudioPayload(
                data=uploaded.getvalue(),
                mime_type=uploaded.type or "application/octet-stream",
                filename=uploaded.name,
            )
        )
    else:
        controller.select_file(None)

    if st.button("Upload", type="primary", disabled=not controller.can_upload):
        with st.spinner("Transcribing…"):
            ok = controller.upload()
        if ok:
            st.session_state.uploader_key += 1
        st.rerun()


def render_recorder(controller: AppController) -> None:
    """Render the recorder for its current state."""
    if controller.recorder.is_recording:
        _render_recording(controller)
    else:
        _render_idle(controller)


def _render_idle(controller: AppController) -> None:
    if st.button("\U0001f399️ Start Recording", disabled=not controller.can_start_recording):
        controller.start_recording()
        st.rerun()


def _render_recording(controller: AppController) -> None:
    st.info("Recording… use the microphone below, then press Stop.")
    audio = st.audio_input("Record audio", key=f"recorder-{st.session_state.recorder_key}")

    if st.button("⏹️ Stop Recording", type="primary"):
        if audio is not None:
            controller.recorder.add_chunk(audio.getvalue())
        st.session_state.recorder_key += 1
        with st.spinner("Transcribing…"):
            controller.stop_recording()
        st.rerun()
