"""Transcript history list with per-item delete."""

from datetime import datetime

import streamlit as st

from echonote.ui.state import AppController


def _format_timestamp(value: str | None) -> str:
    if not value:
        return ""
    try:
        return datetime.fromisoformat(value).astimezone().strftime("%Y-%m-%d %H:%M:%S")
    except ValueError:
        return value


@st.dialog("Delete transcript")
def _confirm_delete(controller: AppController, transcript_id: str) -> None:
    st.write("Delete this transcription?")
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Delete", type="primary", use_container_width=True):
            controller.delete(transcript_id)
            st.rerun()
    with col2:
        if st.button("Cancel", use_container_width=True):
            st.rerun()


def render_history(controller: AppController) -> None:
    st.subheader("History")
    if not controller.history:
        st.caption("No transcripts yet.")
        return

    for item in controller.history:
        with st.container(border=True):
            text_col, action_col = st.columns([6, 1])
            with text_col:
                st.write(item.get("text", ""))
                st.caption(_format_timestamp(item.get("createdAt")))
            with action_col:
                if st.button("Delete", key=f"delete-{item['id']}"):
                    _confirm_delete(controller, item["id"])
