"""Sign-in / sign-up form shown while unauthenticated."""

import streamlit as st

from echonote.ui.state import AppController


def render_auth_form(controller: AppController) -> None:
    """Render the credential form and dispatch sign-in / sign-up."""
    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.title("\U0001f399️ Speech-to-Text")
        with st.form("auth_form"):
            email = st.text_input("Email", placeholder="you@example.com")
            password = st.text_input("Password", type="password")
            sign_in = st.form_submit_button("Sign In", type="primary", use_container_width=True)
            sign_up = st.form_submit_button("Sign Up", use_container_width=True)

    if sign_in:
        controller.sign_in(email.strip(), password)
        st.rerun()
    elif sign_up:
        controller.sign_up(email.strip(), password)
        st.rerun()
