# file: ethernote/app.py
"""Streamlit entry point: switches between the list and the detail view."""
from __future__ import annotations

import logging

import streamlit as st

from ethernote.home import VIEW_KEY, render_home
from ethernote.note_detail import render_detail
from ethernote.ui.toast import pop_toast


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    st.set_page_config(page_title="Ethernote", page_icon="📝", layout="centered")
    st.session_state.setdefault(VIEW_KEY, "home")

    pop_toast()
    if st.session_state[VIEW_KEY] == "detail":
        render_detail()
    else:
        render_home()


main()
