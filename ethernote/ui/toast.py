"""Toasts queued across ``st.rerun()``."""
from __future__ import annotations

import streamlit as st

TOAST_KEY = "en_toast"
TOAST_TYPES = {"success": "✅", "warning": "⚠️", "error": "❌"}


def set_toast(message: str, kind: str = "success") -> None:
    """Queue a toast for the next render tick."""
    st.session_state[TOAST_KEY] = {"type": kind, "msg": message}


def pop_toast() -> None:
    """Display queued toast, if any."""
    toast = st.session_state.get(TOAST_KEY, {})
    if toast.get("msg") and toast.get("type"):
        icon = TOAST_TYPES.get(toast["type"], "ℹ️")
        st.toast(toast["msg"], icon=icon)
    st.session_state[TOAST_KEY] = {"type": None, "msg": ""}
