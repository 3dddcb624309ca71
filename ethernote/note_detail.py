# ethernote/note_detail.py: detail / edit view
"""Streamlit detail page: renders :class:`NoteLifecycleController` state.

UI concerns only. Every change of note state goes through the controller;
this module only decides which widgets to draw for the current mode.
"""
from __future__ import annotations

import streamlit as st

from ethernote.controllers import NoteLifecycleController
from ethernote.errors import ValidationError
from ethernote.home import DETAIL_KEY, NEEDS_RELOAD_KEY, VIEW_KEY
from ethernote.models import Mode, NoteSnapshot
from ethernote.ui.formatting import content_or_placeholder, describe_error, format_long_date
from ethernote.ui.toast import set_toast
from ethernote.utils.aio import run

CONFIRM_DELETE_KEY = "en_confirm_delete"
EDIT_ROUND_KEY = "en_edit_round"
DELETE_MESSAGE = "Are you sure you want to delete this note? This action cannot be undone."


def go_back(ctrl: NoteLifecycleController) -> None:
    """Leave the detail view; the list re-fetches when it becomes visible."""
    if not ctrl.is_closed:
        ctrl.close()
    ss = st.session_state
    ss.pop(DETAIL_KEY, None)
    ss.pop(CONFIRM_DELETE_KEY, None)
    ss[VIEW_KEY] = "home"
    ss[NEEDS_RELOAD_KEY] = True
    st.rerun()


def _next_edit_round() -> None:
    # New widget keys so inputs pick up the controller's working copy.
    st.session_state[EDIT_ROUND_KEY] = st.session_state.get(EDIT_ROUND_KEY, 0) + 1


def render_load_error(snap: NoteSnapshot, ctrl: NoteLifecycleController) -> None:
    st.markdown("### ⚠️ Oops!")
    st.write(describe_error(snap.last_error, "load note"))
    if st.button("Go Back"):
        go_back(ctrl)


def render_viewing(snap: NoteSnapshot, ctrl: NoteLifecycleController) -> None:
    col_back, col_edit, col_delete = st.columns([3, 1, 1])
    with col_back:
        if st.button("← Back", disabled=snap.is_busy):
            go_back(ctrl)
    with col_edit:
        if st.button("✏️", help="Edit note", disabled=snap.is_busy):
            ctrl.begin_edit()
            _next_edit_round()
            st.rerun()
    with col_delete:
        if st.button("🗑️", help="Delete note", disabled=snap.is_busy):
            st.session_state[CONFIRM_DELETE_KEY] = True

    if st.session_state.get(CONFIRM_DELETE_KEY):
        render_delete_confirm(ctrl)

    note = snap.note
    st.title(note.title if note else "")
    st.write(content_or_placeholder(note.content if note else ""))
    if note and note.created_at:
        st.caption(f"Created: {format_long_date(note.created_at)}")


def render_delete_confirm(ctrl: NoteLifecycleController) -> None:
    st.warning(DELETE_MESSAGE)
    col_ok, col_cancel = st.columns(2)
    confirmed = col_ok.button("Delete", type="primary", key="en_delete_ok")
    cancelled = col_cancel.button("Cancel", key="en_delete_cancel")
    if cancelled:
        st.session_state[CONFIRM_DELETE_KEY] = False
        st.rerun()
    if confirmed:
        st.session_state[CONFIRM_DELETE_KEY] = False
        if run(ctrl.delete()):
            go_back(ctrl)
        set_toast(describe_error(ctrl.snapshot().last_error, "delete note"), "error")
        st.rerun()


def render_editing(snap: NoteSnapshot, ctrl: NoteLifecycleController) -> None:
    busy = snap.is_busy
    col_back, col_cancel, col_save = st.columns([3, 1, 1])
    with col_back:
        if st.button("← Back", disabled=busy):
            go_back(ctrl)
    with col_cancel:
        if st.button("Cancel", disabled=busy):
            ctrl.cancel_edit()
            _next_edit_round()
            st.rerun()

    edit_round = st.session_state.get(EDIT_ROUND_KEY, 0)
    title = st.text_input(
        "Title",
        value=snap.title or "",
        placeholder="Enter note title",
        key=f"en_title_{edit_round}",
        disabled=busy,
    )
    content = st.text_area(
        "Content",
        value=snap.content or "",
        placeholder="Enter note content",
        height=240,
        key=f"en_content_{edit_round}",
        disabled=busy,
    )
    if title != snap.title:
        ctrl.update_title(title)
    if content != snap.content:
        ctrl.update_content(content)

    with col_save:
        if st.button("Save", type="primary", disabled=busy):
            if run(ctrl.save()):
                set_toast("Note saved successfully")
                _next_edit_round()
            else:
                error = ctrl.snapshot().last_error
                kind = "warning" if isinstance(error, ValidationError) else "error"
                set_toast(describe_error(error, "save note"), kind)
            st.rerun()

    if st.button("🗑️ Delete", disabled=busy):
        st.session_state[CONFIRM_DELETE_KEY] = True
    if st.session_state.get(CONFIRM_DELETE_KEY):
        render_delete_confirm(ctrl)


def render_detail() -> None:
    ctrl: NoteLifecycleController | None = st.session_state.get(DETAIL_KEY)
    if ctrl is None:
        st.session_state[VIEW_KEY] = "home"
        st.rerun()
        return

    snap = ctrl.snapshot()
    if snap.mode is Mode.CLOSED:
        go_back(ctrl)
    elif snap.mode is Mode.LOADING:
        st.info("Loading note...")
    elif snap.mode is Mode.LOAD_ERROR:
        render_load_error(snap, ctrl)
    elif snap.mode is Mode.EDITING or snap.mode is Mode.SAVING:
        render_editing(snap, ctrl)
    else:
        render_viewing(snap, ctrl)
