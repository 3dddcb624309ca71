# ethernote/home.py: list view
"""Streamlit list page: renders :class:`NoteListController` and forwards intents."""
from __future__ import annotations

import streamlit as st

from ethernote.controllers import NoteListController
from ethernote.models import ListSnapshot, NoteSummary
from ethernote.supabase_client import get_store
from ethernote.ui.formatting import describe_error, format_short_date, note_count_label
from ethernote.ui.toast import set_toast
from ethernote.utils.aio import run

LIST_KEY = "en_list_controller"
DETAIL_KEY = "en_detail_controller"
VIEW_KEY = "en_view"
NEEDS_RELOAD_KEY = "en_needs_reload"


def list_controller() -> NoteListController:
    ss = st.session_state
    if LIST_KEY not in ss:
        ss[LIST_KEY] = NoteListController(get_store())
        ss[NEEDS_RELOAD_KEY] = True
    return ss[LIST_KEY]


def open_detail(ctrl) -> None:
    st.session_state[DETAIL_KEY] = ctrl
    st.session_state[VIEW_KEY] = "detail"
    st.rerun()


def render_header(snap: ListSnapshot, ctrl: NoteListController) -> None:
    col_title, col_new = st.columns([4, 1])
    with col_title:
        st.title("Ethernote")
        st.caption(note_count_label(len(snap.summaries)))
    with col_new:
        if st.button(
            "+ New",
            type="primary",
            use_container_width=True,
            disabled=snap.is_creating,
            help="Create new note",
        ):
            created = run(ctrl.create_and_open())
            if created is not None:
                open_detail(created)
            error = ctrl.snapshot().last_error
            if error is not None:
                set_toast(describe_error(error, "create note"), "error")
            st.rerun()


def render_row(summary: NoteSummary, ctrl: NoteListController) -> None:
    with st.container(border=True):
        st.markdown(f"**{summary.title}**")
        st.caption(format_short_date(summary.created_at))
        if st.button("Open", key=f"en_open_{summary.id}"):
            open_detail(run(ctrl.open_note(summary.id)))


def render_empty(snap: ListSnapshot) -> None:
    if snap.last_error is not None:
        st.markdown("### ⚠️ Oops!")
        st.write(describe_error(snap.last_error, "load notes"))
        return
    st.markdown("### 📝 No notes yet")
    st.write("Pull down to refresh or add notes to your database")


def render_home() -> None:
    ctrl = list_controller()
    if st.session_state.pop(NEEDS_RELOAD_KEY, False):
        with st.spinner("Loading notes..."):
            run(ctrl.on_visible())

    snap = ctrl.snapshot()
    render_header(snap, ctrl)

    if st.button("🔄 Refresh", disabled=snap.is_busy):
        with st.spinner("Refreshing..."):
            run(ctrl.refresh())
        st.rerun()

    if not snap.summaries:
        render_empty(snap)
        return

    if snap.last_error is not None:
        st.error(describe_error(snap.last_error, "sync notes"))
    for summary in snap.summaries:
        render_row(summary, ctrl)
