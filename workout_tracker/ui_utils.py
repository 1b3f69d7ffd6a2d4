"""
UI utility functions shared by the Streamlit pages.
"""

import atexit

import streamlit as st

from workout_tracker.app_config import (
    get_api_key,
    get_storage_key,
    get_storage_path,
    load_config,
)
from workout_tracker.assistant_client import AssistantClient
from workout_tracker.chat_session import ChatSession
from workout_tracker.design_system import get_colors, get_empty_state_html
from workout_tracker.storage import PersistenceWriter, open_storage
from workout_tracker.workout_store import WorkoutStore


@st.cache_resource
def get_config():
    return load_config()


def open_workout_store(config):
    """
    WorkoutStore backed by a background persistence writer.

    The writer is closed at interpreter exit so queued writes reach disk.
    """
    storage = open_storage(get_storage_path(config), key=get_storage_key(config))
    writer = PersistenceWriter(storage)
    atexit.register(writer.close)
    return WorkoutStore.open(storage, writer=writer)


@st.cache_resource
def get_workout_store():
    """Process-wide store; every browser session shares it."""
    return open_workout_store(get_config())


def get_chat_session():
    """
    Per-browser-session ChatSession, or None when no API key is configured.
    """
    if 'chat_session' not in st.session_state:
        config = get_config()
        api_key = get_api_key(config)
        if not api_key:
            return None
        assistant = AssistantClient(api_key=api_key, config=config)
        st.session_state.chat_session = ChatSession(assistant, get_workout_store())
    return st.session_state.chat_session


def render_page_header(title, subtitle=None, title_icon=""):
    """
    Render standardized page header with title and optional subtitle.

    Args:
        title: Main page title
        subtitle: Optional subtitle text
        title_icon: Optional emoji/icon before title
    """
    icon_text = f"{title_icon} " if title_icon else ""
    st.markdown(
        f'<div class="main-header">{icon_text}{title}</div>',
        unsafe_allow_html=True
    )
    if subtitle:
        st.markdown(
            f'<div class="sub-header">{subtitle}</div>',
            unsafe_allow_html=True
        )


def empty_state(icon, title, description):
    """
    Render consistent empty state component.

    Args:
        icon: Emoji icon
        title: Empty state title
        description: Empty state description
    """
    colors = get_colors()
    html = get_empty_state_html(icon, title, description, colors)
    st.markdown(html, unsafe_allow_html=True)


def should_show_save_toast(store_revision, seen_revision):
    """True once per committed change; the initial load (revision 0) never toasts."""
    return store_revision > 0 and store_revision != seen_revision


def notify_saved(store):
    """Show the 'changes saved' toast when the store moved since the last render."""
    if 'seen_store_revision' not in st.session_state:
        st.session_state.seen_store_revision = store.revision
        return
    seen = st.session_state.seen_store_revision
    if should_show_save_toast(store.revision, seen):
        st.toast("Changes saved", icon="✅")
    st.session_state.seen_store_revision = store.revision
