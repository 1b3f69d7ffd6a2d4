"""
AI Chat page - Talk to the training assistant
"""

import streamlit as st
import streamlit.components.v1 as components

from workout_tracker.ui_utils import render_page_header, get_chat_session
from workout_tracker.design_system import get_colors, get_video_player_html
from workout_tracker.message_links import Hyperlink, VideoLink, embed_url, split_message_links
from workout_tracker.chat_session import USER_ROLE


PENDING_PROMPT_KEY = "pending_prompt"


def should_send_message(prompt, in_flight):
    """Only send non-blank text while no other request is pending."""
    return bool(prompt and prompt.strip()) and not in_flight


def queue_prompt(state, prompt, in_flight):
    """
    Stash a prompt to be sent on the next run.

    The run that sends it renders the chat input disabled first, so nothing
    can be typed while the request is out. Returns True when queued.
    """
    if state.get(PENDING_PROMPT_KEY) or not should_send_message(prompt, in_flight):
        return False
    state[PENDING_PROMPT_KEY] = prompt
    return True


def has_pending_prompt(state):
    return bool(state.get(PENDING_PROMPT_KEY))


def take_pending_prompt(state):
    return state.pop(PENDING_PROMPT_KEY, None)


def build_message_blocks(text):
    """
    Group message segments into renderable blocks.

    Text and plain links are merged into ("markdown", str) blocks; each video
    link becomes its own ("video", video_id) block.
    """
    blocks = []
    buffer = ""
    for segment in split_message_links(text):
        if isinstance(segment, VideoLink):
            if buffer:
                blocks.append(("markdown", buffer))
                buffer = ""
            blocks.append(("video", segment.video_id))
        elif isinstance(segment, Hyperlink):
            buffer += f"[{segment.url}]({segment.url})"
        else:
            buffer += segment.text

    if buffer:
        blocks.append(("markdown", buffer))
    return blocks


def _render_message(index, message, copyable_indexes):
    role = "user" if message["role"] == USER_ROLE else "assistant"
    avatar = None if role == "user" else "🅰️"
    with st.chat_message(role, avatar=avatar):
        for block_number, (kind, value) in enumerate(build_message_blocks(message["text"])):
            if kind == "video":
                if st.button("▶️ Watch Video", key=f"play_{index}_{block_number}"):
                    st.session_state.playing_video_id = value
                    st.rerun()
            else:
                st.markdown(value)

        if index in copyable_indexes:
            with st.expander("📋 Copy text"):
                st.code(message["text"], language=None)


def _render_video_player():
    video_id = st.session_state.get("playing_video_id")
    if not video_id:
        return

    colors = get_colors()
    col1, col2 = st.columns([6, 1])
    with col1:
        st.markdown("#### 🎬 Video Tutorial")
    with col2:
        if st.button("✖ Close", key="close_video", use_container_width=True):
            st.session_state.playing_video_id = None
            st.rerun()
    components.html(get_video_player_html(embed_url(video_id), colors), height=420)


def show():
    """Render the chat page"""

    render_page_header("AI Chat", "Create workouts, learn exercises and ask anything about training", "💬")

    session = get_chat_session()
    if session is None:
        st.error("⚠️ Assistant API key not configured. Add it to your .env file (see .env.example).")
        return

    _render_video_player()

    copyable_indexes = {index for index, _ in session.copyable_messages()}
    for index, message in enumerate(session.messages):
        _render_message(index, message, copyable_indexes)

    pending = has_pending_prompt(st.session_state)
    prompt = st.chat_input(
        "Talk to your AI personal trainer...",
        disabled=pending or session.is_busy(),
    )
    if not pending:
        if queue_prompt(st.session_state, prompt, session.is_busy()):
            st.rerun()
        return

    prompt = take_pending_prompt(st.session_state)

    with st.chat_message("user"):
        st.markdown(prompt)
    with st.chat_message("assistant", avatar="🅰️"):
        with st.spinner("Thinking..."):
            result = session.send(prompt)

    if result is None:
        st.info("Please wait for the current answer before sending another message.")
        return

    if result.switch_to_workouts:
        st.session_state.current_page = "workouts"
    st.rerun()
