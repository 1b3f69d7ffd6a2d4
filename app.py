#!/usr/bin/env python3
"""
Workout Tracker - Streamlit Web Interface
Main entry point for the web application.
"""

import streamlit as st
import os
import sys
import importlib

# Ensure pages directory is in Python path
sys.path.insert(0, os.path.dirname(__file__))

from workout_tracker.app_config import configure_logging
from workout_tracker.ui_utils import get_config, get_workout_store, notify_saved

# Only reload modules in development mode (set DEV_MODE=1 in environment)
DEV_MODE = os.environ.get('DEV_MODE', '0') == '1'

# Configure the page
st.set_page_config(
    page_title="💪 Workout Tracker",
    page_icon="💪",
    layout="centered",
    initial_sidebar_state="expanded"
)

try:
    import pages

    workouts = importlib.import_module('pages.workouts')
    chat = importlib.import_module('pages.chat')

    # Reload modules only in dev mode to pick up code changes
    if DEV_MODE:
        importlib.reload(workouts)
        importlib.reload(chat)
except ImportError as e:
    st.error(f"Critical error loading pages: {e}")
    st.code(f"Python path: {sys.path}")
    st.stop()

config = get_config()
configure_logging(config)

st.markdown("""
    <style>
    .main-header {
        font-size: 2.5rem;
        font-weight: 700;
        margin-bottom: 0.5rem;
    }

    .sub-header {
        font-size: 1.125rem;
        color: #64748B;
        margin-bottom: 2rem;
    }

    @media (max-width: 768px) {
        .main-header {
            font-size: 1.75rem;
        }

        .sub-header {
            font-size: 1rem;
        }

        /* Full width buttons on mobile */
        .stButton button {
            width: 100% !important;
        }

        .stTextInput input {
            font-size: 16px !important; /* Prevents zoom on iOS */
        }
    }
    </style>
""", unsafe_allow_html=True)

# Initialize session state
if 'current_page' not in st.session_state:
    st.session_state.current_page = 'workouts'
if 'dark_mode' not in st.session_state:
    st.session_state.dark_mode = False

# Sidebar navigation
with st.sidebar:
    st.markdown("# 💪 Workout Tracker")
    st.markdown("---")

    if st.button("📋 My Workouts", use_container_width=True, key="nav_workouts",
                 type="primary" if st.session_state.current_page == 'workouts' else "secondary"):
        st.session_state.current_page = 'workouts'
        st.rerun()

    if st.button("💬 AI Chat", use_container_width=True, key="nav_chat",
                 type="primary" if st.session_state.current_page == 'chat' else "secondary"):
        st.session_state.current_page = 'chat'
        st.rerun()

    st.markdown("---")
    st.session_state.dark_mode = st.toggle("🌙 Dark mode", value=st.session_state.dark_mode)

    with st.expander("💡 Quick Tips"):
        st.markdown("""
        **Workouts:**
        - Group exercises by training day
        - Use "Progress" to log today's weight
        - Every change is saved automatically

        **AI Chat:**
        - "Create a back and biceps workout"
        - "How do I do my Leg Day?"
        - Video links open in an embedded player
        """)

store = get_workout_store()
notify_saved(store)

# Main content area - route to different pages
if st.session_state.current_page == 'workouts':
    workouts.show()
elif st.session_state.current_page == 'chat':
    chat.show()
