"""
Design system constants and reusable component functions.
Slate palette with a cyan accent, mobile-first.
"""

import streamlit as st
import html

# Color tokens
COLORS = {
    'accent': '#06B6D4',
    'background': '#F8FAFC',
    'surface': '#FFFFFF',
    'text_primary': '#0F172A',
    'text_secondary': '#64748B',
    'border_medium': '#CBD5E1',
    'border_light': '#E2E8F0',
}

# Dark mode colors
COLORS_DARK = {
    'accent': '#22D3EE',
    'background': '#0F172A',
    'surface': '#1E293B',
    'text_primary': '#F1F5F9',
    'text_secondary': '#94A3B8',
    'border_medium': '#334155',
    'border_light': '#475569',
}


def get_colors():
    """Get current color scheme based on dark mode setting"""
    dark_mode = st.session_state.get('dark_mode', False)
    return COLORS_DARK if dark_mode else COLORS


def get_empty_state_html(icon, title, description, color_scheme=None):
    """Consistent empty state component"""
    if color_scheme is None:
        color_scheme = get_colors()

    icon_block = ""
    if icon:
        icon_block = f'<div style="font-size: 3rem; margin-bottom: 1rem;">{html.escape(icon)}</div>'

    return f"""
    <div style="
        text-align: center;
        padding: 3rem 2rem;
        background: {color_scheme['surface']};
        border: 1px solid {color_scheme['border_medium']};
        border-radius: 16px;
        margin: 2rem 0;
    ">
        {icon_block}
        <div style="font-size: 1.25rem; font-weight: 600; margin-bottom: 0.5rem; color: {color_scheme['text_primary']};">{html.escape(title)}</div>
        <div style="color: {color_scheme['text_secondary']}; line-height: 1.5;">{html.escape(description)}</div>
    </div>
    """.strip()


def get_exercise_summary_html(name, sets, reps, weight, color_scheme=None):
    """One-line exercise card: name, sets x reps and current target weight."""
    if color_scheme is None:
        color_scheme = get_colors()

    safe_name = html.escape(str(name))
    safe_sets = html.escape(str(sets))
    safe_reps = html.escape(str(reps))
    safe_weight = html.escape(str(weight or "0"))

    return f"""<div class="exercise-card" style="
        display: flex;
        justify-content: space-between;
        align-items: center;
        padding: 0.6rem 0.75rem;
        background: {color_scheme['surface']};
        border: 1px solid {color_scheme['border_light']};
        border-radius: 8px;
    ">
        <div>
            <div style="font-weight: 600; color: {color_scheme['text_primary']};">{safe_name}</div>
            <div style="font-size: 0.85rem; color: {color_scheme['text_secondary']};">{safe_sets} sets x {safe_reps} reps</div>
        </div>
        <div style="font-weight: 700; font-size: 1.1rem; color: {color_scheme['accent']};">{safe_weight} KG</div>
    </div>""".strip()


def get_history_row_html(date_label, weight, is_latest=False, color_scheme=None):
    """Weight history row; the newest entry gets an accent border."""
    if color_scheme is None:
        color_scheme = get_colors()

    border_left = f"4px solid {color_scheme['accent']}" if is_latest else "4px solid transparent"
    row_class = "history-row latest" if is_latest else "history-row"

    return f"""<div class="{row_class}" style="
        display: flex;
        justify-content: space-between;
        padding: 0.5rem 0.75rem;
        margin-bottom: 0.35rem;
        border-radius: 6px;
        border-left: {border_left};
        background: {color_scheme['background']};
    ">
        <span style="color: {color_scheme['text_secondary']}; font-weight: 500;">{html.escape(str(date_label))}</span>
        <span style="font-weight: 700; color: {color_scheme['text_primary']};">{html.escape(str(weight))} KG</span>
    </div>""".strip()


def get_video_player_html(embed_src, color_scheme=None):
    """Embedded YouTube player frame."""
    if color_scheme is None:
        color_scheme = get_colors()

    return f"""<div class="video-player" style="
        position: relative;
        width: 100%;
        aspect-ratio: 16 / 9;
        background: #000;
        border: 1px solid {color_scheme['border_medium']};
        border-radius: 10px;
        overflow: hidden;
    ">
        <iframe src="{html.escape(embed_src, quote=True)}" title="YouTube video player"
            style="width: 100%; height: 100%; border: 0;"
            allow="accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture"
            allowfullscreen></iframe>
    </div>""".strip()
