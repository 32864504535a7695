"""Landing page for the Holi 2025 celebration."""
import random
from typing import Optional

import streamlit as st

from holipass.ui.html_utils import html_block
from holipass.utils.date_utils import format_event_date

EVENT_TITLE = "Holi 2025 Celebration"
EVENT_TAGLINE = "Join us for the most colorful event of the year!"
EVENT_DATE = "2025-03-11"
EVENT_VENUE = "Holi Square, Colorful City"

FESTIVAL_COLORS = ["#FF5F6D", "#FFC371", "#38ef7d", "#11998e", "#FC466B", "#3F5EFB"]


def pick_background_color(rng: Optional[random.Random] = None) -> str:
    """Pick one festival color at random."""
    return (rng or random).choice(FESTIVAL_COLORS)


def build_landing_html() -> str:
    """Hero block with title, tagline, date and venue."""
    return html_block(
        f"""
        <div class="holi-hero">
            <h1 class="holi-title">{EVENT_TITLE}</h1>
            <p class="holi-tagline">{EVENT_TAGLINE}</p>
        </div>
        <div class="holi-details">
            <p class="holi-callout">Don't miss out on this vibrant celebration!</p>
            <p>Date: {format_event_date(EVENT_DATE)}</p>
            <p>Venue: {EVENT_VENUE}</p>
        </div>
        """
    )


def _inject_landing_styles(bg_color: str) -> None:
    st.markdown(
        html_block(
            f"""
            <style>
            .stApp {{
                background: {bg_color};
                transition: background-color 1s ease-in-out;
            }}
            .holi-hero, .holi-details {{
                text-align: center;
                color: #ffffff;
            }}
            .holi-title {{
                font-size: 56px;
                font-weight: 800;
                color: #ffffff;
                margin-bottom: 16px;
            }}
            .holi-tagline {{
                font-size: 22px;
                margin-bottom: 32px;
            }}
            .holi-callout {{
                font-size: 20px;
                margin-top: 32px;
            }}
            </style>
            """
        ),
        unsafe_allow_html=True,
    )


def render_landing() -> None:
    """Render the landing page with the Apply for Pass button."""
    if "landing_bg_color" not in st.session_state:
        st.session_state.landing_bg_color = pick_background_color()

    _inject_landing_styles(st.session_state.landing_bg_color)
    st.markdown(build_landing_html(), unsafe_allow_html=True)

    _, center, _ = st.columns([1, 1, 1])
    with center:
        if st.button("Apply for Pass", type="primary", use_container_width=True, key="landing_apply"):
            st.session_state.current_page = "register"
            st.rerun()
