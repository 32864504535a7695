"""
Holi 2025 pass registration app
Run with: streamlit run app.py
"""
import logging
import streamlit as st

from holipass.ui.landing import render_landing
from holipass.ui.registration_page import render_registration_page, reset_form
from holipass.utils.config import configure_logging, get_settings

logger = logging.getLogger(__name__)


st.set_page_config(
    page_title="Holi 2025 Celebration",
    page_icon="🎨",
    layout="centered",
    initial_sidebar_state="collapsed"
)


def initialize_session_state():
    """Set session state defaults."""
    if "current_page" not in st.session_state:
        st.session_state.current_page = "landing"

    if "pass_type" not in st.session_state:
        st.session_state.pass_type = None

    # ?pass=<type> links straight to the registration form
    if "url_params_processed" not in st.session_state:
        query_params = st.query_params
        if "pass" in query_params:
            st.session_state.pass_type = query_params["pass"]
            st.session_state.current_page = "register"
        st.session_state.url_params_processed = True


def apply_custom_css():
    """Hide Streamlit chrome and style buttons."""
    st.markdown("""
        <style>
        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}
        header, [data-testid="stHeader"] {
            visibility: hidden;
            height: 0;
        }

        .stButton > button {
            border-radius: 12px;
            font-weight: 600;
            transition: transform 0.3s;
        }

        .stButton > button:hover {
            transform: scale(1.05);
        }

        .stButton > button[kind="primary"] {
            background: linear-gradient(90deg, #a855f7 0%, #ec4899 100%);
            color: white;
            border: none;
        }
        </style>
    """, unsafe_allow_html=True)


def render_current_page():
    """Render the page selected in session state."""
    try:
        if st.session_state.current_page == "landing":
            render_landing()

        elif st.session_state.current_page == "register":
            render_registration_page()

        else:
            st.error(f"Unknown page: {st.session_state.current_page}")
            if st.button("Return to Home"):
                st.session_state.current_page = "landing"
                st.rerun()

    except Exception as e:
        logger.exception("Unhandled exception while rendering page")
        st.error("Something went wrong. Please try again later.")

        with st.expander("🔍 Error details"):
            st.code(str(e))

        if st.button("Return to Home", key="error_home"):
            reset_form()
            st.session_state.current_page = "landing"
            st.rerun()


def main():
    """App entry point."""
    configure_logging(get_settings().log_level)
    try:
        initialize_session_state()
        apply_custom_css()
        render_current_page()
    except Exception as e:
        logger.exception("Unhandled exception during app execution")
        st.error("The app hit an error, please refresh the page")
        st.code(str(e))

        if st.button("🔄 Refresh"):
            st.session_state.clear()
            st.rerun()


if __name__ == "__main__":
    main()
