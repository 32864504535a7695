"""Registration page: form, inline errors, and the pass confirmation dialog."""
import logging
from typing import Any, Dict, Mapping, Optional

import streamlit as st

from holipass.models.form_state import STATUS_IDLE, RegistrationFormState
from holipass.services.record_store import RecordStore, create_record_store
from holipass.services.registration_service import (
    COLLECTION,
    build_payment_link,
    calculate_price,
    submit_registration,
)
from holipass.ui.html_utils import escape, html_block
from holipass.utils.config import get_settings
from holipass.utils.exceptions import DuplicateError, PersistenceError, ValidationError

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Error: Something went wrong. Please try again."

FORM_STATE_KEY = "registration_form_state"

GENDER_OPTIONS = ["", "male", "female"]
GENDER_LABELS = {"": "Select gender", "male": "Male", "female": "Female"}

DIALOG_DECORATOR = getattr(st, "dialog", None) or getattr(st, "experimental_dialog", None)

_store_cache: Optional[RecordStore] = None


def _get_store() -> RecordStore:
    """Create the configured record store once per process."""
    global _store_cache

    if _store_cache is None:
        settings = get_settings()
        _store_cache = create_record_store(settings)
    return _store_cache


def _field_key(field: str) -> str:
    return f"registration_{field}"


def get_form_state() -> RegistrationFormState:
    """Return this session's form state, creating it on first access."""
    if FORM_STATE_KEY not in st.session_state:
        st.session_state[FORM_STATE_KEY] = RegistrationFormState()
    return st.session_state[FORM_STATE_KEY]


def reset_form() -> None:
    """Forget form state and field values."""
    st.session_state[FORM_STATE_KEY] = RegistrationFormState()
    for field in ("firstName", "lastName", "gender", "email", "phone"):
        st.session_state.pop(_field_key(field), None)


def price_caption(gender: Optional[str]) -> str:
    price = calculate_price(gender)
    if price > 0:
        return f"Pass Price - ₹{price}"
    return "Select gender to see price"


def process_submission(
    store: RecordStore,
    form: Mapping[str, Any],
    state: RegistrationFormState,
    collection: str = COLLECTION,
) -> None:
    """
    Submit the form and record the outcome on state.

    Every registration error is recovered here: validation and duplicate
    errors become inline field messages, store failures become the generic
    banner. A submission already in flight or completed is left alone, since
    "submitted" is terminal. Unexpected errors return the form to idle with
    the banner before propagating to the page's error boundary.
    """
    if state.is_submitting or state.is_submitted:
        logger.info(f"Ignoring submission while form is {state.status}")
        return

    state.start_submission()
    try:
        confirmation = submit_registration(store, form, collection=collection)
    except ValidationError as e:
        state.fail(field_errors=e.errors)
    except DuplicateError as e:
        state.fail(field_errors={e.field: e.message})
    except PersistenceError as e:
        logger.error(f"Registration could not be saved: {e}")
        state.fail(global_error=GENERIC_ERROR)
    except Exception:
        state.fail(global_error=GENERIC_ERROR)
        raise
    else:
        state.succeed(confirmation)


def _read_form() -> Dict[str, str]:
    return {
        field: st.session_state.get(_field_key(field), "") or ""
        for field in ("firstName", "lastName", "gender", "email", "phone")
    }


def _field_error(state: RegistrationFormState, field: str) -> None:
    message = state.field_errors.get(field)
    if message:
        st.markdown(
            f"<p class='holi-field-error'>{escape(message)}</p>",
            unsafe_allow_html=True,
        )


def _inject_form_styles() -> None:
    st.markdown(
        html_block(
            """
            <style>
            .holi-field-error {
                color: #ef4444;
                font-size: 14px;
                margin-top: -8px;
            }
            .holi-global-error {
                color: #ef4444;
                text-align: center;
                margin-top: 4px;
            }
            .holi-pass-number {
                font-size: 28px;
                font-weight: 700;
                letter-spacing: 1px;
            }
            </style>
            """
        ),
        unsafe_allow_html=True,
    )


def _render_confirmation_body(state: RegistrationFormState) -> None:
    """Pass number, email and payment link."""
    confirmation = state.confirmation
    if confirmation is None:
        return

    settings = get_settings()
    st.markdown("### 🎉 Registration Successful")
    st.markdown(
        html_block(
            f"""
            <p>Your pass number</p>
            <p class="holi-pass-number">{escape(confirmation.pass_number)}</p>
            <p>Confirmation for {escape(confirmation.email)}</p>
            """
        ),
        unsafe_allow_html=True,
    )
    st.info("Your pass is reserved as unpaid. Complete the payment on WhatsApp to confirm it.")
    st.link_button(
        "Pay on WhatsApp",
        build_payment_link(settings.payment_contact, confirmation),
        use_container_width=True,
        type="primary",
    )

    if st.button("Return to Home", key="registration_dialog_home", use_container_width=True):
        reset_form()
        st.session_state.current_page = "landing"
        st.rerun()


def _render_confirmation(state: RegistrationFormState) -> None:
    if DIALOG_DECORATOR:
        @DIALOG_DECORATOR("Your Holi Pass")
        def _dialog():
            _render_confirmation_body(state)

        _dialog()
    else:
        _render_confirmation_body(state)


def render_registration_page() -> None:
    """Render the registration form and handle submission."""
    _inject_form_styles()
    state = get_form_state()

    st.markdown("## Register for Holi 2025")
    gender = st.session_state.get(_field_key("gender"), "")
    st.caption(price_caption(gender))

    pass_type = st.session_state.get("pass_type")
    if pass_type:
        st.caption(f"Pass type: {pass_type}")

    st.text_input("First Name", key=_field_key("firstName"))
    _field_error(state, "firstName")

    st.text_input("Last Name", key=_field_key("lastName"))
    _field_error(state, "lastName")

    st.selectbox(
        "Gender",
        GENDER_OPTIONS,
        format_func=lambda value: GENDER_LABELS[value],
        key=_field_key("gender"),
    )
    _field_error(state, "gender")

    st.text_input("Email", key=_field_key("email"), placeholder="you@example.com")
    _field_error(state, "email")

    st.text_input("Phone", key=_field_key("phone"), max_chars=10, placeholder="10-digit number")
    _field_error(state, "phone")

    home_col, submit_col = st.columns(2, gap="small")
    with home_col:
        if st.button("Return to Home", key="registration_home", use_container_width=True):
            if state.status != STATUS_IDLE:
                reset_form()
            st.session_state.current_page = "landing"
            st.rerun()

    with submit_col:
        submitted = st.button(
            "Proceed to Payment",
            key="registration_submit",
            type="primary",
            use_container_width=True,
            disabled=state.is_submitting or state.is_submitted,
        )

    if submitted:
        with st.spinner("Submitting your registration..."):
            process_submission(_get_store(), _read_form(), state, get_settings().collection)
        st.rerun()

    if state.global_error:
        st.markdown(
            f"<div class='holi-global-error'><p>{escape(state.global_error)}</p></div>",
            unsafe_allow_html=True,
        )

    if state.is_submitted:
        _render_confirmation(state)
