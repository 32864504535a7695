"""Tests for registration page helpers."""
from unittest.mock import MagicMock

import pytest

from holipass.models.form_state import RegistrationFormState
from holipass.ui.registration_page import (
    GENERIC_ERROR,
    price_caption,
    process_submission,
)


class TestPriceCaption:
    """Price shown above the form."""

    @pytest.mark.parametrize("gender,expected", [
        ("male", "Pass Price - ₹599"),
        ("female", "Pass Price - ₹499"),
        ("", "Select gender to see price"),
        (None, "Select gender to see price"),
    ])
    def test_caption(self, gender, expected):
        assert price_caption(gender) == expected


class TestProcessSubmission:
    """Errors are recovered at the submission boundary."""

    def test_success_moves_to_submitted(self, empty_store, valid_form):
        state = RegistrationFormState()
        process_submission(empty_store, valid_form, state)

        assert state.is_submitted
        assert state.confirmation.pass_number == "HOLI-20251"
        assert state.confirmation.email == "a@b.com"
        assert state.field_errors == {}

    def test_validation_errors_shown_inline(self, empty_store):
        state = RegistrationFormState()
        process_submission(empty_store, {"firstName": "", "email": "bad", "phone": "12"}, state)

        assert state.status == "idle"
        assert state.field_errors["phone"] == "Phone number must be exactly 10 digits."
        assert state.field_errors["email"] == "Invalid email address"
        assert state.field_errors["firstName"] == "First name is required"
        assert state.global_error is None

    def test_duplicate_shown_on_field(self, empty_store, valid_form):
        process_submission(empty_store, valid_form, RegistrationFormState())

        state = RegistrationFormState()
        process_submission(empty_store, valid_form, state)
        assert state.field_errors == {
            "email": "Email already exists. Please use a different email."
        }

    def test_store_failure_shows_banner(self, empty_store, valid_form):
        empty_store.fail_writes = True
        state = RegistrationFormState()
        process_submission(empty_store, valid_form, state)

        assert state.global_error == GENERIC_ERROR
        assert state.field_errors == {}
        assert not state.is_submitted

    def test_resubmit_clears_previous_errors(self, empty_store, valid_form):
        state = RegistrationFormState()
        process_submission(empty_store, dict(valid_form, phone="1"), state)
        assert "phone" in state.field_errors

        process_submission(empty_store, valid_form, state)
        assert state.field_errors == {}
        assert state.is_submitted

    def test_second_submit_after_success_is_ignored(self, empty_store, valid_form):
        state = RegistrationFormState()
        process_submission(empty_store, valid_form, state)
        process_submission(empty_store, dict(valid_form, email="x@y.com", phone="9000000000"), state)

        assert state.is_submitted
        assert state.confirmation.pass_number == "HOLI-20251"
        assert len(empty_store.appended) == 1

    def test_submit_while_submitting_is_ignored(self, empty_store, valid_form):
        state = RegistrationFormState()
        state.start_submission()
        process_submission(empty_store, valid_form, state)

        assert state.is_submitting
        assert empty_store.appended == []

    def test_unexpected_error_returns_to_idle_and_propagates(self, empty_store, valid_form):
        empty_store.read_all = MagicMock(side_effect=RuntimeError("boom"))
        state = RegistrationFormState()

        with pytest.raises(RuntimeError, match="boom"):
            process_submission(empty_store, valid_form, state)

        assert state.status == "idle"
        assert state.global_error == GENERIC_ERROR
