"""Form field validation utilities."""
import re
from typing import Any, Dict, Mapping, Tuple

EMAIL_PATTERN = re.compile(r"^\S+@\S+$")
PHONE_PATTERN = re.compile(r"^[0-9]{10}$")

VALID_GENDERS = ("male", "female")

FORM_FIELDS = ("firstName", "lastName", "gender", "email", "phone")


def normalize_form(form: Mapping[str, Any]) -> Dict[str, str]:
    """
    Normalize raw form input into trimmed strings.

    Args:
        form: Mapping with any of the form fields; missing or None values
            become empty strings

    Returns:
        Dict with every key of FORM_FIELDS

    Behavior:
        - Trims leading/trailing whitespace
        - Lowercases gender
        - Leaves email case untouched (uniqueness is an exact match)
    """
    cleaned = {}
    for field in FORM_FIELDS:
        value = form.get(field)
        cleaned[field] = "" if value is None else str(value).strip()
    cleaned["gender"] = cleaned["gender"].lower()
    return cleaned


def validate_first_name(first_name: str) -> Tuple[bool, str]:
    """
    Validate attendee first name.

    Returns:
        - (True, "") if valid
        - (False, "First name is required") if empty
    """
    if not first_name or not first_name.strip():
        return False, "First name is required"
    return True, ""


def validate_email(email: str) -> Tuple[bool, str]:
    """
    Validate email against a basic local@domain pattern.

    Returns:
        - (True, "") if valid
        - (False, "Email is required") if empty
        - (False, "Invalid email address") if pattern does not match
    """
    if not email:
        return False, "Email is required"
    if not EMAIL_PATTERN.match(email):
        return False, "Invalid email address"
    return True, ""


def validate_phone(phone: str) -> Tuple[bool, str]:
    """
    Validate phone number (exactly 10 digits).

    Returns:
        - (True, "") if valid
        - (False, "Phone number is required") if empty
        - (False, "Phone number must be exactly 10 digits.") otherwise
    """
    if not phone:
        return False, "Phone number is required"
    if len(phone) != 10 or not PHONE_PATTERN.match(phone):
        return False, "Phone number must be exactly 10 digits."
    return True, ""


def validate_gender(gender: str) -> Tuple[bool, str]:
    """Gender may be unset; otherwise it must be male or female."""
    if gender and gender not in VALID_GENDERS:
        return False, "Gender must be male or female"
    return True, ""


def collect_field_errors(form: Mapping[str, str]) -> Dict[str, str]:
    """
    Run every field validator against a normalized form.

    Returns:
        Dict of field name to error message, in form order; empty if valid
    """
    checks = (
        ("firstName", validate_first_name),
        ("gender", validate_gender),
        ("email", validate_email),
        ("phone", validate_phone),
    )
    errors = {}
    for field, validator in checks:
        is_valid, error_msg = validator(form.get(field, ""))
        if not is_valid:
            errors[field] = error_msg
    return errors
