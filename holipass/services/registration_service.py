"""Registration service: validates, de-duplicates, numbers and stores Holi passes."""
import logging
from datetime import datetime
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

from holipass.models.form_state import RegistrationConfirmation
from holipass.models.registrant import PAYMENT_UNPAID, Registrant, price_for_gender
from holipass.services.record_store import RecordStore
from holipass.utils.date_utils import to_iso_timestamp
from holipass.utils.exceptions import DuplicateError, ValidationError
from holipass.utils.validation import collect_field_errors, normalize_form

logger = logging.getLogger(__name__)

COLLECTION = "registrations"
PASS_PREFIX = "HOLI-2025"


def validate_registration(form: Mapping[str, Any]) -> Dict[str, str]:
    """
    Validate and normalize raw form input.

    Args:
        form: Mapping with firstName, lastName, gender, email, phone

    Returns:
        Normalized form (trimmed strings, lowercase gender)

    Raises:
        ValidationError: If any field fails; ``errors`` lists every failing field
    """
    cleaned = normalize_form(form)
    errors = collect_field_errors(cleaned)
    if errors:
        field, message = next(iter(errors.items()))
        raise ValidationError(field, message, errors)
    return cleaned


def calculate_price(gender: Optional[str]) -> int:
    """Pass price for a gender selection: male 599, female 499, unset 0."""
    return price_for_gender((gender or "").strip().lower())


def check_uniqueness(store: RecordStore, email: str, phone: str, collection: str = COLLECTION) -> None:
    """
    Reject an email or phone that is already registered.

    Scans every record in the collection; the first record that matches wins,
    and within a record email is checked before phone. There is no index, so
    this is only suitable for small collections.

    Raises:
        DuplicateError: With field "email" or "phone"
        PersistenceError: If the store cannot be read
    """
    records = store.read_all(collection)
    for record in records.values():
        if record.get("email") == email:
            raise DuplicateError("email")
        if record.get("phone") == phone:
            raise DuplicateError("phone")


def assign_pass_number(store: RecordStore, collection: str = COLLECTION) -> str:
    """
    Return the next pass number, e.g. "HOLI-20251" for an empty store.

    The count is read and then used without any lock, so two concurrent
    submissions can receive the same number.

    Raises:
        PersistenceError: If the store cannot be read
    """
    count = len(store.read_all(collection))
    return f"{PASS_PREFIX}{count + 1}"


def submit_registration(
    store: RecordStore,
    form: Mapping[str, Any],
    now: Optional[datetime] = None,
    collection: str = COLLECTION,
) -> RegistrationConfirmation:
    """
    Register an attendee for a Holi pass.

    Args:
        store: Record store to check and write
        form: Raw form input
        now: Submission time (defaults to current UTC time)
        collection: Collection name in the store

    Returns:
        RegistrationConfirmation with pass number, email, price and record id

    Raises:
        ValidationError: If form input is invalid
        DuplicateError: If email or phone already registered
        PersistenceError: If the store read or write fails; nothing is stored

    Behavior:
        validate → check uniqueness → assign pass number → append one record
        with paymentStatus "unpaid" and an ISO 8601 registrationDate.
    """
    try:
        cleaned = validate_registration(form)
    except ValidationError as e:
        logger.info(f"Registration rejected, invalid fields: {sorted(e.errors)}")
        raise

    try:
        check_uniqueness(store, cleaned["email"], cleaned["phone"], collection)
    except DuplicateError as e:
        logger.info(f"Registration rejected, duplicate {e.field}")
        raise

    pass_number = assign_pass_number(store, collection)
    registrant = Registrant(
        first_name=cleaned["firstName"],
        last_name=cleaned["lastName"],
        gender=cleaned["gender"],
        email=cleaned["email"],
        phone=cleaned["phone"],
        price=calculate_price(cleaned["gender"]),
        pass_number=pass_number,
        payment_status=PAYMENT_UNPAID,
        registration_date=to_iso_timestamp(now),
    )

    record_id = store.append(collection, registrant.to_record())
    logger.info(f"Registered pass {pass_number} as record {record_id}")

    return RegistrationConfirmation(
        pass_number=pass_number,
        email=registrant.email,
        price=registrant.price,
        record_id=record_id,
    )


def build_payment_link(contact_number: str, confirmation: RegistrationConfirmation) -> str:
    """
    Build a WhatsApp link pre-filled with a payment request for a pass.

    Args:
        contact_number: Organizer number in international format; "+", spaces
            and dashes are stripped
        confirmation: Result of a successful submission
    """
    digits = "".join(ch for ch in contact_number if ch.isdigit())
    message = (
        f"Hi, I would like to pay for my Holi 2025 pass.\n"
        f"Pass Number: {confirmation.pass_number}\n"
        f"Email: {confirmation.email}"
    )
    if confirmation.price:
        message += f"\nAmount: ₹{confirmation.price}"
    return f"https://wa.me/{digits}?text={quote(message)}"
