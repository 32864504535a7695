"""Registrant data model for Holi pass registration."""
from dataclasses import dataclass
from typing import Any, Dict

from holipass.utils.date_utils import parse_iso_timestamp

GENDER_PRICES = {
    "male": 599,
    "female": 499,
}

PAYMENT_UNPAID = "unpaid"
PAYMENT_PAID = "paid"
PAYMENT_STATUSES = (PAYMENT_UNPAID, PAYMENT_PAID)


def price_for_gender(gender: str) -> int:
    """Fixed price lookup; unset or unknown gender costs 0."""
    return GENDER_PRICES.get(gender, 0)


@dataclass(frozen=True)
class Registrant:
    """Individual who registered for a Holi pass.

    Records are created once and never updated, hence frozen.
    """

    first_name: str
    last_name: str
    gender: str
    email: str
    phone: str
    price: int
    pass_number: str
    payment_status: str
    registration_date: str  # ISO 8601 format

    def __post_init__(self):
        """Validate registrant data."""
        if not self.first_name or not self.first_name.strip():
            raise ValueError("First name cannot be empty")

        if self.gender and self.gender not in GENDER_PRICES:
            raise ValueError(f"Invalid gender: {self.gender}")

        if self.price != price_for_gender(self.gender):
            raise ValueError(
                f"Price {self.price} does not match gender {self.gender or 'unset'}"
            )

        if self.payment_status not in PAYMENT_STATUSES:
            raise ValueError(f"Invalid payment status: {self.payment_status}")

        if not self.pass_number:
            raise ValueError("Pass number cannot be empty")

        try:
            parse_iso_timestamp(self.registration_date)
        except ValueError as e:
            raise ValueError(f"Invalid timestamp format: {self.registration_date}") from e

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the camelCase record stored in the record store."""
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "gender": self.gender,
            "email": self.email,
            "phone": self.phone,
            "price": self.price,
            "passNumber": self.pass_number,
            "paymentStatus": self.payment_status,
            "registrationDate": self.registration_date,
        }
