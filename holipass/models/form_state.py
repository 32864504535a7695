"""Per-session state of the registration form."""
from dataclasses import dataclass, field
from typing import Dict, Optional

STATUS_IDLE = "idle"
STATUS_SUBMITTING = "submitting"
STATUS_SUBMITTED = "submitted"


@dataclass
class RegistrationConfirmation:
    """What the user sees after a successful submission."""

    pass_number: str
    email: str
    price: int
    record_id: str


@dataclass
class RegistrationFormState:
    """Validation errors, banner message and submission status for one session."""

    status: str = STATUS_IDLE
    field_errors: Dict[str, str] = field(default_factory=dict)
    global_error: Optional[str] = None
    confirmation: Optional[RegistrationConfirmation] = None

    @property
    def is_submitting(self) -> bool:
        return self.status == STATUS_SUBMITTING

    @property
    def is_submitted(self) -> bool:
        return self.status == STATUS_SUBMITTED

    def start_submission(self) -> None:
        """Clear previous errors and mark a submission in flight."""
        self.field_errors = {}
        self.global_error = None
        self.status = STATUS_SUBMITTING

    def fail(self, field_errors: Optional[Dict[str, str]] = None, global_error: Optional[str] = None) -> None:
        """Record a failed submission; the user may resubmit."""
        self.field_errors = dict(field_errors or {})
        self.global_error = global_error
        self.status = STATUS_IDLE

    def succeed(self, confirmation: RegistrationConfirmation) -> None:
        self.field_errors = {}
        self.global_error = None
        self.confirmation = confirmation
        self.status = STATUS_SUBMITTED
