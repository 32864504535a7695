"""Custom exception classes."""
from typing import Dict, Optional


class RegistrationError(Exception):
    """Base class for errors raised by the registration workflow."""
    pass


class ValidationError(RegistrationError):
    """Raised when form input fails validation.

    ``field``/``message`` describe the first failing field; ``errors`` holds
    every failing field so the form can show them all inline.
    """

    def __init__(self, field: str, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.field = field
        self.message = message
        self.errors = dict(errors) if errors else {field: message}


class DuplicateError(RegistrationError):
    """Raised when an email or phone is already registered."""

    def __init__(self, field: str):
        self.field = field
        self.message = (
            f"{field.capitalize()} already exists. Please use a different {field}."
        )
        super().__init__(self.message)


class PersistenceError(RegistrationError):
    """Raised when the record store cannot be read or written."""
    pass


class ConfigurationError(Exception):
    """Raised when store connection settings are missing or invalid.

    Not a RegistrationError: the registration form does not recover from it,
    only the app's top-level error boundary catches it.
    """
    pass
