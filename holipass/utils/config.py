"""Environment configuration and logging setup."""
import logging
import os
from dataclasses import dataclass
from threading import Lock
from typing import Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_RECORDS_FILE = "data/registrations.json"
DEFAULT_COLLECTION = "registrations"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_PAYMENT_CONTACT = "919999999999"
STORE_BACKENDS = ("firebase", "json")

_ENV_LOADED = False
_ENV_LOCK = Lock()
_settings_cache: Optional["Settings"] = None
_logging_configured = False


@dataclass(frozen=True)
class Settings:
    """Runtime settings resolved from the environment."""

    store_backend: str = "firebase"
    database_url: str = ""
    project_id: str = ""
    auth_token: str = ""
    records_file: str = DEFAULT_RECORDS_FILE
    collection: str = DEFAULT_COLLECTION
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    payment_contact: str = DEFAULT_PAYMENT_CONTACT
    log_level: str = "INFO"

    def resolved_database_url(self) -> str:
        """Return the database root URL, deriving it from the project id if unset."""
        if self.database_url:
            return self.database_url.rstrip("/")
        if self.project_id:
            return f"https://{self.project_id}-default-rtdb.firebaseio.com"
        return ""


def _load_env() -> None:
    """Load a .env file once; variables already in the environment win."""
    global _ENV_LOADED

    if _ENV_LOADED:
        return

    with _ENV_LOCK:
        if _ENV_LOADED:
            return
        load_dotenv(find_dotenv(usecwd=True), override=False)
        _ENV_LOADED = True


def _read_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive {name}={raw!r}, using {default}")
        return default
    return value


def load_settings() -> Settings:
    """
    Build settings from environment variables.

    Returns:
        Settings: fresh settings instance (not cached)

    Behavior:
        - Loads .env on first call
        - Unknown store backends fall back to "firebase" with a warning
        - Invalid timeouts fall back to the default with a warning
    """
    _load_env()

    backend = os.getenv("HOLI_STORE_BACKEND", "firebase").strip().lower()
    if backend not in STORE_BACKENDS:
        logger.warning(f"Unknown HOLI_STORE_BACKEND={backend!r}, using firebase")
        backend = "firebase"

    return Settings(
        store_backend=backend,
        database_url=os.getenv("FIREBASE_DATABASE_URL", "").strip(),
        project_id=os.getenv("FIREBASE_PROJECT_ID", "").strip(),
        auth_token=os.getenv("FIREBASE_AUTH_TOKEN", "").strip(),
        records_file=os.getenv("HOLI_RECORDS_FILE", DEFAULT_RECORDS_FILE).strip() or DEFAULT_RECORDS_FILE,
        collection=os.getenv("HOLI_COLLECTION", DEFAULT_COLLECTION).strip() or DEFAULT_COLLECTION,
        request_timeout=_read_float("HOLI_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        payment_contact=os.getenv("HOLI_PAYMENT_CONTACT", DEFAULT_PAYMENT_CONTACT).strip() or DEFAULT_PAYMENT_CONTACT,
        log_level=os.getenv("HOLI_LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )


def get_settings() -> Settings:
    """Return cached settings, loading them on first use."""
    global _settings_cache

    if _settings_cache is None:
        _settings_cache = load_settings()
    return _settings_cache


def reset_settings() -> None:
    """Clear the settings cache."""
    global _settings_cache
    _settings_cache = None


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the root logger."""
    global _logging_configured

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if _logging_configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    )
    root.addHandler(handler)
    _logging_configured = True
