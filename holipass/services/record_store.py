"""Record store backends: append-only collections of registrant records."""
import logging
import uuid
from typing import Any, Dict

import requests

from holipass.services.storage_service import load_json, save_json, lock_file
from holipass.utils.config import Settings
from holipass.utils.exceptions import ConfigurationError, PersistenceError

logger = logging.getLogger(__name__)


def _check_records(records: Any, collection: str) -> Dict[str, Dict[str, Any]]:
    """
    Ensure a collection payload is a mapping of id to record mapping.

    Raises:
        PersistenceError: If the collection or any record has another shape
    """
    if not isinstance(records, dict):
        logger.error(f"Collection {collection} is not an object: {type(records).__name__}")
        raise PersistenceError(f"Unexpected payload for {collection}")
    for record_id, record in records.items():
        if not isinstance(record, dict):
            logger.error(f"Record {record_id} in {collection} is not an object")
            raise PersistenceError(f"Malformed record in {collection}")
    return records


class RecordStore:
    """Append-only collection store.

    Only two operations are used: read everything in a collection, and append
    one record. No update or delete path exists.
    """

    def read_all(self, collection: str) -> Dict[str, Dict[str, Any]]:
        """Return a mapping of record id to record; empty if nothing is stored."""
        raise NotImplementedError

    def append(self, collection: str, record: Dict[str, Any]) -> str:
        """Store one record and return its generated id."""
        raise NotImplementedError


class FirebaseRecordStore(RecordStore):
    """Firebase Realtime Database accessed through its REST API."""

    def __init__(self, database_url: str, auth_token: str = "", timeout: float = 10.0):
        if not database_url:
            raise ConfigurationError("Firebase database URL is not configured")
        self.database_url = database_url.rstrip("/")
        self.auth_token = auth_token
        self.timeout = timeout

    def _url(self, collection: str) -> str:
        return f"{self.database_url}/{collection.strip('/')}.json"

    def _params(self) -> Dict[str, str]:
        return {"auth": self.auth_token} if self.auth_token else {}

    def read_all(self, collection: str) -> Dict[str, Dict[str, Any]]:
        try:
            response = requests.get(
                self._url(collection), params=self._params(), timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.error(f"Failed to read collection {collection}: {e}")
            raise PersistenceError(f"Could not read {collection}") from e
        except ValueError as e:
            logger.error(f"Malformed response reading collection {collection}: {e}")
            raise PersistenceError(f"Could not read {collection}") from e

        if data is None:
            return {}
        # Realtime Database returns a JSON array when keys look like 0..n.
        if isinstance(data, list):
            data = {str(i): item for i, item in enumerate(data) if item is not None}
        return _check_records(data, collection)

    def append(self, collection: str, record: Dict[str, Any]) -> str:
        try:
            response = requests.post(
                self._url(collection),
                params=self._params(),
                json=record,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.error(f"Failed to append to collection {collection}: {e}")
            raise PersistenceError(f"Could not write to {collection}") from e
        except ValueError as e:
            logger.error(f"Malformed response appending to {collection}: {e}")
            raise PersistenceError(f"Could not write to {collection}") from e

        record_id = data.get("name") if isinstance(data, dict) else None
        if not record_id:
            raise PersistenceError(f"No record id returned for {collection}")
        return record_id


class JsonFileRecordStore(RecordStore):
    """Local JSON file laid out as {collection: {id: record}}, for development."""

    def __init__(self, file_path: str, lock_timeout: float = 5.0):
        self.file_path = file_path
        self.lock_timeout = lock_timeout

    def read_all(self, collection: str) -> Dict[str, Dict[str, Any]]:
        try:
            data = load_json(self.file_path, default={})
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read {self.file_path}: {e}")
            raise PersistenceError(f"Could not read {collection}") from e
        return dict(_check_records(data.get(collection) or {}, collection))

    def append(self, collection: str, record: Dict[str, Any]) -> str:
        record_id = uuid.uuid4().hex
        try:
            with lock_file(self.file_path, timeout=self.lock_timeout):
                data = load_json(self.file_path, default={})
                records = _check_records(data.get(collection) or {}, collection)
                records[record_id] = dict(record)
                data[collection] = records
                save_json(self.file_path, data)
        except (OSError, ValueError) as e:
            # TimeoutError is an OSError subclass
            logger.error(f"Failed to append to {self.file_path}: {e}")
            raise PersistenceError(f"Could not write to {collection}") from e
        return record_id


def create_record_store(settings: Settings) -> RecordStore:
    """
    Build the record store selected by settings.store_backend.

    Raises:
        ConfigurationError: If firebase is selected without a database URL
    """
    if settings.store_backend == "json":
        logger.info(f"Using local JSON record store at {settings.records_file}")
        return JsonFileRecordStore(settings.records_file)

    database_url = settings.resolved_database_url()
    if not database_url:
        raise ConfigurationError(
            "Set FIREBASE_DATABASE_URL or FIREBASE_PROJECT_ID, "
            "or HOLI_STORE_BACKEND=json for local development"
        )
    return FirebaseRecordStore(
        database_url,
        auth_token=settings.auth_token,
        timeout=settings.request_timeout,
    )
