"""Shared fixtures."""
import copy
from datetime import datetime, timezone

import pytest

from holipass.services.record_store import RecordStore
from holipass.utils.config import reset_settings
from holipass.utils.exceptions import PersistenceError


class InMemoryRecordStore(RecordStore):
    """Record store kept in a dict, with optional injected failures."""

    def __init__(self, records=None):
        self.collections = {"registrations": dict(records or {})}
        self.fail_reads = False
        self.fail_writes = False
        self.appended = []
        self._next_id = len(self.collections["registrations"])

    def read_all(self, collection):
        if self.fail_reads:
            raise PersistenceError("read failed")
        return copy.deepcopy(self.collections.get(collection, {}))

    def append(self, collection, record):
        if self.fail_writes:
            raise PersistenceError("write failed")
        self._next_id += 1
        record_id = f"-rec{self._next_id:04d}"
        self.collections.setdefault(collection, {})[record_id] = copy.deepcopy(record)
        self.appended.append(record_id)
        return record_id


def make_record(index, **overrides):
    """Stored registration record with unique email/phone per index."""
    record = {
        "firstName": f"Guest{index}",
        "lastName": "Tester",
        "gender": "male",
        "email": f"guest{index}@example.com",
        "phone": f"98765432{index:02d}",
        "price": 599,
        "passNumber": f"HOLI-2025{index}",
        "paymentStatus": "unpaid",
        "registrationDate": "2025-02-20T10:00:00.000Z",
    }
    record.update(overrides)
    return record


@pytest.fixture
def empty_store():
    """Store with no registrations."""
    return InMemoryRecordStore()


@pytest.fixture
def store_with_three():
    """Store holding three registrations."""
    return InMemoryRecordStore(
        {f"-existing{i}": make_record(i) for i in range(1, 4)}
    )


@pytest.fixture
def valid_form():
    """Form input that passes validation."""
    return {
        "firstName": "A",
        "lastName": "B",
        "gender": "female",
        "email": "a@b.com",
        "phone": "1234567890",
    }


@pytest.fixture
def fixed_now():
    return datetime(2025, 3, 1, 9, 30, 15, 123456, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; isolate each test."""
    reset_settings()
    yield
    reset_settings()
