"""Low-level JSON file I/O with atomic writes and lock files."""
import copy
import json
import logging
import os
import sys
import tempfile
import time
from contextlib import contextmanager
from typing import Any, Dict, Optional

if sys.platform != "win32":
    import fcntl

logger = logging.getLogger(__name__)


def load_json(file_path: str, default: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Load and parse a JSON file with UTF-8 encoding.

    Args:
        file_path: Path to JSON file
        default: Returned (as a copy) when the file does not exist; if None
            a missing file is an error

    Returns:
        dict: Parsed JSON content

    Raises:
        FileNotFoundError: If file doesn't exist and no default given
        json.JSONDecodeError: If JSON is malformed
        ValueError: If the top-level JSON value is not an object
    """
    if not os.path.exists(file_path):
        if default is None:
            raise FileNotFoundError(f"File not found: {file_path}")
        return copy.deepcopy(default)

    with open(file_path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise json.JSONDecodeError(
                f"Malformed JSON in {file_path}: {e.msg}",
                e.doc,
                e.pos
            )

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {file_path}")
    return data


def save_json(file_path: str, data: Dict[str, Any]) -> None:
    """
    Save data to a JSON file atomically.

    The data is written to a temp file in the same directory, fsynced, then
    moved over the target with os.replace, so readers never see a partial file.

    Raises:
        IOError: If the write fails; the original file is left untouched
    """
    dir_path = os.path.dirname(file_path)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)

    temp_fd, temp_path = tempfile.mkstemp(
        dir=dir_path if dir_path else ".",
        prefix=".tmp_",
        suffix=".json"
    )

    try:
        with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, file_path)
    except (OSError, TypeError, ValueError) as e:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise IOError(f"Failed to write file {file_path}: {e}") from e


@contextmanager
def _windows_lock(file_path: str, lock_path: str, timeout: float):
    """Exclusive-create lock file; removed again on release."""
    start_time = time.time()
    while True:
        try:
            lock_fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_RDWR)
            break
        except FileExistsError:
            if time.time() - start_time > timeout:
                raise TimeoutError(f"Could not acquire lock on {file_path} within {timeout}s")
            time.sleep(0.05)

    try:
        yield
    finally:
        os.close(lock_fd)
        try:
            os.remove(lock_path)
        except FileNotFoundError:
            logger.warning(f"Lock file already removed: {lock_path}")


@contextmanager
def _posix_lock(file_path: str, lock_path: str, timeout: float):
    """flock on a persistent lock file; the kernel drops it if the process dies."""
    lock_fd = open(lock_path, "a")
    try:
        start_time = time.time()
        while True:
            try:
                fcntl.flock(lock_fd.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
                break
            except BlockingIOError:
                if time.time() - start_time > timeout:
                    raise TimeoutError(f"Could not acquire lock on {file_path} within {timeout}s")
                time.sleep(0.05)

        try:
            yield
        finally:
            fcntl.flock(lock_fd.fileno(), fcntl.LOCK_UN)
    finally:
        lock_fd.close()


@contextmanager
def lock_file(file_path: str, timeout: float = 5.0):
    """
    Hold an exclusive lock on file_path via a sidecar ``.lock`` file.

    The records file itself may not exist yet, so the lock is taken on
    ``<file_path>.lock``. On POSIX the sidecar stays on disk and is locked
    with flock; on Windows it is created exclusively and deleted on release.

    Usage:
        with lock_file('data/registrations.json'):
            data = load_json('data/registrations.json', default={})
            ...
            save_json('data/registrations.json', data)

    Raises:
        TimeoutError: If unable to acquire lock within timeout
    """
    lock_path = f"{file_path}.lock"
    dir_path = os.path.dirname(lock_path)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)

    if sys.platform == "win32":
        lock = _windows_lock(file_path, lock_path, timeout)
    else:
        lock = _posix_lock(file_path, lock_path, timeout)

    with lock:
        yield
