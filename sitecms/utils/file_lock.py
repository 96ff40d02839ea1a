import json
import os
import sys
import tempfile
import threading
from pathlib import Path
from contextlib import contextmanager

from sitecms.errors import StorageCorruption

# Cross-platform file locking
if sys.platform == "win32":
    import msvcrt

    def _lock_exclusive(f):
        f.seek(0)
        msvcrt.locking(f.fileno(), msvcrt.LK_LOCK, 1)

    def _unlock(f):
        try:
            f.seek(0)
            msvcrt.locking(f.fileno(), msvcrt.LK_UNLCK, 1)
        except OSError:
            pass
else:
    import fcntl

    def _lock_exclusive(f):
        fcntl.flock(f.fileno(), fcntl.LOCK_EX)

    def _unlock(f):
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)


# flock is per open file description, so threads of one process also need
# an in-process lock per document path.
_thread_locks = {}
_thread_locks_guard = threading.Lock()


def _thread_lock_for(filepath):
    key = str(Path(filepath).resolve())
    with _thread_locks_guard:
        return _thread_locks.setdefault(key, threading.Lock())


@contextmanager
def locked_document(filepath):
    """Hold an exclusive lock on a document for a whole read-modify-write cycle.

    Usage:
        with locked_document(path):
            data = read_json(path)
            data["photos"].append(photo)
            atomic_write_json(path, data)

    The lock lives on a sidecar ``<name>.lock`` file so the document itself
    can be swapped out with ``os.replace``.
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    lock_path = filepath.with_name(filepath.name + ".lock")

    with _thread_lock_for(filepath):
        with open(lock_path, "a+") as f:
            _lock_exclusive(f)
            try:
                yield
            finally:
                _unlock(f)


def atomic_write_json(filepath, data):
    """Replace a JSON file in one step: temp file, flush, fsync, rename."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{filepath.name}.", suffix=".tmp", dir=filepath.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, filepath)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def read_json(filepath):
    """Read a JSON document.

    Raises FileNotFoundError when the file is missing and StorageCorruption
    when its bytes are empty or not valid JSON.
    """
    filepath = Path(filepath)
    raw = filepath.read_bytes()
    if not raw.strip():
        raise StorageCorruption(f"{filepath} is empty")
    try:
        return json.loads(raw.decode("utf-8"))
    except ValueError as e:
        raise StorageCorruption(f"{filepath} is not valid JSON: {e}") from e
