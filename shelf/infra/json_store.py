"""JSON file helpers shared by the repositories: tolerant reads and atomic writes."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from threading import Lock, RLock
from typing import Any, Dict

logger = logging.getLogger(__name__)

_dir_locks: Dict[str, RLock] = {}
_dir_locks_guard = Lock()


def lock_for(directory) -> RLock:
    """The lock for a data directory; every repository bound to the same directory gets the same one."""
    key = os.path.realpath(directory)
    with _dir_locks_guard:
        lock = _dir_locks.get(key)
        if lock is None:
            lock = _dir_locks[key] = RLock()
    return lock


def safe_load(path: Path, default: Any):
    """Load JSON from path; a missing file or invalid JSON yields default."""
    if not os.path.exists(path):
        return default
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {path}: {e}")
        return default
    if not isinstance(data, type(default)):
        logger.error(f"Unexpected content in {path}: expected {type(default).__name__}")
        return default
    return data


def atomic_write(path: Path, data: Any):
    """Write JSON via a temp file in the same directory, then move it into place."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=os.path.dirname(path), prefix=".shelf_", suffix=".json")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            json.dump(data, tmp, indent=2, ensure_ascii=False)
        shutil.move(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
