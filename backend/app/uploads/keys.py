"""Storage key generation.

Keys have the form ``<millisecond timestamp>-<filename>``. The timestamp is
taken per file, and a generator never hands out the same millisecond twice:
when two files are keyed within one clock tick the second one is bumped to
the next millisecond. Same-named files in one batch therefore still get
distinct keys.
"""
import threading
import time
from pathlib import PurePosixPath, PureWindowsPath
from typing import Callable, Optional

from .schemas import DEFAULT_FILENAME


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def key_filename(filename: str) -> str:
    """Strip any directory part a client sent along with the filename."""
    name = PureWindowsPath(PurePosixPath(filename).name).name
    if name in ("", ".", ".."):
        return DEFAULT_FILENAME
    return name


class StorageKeyGenerator:
    """Hands out ``<ms>-<filename>`` keys with strictly increasing timestamps."""

    def __init__(self, clock: Optional[Callable[[], int]] = None) -> None:
        self._clock = clock or _now_ms
        self._last_ms = 0
        self._lock = threading.Lock()

    def next_timestamp(self) -> int:
        with self._lock:
            ms = max(self._clock(), self._last_ms + 1)
            self._last_ms = ms
            return ms

    def next_key(self, filename: str) -> str:
        return f"{self.next_timestamp()}-{key_filename(filename)}"
