"""Utility helper functions for Soundshelf."""

import threading
import time
from typing import Any, Optional

DEFAULT_DURATION_MS = 180000

_id_lock = threading.Lock()
_last_playlist_id = 0


def coerce_id(value: Any) -> str:
    """Convert an external identifier (int or str) to its canonical string form."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def generate_playlist_id() -> str:
    """Generate a fresh playlist id from the current time in milliseconds.

    Ids are strictly increasing within the process, so two playlists created
    in the same millisecond still get distinct ids.
    """
    global _last_playlist_id
    with _id_lock:
        now_ms = time.time_ns() // 1_000_000
        _last_playlist_id = max(now_ms, _last_playlist_id + 1)
        return str(_last_playlist_id)


def format_duration(duration_ms: Optional[int]) -> str:
    """Format a duration in milliseconds as ``m:ss``."""
    if not duration_ms or duration_ms < 0:
        return "0:00"
    total_seconds = int(duration_ms) // 1000
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}"

