"""Utility functions for Soundshelf."""

from soundshelf.utils.helpers import (
    DEFAULT_DURATION_MS,
    coerce_id,
    format_duration,
    generate_playlist_id,
)

__all__ = [
    "DEFAULT_DURATION_MS",
    "coerce_id",
    "format_duration",
    "generate_playlist_id",
]
