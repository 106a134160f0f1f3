"""Core components: storage, library store and normalization."""

from soundshelf.core.library import FAVORITES_KEY, PLAYLISTS_KEY, LibraryStore
from soundshelf.core.normalize import (
    NormalizationError,
    normalize_album,
    normalize_albums,
    normalize_artist,
    normalize_artists,
    normalize_track,
    normalize_tracks,
)
from soundshelf.core.storage import KeyValueStorage, StorageError

__all__ = [
    "FAVORITES_KEY",
    "PLAYLISTS_KEY",
    "KeyValueStorage",
    "LibraryStore",
    "NormalizationError",
    "StorageError",
    "normalize_album",
    "normalize_albums",
    "normalize_artist",
    "normalize_artists",
    "normalize_track",
    "normalize_tracks",
]
