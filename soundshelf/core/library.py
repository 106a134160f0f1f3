"""Local library store: favorites and playlists."""

import json
import logging
import threading
from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence, Tuple, Type, TypeVar

from soundshelf.core.storage import KeyValueStorage
from soundshelf.models import LibraryItem, Playlist, Record, Track
from soundshelf.utils.helpers import coerce_id, generate_playlist_id

logger = logging.getLogger("soundshelf.library")

FAVORITES_KEY = "favorites"
PLAYLISTS_KEY = "playlists"

R = TypeVar("R", bound=Record)


class LibraryStore:
    """Persistent favorites and playlists.

    Each collection lives under its own key as a JSON array. Every write is a
    read-modify-write of the whole collection. No operation raises: failures
    are logged, the conservative default (False, None or an empty list) is
    returned, and the exception is kept in ``last_error``.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage
        self.last_error: Optional[Exception] = None
        self._lock = threading.RLock()

    # Collection I/O

    def _read(self, key: str, model: Type[R]) -> Tuple[List[R], List[Any]]:
        """Read a collection as (valid records, raw entries that failed validation).

        Storage failures propagate as StorageError. Text that does not decode
        to a JSON array reads as an empty collection, so the next write
        replaces it. Entries that decode but fail validation are skipped and
        handed back so writes can keep them.
        """
        raw = self.storage.get_item(key)
        if not raw:
            return [], []
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Ignoring corrupt {key} data: {e}")
            return [], []
        if not isinstance(data, list):
            logger.warning(f"Ignoring corrupt {key} data: expected a JSON array, got {type(data).__name__}")
            return [], []

        records: List[R] = []
        skipped: List[Any] = []
        for entry in data:
            try:
                records.append(model.model_validate(entry))
            except ValueError as e:
                logger.warning(f"Skipping invalid {key} entry: {e}")
                skipped.append(entry)
        return records, skipped

    def _load(self, key: str, model: Type[R]) -> List[R]:
        return self._read(key, model)[0]

    def _save(self, key: str, records: List[Record], skipped: Sequence[Any] = ()) -> None:
        # Unreadable entries are written back after the valid ones
        entries = [record.to_record() for record in records] + list(skipped)
        payload = json.dumps(entries, ensure_ascii=False)
        self.storage.set_item(key, payload)

    def _fail(self, action: str, error: Exception) -> None:
        self.last_error = error
        logger.error(f"Error {action}: {error}")

    # Favorites

    def get_favorites(self) -> List[LibraryItem]:
        """Return all favorites in insertion order; empty on any failure."""
        try:
            favorites = self._load(FAVORITES_KEY, LibraryItem)
        except Exception as e:
            self._fail("getting favorites", e)
            return []
        self.last_error = None
        return favorites

    def add_to_favorites(self, item: LibraryItem) -> bool:
        """Add ``item`` unless a favorite with the same id exists."""
        with self._lock:
            try:
                favorites, skipped = self._read(FAVORITES_KEY, LibraryItem)
                if any(fav.id == item.id for fav in favorites):
                    logger.debug(f"Favorite already present: {item.id}")
                    self.last_error = None
                    return False
                favorites.append(item)
                self._save(FAVORITES_KEY, favorites, skipped)
            except Exception as e:
                self._fail("adding to favorites", e)
                return False
        logger.info(f"Added {item.type} to favorites: {item.display_title}")
        self.last_error = None
        return True

    def remove_from_favorites(self, item_id: Any) -> bool:
        """Remove the favorite with ``item_id``; removing a non-member succeeds."""
        item_id = coerce_id(item_id)
        with self._lock:
            try:
                favorites, skipped = self._read(FAVORITES_KEY, LibraryItem)
                filtered = [fav for fav in favorites if fav.id != item_id]
                self._save(FAVORITES_KEY, filtered, skipped)
            except Exception as e:
                self._fail("removing from favorites", e)
                return False
        if len(filtered) != len(favorites):
            logger.info(f"Removed favorite: {item_id}")
        self.last_error = None
        return True

    def is_favorite(self, item_id: Any) -> bool:
        item_id = coerce_id(item_id)
        try:
            favorites = self._load(FAVORITES_KEY, LibraryItem)
        except Exception as e:
            self._fail("checking favorite status", e)
            return False
        self.last_error = None
        return any(fav.id == item_id for fav in favorites)

    def toggle_favorite(self, item: LibraryItem) -> bool:
        """Flip membership of ``item`` and return whether it is now a favorite."""
        with self._lock:
            if self.is_favorite(item.id):
                removed = self.remove_from_favorites(item.id)
                return not removed
            if self.last_error is not None:
                return False
            return self.add_to_favorites(item)

    # Playlists

    def get_playlists(self) -> List[Playlist]:
        """Return all playlists; empty on any failure."""
        try:
            playlists = self._load(PLAYLISTS_KEY, Playlist)
        except Exception as e:
            self._fail("getting playlists", e)
            return []
        self.last_error = None
        return playlists

    def get_playlist(self, playlist_id: Any) -> Optional[Playlist]:
        playlist_id = coerce_id(playlist_id)
        for playlist in self.get_playlists():
            if playlist.id == playlist_id:
                return playlist
        return None

    def create_playlist(self, name: str) -> Optional[Playlist]:
        """Create an empty playlist; the name is stored as given."""
        with self._lock:
            try:
                playlists, skipped = self._read(PLAYLISTS_KEY, Playlist)
                playlist = Playlist(
                    id=generate_playlist_id(),
                    name=name,
                    tracks=[],
                    created_at=datetime.now(timezone.utc),
                )
                playlists.append(playlist)
                self._save(PLAYLISTS_KEY, playlists, skipped)
            except Exception as e:
                self._fail("creating playlist", e)
                return None
        logger.info(f"Created playlist {playlist.id}: {name}")
        self.last_error = None
        return playlist

    def add_to_playlist(self, playlist_id: Any, track: Track) -> bool:
        """Append ``track`` to the playlist unless it is missing or already holds it."""
        playlist_id = coerce_id(playlist_id)
        with self._lock:
            try:
                playlists, skipped = self._read(PLAYLISTS_KEY, Playlist)
                playlist = next((p for p in playlists if p.id == playlist_id), None)
                if playlist is None:
                    logger.debug(f"Playlist not found: {playlist_id}")
                    self.last_error = None
                    return False
                if playlist.has_track(track.id):
                    logger.debug(f"Track {track.id} already in playlist {playlist_id}")
                    self.last_error = None
                    return False
                playlist.tracks.append(track)
                self._save(PLAYLISTS_KEY, playlists, skipped)
            except Exception as e:
                self._fail("adding to playlist", e)
                return False
        logger.info(f"Added track {track.id} to playlist {playlist_id}")
        self.last_error = None
        return True

    def remove_from_playlist(self, playlist_id: Any, track_id: Any) -> bool:
        """Drop ``track_id`` from the playlist; False only if the playlist is missing."""
        playlist_id = coerce_id(playlist_id)
        track_id = coerce_id(track_id)
        with self._lock:
            try:
                playlists, skipped = self._read(PLAYLISTS_KEY, Playlist)
                playlist = next((p for p in playlists if p.id == playlist_id), None)
                if playlist is None:
                    logger.debug(f"Playlist not found: {playlist_id}")
                    self.last_error = None
                    return False
                playlist.tracks = [t for t in playlist.tracks if t.id != track_id]
                self._save(PLAYLISTS_KEY, playlists, skipped)
            except Exception as e:
                self._fail("removing from playlist", e)
                return False
        self.last_error = None
        return True

    def delete_playlist(self, playlist_id: Any) -> bool:
        playlist_id = coerce_id(playlist_id)
        with self._lock:
            try:
                playlists, skipped = self._read(PLAYLISTS_KEY, Playlist)
                filtered = [p for p in playlists if p.id != playlist_id]
                self._save(PLAYLISTS_KEY, filtered, skipped)
            except Exception as e:
                self._fail("deleting playlist", e)
                return False
        logger.info(f"Deleted playlist: {playlist_id}")
        self.last_error = None
        return True

    def update_playlist_name(self, playlist_id: Any, new_name: str) -> bool:
        """Rename a playlist in place; tracks are left untouched."""
        playlist_id = coerce_id(playlist_id)
        with self._lock:
            try:
                playlists, skipped = self._read(PLAYLISTS_KEY, Playlist)
                playlist = next((p for p in playlists if p.id == playlist_id), None)
                if playlist is None:
                    logger.debug(f"Playlist not found: {playlist_id}")
                    self.last_error = None
                    return False
                playlist.name = new_name
                self._save(PLAYLISTS_KEY, playlists, skipped)
            except Exception as e:
                self._fail("updating playlist name", e)
                return False
        self.last_error = None
        return True
