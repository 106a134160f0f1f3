"""Main Soundshelf application class."""

import logging
from pathlib import Path
from typing import List, Optional, Union

from soundshelf.config import SoundshelfConfig
from soundshelf.core.library import LibraryStore
from soundshelf.core.normalize import normalize_album, normalize_artist, normalize_track
from soundshelf.core.storage import KeyValueStorage
from soundshelf.models import (
    AlbumDetail,
    ArtistDetail,
    HomeFeed,
    LibraryItem,
    Playlist,
    SearchResults,
    Track,
)
from soundshelf.providers import deezer, rapidapi
from soundshelf.workflows.browse import (
    load_album_detail,
    load_artist_detail,
    load_home_feed,
    resolve_stream_url,
    search_all,
)
from soundshelf.workflows.search import SearchDebouncer

logger = logging.getLogger("soundshelf")


class Soundshelf:
    """Application facade over the library store and the two music services."""

    def __init__(
        self,
        config: Optional[SoundshelfConfig] = None,
        config_path: Union[str, Path] = "soundshelf.yaml",
    ):
        """Initialize Soundshelf.

        Args:
            config: Ready-made configuration; when None it is loaded from
                ``config_path`` (defaults if the file does not exist)
            config_path: Path to soundshelf.yaml
        """
        self.config = config or SoundshelfConfig.load(config_path)
        self.storage = KeyValueStorage(self.config.storage.db_path)
        self.library = LibraryStore(self.storage)
        logger.debug(f"Soundshelf ready (library at {self.config.storage.db_path})")

    # Browsing

    def home(self) -> HomeFeed:
        return load_home_feed(self.config)

    def search(self, query: str) -> SearchResults:
        return search_all(query, self.config)

    def debounced_search(self, callback, on_clear=None) -> SearchDebouncer:
        """Build a debouncer that delivers SearchResults to ``callback``."""
        browse = self.config.browse
        return SearchDebouncer(
            lambda query: callback(self.search(query)),
            delay=browse.debounce_seconds,
            min_length=browse.min_query_length,
            on_clear=on_clear,
        )

    def artist(self, artist_id: str) -> Optional[ArtistDetail]:
        return load_artist_detail(artist_id, self.config, self.library)

    def album(self, album_id: str) -> Optional[AlbumDetail]:
        return load_album_detail(album_id, self.config, self.library)

    def track(self, track_id: str) -> Optional[Track]:
        raw = rapidapi.get_track(track_id, **self.config.playback.client_options())
        if not raw:
            return None
        try:
            return normalize_track(raw)
        except ValueError as e:
            logger.error(f"Invalid track payload for {track_id}: {e}")
            return None

    def stream_url(self, track: Track) -> Optional[str]:
        return resolve_stream_url(track, self.config)

    # Library

    def favorite_item(self, item_type: str, item_id: str) -> Optional[LibraryItem]:
        """Look up an artist, album or track remotely and wrap it as a favorite."""
        try:
            if item_type == "artist":
                raw = deezer.get_artist(item_id, **self.config.metadata.client_options())
                return LibraryItem.from_artist(normalize_artist(raw)) if raw else None
            if item_type == "album":
                raw = deezer.get_album(item_id, **self.config.metadata.client_options())
                return LibraryItem.from_album(normalize_album(raw)) if raw else None
        except ValueError as e:
            logger.error(f"Invalid {item_type} payload for {item_id}: {e}")
            return None
        if item_type == "track":
            track = self.track(item_id)
            return LibraryItem.from_track(track) if track else None
        raise ValueError(f"Unknown item type: {item_type}")

    def favorites(self) -> List[LibraryItem]:
        return self.library.get_favorites()

    def playlists(self) -> List[Playlist]:
        return self.library.get_playlists()
