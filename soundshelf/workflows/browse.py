"""Browse workflows: home feed, search, detail views and playback resolution.

These stitch the two services together. Artist and album metadata comes from
the metadata service; tracks always come from the playback service, found by
searching for the artist and album or title text. That join is best effort:
a text search can return an unrelated track.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Optional

from soundshelf.config import SoundshelfConfig
from soundshelf.core.library import LibraryStore
from soundshelf.core.normalize import (
    normalize_album,
    normalize_albums,
    normalize_artist,
    normalize_artists,
    normalize_tracks,
)
from soundshelf.models import AlbumDetail, ArtistDetail, HomeFeed, SearchResults, Track
from soundshelf.providers import deezer, rapidapi

logger = logging.getLogger("soundshelf.browse")


def _safe_list(fetch: Callable[[], List[Any]], label: str) -> List[Any]:
    """Run ``fetch``; a failing section becomes an empty list."""
    try:
        return fetch() or []
    except Exception as e:
        logger.error(f"Failed to load {label}: {e}")
        return []


def load_home_feed(config: Optional[SoundshelfConfig] = None) -> HomeFeed:
    """Load popular artists, albums and tracks in parallel."""
    config = config or SoundshelfConfig()
    browse = config.browse
    metadata = config.metadata.client_options()
    playback = config.playback.client_options()

    with ThreadPoolExecutor(max_workers=browse.max_workers) as executor:
        artists_future = executor.submit(
            _safe_list,
            lambda: deezer.get_popular_artists(browse.home_artists, **metadata),
            "popular artists",
        )
        albums_future = executor.submit(
            _safe_list,
            lambda: deezer.get_popular_albums(browse.home_albums, **metadata),
            "popular albums",
        )
        tracks_future = executor.submit(
            _safe_list,
            lambda: rapidapi.get_popular_tracks(browse.home_tracks, **playback),
            "popular tracks",
        )

        feed = HomeFeed(
            artists=normalize_artists(artists_future.result()),
            albums=normalize_albums(albums_future.result()),
            tracks=normalize_tracks(tracks_future.result()),
        )

    logger.debug(
        f"Home feed: {len(feed.artists)} artists, {len(feed.albums)} albums, {len(feed.tracks)} tracks"
    )
    return feed


def search_all(query: str, config: Optional[SoundshelfConfig] = None) -> SearchResults:
    """Search artists, albums and tracks in parallel.

    Queries shorter than ``browse.min_query_length`` return empty results
    without touching the network.
    """
    config = config or SoundshelfConfig()
    query = (query or "").strip()
    if len(query) < config.browse.min_query_length:
        return SearchResults(query=query)

    limit = config.browse.search_limit
    metadata = config.metadata.client_options()
    playback = config.playback.client_options()

    with ThreadPoolExecutor(max_workers=config.browse.max_workers) as executor:
        artists_future = executor.submit(
            _safe_list, lambda: deezer.search_artists(query, limit, **metadata), "artist search"
        )
        albums_future = executor.submit(
            _safe_list, lambda: deezer.search_albums(query, limit, **metadata), "album search"
        )
        tracks_future = executor.submit(
            _safe_list, lambda: rapidapi.search_tracks(query, limit, **playback), "track search"
        )

        results = SearchResults(
            query=query,
            artists=normalize_artists(artists_future.result()),
            albums=normalize_albums(albums_future.result()),
            tracks=normalize_tracks(tracks_future.result()),
        )

    logger.info(
        f'Search "{query}": {len(results.artists)} artists, '
        f"{len(results.albums)} albums, {len(results.tracks)} tracks"
    )
    return results


def load_artist_detail(
    artist_id: Any,
    config: Optional[SoundshelfConfig] = None,
    store: Optional[LibraryStore] = None,
) -> Optional[ArtistDetail]:
    """Load an artist, its albums, and playable tracks matched by artist name."""
    config = config or SoundshelfConfig()
    metadata = config.metadata.client_options()
    limit = config.browse.detail_limit

    with ThreadPoolExecutor(max_workers=2) as executor:
        artist_future = executor.submit(deezer.get_artist, artist_id, **metadata)
        albums_future = executor.submit(
            _safe_list, lambda: deezer.get_artist_albums(artist_id, limit, **metadata), "artist albums"
        )
        raw_artist = artist_future.result()
        raw_albums = albums_future.result()

    if not raw_artist:
        logger.info(f"Artist not found: {artist_id}")
        return None
    try:
        artist = normalize_artist(raw_artist)
    except ValueError as e:
        logger.error(f"Invalid artist payload for {artist_id}: {e}")
        return None

    tracks: List[Track] = []
    if artist.name:
        tracks = normalize_tracks(
            rapidapi.search_tracks(artist.name, limit, **config.playback.client_options())
        )

    return ArtistDetail(
        artist=artist,
        albums=normalize_albums(raw_albums),
        tracks=tracks,
        is_favorite=store.is_favorite(artist.id) if store else False,
    )


def load_album_detail(
    album_id: Any,
    config: Optional[SoundshelfConfig] = None,
    store: Optional[LibraryStore] = None,
) -> Optional[AlbumDetail]:
    """Load an album and the playable tracks found for "<artist> <title>"."""
    config = config or SoundshelfConfig()
    raw_album = deezer.get_album(album_id, **config.metadata.client_options())
    if not raw_album:
        logger.info(f"Album not found: {album_id}")
        return None
    try:
        album = normalize_album(raw_album)
    except ValueError as e:
        logger.error(f"Invalid album payload for {album_id}: {e}")
        return None

    search_query = f"{album.artist_name} {album.title}".strip()
    tracks = normalize_tracks(
        rapidapi.search_tracks(
            search_query, config.browse.detail_limit, **config.playback.client_options()
        )
    )

    return AlbumDetail(
        album=album,
        tracks=tracks,
        is_favorite=store.is_favorite(album.id) if store else False,
    )


def resolve_stream_url(track: Track, config: Optional[SoundshelfConfig] = None) -> Optional[str]:
    """Find a playable URL for ``track``.

    Tries, in order: the track's own preview URL, the playback service's
    preview for its id, and the first result of searching "<title> <artist>".
    None means the track is unplayable.
    """
    if track.preview_url:
        return track.preview_url

    config = config or SoundshelfConfig()
    playback = config.playback.client_options()

    track_id = track.source_track_id or track.id
    if track_id:
        stream_url = rapidapi.get_track_streaming_url(track_id, **playback)
        if stream_url:
            return stream_url

    search_query = f"{track.title} {track.artist_name}".strip()
    if not search_query:
        return None
    results = normalize_tracks(rapidapi.search_tracks(search_query, 1, **playback))
    if not results:
        logger.info(f"Track not available for playback: {track}")
        return None

    match = results[0]
    logger.debug(f"Matched {track} to {match} ({match.id})")
    if match.preview_url:
        return match.preview_url
    if match.id == track_id:
        return None
    return rapidapi.get_track_streaming_url(match.id, **playback)
