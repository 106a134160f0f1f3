"""Normalization of external service payloads into canonical records.

Two services feed Soundshelf: the metadata service (artist and album
browsing) and the playback-metadata service (track objects carrying preview
URLs). Every function here is pure: the same payload always produces the same
record, and nothing touches the network or storage.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from soundshelf.models import Album, Artist, Track
from soundshelf.utils.helpers import DEFAULT_DURATION_MS, coerce_id

logger = logging.getLogger("soundshelf.normalize")

T = TypeVar("T")


class NormalizationError(ValueError):
    """Raised when a payload cannot be turned into a canonical record."""


def _require_id(raw: Dict[str, Any], kind: str) -> str:
    if not isinstance(raw, dict):
        raise NormalizationError(f"Expected a {kind} object, got {type(raw).__name__}")
    identifier = coerce_id(raw.get("id"))
    if not identifier:
        raise NormalizationError(f"{kind.capitalize()} payload has no id")
    return identifier


def _text(value: Any) -> str:
    """Scalar payload values as text; missing values and nested objects become ''."""
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value)


def _nested(raw: Dict[str, Any], key: str, field: str) -> str:
    value = raw.get(key)
    if isinstance(value, dict):
        return _text(value.get(field))
    return ""


def _duration_ms(seconds: Any) -> int:
    try:
        duration = int(float(seconds) * 1000)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_DURATION_MS
    return duration if duration > 0 else DEFAULT_DURATION_MS


def normalize_artist(raw: Dict[str, Any]) -> Artist:
    """Convert a metadata-service artist to an Artist."""
    artist_id = _require_id(raw, "artist")
    return Artist(
        id=artist_id,
        name=_text(raw.get("name")),
        thumbnail_url=_text(raw.get("picture_medium")),
        genre=_text(raw.get("genre")),
    )


def normalize_album(raw: Dict[str, Any]) -> Album:
    """Convert a metadata-service album to an Album.

    ``year_released`` is the first four characters of ``release_date``.
    """
    album_id = _require_id(raw, "album")
    release_date = raw.get("release_date")
    try:
        track_count = int(raw.get("nb_tracks") or 0)
    except (TypeError, ValueError):
        track_count = 0
    return Album(
        id=album_id,
        title=_text(raw.get("title")),
        artist_name=_nested(raw, "artist", "name"),
        thumbnail_url=_text(raw.get("cover_medium")),
        year_released=release_date[:4] if isinstance(release_date, str) else "",
        track_count=track_count,
    )


def normalize_track(raw: Dict[str, Any]) -> Track:
    """Convert a playback-service track to a Track.

    A missing or zero ``duration`` becomes the 3 minute default. A missing
    or empty ``preview`` becomes None, meaning "unplayable".
    """
    track_id = _require_id(raw, "track")
    return Track(
        id=track_id,
        title=_text(raw.get("title")),
        artist_name=_nested(raw, "artist", "name"),
        album_title=_nested(raw, "album", "title"),
        duration_ms=_duration_ms(raw.get("duration")),
        thumbnail_url=_nested(raw, "album", "cover_medium"),
        preview_url=_text(raw.get("preview") or None) or None,
        source_track_id=track_id,
    )


def _normalize_many(
    items: Optional[Iterable[Dict[str, Any]]],
    normalizer: Callable[[Dict[str, Any]], T],
) -> List[T]:
    records: List[T] = []
    for raw in items or []:
        try:
            records.append(normalizer(raw))
        except ValueError as exc:
            logger.debug(f"Skipping payload: {exc}")
            continue
    return records


def normalize_artists(items: Optional[Iterable[Dict[str, Any]]]) -> List[Artist]:
    return _normalize_many(items, normalize_artist)


def normalize_albums(items: Optional[Iterable[Dict[str, Any]]]) -> List[Album]:
    return _normalize_many(items, normalize_album)


def normalize_tracks(items: Optional[Iterable[Dict[str, Any]]]) -> List[Track]:
    return _normalize_many(items, normalize_track)
