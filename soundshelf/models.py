"""Data models for Soundshelf."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from soundshelf.utils.helpers import DEFAULT_DURATION_MS, coerce_id

ItemType = Literal["artist", "album", "track"]


class Record(BaseModel):
    """Base for every record that is stored or compared by ``id``.

    Attributes are snake_case in Python and camelCase in persisted JSON.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        return coerce_id(value)

    def to_record(self) -> Dict[str, Any]:
        """Convert to the JSON-ready dict used in storage."""
        return self.model_dump(mode="json", by_alias=True)


class Artist(Record):
    """Canonical artist."""

    name: str = ""
    thumbnail_url: str = ""
    genre: str = ""

    def __str__(self) -> str:
        return self.name


class Album(Record):
    """Canonical album."""

    title: str = ""
    artist_name: str = ""
    thumbnail_url: str = ""
    year_released: str = ""
    track_count: int = 0

    def __str__(self) -> str:
        return f"{self.artist_name} - {self.title}"


class Track(Record):
    """Canonical track with an optional playable preview."""

    title: str = ""
    artist_name: str = ""
    album_title: str = ""
    duration_ms: int = DEFAULT_DURATION_MS
    thumbnail_url: str = ""
    preview_url: Optional[str] = None
    source_track_id: str = ""

    @field_validator("duration_ms", mode="before")
    @classmethod
    def _default_duration(cls, value: Any) -> int:
        try:
            duration = int(value)
        except (TypeError, ValueError):
            return DEFAULT_DURATION_MS
        return duration if duration > 0 else DEFAULT_DURATION_MS

    @field_validator("source_track_id", mode="before")
    @classmethod
    def _coerce_source_id(cls, value: Any) -> str:
        return coerce_id(value)

    @property
    def playable(self) -> bool:
        return bool(self.preview_url)

    def __str__(self) -> str:
        return f"{self.artist_name} - {self.title}"


class LibraryItem(Record):
    """A favorite entry.

    Besides the display fields, a favorite carries the fields of the record
    it was built from (``artistName``, ``previewUrl``, ...) as extras, which
    are stored and read back verbatim.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    type: ItemType
    display_title: str = ""
    display_thumbnail: Optional[str] = None

    @classmethod
    def _from_record(cls, item_type: ItemType, record: Record, title: str) -> "LibraryItem":
        fields = record.model_dump(mode="json", by_alias=True, exclude={"id"})
        thumbnail = fields.get("thumbnailUrl") or None
        return cls(
            id=record.id,
            type=item_type,
            display_title=title,
            display_thumbnail=thumbnail,
            **fields,
        )

    @classmethod
    def from_artist(cls, artist: Artist) -> "LibraryItem":
        return cls._from_record("artist", artist, artist.name)

    @classmethod
    def from_album(cls, album: Album) -> "LibraryItem":
        return cls._from_record("album", album, album.title)

    @classmethod
    def from_track(cls, track: Track) -> "LibraryItem":
        return cls._from_record("track", track, track.title)

    def to_track(self) -> Optional[Track]:
        """Rebuild the Track a track favorite was made from."""
        if self.type != "track":
            return None
        return Track.model_validate(self.to_record())

    def __str__(self) -> str:
        return f"{self.display_title} ({self.type})"


class Playlist(Record):
    """A named, ordered collection of tracks."""

    name: str
    tracks: List[Track] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def has_track(self, track_id: Any) -> bool:
        track_id = coerce_id(track_id)
        return any(track.id == track_id for track in self.tracks)

    @property
    def total_duration_ms(self) -> int:
        return sum(track.duration_ms for track in self.tracks)

    def __str__(self) -> str:
        return f"{self.name} ({len(self.tracks)} tracks)"


class HomeFeed(BaseModel):
    """Discovery content for the home view."""

    artists: List[Artist] = Field(default_factory=list)
    albums: List[Album] = Field(default_factory=list)
    tracks: List[Track] = Field(default_factory=list)


class SearchResults(BaseModel):
    """Combined search results across both services."""

    query: str = ""
    artists: List[Artist] = Field(default_factory=list)
    albums: List[Album] = Field(default_factory=list)
    tracks: List[Track] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.artists or self.albums or self.tracks)


class ArtistDetail(BaseModel):
    """An artist with its albums and playable tracks."""

    artist: Artist
    albums: List[Album] = Field(default_factory=list)
    tracks: List[Track] = Field(default_factory=list)
    is_favorite: bool = False


class AlbumDetail(BaseModel):
    """An album with the playable tracks matched to it."""

    album: Album
    tracks: List[Track] = Field(default_factory=list)
    is_favorite: bool = False
