"""Soundshelf - music browsing with a local library of favorites and playlists."""

__version__ = "0.1.0"

from soundshelf.app import Soundshelf
from soundshelf.models import Album, Artist, LibraryItem, Playlist, Track
from soundshelf.config import SoundshelfConfig

__all__ = [
    "Soundshelf",
    "SoundshelfConfig",
    "Album",
    "Artist",
    "LibraryItem",
    "Playlist",
    "Track",
]
