"""Workflows combining the providers, normalization and the library store."""

from soundshelf.workflows.browse import (
    load_album_detail,
    load_artist_detail,
    load_home_feed,
    resolve_stream_url,
    search_all,
)
from soundshelf.workflows.search import SearchDebouncer

__all__ = [
    "SearchDebouncer",
    "load_album_detail",
    "load_artist_detail",
    "load_home_feed",
    "resolve_stream_url",
    "search_all",
]
