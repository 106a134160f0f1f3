"""Deezer metadata client for Soundshelf.

Read-only lookups of artists and albums (charts, search, by id). Every
function returns raw payloads and turns any failure into an empty list or
None.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger("soundshelf.providers.deezer")

DEEZER_API_BASE = "https://api.deezer.com"
DEFAULT_TIMEOUT = 10


def _request(
    endpoint: str,
    params: Optional[Dict[str, Any]] = None,
    base_url: str = DEEZER_API_BASE,
    timeout: int = DEFAULT_TIMEOUT,
) -> Optional[Dict[str, Any]]:
    """GET ``endpoint`` and return the decoded JSON object, or None on failure."""
    url = f"{base_url.rstrip('/')}{endpoint}"
    try:
        response = requests.get(url, params=params, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.error(f"Deezer API error for {endpoint}: {exc}")
        return None

    if not isinstance(data, dict):
        logger.error(f"Unexpected Deezer response for {endpoint}: {type(data).__name__}")
        return None
    if "error" in data:
        logger.error(f"Deezer API returned an error for {endpoint}: {data['error']}")
        return None
    return data


def _request_list(endpoint: str, params: Optional[Dict[str, Any]] = None, **kwargs: Any) -> List[Dict[str, Any]]:
    data = _request(endpoint, params, **kwargs)
    if not data:
        return []
    items = data.get("data")
    return items if isinstance(items, list) else []


def get_popular_artists(limit: int = 20, **kwargs: Any) -> List[Dict[str, Any]]:
    """Get popular artists from the charts."""
    return _request_list("/chart/0/artists", {"limit": limit}, **kwargs)


def get_popular_albums(limit: int = 20, **kwargs: Any) -> List[Dict[str, Any]]:
    """Get popular albums from the charts."""
    return _request_list("/chart/0/albums", {"limit": limit}, **kwargs)


def search_artists(query: str, limit: int = 20, **kwargs: Any) -> List[Dict[str, Any]]:
    if not query or not query.strip():
        return []
    return _request_list("/search/artist", {"q": query, "limit": limit}, **kwargs)


def search_albums(query: str, limit: int = 20, **kwargs: Any) -> List[Dict[str, Any]]:
    if not query or not query.strip():
        return []
    return _request_list("/search/album", {"q": query, "limit": limit}, **kwargs)


def get_artist(artist_id: Any, **kwargs: Any) -> Optional[Dict[str, Any]]:
    return _request(f"/artist/{artist_id}", **kwargs)


def get_album(album_id: Any, **kwargs: Any) -> Optional[Dict[str, Any]]:
    return _request(f"/album/{album_id}", **kwargs)


def get_artist_tracks(artist_id: Any, limit: int = 20, **kwargs: Any) -> List[Dict[str, Any]]:
    """Get an artist's top tracks."""
    return _request_list(f"/artist/{artist_id}/top", {"limit": limit}, **kwargs)


def get_artist_albums(artist_id: Any, limit: int = 20, **kwargs: Any) -> List[Dict[str, Any]]:
    return _request_list(f"/artist/{artist_id}/albums", {"limit": limit}, **kwargs)


def get_album_tracks(album_id: Any, limit: int = 50, **kwargs: Any) -> List[Dict[str, Any]]:
    return _request_list(f"/album/{album_id}/tracks", {"limit": limit}, **kwargs)
