"""Deezer track client (RapidAPI gateway) for Soundshelf.

Only used for track objects, which carry the 30 second preview URLs used for
playback. Failures are logged and come back as an empty list or None.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger("soundshelf.providers.rapidapi")

RAPIDAPI_HOST = "deezerdevs-deezer.p.rapidapi.com"
RAPIDAPI_BASE = f"https://{RAPIDAPI_HOST}"
DEFAULT_TIMEOUT = 10


def _headers(api_key: Optional[str], host: str) -> Dict[str, str]:
    headers = {"Accept": "application/json"}
    if api_key:
        headers["x-rapidapi-host"] = host
        headers["x-rapidapi-key"] = api_key
    return headers


def _request(
    endpoint: str,
    params: Optional[Dict[str, Any]] = None,
    base_url: str = RAPIDAPI_BASE,
    api_key: Optional[str] = None,
    host: str = RAPIDAPI_HOST,
    timeout: int = DEFAULT_TIMEOUT,
) -> Optional[Dict[str, Any]]:
    """GET ``endpoint`` and return the decoded JSON object, or None on failure."""
    url = f"{base_url.rstrip('/')}{endpoint}"
    try:
        response = requests.get(
            url, params=params, headers=_headers(api_key, host), timeout=timeout
        )
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.error(f"RapidAPI error for {endpoint}: {exc}")
        return None

    if not isinstance(data, dict) or "error" in data:
        logger.error(f"RapidAPI returned no usable data for {endpoint}")
        return None
    return data


def _track_list(data: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    items = data.get("data") if data else None
    if not isinstance(items, list):
        return []
    # Empty preview strings mean "no preview"
    return [{**track, "preview": track.get("preview") or None} for track in items if isinstance(track, dict)]


def search_tracks(query: str, limit: int = 20, **kwargs: Any) -> List[Dict[str, Any]]:
    """Search for tracks."""
    if not query or not query.strip():
        return []
    return _track_list(_request("/search", {"q": query, "limit": limit}, **kwargs))


def get_popular_tracks(limit: int = 20, **kwargs: Any) -> List[Dict[str, Any]]:
    """Get popular tracks; the gateway has no chart endpoint, so this searches for pop."""
    return _track_list(_request("/search", {"q": "pop", "limit": limit}, **kwargs))


def get_track(track_id: Any, **kwargs: Any) -> Optional[Dict[str, Any]]:
    return _request(f"/track/{track_id}", **kwargs)


def get_track_streaming_url(track_id: Any, **kwargs: Any) -> Optional[str]:
    """Return the track's https preview URL, or None when it has none."""
    logger.debug(f"Getting streaming URL for track {track_id}")
    track = get_track(track_id, **kwargs)
    if not track or not track.get("preview"):
        logger.info(f"No preview URL available for track {track_id}")
        return None

    preview_url = track["preview"]
    if not isinstance(preview_url, str) or not preview_url.startswith("https://"):
        logger.warning(f"Invalid preview URL format for track {track_id}: {preview_url}")
        return None
    return preview_url
