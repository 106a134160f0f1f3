"""Unit tests for the Deezer metadata and RapidAPI track clients."""

import unittest
from unittest.mock import Mock, patch

import requests

from soundshelf.providers import deezer, rapidapi


def mock_response(payload=None, status_error=None, json_error=None):
    response = Mock()
    response.raise_for_status = Mock(side_effect=status_error)
    if json_error:
        response.json = Mock(side_effect=json_error)
    else:
        response.json = Mock(return_value=payload)
    return response


class TestDeezerProvider(unittest.TestCase):
    """Metadata service lookups."""

    def test_popular_artists_requests_chart(self):
        with patch("soundshelf.providers.deezer.requests.get") as mock_get:
            mock_get.return_value = mock_response({"data": [{"id": 27, "name": "Daft Punk"}]})

            artists = deezer.get_popular_artists(8)

            self.assertEqual(artists, [{"id": 27, "name": "Daft Punk"}])
            url = mock_get.call_args.args[0]
            self.assertEqual(url, "https://api.deezer.com/chart/0/artists")
            self.assertEqual(mock_get.call_args.kwargs["params"], {"limit": 8})

    def test_search_albums_passes_query(self):
        with patch("soundshelf.providers.deezer.requests.get") as mock_get:
            mock_get.return_value = mock_response({"data": []})

            deezer.search_albums("daft punk", limit=5, base_url="http://localhost:9000/")

            self.assertEqual(mock_get.call_args.args[0], "http://localhost:9000/search/album")
            self.assertEqual(mock_get.call_args.kwargs["params"], {"q": "daft punk", "limit": 5})

    def test_blank_search_makes_no_request(self):
        with patch("soundshelf.providers.deezer.requests.get") as mock_get:
            self.assertEqual(deezer.search_artists("   "), [])
            mock_get.assert_not_called()

    def test_get_album_returns_object(self):
        with patch("soundshelf.providers.deezer.requests.get") as mock_get:
            mock_get.return_value = mock_response({"id": 302127, "title": "Discovery"})

            album = deezer.get_album(302127)

            self.assertEqual(album["title"], "Discovery")
            self.assertTrue(mock_get.call_args.args[0].endswith("/album/302127"))

    def test_artist_top_tracks(self):
        with patch("soundshelf.providers.deezer.requests.get") as mock_get:
            mock_get.return_value = mock_response({"data": [{"id": 3135556, "title": "Harder"}]})

            tracks = deezer.get_artist_tracks(27, limit=5)

            self.assertEqual(tracks[0]["id"], 3135556)
            self.assertEqual(mock_get.call_args.args[0], "https://api.deezer.com/artist/27/top")
            self.assertEqual(mock_get.call_args.kwargs["params"], {"limit": 5})

    def test_album_tracks(self):
        with patch("soundshelf.providers.deezer.requests.get") as mock_get:
            mock_get.return_value = mock_response({"data": [{"id": 1}, {"id": 2}]})

            tracks = deezer.get_album_tracks(302127)

            self.assertEqual([t["id"] for t in tracks], [1, 2])
            self.assertEqual(mock_get.call_args.args[0], "https://api.deezer.com/album/302127/tracks")
            self.assertEqual(mock_get.call_args.kwargs["params"], {"limit": 50})

    def test_transport_error_returns_empty(self):
        with patch("soundshelf.providers.deezer.requests.get", side_effect=requests.ConnectionError("down")):
            self.assertEqual(deezer.get_popular_albums(), [])
            self.assertIsNone(deezer.get_artist(27))

    def test_http_error_returns_empty(self):
        with patch("soundshelf.providers.deezer.requests.get") as mock_get:
            mock_get.return_value = mock_response(status_error=requests.HTTPError("500"))
            self.assertEqual(deezer.get_artist_albums(27), [])

    def test_invalid_json_returns_none(self):
        with patch("soundshelf.providers.deezer.requests.get") as mock_get:
            mock_get.return_value = mock_response(json_error=ValueError("not json"))
            self.assertIsNone(deezer.get_album(1))

    def test_error_payload_is_no_data(self):
        with patch("soundshelf.providers.deezer.requests.get") as mock_get:
            mock_get.return_value = mock_response({"error": {"type": "DataException", "code": 800}})
            self.assertIsNone(deezer.get_artist(0))
            self.assertEqual(deezer.get_album_tracks(0), [])


class TestRapidApiProvider(unittest.TestCase):
    """Playback service lookups."""

    def test_search_tracks_normalizes_empty_preview(self):
        with patch("soundshelf.providers.rapidapi.requests.get") as mock_get:
            mock_get.return_value = mock_response(
                {"data": [{"id": 1, "preview": ""}, {"id": 2, "preview": "https://p/2.mp3"}]}
            )

            tracks = rapidapi.search_tracks("harder better")

            self.assertIsNone(tracks[0]["preview"])
            self.assertEqual(tracks[1]["preview"], "https://p/2.mp3")

    def test_api_key_headers(self):
        with patch("soundshelf.providers.rapidapi.requests.get") as mock_get:
            mock_get.return_value = mock_response({"data": []})

            rapidapi.get_popular_tracks(10, api_key="secret")

            headers = mock_get.call_args.kwargs["headers"]
            self.assertEqual(headers["x-rapidapi-key"], "secret")
            self.assertEqual(headers["x-rapidapi-host"], rapidapi.RAPIDAPI_HOST)
            self.assertEqual(mock_get.call_args.kwargs["params"], {"q": "pop", "limit": 10})

    def test_no_key_headers_without_api_key(self):
        with patch("soundshelf.providers.rapidapi.requests.get") as mock_get:
            mock_get.return_value = mock_response({"data": []})
            rapidapi.search_tracks("abc")
            self.assertNotIn("x-rapidapi-key", mock_get.call_args.kwargs["headers"])

    def test_streaming_url_requires_https(self):
        with patch("soundshelf.providers.rapidapi.requests.get") as mock_get:
            mock_get.return_value = mock_response({"id": 1, "preview": "http://insecure/p.mp3"})
            self.assertIsNone(rapidapi.get_track_streaming_url(1))

            mock_get.return_value = mock_response({"id": 1, "preview": "https://secure/p.mp3"})
            self.assertEqual(rapidapi.get_track_streaming_url(1), "https://secure/p.mp3")

    def test_streaming_url_without_preview(self):
        with patch("soundshelf.providers.rapidapi.requests.get") as mock_get:
            mock_get.return_value = mock_response({"id": 1, "preview": None})
            self.assertIsNone(rapidapi.get_track_streaming_url(1))

    def test_failure_returns_empty(self):
        with patch("soundshelf.providers.rapidapi.requests.get", side_effect=requests.Timeout("slow")):
            self.assertEqual(rapidapi.search_tracks("abc"), [])
            self.assertIsNone(rapidapi.get_track(1))
            self.assertIsNone(rapidapi.get_track_streaming_url(1))


if __name__ == "__main__":
    unittest.main()
