"""Tests for normalization of service payloads."""

import unittest

from soundshelf.core.normalize import (
    NormalizationError,
    normalize_album,
    normalize_albums,
    normalize_artist,
    normalize_artists,
    normalize_track,
    normalize_tracks,
)

TRACK_PAYLOAD = {
    "id": 3135556,
    "title": "Harder, Better, Faster, Stronger",
    "duration": 224,
    "preview": "https://cdns-preview-d.dzcdn.net/stream/abc.mp3",
    "artist": {"id": 27, "name": "Daft Punk"},
    "album": {"id": 302127, "title": "Discovery", "cover_medium": "https://img/discovery.jpg"},
}


class TestNormalizeArtist(unittest.TestCase):
    def test_maps_fields(self):
        artist = normalize_artist(
            {"id": 27, "name": "Daft Punk", "picture_medium": "https://img/dp.jpg", "genre": "Electro"}
        )
        self.assertEqual(artist.id, "27")
        self.assertEqual(artist.name, "Daft Punk")
        self.assertEqual(artist.thumbnail_url, "https://img/dp.jpg")
        self.assertEqual(artist.genre, "Electro")

    def test_missing_picture_defaults_to_empty_string(self):
        artist = normalize_artist({"id": 27, "name": "Daft Punk"})
        self.assertEqual(artist.thumbnail_url, "")
        self.assertEqual(artist.genre, "")

    def test_missing_id_raises(self):
        with self.assertRaises(NormalizationError):
            normalize_artist({"name": "Nobody"})


class TestNormalizeAlbum(unittest.TestCase):
    def test_maps_fields(self):
        album = normalize_album(
            {
                "id": 302127,
                "title": "Discovery",
                "cover_medium": "https://img/discovery.jpg",
                "release_date": "2001-03-07",
                "nb_tracks": 14,
                "artist": {"name": "Daft Punk"},
            }
        )
        self.assertEqual(album.id, "302127")
        self.assertEqual(album.title, "Discovery")
        self.assertEqual(album.artist_name, "Daft Punk")
        self.assertEqual(album.year_released, "2001")
        self.assertEqual(album.track_count, 14)

    def test_missing_optional_fields(self):
        album = normalize_album({"id": 1, "title": "Untitled"})
        self.assertEqual(album.year_released, "")
        self.assertEqual(album.artist_name, "")
        self.assertEqual(album.thumbnail_url, "")
        self.assertEqual(album.track_count, 0)


class TestNormalizeTrack(unittest.TestCase):
    def test_maps_fields(self):
        track = normalize_track(TRACK_PAYLOAD)
        self.assertEqual(track.id, "3135556")
        self.assertEqual(track.source_track_id, "3135556")
        self.assertEqual(track.artist_name, "Daft Punk")
        self.assertEqual(track.album_title, "Discovery")
        self.assertEqual(track.thumbnail_url, "https://img/discovery.jpg")
        self.assertEqual(track.duration_ms, 224000)
        self.assertEqual(track.preview_url, TRACK_PAYLOAD["preview"])

    def test_zero_duration_uses_default(self):
        self.assertEqual(normalize_track({"id": 1, "duration": 0}).duration_ms, 180000)

    def test_missing_duration_uses_default(self):
        self.assertEqual(normalize_track({"id": 1}).duration_ms, 180000)

    def test_duration_seconds_to_ms(self):
        self.assertEqual(normalize_track({"id": 1, "duration": 200}).duration_ms, 200000)

    def test_fractional_duration_keeps_milliseconds(self):
        self.assertEqual(normalize_track({"id": 1, "duration": 200.5}).duration_ms, 200500)
        self.assertEqual(normalize_track({"id": 1, "duration": "31.25"}).duration_ms, 31250)

    def test_non_string_text_fields_are_coerced(self):
        track = normalize_track({"id": 2, "title": 1999, "artist": {"name": 311}, "preview": 0})
        self.assertEqual(track.title, "1999")
        self.assertEqual(track.artist_name, "311")
        self.assertIsNone(track.preview_url)

    def test_missing_preview_is_none(self):
        self.assertIsNone(normalize_track({"id": 1, "preview": None}).preview_url)
        self.assertIsNone(normalize_track({"id": 1, "preview": ""}).preview_url)

    def test_numeric_id_is_coerced(self):
        track = normalize_track({"id": 12345})
        self.assertEqual(track.id, "12345")
        self.assertIsInstance(track.id, str)

    def test_output_has_only_canonical_fields(self):
        record = normalize_track(TRACK_PAYLOAD).to_record()
        self.assertNotIn("preview", record)
        self.assertNotIn("duration", record)
        self.assertEqual(
            set(record),
            {"id", "title", "artistName", "albumTitle", "durationMs", "thumbnailUrl", "previewUrl", "sourceTrackId"},
        )

    def test_is_pure(self):
        self.assertEqual(normalize_track(TRACK_PAYLOAD), normalize_track(TRACK_PAYLOAD))
        self.assertEqual(TRACK_PAYLOAD["id"], 3135556)


class TestBatchNormalization(unittest.TestCase):
    def test_skips_malformed_entries(self):
        tracks = normalize_tracks([{"id": 1, "title": "A"}, {"title": "no id"}, "junk", {"id": 2}])
        self.assertEqual([t.id for t in tracks], ["1", "2"])

    def test_non_string_fields_do_not_drop_rows(self):
        tracks = normalize_tracks([{"id": 1, "title": "ok"}, {"id": 2, "title": 1999}])
        self.assertEqual([t.title for t in tracks], ["ok", "1999"])

        artists = normalize_artists([{"id": 1, "name": 311}, {"id": 2, "name": {"bad": True}}])
        self.assertEqual([a.name for a in artists], ["311", ""])

    def test_none_is_empty(self):
        self.assertEqual(normalize_albums(None), [])


if __name__ == "__main__":
    unittest.main()
