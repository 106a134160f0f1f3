import unittest

from soundshelf.models import Album, Artist, LibraryItem, Playlist, Track


class TrackModelTests(unittest.TestCase):
    def test_id_coerced_to_string(self):
        self.assertEqual(Track(id=42).id, "42")

    def test_duration_never_zero(self):
        self.assertEqual(Track(id="1", duration_ms=0).duration_ms, 180000)
        self.assertEqual(Track(id="1", duration_ms=None).duration_ms, 180000)
        self.assertEqual(Track(id="1", duration_ms=-5).duration_ms, 180000)
        self.assertEqual(Track(id="1", duration_ms=1500).duration_ms, 1500)

    def test_camel_case_aliases(self):
        track = Track.model_validate({"id": "1", "artistName": "A", "durationMs": 1000})
        self.assertEqual(track.artist_name, "A")
        self.assertEqual(track.duration_ms, 1000)

    def test_playable(self):
        self.assertFalse(Track(id="1").playable)
        self.assertTrue(Track(id="1", preview_url="https://x/p.mp3").playable)


class LibraryItemTests(unittest.TestCase):
    def test_from_album(self):
        item = LibraryItem.from_album(
            Album(id="5", title="Discovery", artist_name="Daft Punk", thumbnail_url="https://img/a.jpg")
        )
        record = item.to_record()
        self.assertEqual(item.type, "album")
        self.assertEqual(item.display_title, "Discovery")
        self.assertEqual(item.display_thumbnail, "https://img/a.jpg")
        self.assertEqual(record["artistName"], "Daft Punk")
        self.assertEqual(record["yearReleased"], "")

    def test_missing_thumbnail_is_none(self):
        item = LibraryItem.from_artist(Artist(id="1", name="X"))
        self.assertIsNone(item.display_thumbnail)

    def test_to_track_only_for_tracks(self):
        self.assertIsNone(LibraryItem.from_artist(Artist(id="1", name="X")).to_track())
        track = LibraryItem.from_track(Track(id="9", title="T", duration_ms=5000)).to_track()
        self.assertEqual(track.id, "9")
        self.assertEqual(track.duration_ms, 5000)

    def test_rejects_unknown_type(self):
        with self.assertRaises(ValueError):
            LibraryItem(id="1", type="podcast")


class PlaylistModelTests(unittest.TestCase):
    def test_has_track_and_total_duration(self):
        playlist = Playlist(id="1", name="P", tracks=[Track(id=1, duration_ms=1000), Track(id=2)])
        self.assertTrue(playlist.has_track(1))
        self.assertFalse(playlist.has_track("3"))
        self.assertEqual(playlist.total_duration_ms, 181000)

    def test_created_at_serialized_as_iso_string(self):
        record = Playlist(id="1", name="P").to_record()
        self.assertIn("createdAt", record)
        self.assertIsInstance(record["createdAt"], str)

    def test_reads_persisted_record(self):
        playlist = Playlist.model_validate(
            {"id": "1", "name": "P", "tracks": [], "createdAt": "2024-01-01T00:00:00.000Z"}
        )
        self.assertEqual(playlist.created_at.year, 2024)


if __name__ == "__main__":
    unittest.main()
