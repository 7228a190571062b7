"""
Playlist target and command dispatch
"""
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import tempfile
import unittest

from gesture.types import Command
from media.player import MediaCommander, PlaylistPlayer


class FakeMixer:
    def __init__(self):
        self.loaded = []
        self.playing = False

    def load(self, path):
        self.loaded.append(os.path.basename(path))

    def play(self):
        self.playing = True

    def stop(self):
        self.playing = False


def make_player(tracks=("a.mp3", "b.mp3", "c.mp3")):
    mixer = FakeMixer()
    return PlaylistPlayer(list(tracks), mixer=mixer), mixer


class TestPlaylistPlayer(unittest.TestCase):
    def test_not_active_until_played(self):
        player, mixer = make_player()
        self.assertFalse(player.is_active)
        self.assertTrue(player.play())
        self.assertTrue(player.is_active)
        self.assertEqual(mixer.loaded, ["a.mp3"])
        self.assertTrue(mixer.playing)

    def test_skips_wrap_around(self):
        player, mixer = make_player()
        player.play()
        player.skip_previous()
        self.assertEqual(player.current_track, "c.mp3")
        player.skip_next()
        self.assertEqual(player.current_track, "a.mp3")
        self.assertEqual(mixer.loaded, ["a.mp3", "c.mp3", "a.mp3"])

    def test_empty_playlist(self):
        player, mixer = make_player(())
        self.assertFalse(player.play())
        self.assertFalse(player.is_active)
        self.assertIsNone(player.current_track)
        self.assertEqual(mixer.loaded, [])

    def test_stop(self):
        player, mixer = make_player()
        player.play()
        player.stop()
        self.assertFalse(player.is_active)
        self.assertFalse(mixer.playing)

    def test_from_directory(self):
        with tempfile.TemporaryDirectory() as d:
            for name in ("b.ogg", "a.MP3", "notes.txt", "c.wav"):
                open(os.path.join(d, name), "w").close()
            player = PlaylistPlayer.from_directory(d, mixer=FakeMixer())
            self.assertEqual([os.path.basename(t) for t in player.tracks], ["a.MP3", "b.ogg", "c.wav"])


class TestMediaCommander(unittest.TestCase):
    def test_no_player(self):
        commander = MediaCommander()
        self.assertFalse(commander.skip_next())
        self.assertFalse(commander.execute(Command.PREVIOUS))

    def test_inactive_player(self):
        player, mixer = make_player()
        commander = MediaCommander(player)
        self.assertFalse(commander.execute(Command.NEXT))
        self.assertEqual(mixer.loaded, [])

    def test_execute_maps_commands(self):
        player, _ = make_player()
        player.play()
        commander = MediaCommander(player)
        self.assertTrue(commander.execute(Command.NEXT))
        self.assertEqual(player.current_track, "b.mp3")
        self.assertTrue(commander.execute(Command.PREVIOUS))
        self.assertEqual(player.current_track, "a.mp3")

    def test_set_player(self):
        commander = MediaCommander()
        player, _ = make_player()
        player.play()
        commander.set_player(player)
        self.assertTrue(commander.skip_next())


if __name__ == "__main__":
    unittest.main()
