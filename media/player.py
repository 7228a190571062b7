# media/player.py
import os
from typing import List, Optional

import pygame

from config import AUDIO_EXTENSIONS
from gesture.types import Command


class PlaylistPlayer:
    """
    Minimal playback target on top of pygame.mixer.music.
    Skips wrap around at both ends of the playlist.
    """

    def __init__(self, tracks: List[str], mixer=None):
        self.tracks = list(tracks)
        self.index = 0
        self.started = False
        self._mixer = mixer

    @classmethod
    def from_directory(cls, path: str, mixer=None):
        names = sorted(
            n for n in os.listdir(path)
            if os.path.splitext(n)[1].lower() in AUDIO_EXTENSIONS
        )
        return cls([os.path.join(path, n) for n in names], mixer=mixer)

    @property
    def mixer(self):
        if self._mixer is None:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            self._mixer = pygame.mixer.music
        return self._mixer

    @property
    def is_active(self) -> bool:
        return self.started and bool(self.tracks)

    @property
    def current_track(self) -> Optional[str]:
        if not self.tracks:
            return None
        return os.path.basename(self.tracks[self.index])

    def play(self) -> bool:
        if not self.tracks:
            print("[Player] No tracks to play.")
            return False
        self.mixer.load(self.tracks[self.index])
        self.mixer.play()
        self.started = True
        print("[Player] Playing:", self.current_track)
        return True

    def skip_next(self):
        self.index = (self.index + 1) % len(self.tracks)
        self.play()

    def skip_previous(self):
        self.index = (self.index - 1) % len(self.tracks)
        self.play()

    def stop(self):
        if self.started:
            self.mixer.stop()
            self.started = False


class MediaCommander:
    """Dispatches gesture commands to the active player, if there is one."""

    def __init__(self, player: Optional[PlaylistPlayer] = None):
        self.player = player

    def set_player(self, player: Optional[PlaylistPlayer]):
        self.player = player

    def skip_next(self) -> bool:
        if self.player is None or not self.player.is_active:
            return False
        self.player.skip_next()
        return True

    def skip_previous(self) -> bool:
        if self.player is None or not self.player.is_active:
            return False
        self.player.skip_previous()
        return True

    def execute(self, command: Command) -> bool:
        if command == Command.NEXT:
            return self.skip_next()
        return self.skip_previous()
