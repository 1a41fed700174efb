"""Fire-and-forget audio cues.

The controller only names cues. An AudioPlayer does the actual playback;
AudioChannel sits in between, dropping cues while muted and logging (not
raising) player failures so sound can never stall a transition.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Protocol

from surpriselift.game.types import FloorType

logger = logging.getLogger(__name__)


class Cue(Enum):
    CLICK = "click"
    MOVING = "moving"
    DING = "ding"
    GOLD = "gold"
    ZOMBIE = "zombie"
    NORMAL = "normal"
    CAT = "cat"
    BOMB = "bomb"

    @classmethod
    def for_floor(cls, floor_type: FloorType) -> Cue:
        return cls(floor_type.value)


CUE_SOURCES: dict[Cue, str] = {
    Cue.CLICK: "https://assets.mixkit.co/active_storage/sfx/2568/2568-preview.mp3",
    Cue.MOVING: "https://assets.mixkit.co/active_storage/sfx/2006/2006-preview.mp3",
    Cue.DING: "https://assets.mixkit.co/active_storage/sfx/2019/2019-preview.mp3",
    Cue.GOLD: "https://assets.mixkit.co/active_storage/sfx/2017/2017-preview.mp3",
    Cue.ZOMBIE: "https://assets.mixkit.co/active_storage/sfx/1090/1090-preview.mp3",
    Cue.NORMAL: "https://assets.mixkit.co/active_storage/sfx/2000/2000-preview.mp3",
    Cue.CAT: "https://assets.mixkit.co/active_storage/sfx/154/154-preview.mp3",
    Cue.BOMB: "https://assets.mixkit.co/active_storage/sfx/808/808-preview.mp3",
}


class AudioPlayer(Protocol):
    """Playback backend.

    ``play`` returns an opaque handle (or None) that ``stop`` accepts.
    """

    def play(self, cue: Cue, loop: bool = False) -> Any: ...

    def stop(self, handle: Any) -> None: ...


class NullPlayer:
    """Player that plays nothing."""

    def play(self, cue: Cue, loop: bool = False) -> None:
        return None

    def stop(self, handle: Any) -> None:
        return None


class AudioChannel:
    """Mute-gated, failure-tolerant front for an AudioPlayer.

    Looping cues are tracked so they can be stopped by cue name.
    """

    def __init__(self, player: AudioPlayer | None = None, muted: bool = False):
        self._player = player if player is not None else NullPlayer()
        self._muted = muted
        self._loops: dict[Cue, Any] = {}

    @property
    def muted(self) -> bool:
        return self._muted

    def set_muted(self, muted: bool) -> None:
        self._muted = muted
        if muted:
            self.stop_all()

    def play(self, cue: Cue, loop: bool = False) -> None:
        if self._muted:
            return
        try:
            handle = self._player.play(cue, loop)
        except Exception:
            logger.debug("Playback of %s failed", cue.value, exc_info=True)
            return
        if loop and handle is not None:
            self._loops[cue] = handle

    def stop(self, cue: Cue) -> None:
        handle = self._loops.pop(cue, None)
        if handle is None:
            return
        try:
            self._player.stop(handle)
        except Exception:
            logger.debug("Stopping %s failed", cue.value, exc_info=True)

    def stop_all(self) -> None:
        for cue in list(self._loops):
            self.stop(cue)
