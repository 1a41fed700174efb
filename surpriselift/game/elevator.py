"""User-facing facade: one loop, one controller.

Each method turns a user action into an event at the current time and
runs the loop until nothing else is due now. Travel and the reveal only
happen as virtual time moves, through ``advance()`` or ``settle()``.
"""

from __future__ import annotations

import logging
import random
import time as _time
from collections.abc import Callable
from typing import Any

from surpriselift.config import GameConfig
from surpriselift.core.simulation import Simulation
from surpriselift.game import controller as actions
from surpriselift.game.audio import AudioChannel, AudioPlayer
from surpriselift.game.controller import JourneyController, SnapshotListener
from surpriselift.game.floor_input import KEYPAD_KEYS
from surpriselift.game.probability import ProbabilityConfig
from surpriselift.game.selector import OutcomeSelector
from surpriselift.game.session import SessionSnapshot
from surpriselift.game.types import FloorType

logger = logging.getLogger(__name__)


class ElevatorGame:
    """A playable session.

    Args:
        config: Timing and limits. ``config.seed`` seeds the outcome draw.
        probabilities: Weight table to share; a default table when omitted.
        player: Audio backend; silent when omitted.
        realtime: Pace virtual time against the wall clock.
        speed: Realtime speed-up factor.
        sleep: Sleep function used for realtime pacing.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        probabilities: ProbabilityConfig | None = None,
        player: AudioPlayer | None = None,
        realtime: bool = False,
        speed: float = 1.0,
        sleep: Callable[[float], None] = _time.sleep,
    ):
        self.config = config if config is not None else GameConfig()
        self.probabilities = probabilities if probabilities is not None else ProbabilityConfig()
        self.controller = JourneyController(
            config=self.config,
            probabilities=self.probabilities,
            selector=OutcomeSelector(random.Random(self.config.seed)),
            audio=AudioChannel(player),
        )
        self.loop = Simulation(entities=[self.controller], realtime=realtime, speed=speed, sleep=sleep)

    @property
    def snapshot(self) -> SessionSnapshot:
        return self.controller.snapshot()

    def subscribe(self, listener: SnapshotListener) -> None:
        self.controller.subscribe(listener)

    # -- actions --------------------------------------------------------------

    def press(self, key: str) -> SessionSnapshot:
        """Press one keypad key ("0"-"9" or "-").

        Raises:
            ValueError: If ``key`` is not on the keypad.
        """
        if key not in KEYPAD_KEYS:
            raise ValueError(f"Not a keypad key: {key!r}")
        return self._act(actions.PRESS_KEY, key=key)

    def type_keys(self, text: str) -> SessionSnapshot:
        """Press each character of ``text`` in turn."""
        for key in text:
            self.press(key)
        return self.snapshot

    def clear(self) -> SessionSnapshot:
        return self._act(actions.CLEAR_INPUT)

    def confirm(self) -> SessionSnapshot:
        return self._act(actions.START_JOURNEY)

    def return_to_elevator(self) -> SessionSnapshot:
        return self._act(actions.RETURN_TO_ELEVATOR)

    def restart(self) -> SessionSnapshot:
        return self._act(actions.RESTART)

    def toggle_mute(self) -> SessionSnapshot:
        return self._act(actions.TOGGLE_MUTE)

    def toggle_settings(self) -> SessionSnapshot:
        return self._act(actions.TOGGLE_SETTINGS)

    def set_weight(self, floor_type: FloorType | str, value: object) -> SessionSnapshot:
        """Move one weight slider. Malformed values become 0.

        Raises:
            ValueError: If ``floor_type`` names no category.
        """
        return self._act(actions.SET_WEIGHT, floor_type=FloorType.parse(floor_type), value=value)

    def restore_defaults(self) -> SessionSnapshot:
        return self._act(actions.RESTORE_DEFAULTS)

    # -- time -----------------------------------------------------------------

    def advance(self, seconds: float) -> SessionSnapshot:
        """Let ``seconds`` of virtual time pass."""
        self.loop.advance(seconds)
        return self.snapshot

    def settle(self) -> SessionSnapshot:
        """Run until no timer is pending (the journey, if any, has been revealed)."""
        self.loop.run_until_idle()
        return self.snapshot

    def close(self) -> None:
        self.controller.close()
        logger.debug("Session closed: %s", self.loop.summary())

    def __enter__(self) -> ElevatorGame:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _act(self, event_type: str, **context: Any) -> SessionSnapshot:
        self.loop.schedule(self.controller.action(event_type, **context))
        self.loop.run_until(self.loop.now)
        return self.snapshot
