"""Journey state machine.

JourneyController is the only writer of the session. Every action reaches
it as an event on the loop, so transitions are applied one at a time and
in order. Travel is driven by an owned Ticker and the outcome reveal by
an owned ScheduledTask; both are stopped whenever their phase ends, on
restart, and on close().

States::

    input --start--> moving --tick...--> (arrival resolution) --settle--> arrival | gameover
      ^                                                                     |
      +-------------------------- return to elevator -----------------------+

    any state --restart--> input

Restart is the only way out of gameover, but it is accepted everywhere:
mid-travel or during the settle delay it stops the ticker and cancels the
pending reveal before resetting the session.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Mapping
from typing import Any

from surpriselift.config import GameConfig
from surpriselift.core.clock import Clock
from surpriselift.core.entity import Entity
from surpriselift.core.event import Event
from surpriselift.core.temporal import Instant
from surpriselift.game.audio import AudioChannel, Cue
from surpriselift.game.errors import InvalidFloorError
from surpriselift.game.floor_input import FloorInput
from surpriselift.game.probability import ProbabilityConfig
from surpriselift.game.selector import OutcomeSelector
from surpriselift.game.session import JourneySession, SessionSnapshot
from surpriselift.game.timers import ScheduledTask, Ticker
from surpriselift.game.types import FloorType, GameStatus

logger = logging.getLogger(__name__)

PRESS_KEY = "PressKey"
CLEAR_INPUT = "ClearInput"
START_JOURNEY = "StartJourney"
RETURN_TO_ELEVATOR = "ReturnToElevator"
RESTART = "Restart"
TOGGLE_MUTE = "ToggleMute"
TOGGLE_SETTINGS = "ToggleSettings"
SET_WEIGHT = "SetWeight"
RESTORE_DEFAULTS = "RestoreDefaults"

INVALID_FLOOR_MESSAGE = "Please enter a valid floor number ({min} to {max})!"
DEGENERATE_WEIGHTS_MESSAGE = "All floor weights are zero; adjust the settings first!"

SnapshotListener = Callable[[SessionSnapshot], None]


class JourneyController(Entity):
    """Owns the session and applies every transition.

    Args:
        name: Identifier for logging.
        config: Timing and limits.
        probabilities: Weight table. Shared, never reset by restart.
        selector: Outcome draw; built from ``config.seed`` when omitted.
        audio: Cue channel; silent when omitted.
    """

    def __init__(
        self,
        name: str = "Elevator",
        config: GameConfig | None = None,
        probabilities: ProbabilityConfig | None = None,
        selector: OutcomeSelector | None = None,
        audio: AudioChannel | None = None,
    ):
        super().__init__(name)
        self.config = config if config is not None else GameConfig()
        self.probabilities = probabilities if probabilities is not None else ProbabilityConfig()
        self.selector = selector if selector is not None else OutcomeSelector(random.Random(self.config.seed))
        self.audio = audio if audio is not None else AudioChannel()

        self.session = JourneySession(start_floor=self.config.start_floor)
        self.session.muted = self.audio.muted
        self._input = FloorInput(
            min_floor=self.config.min_floor,
            max_floor=self.config.max_floor,
            max_length=self.config.max_input_length,
            default_floor=self.config.start_floor,
        )
        self.ticker = Ticker(f"{name}.ticker", self.config.tick_period_s, self._on_tick)
        self.settle_task = ScheduledTask(f"{name}.settle", self._reveal)
        self._journey_weights: Mapping[FloorType, int] | None = None
        self._listeners: list[SnapshotListener] = []
        self._closed = False
        self.journeys = 0

    # -- wiring ---------------------------------------------------------------

    def set_clock(self, clock: Clock) -> None:
        super().set_clock(clock)
        self.ticker.set_clock(clock)
        self.settle_task.set_clock(clock)

    def subscribe(self, listener: SnapshotListener) -> None:
        """Call ``listener`` with a fresh snapshot after every transition."""
        self._listeners.append(listener)

    def action(self, event_type: str, at: Instant | None = None, **context: Any) -> Event:
        """Build a user-action event aimed at this controller."""
        return Event(time=at if at is not None else self.now, event_type=event_type, target=self, context=context)

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> SessionSnapshot:
        s = self.session
        return SessionSnapshot(
            status=s.status,
            current_floor=s.current_floor,
            displayed_floor=s.displayed_floor,
            target_floor=s.target_floor,
            floor_type=s.floor_type,
            pending_input=s.pending_input,
            muted=s.muted,
            settings_visible=s.settings_visible,
            message=s.message,
            settling=self.settle_task.pending,
            weights=self.probabilities.snapshot(),
            percentages=self.probabilities.percentages(),
        )

    # -- dispatch -------------------------------------------------------------

    def handle_event(self, event: Event) -> list[Event]:
        if self._closed:
            logger.debug("[%s] Closed; ignoring %s", self.name, event.event_type)
            return []

        if event.event_type == PRESS_KEY:
            results = self._press_key(event.context["key"])
        elif event.event_type == CLEAR_INPUT:
            results = self._clear_input()
        elif event.event_type == START_JOURNEY:
            results = self._start_journey()
        elif event.event_type == RETURN_TO_ELEVATOR:
            results = self._return_to_elevator()
        elif event.event_type == RESTART:
            results = self._restart()
        elif event.event_type == TOGGLE_MUTE:
            results = self._toggle_mute()
        elif event.event_type == TOGGLE_SETTINGS:
            results = self._toggle_settings()
        elif event.event_type == SET_WEIGHT:
            results = self._set_weight(event.context["floor_type"], event.context["value"])
        elif event.event_type == RESTORE_DEFAULTS:
            results = self._restore_defaults()
        else:
            logger.warning("[%s] Unknown event type %r", self.name, event.event_type)
            return []

        self._notify()
        return results

    def close(self) -> None:
        """Tear down: stop every timer and any looping cue. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self.ticker.stop()
        self.settle_task.cancel()
        self.audio.stop_all()
        logger.debug("[%s] Closed", self.name)

    def __enter__(self) -> JourneyController:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -- keypad ---------------------------------------------------------------

    def _press_key(self, key: str) -> list[Event]:
        if self.session.status is not GameStatus.INPUT:
            logger.debug("[%s] Key %r ignored while %s", self.name, key, self.session.status.value)
            return []
        self.audio.play(Cue.CLICK)
        self.session.message = None
        self._input.press(key)
        self.session.pending_input = self._input.text
        return []

    def _clear_input(self) -> list[Event]:
        if self.session.status is not GameStatus.INPUT:
            return []
        self.audio.play(Cue.CLICK)
        self._input.clear()
        self.session.pending_input = ""
        self.session.message = None
        return []

    # -- journey --------------------------------------------------------------

    def _start_journey(self) -> list[Event]:
        s = self.session
        if s.status is not GameStatus.INPUT:
            logger.debug("[%s] Start ignored while %s", self.name, s.status.value)
            return []

        if self.probabilities.is_degenerate:
            s.message = DEGENERATE_WEIGHTS_MESSAGE
            logger.info("[%s] Journey refused: all weights are zero", self.name)
            return []

        try:
            target = self._input.parse()
        except InvalidFloorError as exc:
            self._input.clear()
            s.pending_input = ""
            s.message = INVALID_FLOOR_MESSAGE.format(min=exc.min_floor, max=exc.max_floor)
            logger.info("[%s] Journey refused: %s", self.name, exc)
            return []

        self.audio.play(Cue.CLICK)
        self._input.clear()
        s.pending_input = ""
        s.message = None
        s.target_floor = target
        s.displayed_floor = s.current_floor
        s.status = GameStatus.MOVING
        self._journey_weights = self.probabilities.snapshot()
        self.journeys += 1
        self.audio.play(Cue.MOVING, loop=True)
        logger.info("[%s] Journey %d: floor %d -> %d", self.name, self.journeys, s.current_floor, target)

        if s.displayed_floor == target:
            return self._resolve_arrival()
        return self.ticker.start()

    def _on_tick(self, now: Instant) -> list[Event]:
        s = self.session
        if s.status is not GameStatus.MOVING or s.target_floor is None:
            self.ticker.stop()
            return []

        s.displayed_floor += 1 if s.target_floor > s.displayed_floor else -1
        results: list[Event] = []
        if s.displayed_floor == s.target_floor:
            self.ticker.stop()
            results = self._resolve_arrival()
        self._notify()
        return results

    def _resolve_arrival(self) -> list[Event]:
        s = self.session
        self.audio.stop(Cue.MOVING)
        self.audio.play(Cue.DING)

        s.floor_type = self.selector.draw(self._journey_weights or self.probabilities.snapshot())
        s.current_floor = s.target_floor
        s.displayed_floor = s.target_floor
        logger.info("[%s] Arrived at floor %d: %s", self.name, s.current_floor, s.floor_type.value)
        return self.settle_task.schedule(self.config.settle_delay_s)

    def _reveal(self) -> list[Event]:
        s = self.session
        self._journey_weights = None
        if s.floor_type is FloorType.BOMB:
            s.status = GameStatus.GAMEOVER
            self.audio.play(Cue.BOMB)
            logger.info("[%s] Game over on floor %d", self.name, s.current_floor)
        else:
            s.status = GameStatus.ARRIVAL
            self.audio.play(Cue.for_floor(s.floor_type))
        self._notify()
        return []

    def _return_to_elevator(self) -> list[Event]:
        if self.session.status is not GameStatus.ARRIVAL:
            logger.debug("[%s] Return ignored while %s", self.name, self.session.status.value)
            return []
        self.audio.play(Cue.CLICK)
        self.session.status = GameStatus.INPUT
        self.session.floor_type = FloorType.NORMAL
        return []

    def _restart(self) -> list[Event]:
        self.audio.play(Cue.CLICK)
        self.ticker.stop()
        self.settle_task.cancel()
        self.audio.stop(Cue.MOVING)
        self._input.clear()
        self._journey_weights = None
        self.session.reset()
        logger.info("[%s] Restarted", self.name)
        return []

    # -- settings -------------------------------------------------------------

    def _toggle_mute(self) -> list[Event]:
        self.session.muted = not self.session.muted
        self.audio.set_muted(self.session.muted)
        return []

    def _toggle_settings(self) -> list[Event]:
        self.audio.play(Cue.CLICK)
        self.session.settings_visible = not self.session.settings_visible
        return []

    def _set_weight(self, floor_type: FloorType | str, value: object) -> list[Event]:
        self.probabilities.update(floor_type, value)
        return []

    def _restore_defaults(self) -> list[Event]:
        self.audio.play(Cue.CLICK)
        self.probabilities.restore_defaults()
        return []

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in self._listeners:
            listener(snap)
