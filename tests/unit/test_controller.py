"""Unit tests for the journey state machine."""

from __future__ import annotations

import random

import pytest

from surpriselift.config import GameConfig
from surpriselift.core import Instant, Simulation
from surpriselift.game import controller as actions
from surpriselift.game.audio import AudioChannel, Cue
from surpriselift.game.controller import DEGENERATE_WEIGHTS_MESSAGE, JourneyController
from surpriselift.game.probability import ProbabilityConfig
from surpriselift.game.selector import OutcomeSelector
from surpriselift.game.session import SessionSnapshot
from surpriselift.game.types import FloorType, GameStatus


def only(floor_type: FloorType) -> ProbabilityConfig:
    return ProbabilityConfig({t: (100 if t is floor_type else 0) for t in FloorType})


class Harness:
    """A controller on its own loop, driven one action at a time."""

    def __init__(self, probabilities: ProbabilityConfig | None = None, player=None, config: GameConfig | None = None):
        self.controller = JourneyController(
            config=config or GameConfig(),
            probabilities=probabilities or only(FloorType.NORMAL),
            selector=OutcomeSelector(random.Random(5)),
            audio=AudioChannel(player),
        )
        self.loop = Simulation(entities=[self.controller])
        self.snapshots: list[SessionSnapshot] = []
        self.controller.subscribe(self.snapshots.append)

    @property
    def session(self):
        return self.controller.session

    def act(self, event_type: str, **context) -> None:
        self.loop.schedule(self.controller.action(event_type, **context))
        self.loop.run_until(self.loop.now)

    def press_keys(self, text: str) -> None:
        for key in text:
            self.act(actions.PRESS_KEY, key=key)

    def go(self, text: str = "") -> None:
        self.press_keys(text)
        self.act(actions.START_JOURNEY)


class TestStart:
    def test_valid_floor_starts_moving(self):
        h = Harness()
        h.go("5")

        assert h.session.status is GameStatus.MOVING
        assert h.session.target_floor == 5
        assert h.session.pending_input == ""
        assert h.controller.ticker.running

    def test_empty_input_targets_floor_one(self):
        h = Harness()
        h.go("")

        assert h.session.target_floor == 1

    def test_out_of_range_refused(self):
        h = Harness()
        h.go("105")

        assert h.session.status is GameStatus.INPUT
        assert h.session.pending_input == ""
        assert h.session.target_floor is None
        assert "-3 to 100" in h.session.message
        assert not h.controller.ticker.running

    def test_lone_minus_refused(self):
        h = Harness()
        h.go("-")

        assert h.session.status is GameStatus.INPUT
        assert h.session.message is not None

    def test_message_cleared_by_next_key(self):
        h = Harness()
        h.go("101")
        h.press_keys("7")

        assert h.session.message is None
        assert h.session.pending_input == "7"

    def test_degenerate_weights_refused(self):
        h = Harness(probabilities=ProbabilityConfig({t: 0 for t in FloorType}))
        h.go("9")

        assert h.session.status is GameStatus.INPUT
        assert h.session.message == DEGENERATE_WEIGHTS_MESSAGE
        assert h.session.pending_input == "9"

    def test_keys_ignored_while_moving(self):
        h = Harness()
        h.go("9")
        h.press_keys("12")

        assert h.session.pending_input == ""


class TestTravel:
    def test_display_steps_by_one_toward_target(self):
        h = Harness()
        h.go("6")
        h.loop.run_until_idle()

        displayed = [s.displayed_floor for s in h.snapshots if s.status is GameStatus.MOVING]
        assert displayed[0] == 1
        steps = [b - a for a, b in zip(displayed, displayed[1:]) if b != a]
        assert steps == [1] * 5

    def test_downward_travel(self):
        h = Harness()
        h.go("-3")
        h.loop.run_until_idle()

        displayed = [s.displayed_floor for s in h.snapshots if s.status is GameStatus.MOVING]
        assert displayed[-1] == -3
        assert sorted(set(displayed), reverse=True) == [1, 0, -1, -2, -3]

    def test_arrival_time_is_proportional_to_distance(self):
        h = Harness()
        h.go("11")

        h.loop.run_until(Instant.from_seconds(0.9))
        assert h.session.displayed_floor == 10
        assert h.controller.ticker.running

        h.loop.run_until(Instant.from_seconds(1.0))
        assert h.session.displayed_floor == 11
        assert not h.controller.ticker.running
        assert h.controller.settle_task.pending

    def test_ticker_cancelled_exactly_once_and_never_fires_again(self):
        h = Harness()
        h.go("4")
        h.loop.run_until_idle()

        assert h.controller.ticker.stops == 1
        assert h.controller.ticker.ticks == 3
        assert not h.loop.has_pending()

    def test_zero_distance_journey_resolves_immediately(self):
        h = Harness()
        h.go("1")

        assert h.controller.ticker.starts == 0
        assert h.controller.settle_task.pending
        assert h.session.current_floor == 1

        h.loop.run_until_idle()
        assert h.session.status is GameStatus.ARRIVAL


class TestArrival:
    def test_normal_outcome_reveals_arrival_after_settle(self):
        h = Harness()
        h.go("3")
        h.loop.run_until(Instant.from_seconds(0.2))

        # reached the floor, doors not open yet
        assert h.session.current_floor == 3
        assert h.session.status is GameStatus.MOVING
        assert h.session.floor_type is FloorType.NORMAL

        h.loop.run_until(Instant.from_seconds(0.69))
        assert h.session.status is GameStatus.MOVING

        h.loop.run_until(Instant.from_seconds(0.7))
        assert h.session.status is GameStatus.ARRIVAL

    @pytest.mark.parametrize("floor_type", [FloorType.ZOMBIE, FloorType.GOLD, FloorType.CAT, FloorType.NORMAL])
    def test_non_bomb_outcomes_arrive(self, floor_type):
        h = Harness(probabilities=only(floor_type))
        h.go("2")
        h.loop.run_until_idle()

        assert h.session.status is GameStatus.ARRIVAL
        assert h.session.floor_type is floor_type

    def test_bomb_ends_the_game(self):
        h = Harness(probabilities=only(FloorType.BOMB))
        h.go("2")
        h.loop.run_until_idle()

        assert h.session.status is GameStatus.GAMEOVER
        assert h.snapshots[-1].display_text == "ERR"

    def test_return_to_elevator(self):
        h = Harness(probabilities=only(FloorType.GOLD))
        h.go("8")
        h.loop.run_until_idle()
        h.act(actions.RETURN_TO_ELEVATOR)

        assert h.session.status is GameStatus.INPUT
        assert h.session.floor_type is FloorType.NORMAL
        assert h.session.current_floor == 8
        assert h.session.displayed_floor == 8

    def test_next_journey_starts_from_current_floor(self):
        h = Harness()
        h.go("8")
        h.loop.run_until_idle()
        h.act(actions.RETURN_TO_ELEVATOR)
        h.go("6")
        h.loop.run_until_idle()

        moving = [s.displayed_floor for s in h.snapshots if s.status is GameStatus.MOVING]
        assert moving[-3:] == [8, 7, 6]

    def test_weight_edit_during_travel_does_not_change_draw(self):
        h = Harness(probabilities=only(FloorType.CAT))
        h.go("5")
        h.act(actions.SET_WEIGHT, floor_type=FloorType.CAT, value=0)
        h.act(actions.SET_WEIGHT, floor_type=FloorType.BOMB, value=100)
        h.loop.run_until_idle()

        assert h.session.floor_type is FloorType.CAT
        assert h.session.status is GameStatus.ARRIVAL

    def test_restart_from_arrival_goes_back_to_start_floor(self):
        h = Harness(probabilities=only(FloorType.GOLD))
        h.go("12")
        h.loop.run_until_idle()
        assert h.session.status is GameStatus.ARRIVAL

        h.act(actions.RESTART)

        assert h.session.status is GameStatus.INPUT
        assert h.session.current_floor == 1
        assert h.session.floor_type is FloorType.NORMAL


class TestGameOver:
    def _blown_up(self) -> Harness:
        h = Harness(probabilities=only(FloorType.BOMB))
        h.go("42")
        h.loop.run_until_idle()
        assert h.session.status is GameStatus.GAMEOVER
        return h

    def test_only_restart_leaves_gameover(self):
        h = self._blown_up()
        h.act(actions.RETURN_TO_ELEVATOR)
        h.press_keys("3")
        h.act(actions.START_JOURNEY)

        assert h.session.status is GameStatus.GAMEOVER
        assert h.session.pending_input == ""

    def test_restart_resets_session_but_not_weights(self):
        h = self._blown_up()
        h.controller.probabilities.update(FloorType.CAT, 9)
        before = h.controller.probabilities.weights
        h.act(actions.RESTART)

        s = h.session
        assert s.status is GameStatus.INPUT
        assert s.current_floor == 1
        assert s.displayed_floor == 1
        assert s.target_floor is None
        assert s.floor_type is FloorType.NORMAL
        assert s.pending_input == ""
        assert h.controller.probabilities.weights == before


class TestCancellation:
    def test_restart_during_travel_stops_ticker(self):
        h = Harness()
        h.go("50")
        h.loop.run_until(Instant.from_seconds(0.5))
        h.act(actions.RESTART)
        h.loop.run_until_idle()

        assert h.session.status is GameStatus.INPUT
        assert h.session.displayed_floor == 1
        assert h.controller.ticker.ticks == 5

    def test_restart_during_settle_cancels_reveal(self):
        h = Harness(probabilities=only(FloorType.BOMB))
        h.go("2")
        h.loop.run_until(Instant.from_seconds(0.1))
        assert h.controller.settle_task.pending

        h.act(actions.RESTART)
        h.loop.run_until_idle()

        assert h.session.status is GameStatus.INPUT
        assert h.controller.settle_task.cancellations == 1
        assert h.controller.settle_task.fired == 0

    def test_close_mid_journey_leaves_nothing_live(self):
        h = Harness()
        h.go("30")
        h.loop.run_until(Instant.from_seconds(0.3))
        h.controller.close()

        assert not h.loop.has_pending()
        h.loop.run_until_idle()
        assert h.session.displayed_floor == 4

    def test_close_is_idempotent_and_ignores_later_actions(self):
        h = Harness()
        with h.controller:
            pass
        h.controller.close()
        h.press_keys("5")

        assert h.controller.closed
        assert h.session.pending_input == ""


class TestSettings:
    def test_toggle_settings_and_mute(self):
        h = Harness()
        h.act(actions.TOGGLE_SETTINGS)
        h.act(actions.TOGGLE_MUTE)

        snap = h.snapshots[-1]
        assert snap.settings_visible
        assert snap.muted

    def test_restart_keeps_mute_and_panel(self):
        h = Harness()
        h.act(actions.TOGGLE_SETTINGS)
        h.act(actions.TOGGLE_MUTE)
        h.act(actions.RESTART)

        assert h.session.muted
        assert h.session.settings_visible

    def test_restore_defaults(self):
        h = Harness(probabilities=only(FloorType.CAT))
        h.act(actions.RESTORE_DEFAULTS)

        assert h.controller.probabilities == ProbabilityConfig()
        assert h.snapshots[-1].percentages[FloorType.ZOMBIE] == 33

    def test_unknown_event_is_ignored(self):
        h = Harness()
        h.act("Teleport")
        assert h.session.status is GameStatus.INPUT


class TestCues:
    def test_journey_cue_sequence(self, player):
        h = Harness(probabilities=only(FloorType.ZOMBIE), player=player)
        h.go("3")
        h.loop.run_until_idle()

        assert player.played == [
            (Cue.CLICK, False),  # key "3"
            (Cue.CLICK, False),  # start
            (Cue.MOVING, True),
            (Cue.DING, False),
            (Cue.ZOMBIE, False),
        ]
        assert player.stopped == [3]

    def test_bomb_cue(self, player):
        h = Harness(probabilities=only(FloorType.BOMB), player=player)
        h.go("2")
        h.loop.run_until_idle()

        assert player.cues[-1] is Cue.BOMB

    def test_refused_start_plays_no_start_click(self, player):
        h = Harness(player=player)
        h.go("101")

        assert player.cues == [Cue.CLICK, Cue.CLICK, Cue.CLICK]

    def test_muted_session_is_silent(self, player):
        h = Harness(player=player)
        h.act(actions.TOGGLE_MUTE)
        h.go("4")
        h.loop.run_until_idle()

        assert player.played == []
