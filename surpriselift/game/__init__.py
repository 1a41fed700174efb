"""The elevator game: journey controller, outcome selector and friends."""

from surpriselift.game.audio import CUE_SOURCES, AudioChannel, AudioPlayer, Cue, NullPlayer
from surpriselift.game.controller import JourneyController
from surpriselift.game.elevator import ElevatorGame
from surpriselift.game.errors import DegenerateWeightsError, GameError, InvalidFloorError
from surpriselift.game.floor_input import FloorInput
from surpriselift.game.probability import DEFAULT_WEIGHTS, ProbabilityConfig
from surpriselift.game.selector import OutcomeSelector
from surpriselift.game.session import JourneySession, SessionSnapshot
from surpriselift.game.timers import ScheduledTask, Ticker
from surpriselift.game.types import PRIORITY_ORDER, FloorType, GameStatus

__all__ = [
    "AudioChannel",
    "AudioPlayer",
    "CUE_SOURCES",
    "Cue",
    "DEFAULT_WEIGHTS",
    "DegenerateWeightsError",
    "ElevatorGame",
    "FloorInput",
    "FloorType",
    "GameError",
    "GameStatus",
    "InvalidFloorError",
    "JourneyController",
    "JourneySession",
    "NullPlayer",
    "OutcomeSelector",
    "PRIORITY_ORDER",
    "ProbabilityConfig",
    "ScheduledTask",
    "SessionSnapshot",
    "Ticker",
]
