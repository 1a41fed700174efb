"""surprise-lift: a virtual elevator that opens onto a random floor."""

import logging

logging.getLogger("surpriselift").addHandler(logging.NullHandler())

from surpriselift.config import GameConfig
from surpriselift.core import Entity, Event, Instant, Simulation
from surpriselift.game import (
    DEFAULT_WEIGHTS,
    AudioChannel,
    Cue,
    DegenerateWeightsError,
    ElevatorGame,
    FloorType,
    GameStatus,
    InvalidFloorError,
    JourneyController,
    OutcomeSelector,
    ProbabilityConfig,
    SessionSnapshot,
)
from surpriselift.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_logging,
    set_level,
)

__version__ = "0.1.0"

__all__ = [
    "AudioChannel",
    "Cue",
    "DEFAULT_WEIGHTS",
    "DegenerateWeightsError",
    "ElevatorGame",
    "Entity",
    "Event",
    "FloorType",
    "GameConfig",
    "GameStatus",
    "Instant",
    "InvalidFloorError",
    "JourneyController",
    "OutcomeSelector",
    "ProbabilityConfig",
    "SessionSnapshot",
    "Simulation",
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "set_level",
]
