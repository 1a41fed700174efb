"""Session state and the read-only snapshot handed to renderers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from surpriselift.game.types import FloorType, GameStatus


@dataclass
class JourneySession:
    """Mutable session owned by the journey controller.

    Attributes:
        current_floor: Last floor arrived at.
        target_floor: Floor of the journey in progress, if any.
        displayed_floor: Floor shown on the indicator.
        status: Current phase.
        floor_type: Outcome of the most recent arrival.
        pending_input: What the keypad display shows.
        muted: Whether cues are silenced.
        settings_visible: Whether the weight panel is open.
        message: User-facing validation message, if any.
    """

    start_floor: int = 1
    current_floor: int = 1
    target_floor: int | None = None
    displayed_floor: int = 1
    status: GameStatus = GameStatus.INPUT
    floor_type: FloorType = FloorType.NORMAL
    pending_input: str = ""
    muted: bool = False
    settings_visible: bool = False
    message: str | None = None

    def __post_init__(self):
        self.current_floor = self.start_floor
        self.displayed_floor = self.start_floor

    def reset(self) -> None:
        """Back to the initial journey state. Mute and the settings panel are kept."""
        self.current_floor = self.start_floor
        self.displayed_floor = self.start_floor
        self.target_floor = None
        self.pending_input = ""
        self.status = GameStatus.INPUT
        self.floor_type = FloorType.NORMAL
        self.message = None


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable view of the session after a transition."""

    status: GameStatus
    current_floor: int
    displayed_floor: int
    target_floor: int | None
    floor_type: FloorType
    pending_input: str
    muted: bool
    settings_visible: bool
    message: str | None
    settling: bool
    weights: Mapping[FloorType, int] = field(default_factory=dict)
    percentages: Mapping[FloorType, int] = field(default_factory=dict)

    @property
    def display_text(self) -> str:
        """What the floor indicator shows."""
        if self.status is GameStatus.GAMEOVER:
            return "ERR"
        return str(self.displayed_floor)

    @property
    def keypad_text(self) -> str:
        """What the keypad display shows; an empty entry reads as floor 1."""
        return self.pending_input or "1"
