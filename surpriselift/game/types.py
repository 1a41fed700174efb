"""Enumerations shared by the journey controller and the outcome selector."""

from __future__ import annotations

from enum import Enum


class FloorType(Enum):
    """What the doors open onto."""

    NORMAL = "normal"
    ZOMBIE = "zombie"
    GOLD = "gold"
    CAT = "cat"
    BOMB = "bomb"

    @classmethod
    def parse(cls, value: FloorType | str) -> FloorType:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown floor type {value!r}; expected one of "
                f"{', '.join(t.value for t in cls)}"
            ) from None


class GameStatus(Enum):
    """Session phase. Exactly one is active at a time."""

    INPUT = "input"
    MOVING = "moving"
    ARRIVAL = "arrival"
    GAMEOVER = "gameover"


# Draw order for the weighted walk. Earlier entries win ties at
# cumulative-sum boundaries.
PRIORITY_ORDER: tuple[FloorType, ...] = (
    FloorType.BOMB,
    FloorType.ZOMBIE,
    FloorType.GOLD,
    FloorType.CAT,
    FloorType.NORMAL,
)
