"""Exceptions raised by the game layer."""

from __future__ import annotations


class GameError(Exception):
    """Base class for game-layer errors."""


class InvalidFloorError(GameError, ValueError):
    """Composed input is not an integer floor inside the allowed range."""

    def __init__(self, raw: str, min_floor: int, max_floor: int):
        self.raw = raw
        self.min_floor = min_floor
        self.max_floor = max_floor
        super().__init__(f"Invalid floor {raw!r}; expected an integer from {min_floor} to {max_floor}")


class DegenerateWeightsError(GameError):
    """Every weight in the probability table is zero, so no draw is possible."""
