"""Keypad composition and floor validation."""

from __future__ import annotations

from surpriselift.game.errors import InvalidFloorError

MINUS = "-"
KEYPAD_KEYS = frozenset("0123456789-")


class FloorInput:
    """The floor number the player is typing.

    Args:
        min_floor: Lowest accepted floor.
        max_floor: Highest accepted floor.
        max_length: Characters the display holds, sign included.
        default_floor: Floor used when confirming an empty display.
    """

    def __init__(self, min_floor: int = -3, max_floor: int = 100, max_length: int = 3, default_floor: int = 1):
        self.min_floor = min_floor
        self.max_floor = max_floor
        self.max_length = max_length
        self.default_floor = default_floor
        self._text = ""

    @property
    def text(self) -> str:
        return self._text

    def press(self, key: str) -> bool:
        """Append a keypad key. Returns False when the press was a no-op.

        Raises:
            ValueError: If ``key`` is not a keypad key.
        """
        if key not in KEYPAD_KEYS:
            raise ValueError(f"Not a keypad key: {key!r}")
        if len(self._text) >= self.max_length:
            return False
        if key == MINUS and self._text:
            return False
        self._text += key
        return True

    def clear(self) -> None:
        self._text = ""

    def parse(self) -> int:
        """Validate the display and return the target floor.

        Raises:
            InvalidFloorError: Non-integer text or a floor outside the range.
        """
        raw = self._text or str(self.default_floor)
        try:
            floor = int(raw)
        except ValueError:
            raise InvalidFloorError(raw, self.min_floor, self.max_floor) from None
        if not self.min_floor <= floor <= self.max_floor:
            raise InvalidFloorError(raw, self.min_floor, self.max_floor)
        return floor
