"""Virtual time for the event loop.

Instant stores nanoseconds as an int so repeated tick arithmetic never
drifts. Deltas are plain seconds (int or float).
"""

from __future__ import annotations

from typing import Union

_NANOS_PER_SECOND = 1_000_000_000


class Instant:
    """A point in virtual time, measured from the start of the session."""

    __slots__ = ("nanoseconds",)

    Epoch: Instant

    def __init__(self, nanoseconds: int):
        self.nanoseconds = int(nanoseconds)

    @classmethod
    def from_seconds(cls, seconds: Union[int, float]) -> Instant:
        if isinstance(seconds, int):
            return cls(seconds * _NANOS_PER_SECOND)
        return cls(round(seconds * _NANOS_PER_SECOND))

    def to_seconds(self) -> float:
        return float(self.nanoseconds) / _NANOS_PER_SECOND

    def __add__(self, other: Union[Instant, int, float]) -> Instant:
        if isinstance(other, (int, float)):
            return Instant(self.nanoseconds + round(other * _NANOS_PER_SECOND))
        if isinstance(other, Instant):
            return Instant(self.nanoseconds + other.nanoseconds)
        return NotImplemented

    def __sub__(self, other: Union[Instant, int, float]) -> Instant:
        if isinstance(other, (int, float)):
            return Instant(self.nanoseconds - round(other * _NANOS_PER_SECOND))
        if isinstance(other, Instant):
            return Instant(self.nanoseconds - other.nanoseconds)
        return NotImplemented

    def __eq__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.nanoseconds == other.nanoseconds

    def __lt__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.nanoseconds < other.nanoseconds

    def __le__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.nanoseconds <= other.nanoseconds

    def __gt__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.nanoseconds > other.nanoseconds

    def __ge__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.nanoseconds >= other.nanoseconds

    def __hash__(self):
        return hash(self.nanoseconds)

    def __repr__(self) -> str:
        return f"Instant({self.to_seconds():.3f}s)"


Instant.Epoch = Instant(0)
