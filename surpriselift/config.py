"""Session configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Timing and limits for one game session.

    Attributes:
        tick_period_s: Time between display steps while travelling.
        settle_delay_s: Pause between reaching the floor and the reveal.
        min_floor: Lowest floor the keypad accepts.
        max_floor: Highest floor the keypad accepts.
        start_floor: Floor the elevator starts on and returns to on restart.
        max_input_length: Characters the keypad display holds.
        seed: Seed for the outcome draw; None draws from system entropy.
    """

    tick_period_s: float = 0.1
    settle_delay_s: float = 0.5
    min_floor: int = -3
    max_floor: int = 100
    start_floor: int = 1
    max_input_length: int = 3
    seed: int | None = None

    def __post_init__(self):
        if self.tick_period_s <= 0:
            raise ValueError(f"tick_period_s must be positive, got {self.tick_period_s}")
        if self.settle_delay_s < 0:
            raise ValueError(f"settle_delay_s must be >= 0, got {self.settle_delay_s}")
        if self.min_floor > self.max_floor:
            raise ValueError(f"min_floor {self.min_floor} is above max_floor {self.max_floor}")
        if not self.min_floor <= self.start_floor <= self.max_floor:
            raise ValueError(f"start_floor {self.start_floor} is outside [{self.min_floor}, {self.max_floor}]")
        if self.max_input_length < 1:
            raise ValueError(f"max_input_length must be >= 1, got {self.max_input_length}")
