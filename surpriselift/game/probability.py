"""Mutable weight table over the five floor categories."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from types import MappingProxyType

from surpriselift.game.types import PRIORITY_ORDER, FloorType

logger = logging.getLogger(__name__)

WEIGHT_MIN = 0

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

DEFAULT_WEIGHTS: Mapping[FloorType, int] = MappingProxyType({
    FloorType.BOMB: 10,
    FloorType.ZOMBIE: 33,
    FloorType.GOLD: 20,
    FloorType.CAT: 17,
    FloorType.NORMAL: 20,
})


def coerce_weight(value: object) -> int:
    """Turn slider/field input into a weight.

    The leading integer is used and any trailing text ignored, so "12abc"
    and "12.9" both give 12. Input with no leading integer becomes 0, as
    do negatives.
    """
    if isinstance(value, int):
        number = value
    else:
        match = _LEADING_INT.match(str(value))
        if match is None:
            logger.debug("Coercing malformed weight %r to 0", value)
            return 0
        number = int(match.group(1))
    return max(WEIGHT_MIN, number)


class ProbabilityConfig:
    """Relative likelihood of each FloorType.

    All five categories are always present. A weight of 0 makes its
    category unreachable; drawing needs a positive total.

    Args:
        weights: Initial table; missing categories take their default.
    """

    def __init__(self, weights: Mapping[FloorType, int] | None = None):
        self._weights: dict[FloorType, int] = dict(DEFAULT_WEIGHTS)
        if weights:
            for floor_type, value in weights.items():
                self._weights[FloorType.parse(floor_type)] = coerce_weight(value)

    def __getitem__(self, floor_type: FloorType) -> int:
        return self._weights[FloorType.parse(floor_type)]

    def __eq__(self, other):
        if not isinstance(other, ProbabilityConfig):
            return NotImplemented
        return self._weights == other._weights

    def __repr__(self) -> str:
        body = ", ".join(f"{t.value}={self._weights[t]}" for t in PRIORITY_ORDER)
        return f"ProbabilityConfig({body})"

    @property
    def weights(self) -> dict[FloorType, int]:
        return dict(self._weights)

    @property
    def total(self) -> int:
        return sum(self._weights.values())

    @property
    def is_degenerate(self) -> bool:
        return self.total <= 0

    def update(self, floor_type: FloorType | str, value: object) -> int:
        """Set one category's weight. Returns the stored value."""
        key = FloorType.parse(floor_type)
        weight = coerce_weight(value)
        self._weights[key] = weight
        logger.debug("Weight for %s set to %d (total %d)", key.value, weight, self.total)
        return weight

    def restore_defaults(self) -> None:
        self._weights = dict(DEFAULT_WEIGHTS)
        logger.debug("Weights restored to defaults")

    def snapshot(self) -> Mapping[FloorType, int]:
        """Read-only copy of the current table."""
        return MappingProxyType(dict(self._weights))

    def percentages(self) -> dict[FloorType, int]:
        """Share of each category in whole percent, rounded half-up.

        An all-zero table reports 0 for every category.
        """
        total = self.total
        if total <= 0:
            return {floor_type: 0 for floor_type in PRIORITY_ORDER}
        return {
            floor_type: math.floor(self._weights[floor_type] / total * 100 + 0.5)
            for floor_type in PRIORITY_ORDER
        }
