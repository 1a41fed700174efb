"""Weighted outcome draw.

The walk visits categories in PRIORITY_ORDER and returns the first whose
cumulative weight reaches the draw. Zero-weight categories are skipped
outright, so they can never win even when the draw lands exactly on a
boundary.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping

from surpriselift.game.errors import DegenerateWeightsError
from surpriselift.game.probability import ProbabilityConfig
from surpriselift.game.types import PRIORITY_ORDER, FloorType

logger = logging.getLogger(__name__)


class OutcomeSelector:
    """Draws one FloorType per arrival.

    Args:
        rng: Random source. Pass a seeded ``random.Random`` for repeatable draws.
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng if rng is not None else random.Random()

    def draw(self, weights: ProbabilityConfig | Mapping[FloorType, int]) -> FloorType:
        """Pick a category with probability proportional to its weight.

        Raises:
            DegenerateWeightsError: If every weight is zero.
        """
        table = weights.weights if isinstance(weights, ProbabilityConfig) else weights
        total = sum(table.get(floor_type, 0) for floor_type in PRIORITY_ORDER)
        if total <= 0:
            raise DegenerateWeightsError("Cannot draw an outcome: all floor weights are zero")

        r = self._rng.random() * total
        cumulative = 0
        last_reachable = None
        for floor_type in PRIORITY_ORDER:
            weight = table.get(floor_type, 0)
            if weight <= 0:
                continue
            last_reachable = floor_type
            cumulative += weight
            if cumulative >= r:
                logger.debug("Drew %s (r=%.3f of %d)", floor_type.value, r, total)
                return floor_type

        # Only reachable through float residue at the top of the range.
        return last_reachable
