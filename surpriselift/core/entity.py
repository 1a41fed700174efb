"""Base class for actors that respond to events.

Entities receive events via handle_event() and return reactions (new
events to schedule). The event loop injects its clock when the entity is
registered so handlers can stamp follow-up events with the current time.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from surpriselift.core.clock import Clock
    from surpriselift.core.event import Event
    from surpriselift.core.temporal import Instant

logger = logging.getLogger(__name__)


class Entity(ABC):
    """Abstract base class for event-driven actors.

    Subclasses must implement handle_event(). An entity reads time only
    through ``now``, which requires a clock injected by the event loop.

    Attributes:
        name: Identifier for logging and debugging.
    """

    def __init__(self, name: str):
        self.name = name
        self._clock: Clock | None = None

    def set_clock(self, clock: Clock) -> None:
        """Inject the loop clock. Called automatically on registration."""
        self._clock = clock
        logger.debug("[%s] Clock injected", self.name)

    @property
    def now(self) -> Instant:
        """Current virtual time from the injected clock.

        Raises:
            RuntimeError: If accessed before clock injection.
        """
        if self._clock is None:
            logger.error("[%s] Attempted to access time before clock injection", self.name)
            raise RuntimeError(
                f"Entity {self.name} is not attached to an event loop (Clock is None)."
            )
        return self._clock.now

    @abstractmethod
    def handle_event(self, event: Event) -> Union[list[Event], Event, None]:
        """Process an incoming event and return any resulting events."""
        raise NotImplementedError
