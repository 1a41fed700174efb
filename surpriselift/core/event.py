"""Events: the unit of work processed by the event loop.

Every user action, ticker step and deferred reveal is an Event aimed at
an entity. When popped, an event calls its target's handle_event() and
hands back whatever follow-up events the handler produced.
"""

from __future__ import annotations

import logging
import uuid
from itertools import count
from typing import TYPE_CHECKING, Any

from surpriselift.core.temporal import Instant

if TYPE_CHECKING:
    from surpriselift.core.entity import Entity

logger = logging.getLogger(__name__)

_global_event_counter = count()


class Event:
    """Something that happens to an entity at a point in virtual time.

    Sorting uses (time, insertion_order) so events scheduled for the same
    instant run in the order they were created.

    Attributes:
        time: When this event should be processed.
        event_type: Label the target dispatches on.
        target: Entity to receive this event.
        context: Payload for the handler (e.g. the key that was pressed).
    """

    __slots__ = (
        "_cancelled",
        "_id",
        "_sort_index",
        "context",
        "event_type",
        "target",
        "time",
    )

    def __init__(
        self,
        time: Instant,
        event_type: str,
        target: Entity | None = None,
        *,
        context: dict[str, Any] | None = None,
    ):
        if target is None:
            raise ValueError(f"Event '{event_type}' must have a 'target'.")

        self.time = time
        self.event_type = event_type
        self.target = target
        self.context = context if context is not None else {}
        self._sort_index = next(_global_event_counter)
        self._id = uuid.uuid4()
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        """Whether this event has been cancelled."""
        return self._cancelled

    def cancel(self) -> None:
        """Mark this event as cancelled. The event loop will skip it on pop.

        Cancelling an already-cancelled or already-processed event is a no-op.
        """
        self._cancelled = True

    def __repr__(self) -> str:
        target_name = getattr(self.target, "name", None) or type(self.target).__name__
        return f"Event({self.time!r}, {self.event_type!r}, target={target_name})"

    def invoke(self) -> list[Event]:
        """Dispatch to the target and return the follow-up events to schedule."""
        return self._normalize_return(self.target.handle_event(self))

    def _normalize_return(self, value: Any) -> list[Event]:
        """Standardizes return values into List[Event]"""
        if value is None:
            return []
        if isinstance(value, list):
            return value
        if isinstance(value, Event):
            return [value]
        logger.warning("Handler for %r returned unsupported %s; ignoring.", self, type(value))
        return []

    def __lt__(self, other: Event) -> bool:
        """
        1. Time (Primary)
        2. Insert Order (Secondary - guarantees FIFO for simultaneous events)
        """
        if self.time != other.time:
            return self.time < other.time
        return self._sort_index < other._sort_index

    def __hash__(self):
        return hash(self._id)

    def __eq__(self, other):
        if not isinstance(other, Event):
            return NotImplemented
        return self._id == other._id
