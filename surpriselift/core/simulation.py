"""Serial event loop.

Simulation pops events from a single EventHeap in (time, insertion) order
and dispatches them one at a time. Handlers never run concurrently and
never call each other directly: whatever a handler returns is pushed back
onto the heap. Cancelled events are skipped when popped.

Time is virtual. ``run_until`` jumps the clock from event to event; with
``realtime=True`` it sleeps the wall-clock gap first, which is what the
terminal front end uses to animate travel.
"""

from __future__ import annotations

import logging
import time as _time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from surpriselift.core.clock import Clock
from surpriselift.core.entity import Entity
from surpriselift.core.event import Event
from surpriselift.core.event_heap import EventHeap
from surpriselift.core.temporal import Instant

logger = logging.getLogger(__name__)

DEFAULT_MAX_EVENTS = 100_000


@dataclass(frozen=True)
class LoopSummary:
    """Counters for a loop's lifetime."""

    current_time_s: float
    events_processed: int
    events_cancelled: int
    events_pending: int


class Simulation:
    """Single-threaded dispatcher that owns the clock and the event heap.

    Args:
        entities: Entities to attach to this loop's clock.
        start_time: Initial clock value.
        realtime: Sleep the wall-clock gap before each event.
        speed: Realtime speed-up factor (2.0 plays twice as fast).
        sleep: Sleep function, replaceable in tests.
    """

    def __init__(
        self,
        entities: Iterable[Entity] | None = None,
        start_time: Instant = Instant.Epoch,
        realtime: bool = False,
        speed: float = 1.0,
        sleep: Callable[[float], None] = _time.sleep,
    ):
        if speed <= 0:
            raise ValueError(f"speed must be positive, got {speed}")

        self._clock = Clock(start_time)
        self._event_heap = EventHeap()
        self._realtime = realtime
        self._speed = speed
        self._sleep = sleep
        self._events_processed = 0
        self._events_cancelled = 0

        for entity in entities or []:
            self.register(entity)

    @property
    def now(self) -> Instant:
        return self._clock.now

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def events_processed(self) -> int:
        return self._events_processed

    @property
    def events_cancelled(self) -> int:
        return self._events_cancelled

    def register(self, entity: Entity) -> Entity:
        entity.set_clock(self._clock)
        return entity

    def schedule(self, events: Event | list[Event]) -> None:
        """Queue one or more events.

        Raises:
            RuntimeError: If an event is timestamped before the current time.
        """
        batch = events if isinstance(events, list) else [events]
        for event in batch:
            if event.time < self._clock.now:
                raise RuntimeError(
                    f"Cannot schedule {event!r} in the past (now={self._clock.now!r})."
                )
        self._event_heap.push(batch)

    def pending(self) -> list[Event]:
        """Live (not cancelled) events waiting in the heap."""
        return self._event_heap.live_events()

    def has_pending(self) -> bool:
        return bool(self._event_heap.live_events())

    def step(self) -> Event | None:
        """Process the next live event. Returns it, or None if the heap is empty."""
        while self._event_heap.has_events():
            event = self._event_heap.pop()
            if event.cancelled:
                self._events_cancelled += 1
                logger.debug("Skipping cancelled %r", event)
                continue
            self._dispatch(event)
            return event
        return None

    def run_until(self, end_time: Instant) -> int:
        """Process every live event due at or before ``end_time``.

        The clock finishes at ``end_time`` even if the last event was earlier.
        Returns the number of events processed.
        """
        processed = 0
        while self._event_heap.has_events() and self._event_heap.peek().time <= end_time:
            event = self._event_heap.pop()
            if event.cancelled:
                self._events_cancelled += 1
                logger.debug("Skipping cancelled %r", event)
                continue
            self._dispatch(event)
            processed += 1

        if end_time > self._clock.now:
            self._pace_to(end_time)
            self._clock.update(end_time)
        return processed

    def advance(self, seconds: float) -> int:
        """Run the loop forward by ``seconds`` of virtual time."""
        return self.run_until(self._clock.now + seconds)

    def run_until_idle(self, max_events: int = DEFAULT_MAX_EVENTS) -> int:
        """Process events until none are pending.

        Raises:
            RuntimeError: If more than ``max_events`` are processed, which
                means something keeps rescheduling itself.
        """
        processed = 0
        while self.step() is not None:
            processed += 1
            if processed > max_events:
                raise RuntimeError(f"Event loop still busy after {max_events} events.")
        return processed

    def summary(self) -> LoopSummary:
        return LoopSummary(
            current_time_s=self._clock.now.to_seconds(),
            events_processed=self._events_processed,
            events_cancelled=self._events_cancelled,
            events_pending=len(self.pending()),
        )

    def _dispatch(self, event: Event) -> None:
        self._pace_to(event.time)
        self._clock.update(event.time)
        follow_ups = event.invoke()
        self._events_processed += 1
        if follow_ups:
            self.schedule(follow_ups)

    def _pace_to(self, target: Instant) -> None:
        if not self._realtime:
            return
        gap_s = (target - self._clock.now).to_seconds()
        if gap_s > 0:
            self._sleep(gap_s / self._speed)
