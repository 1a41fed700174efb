"""Owned timer resources.

Each timer is an entity that keeps at most one pending event on the loop.
Stopping cancels that event, so a stopped timer can never fire again;
events that were already in the heap are recognised as stale and dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Union

from surpriselift.core.entity import Entity
from surpriselift.core.event import Event
from surpriselift.core.temporal import Instant

logger = logging.getLogger(__name__)

_TICK = "Tick"
_FIRE = "Fire"

TimerResult = Union[list[Event], Event, None]


def _as_list(result: TimerResult) -> list[Event]:
    if result is None:
        return []
    if isinstance(result, Event):
        return [result]
    return list(result)


class Ticker(Entity):
    """Repeating timer.

    ``on_tick`` runs once per period with the current time. It may call
    ``stop()``; no further tick is scheduled in that case.

    Args:
        name: Identifier for logging.
        period_s: Seconds between ticks.
        on_tick: Callback run on every tick; may return events.
    """

    def __init__(self, name: str, period_s: float, on_tick: Callable[[Instant], TimerResult]):
        super().__init__(name)
        if period_s <= 0:
            raise ValueError(f"period_s must be positive, got {period_s}")
        self.period_s = period_s
        self._on_tick = on_tick
        self._pending: Event | None = None
        self._running = False
        self.ticks = 0
        self.starts = 0
        self.stops = 0

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> list[Event]:
        """Begin ticking. Returns the first tick event for the loop to schedule.

        Raises:
            RuntimeError: If the ticker is already running.
        """
        if self._running:
            raise RuntimeError(f"Ticker {self.name} is already running")
        self._running = True
        self.starts += 1
        logger.debug("[%s] Started (period %.3fs)", self.name, self.period_s)
        return [self._arm()]

    def stop(self) -> bool:
        """Stop ticking and cancel the pending tick. Returns False if already stopped."""
        if not self._running:
            return False
        self._running = False
        self.stops += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        logger.debug("[%s] Stopped after %d ticks", self.name, self.ticks)
        return True

    def handle_event(self, event: Event) -> list[Event]:
        if event is not self._pending:
            logger.debug("[%s] Dropping stale %r", self.name, event)
            return []
        self._pending = None
        self.ticks += 1

        results = _as_list(self._on_tick(self.now))
        if self._running:
            results.append(self._arm())
        return results

    def _arm(self) -> Event:
        self._pending = Event(time=self.now + self.period_s, event_type=_TICK, target=self)
        return self._pending


class ScheduledTask(Entity):
    """Cancellable one-shot deferred action.

    The task can be re-armed after it fires or is cancelled.

    Args:
        name: Identifier for logging.
        action: Callback run when the delay elapses; may return events.
    """

    def __init__(self, name: str, action: Callable[[], TimerResult]):
        super().__init__(name)
        self._action = action
        self._pending: Event | None = None
        self.fired = 0
        self.cancellations = 0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule(self, delay_s: float) -> list[Event]:
        """Arm the task. Returns the event for the loop to schedule.

        Raises:
            RuntimeError: If the task is already armed.
        """
        if self._pending is not None:
            raise RuntimeError(f"Task {self.name} is already scheduled")
        if delay_s < 0:
            raise ValueError(f"delay_s must be >= 0, got {delay_s}")
        self._pending = Event(time=self.now + delay_s, event_type=_FIRE, target=self)
        return [self._pending]

    def cancel(self) -> bool:
        """Disarm the task. Returns False if nothing was pending."""
        if self._pending is None:
            return False
        self._pending.cancel()
        self._pending = None
        self.cancellations += 1
        logger.debug("[%s] Cancelled", self.name)
        return True

    def handle_event(self, event: Event) -> list[Event]:
        if event is not self._pending:
            logger.debug("[%s] Dropping stale %r", self.name, event)
            return []
        self._pending = None
        self.fired += 1
        return _as_list(self._action())
