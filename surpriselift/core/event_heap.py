import heapq
from typing import Union

from surpriselift.core.event import Event


class EventHeap:
    def __init__(self, events: list[Event] | None = None):
        """Store Events directly on the heap.

        Event implements ordering by (time, insertion order), so there's no
        need to store (time, event) tuples.
        """
        self._heap = list(events) if events else []
        heapq.heapify(self._heap)

    def push(self, events: Union[Event, list[Event]]):
        """Push an Event or a list of Events onto the heap."""
        if isinstance(events, list):
            for event in events:
                heapq.heappush(self._heap, event)
        else:
            heapq.heappush(self._heap, events)

    def pop(self) -> Event:
        return heapq.heappop(self._heap)

    def peek(self) -> Event:
        return self._heap[0]

    def has_events(self) -> bool:
        return bool(self._heap)

    def live_events(self) -> list[Event]:
        """Events still waiting to run, in no particular order."""
        return [event for event in self._heap if not event.cancelled]
