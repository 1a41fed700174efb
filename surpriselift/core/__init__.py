"""Event runtime: virtual time, events, entities and the serial loop."""

from surpriselift.core.clock import Clock
from surpriselift.core.entity import Entity
from surpriselift.core.event import Event
from surpriselift.core.event_heap import EventHeap
from surpriselift.core.simulation import LoopSummary, Simulation
from surpriselift.core.temporal import Instant

__all__ = [
    "Clock",
    "Entity",
    "Event",
    "EventHeap",
    "Instant",
    "LoopSummary",
    "Simulation",
]
