"""
Purpose: What the dispatcher did during a tick, in issue order.
The report is for logs, metrics and tests. The effects themselves are the
mutations on vehicles, people and DispatchState.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from routing.models import GridPoint


class EventKind(Enum):
    ASSIGN = "ASSIGN"
    PICKUP = "PICKUP"
    POOL = "POOL"
    MOVE = "MOVE"
    IDLE = "IDLE"
    STALE = "STALE"


@dataclass(frozen=True)
class DispatchEvent:
    kind: EventKind
    vehicle_name: str
    person_name: Optional[str] = None
    target: Optional[GridPoint] = None
    metric: Optional[int] = None


@dataclass
class TickReport:
    tick: int
    events: List[DispatchEvent] = field(default_factory=list)

    def add(self, event: DispatchEvent) -> None:
        self.events.append(event)

    def of_kind(self, kind: EventKind) -> List[DispatchEvent]:
        return [e for e in self.events if e.kind == kind]

    def commitments(self) -> List[tuple]:
        """(person, vehicle) pairs for every ASSIGN and POOL, in order."""
        return [
            (e.person_name, e.vehicle_name)
            for e in self.events
            if e.kind in (EventKind.ASSIGN, EventKind.POOL)
        ]
