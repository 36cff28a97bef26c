"""
Purpose: Core data models for the vehicles domain.
What it does:
Defines the Vehicle (position, onboard passengers, picks made at the current
stop) and its dispatch state, plus the two primitives the dispatcher issues:
move one step toward a target, and pick up a person.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from riders.models import Person
from routing.grid_metric import next_step
from routing.models import GridPoint


class VehicleState(str, Enum):
    """
    The three states the dispatcher moves a vehicle through.
    """
    IDLE = "idle"
    EN_ROUTE_TO_PICKUP = "enRouteToPickup"
    TRANSPORTING = "transporting"


@dataclass
class Vehicle:
    """
    A vehicle at a specific point in time.

    onboard: passengers loaded at earlier stops, in pickup order (FIFO drops).
    picks:   names picked at the current stop during this tick. The harness
             boards them with load_picks() once the tick is over.
    """
    name: str
    x: int
    y: int
    state: VehicleState = VehicleState.IDLE

    onboard: List[Person] = field(default_factory=list)
    picks: List[str] = field(default_factory=list)

    _boarding: List[Person] = field(default_factory=list, repr=False)

    @property
    def position(self) -> GridPoint:
        return (self.x, self.y)

    # ------------------------------------------------------------------ #
    # Primitives issued by the dispatcher
    # ------------------------------------------------------------------ #

    def move_to(self, target: GridPoint) -> GridPoint:
        """Advance one grid cell toward target. Passengers ride along."""
        self.x, self.y = next_step(self.position, target)
        for passenger in self.onboard:
            passenger.move_to_position(self.position)
        return self.position

    def pick(self, person: Person) -> None:
        """Record a pickup at the current stop."""
        if person.name in self.picks:
            return
        self.picks.append(person.name)
        self._boarding.append(person)
        person.move_to_position(self.position)

    # ------------------------------------------------------------------ #
    # Harness-side mechanics
    # ------------------------------------------------------------------ #

    def load_picks(self) -> List[Person]:
        """Board everyone picked this tick, keeping pick order."""
        boarded = list(self._boarding)
        self.onboard.extend(boarded)
        self._boarding.clear()
        self.picks.clear()
        return boarded

    def drop(self, person: Person) -> None:
        self.onboard = [p for p in self.onboard if p.name != person.name]

    def has_passenger(self) -> bool:
        return bool(self.onboard or self.picks)

    def first_passenger(self) -> Optional[Person]:
        if self.onboard:
            return self.onboard[0]
        if self._boarding:
            return self._boarding[0]
        return None

    @classmethod
    def new(cls, name: str, x: int, y: int) -> Vehicle:
        return cls(name=str(name), x=int(x), y=int(y))
