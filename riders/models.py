"""
Purpose: Domain models for the Riders capability.
What it does:
- Defines the Person record (name, origin/destination building ids,
  relative deadline, current grid position, pickup status)
- Defines PickupStatus = UNASSIGNED | COMMITTED | ONBOARD | DELIVERED

The vehicle a person is committed to (or riding in) lives in vehicle_name,
so "who has this person" is answered by the status, not by probing for
attributes.

Rule: No dispatch or pooling logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from routing.models import GridPoint


class PickupStatus(Enum):
    UNASSIGNED = "UNASSIGNED"
    COMMITTED = "COMMITTED"
    ONBOARD = "ONBOARD"
    DELIVERED = "DELIVERED"


@dataclass
class Person:
    """
    A rider waiting at (or walking from) their origin building.

    time is relative: "must be at destination within this many ticks".
    The harness counts it down once per tick.
    """

    name: str
    origin: str
    destination: str
    time: int
    x: int = 0
    y: int = 0

    status: PickupStatus = PickupStatus.UNASSIGNED
    vehicle_name: Optional[str] = None

    # Harness bookkeeping
    appear_tick: int = 0
    walking: bool = False

    @property
    def position(self) -> GridPoint:
        return (self.x, self.y)

    def move_to_position(self, position: GridPoint) -> None:
        self.x, self.y = position

    def is_waiting(self) -> bool:
        return self.status in (PickupStatus.UNASSIGNED, PickupStatus.COMMITTED)

    def is_committed_to(self, vehicle_name: str) -> bool:
        return self.status == PickupStatus.COMMITTED and self.vehicle_name == vehicle_name

    @staticmethod
    def new(
        name: str,
        origin: str,
        destination: str,
        time: int,
        position: GridPoint,
        appear_tick: int = 0,
    ) -> Person:
        return Person(
            name=str(name),
            origin=str(origin),
            destination=str(destination),
            time=int(time),
            x=int(position[0]),
            y=int(position[1]),
            appear_tick=int(appear_tick),
        )
