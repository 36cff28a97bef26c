"""
Purpose: The Assignment Selector.
What it does:
For one IDLE vehicle (no pick queue, no passengers), scans every
uncommitted person, keeps the feasible ones (candidate_filter), picks the
cheapest trip (scoring) and commits it:
- person -> COMMITTED to this vehicle
- person name -> DispatchState.scheduled and the vehicle's pick queue

No feasible person means no side effects; the vehicle stays IDLE this tick.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from riders.models import Person
from routing.models import Building
from vehicles.models import Vehicle

from .candidate_filter import build_pickup_candidates
from .policy import DispatchPolicy, default_policy
from .scoring import select_best_candidate
from .state import DispatchState
from .state_machines.person_state import transition_person_to_committed
from .state_machines.vehicle_state import VehicleStateException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Assignment:
    vehicle_name: str
    person_name: str
    trip_distance: int
    pickup_distance: int


def assign_next_pickup(
    vehicle: Vehicle,
    people: Sequence[Person],
    buildings: Mapping[str, Building],
    state: DispatchState,
    policy: Optional[DispatchPolicy] = None,
) -> Optional[Assignment]:
    """
    Commit the best feasible person to an idle vehicle.

    Raises VehicleStateException if the vehicle is already on a pickup run
    or carrying someone: callers gate on that before asking.
    """
    policy = policy or default_policy()

    if state.on_pickup_run(vehicle.name) or vehicle.has_passenger():
        raise VehicleStateException(
            f"Vehicle {vehicle.name} is busy; only idle vehicles can be assigned"
        )

    if not people:
        return None

    candidates = build_pickup_candidates(vehicle.position, people, buildings, state, policy)
    best = select_best_candidate(candidates)
    if best is None:
        logger.debug("Vehicle %s: no feasible pickup among %d people", vehicle.name, len(people))
        return None

    person = people[best.scan_index]
    state.commit(person.name, vehicle.name)
    transition_person_to_committed(person, vehicle.name)

    logger.info(
        "ASSIGN | %s -> vehicle %s (trip=%d, pickup=%d, deadline=%d)",
        person.name, vehicle.name, best.trip_distance, best.pickup_distance, best.pickup_deadline,
    )
    return Assignment(
        vehicle_name=vehicle.name,
        person_name=person.name,
        trip_distance=best.trip_distance,
        pickup_distance=best.pickup_distance,
    )
