#Purpose: Hard feasibility rules for the Assignment Selector (rule gates).
#Builds the candidate set before ranking.
#Rules, for a vehicle V and a person P with destination D:
#trip distance     = d(V, P) + d(P, D)          must be <= P.time
#pickup distance   = d(V, P)
#pickup deadline   = P.time - walk factor * d(P, D)
#                                                must be > pickup distance
#P is measured at their current position, which is the origin building
#while they wait.
#Already-committed people never make it through.
#
#Output: feasible PickupCandidates in people-list order (still not ranked).

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

from riders.models import Person, PickupStatus
from routing.directory import position_of
from routing.grid_metric import manhattan_distance
from routing.models import Building, GridPoint

from .policy import DispatchPolicy, default_policy
from .state import DispatchState


@dataclass(frozen=True)
class PickupCandidate:
    """
    A feasible person for one vehicle, with the metrics the ranking consumes.
    """
    person_name: str
    scan_index: int  # position in the people list, used for tie-breaks
    trip_distance: int
    pickup_distance: int
    pickup_deadline: int


def trip_distance(vehicle_position: GridPoint, person_position: GridPoint, destination: GridPoint) -> int:
    return manhattan_distance(vehicle_position, person_position) + manhattan_distance(person_position, destination)


def pickup_deadline(person: Person, destination: GridPoint, walk_slowdown_factor: int = 2) -> int:
    """
    Latest pickup distance that still beats the person walking to their
    destination at 1/walk_slowdown_factor of vehicle speed.
    """
    return person.time - walk_slowdown_factor * manhattan_distance(person.position, destination)


def evaluate_pickup(
    vehicle_position: GridPoint,
    person: Person,
    destination: GridPoint,
    *,
    scan_index: int = 0,
    walk_slowdown_factor: int = 2,
) -> Optional[PickupCandidate]:
    """
    Apply the deadline rules to one person. Returns None when infeasible.
    Commitment is checked by the caller.
    """
    distance_to_pickup = manhattan_distance(vehicle_position, person.position)
    trip = trip_distance(vehicle_position, person.position, destination)
    deadline = pickup_deadline(person, destination, walk_slowdown_factor)

    if trip > person.time:
        return None
    if deadline <= distance_to_pickup:
        return None

    return PickupCandidate(
        person_name=person.name,
        scan_index=scan_index,
        trip_distance=trip,
        pickup_distance=distance_to_pickup,
        pickup_deadline=deadline,
    )


def is_available_for_assignment(person: Person, state: DispatchState) -> bool:
    return person.status == PickupStatus.UNASSIGNED and not state.is_scheduled(person.name)


def build_pickup_candidates(
    vehicle_position: GridPoint,
    people: Sequence[Person],
    buildings: Mapping[str, Building],
    state: DispatchState,
    policy: Optional[DispatchPolicy] = None,
) -> List[PickupCandidate]:
    """
    Returns every feasible, uncommitted person for a vehicle at
    vehicle_position, in people-list order.
    """
    policy = policy or default_policy()

    candidates: List[PickupCandidate] = []
    for index, person in enumerate(people):
        if not is_available_for_assignment(person, state):
            continue

        destination = position_of(buildings, person.destination)
        candidate = evaluate_pickup(
            vehicle_position,
            person,
            destination,
            scan_index=index,
            walk_slowdown_factor=policy.walk_slowdown_factor,
        )
        if candidate is not None:
            candidates.append(candidate)

    return candidates
