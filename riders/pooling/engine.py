"""
Purpose: The ride pooling "orchestrator" (single entry point).
What it does:

Runs when a vehicle has just reached a building to make a committed pickup:

- builds the baseline drop schedule (feasibility.py): onboard passengers in
  order, then riders already picked at this stop

- scans the people list in order for uncommitted riders waiting at this building

- accepts a rider iff being dropped after everyone already scheduled still
  meets their deadline; the schedule then grows to include them, so later
  candidates are checked against the longer route

- picks accepted riders on the spot and records them in DispatchState
  (never in the pick queue)

The schedule is rebuilt from scratch at every stop. Nothing is carried over
between ticks.

Rule: Engine is the only file other modules should call directly for pooling.
"""

# riders/pooling/engine.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence

from dispatch.policy import DispatchPolicy, default_policy
from dispatch.state import DispatchState
from dispatch.state_machines.person_state import transition_person_to_onboard
from routing.directory import position_of
from routing.grid_metric import in_same_position
from routing.models import Building
from vehicles.models import Vehicle

from ..models import Person, PickupStatus
from .feasibility import (
    DropSchedule,
    build_baseline_schedule,
    evaluate_pooling_candidate,
    index_by_name,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PoolingRejection:
    person_name: str
    total_time: int
    deadline: int


@dataclass(frozen=True)
class PoolingResult:
    """
    Output of a pooling run at one stop.
    """
    vehicle_name: str
    building_name: str
    ran: bool
    accepted: List[str] = field(default_factory=list)
    rejected: List[PoolingRejection] = field(default_factory=list)
    baseline: Optional[DropSchedule] = None
    final: Optional[DropSchedule] = None


def is_pooling_candidate(
    person: Person,
    building: Building,
    vehicle: Vehicle,
    state: DispatchState,
) -> bool:
    if state.is_scheduled(person.name):
        return False
    if person.status != PickupStatus.UNASSIGNED:
        return False
    if person.origin != building.name:
        return False
    # walked off already
    if not in_same_position(person.position, building.position):
        return False
    if person.name in vehicle.picks:
        return False
    if any(passenger.name == person.name for passenger in vehicle.onboard):
        return False
    return True


def pool_riders_at_stop(
    vehicle: Vehicle,
    people: Sequence[Person],
    building: Building,
    buildings: Mapping[str, Building],
    state: DispatchState,
    policy: Optional[DispatchPolicy] = None,
) -> PoolingResult:
    """
    Main pooling entry point.

    Parameters
    ----------
    vehicle:
        The vehicle that just made a pickup at building.
    people:
        The active roster, in scan order.
    building:
        Where the vehicle stands. Pooling is a no-op anywhere else.
    buildings:
        building id -> Building lookup for destinations.
    state:
        Scheduling ledger. Accepted riders are recorded here.

    Returns
    -------
    PoolingResult:
        accepted: names picked here, in acceptance order
        rejected: candidates whose deadline the cumulative route would miss
    """
    policy = policy or default_policy()

    if not policy.enable_pooling or not in_same_position(vehicle.position, building.position):
        return PoolingResult(vehicle_name=vehicle.name, building_name=building.name, ran=False)

    baseline = build_baseline_schedule(
        vehicle.position,
        vehicle.onboard,
        vehicle.picks,
        index_by_name(people),
        buildings,
    )

    schedule = baseline
    accepted: List[str] = []
    rejected: List[PoolingRejection] = []

    for person in people:
        if not is_pooling_candidate(person, building, vehicle, state):
            continue

        check = evaluate_pooling_candidate(schedule, person, position_of(buildings, person.destination))
        if not check.is_feasible:
            logger.debug("Vehicle %s: not pooling %s at %s (%s)", vehicle.name, person.name, building.name, check.reason)
            rejected.append(PoolingRejection(person.name, check.total_time, person.time))
            continue

        state.record_pooled(person.name, vehicle.name)
        transition_person_to_onboard(person, vehicle.name)
        vehicle.pick(person)
        schedule = check.extended
        accepted.append(person.name)

        logger.info(
            "POOL | %s joins vehicle %s at %s (drop at %d, deadline %d)",
            person.name, vehicle.name, building.name, check.total_time, person.time,
        )

    return PoolingResult(
        vehicle_name=vehicle.name,
        building_name=building.name,
        ran=True,
        accepted=accepted,
        rejected=rejected,
        baseline=baseline,
        final=schedule,
    )
