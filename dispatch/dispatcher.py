"""
Purpose: Orchestrator / decision pipeline (the "glue").
What it does:
Runs once per tick over every vehicle, in input order:
1. IDLE vehicles ask the Assignment Selector for their next pickup.
2. Vehicles on a pickup run either pick up the queue head (and try to pool
   riders at that building) or take one step toward the head.
3. Vehicles carrying passengers take one step toward the first passenger's
   destination.

The Dispatcher owns the DispatchState. Movement, boarding and drop-off
mechanics belong to the vehicle objects and the harness.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Sequence

from riders.models import Person
from riders.pooling.engine import pool_riders_at_stop
from riders.pooling.feasibility import index_by_name
from routing.directory import building_of, position_of
from routing.grid_metric import in_same_position
from routing.models import Building
from vehicles.models import Vehicle, VehicleState

from .assignment import assign_next_pickup
from .events import DispatchEvent, EventKind, TickReport
from .policy import DispatchPolicy, default_policy
from .state import DispatchState
from .state_machines.person_state import transition_person_to_onboard
from .state_machines.vehicle_state import (
    check_vehicle_invariants,
    sync_vehicle_state,
    transition_vehicle,
)

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Per-tick entry point for the dispatch and pooling engine.
    """
    def __init__(self, state: Optional[DispatchState] = None, policy: Optional[DispatchPolicy] = None):
        self.state = state if state is not None else DispatchState()
        self.policy = policy or default_policy()
        self.policy.validate()
        self.tick = 0

    def turn(
        self,
        vehicles: Sequence[Vehicle],
        people: Sequence[Person],
        buildings: Mapping[str, Building],
    ) -> TickReport:
        """
        Process every vehicle once for the current tick.

        people is the active roster; its order is the scan order for both
        assignment and pooling, so it decides every tie.
        """
        report = TickReport(tick=self.tick)
        people_by_name = index_by_name(people)

        for vehicle in vehicles:
            self._process_vehicle(vehicle, people, people_by_name, buildings, report)

        self.tick += 1
        return report

    # ------------------------------------------------------------------ #
    # Per-vehicle pipeline
    # ------------------------------------------------------------------ #

    def _process_vehicle(
        self,
        vehicle: Vehicle,
        people: Sequence[Person],
        people_by_name: Dict[str, Person],
        buildings: Mapping[str, Building],
        report: TickReport,
    ) -> None:
        strict = self.policy.strict_invariants
        sync_vehicle_state(vehicle, self.state, strict=strict)
        if strict:
            check_vehicle_invariants(vehicle, self.state)

        # FINDING NEXT CUSTOMER
        if vehicle.state == VehicleState.IDLE:
            assignment = assign_next_pickup(vehicle, people, buildings, self.state, self.policy)
            if assignment is None:
                if self.policy.log_idle_vehicles:
                    logger.debug("Vehicle %s idle at %s", vehicle.name, vehicle.position)
                    report.add(DispatchEvent(EventKind.IDLE, vehicle.name, target=vehicle.position))
                return

            report.add(DispatchEvent(
                EventKind.ASSIGN,
                vehicle.name,
                person_name=assignment.person_name,
                metric=assignment.trip_distance,
            ))
            transition_vehicle(vehicle, VehicleState.EN_ROUTE_TO_PICKUP, strict=strict)

        # MOVING CARS ALONG
        if vehicle.state == VehicleState.EN_ROUTE_TO_PICKUP:
            self._advance_pickup_run(vehicle, people, people_by_name, buildings, report)
        elif vehicle.state == VehicleState.TRANSPORTING:
            self._advance_transport(vehicle, people_by_name, buildings, report)

    def _advance_pickup_run(
        self,
        vehicle: Vehicle,
        people: Sequence[Person],
        people_by_name: Dict[str, Person],
        buildings: Mapping[str, Building],
        report: TickReport,
    ) -> None:
        head_name = self.state.queue_head(vehicle.name)
        head = people_by_name.get(head_name)

        if head is None:
            # Committed person left the roster (walked off) before we got there
            logger.warning("Vehicle %s: dropping stale pickup %s", vehicle.name, head_name)
            self.state.pop_head(vehicle.name)
            report.add(DispatchEvent(EventKind.STALE, vehicle.name, person_name=head_name))
            sync_vehicle_state(vehicle, self.state, strict=self.policy.strict_invariants)
            return

        if in_same_position(vehicle.position, head.position) and head.is_committed_to(vehicle.name):
            transition_person_to_onboard(head, vehicle.name)
            vehicle.pick(head)
            self.state.pop_head(vehicle.name)
            report.add(DispatchEvent(EventKind.PICKUP, vehicle.name, person_name=head.name, target=vehicle.position))

            result = pool_riders_at_stop(
                vehicle,
                people,
                building_of(buildings, head.origin),
                buildings,
                self.state,
                self.policy,
            )
            for name in result.accepted:
                report.add(DispatchEvent(EventKind.POOL, vehicle.name, person_name=name, target=vehicle.position))

            sync_vehicle_state(vehicle, self.state, strict=self.policy.strict_invariants)
            return

        target = head.position
        vehicle.move_to(target)
        report.add(DispatchEvent(EventKind.MOVE, vehicle.name, person_name=head.name, target=target))

    def _advance_transport(
        self,
        vehicle: Vehicle,
        people_by_name: Dict[str, Person],
        buildings: Mapping[str, Building],
        report: TickReport,
    ) -> None:
        # FIFO drops: always head for the earliest-picked passenger
        passenger = vehicle.first_passenger()
        target = position_of(buildings, passenger.destination)
        vehicle.move_to(target)
        report.add(DispatchEvent(EventKind.MOVE, vehicle.name, person_name=passenger.name, target=target))
