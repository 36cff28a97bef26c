"""
The vehicle state machine, made explicit.

State is resolved from the facts (pick queue, passengers) once per tick and
every change is checked against ALLOWED_TRANSITIONS. TRANSPORTING -> IDLE is
the only transition the dispatcher never causes itself: the harness drops
the last passenger. A vehicle carrying passengers never goes back to a
pickup run.
"""

import logging
from typing import Dict, FrozenSet

from vehicles.models import Vehicle, VehicleState
from dispatch.state import DispatchState

logger = logging.getLogger(__name__)


class VehicleStateException(Exception):
    """Raised when an invalid vehicle transition is attempted."""
    pass


ALLOWED_TRANSITIONS: Dict[VehicleState, FrozenSet[VehicleState]] = {
    VehicleState.IDLE: frozenset({
        VehicleState.IDLE,
        VehicleState.EN_ROUTE_TO_PICKUP,
        # snapshot vehicle handed over already carrying passengers
        VehicleState.TRANSPORTING,
    }),
    VehicleState.EN_ROUTE_TO_PICKUP: frozenset({
        VehicleState.EN_ROUTE_TO_PICKUP,
        VehicleState.TRANSPORTING,
        # queue head left the roster before we reached them
        VehicleState.IDLE,
    }),
    VehicleState.TRANSPORTING: frozenset({
        VehicleState.TRANSPORTING,
        VehicleState.IDLE,
    }),
}


def resolve_vehicle_state(vehicle: Vehicle, state: DispatchState) -> VehicleState:
    """
    A committed pickup outranks passengers: a vehicle with a queue head is
    driving to it.
    """
    if state.on_pickup_run(vehicle.name):
        return VehicleState.EN_ROUTE_TO_PICKUP
    if vehicle.has_passenger():
        return VehicleState.TRANSPORTING
    return VehicleState.IDLE


def transition_vehicle(vehicle: Vehicle, new_state: VehicleState, *, strict: bool = True) -> Vehicle:
    """
    Move vehicle to new_state if the transition is allowed.

    strict=True raises VehicleStateException on an illegal transition,
    otherwise the transition is applied and logged as a warning.
    """
    current = vehicle.state
    if new_state not in ALLOWED_TRANSITIONS[current]:
        message = f"Vehicle {vehicle.name}: illegal transition {current.value} -> {new_state.value}"
        if strict:
            raise VehicleStateException(message)
        logger.warning(message)

    vehicle.state = new_state
    return vehicle


def sync_vehicle_state(vehicle: Vehicle, state: DispatchState, *, strict: bool = True) -> VehicleState:
    """
    Resolve the vehicle's state from the facts and transition to it.
    """
    transition_vehicle(vehicle, resolve_vehicle_state(vehicle, state), strict=strict)
    return vehicle.state


def check_vehicle_invariants(vehicle: Vehicle, state: DispatchState) -> None:
    """
    Every name in a vehicle's pick queue must be scheduled to that vehicle.
    """
    for person_name in state.pick_queue(vehicle.name):
        owner = state.vehicle_for(person_name)
        if owner != vehicle.name:
            raise VehicleStateException(
                f"Vehicle {vehicle.name} queues {person_name}, who is scheduled to {owner}"
            )
