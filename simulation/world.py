"""
Timestep-based grid world around the dispatcher.

At each tick it:
    1. releases people whose appear_tick has arrived
    2. runs the dispatcher (assignments, pickups, pooling, one move per vehicle)
    3. counts every active person's deadline down by one
    4. boards this tick's picks and drops passengers standing at their destination
    5. walks people who can no longer afford to wait (half vehicle speed)
    6. forgets finished people in the dispatch state and snapshots metrics
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Sequence

from dispatch.dispatcher import Dispatcher
from dispatch.events import TickReport
from dispatch.policy import DispatchPolicy
from dispatch.state_machines.person_state import transition_person_to_delivered
from dispatch.state_machines.vehicle_state import sync_vehicle_state
from riders.models import Person
from riders.roster import PeopleRoster
from routing.directory import position_of
from routing.grid_metric import in_same_position, manhattan_distance, next_step
from routing.models import Building
from vehicles.models import Vehicle

from .metrics import MetricTracker

logger = logging.getLogger(__name__)


class World:
    def __init__(
        self,
        buildings: Mapping[str, Building],
        vehicles: Sequence[Vehicle],
        people: Sequence[Person] = (),
        policy: Optional[DispatchPolicy] = None,
        dispatcher: Optional[Dispatcher] = None,
    ):
        self.buildings = buildings
        self.vehicles = list(vehicles)
        self.dispatcher = dispatcher or Dispatcher(policy=policy)
        self.policy = self.dispatcher.policy

        self.roster = PeopleRoster()
        self.roster.enqueue_many(people)

        self.metrics = MetricTracker()
        self.tick = 0

        self.delivered_by_vehicle = 0
        self.delivered_on_foot = 0
        self.late_deliveries = 0

        self._walk_progress: Dict[str, int] = {}

    # ------------------------------------------------------------------ #
    # Tick loop
    # ------------------------------------------------------------------ #

    def step(self) -> TickReport:
        released = self.roster.release_due(self.tick)
        for person in released:
            logger.debug("Tick %d: %s appears at %s", self.tick, person.name, person.origin)

        report = self.dispatcher.turn(self.vehicles, self.roster.active_people(), self.buildings)

        self._count_down_deadlines()
        self._board_and_drop()
        self._walk_people()

        self.metrics.snapshot(self, report)
        self.tick += 1
        return report

    def run(self, ticks: int) -> List[TickReport]:
        """
        Step up to ticks times, stopping early once nobody is pending or active.
        """
        reports: List[TickReport] = []
        for _ in range(ticks):
            reports.append(self.step())
            if self.is_finished():
                break
        return reports

    def is_finished(self) -> bool:
        return not self.roster.has_pending() and not self.roster.active_people()

    # ------------------------------------------------------------------ #
    # Harness mechanics
    # ------------------------------------------------------------------ #

    def _count_down_deadlines(self) -> None:
        for person in self.roster.active_people():
            person.time -= 1

    def _board_and_drop(self) -> None:
        for vehicle in self.vehicles:
            vehicle.load_picks()
            for person in list(vehicle.onboard):
                person.walking = False
                if in_same_position(vehicle.position, position_of(self.buildings, person.destination)):
                    vehicle.drop(person)
                    self._deliver(person, by_vehicle=True)

            # TRANSPORTING -> IDLE happens here, once the last passenger is off
            sync_vehicle_state(vehicle, self.dispatcher.state, strict=self.policy.strict_invariants)

    def _walk_people(self) -> None:
        factor = self.policy.walk_slowdown_factor
        for person in self.roster.active_people():
            if not person.is_waiting():
                continue

            destination = position_of(self.buildings, person.destination)
            if not person.walking:
                # Waiting any longer would make the destination unreachable on foot
                if person.time > factor * manhattan_distance(person.position, destination):
                    continue
                person.walking = True
                logger.debug("Tick %d: %s starts walking to %s", self.tick, person.name, person.destination)

            progress = self._walk_progress.get(person.name, 0) + 1
            self._walk_progress[person.name] = progress
            if progress % factor == 0:
                person.move_to_position(next_step(person.position, destination))

            if in_same_position(person.position, destination):
                self._deliver(person, by_vehicle=False)

    def _deliver(self, person: Person, *, by_vehicle: bool) -> None:
        transition_person_to_delivered(person)
        self.roster.finish(person.name)
        self.dispatcher.state.release(person.name)
        self._walk_progress.pop(person.name, None)

        if by_vehicle:
            self.delivered_by_vehicle += 1
        else:
            self.delivered_on_foot += 1
        if person.time < 0:
            self.late_deliveries += 1

        logger.info(
            "DELIVER | %s at %s %s (time left %d)",
            person.name, person.destination, "by vehicle" if by_vehicle else "on foot", person.time,
        )
