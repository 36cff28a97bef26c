# riders/pooling/feasibility.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from routing.directory import position_of
from routing.grid_metric import manhattan_distance
from routing.models import Building, GridPoint

from ..models import Person


@dataclass(frozen=True)
class DropSchedule:
    """
    Where a vehicle's route currently ends, and how long it takes to get there.

    time:     ticks to drop everyone already scheduled, in order
    location: the last scheduled drop (or the vehicle itself if nobody is scheduled)
    """
    time: int
    location: GridPoint

    def extend(self, destination: GridPoint) -> DropSchedule:
        return DropSchedule(
            time=self.time + manhattan_distance(self.location, destination),
            location=destination,
        )


@dataclass(frozen=True)
class PoolingCheck:
    """
    Output of the cumulative deadline check for one pooling candidate.
    """
    is_feasible: bool
    total_time: int
    extended: DropSchedule
    reason: Optional[str] = None


def schedule_through(start: DropSchedule, destinations: Iterable[GridPoint]) -> DropSchedule:
    """
    Walk the destinations in order, accumulating travel time from start.
    """
    schedule = start
    for destination in destinations:
        schedule = schedule.extend(destination)
    return schedule


def drop_times(start: GridPoint, destinations: Sequence[GridPoint]) -> List[int]:
    """
    Cumulative drop time for each destination when visited in order.
    """
    times: List[int] = []
    schedule = DropSchedule(time=0, location=start)
    for destination in destinations:
        schedule = schedule.extend(destination)
        times.append(schedule.time)
    return times


def build_baseline_schedule(
    vehicle_position: GridPoint,
    onboard: Sequence[Person],
    picks_here: Sequence[str],
    people_by_name: Mapping[str, Person],
    buildings: Mapping[str, Building],
) -> DropSchedule:
    """
    Time to clear everyone the vehicle is already carrying, if nobody else is added:
      1) onboard passengers in FIFO order
      2) then riders picked at this stop, looked up by name.
         Names that are no longer in the roster are skipped.
    """
    schedule = DropSchedule(time=0, location=vehicle_position)

    schedule = schedule_through(
        schedule,
        (position_of(buildings, passenger.destination) for passenger in onboard),
    )

    for name in picks_here:
        person = people_by_name.get(name)
        if person is None:
            continue
        schedule = schedule.extend(position_of(buildings, person.destination))

    return schedule


def evaluate_pooling_candidate(
    schedule: DropSchedule,
    person: Person,
    destination: GridPoint,
) -> PoolingCheck:
    """
    Can person be dropped last, after everyone already in schedule, by their deadline?
    """
    extended = schedule.extend(destination)
    if extended.time > person.time:
        return PoolingCheck(
            False,
            extended.time,
            extended,
            reason=f"drop at {extended.time} misses deadline {person.time}",
        )
    return PoolingCheck(True, extended.time, extended)


def index_by_name(people: Iterable[Person]) -> Dict[str, Person]:
    return {person.name: person for person in people}
