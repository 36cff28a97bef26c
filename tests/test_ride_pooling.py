import pytest

from dispatch.policy import no_pooling_policy
from dispatch.state import DispatchState
from riders.models import Person, PickupStatus
from riders.pooling import pool_riders_at_stop
from riders.pooling.feasibility import DropSchedule, build_baseline_schedule, drop_times, index_by_name
from routing.models import Building
from vehicles.models import Vehicle


@pytest.fixture
def buildings():
    """
    X is the stop. Y is 3 ticks from X.
    Z2 is 2 ticks past Y, Z4 is 4 ticks past Y, and Z2 <-> Z4 is 6 ticks.
    """
    return {
        "X": Building.new("X", 0, 2),
        "Y": Building.new("Y", 3, 2),
        "Z2": Building.new("Z2", 3, 0),
        "Z4": Building.new("Z4", 3, 6),
        "W": Building.new("W", 9, 9),
    }


def waiting(name, origin, destination, time, buildings):
    return Person.new(name, origin, destination, time, buildings[origin].position)


def rider(name, destination, vehicle):
    person = Person.new(name, "W", destination, 50, vehicle.position)
    person.status = PickupStatus.ONBOARD
    person.vehicle_name = vehicle.name
    return person


@pytest.fixture
def vehicle_at_stop(buildings):
    vehicle = Vehicle.new("one", *buildings["X"].position)
    vehicle.onboard.append(rider("o1", "Y", vehicle))
    return vehicle


def test_scenario_c_acceptance_is_cumulative(buildings, vehicle_at_stop):
    """
    Alone, each waiting person fits (3+2=5 and 3+4=7, deadlines 10).
    Together the second one would be dropped at 3+2+6=11 and is refused.
    """
    two = waiting("two", "X", "Z2", 10, buildings)
    four = waiting("four", "X", "Z4", 10, buildings)
    people = list(vehicle_at_stop.onboard) + [two, four]
    state = DispatchState()

    result = pool_riders_at_stop(vehicle_at_stop, people, buildings["X"], buildings, state)

    # 1. Baseline covers the onboard passenger only
    assert result.ran
    assert result.baseline == DropSchedule(time=3, location=(3, 2))

    # 2. First fits, second is checked against the grown route
    assert result.accepted == ["two"]
    assert [r.person_name for r in result.rejected] == ["four"]
    assert result.rejected[0].total_time == 11
    assert result.final == DropSchedule(time=5, location=(3, 0))

    # 3. Accepted rider is picked and scheduled, but not queued
    assert two.status == PickupStatus.ONBOARD
    assert two.vehicle_name == "one"
    assert state.vehicle_for("two") == "one"
    assert state.pick_queue("one") == []
    assert vehicle_at_stop.picks == ["two"]

    # 4. Refused rider is untouched
    assert four.status == PickupStatus.UNASSIGNED
    assert not state.is_scheduled("four")


def test_scan_order_decides_who_pools(buildings, vehicle_at_stop):
    two = waiting("two", "X", "Z2", 10, buildings)
    four = waiting("four", "X", "Z4", 10, buildings)
    people = list(vehicle_at_stop.onboard) + [four, two]

    result = pool_riders_at_stop(vehicle_at_stop, people, buildings["X"], buildings, DispatchState())

    assert result.accepted == ["four"]
    assert [r.person_name for r in result.rejected] == ["two"]


def test_pooling_never_delays_existing_passengers(buildings, vehicle_at_stop):
    head = waiting("head", "X", "Y", 30, buildings)
    head.status = PickupStatus.ONBOARD
    head.vehicle_name = "one"
    vehicle_at_stop.pick(head)

    people = list(vehicle_at_stop.onboard) + [
        head,
        waiting("a", "X", "Z4", 40, buildings),
        waiting("b", "X", "Z2", 40, buildings),
        waiting("c", "X", "W", 12, buildings),
    ]
    by_name = index_by_name(people)

    def destinations():
        order = [p.destination for p in vehicle_at_stop.onboard]
        order += [by_name[name].destination for name in vehicle_at_stop.picks]
        return [buildings[d].position for d in order]

    before = drop_times(vehicle_at_stop.position, destinations())
    result = pool_riders_at_stop(vehicle_at_stop, people, buildings["X"], buildings, DispatchState())
    after = drop_times(vehicle_at_stop.position, destinations())

    assert result.accepted == ["a", "b"]
    assert after[: len(before)] == before
    for name, drop_time in zip(["a", "b"], after[len(before):]):
        assert drop_time <= by_name[name].time


def test_picks_here_count_toward_the_baseline(buildings):
    vehicle = Vehicle.new("one", *buildings["X"].position)
    head = waiting("head", "X", "Y", 30, buildings)
    vehicle.pick(head)
    vehicle.picks.append("ghost")

    schedule = build_baseline_schedule(
        vehicle.position, vehicle.onboard, vehicle.picks, index_by_name([head]), buildings
    )

    # ghost is not in the roster and is skipped
    assert schedule == DropSchedule(time=3, location=(3, 2))


def test_noop_when_vehicle_is_not_at_the_building(buildings, vehicle_at_stop):
    vehicle_at_stop.x += 1
    person = waiting("two", "X", "Z2", 10, buildings)
    state = DispatchState()

    result = pool_riders_at_stop(vehicle_at_stop, [person], buildings["X"], buildings, state)

    assert not result.ran
    assert result.accepted == []
    assert vehicle_at_stop.picks == []
    assert person.status == PickupStatus.UNASSIGNED
    assert state.scheduled_snapshot() == {}


def test_noop_when_pooling_is_disabled(buildings, vehicle_at_stop):
    person = waiting("two", "X", "Z2", 10, buildings)

    result = pool_riders_at_stop(
        vehicle_at_stop, [person], buildings["X"], buildings, DispatchState(), no_pooling_policy()
    )

    assert not result.ran
    assert person.status == PickupStatus.UNASSIGNED


def test_only_uncommitted_riders_from_this_building_are_considered(buildings, vehicle_at_stop):
    elsewhere = waiting("elsewhere", "W", "Z2", 99, buildings)
    elsewhere.move_to_position(buildings["X"].position)

    taken = waiting("taken", "X", "Z2", 99, buildings)
    state = DispatchState()
    state.commit("taken", "two")
    taken.status = PickupStatus.COMMITTED
    taken.vehicle_name = "two"

    result = pool_riders_at_stop(vehicle_at_stop, [elsewhere, taken], buildings["X"], buildings, state)

    assert result.ran
    assert result.accepted == []
    assert result.rejected == []
    assert state.vehicle_for("taken") == "two"


def test_riders_who_walked_off_are_not_pooled(buildings, vehicle_at_stop):
    walker = waiting("walker", "X", "Z2", 10, buildings)
    walker.walking = True
    walker.move_to_position((1, 2))
    stayer = waiting("stayer", "X", "Z2", 10, buildings)
    state = DispatchState()

    result = pool_riders_at_stop(vehicle_at_stop, [walker, stayer], buildings["X"], buildings, state)

    assert result.accepted == ["stayer"]
    assert walker.status == PickupStatus.UNASSIGNED
    assert walker.position == (1, 2)
    assert not state.is_scheduled("walker")
