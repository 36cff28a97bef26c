import os

import pandas as pd
import pytest

from dispatch.policy import DispatchPolicy, policy_from_env
from riders.models import Person, PickupStatus
from routing.models import Building
from simulation.config import SimulationConfig, load_simulation_config
from simulation.loader import ScenarioLoadError, load_scenario
from simulation.world import World
from vehicles.models import Vehicle, VehicleState

SAMPLE_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "sampledata")


@pytest.fixture
def two_buildings():
    return {
        "A": Building.new("A", 0, 0),
        "C": Building.new("C", 4, 0),
    }


def test_vehicle_delivers_a_single_rider(two_buildings):
    vehicle = Vehicle.new("one", 0, 0)
    person = Person.new("p1", "A", "C", 20, two_buildings["A"].position)
    world = World(two_buildings, [vehicle], [person])

    world.run(20)

    # 1. Pickup on tick 0, four moves, drop on tick 4
    assert world.tick == 5
    assert world.is_finished()
    assert world.delivered_by_vehicle == 1
    assert world.late_deliveries == 0

    # 2. Everything is cleaned up
    assert person.status == PickupStatus.DELIVERED
    assert person.time == 15
    assert vehicle.state == VehicleState.IDLE
    assert vehicle.onboard == []
    assert world.dispatcher.state.scheduled_snapshot() == {}


def test_unserved_person_walks_at_half_speed(two_buildings):
    buildings = dict(two_buildings, C=Building.new("C", 2, 0))
    person = Person.new("p1", "A", "C", 4, buildings["A"].position)
    world = World(buildings, [], [person])

    world.run(10)

    assert world.tick == 4
    assert world.delivered_on_foot == 1
    assert world.late_deliveries == 0
    assert person.time == 0


def test_people_appear_on_their_tick(two_buildings):
    early = Person.new("early", "A", "C", 50, (0, 0))
    late = Person.new("late", "A", "C", 50, (0, 0), appear_tick=3)
    world = World(two_buildings, [], [early, late])

    world.step()
    assert [p.name for p in world.roster.active_people()] == ["early"]

    world.step()
    world.step()
    world.step()
    assert [p.name for p in world.roster.active_people()] == ["early", "late"]


def test_metrics_track_every_tick(two_buildings):
    vehicle = Vehicle.new("one", 0, 0)
    person = Person.new("p1", "A", "C", 20, two_buildings["A"].position)
    world = World(two_buildings, [vehicle], [person])
    world.run(20)

    df = world.metrics.to_dataframe()
    summary = world.metrics.summary()

    assert len(df) == 5
    assert list(df["onboard"]) == [1, 1, 1, 1, 0]
    assert summary["assigned_total"] == 1
    assert summary["delivered_by_vehicle"] == 1
    assert summary["pooled_total"] == 0


def test_sample_scenario_runs_to_completion():
    scenario = load_scenario(SAMPLE_DIR)
    world = World(scenario.buildings, scenario.vehicles, scenario.people)

    reports = world.run(300)

    commitments = [pair for report in reports for pair in report.commitments()]
    names = [name for name, _ in commitments]
    assert len(names) == len(set(names))

    assert world.is_finished()
    assert world.delivered_by_vehicle + world.delivered_on_foot == len(scenario.people)


def _write(path, text):
    path.write_text(text)


def test_loader_reads_csv_scenario(tmp_path):
    _write(tmp_path / "buildings.csv", "building_id,x,y\nA,0,0\nB,3,4\n")
    _write(tmp_path / "vehicles.csv", "vehicle_id,x,y\nv1,1,1\n")
    _write(tmp_path / "people.csv", "person_id,origin,destination,time\np1,B,A,12\n")

    scenario = load_scenario(str(tmp_path))

    assert scenario.buildings.position_of("B") == (3, 4)
    assert scenario.vehicles[0].position == (1, 1)
    person = scenario.people[0]
    assert person.position == (3, 4)
    assert person.time == 12
    assert person.appear_tick == 0


def test_loader_rejects_bad_files(tmp_path):
    with pytest.raises(ScenarioLoadError):
        load_scenario(str(tmp_path))

    _write(tmp_path / "buildings.csv", "building_id,x,y\nA,0,0\n")
    _write(tmp_path / "vehicles.csv", "vehicle_id,x\nv1,1\n")
    _write(tmp_path / "people.csv", "person_id,origin,destination,time\np1,A,Z,12\n")
    with pytest.raises(ScenarioLoadError):
        load_scenario(str(tmp_path))

    _write(tmp_path / "vehicles.csv", "vehicle_id,x,y\nv1,1,1\n")
    with pytest.raises(ScenarioLoadError, match="unknown building"):
        load_scenario(str(tmp_path))


def test_metrics_csv_export(tmp_path, two_buildings):
    world = World(two_buildings, [Vehicle.new("one", 0, 0)], [Person.new("p1", "A", "C", 20, (0, 0))])
    world.run(20)

    out = tmp_path / "metrics.csv"
    world.metrics.save_csv(out)

    assert pd.read_csv(out)["tick"].tolist() == [0, 1, 2, 3, 4]


def test_policy_and_config_from_env(monkeypatch):
    monkeypatch.setenv("DISPATCH_WALK_SLOWDOWN_FACTOR", "3")
    monkeypatch.setenv("DISPATCH_ENABLE_POOLING", "false")
    monkeypatch.setenv("SIM_TICKS", "50")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    policy = policy_from_env()
    config = load_simulation_config()

    assert policy.walk_slowdown_factor == 3
    assert not policy.enable_pooling
    assert policy.strict_invariants
    assert config.ticks == 50
    assert config.log_level == "DEBUG"


def test_impossible_settings_are_rejected():
    with pytest.raises(ValueError):
        DispatchPolicy(walk_slowdown_factor=0).validate()
    with pytest.raises(ValueError):
        SimulationConfig(ticks=0).validate()
