# Standard libs
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List

import pandas as pd

# Domain models
from riders.models import Person
from routing.directory import BuildingDirectory
from routing.models import Building
from vehicles.models import Vehicle

BUILDING_COLUMNS = ["building_id", "x", "y"]
VEHICLE_COLUMNS = ["vehicle_id", "x", "y"]
PEOPLE_COLUMNS = ["person_id", "origin", "destination", "time"]


class ScenarioLoadError(Exception):
    """Raised when a scenario file is missing or malformed."""
    pass


@dataclass
class Scenario:
    buildings: BuildingDirectory
    vehicles: List[Vehicle]
    people: List[Person]


def _read_csv(file_path, required_columns) -> pd.DataFrame:
    if not os.path.isfile(file_path):
        raise ScenarioLoadError(f"Scenario file not found: {file_path}")

    df = pd.read_csv(file_path)
    missing = [c for c in required_columns if c not in df.columns]
    if missing:
        raise ScenarioLoadError(f"{file_path} is missing columns: {missing}")
    return df


def load_buildings(file_path) -> BuildingDirectory:
    """
    Loads buildings from a CSV file (building_id, x, y).
    """
    df = _read_csv(file_path, BUILDING_COLUMNS)
    try:
        return BuildingDirectory(
            Building.new(row.building_id, row.x, row.y) for row in df.itertuples(index=False)
        )
    except ValueError as exc:
        raise ScenarioLoadError(f"{file_path}: {exc}") from exc


def load_vehicles(file_path) -> List[Vehicle]:
    """
    Loads vehicles from a CSV file (vehicle_id, x, y). File order is dispatch order.
    """
    df = _read_csv(file_path, VEHICLE_COLUMNS)
    return [Vehicle.new(row.vehicle_id, row.x, row.y) for row in df.itertuples(index=False)]


def load_people(file_path, buildings: BuildingDirectory) -> List[Person]:
    """
    Loads people from a CSV file (person_id, origin, destination, time[, appear_tick]).
    Everyone starts at their origin building.
    """
    df = _read_csv(file_path, PEOPLE_COLUMNS)
    if "appear_tick" not in df.columns:
        df["appear_tick"] = 0

    people: List[Person] = []
    for row in df.itertuples(index=False):
        for building_id in (row.origin, row.destination):
            if str(building_id) not in buildings:
                raise ScenarioLoadError(f"{file_path}: person {row.person_id} references unknown building {building_id}")

        people.append(
            Person.new(
                name=row.person_id,
                origin=row.origin,
                destination=row.destination,
                time=row.time,
                position=buildings.position_of(str(row.origin)),
                appear_tick=row.appear_tick,
            )
        )
    return people


def load_scenario(root_path: str) -> Scenario:
    """Return the buildings, vehicles and people found under root_path."""
    buildings = load_buildings(os.path.join(root_path, "buildings.csv"))
    vehicles = load_vehicles(os.path.join(root_path, "vehicles.csv"))
    people = load_people(os.path.join(root_path, "people.csv"), buildings)
    return Scenario(buildings=buildings, vehicles=vehicles, people=people)
