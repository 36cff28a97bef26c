"""
Purpose: Building lookup (identity -> position).
What it does:
Wraps the fixed set of buildings behind a mapping so the dispatch engine can
treat it as an opaque lookup. Unknown ids fail loudly: a person pointing at a
building that does not exist is a malformed snapshot, not a policy outcome.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Mapping

from .models import Building, GridPoint


class UnknownBuildingError(KeyError):
    """Raised when a building id is not part of the directory."""
    pass


class BuildingDirectory(Mapping[str, Building]):
    """
    Read-only mapping of building name -> Building.
    """

    def __init__(self, buildings: Iterable[Building]):
        self._buildings: Dict[str, Building] = {}
        for building in buildings:
            if building.name in self._buildings:
                raise ValueError(f"Duplicate building id: {building.name}")
            self._buildings[building.name] = building

    def __getitem__(self, name: str) -> Building:
        try:
            return self._buildings[name]
        except KeyError:
            raise UnknownBuildingError(name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._buildings)

    def __len__(self) -> int:
        return len(self._buildings)

    def position_of(self, name: str) -> GridPoint:
        return self[name].position


def building_of(buildings: Mapping[str, Building], name: str) -> Building:
    """
    Building lookup that works for a BuildingDirectory or a plain dict.
    Unknown ids raise UnknownBuildingError either way.
    """
    try:
        return buildings[name]
    except UnknownBuildingError:
        raise
    except KeyError:
        raise UnknownBuildingError(name) from None


def position_of(buildings: Mapping[str, Building], name: str) -> GridPoint:
    return building_of(buildings, name).position
