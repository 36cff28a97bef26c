#Marks routing as a package.
#Re-exports the grid metric and the building directory so other modules
#import from routing without knowing internal file names.
#No business logic.

from .models import Building, GridPoint
from .grid_metric import manhattan_distance, in_same_position, next_step, path_length
from .directory import BuildingDirectory, UnknownBuildingError, building_of, position_of

__all__ = [
    "Building",
    "GridPoint",
    "manhattan_distance",
    "in_same_position",
    "next_step",
    "path_length",
    "BuildingDirectory",
    "UnknownBuildingError",
    "building_of",
    "position_of",
]
