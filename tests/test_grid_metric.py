import pytest

from routing import Building, BuildingDirectory, UnknownBuildingError, building_of, position_of
from routing.grid_metric import manhattan_distance, in_same_position, next_step, path_length


def test_manhattan_distance_is_symmetric_and_non_negative():
    a, b, c = (0, 0), (3, 4), (-2, 7)

    assert manhattan_distance(a, b) == 7
    assert manhattan_distance(b, a) == 7
    assert manhattan_distance(a, a) == 0

    # Triangle inequality
    assert manhattan_distance(a, c) <= manhattan_distance(a, b) + manhattan_distance(b, c)


def test_next_step_closes_x_then_y():
    assert next_step((0, 0), (2, 3)) == (1, 0)
    assert next_step((2, 0), (2, 3)) == (2, 1)
    assert next_step((2, 3), (2, 3)) == (2, 3)
    assert next_step((5, 5), (3, 5)) == (4, 5)


def test_walking_the_steps_takes_exactly_the_distance():
    position, target = (1, 9), (7, 2)
    steps = 0
    while not in_same_position(position, target):
        position = next_step(position, target)
        steps += 1

    assert steps == manhattan_distance((1, 9), (7, 2))


def test_path_length_visits_stops_in_order():
    assert path_length((0, 0), [(3, 0), (3, 4)]) == 7
    assert path_length((0, 0), [(3, 4), (3, 0)]) == 11
    assert path_length((0, 0), []) == 0


def test_building_directory_lookup():
    directory = BuildingDirectory([Building.new("A", 0, 0), Building.new("B", 6, 2)])

    assert directory.position_of("B") == (6, 2)
    assert list(directory) == ["A", "B"]
    assert "A" in directory

    with pytest.raises(UnknownBuildingError):
        directory.position_of("Z")

    with pytest.raises(ValueError):
        BuildingDirectory([Building.new("A", 0, 0), Building.new("A", 1, 1)])


def test_plain_dict_lookups_raise_unknown_building():
    buildings = {"A": Building.new("A", 0, 0)}

    assert building_of(buildings, "A").position == (0, 0)
    assert position_of(buildings, "A") == (0, 0)

    with pytest.raises(UnknownBuildingError):
        building_of(buildings, "Z")
    with pytest.raises(UnknownBuildingError):
        position_of(buildings, "Z")
