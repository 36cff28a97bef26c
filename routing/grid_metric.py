#Purpose: The grid metric (the only "routing" this world has).
#Distance is the Manhattan metric over integer grid cells:
#symmetric, non-negative, obeys the triangle inequality.
#Movement is one cell per tick. We only compute the next cell toward a
#target, never a full path.

from __future__ import annotations

from typing import Sequence

from .models import GridPoint


def manhattan_distance(a: GridPoint, b: GridPoint) -> int:
    """
    |ax - bx| + |ay - by|
    """
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def in_same_position(a: GridPoint, b: GridPoint) -> bool:
    return a[0] == b[0] and a[1] == b[1]


def next_step(origin: GridPoint, target: GridPoint) -> GridPoint:
    """
    Return the grid cell one step from origin toward target.

    Closes the x gap first, then the y gap. Returns origin unchanged
    when already on the target.
    """
    x, y = origin
    target_x, target_y = target

    if x != target_x:
        x += 1 if target_x > x else -1
    elif y != target_y:
        y += 1 if target_y > y else -1

    return (x, y)


def path_length(start: GridPoint, stops: Sequence[GridPoint]) -> int:
    """
    Total distance of visiting stops in the given order, starting at start.
    """
    total = 0
    current = start
    for stop in stops:
        total += manhattan_distance(current, stop)
        current = stop
    return total
