"""
Purpose: Core data models for the grid world.
What it does:
Defines the grid coordinate type and the Building record.

Rule: No distance math here. Models only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

GridPoint = Tuple[int, int]


@dataclass(frozen=True)
class Building:
    """
    A named pickup / dropoff point. Buildings never move.
    """
    name: str
    x: int
    y: int

    @property
    def position(self) -> GridPoint:
        return (self.x, self.y)

    @classmethod
    def new(cls, name: str, x: int, y: int) -> Building:
        return cls(name=str(name), x=int(x), y=int(y))
