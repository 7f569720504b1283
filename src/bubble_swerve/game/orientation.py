from __future__ import annotations

from enum import IntEnum
from typing import Tuple


class Direction(IntEnum):
    LEFT = 0
    RIGHT = 1
    DOWN = 2
    UP = 3

    @property
    def delta(self) -> Tuple[int, int]:
        """(row, col) step for one move in this direction."""
        return _DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_DELTAS = {
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
    Direction.DOWN: (1, 0),
    Direction.UP: (-1, 0),
}

_OPPOSITES = {
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.DOWN: Direction.UP,
    Direction.UP: Direction.DOWN,
}


class ClockDirection(IntEnum):
    CLOCKWISE = 0
    COUNTER_CLOCKWISE = 1


class Orientation(IntEnum):
    """Gravity state of the whole board.

    Each board rotation advances the orientation clockwise:
    DOWN -> LEFT -> UP -> RIGHT -> DOWN.
    """

    DOWN = 0
    LEFT = 1
    UP = 2
    RIGHT = 3

    @property
    def gravity(self) -> Direction:
        return Direction[self.name]

    def next_clockwise(self) -> "Orientation":
        return Orientation((self + 1) % 4)
