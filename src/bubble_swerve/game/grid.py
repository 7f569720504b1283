from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Optional, Tuple

import numpy as np

from .orientation import Orientation
from .shapes import Color, color_for_value


logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]  # (row, col)

DEFAULT_WIDTH = 12
DEFAULT_HEIGHT = 22


class Cell(NamedTuple):
    row: int
    col: int
    color: Color


@dataclass
class PlacementResult:
    placed: int
    collision: Optional[Coordinate] = None

    @property
    def ok(self) -> bool:
        return self.collision is None


# Orientations whose sweep starts at the stacking edge; the others start at the far edge.
_SWEEP_FROM_STACK = {
    Orientation.DOWN: True,
    Orientation.UP: True,
    Orientation.RIGHT: False,
    Orientation.LEFT: False,
}


class Board:
    """Occupancy grid whose gravity edge changes as the whole board rotates.

    The grid uses 0 for empty cells and a ShapeKind value for occupied ones,
    so an occupant's row/col is always its index in the array.
    """

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"board dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def is_occupied(self, row: int, col: int) -> bool:
        return self.is_inside(row, col) and bool(self.grid[row, col] != 0)

    def is_valid_and_empty(self, row: int, col: int) -> bool:
        return self.is_inside(row, col) and bool(self.grid[row, col] == 0)

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        return all(self.is_valid_and_empty(row, col) for row, col in cells)

    def place(self, cells: Iterable[Coordinate], value: int) -> PlacementResult:
        """Commit cells with `value`. Nothing is written unless every cell is free."""
        cells = list(cells)
        for row, col in cells:
            if not self.is_valid_and_empty(row, col):
                return PlacementResult(placed=0, collision=(row, col))
        for row, col in cells:
            self.grid[row, col] = value
        return PlacementResult(placed=len(cells))

    def occupant(self, row: int, col: int) -> Optional[Cell]:
        if not self.is_occupied(row, col):
            return None
        return Cell(row, col, color_for_value(self.grid[row, col]))

    def cells(self) -> List[Cell]:
        rows, cols = np.nonzero(self.grid)
        return [Cell(int(r), int(c), color_for_value(self.grid[r, c])) for r, c in zip(rows, cols)]

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def _gravity_view(self, orientation: Orientation) -> np.ndarray:
        """Writable view in which gravity points towards increasing row index."""
        if orientation == Orientation.DOWN:
            return self.grid
        if orientation == Orientation.UP:
            return self.grid[::-1, :]
        if orientation == Orientation.RIGHT:
            return self.grid.T
        return self.grid[:, ::-1].T

    def full_lines(self, orientation: Orientation) -> List[int]:
        """Indices of full lines along the swept axis, in view order."""
        view = self._gravity_view(orientation)
        return [int(i) for i in np.where(np.all(view != 0, axis=1))[0]]

    def clear_full_lines(self, orientation: Orientation) -> int:
        """Clear full rows (DOWN/UP) or columns (LEFT/RIGHT) and compact towards gravity.

        After a clear the lines on the far side shift one step towards the
        stacking edge and the same index is tested again.
        """
        view = self._gravity_view(orientation)
        count = view.shape[0]
        if _SWEEP_FROM_STACK[orientation]:
            index, step = count - 1, -1
        else:
            index, step = 0, 1

        cleared = 0
        while 0 <= index < count:
            if np.all(view[index] != 0):
                view[1 : index + 1] = view[:index].copy()
                view[0] = 0
                cleared += 1
                continue
            index += step
        if cleared:
            logger.info("cleared %d line(s) facing %s", cleared, orientation.name)
        return cleared

    def rotate_clockwise(self) -> None:
        """Rotate the whole grid 90 degrees clockwise: (row, col) -> (col, height-1-row)."""
        rotated = np.ascontiguousarray(np.rot90(self.grid, 1, axes=(1, 0)))
        self.grid = rotated
        self.width, self.height = self.height, self.width
        logger.debug("board rotated, now %dx%d", self.width, self.height)

    def sentinel_occupied(self, orientation: Orientation, depth: int) -> bool:
        """True if the line `depth` steps in from the spawn edge holds any cell.

        DOWN checks row `depth`, UP row `height-1-depth`, RIGHT column `depth`
        and LEFT column `width-1-depth`.
        """
        view = self._gravity_view(orientation)
        if not 0 <= depth < view.shape[0]:
            return False
        return bool(np.any(view[depth] != 0))

    def is_game_over(self, orientation: Orientation, depth: int = 4) -> bool:
        return self.sentinel_occupied(orientation, depth)

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()

    def copy(self) -> "Board":
        board = Board(self.width, self.height)
        board.grid = self.grid.copy()
        return board
