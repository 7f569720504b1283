from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from .grid import Board, Coordinate
from .orientation import ClockDirection, Direction
from .shapes import Color, ShapeKind, ShapeTemplate


logger = logging.getLogger(__name__)


class PieceGeometryError(AssertionError):
    """Rotation produced a different number of cells than the piece holds."""


def rotate_about(cell: Coordinate, pivot: Coordinate, clock: ClockDirection) -> Coordinate:
    """Rotate one (row, col) cell a quarter turn about `pivot`.

    Computed on (x=col, y=row) offsets: clockwise maps (dx, dy) to (-dy, dx),
    counter-clockwise to (dy, -dx).
    """
    row, col = cell
    p_row, p_col = pivot
    dx = col - p_col
    dy = row - p_row
    if clock == ClockDirection.CLOCKWISE:
        return p_row + dx, p_col - dy
    return p_row - dx, p_col + dy


@dataclass
class ActivePiece:
    template: ShapeTemplate
    cells: List[Coordinate]
    board: Board
    is_moving: bool = field(default=False, compare=False)

    @classmethod
    def spawn(cls, template: ShapeTemplate, anchor: Coordinate, board: Board) -> "ActivePiece":
        row, col = anchor
        cells = [(row + d_row, col + d_col) for d_row, d_col in template.offsets]
        return cls(template=template, cells=cells, board=board)

    @property
    def kind(self) -> ShapeKind:
        return self.template.kind

    @property
    def color(self) -> Color:
        return self.template.color

    @property
    def pivot(self) -> Coordinate:
        return self.cells[self.template.pivot_index]

    def destination(self, direction: Direction) -> List[Coordinate]:
        d_row, d_col = direction.delta
        return [(row + d_row, col + d_col) for row, col in self.cells]

    def can_move(self, direction: Direction) -> bool:
        return self.board.can_place(self.destination(direction))

    def move(self, direction: Direction) -> bool:
        if not self.can_move(direction):
            return False
        self.cells = self.destination(direction)
        return True

    def rotated_cells(self, clock: ClockDirection) -> List[Coordinate]:
        pivot = self.pivot
        return [rotate_about(cell, pivot, clock) for cell in self.cells]

    def can_rotate(self, candidates: List[Coordinate]) -> bool:
        if len(candidates) != len(self.cells):
            raise PieceGeometryError(
                f"{self.kind.name}: {len(candidates)} rotated cells for {len(self.cells)} piece cells"
            )
        return self.board.can_place(candidates)

    def rotate(self, clock: ClockDirection) -> bool:
        if self.is_moving:
            logger.debug("rotate ignored, %s is mid-move", self.kind.name)
            return False
        self.is_moving = True
        try:
            candidates = self.rotated_cells(clock)
            if not self.can_rotate(candidates):
                logger.debug("rotate %s blocked", clock.name)
                return False
            self.cells = candidates
            return True
        finally:
            self.is_moving = False

    def occupies(self, row: int, col: int) -> bool:
        return (row, col) in self.cells
