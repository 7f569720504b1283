from __future__ import annotations

import logging
import random
from typing import Optional

from .grid import Board, Coordinate
from .orientation import Orientation
from .pieces import ActivePiece
from .shapes import SHAPES, ShapeKind, ShapeTemplate


logger = logging.getLogger(__name__)


def spawn_anchor(board: Board, orientation: Orientation) -> Coordinate:
    """Entry point near the edge opposite the current gravity direction."""
    w, h = board.width, board.height
    if orientation == Orientation.DOWN:
        return 2, w // 2 - 1
    if orientation == Orientation.UP:
        return h - 2, w // 2 - 1
    if orientation == Orientation.LEFT:
        return h // 2 - 1, w - 2
    return h // 2 - 1, 1


def fit_anchor(board: Board, template: ShapeTemplate, anchor: Coordinate) -> Coordinate:
    """Shift `anchor` the least amount needed to keep every template cell on the board."""
    row, col = anchor
    rows = [row + d_row for d_row, _ in template.offsets]
    cols = [col + d_col for _, d_col in template.offsets]
    if min(rows) < 0:
        row -= min(rows)
    elif max(rows) >= board.height:
        row -= max(rows) - board.height + 1
    if min(cols) < 0:
        col -= min(cols)
    elif max(cols) >= board.width:
        col -= max(cols) - board.width + 1
    return row, col


class Spawner:
    """Uniform random shape choice, one fresh draw per spawn."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def choose(self) -> ShapeTemplate:
        return SHAPES[self.rng.choice(list(ShapeKind))]

    def spawn(self, board: Board, orientation: Orientation, kind: Optional[ShapeKind] = None) -> ActivePiece:
        template = SHAPES[kind] if kind is not None else self.choose()
        anchor = fit_anchor(board, template, spawn_anchor(board, orientation))
        piece = ActivePiece.spawn(template, anchor, board)
        logger.debug("spawned %s at %s facing %s", template.kind.name, anchor, orientation.name)
        return piece
