from __future__ import annotations

import random
from collections import Counter

import pytest

from bubble_swerve.game import SHAPES, Board, Orientation, ShapeKind, Spawner
from bubble_swerve.game.spawner import fit_anchor, spawn_anchor


@pytest.mark.parametrize(
    "orientation, anchor",
    [
        (Orientation.DOWN, (2, 5)),
        (Orientation.UP, (20, 5)),
        (Orientation.LEFT, (10, 10)),
        (Orientation.RIGHT, (10, 1)),
    ],
)
def test_anchor_per_orientation(board, orientation, anchor):
    assert spawn_anchor(board, orientation) == anchor


def test_anchor_follows_rotated_dimensions():
    assert spawn_anchor(Board(22, 12), Orientation.LEFT) == (5, 20)


def test_anchor_nudged_inside_board(board):
    assert fit_anchor(board, SHAPES[ShapeKind.J5], (20, 5)) == (19, 5)
    assert fit_anchor(board, SHAPES[ShapeKind.CROSS5], (10, 1)) == (10, 1)
    assert fit_anchor(board, SHAPES[ShapeKind.L5], (10, 11)) == (10, 10)


@pytest.mark.parametrize("dims", [(12, 22), (22, 12)])
@pytest.mark.parametrize("orientation", list(Orientation))
def test_every_shape_spawns_in_bounds(dims, orientation):
    board = Board(*dims)
    spawner = Spawner(random.Random(0))
    for kind in ShapeKind:
        piece = spawner.spawn(board, orientation, kind)
        assert board.can_place(piece.cells)


def test_seeded_draws_are_reproducible(board):
    a = Spawner(random.Random(11))
    b = Spawner(random.Random(11))
    kinds_a = [a.spawn(board, Orientation.DOWN).kind for _ in range(20)]
    kinds_b = [b.spawn(board, Orientation.DOWN).kind for _ in range(20)]
    assert kinds_a == kinds_b


def test_every_shape_is_drawn():
    spawner = Spawner(random.Random(5))
    counts = Counter(spawner.choose().kind for _ in range(2000))
    assert set(counts) == set(ShapeKind)
