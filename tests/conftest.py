from __future__ import annotations

from typing import List

import pytest

from bubble_swerve.game import SHAPES, ActivePiece, Board, GameConfig, ShapeKind, SwerveGame


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def board() -> Board:
    return Board(12, 22)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def game(clock: FakeClock) -> SwerveGame:
    return SwerveGame(GameConfig(random_seed=7, clock=clock))


def force_piece(game: SwerveGame, kind: ShapeKind, anchor) -> ActivePiece:
    piece = ActivePiece.spawn(SHAPES[kind], anchor, game.board)
    game.piece = piece
    return piece


def recorder(game: SwerveGame, event) -> List:
    seen: List = []
    game.subscribe(event, seen.append)
    return seen
