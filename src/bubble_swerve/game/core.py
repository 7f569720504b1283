from __future__ import annotations

import functools
import logging
import random
import threading
import time
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Callable, DefaultDict, Dict, List, Optional, Tuple

import numpy as np

from .grid import DEFAULT_HEIGHT, DEFAULT_WIDTH, Board, Cell, Coordinate
from .orientation import ClockDirection, Direction, Orientation
from .pieces import ActivePiece
from .rules import ScoreTracker, ScoringRules
from .shapes import Color, ShapeKind
from .spawner import Spawner


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    UP = 2
    DOWN = 3
    ROTATE_CW = 4
    ROTATE_CCW = 5
    HARD_DROP = 6
    ROTATE_BOARD = 7
    NONE = 8


class GravityState(Enum):
    IDLE = "idle"
    FALLING = "falling"
    LOCKING = "locking"
    GAME_OVER = "game_over"


class GameEvent(str, Enum):
    PIECE_CREATED = "piece_created"
    LINES_CLEARED = "lines_cleared"
    BOARD_ROTATED = "board_rotated"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    random_seed: Optional[int] = None
    gravity_interval_ms: int = 2000
    rotation_cooldown_ms: int = 50
    sentinel_depth: int = 4
    reset_score_on_restart: bool = True
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)


_MOVES = {
    Action.LEFT: Direction.LEFT,
    Action.RIGHT: Direction.RIGHT,
    Action.UP: Direction.UP,
    Action.DOWN: Direction.DOWN,
}


def _exclusive(method):
    """Run `method` only if no other mutation is in flight; otherwise reject with False.

    Events raised by the mutation are delivered once it has finished and the
    lock is released.
    """

    @functools.wraps(method)
    def wrapper(self: "SwerveGame", *args, **kwargs):
        if not self._mutex.acquire(blocking=False):
            logger.debug("%s rejected, another mutation is in flight", method.__name__)
            return False
        try:
            result = method(self, *args, **kwargs)
        finally:
            events, self._pending = self._pending, []
            self._mutex.release()
        self._dispatch(events)
        return result

    return wrapper


class SwerveGame:
    """Board, active piece and gravity state machine for a rotating-board puzzle.

    Every lock clears full lines, rotates the whole board a quarter turn
    clockwise and advances the gravity orientation before the next spawn.
    Event callbacks run after the command that raised them has completed,
    so they always observe a settled game and may issue further commands.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.spawner = Spawner(self.rng)
        self.scores = ScoreTracker(self.rules)
        self.board = Board(self.config.width, self.config.height)
        self.orientation = Orientation.DOWN
        self.piece: Optional[ActivePiece] = None
        self.state = GravityState.IDLE
        self.paused = False
        self._last_rotation: Optional[float] = None
        self._listeners: DefaultDict[GameEvent, List[Callable[[Any], None]]] = defaultdict(list)
        self._mutex = threading.Lock()
        self._pending: List[Tuple[GameEvent, Any]] = []
        self._restart(reset_score=True)
        # nobody can have subscribed yet
        self._pending.clear()

    # ---------- Events ----------
    def subscribe(self, event: GameEvent, callback: Callable[[Any], None]) -> None:
        self._listeners[GameEvent(event)].append(callback)

    def unsubscribe(self, event: GameEvent, callback: Callable[[Any], None]) -> None:
        listeners = self._listeners[GameEvent(event)]
        if callback in listeners:
            listeners.remove(callback)

    def _emit(self, event: GameEvent, payload: Any) -> None:
        self._pending.append((event, payload))

    def _dispatch(self, events: List[Tuple[GameEvent, Any]]) -> None:
        for event, payload in events:
            for callback in list(self._listeners[event]):
                callback(payload)

    # ---------- Queries ----------
    @property
    def width(self) -> int:
        return self.board.width

    @property
    def height(self) -> int:
        return self.board.height

    @property
    def score(self) -> int:
        return self.scores.score

    @property
    def level(self) -> int:
        return self.scores.level

    @property
    def lines_cleared(self) -> int:
        return self.scores.lines_cleared

    @property
    def game_over(self) -> bool:
        return self.state == GravityState.GAME_OVER

    def board_cells(self) -> List[Cell]:
        return self.board.cells()

    def active_cells(self) -> List[Coordinate]:
        return list(self.piece.cells) if self.piece is not None else []

    def active_color(self) -> Optional[Color]:
        return self.piece.color if self.piece is not None else None

    def get_state(self) -> np.ndarray:
        # Overlay the active piece on a copy of the grid as negative shape ids
        state = self.board.clone_state()
        if self.piece is not None and not self.game_over:
            for row, col in self.piece.cells:
                if self.board.is_inside(row, col):
                    state[row, col] = -int(self.piece.kind)
        return state

    def info(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "level": self.level,
            "lines_cleared": self.lines_cleared,
            "orientation": self.orientation.name,
            "paused": self.paused,
            "game_over": self.game_over,
        }

    # ---------- Internal sequence ----------
    def _restart(self, reset_score: bool) -> None:
        self.board = Board(self.config.width, self.config.height)
        self.orientation = Orientation.DOWN
        self.piece = None
        self.paused = False
        self.state = GravityState.IDLE
        self._last_rotation = None
        if reset_score:
            self.scores.reset()
        self._spawn_piece()

    def _spawn_piece(self, kind: Optional[ShapeKind] = None) -> None:
        piece = self.spawner.spawn(self.board, self.orientation, kind)
        self.piece = piece
        if not self.board.can_place(piece.cells):
            logger.info("no room to spawn %s", piece.kind.name)
            self._end_game()
            return
        self.state = GravityState.IDLE if self.paused else GravityState.FALLING
        self._emit(GameEvent.PIECE_CREATED, piece)

    def _end_game(self) -> None:
        self.state = GravityState.GAME_OVER
        logger.info("game over: score=%d level=%d lines=%d", self.score, self.level, self.lines_cleared)
        self._emit(GameEvent.GAME_OVER, self.score)

    def _lock_piece(self) -> int:
        piece = self.piece
        assert piece is not None
        self.state = GravityState.LOCKING
        result = self.board.place(piece.cells, int(piece.kind))
        if not result.ok:
            logger.warning("cannot lock %s, cell %s is blocked", piece.kind.name, result.collision)
            self.piece = None
            self._end_game()
            return 0
        self.piece = None
        logger.debug("locked %s", piece.kind.name)

        lines = self.board.clear_full_lines(self.orientation)
        if lines:
            self.scores.on_lines_cleared(lines)
            self._emit(GameEvent.LINES_CLEARED, lines)
        self._rotate_board()
        return lines

    def _rotate_board(self) -> None:
        self.piece = None
        self.board.rotate_clockwise()
        self.orientation = self.orientation.next_clockwise()
        logger.info("board rotated to %dx%d, gravity %s", self.width, self.height, self.orientation.name)
        self._emit(GameEvent.BOARD_ROTATED, self.orientation)
        if self.board.is_game_over(self.orientation, self.config.sentinel_depth):
            self._end_game()
            return
        self._spawn_piece()

    def _accepting_commands(self) -> bool:
        return not self.paused and not self.game_over and self.piece is not None

    # ---------- Gravity ----------
    @_exclusive
    def tick(self) -> bool:
        """Move the piece one step along gravity, or lock it when blocked."""
        if self.game_over or self.paused or self.piece is None:
            return False
        piece = self.piece
        if piece.is_moving:
            logger.debug("gravity tick abandoned, %s is mid-move", piece.kind.name)
            return False
        piece.is_moving = True
        try:
            if piece.move(self.orientation.gravity):
                return True
        finally:
            piece.is_moving = False
        self._lock_piece()
        return True

    # ---------- Commands ----------
    @_exclusive
    def handle_move(self, direction: Direction) -> bool:
        if not self._accepting_commands():
            return False
        direction = Direction(direction)
        if direction == self.orientation.gravity.opposite:
            return False
        if not self.piece.move(direction):
            return False
        if direction == self.orientation.gravity:
            self.scores.on_soft_drop()
        return True

    @_exclusive
    def handle_rotate(self, clock: ClockDirection = ClockDirection.CLOCKWISE) -> bool:
        if not self._accepting_commands():
            return False
        now = self.config.clock()
        if self._last_rotation is not None and (now - self._last_rotation) * 1000.0 < self.config.rotation_cooldown_ms:
            return False
        self._last_rotation = now
        return self.piece.rotate(ClockDirection(clock))

    @_exclusive
    def hard_drop(self) -> bool:
        if not self._accepting_commands():
            return False
        gravity = self.orientation.gravity
        dropped = 0
        while self.piece.move(gravity):
            dropped += 1
        self.scores.on_hard_drop(dropped)
        self._lock_piece()
        return True

    @_exclusive
    def rotate_board_clockwise(self) -> bool:
        """Discard the falling piece, rotate the board and spawn for the new orientation."""
        if self.paused or self.game_over:
            return False
        self._rotate_board()
        return True

    @_exclusive
    def pause(self) -> bool:
        """Toggle pause. Rejected once the game is over."""
        if self.game_over:
            return False
        self.paused = not self.paused
        if self.paused and self.state == GravityState.FALLING:
            self.state = GravityState.IDLE
        elif not self.paused and self.state == GravityState.IDLE and self.piece is not None:
            self.state = GravityState.FALLING
        logger.debug("paused=%s", self.paused)
        return True

    @_exclusive
    def restart_game(self, reset_score: Optional[bool] = None) -> bool:
        if reset_score is None:
            reset_score = self.config.reset_score_on_restart
        self._restart(reset_score)
        return True

    def reset(self) -> None:
        self.restart_game(reset_score=True)

    # ---------- Step API ----------
    def apply(self, action: Action) -> bool:
        action = Action(action)
        if action in _MOVES:
            return self.handle_move(_MOVES[action])
        if action == Action.ROTATE_CW:
            return self.handle_rotate(ClockDirection.CLOCKWISE)
        if action == Action.ROTATE_CCW:
            return self.handle_rotate(ClockDirection.COUNTER_CLOCKWISE)
        if action == Action.HARD_DROP:
            return self.hard_drop()
        if action == Action.ROTATE_BOARD:
            return self.rotate_board_clockwise()
        return False

    def step(self, action: Action) -> Tuple[np.ndarray, int, bool, dict]:
        """Apply `action`, then one gravity tick."""
        if self.game_over:
            return self.get_state(), 0, True, self.info()
        before = self.score
        accepted = self.apply(action)
        if not self.game_over:
            self.tick()
        info = self.info()
        info["accepted"] = accepted
        return self.get_state(), self.score - before, self.game_over, info
