from __future__ import annotations

import logging
import queue
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional

from .core import SwerveGame
from .orientation import ClockDirection, Direction


logger = logging.getLogger(__name__)


class Command(IntEnum):
    TICK = 0
    MOVE = 1
    ROTATE = 2
    HARD_DROP = 3
    ROTATE_BOARD = 4
    PAUSE = 5
    RESTART = 6


@dataclass(frozen=True)
class Message:
    command: Command
    argument: Optional[int] = None


class GameLoop:
    """Serialises gravity ticks and player commands through one queue.

    `post` may be called from any thread; `update` drains the queue on the
    calling thread, so the game only ever sees one mutation at a time.
    """

    def __init__(self, game: SwerveGame, clock: Optional[Callable[[], float]] = None) -> None:
        self.game = game
        self.clock = clock or game.config.clock
        self.messages: "queue.Queue[Message]" = queue.Queue()
        self._last_tick = self.clock()

    def post(self, command: Command, argument: Optional[int] = None) -> None:
        self.messages.put(Message(Command(command), None if argument is None else int(argument)))

    def next_message(self) -> Optional[Message]:
        try:
            return self.messages.get_nowait()
        except queue.Empty:
            return None

    def gravity_due(self, now: float) -> bool:
        return (now - self._last_tick) * 1000.0 >= self.game.config.gravity_interval_ms

    def update(self) -> int:
        """Queue a gravity tick if one is due, then process every pending message."""
        now = self.clock()
        if self.game.paused or self.game.game_over:
            self._last_tick = now
        elif self.gravity_due(now):
            self.post(Command.TICK)
            self._last_tick = now

        processed = 0
        message = self.next_message()
        while message is not None:
            self.dispatch(message)
            processed += 1
            message = self.next_message()
        return processed

    def dispatch(self, message: Message) -> bool:
        game = self.game
        command = message.command
        if command == Command.TICK:
            return game.tick()
        if command == Command.MOVE:
            return game.handle_move(Direction(message.argument))
        if command == Command.ROTATE:
            clock = ClockDirection.CLOCKWISE if message.argument is None else ClockDirection(message.argument)
            return game.handle_rotate(clock)
        if command == Command.HARD_DROP:
            return game.hard_drop()
        if command == Command.ROTATE_BOARD:
            return game.rotate_board_clockwise()
        if command == Command.PAUSE:
            return game.pause()
        if command == Command.RESTART:
            self._last_tick = self.clock()
            return game.restart_game()
        logger.debug("unhandled message %s", message)
        return False
