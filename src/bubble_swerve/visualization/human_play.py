from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional, Tuple

import pygame

from bubble_swerve.game import ClockDirection, Command, Direction, GameConfig, GameLoop, Orientation, SwerveGame
from .renderer import Renderer


KEY_TO_DIRECTION: Dict[int, Direction] = {
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
}

KEY_TO_COMMAND: Dict[int, Tuple[Command, Optional[int]]] = {
    pygame.K_r: (Command.ROTATE_BOARD, None),
    pygame.K_SPACE: (Command.HARD_DROP, None),
    pygame.K_q: (Command.ROTATE, int(ClockDirection.COUNTER_CLOCKWISE)),
    pygame.K_RSHIFT: (Command.ROTATE, int(ClockDirection.COUNTER_CLOCKWISE)),
    pygame.K_ESCAPE: (Command.PAUSE, None),
    pygame.K_RETURN: (Command.RESTART, None),
}


def command_for_key(key: int, orientation: Orientation) -> Optional[Tuple[Command, Optional[int]]]:
    """Map a key press to a queued command for the current gravity orientation.

    The direction key pointing against gravity rotates the piece clockwise;
    every other direction key moves it.
    """
    if key in KEY_TO_COMMAND:
        return KEY_TO_COMMAND[key]
    direction = KEY_TO_DIRECTION.get(key)
    if direction is None:
        return None
    if direction == orientation.gravity.opposite:
        return Command.ROTATE, int(ClockDirection.CLOCKWISE)
    return Command.MOVE, int(direction)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Bubble Swerve")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--gravity-ms", type=int, default=2000)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--log-level", default="WARNING")
    return p


def run(config: Optional[GameConfig] = None, cell_size: int = 28) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = SwerveGame(config)
        loop = GameLoop(game)
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(game))
        pygame.display.set_caption("Bubble Swerve")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    mapped = command_for_key(event.key, game.orientation)
                    if mapped is not None:
                        loop.post(*mapped)

            loop.update()
            renderer.draw(screen, game)
            clock.tick(60)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    config = GameConfig(random_seed=args.seed, gravity_interval_ms=args.gravity_ms)
    run(config, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
