from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from bubble_swerve.game import Action, GameConfig, ShapeKind, SwerveGame
from bubble_swerve.game.shapes import color_for_value


class SwerveEnv(gym.Env):
    """Each step applies one Action and then one gravity tick.

    The board changes shape every time it rotates, so observations pad it
    into a square of side max(width, height) and report the live dims.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 5000) -> None:
        super().__init__()
        # Agents act faster than a keyboard; no rotation cooldown by default
        self.game = SwerveGame(config or GameConfig(rotation_cooldown_ms=0))
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        self.size = max(self.game.width, self.game.height)
        kinds = len(ShapeKind)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-kinds, high=kinds, shape=(self.size, self.size), dtype=np.int8),
                "orientation": spaces.Discrete(4),
                "dims": spaces.Box(low=0, high=self.size, shape=(2,), dtype=np.int64),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        state = self.game.get_state()
        board = np.zeros((self.size, self.size), dtype=np.int8)
        h, w = state.shape
        board[:h, :w] = state
        return {
            "board": board,
            "orientation": int(self.game.orientation),
            "dims": np.array([h, w], dtype=np.int64),
        }

    def _get_info(self) -> Dict[str, Any]:
        info = self.game.info()
        info["steps"] = self._steps
        return info

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.game.restart_game(reset_score=True)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        _, gained, terminated, engine_info = self.game.step(Action(int(action)))
        self._steps += 1
        truncated = self._steps >= self.max_episode_steps and not terminated
        info = self._get_info()
        info["accepted"] = engine_info.get("accepted", False)
        return self._get_obs(), float(gained), bool(terminated), bool(truncated), info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            state = self.game.get_state()
            cell = 12
            h, w = state.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    v = int(state[y, x])
                    color = color_for_value(v) if v else (30, 30, 36)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
