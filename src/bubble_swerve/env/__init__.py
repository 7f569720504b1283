"""Gymnasium environment for Bubble Swerve."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="BubbleSwerve-v0",
    entry_point="bubble_swerve.env.swerve_env:SwerveEnv",
)

__all__: list = []
