"""Game module for Bubble Swerve.

Exports the core engine and supporting classes:
- Board: occupancy grid, line clearing and whole-board rotation
- ActivePiece: falling piece with pivot rotation
- ShapeTemplate / SHAPES: the nine piece templates
- Spawner: random shape choice and orientation-specific entry points
- ScoringRules / ScoreTracker: score, level and line counters
- SwerveGame: gravity state machine, lock sequence and player commands
- GameLoop: single-threaded command queue driving a SwerveGame
"""

from .orientation import ClockDirection, Direction, Orientation
from .shapes import SHAPES, ShapeKind, ShapeTemplate
from .grid import Board, Cell, PlacementResult
from .pieces import ActivePiece, PieceGeometryError
from .rules import ScoreTracker, ScoringRules
from .spawner import Spawner
from .core import Action, GameConfig, GameEvent, GravityState, SwerveGame
from .loop import Command, GameLoop

__all__ = [
    "ClockDirection",
    "Direction",
    "Orientation",
    "SHAPES",
    "ShapeKind",
    "ShapeTemplate",
    "Board",
    "Cell",
    "PlacementResult",
    "ActivePiece",
    "PieceGeometryError",
    "ScoreTracker",
    "ScoringRules",
    "Spawner",
    "Action",
    "GameConfig",
    "GameEvent",
    "GravityState",
    "SwerveGame",
    "Command",
    "GameLoop",
]
