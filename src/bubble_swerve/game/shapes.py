from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Tuple


Offset = Tuple[int, int]  # (row, col) relative to the spawn anchor
Color = Tuple[int, int, int]


class ShapeKind(IntEnum):
    """Shape ids. Values double as the cell value stored in the board grid."""

    BAR1 = 1
    BAR3 = 2
    L5 = 3
    BAR2 = 4
    CROSS5 = 5
    V3 = 6
    J5 = 7
    RECT6 = 8
    VDISCON2 = 9


@dataclass(frozen=True)
class ShapeTemplate:
    kind: ShapeKind
    offsets: Tuple[Offset, ...]
    color: Color

    def __post_init__(self) -> None:
        if not self.offsets:
            raise ValueError(f"{self.kind.name}: a shape needs at least one cell")

    @property
    def pivot_index(self) -> int:
        # The second entry is the rotation pivot; a single cell pivots on itself.
        return 1 if len(self.offsets) > 1 else 0

    def __len__(self) -> int:
        return len(self.offsets)


SHAPES: Dict[ShapeKind, ShapeTemplate] = {
    ShapeKind.BAR1: ShapeTemplate(ShapeKind.BAR1, ((0, 0),), (175, 18, 202)),
    ShapeKind.BAR3: ShapeTemplate(ShapeKind.BAR3, ((0, -1), (0, 0), (0, 1)), (101, 216, 246)),
    ShapeKind.L5: ShapeTemplate(
        ShapeKind.L5, ((-1, 0), (0, 0), (1, 0), (2, 0), (2, 1)), (74, 125, 255)
    ),
    ShapeKind.BAR2: ShapeTemplate(ShapeKind.BAR2, ((0, 0), (0, -1)), (79, 255, 254)),
    ShapeKind.CROSS5: ShapeTemplate(
        ShapeKind.CROSS5, ((0, -1), (0, 0), (0, 1), (1, 0), (-1, 0)), (230, 56, 174)
    ),
    ShapeKind.V3: ShapeTemplate(ShapeKind.V3, ((0, -1), (0, 0), (1, 0)), (249, 116, 122)),
    ShapeKind.J5: ShapeTemplate(
        ShapeKind.J5, ((-1, 0), (0, 0), (1, 0), (2, 0), (2, -1)), (45, 50, 116)
    ),
    ShapeKind.RECT6: ShapeTemplate(
        ShapeKind.RECT6, ((-1, 0), (0, 0), (1, 0), (-1, 1), (0, 1), (1, 1)), (99, 32, 178)
    ),
    # Two cells touching only at a corner.
    ShapeKind.VDISCON2: ShapeTemplate(ShapeKind.VDISCON2, ((0, -1), (1, 0)), (65, 84, 203)),
}


def color_for_value(value: int) -> Color:
    """Colour for a board cell value; negative values (active piece overlay) map by magnitude."""
    return SHAPES[ShapeKind(abs(int(value)))].color
