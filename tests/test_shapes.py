from __future__ import annotations

import dataclasses

import pytest

from bubble_swerve.game import SHAPES, ShapeKind, ShapeTemplate
from bubble_swerve.game.shapes import color_for_value


def test_catalog_has_nine_templates():
    assert len(SHAPES) == 9
    assert set(SHAPES) == set(ShapeKind)
    for kind, template in SHAPES.items():
        assert template.kind == kind


def test_template_sizes():
    sizes = {kind: len(template) for kind, template in SHAPES.items()}
    assert sizes == {
        ShapeKind.BAR1: 1,
        ShapeKind.BAR2: 2,
        ShapeKind.BAR3: 3,
        ShapeKind.V3: 3,
        ShapeKind.CROSS5: 5,
        ShapeKind.VDISCON2: 2,
        ShapeKind.J5: 5,
        ShapeKind.L5: 5,
        ShapeKind.RECT6: 6,
    }


def test_offsets_are_unique_per_shape():
    for template in SHAPES.values():
        assert len(set(template.offsets)) == len(template.offsets)


def test_pivot_is_second_entry():
    assert SHAPES[ShapeKind.BAR1].pivot_index == 0
    for kind in ShapeKind:
        if kind != ShapeKind.BAR1:
            assert SHAPES[kind].pivot_index == 1


def test_colours_live_on_templates():
    colours = [template.color for template in SHAPES.values()]
    assert len(set(colours)) == len(colours)
    assert color_for_value(int(ShapeKind.L5)) == SHAPES[ShapeKind.L5].color
    assert color_for_value(-int(ShapeKind.L5)) == SHAPES[ShapeKind.L5].color


def test_templates_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        SHAPES[ShapeKind.BAR3].offsets = ((0, 0),)


def test_empty_template_rejected():
    with pytest.raises(ValueError):
        ShapeTemplate(ShapeKind.BAR1, (), (0, 0, 0))
