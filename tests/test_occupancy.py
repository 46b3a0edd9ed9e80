import pytest

from museumgen.geometry import Vec2
from museumgen.layout import ModuleRegistry, OccupancyGrid, TentativeModule
from museumgen.library import Category, ModuleTemplate


def block(w, d):
    return ModuleTemplate(id=f"block_{w}x{d}", width=w, depth=d, category=Category.NORMAL)


def test_cells_follow_rotated_axes():
    grid = OccupancyGrid(1.0)
    upright = TentativeModule(block(3, 5))
    turned = TentativeModule(block(3, 5), rotation=90)

    assert set(grid.cells_for(upright)) == {(x, z) for x in range(-1, 2) for z in range(-2, 3)}
    assert set(grid.cells_for(turned)) == {(x, z) for x in range(-2, 3) for z in range(-1, 2)}


def test_cells_scale_with_cell_size():
    grid = OccupancyGrid(2.0)
    module = TentativeModule(block(3, 3), position=Vec2(6.0, 0.0))
    assert set(grid.cells_for(module)) == {(x, z) for x in (2, 3, 4) for z in (-1, 0, 1)}


def test_even_footprint_rounds_half_to_even():
    grid = OccupancyGrid(1.0)
    cells = grid.cells_for(TentativeModule(block(4, 4)))
    # centres at -1.5, -0.5, 0.5, 1.5 snap to -2, 0, 0, 2
    assert len(cells) == 16
    assert set(cells) == {(x, z) for x in (-2, 0, 2) for z in (-2, 0, 2)}


def test_claim_then_collide():
    grid = OccupancyGrid(1.0)
    registry = ModuleRegistry()
    first = TentativeModule(block(3, 3))
    assert grid.can_place(first)
    module = registry.confirm(first, grid.cells_for(first))
    grid.claim(module)
    assert len(grid) == 9
    assert grid.owner((0, 0)) == module.id

    overlapping = TentativeModule(block(3, 3), position=Vec2(2.0, 0.0))
    assert not grid.can_place(overlapping)
    adjacent = TentativeModule(block(3, 3), position=Vec2(3.0, 0.0))
    assert grid.can_place(adjacent)


def test_claim_refuses_overlap():
    grid = OccupancyGrid(1.0)
    registry = ModuleRegistry()
    a = registry.confirm(TentativeModule(block(3, 3)), [])
    grid.claim(a)
    b = registry.confirm(TentativeModule(block(3, 3), position=Vec2(1.0, 1.0)), [])
    with pytest.raises(ValueError):
        grid.claim(b)


def test_cell_size_must_be_positive():
    with pytest.raises(ValueError):
        OccupancyGrid(0)
