"""
Tests for layout/tile_grid.py - Occupancy grid and layout validation.
"""

import pytest

from factory_planner.src.common.types import (
    BuildingTemplate,
    Orientation,
    Placement,
    Position,
    Size,
)
from factory_planner.src.layout.tile_grid import (
    OccupancyGrid,
    build_occupancy_grid,
    validate_layout,
)


def template(name: str, width: int, height: int) -> BuildingTemplate:
    return BuildingTemplate(name, Size(width, height))


class TestOccupancyGridInit:
    def test_init_creates_empty_grid(self):
        """A new grid has every cell free."""
        grid = OccupancyGrid(4, 3)
        assert grid.cells.shape == (3, 4)
        assert not grid.flat.any()

    def test_flat_shares_memory(self):
        """The flat view and 2D view are the same buffer."""
        grid = OccupancyGrid(4, 3)
        grid.cells[1, 2] = 7
        assert grid.flat[1 * 4 + 2] == 7


class TestIsWithinBounds:
    def test_inside(self):
        grid = OccupancyGrid(5, 5)
        assert grid.is_within_bounds(Position(0, 0), Size(5, 5))
        assert grid.is_within_bounds(Position(3, 4), Size(2, 1))

    def test_outside(self):
        grid = OccupancyGrid(5, 5)
        assert not grid.is_within_bounds(Position(4, 0), Size(2, 1))
        assert not grid.is_within_bounds(Position(0, 4), Size(1, 2))
        assert not grid.is_within_bounds(Position(-1, 0), Size(1, 1))


class TestMarkAndClear:
    def test_mark_building(self):
        """Marking writes the marker over the footprint only."""
        grid = OccupancyGrid(5, 5)
        grid.mark_building(Position(1, 1), Size(2, 3), 4)
        assert (grid.cells[1:4, 1:3] == 4).all()
        assert grid.cells.sum() == 4 * 6

    def test_zero_marker_rejected(self):
        grid = OccupancyGrid(3, 3)
        with pytest.raises(ValueError):
            grid.mark_building(Position(0, 0), Size(1, 1), 0)

    def test_clear_building(self):
        grid = OccupancyGrid(5, 5)
        grid.mark_building(Position(1, 1), Size(2, 2), 1)
        grid.clear_building(Position(1, 1), Size(2, 2))
        assert not grid.flat.any()


class TestIsAreaFree:
    def test_empty_grid_is_free(self):
        grid = OccupancyGrid(5, 5)
        assert grid.is_area_free(Position(0, 0), Size(5, 5))

    def test_overlap_detected(self):
        grid = OccupancyGrid(6, 6)
        grid.mark_building(Position(2, 2), Size(1, 1), 1)
        assert not grid.is_area_free(Position(1, 1), Size(2, 2))
        assert grid.is_area_free(Position(3, 2), Size(2, 2))

    def test_out_of_bounds_is_not_free(self):
        grid = OccupancyGrid(3, 3)
        assert not grid.is_area_free(Position(2, 2), Size(2, 2))

    def test_excluding_own_marker(self):
        """A building's own cells are transparent when excluded."""
        grid = OccupancyGrid(6, 6)
        grid.mark_building(Position(0, 0), Size(2, 2), 1)
        grid.mark_building(Position(3, 0), Size(2, 2), 2)
        assert grid.is_area_free_excluding(Position(1, 0), Size(2, 2), 1)
        assert not grid.is_area_free_excluding(Position(2, 0), Size(2, 2), 1)
        assert not grid.is_area_free(Position(1, 0), Size(2, 2))


class TestBuildOccupancyGrid:
    def test_markers_are_one_based_indices(self):
        buildings = (template("A", 2, 1), template("B", 1, 1))
        placements = (
            Placement(0, Position(0, 0)),
            Placement(1, Position(3, 2)),
        )
        grid = build_occupancy_grid(4, 3, placements, buildings)
        assert grid.cells[0, 0] == 1 and grid.cells[0, 1] == 1
        assert grid.cells[2, 3] == 2
        assert (grid.flat > 0).sum() == 3

    def test_rotation_applied(self):
        """A 3x1 building turned 90 degrees covers a 1x3 column."""
        buildings = (template("Long", 3, 1),)
        placements = (Placement(0, Position(1, 0), Orientation.R90),)
        grid = build_occupancy_grid(3, 3, placements, buildings)
        assert (grid.cells[:, 1] == 1).all()
        assert (grid.flat > 0).sum() == 3

    def test_rebuild_clears_previous_state(self):
        buildings = (template("A", 1, 1),)
        grid = OccupancyGrid(3, 3)
        grid.mark_building(Position(2, 2), Size(1, 1), 9)
        grid.rebuild_from_placements((Placement(0, Position(0, 0)),), buildings)
        assert grid.cells[2, 2] == 0
        assert grid.cells[0, 0] == 1


class TestValidateLayout:
    def test_valid_layout(self):
        buildings = (template("A", 2, 2), template("B", 2, 2))
        placements = (Placement(0, Position(0, 0)), Placement(1, Position(2, 0)))
        assert validate_layout(4, 2, placements, buildings)

    def test_overlap_is_invalid(self):
        buildings = (template("A", 2, 2), template("B", 2, 2))
        placements = (Placement(0, Position(0, 0)), Placement(1, Position(1, 0)))
        assert not validate_layout(4, 2, placements, buildings)

    def test_out_of_bounds_is_invalid(self):
        buildings = (template("A", 2, 2),)
        assert not validate_layout(3, 3, (Placement(0, Position(2, 2)),), buildings)

    def test_rotated_footprint_checked(self):
        """A 3x1 building fits a 3x1 grid unrotated but not turned."""
        buildings = (template("Long", 3, 1),)
        assert validate_layout(3, 1, (Placement(0, Position(0, 0)),), buildings)
        assert not validate_layout(
            3, 1, (Placement(0, Position(0, 0), Orientation.R90),), buildings
        )

    def test_unknown_template_index_is_invalid(self):
        buildings = (template("A", 1, 1),)
        assert not validate_layout(3, 3, (Placement(4, Position(0, 0)),), buildings)
