"""Occupancy tracking for building placement on a bounded grid."""

from typing import Sequence

import numpy as np

from factory_planner.src.common.types import BuildingTemplate, Placement, Position, Size
from .rotation import rotate_size


class OccupancyGrid:
    """Row-major marker buffer of ``width x height`` cells.

    A cell holds 0 when free, otherwise the 1-based index of the placement
    that occupies it. ``cells`` is a 2D view for region queries and ``flat``
    shares its memory for index-based access by the pathfinder.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.flat = np.zeros(width * height, dtype=np.int32)
        self.cells = self.flat.reshape(height, width)

    def is_within_bounds(self, position: Position, size: Size) -> bool:
        """Check that a footprint stays inside [0, width) x [0, height)."""
        return (
            position.x >= 0
            and position.y >= 0
            and position.x + size.width <= self.width
            and position.y + size.height <= self.height
        )

    def _region(self, position: Position, size: Size) -> np.ndarray:
        return self.cells[
            position.y : position.y + size.height, position.x : position.x + size.width
        ]

    def mark_building(self, position: Position, size: Size, marker: int) -> None:
        """Write ``marker`` into every cell of the footprint.

        Args:
            position: top-left cell of the footprint
            size: footprint size after rotation
            marker: 1-based placement index
        """
        if marker <= 0:
            raise ValueError(f"Building markers must be positive, got {marker}")
        self._region(position, size)[...] = marker

    def clear_building(self, position: Position, size: Size) -> None:
        self._region(position, size)[...] = 0

    def is_area_free(self, position: Position, size: Size) -> bool:
        """True when the footprint is in bounds and every cell is free."""
        if not self.is_within_bounds(position, size):
            return False
        return not self._region(position, size).any()

    def is_area_free_excluding(self, position: Position, size: Size, marker: int) -> bool:
        """Like :meth:`is_area_free`, but cells holding ``marker`` count as free."""
        if not self.is_within_bounds(position, size):
            return False
        region = self._region(position, size)
        return bool(np.all((region == 0) | (region == marker)))

    def reset(self) -> None:
        self.flat.fill(0)

    def rebuild_from_placements(
        self, placements: Sequence[Placement], buildings: Sequence[BuildingTemplate]
    ) -> "OccupancyGrid":
        """Clear the grid and mark every placement with its marker.

        Overlaps are not checked here; use :func:`validate_layout` for that.
        """
        self.reset()
        for index, placement in enumerate(placements):
            building = buildings[placement.template_index]
            size = rotate_size(building.size, placement.orientation)
            self.mark_building(placement.position, size, index + 1)
        return self


def build_occupancy_grid(
    width: int,
    height: int,
    placements: Sequence[Placement],
    buildings: Sequence[BuildingTemplate],
) -> OccupancyGrid:
    """Allocate a grid and mark a full layout on it."""
    return OccupancyGrid(width, height).rebuild_from_placements(placements, buildings)


def validate_layout(
    width: int,
    height: int,
    placements: Sequence[Placement],
    buildings: Sequence[BuildingTemplate],
) -> bool:
    """Canonical legality check for a layout.

    Every footprint (after rotation) must lie inside the grid and no two may
    overlap. Stops at the first violation.
    """
    grid = OccupancyGrid(width, height)
    for index, placement in enumerate(placements):
        if not 0 <= placement.template_index < len(buildings):
            return False
        building = buildings[placement.template_index]
        size = rotate_size(building.size, placement.orientation)
        if not grid.is_area_free(placement.position, size):
            return False
        grid.mark_building(placement.position, size, index + 1)
    return True
