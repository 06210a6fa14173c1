"""Layout Module
=================

Grid model and layout moves for the factory planner:

1. Occupancy tracking - marker grid with bounds and overlap queries.
2. Rotation - footprint and connection-point transforms for 4 orientations.
3. Perturbation - random initial layouts and move/rotate/swap neighbors.
"""

from .tile_grid import OccupancyGrid, build_occupancy_grid, validate_layout
from .rotation import rotate_size, rotate_connection, rotate_connections
from .perturbation import (
    random_layout,
    move_building,
    swap_buildings,
    rotate_building,
    perturb,
)

__all__ = [
    "OccupancyGrid",
    "build_occupancy_grid",
    "validate_layout",
    "rotate_size",
    "rotate_connection",
    "rotate_connections",
    "random_layout",
    "move_building",
    "swap_buildings",
    "rotate_building",
    "perturb",
]
