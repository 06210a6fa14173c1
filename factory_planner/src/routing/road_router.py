from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from factory_planner.src.common.constants import NO_PATH
from factory_planner.src.common.types import (
    BuildingTemplate,
    Flow,
    Layout,
    Placement,
    Position,
    Problem,
)
from factory_planner.src.layout.rotation import rotate_connections
from factory_planner.src.layout.tile_grid import OccupancyGrid
from .pathfinding import BfsBuffers, bfs_multi

"""Road routing for every flow of a layout."""


@dataclass(frozen=True)
class RoutingResult:
    """Deduplicated road cells plus one path length per flow (-1 = unroutable)."""

    roads: Tuple[Position, ...]
    path_lengths: Tuple[int, ...]

    @property
    def road_cell_count(self) -> int:
        return len(self.roads)

    @property
    def unroutable_count(self) -> int:
        return sum(1 for length in self.path_lengths if length == NO_PATH)


def absolute_connections(
    placement: Placement, building: BuildingTemplate
) -> List[Position]:
    """Connection points of a placed building in grid coordinates."""
    rotated = rotate_connections(building.connections, building.size, placement.orientation)
    origin = placement.position
    return [Position(origin.x + c.x, origin.y + c.y) for c in rotated]


def route_flows(
    layout: Layout,
    problem: Problem,
    flows: Sequence[Flow],
    buffers: Optional[BfsBuffers] = None,
    grid: Optional[OccupancyGrid] = None,
) -> RoutingResult:
    """Find a shortest road for each flow and union the road cells.

    ``grid`` and ``buffers`` are rebuilt/reset in place when supplied, so a
    solver can route many candidate layouts without reallocating.
    """
    width, height = problem.grid_width, problem.grid_height
    if grid is None:
        grid = OccupancyGrid(width, height)
    if buffers is None:
        buffers = BfsBuffers(width, height)
    grid.rebuild_from_placements(layout.placements, problem.buildings)

    connection_cache: Dict[int, List[Position]] = {}

    def connections_of(index: int) -> List[Position]:
        if index not in connection_cache:
            placement = layout.placements[index]
            connection_cache[index] = absolute_connections(
                placement, problem.buildings[placement.template_index]
            )
        return connection_cache[index]

    # dict keeps first-seen order for a deterministic road listing
    road_cells: Dict[int, None] = {}
    path_lengths: List[int] = []

    for flow in flows:
        path = bfs_multi(
            grid.flat,
            width,
            height,
            connections_of(flow.source_index),
            connections_of(flow.target_index),
            buffers,
        )
        if path is None:
            path_lengths.append(NO_PATH)
            continue
        path_lengths.append(len(path))
        for cell in path:
            road_cells[cell.y * width + cell.x] = None

    roads = tuple(Position(idx % width, idx // width) for idx in road_cells)
    return RoutingResult(roads=roads, path_lengths=tuple(path_lengths))
