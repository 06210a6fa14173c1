"""Random initial layouts and neighbor moves for the annealing search.

Neighbor moves return ``None`` when no legal candidate was found; the caller
counts that as an attempt and carries on. Only :func:`random_layout` fails
hard, since without an initial layout there is nothing to search from.
"""

from typing import List, Optional

from factory_planner.src.common.constants import (
    MAX_PLACEMENT_ATTEMPTS,
    MOVE_PROBABILITY,
    ROTATE_PROBABILITY,
)
from factory_planner.src.common.entropy import EntropySource, random_index
from factory_planner.src.common.exceptions import PlacementExhaustedError
from factory_planner.src.common.types import (
    Layout,
    Orientation,
    Placement,
    Position,
    Problem,
    Size,
)
from .rotation import rotate_size
from .tile_grid import OccupancyGrid


def _random_position(
    problem: Problem, size: Size, rng: EntropySource
) -> Optional[Position]:
    """Draw a top-left cell that keeps ``size`` inside the grid."""
    span_x = problem.grid_width - size.width + 1
    span_y = problem.grid_height - size.height + 1
    if span_x <= 0 or span_y <= 0:
        return None
    x = random_index(rng, span_x)
    y = random_index(rng, span_y)
    return Position(x, y)


def _fresh_grid(
    layout: Layout, problem: Problem, grid: Optional[OccupancyGrid]
) -> OccupancyGrid:
    if grid is None:
        grid = OccupancyGrid(problem.grid_width, problem.grid_height)
    return grid.rebuild_from_placements(layout.placements, problem.buildings)


def _placed_size(problem: Problem, placement: Placement) -> Size:
    building = problem.buildings[placement.template_index]
    return rotate_size(building.size, placement.orientation)


def _overlaps(pos_a: Position, size_a: Size, pos_b: Position, size_b: Size) -> bool:
    return (
        pos_a.x < pos_b.x + size_b.width
        and pos_b.x < pos_a.x + size_a.width
        and pos_a.y < pos_b.y + size_b.height
        and pos_b.y < pos_a.y + size_a.height
    )


def random_layout(
    problem: Problem,
    rng: EntropySource,
    max_attempts: int = MAX_PLACEMENT_ATTEMPTS,
    grid: Optional[OccupancyGrid] = None,
) -> Layout:
    """Place every catalog building at a random free spot and orientation.

    Raises:
        PlacementExhaustedError: a building found no free spot within
            ``max_attempts`` draws.
    """
    if grid is None:
        grid = OccupancyGrid(problem.grid_width, problem.grid_height)
    else:
        grid.reset()

    placements: List[Placement] = []
    for index, building in enumerate(problem.buildings):
        placed = False
        for _ in range(max_attempts):
            orientation = Orientation(random_index(rng, 4))
            size = rotate_size(building.size, orientation)
            position = _random_position(problem, size, rng)
            if position is None or not grid.is_area_free(position, size):
                continue
            grid.mark_building(position, size, index + 1)
            placements.append(Placement(index, position, orientation))
            placed = True
            break

        if not placed:
            raise PlacementExhaustedError(building.name, max_attempts)

    return Layout(tuple(placements))


def move_building(
    layout: Layout,
    problem: Problem,
    rng: EntropySource,
    grid: Optional[OccupancyGrid] = None,
) -> Optional[Layout]:
    """Relocate one random building, keeping its orientation."""
    if not layout.placements:
        return None

    idx = random_index(rng, len(layout.placements))
    placement = layout.placements[idx]
    size = _placed_size(problem, placement)

    grid = _fresh_grid(layout, problem, grid)
    grid.clear_building(placement.position, size)

    for _ in range(MAX_PLACEMENT_ATTEMPTS):
        position = _random_position(problem, size, rng)
        if position is not None and grid.is_area_free(position, size):
            return layout.moved(idx, position)

    return None


def swap_buildings(
    layout: Layout,
    problem: Problem,
    rng: EntropySource,
    grid: Optional[OccupancyGrid] = None,
) -> Optional[Layout]:
    """Exchange the positions (not orientations) of two distinct buildings."""
    count = len(layout.placements)
    if count < 2:
        return None

    idx_a = random_index(rng, count)
    idx_b = random_index(rng, count - 1)
    if idx_b >= idx_a:
        idx_b += 1

    placement_a = layout.placements[idx_a]
    placement_b = layout.placements[idx_b]
    size_a = _placed_size(problem, placement_a)
    size_b = _placed_size(problem, placement_b)
    new_pos_a = placement_b.position
    new_pos_b = placement_a.position

    grid = _fresh_grid(layout, problem, grid)

    if not grid.is_within_bounds(new_pos_a, size_a) or not grid.is_within_bounds(
        new_pos_b, size_b
    ):
        return None

    if not grid.is_area_free_excluding(
        new_pos_a, size_a, idx_b + 1
    ) or not grid.is_area_free_excluding(new_pos_b, size_b, idx_a + 1):
        return None

    # differing sizes can make the two new footprints collide with each other
    if _overlaps(new_pos_a, size_a, new_pos_b, size_b):
        return None

    return layout.moved(idx_a, new_pos_a).moved(idx_b, new_pos_b)


def rotate_building(
    layout: Layout,
    problem: Problem,
    rng: EntropySource,
    grid: Optional[OccupancyGrid] = None,
) -> Optional[Layout]:
    """Turn one random building in place to a different orientation."""
    if not layout.placements:
        return None

    idx = random_index(rng, len(layout.placements))
    placement = layout.placements[idx]
    offset = 1 + random_index(rng, 3)
    orientation = Orientation((placement.orientation + offset) % 4)

    building = problem.buildings[placement.template_index]
    size = rotate_size(building.size, orientation)

    grid = _fresh_grid(layout, problem, grid)
    if not grid.is_area_free_excluding(placement.position, size, idx + 1):
        return None

    return layout.rotated(idx, orientation)


def perturb(
    layout: Layout,
    problem: Problem,
    rng: EntropySource,
    grid: Optional[OccupancyGrid] = None,
) -> Optional[Layout]:
    """Pick a neighbor move: 40% move, 30% rotate, 30% swap."""
    roll = rng()
    if roll < MOVE_PROBABILITY:
        return move_building(layout, problem, rng, grid)
    if roll < MOVE_PROBABILITY + ROTATE_PROBABILITY:
        return rotate_building(layout, problem, rng, grid)
    return swap_buildings(layout, problem, rng, grid)
