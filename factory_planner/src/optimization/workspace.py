"""Per-solve scratch state."""

from factory_planner.src.common.types import Problem
from factory_planner.src.layout.tile_grid import OccupancyGrid
from factory_planner.src.routing.pathfinding import BfsBuffers


class SolveWorkspace:
    """Grid and BFS buffers owned by exactly one solve call.

    Subroutines rebuild or reset these in place on every call. Sharing one
    workspace between concurrent solves is not safe.
    """

    def __init__(self, problem: Problem):
        self.grid = OccupancyGrid(problem.grid_width, problem.grid_height)
        self.bfs = BfsBuffers(problem.grid_width, problem.grid_height)
