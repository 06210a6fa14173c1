"""Multi-source / multi-target breadth-first search over the occupancy grid.

The search runs once per flow for every candidate layout, so its scratch
arrays are allocated once per solve (:class:`BfsBuffers`) and reset between
calls instead of being reallocated.
"""

from enum import IntEnum
from typing import List, Optional, Sequence

import numpy as np

from factory_planner.src.common.types import Position

DIRECTIONS = ((0, -1), (0, 1), (-1, 0), (1, 0))


class ParentTag(IntEnum):
    """Non-index values stored in the parent buffer.

    Real parents are cell indices (always >= 0). These tags are compared
    explicitly and never used to index a buffer.
    """

    UNVISITED = -1
    SEED = -2


class BfsBuffers:
    """Scratch arrays sized to the grid area, reused across searches."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        size = width * height
        self.visited = np.zeros(size, dtype=np.uint8)
        self.parent = np.full(size, ParentTag.UNVISITED, dtype=np.int32)
        self.queue = np.zeros(size, dtype=np.int32)
        self.is_goal = np.zeros(size, dtype=np.uint8)

    def reset(self) -> None:
        self.visited.fill(0)
        self.parent.fill(ParentTag.UNVISITED)
        self.is_goal.fill(0)


def _free_neighbors(
    cells: np.ndarray, width: int, height: int, point: Position
) -> List[int]:
    """Free in-bounds cells 4-adjacent to ``point``, as flat indices."""
    result = []
    for dx, dy in DIRECTIONS:
        nx = point.x + dx
        ny = point.y + dy
        if 0 <= nx < width and 0 <= ny < height:
            idx = ny * width + nx
            if cells[idx] == 0:
                result.append(idx)
    return result


def _reconstruct_path(parent: np.ndarray, end_idx: int, width: int) -> List[Position]:
    """Walk parent pointers back to a seed cell and return the path forward."""
    path: List[Position] = []
    current = end_idx
    while True:
        path.append(Position(current % width, current // width))
        predecessor = int(parent[current])
        if predecessor == ParentTag.SEED:
            break
        current = predecessor
    path.reverse()
    return path


def bfs_multi(
    cells: np.ndarray,
    width: int,
    height: int,
    sources: Sequence[Position],
    targets: Sequence[Position],
    buffers: BfsBuffers,
) -> Optional[List[Position]]:
    """Shortest road between any source and any target connection point.

    Args:
        cells: flat occupancy buffer, 0 = free, >0 = occupied
        width: grid width
        height: grid height
        sources: absolute connection points of the source building
        targets: absolute connection points of the target building
        buffers: scratch buffers sized for this grid

    Returns:
        The free cells forming the road (connection points excluded), an empty
        list when a source and target point coincide, or None when no road
        exists.
    """
    target_set = set(targets)
    for point in sources:
        if point in target_set:
            return []

    buffers.reset()
    visited = buffers.visited
    parent = buffers.parent
    queue = buffers.queue
    is_goal = buffers.is_goal

    goal_count = 0
    for point in targets:
        for idx in _free_neighbors(cells, width, height, point):
            if not is_goal[idx]:
                is_goal[idx] = 1
                goal_count += 1

    tail = 0
    for point in sources:
        for idx in _free_neighbors(cells, width, height, point):
            if not visited[idx]:
                visited[idx] = 1
                parent[idx] = ParentTag.SEED
                queue[tail] = idx
                tail += 1

    if goal_count == 0 or tail == 0:
        return None

    for i in range(tail):
        idx = int(queue[i])
        if is_goal[idx]:
            return [Position(idx % width, idx // width)]

    head = 0
    while head < tail:
        current = int(queue[head])
        head += 1
        cx = current % width
        cy = current // width

        for dx, dy in DIRECTIONS:
            nx = cx + dx
            ny = cy + dy
            if nx < 0 or nx >= width or ny < 0 or ny >= height:
                continue

            n_idx = ny * width + nx
            if visited[n_idx] or cells[n_idx] != 0:
                continue

            visited[n_idx] = 1
            parent[n_idx] = current

            if is_goal[n_idx]:
                return _reconstruct_path(parent, n_idx, width)

            queue[tail] = n_idx
            tail += 1

    return None
