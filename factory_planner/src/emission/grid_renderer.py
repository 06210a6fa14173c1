"""Human-readable and JSON renderings of a solve result."""

from typing import Any, Dict, List

from factory_planner.src.common.constants import (
    AXIS_LABEL_STEP,
    CONNECTION_CELL_CHAR,
    EMPTY_CELL_CHAR,
    ROAD_CELL_CHAR,
)
from factory_planner.src.common.types import Problem, SAResult
from factory_planner.src.layout.rotation import rotate_size
from factory_planner.src.routing.road_router import absolute_connections


def placement_letter(index: int) -> str:
    return chr(ord("A") + index % 26)


def render_grid(result: SAResult, problem: Problem) -> str:
    """Draw the layout as text.

    Building cells use an uppercase letter per placement, their connection
    cells the lowercase letter, roads ``*`` and connection points that fall
    on a free or road cell ``+``. A legend follows the grid.
    """
    width, height = problem.grid_width, problem.grid_height
    placements = result.layout.placements
    chars = [EMPTY_CELL_CHAR] * (width * height)

    for index, placement in enumerate(placements):
        letter = placement_letter(index)
        building = problem.buildings[placement.template_index]
        size = rotate_size(building.size, placement.orientation)
        for dy in range(size.height):
            row = (placement.position.y + dy) * width
            for dx in range(size.width):
                chars[row + placement.position.x + dx] = letter

    for road in result.roads:
        chars[road.y * width + road.x] = ROAD_CELL_CHAR

    for index, placement in enumerate(placements):
        building = problem.buildings[placement.template_index]
        for point in absolute_connections(placement, building):
            if not (0 <= point.x < width and 0 <= point.y < height):
                continue
            idx = point.y * width + point.x
            if chars[idx] == placement_letter(index):
                chars[idx] = chars[idx].lower()
            elif chars[idx] in (EMPTY_CELL_CHAR, ROAD_CELL_CHAR):
                chars[idx] = CONNECTION_CELL_CHAR

    label_width = len(str(height - 1))
    padding = " " * (label_width + 2)
    lines: List[str] = []

    header = padding
    for x in range(0, width, AXIS_LABEL_STEP):
        label = str(x)
        header += label + " " * max(1, AXIS_LABEL_STEP - len(label))
    lines.append(header.rstrip())

    for y in range(height):
        row = "".join(chars[y * width : (y + 1) * width])
        lines.append(f"{str(y).rjust(label_width)}  {row}".rstrip())

    lines.append("")
    lines.append("Legend:")
    for index, placement in enumerate(placements):
        building = problem.buildings[placement.template_index]
        size = rotate_size(building.size, placement.orientation)
        lines.append(
            f"  {placement_letter(index)}  {building.name} ({size.width}x{size.height})"
        )

    return "\n".join(lines)


def result_to_dict(result: SAResult, problem: Problem) -> Dict[str, Any]:
    """JSON-serializable summary of a result."""
    return {
        "grid": {"width": problem.grid_width, "height": problem.grid_height},
        "cost": result.cost,
        "initial_cost": result.initial_cost,
        "iterations": result.iterations,
        "accepted": result.accepted,
        "placements": [
            {
                "building": problem.buildings[p.template_index].name,
                "x": p.position.x,
                "y": p.position.y,
                "orientation": int(p.orientation) * 90,
            }
            for p in result.layout.placements
        ],
        "path_lengths": list(result.path_lengths),
        "roads": [[road.x, road.y] for road in result.roads],
    }
