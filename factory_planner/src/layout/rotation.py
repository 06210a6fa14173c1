"""Footprint and connection-point transforms for the four orientations.

All transforms take the *pre-rotation* size of the template.
"""

from typing import Sequence

from factory_planner.src.common.types import Orientation, Position, Size


def rotate_size(size: Size, orientation: Orientation) -> Size:
    """Quarter turns swap width and height; half turns keep them."""
    if Orientation(orientation).is_transposed:
        return Size(size.height, size.width)
    return size


def rotate_connection(connection: Position, size: Size, orientation: Orientation) -> Position:
    """Map a template-local cell to its location after rotating clockwise."""
    orientation = Orientation(orientation)
    if orientation == Orientation.R0:
        return connection
    if orientation == Orientation.R90:
        return Position(size.height - 1 - connection.y, connection.x)
    if orientation == Orientation.R180:
        return Position(size.width - 1 - connection.x, size.height - 1 - connection.y)
    return Position(connection.y, size.width - 1 - connection.x)


def rotate_connections(
    connections: Sequence[Position], size: Size, orientation: Orientation
) -> Sequence[Position]:
    """Rotate every connection point; R0 hands back the input unchanged."""
    if orientation == Orientation.R0:
        return connections
    return tuple(rotate_connection(c, size, orientation) for c in connections)
