"""Road routing between placed buildings."""

from .pathfinding import BfsBuffers, ParentTag, bfs_multi
from .road_router import RoutingResult, absolute_connections, route_flows

__all__ = [
    "BfsBuffers",
    "ParentTag",
    "bfs_multi",
    "RoutingResult",
    "absolute_connections",
    "route_flows",
]
