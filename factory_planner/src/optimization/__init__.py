"""Objective function and simulated-annealing solver."""

from .objective import derive_flows, compute_cost, flow_cost_term
from .workspace import SolveWorkspace
from .annealing import AnnealingSolver, AnnealingProgress, solve

__all__ = [
    "derive_flows",
    "compute_cost",
    "flow_cost_term",
    "SolveWorkspace",
    "AnnealingSolver",
    "AnnealingProgress",
    "solve",
]
