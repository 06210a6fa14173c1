"""Common types and utilities shared across planner stages."""

from .diagnostics import ProgramDiagnostics, DiagnosticSeverity
from .entropy import EntropySource, seeded_source, system_source, random_index
from .exceptions import (
    PlannerError,
    InvalidConfigError,
    PlacementExhaustedError,
    UnresolvableDemandError,
    CyclicDependencyError,
)
from .types import (
    Resource,
    Orientation,
    Position,
    Size,
    ResourceFlow,
    BuildingTemplate,
    Placement,
    Layout,
    Problem,
    Flow,
    ProductionTarget,
    SAConfig,
    SAResult,
)
from .constants import *

__all__ = [
    "ProgramDiagnostics",
    "DiagnosticSeverity",
    "EntropySource",
    "seeded_source",
    "system_source",
    "random_index",
    "PlannerError",
    "InvalidConfigError",
    "PlacementExhaustedError",
    "UnresolvableDemandError",
    "CyclicDependencyError",
    "Resource",
    "Orientation",
    "Position",
    "Size",
    "ResourceFlow",
    "BuildingTemplate",
    "Placement",
    "Layout",
    "Problem",
    "Flow",
    "ProductionTarget",
    "SAConfig",
    "SAResult",
    # Constants
    "UNROUTABLE_PENALTY",
    "MAX_PLACEMENT_ATTEMPTS",
    "NO_PATH",
    "DEFAULT_CONFIG",
    "PlannerConfig",
]
