"""Shared constants and configuration defaults across the planner."""

from dataclasses import dataclass, field
from typing import Optional

from .types import SAConfig

# Objective
UNROUTABLE_PENALTY = 10000  # per unit of flow volume when no road can be found
NO_PATH = -1

# Placement
MAX_PLACEMENT_ATTEMPTS = 100

# Neighbor selection; swap takes the remainder
MOVE_PROBABILITY = 0.4
ROTATE_PROBABILITY = 0.3

# Rendering
EMPTY_CELL_CHAR = "."
ROAD_CELL_CHAR = "*"
CONNECTION_CELL_CHAR = "+"
AXIS_LABEL_STEP = 5


@dataclass
class PlannerConfig:
    """Driver-level defaults used by the CLI."""

    grid_width: int = 20
    grid_height: int = 20
    sa_config: SAConfig = field(default_factory=SAConfig)
    seed: Optional[int] = None
    log_level: str = "warning"


DEFAULT_CONFIG = PlannerConfig()
