from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import Any, Dict, Optional, Tuple

from .exceptions import InvalidConfigError

"""Value types shared by every planning stage."""


class Resource(Enum):
    """Kinds of resources a building can consume or produce."""

    # Utility
    POWER = "Power"

    # Raw materials
    IRON = "Iron"
    CARBON = "Carbon"
    SILICON = "Silicon"
    HYDROGEN = "Hydrogen"
    ICE = "Ice"

    # Processed materials
    ALLOY = "Alloy"
    POLYMER = "Polymer"
    ELECTRONICS = "Electronics"

    # Consumables
    FOOD = "Food"
    WATER = "Water"
    WASTE = "Waste"

    @classmethod
    def from_name(cls, name: str) -> "Resource":
        """Look up a resource by member name or display value, case-insensitively."""
        key = name.strip().lower()
        for member in cls:
            if member.name.lower() == key or member.value.lower() == key:
                return member
        raise ValueError(f"Unknown resource: {name}")


class Orientation(IntEnum):
    """Clockwise quarter turns applied to a footprint."""

    R0 = 0
    R90 = 1
    R180 = 2
    R270 = 3

    @property
    def is_transposed(self) -> bool:
        return self in (Orientation.R90, Orientation.R270)


@dataclass(frozen=True)
class Position:
    x: int
    y: int


@dataclass(frozen=True)
class Size:
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class ResourceFlow:
    """A resource quantity per unit time."""

    resource: Resource
    volume: float


@dataclass(frozen=True)
class BuildingTemplate:
    """Static description of a building kind.

    ``connections`` are template-local cells on the footprint where a road may
    attach. ``properties`` carries game-specific data (power draw, worker
    counts) that the planner ignores.
    """

    name: str
    size: Size
    inputs: Tuple[ResourceFlow, ...] = ()
    outputs: Tuple[ResourceFlow, ...] = ()
    connections: Tuple[Position, ...] = ()
    properties: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def area(self) -> int:
        return self.size.area

    def output_volume(self, resource: Resource) -> float:
        """Volume of ``resource`` this template outputs, 0 if none."""
        for output in self.outputs:
            if output.resource == resource:
                return output.volume
        return 0.0


@dataclass(frozen=True)
class Placement:
    template_index: int
    position: Position
    orientation: Orientation = Orientation.R0


@dataclass(frozen=True)
class Layout:
    """One placement per building, in catalog order."""

    placements: Tuple[Placement, ...]

    def __len__(self) -> int:
        return len(self.placements)

    def with_placement(self, index: int, placement: Placement) -> "Layout":
        placements = list(self.placements)
        placements[index] = placement
        return Layout(tuple(placements))

    def moved(self, index: int, position: Position) -> "Layout":
        return self.with_placement(index, replace(self.placements[index], position=position))

    def rotated(self, index: int, orientation: Orientation) -> "Layout":
        return self.with_placement(
            index, replace(self.placements[index], orientation=orientation)
        )


@dataclass(frozen=True)
class Problem:
    grid_width: int
    grid_height: int
    buildings: Tuple[BuildingTemplate, ...]

    def __post_init__(self) -> None:
        if self.grid_width <= 0 or self.grid_height <= 0:
            raise InvalidConfigError(
                f"Grid must have positive dimensions, got {self.grid_width}x{self.grid_height}"
            )

    @property
    def grid_area(self) -> int:
        return self.grid_width * self.grid_height


@dataclass(frozen=True)
class Flow:
    """Directed transfer of a resource between two placements."""

    source_index: int
    target_index: int
    resource: Resource
    volume: float


@dataclass(frozen=True)
class ProductionTarget:
    resource: Resource
    volume: float


@dataclass(frozen=True)
class SAConfig:
    """Simulated-annealing schedule and objective weights."""

    initial_temperature: float = 100.0
    cooling_rate: float = 0.95
    iterations_per_temp: int = 30
    min_temperature: float = 0.1
    road_weight: float = 1.0

    def __post_init__(self) -> None:
        if not (math.isfinite(self.initial_temperature) and self.initial_temperature > 0):
            raise InvalidConfigError(
                f"initial_temperature must be finite and > 0, got {self.initial_temperature}"
            )
        if not 0 < self.cooling_rate < 1:
            raise InvalidConfigError(
                f"cooling_rate must be in (0, 1), got {self.cooling_rate}"
            )
        if not isinstance(self.iterations_per_temp, int) or self.iterations_per_temp <= 0:
            raise InvalidConfigError(
                f"iterations_per_temp must be a positive integer, got {self.iterations_per_temp}"
            )
        if not (math.isfinite(self.min_temperature) and self.min_temperature > 0):
            raise InvalidConfigError(
                f"min_temperature must be finite and > 0, got {self.min_temperature}"
            )
        if not (math.isfinite(self.road_weight) and self.road_weight >= 0):
            raise InvalidConfigError(f"road_weight must be finite and >= 0, got {self.road_weight}")


@dataclass(frozen=True)
class SAResult:
    """Best layout found by a solve call.

    ``iterations`` counts every perturbation attempt, including rejected ones.
    """

    layout: Layout
    cost: float
    iterations: int
    roads: Tuple[Position, ...]
    path_lengths: Tuple[int, ...] = ()
    accepted: int = 0
    initial_cost: Optional[float] = None
