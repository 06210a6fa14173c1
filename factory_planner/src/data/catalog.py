"""Sample building templates and problems.

Connection points sit on the footprint perimeter; roads attach to the free
cells next to them. ``properties`` values are game bookkeeping that the
planner carries but never reads.
"""

from typing import Optional

from factory_planner.src.common.types import (
    BuildingTemplate,
    Position,
    Problem,
    Resource,
    ResourceFlow,
    Size,
)


def _template(name, width, height, inputs=(), outputs=(), connections=(), **properties):
    return BuildingTemplate(
        name=name,
        size=Size(width, height),
        inputs=tuple(ResourceFlow(resource, volume) for resource, volume in inputs),
        outputs=tuple(ResourceFlow(resource, volume) for resource, volume in outputs),
        connections=tuple(Position(x, y) for x, y in connections),
        properties=properties,
    )


POWER_PLANT = _template(
    "Power Plant",
    3,
    3,
    outputs=[(Resource.POWER, 10)],
    connections=[(1, 0), (1, 2)],
    workers=4,
)

STEEL_MILL = _template(
    "Steel Mill",
    4,
    3,
    inputs=[(Resource.POWER, 5)],
    outputs=[(Resource.IRON, 8)],
    connections=[(0, 1), (3, 1)],
    power_draw=15,
    workers=30,
)

ALLOY_FOUNDRY = _template(
    "Alloy Foundry",
    4,
    4,
    inputs=[(Resource.POWER, 4), (Resource.IRON, 6)],
    outputs=[(Resource.ALLOY, 5)],
    connections=[(1, 0), (2, 3)],
    power_draw=12,
    workers=20,
)

ELECTRONICS_FACTORY = _template(
    "Electronics Factory",
    3,
    4,
    inputs=[(Resource.POWER, 3), (Resource.ALLOY, 4)],
    outputs=[(Resource.ELECTRONICS, 3)],
    connections=[(0, 1), (2, 2)],
    power_draw=10,
    workers=25,
)

WATER_PUMP = _template(
    "Water Pump",
    2,
    2,
    inputs=[(Resource.POWER, 1)],
    outputs=[(Resource.WATER, 6)],
    connections=[(0, 0)],
    power_draw=1,
)

HYDROPONICS_FARM = _template(
    "Hydroponics Farm",
    4,
    2,
    inputs=[(Resource.POWER, 2), (Resource.WATER, 4)],
    outputs=[(Resource.FOOD, 5), (Resource.WASTE, 1)],
    connections=[(0, 0), (3, 1)],
    power_draw=2,
    workers=6,
)

CARBON_EXTRACTOR = _template(
    "Carbon Extractor",
    2,
    3,
    inputs=[(Resource.POWER, 2)],
    outputs=[(Resource.CARBON, 4)],
    connections=[(1, 1)],
    power_draw=2,
    workers=3,
)

POLYMER_REFINERY = _template(
    "Polymer Refinery",
    3,
    3,
    inputs=[(Resource.POWER, 3), (Resource.CARBON, 6)],
    outputs=[(Resource.POLYMER, 4)],
    connections=[(0, 1), (2, 1)],
    power_draw=6,
    workers=10,
)

SILICON_QUARRY = _template(
    "Silicon Quarry",
    3,
    2,
    inputs=[(Resource.POWER, 2)],
    outputs=[(Resource.SILICON, 5)],
    connections=[(1, 0)],
    power_draw=3,
    workers=8,
)

# Same output as the Electronics Factory from a smaller footprint, using silicon
CHIP_FAB = _template(
    "Chip Fab",
    2,
    3,
    inputs=[(Resource.POWER, 2), (Resource.SILICON, 3)],
    outputs=[(Resource.ELECTRONICS, 2)],
    connections=[(0, 0), (1, 2)],
    power_draw=8,
    workers=12,
)

DEFAULT_CATALOG = (
    POWER_PLANT,
    STEEL_MILL,
    ALLOY_FOUNDRY,
    ELECTRONICS_FACTORY,
    WATER_PUMP,
    HYDROPONICS_FARM,
    CARBON_EXTRACTOR,
    POLYMER_REFINERY,
    SILICON_QUARRY,
    CHIP_FAB,
)

SAMPLE_PROBLEM = Problem(
    grid_width=20,
    grid_height=20,
    buildings=(POWER_PLANT, STEEL_MILL, ALLOY_FOUNDRY, ELECTRONICS_FACTORY),
)


def find_template(name: str) -> Optional[BuildingTemplate]:
    """Look up a catalog template by case-insensitive name."""
    key = name.strip().lower()
    for template in DEFAULT_CATALOG:
        if template.name.lower() == key:
            return template
    return None
