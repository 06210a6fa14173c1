"""Production composition: targets to building lists."""

from .resolver import ProductionComposer, area_efficiency, compose

__all__ = ["ProductionComposer", "area_efficiency", "compose"]
