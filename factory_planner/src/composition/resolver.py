"""Turn production targets into the list of buildings that satisfies them."""

from __future__ import annotations

import math
from collections import deque
from typing import Dict, List, Optional, Sequence

from factory_planner.src.common.diagnostics import ProgramDiagnostics
from factory_planner.src.common.exceptions import (
    CyclicDependencyError,
    UnresolvableDemandError,
)
from factory_planner.src.common.types import BuildingTemplate, ProductionTarget, Resource


def area_efficiency(building: BuildingTemplate, resource: Resource) -> float:
    """Output volume of ``resource`` per footprint cell."""
    return building.output_volume(resource) / building.area


class ProductionComposer:
    """Resolve building counts by propagating demand down the production chain.

    One producer is chosen per resource (best area efficiency, first
    registered wins ties). Counts are rounded up per resource independently,
    so upstream inputs may be overprovisioned.
    """

    def __init__(
        self,
        catalog: Sequence[BuildingTemplate],
        diagnostics: Optional[ProgramDiagnostics] = None,
    ):
        self.catalog = list(catalog)
        self.diagnostics = diagnostics or ProgramDiagnostics()
        self.best_producer = self._select_producers()

    def _select_producers(self) -> Dict[Resource, BuildingTemplate]:
        best: Dict[Resource, BuildingTemplate] = {}
        for building in self.catalog:
            for output in building.outputs:
                if output.volume <= 0:
                    continue
                existing = best.get(output.resource)
                if existing is None or area_efficiency(
                    building, output.resource
                ) > area_efficiency(existing, output.resource):
                    best[output.resource] = building
        return best

    def producer_for(self, resource: Resource) -> BuildingTemplate:
        producer = self.best_producer.get(resource)
        if producer is None:
            raise UnresolvableDemandError(resource)
        return producer

    def needed_resources(self, targets: Sequence[ProductionTarget]) -> List[Resource]:
        """Breadth-first closure of the targets over producer inputs."""
        needed: Dict[Resource, None] = {}
        queue = deque(target.resource for target in targets)
        while queue:
            resource = queue.popleft()
            if resource in needed:
                continue
            needed[resource] = None
            for input_flow in self.producer_for(resource).inputs:
                if input_flow.resource not in needed:
                    queue.append(input_flow.resource)
        return list(needed)

    def topological_order(self, needed: Sequence[Resource]) -> List[Resource]:
        """Kahn's algorithm: every resource comes after all of its inputs."""
        needed_set = set(needed)
        in_degree: Dict[Resource, int] = {resource: 0 for resource in needed}
        dependents: Dict[Resource, List[Resource]] = {resource: [] for resource in needed}

        for resource in needed:
            for input_flow in self.best_producer[resource].inputs:
                if input_flow.resource in needed_set:
                    in_degree[resource] += 1
                    dependents[input_flow.resource].append(resource)

        ready = deque(resource for resource, degree in in_degree.items() if degree == 0)
        ordered: List[Resource] = []
        while ready:
            resource = ready.popleft()
            ordered.append(resource)
            for dependent in dependents[resource]:
                in_degree[dependent] -= 1
                if in_degree[dependent] == 0:
                    ready.append(dependent)

        if len(ordered) != len(needed):
            ordered_set = set(ordered)
            raise CyclicDependencyError(r for r in needed if r not in ordered_set)
        return ordered

    def building_counts(self, targets: Sequence[ProductionTarget]) -> Dict[Resource, int]:
        """Number of producer buildings per needed resource, targets first."""
        if not targets:
            return {}

        ordered = self.topological_order(self.needed_resources(targets))

        demand: Dict[Resource, float] = {}
        for target in targets:
            demand[target.resource] = demand.get(target.resource, 0.0) + target.volume

        counts: Dict[Resource, int] = {}
        for resource in reversed(ordered):
            producer = self.best_producer[resource]
            count = max(0, math.ceil(demand.get(resource, 0.0) / producer.output_volume(resource)))
            counts[resource] = count
            for input_flow in producer.inputs:
                demand[input_flow.resource] = (
                    demand.get(input_flow.resource, 0.0) + count * input_flow.volume
                )
            self.diagnostics.info(
                f"{resource.value}: {count} x {producer.name} "
                f"(demand {demand.get(resource, 0.0):g})",
                stage="composition",
            )
        return counts

    def compose(self, targets: Sequence[ProductionTarget]) -> List[BuildingTemplate]:
        """Flatten building counts into a catalog, producer repeated per count."""
        result: List[BuildingTemplate] = []
        for resource, count in self.building_counts(targets).items():
            result.extend([self.best_producer[resource]] * count)
        return result


def compose(
    catalog: Sequence[BuildingTemplate],
    targets: Sequence[ProductionTarget],
    diagnostics: Optional[ProgramDiagnostics] = None,
) -> List[BuildingTemplate]:
    """Buildings needed to meet ``targets``.

    Raises:
        UnresolvableDemandError: a needed resource has no producer.
        CyclicDependencyError: the needed resources cannot be ordered.
    """
    return ProductionComposer(catalog, diagnostics).compose(targets)
