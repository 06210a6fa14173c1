"""Flow derivation and the layout cost function."""

from typing import Dict, List, Sequence, Tuple

from factory_planner.src.common.constants import UNROUTABLE_PENALTY
from factory_planner.src.common.types import BuildingTemplate, Flow, Resource


def derive_flows(buildings: Sequence[BuildingTemplate]) -> List[Flow]:
    """Split each resource's traffic proportionally over supplier/consumer pairs.

    For a resource, the transferred total is ``min(supply, demand)``; each
    (supplier, consumer) pair gets the share weighted by both sides' volumes.
    Resources with no supplier or no consumer produce no flows. Distance and
    adjacency are not considered.
    """
    suppliers: Dict[Resource, List[Tuple[int, float]]] = {}
    consumers: Dict[Resource, List[Tuple[int, float]]] = {}
    # first-seen order over the catalog keeps the flow list deterministic
    resources: Dict[Resource, None] = {}

    for index, building in enumerate(buildings):
        for output in building.outputs:
            resources.setdefault(output.resource)
            suppliers.setdefault(output.resource, []).append((index, output.volume))
        for input_flow in building.inputs:
            resources.setdefault(input_flow.resource)
            consumers.setdefault(input_flow.resource, []).append(
                (index, input_flow.volume)
            )

    flows: List[Flow] = []
    for resource in resources:
        supply_side = suppliers.get(resource, [])
        demand_side = consumers.get(resource, [])
        if not supply_side or not demand_side:
            continue

        total_supply = sum(volume for _, volume in supply_side)
        total_demand = sum(volume for _, volume in demand_side)
        if total_supply <= 0 or total_demand <= 0:
            continue
        actual_flow = min(total_supply, total_demand)

        for source_index, supply in supply_side:
            for target_index, demand in demand_side:
                volume = actual_flow * (supply / total_supply) * (demand / total_demand)
                if volume <= 0:
                    continue
                flows.append(Flow(source_index, target_index, resource, volume))

    return flows


def flow_cost_term(flow: Flow, path_length: int) -> float:
    """Cost contribution of one flow; unroutable flows pay a finite penalty."""
    if path_length < 0:
        return UNROUTABLE_PENALTY * flow.volume
    return flow.volume * path_length


def compute_cost(
    flows: Sequence[Flow],
    path_lengths: Sequence[int],
    road_cell_count: int,
    road_weight: float,
) -> float:
    """Road construction cost plus volume-weighted path lengths."""
    if len(flows) != len(path_lengths):
        raise ValueError(
            f"Expected one path length per flow, got {len(path_lengths)} for {len(flows)} flows"
        )
    cost = road_cell_count * road_weight
    for flow, length in zip(flows, path_lengths):
        cost += flow_cost_term(flow, length)
    return cost
