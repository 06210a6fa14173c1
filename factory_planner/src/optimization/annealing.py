"""Simulated-annealing search over building layouts."""

import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from factory_planner.src.common.diagnostics import ProgramDiagnostics
from factory_planner.src.common.entropy import EntropySource
from factory_planner.src.common.types import Flow, Layout, Problem, SAConfig, SAResult
from factory_planner.src.layout.perturbation import perturb, random_layout
from factory_planner.src.routing.road_router import RoutingResult, route_flows
from .objective import compute_cost, derive_flows
from .workspace import SolveWorkspace


@dataclass(frozen=True)
class AnnealingProgress:
    """Snapshot handed to the progress callback after each temperature step."""

    temperature: float
    iterations: int
    current_cost: float
    best_cost: float


# Return False to stop after the current temperature step.
ProgressCallback = Callable[[AnnealingProgress], Optional[bool]]


class AnnealingSolver:
    """
    Metropolis search with a geometric cooling schedule.

    Tracks two states: ``current`` is the random walk and may get worse,
    ``best`` never does. The returned result is always ``best``.
    """

    def __init__(
        self,
        problem: Problem,
        config: SAConfig,
        rng: EntropySource,
        diagnostics: Optional[ProgramDiagnostics] = None,
    ):
        self.problem = problem
        self.config = config
        self.rng = rng
        self.diagnostics = diagnostics or ProgramDiagnostics()
        self.flows: List[Flow] = derive_flows(problem.buildings)
        self.workspace = SolveWorkspace(problem)

    def evaluate(self, layout: Layout) -> Tuple[RoutingResult, float]:
        """Route a layout and return its routing with its cost."""
        routing = route_flows(
            layout,
            self.problem,
            self.flows,
            buffers=self.workspace.bfs,
            grid=self.workspace.grid,
        )
        cost = compute_cost(
            self.flows,
            routing.path_lengths,
            routing.road_cell_count,
            self.config.road_weight,
        )
        return routing, cost

    def accepts(self, delta: float, temperature: float) -> bool:
        """Metropolis criterion; improvements never consume a random draw."""
        if delta < 0:
            return True
        return self.rng() < math.exp(-delta / temperature)

    def solve(self, on_temperature_step: Optional[ProgressCallback] = None) -> SAResult:
        config = self.config
        stage = "annealing"

        current = random_layout(self.problem, self.rng, grid=self.workspace.grid)
        current_routing, current_cost = self.evaluate(current)
        initial_cost = current_cost

        best, best_routing, best_cost = current, current_routing, current_cost

        self.diagnostics.info(
            f"Starting annealing: {len(self.problem.buildings)} buildings, "
            f"{len(self.flows)} flows, initial cost {initial_cost:.1f}",
            stage=stage,
        )

        temperature = config.initial_temperature
        iterations = 0
        accepted = 0

        while temperature > config.min_temperature:
            for _ in range(config.iterations_per_temp):
                iterations += 1
                neighbor = perturb(current, self.problem, self.rng, self.workspace.grid)
                if neighbor is None:
                    continue

                neighbor_routing, neighbor_cost = self.evaluate(neighbor)
                delta = neighbor_cost - current_cost
                if not self.accepts(delta, temperature):
                    continue

                accepted += 1
                current, current_routing, current_cost = (
                    neighbor,
                    neighbor_routing,
                    neighbor_cost,
                )
                if current_cost < best_cost:
                    best, best_routing, best_cost = current, current_routing, current_cost

            self.diagnostics.debug(
                f"T={temperature:.4f} iterations={iterations} "
                f"current={current_cost:.1f} best={best_cost:.1f}",
                stage=stage,
            )

            temperature *= config.cooling_rate

            if on_temperature_step is not None:
                progress = AnnealingProgress(temperature, iterations, current_cost, best_cost)
                if on_temperature_step(progress) is False:
                    self.diagnostics.info(
                        f"Stopped early at T={temperature:.4f} after {iterations} iterations",
                        stage=stage,
                    )
                    break

        unroutable = best_routing.unroutable_count
        if unroutable:
            self.diagnostics.warning(
                f"Best layout leaves {unroutable} of {len(self.flows)} flows unroutable",
                stage=stage,
            )
        self.diagnostics.info(
            f"Annealing finished: best cost {best_cost:.1f} after {iterations} "
            f"iterations ({accepted} accepted)",
            stage=stage,
        )

        return SAResult(
            layout=best,
            cost=best_cost,
            iterations=iterations,
            roads=best_routing.roads,
            path_lengths=best_routing.path_lengths,
            accepted=accepted,
            initial_cost=initial_cost,
        )


def solve(
    problem: Problem,
    config: SAConfig,
    rng: EntropySource,
    *,
    diagnostics: Optional[ProgramDiagnostics] = None,
    on_temperature_step: Optional[ProgressCallback] = None,
) -> SAResult:
    """Optimize placement and roads for ``problem``.

    Raises:
        PlacementExhaustedError: the initial random layout could not be built.
    """
    solver = AnnealingSolver(problem, config, rng, diagnostics)
    return solver.solve(on_temperature_step)
