#!/usr/bin/env python3
"""
Factory planner CLI - Command-line interface for the layout planner.

This module provides the entry point for the 'factory-planner' command installed via pip.

Usage:
    factory-planner                                  # Plan the sample problem
    factory-planner --target Electronics=6           # Compose buildings for a target
    factory-planner --target Power=11 --seed 7       # Reproducible run
    factory-planner --json -o plan.json              # Save a JSON summary
"""

import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence

import click

from factory_planner.src.common.constants import DEFAULT_CONFIG, PlannerConfig
from factory_planner.src.common.diagnostics import ProgramDiagnostics
from factory_planner.src.common.entropy import seeded_source, system_source
from factory_planner.src.common.exceptions import PlannerError
from factory_planner.src.common.types import Problem, ProductionTarget, Resource, SAConfig
from factory_planner.src.composition.resolver import compose
from factory_planner.src.data.catalog import DEFAULT_CATALOG, SAMPLE_PROBLEM
from factory_planner.src.emission.grid_renderer import render_grid, result_to_dict
from factory_planner.src.layout.perturbation import random_layout
from factory_planner.src.layout.tile_grid import validate_layout
from factory_planner.src.optimization.annealing import solve
from factory_planner.src.optimization.objective import compute_cost, derive_flows
from factory_planner.src.routing.road_router import route_flows


def parse_target(ctx, param, values):
    """Parse repeated RESOURCE=VOLUME options into production targets."""
    targets = []
    for value in values:
        name, sep, volume = value.partition("=")
        if not sep:
            raise click.BadParameter(f"expected RESOURCE=VOLUME, got '{value}'")
        try:
            resource = Resource.from_name(name)
        except ValueError:
            valid = ", ".join(member.value for member in Resource)
            raise click.BadParameter(f"unknown resource '{name}' (one of: {valid})")
        try:
            amount = float(volume)
        except ValueError:
            raise click.BadParameter(f"volume must be a number, got '{volume}'")
        if amount <= 0:
            raise click.BadParameter(f"volume must be positive, got {amount:g}")
        targets.append(ProductionTarget(resource, amount))
    return targets


def plan_factory(
    targets: Sequence[ProductionTarget] = (),
    grid_width: Optional[int] = None,
    grid_height: Optional[int] = None,
    sa_config: Optional[SAConfig] = None,
    seed: Optional[int] = None,
    log_level: str = "error",
    use_json: bool = False,
    config: PlannerConfig = DEFAULT_CONFIG,
) -> tuple[bool, str, list]:
    """
    Compose, place and route a factory.

    Args:
        targets: Production targets; the sample problem is used when empty
        grid_width: Grid width (default: sample problem / config width)
        grid_height: Grid height (default: sample problem / config height)
        sa_config: Annealing schedule (default: config.sa_config)
        seed: Seed for a reproducible run; None draws from OS entropy
        log_level: Diagnostic verbosity level
        use_json: Return a JSON document instead of the text report
        config: Planner configuration defaults

    Returns:
        (success: bool, result: str, diagnostics: list)
    """
    diagnostics = ProgramDiagnostics(log_level=log_level)
    diagnostics.default_stage = "cli"
    sa_config = sa_config or config.sa_config
    seed = seed if seed is not None else config.seed
    rng = seeded_source(seed) if seed is not None else system_source()

    try:
        if targets:
            buildings = compose(DEFAULT_CATALOG, targets, diagnostics)
            problem = Problem(
                grid_width or config.grid_width,
                grid_height or config.grid_height,
                tuple(buildings),
            )
        else:
            problem = replace(
                SAMPLE_PROBLEM,
                grid_width=grid_width or SAMPLE_PROBLEM.grid_width,
                grid_height=grid_height or SAMPLE_PROBLEM.grid_height,
            )

        if not problem.buildings:
            diagnostics.error("Nothing to place: targets need no buildings")
            return False, "Nothing to place", diagnostics.get_messages()

        flows = derive_flows(problem.buildings)
        baseline = random_layout(problem, rng)
        baseline_routing = route_flows(baseline, problem, flows)
        baseline_cost = compute_cost(
            flows,
            baseline_routing.path_lengths,
            baseline_routing.road_cell_count,
            sa_config.road_weight,
        )

        result = solve(problem, sa_config, rng, diagnostics=diagnostics)
    except PlannerError as e:
        diagnostics.error(e.message, stage=e.stage)
        return False, e.message, diagnostics.get_messages()

    valid = validate_layout(
        problem.grid_width, problem.grid_height, result.layout.placements, problem.buildings
    )
    if not valid:
        diagnostics.error("Solver returned an invalid layout")
        return False, "Solver returned an invalid layout", diagnostics.get_messages()

    if use_json:
        document = result_to_dict(result, problem)
        document["baseline_cost"] = baseline_cost
        return True, json.dumps(document, indent=2), diagnostics.get_messages()

    improvement = (
        (baseline_cost - result.cost) / baseline_cost * 100 if baseline_cost else 0.0
    )
    lines: List[str] = [
        f"random baseline cost: {baseline_cost:.1f}",
        f"SA cost: {result.cost:.1f}",
        f"iterations: {result.iterations}",
        f"valid: {str(valid).lower()}",
        f"improvement over random: {improvement:.1f}%",
        "",
        render_grid(result, problem),
    ]
    return True, "\n".join(lines), diagnostics.get_messages()


def setup_logging(level: str) -> None:
    """Setup logging configuration."""
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")
    logging.basicConfig(level=numeric_level, format="%(levelname)s: %(message)s")


@click.command()
@click.option(
    "-t",
    "--target",
    "targets",
    multiple=True,
    callback=parse_target,
    help="Production target as RESOURCE=VOLUME (repeatable)",
)
@click.option("--width", type=click.IntRange(min=1), help="Grid width")
@click.option("--height", type=click.IntRange(min=1), help="Grid height")
@click.option("--seed", type=int, help="Seed for a reproducible run")
@click.option(
    "--initial-temperature",
    type=float,
    default=DEFAULT_CONFIG.sa_config.initial_temperature,
    show_default=True,
)
@click.option(
    "--cooling-rate",
    type=float,
    default=DEFAULT_CONFIG.sa_config.cooling_rate,
    show_default=True,
)
@click.option(
    "--iterations-per-temp",
    type=int,
    default=DEFAULT_CONFIG.sa_config.iterations_per_temp,
    show_default=True,
)
@click.option(
    "--min-temperature",
    type=float,
    default=DEFAULT_CONFIG.sa_config.min_temperature,
    show_default=True,
)
@click.option(
    "--road-weight",
    type=float,
    default=DEFAULT_CONFIG.sa_config.road_weight,
    show_default=True,
)
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    help="Output file for the plan (default: stdout)",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=DEFAULT_CONFIG.log_level,
    help="Set the logging level",
)
@click.option("--json", "use_json", is_flag=True, help="Output a JSON summary")
def main(
    targets,
    width,
    height,
    seed,
    initial_temperature,
    cooling_rate,
    iterations_per_temp,
    min_temperature,
    road_weight,
    output,
    log_level,
    use_json,
):
    """Plan a factory layout with simulated annealing."""
    setup_logging(log_level)

    try:
        sa_config = SAConfig(
            initial_temperature=initial_temperature,
            cooling_rate=cooling_rate,
            iterations_per_temp=iterations_per_temp,
            min_temperature=min_temperature,
            road_weight=road_weight,
        )
    except PlannerError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    success, result, diagnostic_messages = plan_factory(
        targets,
        grid_width=width,
        grid_height=height,
        sa_config=sa_config,
        seed=seed,
        log_level=log_level,
        use_json=use_json,
    )
    verbose = log_level in ["debug", "info"]

    if not success:
        click.echo(f"Planning failed: {result}", err=True)
        sys.exit(1)

    if output:
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(result, encoding="utf-8")
            if verbose:
                click.echo(f"Plan saved to {output}")
        except OSError as e:
            click.echo(f"Failed to write output file: {e}", err=True)
            sys.exit(1)
    else:
        click.echo(result)

    if verbose:
        msg_count = len(diagnostic_messages) if diagnostic_messages else 0
        msg = (
            f"Planning completed with {msg_count} diagnostic(s)."
            if msg_count
            else "Planning completed successfully."
        )
        click.echo(msg, err=True)


if __name__ == "__main__":
    main()
