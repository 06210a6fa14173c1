from typing import Iterable, Optional

"""Planner exceptions."""


class PlannerError(Exception):
    """Base class for fatal planning failures."""

    def __init__(self, message: str, stage: Optional[str] = None) -> None:
        self.message = message
        self.stage = stage
        prefix = f"[{stage}] " if stage else ""
        super().__init__(f"{prefix}{message}")


class InvalidConfigError(PlannerError):
    """Raised for out-of-range solver settings or grid dimensions."""


class PlacementExhaustedError(PlannerError):
    """A building could not be placed within its attempt limit."""

    def __init__(self, building_name: str, attempts: int) -> None:
        self.building_name = building_name
        self.attempts = attempts
        super().__init__(
            f"failed to place building {building_name} after {attempts} attempts",
            stage="placement",
        )


class UnresolvableDemandError(PlannerError):
    """No template in the catalog produces a needed resource."""

    def __init__(self, resource) -> None:
        self.resource = resource
        name = getattr(resource, "value", resource)
        super().__init__(f"No producer found for resource: {name}", stage="composition")


class CyclicDependencyError(PlannerError):
    """The production chain contains a dependency cycle."""

    def __init__(self, resources: Iterable) -> None:
        self.resources = tuple(resources)
        names = ", ".join(str(getattr(r, "value", r)) for r in self.resources)
        super().__init__(
            f"Cycle detected in production chain involving: {names}",
            stage="composition",
        )
