"""Static building catalog data."""

from .catalog import DEFAULT_CATALOG, SAMPLE_PROBLEM, find_template

__all__ = ["DEFAULT_CATALOG", "SAMPLE_PROBLEM", "find_template"]
