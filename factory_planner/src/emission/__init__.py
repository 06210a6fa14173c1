"""Rendering of solve results."""

from .grid_renderer import render_grid, result_to_dict, placement_letter

__all__ = ["render_grid", "result_to_dict", "placement_letter"]
