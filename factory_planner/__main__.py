#!/usr/bin/env python3
"""
Factory planner CLI - Entry point for the layout planner.

This module allows running the planner as:
    python -m factory_planner --target Electronics=6
    factory-planner --target Electronics=6  (when installed via pip)
"""

from factory_planner.cli import main

if __name__ == "__main__":
    main()
