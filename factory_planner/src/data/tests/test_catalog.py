"""
Tests for data/catalog.py - sample building templates.
"""

import pytest

from factory_planner.src.common.types import Resource
from factory_planner.src.data.catalog import (
    CHIP_FAB,
    DEFAULT_CATALOG,
    POWER_PLANT,
    SAMPLE_PROBLEM,
    find_template,
)


def on_perimeter(template, point):
    width, height = template.size.width, template.size.height
    inside = 0 <= point.x < width and 0 <= point.y < height
    edge = point.x in (0, width - 1) or point.y in (0, height - 1)
    return inside and edge


class TestCatalog:
    def test_unique_names(self):
        names = [template.name for template in DEFAULT_CATALOG]
        assert len(names) == len(set(names))

    @pytest.mark.parametrize("template", DEFAULT_CATALOG, ids=lambda t: t.name)
    def test_connections_on_perimeter(self, template):
        assert template.connections
        assert all(on_perimeter(template, point) for point in template.connections)

    @pytest.mark.parametrize("template", DEFAULT_CATALOG, ids=lambda t: t.name)
    def test_positive_volumes(self, template):
        assert all(flow.volume > 0 for flow in template.inputs + template.outputs)

    def test_nothing_produces_hydrogen(self):
        assert all(t.output_volume(Resource.HYDROGEN) == 0 for t in DEFAULT_CATALOG)

    def test_properties_do_not_affect_equality(self):
        assert POWER_PLANT.properties == {"workers": 4}
        assert hash(POWER_PLANT) == hash(POWER_PLANT)


class TestSampleProblem:
    def test_four_building_chain(self):
        assert SAMPLE_PROBLEM.grid_width == 20
        assert SAMPLE_PROBLEM.grid_height == 20
        assert [b.name for b in SAMPLE_PROBLEM.buildings] == [
            "Power Plant",
            "Steel Mill",
            "Alloy Foundry",
            "Electronics Factory",
        ]


class TestFindTemplate:
    def test_case_insensitive(self):
        assert find_template("chip fab") is CHIP_FAB
        assert find_template("  Power Plant ") is POWER_PLANT

    def test_unknown(self):
        assert find_template("Fusion Reactor") is None
