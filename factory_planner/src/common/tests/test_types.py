"""
Tests for common/types.py and common/entropy.py - value types and entropy sources.
"""

import pytest

from factory_planner.src.common.entropy import random_index, seeded_source
from factory_planner.src.common.exceptions import InvalidConfigError
from factory_planner.src.common.types import (
    BuildingTemplate,
    Layout,
    Orientation,
    Placement,
    Position,
    Problem,
    Resource,
    ResourceFlow,
    SAConfig,
    Size,
)


class TestResource:
    def test_from_member_name(self):
        assert Resource.from_name("power") is Resource.POWER

    def test_from_display_value(self):
        assert Resource.from_name(" Electronics ") is Resource.ELECTRONICS

    def test_unknown_resource(self):
        with pytest.raises(ValueError, match="Unknown resource"):
            Resource.from_name("Unobtainium")

    def test_equality_by_kind(self):
        assert ResourceFlow(Resource.IRON, 3) == ResourceFlow(Resource.IRON, 3)


class TestBuildingTemplate:
    def test_output_volume(self):
        template = BuildingTemplate(
            "Mill", Size(2, 3), outputs=(ResourceFlow(Resource.IRON, 8),)
        )
        assert template.output_volume(Resource.IRON) == 8
        assert template.output_volume(Resource.POWER) == 0
        assert template.area == 6

    def test_properties_ignored_for_equality(self):
        a = BuildingTemplate("Mill", Size(1, 1), properties={"workers": 3})
        b = BuildingTemplate("Mill", Size(1, 1), properties={"workers": 9})
        assert a == b
        assert hash(a) == hash(b)


class TestLayout:
    def test_moved_returns_new_layout(self):
        layout = Layout((Placement(0, Position(0, 0)), Placement(1, Position(3, 3))))
        moved = layout.moved(1, Position(5, 5))
        assert moved.placements[1].position == Position(5, 5)
        assert layout.placements[1].position == Position(3, 3)
        assert moved.placements[0] is layout.placements[0]

    def test_rotated_keeps_position(self):
        layout = Layout((Placement(0, Position(2, 1)),))
        rotated = layout.rotated(0, Orientation.R270)
        assert rotated.placements[0].orientation == Orientation.R270
        assert rotated.placements[0].position == Position(2, 1)

    def test_len(self):
        assert len(Layout(())) == 0


class TestProblem:
    def test_rejects_empty_grid(self):
        with pytest.raises(InvalidConfigError):
            Problem(0, 5, ())

    def test_grid_area(self):
        assert Problem(4, 5, ()).grid_area == 20


class TestSAConfig:
    def test_defaults_valid(self):
        config = SAConfig()
        assert config.initial_temperature > config.min_temperature

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"initial_temperature": 0},
            {"cooling_rate": 1.0},
            {"cooling_rate": 0.0},
            {"iterations_per_temp": 0},
            {"iterations_per_temp": 2.5},
            {"min_temperature": -1},
            {"road_weight": -0.5},
            {"initial_temperature": float("inf")},
            {"initial_temperature": float("nan")},
            {"min_temperature": float("inf")},
            {"road_weight": float("inf")},
        ],
    )
    def test_rejects_out_of_range(self, kwargs):
        with pytest.raises(InvalidConfigError):
            SAConfig(**kwargs)

    def test_zero_road_weight_allowed(self):
        assert SAConfig(road_weight=0).road_weight == 0


class TestEntropy:
    def test_seeded_source_is_reproducible(self):
        first = seeded_source(42)
        second = seeded_source(42)
        assert [first() for _ in range(5)] == [second() for _ in range(5)]

    def test_seeded_source_range(self):
        rng = seeded_source(3)
        assert all(0.0 <= rng() < 1.0 for _ in range(100))

    def test_random_index_bounds(self):
        assert random_index(lambda: 0.0, 3) == 0
        assert random_index(lambda: 0.5, 3) == 1
        assert random_index(lambda: 0.9999999999999999, 3) == 2
