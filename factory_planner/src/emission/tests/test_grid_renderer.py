"""Tests for grid_renderer.py - text and JSON output of a solve result."""

import json

from factory_planner.src.common.types import (
    BuildingTemplate,
    Layout,
    Orientation,
    Placement,
    Position,
    Problem,
    SAResult,
    Size,
)
from factory_planner.src.emission.grid_renderer import (
    placement_letter,
    render_grid,
    result_to_dict,
)

MINE = BuildingTemplate("Mine", Size(2, 1), connections=(Position(1, 0),))
DEPOT = BuildingTemplate("Depot", Size(1, 1), connections=(Position(0, 0),))
PROBLEM = Problem(5, 3, (MINE, DEPOT))


def make_result(placements, roads=(), **kwargs):
    return SAResult(
        layout=Layout(tuple(placements)),
        cost=kwargs.pop("cost", 4.0),
        iterations=kwargs.pop("iterations", 10),
        roads=tuple(roads),
        **kwargs,
    )


def corridor_result():
    return make_result(
        [Placement(0, Position(0, 0)), Placement(1, Position(4, 0))],
        roads=[Position(2, 0), Position(3, 0)],
        path_lengths=(2,),
        accepted=3,
        initial_cost=9.0,
    )


class TestPlacementLetter:
    def test_letters(self):
        assert placement_letter(0) == "A"
        assert placement_letter(25) == "Z"

    def test_wraps_after_z(self):
        assert placement_letter(26) == "A"


class TestRenderGrid:
    def test_corridor(self):
        lines = render_grid(corridor_result(), PROBLEM).split("\n")
        assert lines == [
            "   0",
            "0  Aa**b",
            "1  .....",
            "2  .....",
            "",
            "Legend:",
            "  A  Mine (2x1)",
            "  B  Depot (1x1)",
        ]

    def test_rotated_footprint_and_legend(self):
        result = make_result([Placement(0, Position(0, 0), Orientation.R90)])
        lines = render_grid(result, PROBLEM).split("\n")
        # R90 maps connection (1, 0) of a 2x1 footprint to (0, 1)
        assert lines[1] == "0  A...."
        assert lines[2] == "1  a...."
        assert lines[-1] == "  A  Mine (1x2)"

    def test_connection_on_free_cell(self):
        outside = BuildingTemplate("Kiosk", Size(1, 1), connections=(Position(1, 0),))
        problem = Problem(3, 1, (outside,))
        result = make_result([Placement(0, Position(0, 0))])
        assert render_grid(result, problem).split("\n")[1] == "0  A+."

    def test_connection_on_road(self):
        outside = BuildingTemplate("Kiosk", Size(1, 1), connections=(Position(1, 0),))
        problem = Problem(3, 1, (outside,))
        result = make_result([Placement(0, Position(0, 0))], roads=[Position(1, 0), Position(2, 0)])
        assert render_grid(result, problem).split("\n")[1] == "0  A+*"

    def test_axis_labels_every_five_columns(self):
        problem = Problem(12, 11, (DEPOT,))
        result = make_result([Placement(0, Position(0, 0))])
        lines = render_grid(result, problem).split("\n")
        assert lines[0] == "    0    5    10"
        assert lines[1] == " 0  a..........."
        assert lines[11] == "10  ............"

    def test_empty_layout(self):
        problem = Problem(2, 2, ())
        lines = render_grid(make_result([]), problem).split("\n")
        assert lines == ["   0", "0  ..", "1  ..", "", "Legend:"]


class TestResultToDict:
    def test_fields(self):
        document = result_to_dict(corridor_result(), PROBLEM)
        assert document["grid"] == {"width": 5, "height": 3}
        assert document["cost"] == 4.0
        assert document["initial_cost"] == 9.0
        assert document["iterations"] == 10
        assert document["accepted"] == 3
        assert document["path_lengths"] == [2]
        assert document["roads"] == [[2, 0], [3, 0]]
        assert document["placements"] == [
            {"building": "Mine", "x": 0, "y": 0, "orientation": 0},
            {"building": "Depot", "x": 4, "y": 0, "orientation": 0},
        ]

    def test_orientation_in_degrees(self):
        result = make_result([Placement(0, Position(0, 0), Orientation.R270)])
        document = result_to_dict(result, PROBLEM)
        assert document["placements"][0]["orientation"] == 270

    def test_json_serializable(self):
        text = json.dumps(result_to_dict(corridor_result(), PROBLEM))
        assert json.loads(text)["placements"][1]["building"] == "Depot"
