import io
import json
import math

import pytest

from coloringsolver.instance import Instance
from coloringsolver.solution import (
    Output,
    Parameters,
    Solution,
    Timer,
    is_bound_strictly_better,
    is_solution_strictly_better,
)


@pytest.fixture
def triangle():
    return Instance(3, [(0, 1), (1, 2), (0, 2)])


def _color_all(solution, colors):
    for vertex_id, color_id in enumerate(colors):
        solution.set(vertex_id, color_id)


def test_empty_solution_is_not_feasible(triangle):
    solution = Solution(triangle)
    assert not solution.feasible()
    assert solution.number_of_vertices() == 0
    assert all(solution.color(v) == -1 for v in range(3))


def test_proper_coloring_is_feasible(triangle):
    solution = Solution(triangle)
    _color_all(solution, [0, 1, 2])
    assert solution.feasible()
    assert solution.number_of_conflicts() == 0
    assert solution.number_of_colors() == 3
    assert solution.objective_value() == solution.number_of_colors()


def test_conflicts_tracked(triangle):
    solution = Solution(triangle)
    _color_all(solution, [0, 0, 1])
    assert not solution.feasible()
    assert solution.number_of_conflicts() == len(solution.conflicts())
    conflicting_edge = next(iter(solution.conflicts()))
    assert set(triangle.edge_ends(conflicting_edge)) == {0, 1}
    assert set(solution.conflicting_vertices()) == {0, 1}


def test_recolor_removes_conflict(triangle):
    solution = Solution(triangle)
    _color_all(solution, [0, 0, 1])
    solution.set(1, 2)
    assert solution.feasible()
    assert solution.conflicting_vertices() == {}
    assert solution.conflicts() == frozenset()


def test_uncolor_removes_conflict(triangle):
    solution = Solution(triangle)
    _color_all(solution, [0, 0, 1])
    solution.set(0, -1)
    assert solution.number_of_conflicts() == 0
    assert not solution.contains(0)
    assert solution.number_of_vertices() == 2


def test_set_without_check_skips_conflicts(triangle):
    solution = Solution(triangle)
    solution.set(0, 0, False)
    solution.set(1, 0, False)
    assert solution.number_of_conflicts() == 0
    assert solution.number_of_vertices_with_color(0) == 2


def test_colors_disappear_when_empty(triangle):
    solution = Solution(triangle)
    _color_all(solution, [0, 1, 2])
    solution.set(2, 1)
    assert sorted(solution.colors()) == [0, 1]
    assert solution.number_of_vertices_with_color(2) == 0


def test_invalid_color_raises(triangle):
    solution = Solution(triangle)
    with pytest.raises(IndexError):
        solution.set(0, 3)
    with pytest.raises(IndexError):
        solution.set(0, -2)


def test_invalid_vertex_raises(triangle):
    solution = Solution(triangle)
    with pytest.raises(IndexError):
        solution.set(3, 0)


def test_copy_is_independent(triangle):
    solution = Solution(triangle)
    _color_all(solution, [0, 1, 2])
    other = solution.copy()
    other.set(0, 1)
    assert solution.color(0) == 0
    assert solution.feasible()
    assert not other.feasible()


def test_write_certificate(triangle, tmp_path):
    solution = Solution(triangle)
    _color_all(solution, [2, 0, 1])
    path = tmp_path / "certificate.txt"
    solution.write(path)
    assert path.read_text(encoding="utf-8").split() == ["2", "0", "1"]


def test_read_certificate(triangle, tmp_path):
    path = tmp_path / "certificate.txt"
    path.write_text("3\n2\n0\n1\n", encoding="utf-8")
    solution = Solution.read(triangle, path)
    assert [solution.color(v) for v in range(3)] == [2, 0, 1]
    assert solution.feasible()


def test_read_empty_path_gives_empty_solution(triangle):
    solution = Solution.read(triangle, "")
    assert solution.number_of_vertices() == 0


def test_read_short_certificate(triangle, tmp_path):
    path = tmp_path / "certificate.txt"
    path.write_text("3\n0\n", encoding="utf-8")
    with pytest.raises(ValueError):
        Solution.read(triangle, path)


def test_read_missing_certificate(triangle, tmp_path):
    with pytest.raises(OSError):
        Solution.read(triangle, tmp_path / "missing.txt")


def test_to_json(triangle):
    solution = Solution(triangle)
    _color_all(solution, [0, 1, 2])
    data = solution.to_json()
    assert data["Feasible"] is True
    assert data["NumberOfColors"] == solution.number_of_colors()
    assert data["NumberOfConflicts"] == 0


def test_format(triangle):
    solution = Solution(triangle)
    _color_all(solution, [0, 1, 2])
    text = solution.format(io.StringIO(), 2).getvalue()
    assert "Number of colors:     3" in text
    assert f"{2:>12}{2:>12}\n" in text


@pytest.mark.parametrize(
    "current_feasible, current_value, new_feasible, new_value, expected",
    [
        (False, 0, True, 5, True),
        (True, 3, False, 1, False),
        (True, 3, True, 2, True),
        (True, 3, True, 3, False),
    ],
)
def test_is_solution_strictly_better(
    current_feasible, current_value, new_feasible, new_value, expected
):
    assert (
        is_solution_strictly_better(
            current_feasible, current_value, new_feasible, new_value
        )
        is expected
    )


def test_is_bound_strictly_better():
    assert is_bound_strictly_better(2, 3)
    assert not is_bound_strictly_better(3, 3)


def test_timer():
    assert Timer().remaining_time() == math.inf
    assert not Timer().needs_to_end()
    assert Timer(0.0).needs_to_end()


def test_output_infeasible_gaps(triangle):
    output = Output(triangle)
    assert output.solution_value() == "inf"
    assert output.absolute_optimality_gap() == math.inf
    assert output.relative_optimality_gap() == math.inf


def test_output_feasible_gaps(triangle):
    output = Output(triangle)
    _color_all(output.solution, [0, 1, 2])
    output.bound = 3
    assert output.solution_value() == "3"
    assert output.absolute_optimality_gap() == 0
    assert output.relative_optimality_gap() == 0
    assert output.to_json()["Bound"] == 3


def test_output_format(triangle):
    output = Output(triangle)
    stream = io.StringIO()
    output.format(stream)
    assert stream.getvalue().startswith("Value: ".ljust(30) + "inf\n")


def test_write_json_output(triangle, tmp_path):
    output = Output(triangle)
    output.json["Output"] = output.to_json()
    path = tmp_path / "output.json"
    output.write_json_output(path)
    loaded = json.loads(path.read_text(encoding="utf-8"))
    assert loaded["Output"]["Value"] == "inf"
    assert loaded["Output"]["Solution"]["Feasible"] is False


def test_parameters_json_and_format():
    parameters = Parameters(verbosity_level=2)
    assert parameters.to_json()["VerbosityLevel"] == 2
    stream = io.StringIO()
    parameters.format(stream)
    assert "Verbosity level: " in stream.getvalue()
    assert parameters.new_solution_callback(Output(Instance(1)), "") is None