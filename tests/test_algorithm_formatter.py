import io

from coloringsolver.algorithm_formatter import AlgorithmFormatter
from coloringsolver.instance import Instance
from coloringsolver.solution import Output, Parameters, Solution


def _triangle():
    return Instance(3, [(0, 1), (1, 2), (0, 2)])


def _colored(instance, colors):
    solution = Solution(instance)
    for vertex_id, color_id in enumerate(colors):
        solution.set(vertex_id, color_id)
    return solution


def _make(verbosity_level=1, callback=None):
    stream = io.StringIO()
    kwargs = {"verbosity_level": verbosity_level, "output_stream": stream}
    if callback is not None:
        kwargs["new_solution_callback"] = callback
    parameters = Parameters(**kwargs)
    output = Output(_triangle())
    return AlgorithmFormatter(parameters, output), output, stream


def test_start_records_parameters_and_prints_banner():
    formatter, output, stream = _make()
    formatter.start("Greedy")
    assert output.json["Parameters"] == formatter.parameters.to_json()
    text = stream.getvalue()
    assert "ColoringSolver" in text
    assert "Greedy" in text
    assert "Number of vertices:  3" in text


def test_verbosity_zero_prints_nothing():
    formatter, output, stream = _make(verbosity_level=0)
    formatter.start("Greedy")
    formatter.print_header()
    formatter.update_solution(_colored(output.solution.instance, [0, 1, 2]), "")
    formatter.end()
    assert stream.getvalue() == ""
    assert output.solution.number_of_colors() == 3


def test_header_and_row_widths():
    formatter, _, stream = _make()
    formatter.print_header()
    lines = stream.getvalue().splitlines()
    assert "Time (s)" in lines[1]
    assert all(len(line) == 12 * 5 + 24 for line in lines[1:])


def test_update_solution_keeps_better_solutions_only():
    calls = []
    formatter, output, _ = _make(callback=lambda o, s: calls.append(s))
    instance = output.solution.instance
    good = _colored(instance, [0, 1, 2])
    formatter.update_solution(good, "first")
    assert output.solution.feasible()
    assert output.solution.number_of_colors() == 3
    assert calls == ["first"]
    assert len(output.json["IntermediaryOutputs"]) == 1

    infeasible = _colored(instance, [0, 0, 1])
    formatter.update_solution(infeasible, "worse")
    assert calls == ["first"]
    assert output.solution.number_of_conflicts() == 0


def test_update_solution_stores_a_copy():
    formatter, output, _ = _make()
    instance = output.solution.instance
    solution = _colored(instance, [0, 1, 2])
    formatter.update_solution(solution, "")
    solution.set(0, 1)
    assert output.solution.color(0) == 0
    assert output.solution.feasible()


def test_update_bound():
    calls = []
    formatter, output, _ = _make(callback=lambda o, s: calls.append(o.bound))
    formatter.update_bound(2, "lb")
    formatter.update_bound(1, "lb")
    assert output.bound == 2
    assert calls == [2]
    assert output.json["IntermediaryOutputs"][-1]["Bound"] == 2


def test_end_records_output():
    formatter, output, stream = _make()
    formatter.update_solution(_colored(output.solution.instance, [0, 1, 2]), "")
    formatter.end()
    assert output.json["Output"] == output.to_json()
    assert output.json["Output"]["Value"] == "3"
    assert "Final statistics" in stream.getvalue()


def test_log_file(tmp_path):
    log_path = tmp_path / "run.log"
    parameters = Parameters(
        verbosity_level=1, output_stream=io.StringIO(), log_path=str(log_path)
    )
    output = Output(_triangle())
    formatter = AlgorithmFormatter(parameters, output)
    formatter.start("Greedy")
    formatter.end()
    text = log_path.read_text(encoding="utf-8")
    assert "Final statistics" in text
    assert text == parameters.output_stream.getvalue()