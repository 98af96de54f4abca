import json

import pytest

from coloringsolver.cli import build_parser, main
from coloringsolver.greedy import Ordering
from coloringsolver.instance import Instance


def _write_cycle(tmp_path, n):
    lines = [f"p edge {n} {n}"]
    lines += [f"e {v + 1} {(v + 1) % n + 1}" for v in range(n)]
    path = tmp_path / "graph.col"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def _check_certificate(instance_path, certificate_path):
    instance = Instance.read(instance_path)
    colors = [int(line) for line in certificate_path.read_text().split()]
    assert len(colors) == instance.number_of_vertices()
    for edge_id in range(instance.number_of_edges()):
        u, v = instance.edge_ends(edge_id)
        assert colors[u] != colors[v]
    return colors


def test_build_parser_reads_options():
    args = build_parser().parse_args(
        ["-a", "greedy", "-i", "in.col", "--ordering", "sl", "--reverse", "true", "-s", "4"]
    )
    assert args.algorithm == "greedy"
    assert args.input == "in.col"
    assert args.ordering is Ordering.SMALLEST_LAST
    assert args.reverse is True
    assert args.seed == 4


def test_help_returns_one(capsys):
    assert main(["--help"]) == 1
    assert "--algorithm" in capsys.readouterr().out


def test_missing_required_option_returns_one(capsys):
    assert main(["-a", "greedy"]) == 1
    assert "--input" in capsys.readouterr().out


@pytest.mark.parametrize(
    "algorithm_args",
    [
        ["-a", "greedy", "--ordering", "lf"],
        ["-a", "dsatur"],
        ["-a", "greedy-dsatur"],
        ["-a", "local-search-row-weighting", "--maximum-number-of-iterations", "20"],
        [
            "-a",
            "local-search-row-weighting-2",
            "--maximum-number-of-iterations-without-improvement",
            "20",
            "-s",
            "7",
        ],
    ],
)
def test_main_writes_certificate_and_json(tmp_path, algorithm_args):
    instance_path = _write_cycle(tmp_path, 7)
    certificate = tmp_path / "solution.txt"
    json_path = tmp_path / "output.json"
    code = main(
        algorithm_args
        + ["-i", str(instance_path), "-v", "0", "-c", str(certificate), "-o", str(json_path)]
    )
    assert code == 0
    colors = _check_certificate(instance_path, certificate)
    data = json.loads(json_path.read_text())
    assert data["Output"]["Solution"]["Feasible"] is True
    assert data["Output"]["Solution"]["NumberOfColors"] == len(set(colors))
    assert "Parameters" in data


def test_only_write_at_the_end(tmp_path):
    instance_path = _write_cycle(tmp_path, 4)
    certificate = tmp_path / "solution.txt"
    code = main(
        ["-a", "greedy", "-i", str(instance_path), "-v", "0", "-e", "-c", str(certificate)]
    )
    assert code == 0
    colors = _check_certificate(instance_path, certificate)
    assert len(colors) == 4


def test_initial_solution_is_used(tmp_path):
    instance_path = _write_cycle(tmp_path, 4)
    initial = tmp_path / "initial.txt"
    initial.write_text("2\n0\n1\n0\n1\n", encoding="utf-8")
    certificate = tmp_path / "solution.txt"
    code = main(
        [
            "-a",
            "local-search-row-weighting",
            "-i",
            str(instance_path),
            "-v",
            "0",
            "--initial-solution",
            str(initial),
            "-c",
            str(certificate),
        ]
    )
    assert code == 0
    _check_certificate(instance_path, certificate)


def test_unknown_algorithm_raises(tmp_path):
    instance_path = _write_cycle(tmp_path, 3)
    with pytest.raises(ValueError, match="Unknown algorithm"):
        main(["-a", "nothing", "-i", str(instance_path), "-v", "0"])


def test_verbose_run_prints_report(tmp_path, capsys):
    instance_path = _write_cycle(tmp_path, 5)
    assert main(["-a", "greedy", "-i", str(instance_path)]) == 0
    out = capsys.readouterr().out
    assert "ColoringSolver" in out
    assert "Final statistics" in out
    assert "Greedy" in out