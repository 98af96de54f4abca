"""Progress reporting and bookkeeping shared by the coloring algorithms."""

from __future__ import annotations

import sys
from typing import IO

from coloringsolver.solution import (
    Output,
    Parameters,
    Solution,
    _format_number,
    is_bound_strictly_better,
    is_solution_strictly_better,
)


class _ComposeStream:
    """Text sink that forwards every write to several streams."""

    def __init__(self, parameters: Parameters) -> None:
        self._streams: list[IO[str]] = []
        self._owned: list[IO[str]] = []
        if parameters.output_stream is not None:
            self._streams.append(parameters.output_stream)
        elif parameters.messages_to_stdout:
            self._streams.append(sys.stdout)
        if parameters.log_path:
            log_file = open(parameters.log_path, "w", encoding="utf-8")
            self._streams.append(log_file)
            self._owned.append(log_file)
        if parameters.log_to_stderr:
            self._streams.append(sys.stderr)

    def write(self, text: str) -> int:
        for stream in self._streams:
            stream.write(text)
        return len(text)

    def flush(self) -> None:
        for stream in self._streams:
            stream.flush()

    def close(self) -> None:
        for stream in self._owned:
            stream.close()
            self._streams.remove(stream)
        self._owned.clear()


class AlgorithmFormatter:
    """Reports the progress of an algorithm and records it in its output.

    Messages go to ``parameters.output_stream`` when it is set, otherwise to
    standard output when ``parameters.messages_to_stdout`` is true; they are
    also copied to the log file and to standard error when requested.
    """

    def __init__(self, parameters: Parameters, output: Output) -> None:
        self.parameters = parameters
        self.output = output
        self._stream = _ComposeStream(parameters)

    def start(self, algorithm_name: str) -> None:
        """Record the parameters and print the instance and algorithm."""
        self.output.json["Parameters"] = self.parameters.to_json()
        if self.parameters.verbosity_level == 0:
            return
        os = self._stream
        os.write(
            "==================================\n"
            "          ColoringSolver          \n"
            "==================================\n"
            "\n"
            "Instance\n"
            "--------\n"
        )
        self.output.solution.instance.format(os, self.parameters.verbosity_level)
        os.write(
            "\n"
            "Algorithm\n"
            "---------\n"
            f"{algorithm_name}\n"
            "\n"
            "Parameters\n"
            "----------\n"
        )
        self.parameters.format(os)

    def print_header(self) -> None:
        """Print the column titles of the progress table."""
        if self.parameters.verbosity_level == 0:
            return
        self._stream.write(
            "\n"
            f"{'Time (s)':>12}{'Value':>12}{'Bound':>12}{'Gap':>12}"
            f"{'Gap (%)':>12}{'Comment':>24}\n"
            f"{'--------':>12}{'-----':>12}{'-----':>12}{'---':>12}"
            f"{'-------':>12}{'-------':>24}\n"
        )
        self.print("")

    def print(self, s: str) -> None:
        """Print one row of the progress table."""
        if self.parameters.verbosity_level == 0:
            return
        output = self.output
        self._stream.write(
            f"{output.time:>12.3f}"
            f"{output.solution_value():>12}"
            f"{_format_number(output.bound):>12}"
            f"{_format_number(output.absolute_optimality_gap()):>12}"
            f"{output.relative_optimality_gap() * 100:>12.2f}"
            f"{s:>24}\n"
        )

    def _record(self, s: str) -> None:
        self.output.time = self.parameters.timer.elapsed_time()
        self.print(s)
        self.output.json.setdefault("IntermediaryOutputs", []).append(
            self.output.to_json()
        )
        self.parameters.new_solution_callback(self.output, s)

    def update_solution(self, solution: Solution, s: str) -> None:
        """Keep a copy of the solution if it improves on the best one."""
        current = self.output.solution
        if is_solution_strictly_better(
            current.feasible(),
            current.objective_value(),
            solution.feasible(),
            solution.objective_value(),
        ):
            self.output.solution = solution.copy()
            self._record(s)

    def update_bound(self, bound: int, s: str) -> None:
        """Keep the bound if it improves on the best one."""
        if is_bound_strictly_better(self.output.bound, bound):
            self.output.bound = bound
            self._record(s)

    def end(self) -> None:
        """Record the final output and print the final statistics."""
        self.output.time = self.parameters.timer.elapsed_time()
        self.output.json["Output"] = self.output.to_json()
        if self.parameters.verbosity_level != 0:
            os = self._stream
            os.write("\nFinal statistics\n----------------\n")
            self.output.format(os)
            os.write("\nSolution\n--------\n")
            self.output.solution.format(os, self.parameters.verbosity_level)
        self._stream.close()