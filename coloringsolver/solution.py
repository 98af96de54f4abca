"""Solutions, outputs and parameters for the graph coloring problem."""

from __future__ import annotations

import json
import math
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Callable

from coloringsolver.instance import Instance


def _format_number(value) -> str:
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


class Solution:
    """A (possibly partial) coloring of the vertices of an instance."""

    def __init__(self, instance: Instance) -> None:
        self._instance = instance
        self._colors = [-1] * instance.number_of_vertices()
        self._color_sizes: dict[int, int] = {}
        self._number_of_colored_vertices = 0
        self._conflicts: set[int] = set()
        self._vertex_conflicts: dict[int, int] = {}
        self._total_number_of_conflicts = 0

    @classmethod
    def read(cls, instance: Instance, certificate_path) -> "Solution":
        """Read a certificate: a color count followed by one color per vertex."""
        solution = cls(instance)
        if not certificate_path:
            return solution
        tokens = Path(certificate_path).read_text(encoding="utf-8").split()
        n = instance.number_of_vertices()
        if len(tokens) < n + 1:
            raise ValueError(
                f'Certificate file "{certificate_path}" is too short.'
            )
        for vertex_id, token in enumerate(tokens[1 : n + 1]):
            solution.set(vertex_id, int(token))
        return solution

    def copy(self) -> "Solution":
        other = Solution.__new__(Solution)
        other._instance = self._instance
        other._colors = list(self._colors)
        other._color_sizes = dict(self._color_sizes)
        other._number_of_colored_vertices = self._number_of_colored_vertices
        other._conflicts = set(self._conflicts)
        other._vertex_conflicts = dict(self._vertex_conflicts)
        other._total_number_of_conflicts = self._total_number_of_conflicts
        return other

    @property
    def instance(self) -> Instance:
        return self._instance

    def feasible(self) -> bool:
        return (
            self._number_of_colored_vertices == self._instance.number_of_vertices()
            and self._total_number_of_conflicts == 0
        )

    def number_of_colors(self) -> int:
        return len(self._color_sizes)

    def objective_value(self) -> int:
        return self.number_of_colors()

    def contains(self, vertex_id: int) -> bool:
        return self._colors[vertex_id] != -1

    def color(self, vertex_id: int) -> int:
        """Color of a vertex, -1 if it has none."""
        return self._colors[vertex_id]

    def number_of_vertices(self) -> int:
        return self._number_of_colored_vertices

    def number_of_vertices_with_color(self, color_id: int) -> int:
        return self._color_sizes.get(color_id, 0)

    def number_of_conflicts(self) -> int:
        return self._total_number_of_conflicts

    def colors(self) -> list[int]:
        """Colors in use, in the order they were first used."""
        return list(self._color_sizes)

    def conflicts(self) -> frozenset[int]:
        """Ids of the edges whose ends share a color."""
        return frozenset(self._conflicts)

    def conflicting_vertices(self) -> dict[int, int]:
        """Number of conflicts of each vertex that has at least one."""
        return dict(self._vertex_conflicts)

    def _shift_vertex_conflicts(self, vertex_id: int, delta: int) -> None:
        count = self._vertex_conflicts.get(vertex_id, 0) + delta
        if count:
            self._vertex_conflicts[vertex_id] = count
        else:
            self._vertex_conflicts.pop(vertex_id, None)

    def set(self, vertex_id: int, color_id: int, check: bool = True) -> None:
        """Give a color to a vertex; -1 removes its color.

        With check=False the conflict structures are not updated, which is
        only correct when the change neither adds nor removes a conflict.
        """
        n = self._instance.number_of_vertices()
        if not 0 <= vertex_id < n:
            raise IndexError(
                f'Invalid vertex index: "{vertex_id}". Vertex indices should '
                f"belong to [0, {n - 1}]."
            )
        if color_id < -1 or color_id >= n:
            raise IndexError(
                f'Invalid color value: "{color_id}". Color values should '
                f"belong to [-1, {n - 1}]."
            )
        current = self._colors[vertex_id]
        if check:
            for edge_id, neighbor in self._instance.edges(vertex_id):
                neighbor_color = self._colors[neighbor]
                if neighbor_color != -1 and neighbor_color == current:
                    self._total_number_of_conflicts -= 1
                    self._conflicts.discard(edge_id)
                    self._shift_vertex_conflicts(vertex_id, -1)
                    self._shift_vertex_conflicts(neighbor, -1)
                if color_id != -1 and neighbor_color == color_id:
                    self._total_number_of_conflicts += 1
                    self._conflicts.add(edge_id)
                    self._shift_vertex_conflicts(vertex_id, 1)
                    self._shift_vertex_conflicts(neighbor, 1)
        if current == color_id:
            return
        if current != -1:
            self._color_sizes[current] -= 1
            if self._color_sizes[current] == 0:
                del self._color_sizes[current]
            self._number_of_colored_vertices -= 1
        if color_id != -1:
            self._color_sizes[color_id] = self._color_sizes.get(color_id, 0) + 1
            self._number_of_colored_vertices += 1
        self._colors[vertex_id] = color_id

    def format(self, stream: IO[str], verbosity_level: int = 1) -> IO[str]:
        """Write a description of the solution to a text stream."""
        if verbosity_level >= 1:
            stream.write(
                f"Number of vertices:   {self.number_of_vertices()} / "
                f"{self._instance.number_of_vertices()}\n"
                f"Number of conflicts:  {self.number_of_conflicts()}\n"
                f"Feasible:             {int(self.feasible())}\n"
                f"Number of colors:     {self.number_of_colors()}\n"
            )
        if verbosity_level >= 2:
            stream.write(
                f"\n{'Vertex':>12}{'Color':>12}\n{'------':>12}{'-----':>12}\n"
            )
            for vertex_id, color_id in enumerate(self._colors):
                stream.write(f"{vertex_id:>12}{color_id:>12}\n")
        return stream

    def write(self, certificate_path) -> None:
        """Write the color of each vertex, one per line."""
        if not certificate_path:
            return
        with open(certificate_path, "w", encoding="utf-8") as file:
            file.writelines(f"{color_id}\n" for color_id in self._colors)

    def to_json(self) -> dict:
        return {
            "NumberOfVertices": self.number_of_vertices(),
            "NumberOfConflicts": self.number_of_conflicts(),
            "Feasible": self.feasible(),
            "NumberOfColors": self.number_of_colors(),
        }


def is_solution_strictly_better(
    current_feasible: bool, current_value, new_feasible: bool, new_value
) -> bool:
    """Whether a new solution improves on the current one (minimisation)."""
    if not new_feasible:
        return False
    if not current_feasible:
        return True
    return new_value < current_value


def is_bound_strictly_better(current_bound, new_bound) -> bool:
    """Whether a new lower bound improves on the current one."""
    return new_bound > current_bound


class Timer:
    """Wall-clock timer with an optional time limit in seconds."""

    def __init__(self, time_limit: float = math.inf) -> None:
        self.time_limit = time_limit
        self._start = time.monotonic()

    def elapsed_time(self) -> float:
        return time.monotonic() - self._start

    def remaining_time(self) -> float:
        return max(0.0, self.time_limit - self.elapsed_time())

    def needs_to_end(self) -> bool:
        return self.elapsed_time() >= self.time_limit


class Output:
    """Best solution and bound found by an algorithm."""

    def __init__(self, instance: Instance) -> None:
        self.solution = Solution(instance)
        self.bound = 0
        self.time = 0.0
        self.json: dict = {}

    def solution_value(self) -> str:
        if not self.solution.feasible():
            return "inf"
        return str(self.solution.objective_value())

    def absolute_optimality_gap(self) -> float:
        if not self.solution.feasible():
            return math.inf
        return self.solution.objective_value() - self.bound

    def relative_optimality_gap(self) -> float:
        if not self.solution.feasible():
            return math.inf
        value = self.solution.objective_value()
        if value == 0:
            return 0.0
        return (value - self.bound) / value

    def to_json(self) -> dict:
        return {
            "Solution": self.solution.to_json(),
            "Value": self.solution_value(),
            "Bound": self.bound,
            "AbsoluteOptimalityGap": self.absolute_optimality_gap(),
            "RelativeOptimalityGap": self.relative_optimality_gap(),
            "Time": self.time,
        }

    def format(self, stream: IO[str]) -> None:
        width = 30
        rows = [
            ("Value: ", self.solution_value()),
            ("Bound: ", self.bound),
            ("Absolute optimality gap: ", self.absolute_optimality_gap()),
            ("Relative optimality gap (%): ", self.relative_optimality_gap() * 100),
            ("Time (s): ", self.time),
        ]
        for label, value in rows:
            stream.write(f"{label:<{width}}{_format_number(value)}\n")

    def write_json_output(self, path) -> None:
        """Write the collected JSON record to a file."""
        with open(path, "w", encoding="utf-8") as file:
            json.dump(self.json, file, indent=4)


@dataclass
class Parameters:
    """Parameters shared by all algorithms."""

    timer: Timer = field(default_factory=Timer)
    verbosity_level: int = 1
    messages_to_stdout: bool = True
    log_path: str = ""
    log_to_stderr: bool = False
    output_stream: IO[str] | None = None
    new_solution_callback: Callable[[Output, str], None] = field(
        default=lambda output, message: None
    )

    def to_json(self) -> dict:
        return {
            "TimeLimit": self.timer.time_limit,
            "VerbosityLevel": self.verbosity_level,
            "MessagesToStdout": self.messages_to_stdout,
            "LogPath": self.log_path,
            "LogToStderr": self.log_to_stderr,
        }

    def format(self, stream: IO[str]) -> None:
        width = 23
        rows = [
            ("Time limit: ", _format_number(self.timer.time_limit)),
            ("Verbosity level: ", self.verbosity_level),
            ("Standard output: ", int(self.messages_to_stdout)),
            ("Log path: ", self.log_path),
            ("Log to stderr: ", int(self.log_to_stderr)),
        ]
        stream.write("Messages\n")
        for label, value in rows:
            stream.write(f"    {label:<{width}}{value}\n")