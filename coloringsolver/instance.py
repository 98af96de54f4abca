"""Graph instances for the graph coloring problem."""

from __future__ import annotations

from pathlib import Path
from typing import IO, Iterable, Sequence

_FORMATS = ("dimacs", "snap")


def _format_number(value) -> str:
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


class Instance:
    """Undirected simple graph whose vertices are to be colored.

    Self-loops and repeated edges given to the constructor are dropped.
    """

    def __init__(
        self,
        number_of_vertices: int,
        edges: Iterable[tuple[int, int]] = (),
        weights: Sequence[float] | None = None,
    ) -> None:
        if number_of_vertices < 0:
            raise ValueError("The number of vertices must be non-negative.")
        self._number_of_vertices = number_of_vertices
        if weights is None:
            self._weights = [1] * number_of_vertices
        else:
            self._weights = list(weights)
            if len(self._weights) != number_of_vertices:
                raise ValueError(
                    "The number of weights must match the number of vertices."
                )
        self._edges: list[tuple[int, int]] = []
        self._incidences: list[list[tuple[int, int]]] = [
            [] for _ in range(number_of_vertices)
        ]
        self._neighbors: list[list[int]] = [[] for _ in range(number_of_vertices)]
        seen: set[tuple[int, int]] = set()
        for vertex_id_1, vertex_id_2 in edges:
            self._check_vertex(vertex_id_1)
            self._check_vertex(vertex_id_2)
            if vertex_id_1 == vertex_id_2:
                continue
            key = (min(vertex_id_1, vertex_id_2), max(vertex_id_1, vertex_id_2))
            if key in seen:
                continue
            seen.add(key)
            edge_id = len(self._edges)
            self._edges.append((vertex_id_1, vertex_id_2))
            self._incidences[vertex_id_1].append((edge_id, vertex_id_2))
            self._incidences[vertex_id_2].append((edge_id, vertex_id_1))
            self._neighbors[vertex_id_1].append(vertex_id_2)
            self._neighbors[vertex_id_2].append(vertex_id_1)
        self._highest_degree = max(
            (len(neighbors) for neighbors in self._neighbors), default=0
        )

    @classmethod
    def read(cls, path, format: str = "dimacs") -> "Instance":
        """Read an instance from a file in the 'dimacs' or 'snap' format."""
        if format not in _FORMATS:
            raise ValueError(f'Unknown instance format "{format}".')
        with open(path, encoding="utf-8") as file:
            if format == "dimacs":
                return cls._read_dimacs(file)
            return cls._read_snap(file)

    @classmethod
    def _read_dimacs(cls, file: IO[str]) -> "Instance":
        number_of_vertices = None
        edges = []
        for line in file:
            tokens = line.split()
            if not tokens:
                continue
            if tokens[0] == "p":
                number_of_vertices = int(tokens[2])
            elif tokens[0] == "e":
                edges.append((int(tokens[1]) - 1, int(tokens[2]) - 1))
        if number_of_vertices is None:
            raise ValueError("Missing problem line in DIMACS file.")
        return cls(number_of_vertices, edges)

    @classmethod
    def _read_snap(cls, file: IO[str]) -> "Instance":
        edges = []
        for line in file:
            tokens = line.split()
            if not tokens or tokens[0].startswith("#"):
                continue
            edges.append((int(tokens[0]), int(tokens[1])))
        number_of_vertices = max((max(edge) for edge in edges), default=-1) + 1
        return cls(number_of_vertices, edges)

    def _check_vertex(self, vertex_id: int) -> None:
        if not 0 <= vertex_id < self._number_of_vertices:
            raise IndexError(
                f'Invalid vertex index: "{vertex_id}". Vertex indices should '
                f"belong to [0, {self._number_of_vertices - 1}]."
            )

    def number_of_vertices(self) -> int:
        return self._number_of_vertices

    def number_of_edges(self) -> int:
        return len(self._edges)

    def neighbors(self, vertex_id: int) -> list[int]:
        """Neighbors of a vertex (read-only)."""
        self._check_vertex(vertex_id)
        return self._neighbors[vertex_id]

    def edges(self, vertex_id: int) -> list[tuple[int, int]]:
        """Pairs (edge id, neighbor) of the edges incident to a vertex (read-only)."""
        self._check_vertex(vertex_id)
        return self._incidences[vertex_id]

    def edge_ends(self, edge_id: int) -> tuple[int, int]:
        return self._edges[edge_id]

    def degree(self, vertex_id: int) -> int:
        self._check_vertex(vertex_id)
        return len(self._neighbors[vertex_id])

    def weight(self, vertex_id: int):
        self._check_vertex(vertex_id)
        return self._weights[vertex_id]

    def highest_degree(self) -> int:
        return self._highest_degree

    def density(self) -> float:
        n = self._number_of_vertices
        if n < 2:
            return 0.0
        return 2 * len(self._edges) / (n * (n - 1))

    def average_degree(self) -> float:
        if self._number_of_vertices == 0:
            return 0.0
        return 2 * len(self._edges) / self._number_of_vertices

    def compute_core(self, k: int) -> list[int]:
        """Vertices that can be colored trivially once a k-coloring of the rest exists.

        They are returned in removal order; coloring them in reverse order
        always leaves a free color among k.
        """
        degrees = [len(neighbors) for neighbors in self._neighbors]
        queue = [vertex_id for vertex_id, degree in enumerate(degrees) if degree < k]
        removed = []
        while queue:
            vertex_id = queue.pop()
            removed.append(vertex_id)
            for neighbor in self._neighbors[vertex_id]:
                if degrees[neighbor] < k:
                    continue
                degrees[neighbor] -= 1
                if degrees[neighbor] < k:
                    queue.append(neighbor)
        return removed

    def format(self, stream: IO[str], verbosity_level: int = 1) -> IO[str]:
        """Write a description of the instance to a text stream."""
        if verbosity_level >= 1:
            stream.write(
                f"Number of vertices:  {self.number_of_vertices()}\n"
                f"Number of edges:     {self.number_of_edges()}\n"
                f"Density:             {_format_number(self.density())}\n"
                f"Average degree:      {_format_number(self.average_degree())}\n"
                f"Highest degree:      {self.highest_degree()}\n"
            )
        if verbosity_level >= 2:
            stream.write(
                f"\n{'VertexId':>12}{'Weight':>12}{'Degree':>12}\n"
                f"{'--------':>12}{'------':>12}{'------':>12}\n"
            )
            for vertex_id, (weight, neighbors) in enumerate(
                zip(self._weights, self._neighbors)
            ):
                stream.write(
                    f"{vertex_id:>12}{_format_number(weight):>12}{len(neighbors):>12}\n"
                )
        if verbosity_level >= 3:
            stream.write(
                f"\n{'Edge':>12}{'Vertex 1':>12}{'Vertex 2':>12}\n"
                f"{'----':>12}{'--------':>12}{'--------':>12}\n"
            )
            for vertex_id, neighbors in enumerate(self._neighbors):
                for neighbor in neighbors:
                    if vertex_id < neighbor:
                        stream.write(f"{vertex_id:>12}{neighbor:>12}\n")
        return stream