"""Greedy coloring algorithms."""

from __future__ import annotations

import heapq
from dataclasses import dataclass
from enum import Enum

from coloringsolver.algorithm_formatter import AlgorithmFormatter
from coloringsolver.instance import Instance
from coloringsolver.solution import Output, Parameters, Solution


class Ordering(Enum):
    """Order in which the greedy algorithm colors the vertices."""

    DEFAULT = "default"
    LARGEST_FIRST = "largestfirst"
    INCIDENCE_DEGREE = "incidencedegree"
    SMALLEST_LAST = "smallestlast"
    DYNAMIC_LARGEST_FIRST = "dynamiclargestfirst"

    @classmethod
    def parse(cls, token: str) -> "Ordering":
        """Read an ordering from its name or abbreviation."""
        try:
            return _ORDERING_TOKENS[token]
        except KeyError:
            raise ValueError(f'Unknown ordering "{token}".') from None

    def __str__(self) -> str:
        return self.value


_ORDERING_TOKENS = {
    "default": Ordering.DEFAULT,
    "largest-first": Ordering.LARGEST_FIRST,
    "lf": Ordering.LARGEST_FIRST,
    "incidence-degree": Ordering.INCIDENCE_DEGREE,
    "id": Ordering.INCIDENCE_DEGREE,
    "smallest-last": Ordering.SMALLEST_LAST,
    "sl": Ordering.SMALLEST_LAST,
    "dynamic-largest-first": Ordering.DYNAMIC_LARGEST_FIRST,
    "dlf": Ordering.DYNAMIC_LARGEST_FIRST,
}


@dataclass
class GreedyParameters(Parameters):
    """Parameters of the greedy algorithm."""

    ordering: Ordering = Ordering.DYNAMIC_LARGEST_FIRST
    reverse: bool = False


class _Buckets:
    """Vertices grouped by a key, with constant-time moves between groups."""

    def __init__(self, size: int, n: int) -> None:
        self.lists: list[list[int]] = [[] for _ in range(size)]
        self.positions: list[tuple[int, int]] = [(-1, -1)] * n

    def push(self, vertex_id: int, key: int) -> None:
        self.positions[vertex_id] = (key, len(self.lists[key]))
        self.lists[key].append(vertex_id)

    def pop(self, key: int) -> int:
        vertex_id = self.lists[key].pop()
        self.positions[vertex_id] = (-1, -1)
        return vertex_id

    def move(self, vertex_id: int, delta: int) -> None:
        key, pos = self.positions[vertex_id]
        bucket = self.lists[key]
        last = bucket[-1]
        self.positions[last] = (key, pos)
        bucket[pos] = last
        bucket.pop()
        self.push(vertex_id, key + delta)


def largest_first(instance: Instance) -> list[int]:
    """Vertices by non-increasing degree."""
    buckets: list[list[int]] = [[] for _ in range(instance.highest_degree() + 1)]
    for vertex_id in range(instance.number_of_vertices()):
        buckets[instance.degree(vertex_id)].append(vertex_id)
    ordered = []
    d_cur = instance.highest_degree()
    for _ in range(instance.number_of_vertices()):
        while not buckets[d_cur]:
            d_cur -= 1
        ordered.append(buckets[d_cur].pop())
    return ordered


def incidence_degree(instance: Instance) -> list[int]:
    """Vertices ordered by their number of already ordered neighbors."""
    n = instance.number_of_vertices()
    if n == 0:
        return []
    buckets = _Buckets(instance.highest_degree() + 1, n)
    vertex_id_best = -1
    for vertex_id in range(n):
        buckets.push(vertex_id, 0)
        if vertex_id_best == -1 or instance.degree(vertex_id_best) < instance.degree(
            vertex_id
        ):
            vertex_id_best = vertex_id
    # Start from a vertex of highest degree.
    first = buckets.lists[0]
    first[n - 1] = vertex_id_best
    first[vertex_id_best] = n - 1
    buckets.positions[vertex_id_best] = (0, n - 1)
    buckets.positions[n - 1] = (0, vertex_id_best)

    added = [False] * n
    ordered = []
    d_cur = 0
    for _ in range(n):
        while not buckets.lists[d_cur]:
            d_cur += 1
        vertex_id = buckets.pop(d_cur)
        for neighbor in instance.neighbors(vertex_id):
            if not added[neighbor]:
                buckets.move(neighbor, 1)
        added[vertex_id] = True
        ordered.append(vertex_id)
    return ordered


def smallest_last(instance: Instance) -> list[int]:
    """Vertices ordered by repeatedly taking one of smallest remaining degree."""
    n = instance.number_of_vertices()
    buckets = _Buckets(instance.highest_degree() + 1, n)
    for vertex_id in range(n):
        buckets.push(vertex_id, instance.degree(vertex_id))
    added = [False] * n
    ordered = []
    d_cur = 0
    for _ in range(n):
        if d_cur > 0 and buckets.lists[d_cur - 1]:
            d_cur -= 1
        while not buckets.lists[d_cur]:
            d_cur += 1
        vertex_id = buckets.pop(d_cur)
        for neighbor in instance.neighbors(vertex_id):
            if not added[neighbor]:
                buckets.move(neighbor, -1)
        added[vertex_id] = True
        ordered.append(vertex_id)
    return ordered


def dynamic_largest_first(instance: Instance) -> list[int]:
    """Vertices ordered by repeatedly taking one of largest remaining degree."""
    n = instance.number_of_vertices()
    buckets = _Buckets(instance.highest_degree() + 1, n)
    for vertex_id in range(n):
        buckets.push(vertex_id, instance.degree(vertex_id))
    added = [False] * n
    ordered = []
    d_cur = instance.highest_degree()
    for _ in range(n):
        while not buckets.lists[d_cur]:
            d_cur -= 1
        vertex_id = buckets.pop(d_cur)
        for neighbor in instance.neighbors(vertex_id):
            if not added[neighbor]:
                buckets.move(neighbor, -1)
        added[vertex_id] = True
        ordered.append(vertex_id)
    return ordered


_ORDERING_FUNCTIONS = {
    Ordering.LARGEST_FIRST: largest_first,
    Ordering.INCIDENCE_DEGREE: incidence_degree,
    Ordering.SMALLEST_LAST: smallest_last,
    Ordering.DYNAMIC_LARGEST_FIRST: dynamic_largest_first,
}


def _smallest_free_color(instance: Instance, solution: Solution, vertex_id: int) -> int:
    used = {
        solution.color(neighbor)
        for neighbor in instance.neighbors(vertex_id)
        if solution.contains(neighbor)
    }
    return next(
        (c for c in range(instance.number_of_vertices()) if c not in used), -1
    )


def greedy(instance: Instance, parameters: GreedyParameters | None = None) -> Output:
    """Color the vertices one by one with the smallest available color."""
    if parameters is None:
        parameters = GreedyParameters()
    output = Output(instance)
    formatter = AlgorithmFormatter(parameters, output)
    formatter.start("Greedy")
    formatter.print_header()

    solution = Solution(instance)
    ordering_function = _ORDERING_FUNCTIONS.get(parameters.ordering)
    if ordering_function is None:
        ordered_vertices = list(range(instance.number_of_vertices()))
    else:
        ordered_vertices = ordering_function(instance)
    if parameters.reverse:
        ordered_vertices = list(reversed(ordered_vertices))

    for vertex_id in ordered_vertices:
        color_id = _smallest_free_color(instance, solution, vertex_id)
        solution.set(vertex_id, color_id, False)

    formatter.update_solution(solution, "")
    formatter.end()
    return output


def greedy_dsatur(instance: Instance, parameters: Parameters | None = None) -> Output:
    """Color next the vertex whose neighbors use the most distinct colors."""
    if parameters is None:
        parameters = Parameters()
    output = Output(instance)
    formatter = AlgorithmFormatter(parameters, output)
    formatter.start("DSATUR")
    formatter.print_header()

    n = instance.number_of_vertices()
    highest_degree = instance.highest_degree()
    solution = Solution(instance)

    keys = [0.0] * n
    heap = [(0.0, vertex_id) for vertex_id in range(n)]
    if n > 0:
        vertex_id_best = max(range(n), key=lambda v: (instance.degree(v), -v))
        keys[vertex_id_best] = -1.0
        heap.append((-1.0, vertex_id_best))
    heapq.heapify(heap)
    done = [False] * n

    is_adjacent: list[list[bool]] = []
    number_of_adjacent_colors = [0] * n
    while not solution.feasible():
        key, vertex_id = heapq.heappop(heap)
        if done[vertex_id] or key != keys[vertex_id]:
            continue
        done[vertex_id] = True

        color_id = _smallest_free_color(instance, solution, vertex_id)
        if color_id >= len(is_adjacent):
            is_adjacent.append([False] * n)
        solution.set(vertex_id, color_id, False)

        for neighbor in instance.neighbors(vertex_id):
            if solution.contains(neighbor) or is_adjacent[color_id][neighbor]:
                continue
            is_adjacent[color_id][neighbor] = True
            number_of_adjacent_colors[neighbor] += 1
            value = -number_of_adjacent_colors[neighbor] - instance.degree(
                neighbor
            ) / (highest_degree + 1)
            keys[neighbor] = value
            heapq.heappush(heap, (value, neighbor))

    formatter.update_solution(solution, "")
    formatter.end()
    return output