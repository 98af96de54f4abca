"""Row weighting local search for the graph coloring problem."""

from __future__ import annotations

import random
from dataclasses import dataclass

from coloringsolver.algorithm_formatter import AlgorithmFormatter
from coloringsolver.greedy import greedy_dsatur
from coloringsolver.instance import Instance
from coloringsolver.solution import Output, Parameters, Solution

# Penalties are bounded as 16-bit signed integers.
_PENALTY_MAX = 32767


class LocalSearchRowWeightingOutput(Output):
    """Output of the row weighting local search."""

    def __init__(self, instance: Instance) -> None:
        super().__init__(instance)
        self.number_of_iterations = 0


@dataclass
class LocalSearchRowWeightingParameters(Parameters):
    """Parameters of the row weighting local search; -1 means no limit."""

    maximum_number_of_iterations: int = -1
    maximum_number_of_iterations_without_improvement: int = -1
    maximum_number_of_improvements: int = -1
    goal: int = 0
    enable_core_reduction: bool = True
    initial_solution: Solution | None = None


def _best_candidates(scored):
    """Items with the smallest score, in the order they were given."""
    best = []
    best_score = None
    for item, score in scored:
        if best_score is None or score < best_score:
            best = [item]
            best_score = score
        elif score == best_score:
            best.append(item)
    return best


def _merge_penalties(instance, solution, solution_penalties):
    """Penalty of merging each pair of color positions of a feasible solution."""
    positions = {color_id: pos for pos, color_id in enumerate(solution.colors())}
    penalties: dict[tuple[int, int], int] = {}
    for edge_id, penalty in enumerate(solution_penalties):
        vertex_id_1, vertex_id_2 = instance.edge_ends(edge_id)
        color_id_1 = solution.color(vertex_id_1)
        color_id_2 = solution.color(vertex_id_2)
        if color_id_1 == color_id_2:
            raise RuntimeError(
                f"Vertex {vertex_id_1} and its neighbor vertex {vertex_id_2} "
                f"have the same color {color_id_1}"
            )
        pos_1 = positions[color_id_1]
        pos_2 = positions[color_id_2]
        key = (min(pos_1, pos_2), max(pos_1, pos_2))
        current = penalties.get(key, 0)
        if _PENALTY_MAX - penalty > current:
            penalties[key] = current + penalty
        else:
            penalties[key] = _PENALTY_MAX
    return penalties


def local_search_row_weighting(
    instance: Instance,
    generator: random.Random,
    parameters: LocalSearchRowWeightingParameters | None = None,
) -> LocalSearchRowWeightingOutput:
    """Reduce the number of colors by merging colors and repairing conflicts.

    Each time the current coloring is conflict-free, the two colors whose
    merge costs the least weighted conflicts are merged; conflicts are then
    repaired by recoloring an end of a random conflicting edge, while the
    weights of the edges left in conflict grow.
    """
    if parameters is None:
        parameters = LocalSearchRowWeightingParameters()
    output = LocalSearchRowWeightingOutput(instance)
    formatter = AlgorithmFormatter(parameters, output)
    formatter.start("Row weighting local search")
    formatter.print_header()

    if parameters.initial_solution is not None:
        solution = parameters.initial_solution.copy()
    else:
        solution = greedy_dsatur(instance, Parameters(verbosity_level=0)).solution

    formatter.update_solution(solution, "initial solution")
    if (
        output.solution.number_of_colors() <= parameters.goal
        or output.solution.number_of_colors() == 1
    ):
        formatter.end()
        return output

    number_of_iterations_without_improvement = 0
    number_of_improvements = 0
    solution_penalties = [1] * instance.number_of_edges()

    removed_vertices: list[int] = []
    k = solution.number_of_colors()
    colors = sorted(solution.colors())

    output.number_of_iterations = 0
    while not parameters.timer.needs_to_end():
        if (
            parameters.maximum_number_of_iterations != -1
            and output.number_of_iterations >= parameters.maximum_number_of_iterations
        ):
            break
        if (
            parameters.maximum_number_of_iterations_without_improvement != -1
            and number_of_iterations_without_improvement
            >= parameters.maximum_number_of_iterations_without_improvement
        ):
            break
        if (
            parameters.maximum_number_of_improvements != -1
            and number_of_improvements >= parameters.maximum_number_of_improvements
        ):
            break
        if output.solution.number_of_colors() <= parameters.goal:
            break

        # While the solution is conflict-free, merge the two cheapest colors.
        while solution.number_of_conflicts() == 0:
            # Give a color to the vertices outside of the core.
            for vertex_id in reversed(removed_vertices):
                used = {
                    solution.color(neighbor)
                    for neighbor in instance.neighbors(vertex_id)
                    if solution.contains(neighbor)
                }
                available = [color_id for color_id in colors if color_id not in used]
                if not available:
                    raise RuntimeError(f"No available color for vertex {vertex_id}.")
                solution.set(vertex_id, available[0])
            if solution.number_of_conflicts() != 0:
                raise RuntimeError("Solution has conflicts.")

            if output.solution.number_of_colors() > solution.number_of_colors():
                formatter.update_solution(
                    solution, f"iteration {output.number_of_iterations}"
                )
                number_of_improvements += 1
            number_of_iterations_without_improvement = 0

            solution_colors = solution.colors()
            if len(solution_colors) < 2:
                formatter.end()
                return output

            penalties = _merge_penalties(instance, solution, solution_penalties)
            pairs = (
                ((pos_1, pos_2), penalties.get((pos_1, pos_2), 0))
                for pos_1 in range(len(solution_colors))
                for pos_2 in range(pos_1 + 1, len(solution_colors))
            )
            candidates = _best_candidates(pairs)
            pos_1, pos_2 = candidates[generator.randrange(len(candidates))]
            color_id_1 = solution_colors[pos_1]
            color_id_2 = solution_colors[pos_2]
            for vertex_id in range(instance.number_of_vertices()):
                if solution.color(vertex_id) == color_id_2:
                    solution.set(vertex_id, color_id_1)
            colors.remove(color_id_2)

            k -= 1
            if parameters.enable_core_reduction:
                removed_vertices = instance.compute_core(k)
                for vertex_id in removed_vertices:
                    solution.set(vertex_id, -1)

            if output.solution.number_of_colors() == 2 and not solution.feasible():
                formatter.end()
                return output

        # Draw a conflicting edge at random.
        conflicts = sorted(solution.conflicts())
        edge_id_cur = conflicts[generator.randrange(len(conflicts))]

        # Find the best recoloring of one of its ends.
        moves = []
        for vertex_id in instance.edge_ends(edge_id_cur):
            color_penalties = dict.fromkeys(colors, 0)
            for edge_id, neighbor in instance.edges(vertex_id):
                if solution.contains(neighbor):
                    neighbor_color = solution.color(neighbor)
                    color_penalties[neighbor_color] = (
                        color_penalties.get(neighbor_color, 0)
                        + solution_penalties[edge_id]
                    )
            current_color = solution.color(vertex_id)
            moves.extend(
                ((vertex_id, color_id), color_penalties[color_id])
                for color_id in colors
                if color_id != current_color
            )
        candidates = _best_candidates(moves)
        vertex_id_best, color_id_best = candidates[generator.randrange(len(candidates))]

        # Increase the weights of the edges that become conflicting.
        reduce = False
        for edge_id, neighbor in instance.edges(vertex_id_best):
            if solution.color(neighbor) == color_id_best:
                solution_penalties[edge_id] += 1
                if solution_penalties[edge_id] > _PENALTY_MAX // 2:
                    reduce = True
        if reduce:
            solution_penalties = [
                (penalty - 1) // 2 + 1 for penalty in solution_penalties
            ]

        solution.set(vertex_id_best, color_id_best)

        output.number_of_iterations += 1
        number_of_iterations_without_improvement += 1

    formatter.end()
    return output