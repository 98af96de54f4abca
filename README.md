# coloringsolver

Heuristic solvers for the graph coloring problem: give every vertex of a graph
a color so that no two adjacent vertices share one, using as few colors as
possible.

Algorithms:

- `greedy`: sequential greedy coloring along a vertex ordering, each vertex
  getting the smallest color not used by its neighbors. Orderings:
  `default` (vertex index order), `largest-first`/`lf`,
  `incidence-degree`/`id`, `smallest-last`/`sl` and
  `dynamic-largest-first`/`dlf` (the default). The ordering can be reversed.
- `greedy-dsatur` (on the command line also `dsatur`): the DSATUR heuristic.
- `local-search-row-weighting`: starting from a feasible coloring, repeatedly
  merges the two colors whose merge costs the least weighted conflicts, then
  repairs conflicts by recoloring an end of a random conflicting edge while the
  weights of edges left in conflict grow.
- `local-search-row-weighting-2`: a variant that uncolors conflicting vertices
  and recolors one uncolored vertex at a time, with weights on vertices.

Both local searches start from a DSATUR coloring (or from a given initial
solution) and by default leave out the vertices outside the k-core, which can
always be colored once the rest is.

## Installation

```
pip install .
```

Only the standard library is needed. The `test` extra installs pytest.

## Command line

```
coloringsolver --algorithm greedy-dsatur --input graph.col
```

| Option | Meaning |
| --- | --- |
| `-h`, `--help` | print the options and exit with status 1 |
| `-a`, `--algorithm` | algorithm to run (required) |
| `-i`, `--input` | instance file (required) |
| `-f`, `--format` | instance file format: `dimacs` (default) or `snap` |
| `-o`, `--output` | write a JSON report to this file |
| `-c`, `--certificate` | write the coloring, one color per line, to this file |
| `--initial-solution` | starting coloring for the local searches |
| `-s`, `--seed` | seed of the random generator (default 0) |
| `-t`, `--time-limit` | time limit in seconds |
| `-v`, `--verbosity-level` | amount of detail printed (0 prints nothing) |
| `-e`, `--only-write-at-the-end` | write the output files only at the end |
| `-l`, `--log` | also write the messages to this file |
| `--log-to-stderr` | also write the messages to standard error |
| `--ordering` | vertex ordering for `greedy` |
| `--reverse` | `true`/`false` (or `1`/`0`, `yes`/`no`, `on`/`off`): reverse the `greedy` ordering |
| `--maximum-number-of-iterations` | iteration limit for the local searches |
| `--maximum-number-of-iterations-without-improvement` | stall limit for the local searches |

If the algorithm or the input is missing, the options are printed and the
command exits with status 1. Unless `--only-write-at-the-end` is given, the
certificate and JSON report are rewritten each time a better solution is
found, so an interrupted run still leaves its best coloring on disk.

The local searches run until their goal is reached or a limit stops them, so
give them a time or iteration limit:

```
coloringsolver -a local-search-row-weighting -i graph.col -s 1 \
    --maximum-number-of-iterations 100000 -t 60 -c coloring.txt -o report.json
```

### File formats

- `dimacs`: a `p <kind> <vertices> <edges>` line and `e <u> <v>` lines with
  vertices numbered from 1; other lines are ignored.
- `snap`: one `<u> <v>` pair per line, vertices numbered from 0; lines starting
  with `#` are ignored.

Self-loops and repeated edges are dropped.

The certificate written by `Solution.write` (and by `--certificate`) holds one
color per line, in vertex order, `-1` for an uncolored vertex. The file read by
`Solution.read` (and by `--initial-solution`) must start with one extra number,
the number of colors, which is skipped; add that first line to a written
certificate before reading it back.

The JSON report holds the keys `Parameters`, `IntermediaryOutputs` (one entry
per improvement) and `Output`, each output giving the solution summary, value,
bound, absolute and relative optimality gaps, and time.

## Library use

```python
import random

from coloringsolver.instance import Instance
from coloringsolver.greedy import GreedyParameters, Ordering, greedy, greedy_dsatur
from coloringsolver.local_search_row_weighting import (
    LocalSearchRowWeightingParameters,
    local_search_row_weighting,
)

# A 5-cycle needs three colors.
instance = Instance(5, [(0, 1), (1, 2), (2, 3), (3, 4), (4, 0)], [1, 1, 1, 1, 1])

output = greedy(
    instance,
    GreedyParameters(ordering=Ordering.parse("largest-first"), verbosity_level=0),
)
print(output.solution.number_of_colors(), output.solution.feasible())

output = greedy_dsatur(instance)  # prints a report to standard output
print([output.solution.color(v) for v in range(instance.number_of_vertices())])

output = local_search_row_weighting(
    instance,
    random.Random(0),
    LocalSearchRowWeightingParameters(maximum_number_of_iterations=1000),
)
print(output.solution.number_of_colors(), output.number_of_iterations)
```

Every parameter class derives from `Parameters` (in `coloringsolver.solution`),
which holds the `timer` (`Timer(time_limit)`), `verbosity_level`,
`output_stream` (a text stream to print to instead of standard output),
`log_path`, `log_to_stderr` and `new_solution_callback(output, message)`,
called on each improvement.

`coloringsolver.algorithms.run(algorithm, instance, goal, generator,
parameters)` runs an algorithm described by a string whose first word is its
name and whose other words are its options:

- `greedy [-o ORDERING] [-r]`
- `greedy-dsatur`
- `local-search-row-weighting [-i ITERATIONS] [-w ITERATIONS_WITHOUT_IMPROVEMENT] [-c BOOL]`
- `local-search-row-weighting-2` with the same options

```python
from coloringsolver.algorithms import run
from coloringsolver.solution import Parameters

output = run("greedy -o sl -r", instance, parameters=Parameters(verbosity_level=0))
```

An unknown algorithm or option raises `ValueError`.

`Instance` also offers `degree`, `neighbors`, `edges`, `density`,
`average_degree`, `highest_degree` and `compute_core(k)`; `Solution` tracks its
conflicts (`number_of_conflicts`, `conflicts`, `conflicting_vertices`) as
colors are set with `set(vertex_id, color_id)`.

## What it does not do

There are no exact solvers and no lower-bounding methods: the bound in every
output stays at 0, so the reported optimality gaps only measure the number of
colors. Graphs are read from `dimacs` and `snap` files or built in code; no
other formats are supported.