"""Graph coloring: instances, solutions, greedy, DSATUR and row-weighting local search."""

__version__ = "0.1.0"