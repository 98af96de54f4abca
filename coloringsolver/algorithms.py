"""Run a coloring algorithm described by a command-like string."""

from __future__ import annotations

import argparse
import dataclasses
import random
import shlex

from coloringsolver.greedy import GreedyParameters, Ordering, greedy, greedy_dsatur
from coloringsolver.instance import Instance
from coloringsolver.local_search_row_weighting import (
    LocalSearchRowWeightingParameters,
    local_search_row_weighting,
)
from coloringsolver.local_search_row_weighting_2 import (
    LocalSearchRowWeighting2Parameters,
    local_search_row_weighting_2,
)
from coloringsolver.solution import Output, Parameters

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


def _parse_bool(text: str) -> bool:
    """Read a boolean written as 1/0, true/false, yes/no or on/off."""
    word = text.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f'Invalid boolean value "{text}".')


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises ValueError instead of exiting."""

    def error(self, message: str):
        raise ValueError(message)


def _greedy_parser() -> _ArgumentParser:
    parser = _ArgumentParser(prog="greedy", add_help=False)
    parser.add_argument("-o", "--ordering", type=Ordering.parse, default=None)
    parser.add_argument("-r", "--reverse", action="store_true")
    return parser


def _local_search_parser(name: str) -> _ArgumentParser:
    parser = _ArgumentParser(prog=name, add_help=False)
    parser.add_argument("-i", "--iterations", type=int, default=-1)
    parser.add_argument(
        "-w", "--iterations-without-improvement", type=int, default=-1
    )
    parser.add_argument("-c", "--core", type=_parse_bool, default=True)
    return parser


def _common_fields(parameters: Parameters) -> dict:
    return {
        field.name: getattr(parameters, field.name)
        for field in dataclasses.fields(Parameters)
    }


def run(
    algorithm: str,
    instance: Instance,
    goal: int = 0,
    generator: random.Random | None = None,
    parameters: Parameters | None = None,
) -> Output:
    """Run the algorithm named by the first word of 'algorithm'.

    The following words are the algorithm's own options. The settings of
    'parameters' (timer, verbosity, logging, callback) are passed on.
    """
    if parameters is None:
        parameters = Parameters()
    if generator is None:
        generator = random.Random(0)
    args = shlex.split(algorithm)
    if not args or not args[0]:
        raise ValueError("Missing algorithm.")
    name, options = args[0], args[1:]
    common = _common_fields(parameters)

    if name == "greedy":
        parsed = _greedy_parser().parse_args(options)
        greedy_parameters = GreedyParameters(**common, reverse=parsed.reverse)
        if parsed.ordering is not None:
            greedy_parameters.ordering = parsed.ordering
        return greedy(instance, greedy_parameters)
    if name == "greedy-dsatur":
        _ArgumentParser(prog=name, add_help=False).parse_args(options)
        return greedy_dsatur(instance, Parameters(**common))
    if name in ("local-search-row-weighting", "local-search-row-weighting-2"):
        parsed = _local_search_parser(name).parse_args(options)
        settings = dict(
            common,
            maximum_number_of_iterations=parsed.iterations,
            maximum_number_of_iterations_without_improvement=(
                parsed.iterations_without_improvement
            ),
            enable_core_reduction=parsed.core,
            goal=goal,
        )
        if name == "local-search-row-weighting":
            return local_search_row_weighting(
                instance, generator, LocalSearchRowWeightingParameters(**settings)
            )
        return local_search_row_weighting_2(
            instance, generator, LocalSearchRowWeighting2Parameters(**settings)
        )
    raise ValueError(f'Unknown algorithm "{name}".')