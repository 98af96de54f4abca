"""Command line interface of the graph coloring solver."""

from __future__ import annotations

import argparse
import random

from coloringsolver.algorithms import _parse_bool
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
from coloringsolver.solution import Output, Parameters, Solution, Timer


def build_parser() -> argparse.ArgumentParser:
    """Parser of the solver's command line options."""
    parser = argparse.ArgumentParser(
        prog="coloringsolver", description="Allowed options", add_help=False
    )
    parser.add_argument("-h", "--help", action="store_true", help="produce help message")
    parser.add_argument("-a", "--algorithm", help="set algorithm")
    parser.add_argument("-i", "--input", help="set input file (required)")
    parser.add_argument("-f", "--format", help="set input file format (default: dimacs)")
    parser.add_argument("-o", "--output", help="set JSON output file")
    parser.add_argument("--initial-solution", help="set initial solution file")
    parser.add_argument("-c", "--certificate", help="set certificate file")
    parser.add_argument("-s", "--seed", type=int, help="set seed")
    parser.add_argument("-t", "--time-limit", type=float, help="set time limit in seconds")
    parser.add_argument("-v", "--verbosity-level", type=int, help="set verbosity level")
    parser.add_argument(
        "-e",
        "--only-write-at-the-end",
        action="store_true",
        help="only write output and certificate files at the end",
    )
    parser.add_argument("-l", "--log", help="set log file")
    parser.add_argument("--log-to-stderr", action="store_true", help="write log to stderr")
    parser.add_argument("--ordering", type=Ordering.parse, help="set the ordering")
    parser.add_argument("--reverse", type=_parse_bool, help="set reverse")
    parser.add_argument(
        "--maximum-number-of-iterations",
        type=int,
        help="set the maximum number of iterations",
    )
    parser.add_argument(
        "--maximum-number-of-iterations-without-improvement",
        type=int,
        help="set the maximum number of iterations without improvement",
    )
    return parser


def _common_settings(args: argparse.Namespace) -> dict:
    settings: dict = {
        "timer": Timer(args.time_limit) if args.time_limit is not None else Timer(),
        "messages_to_stdout": True,
        "log_to_stderr": args.log_to_stderr,
    }
    if args.verbosity_level is not None:
        settings["verbosity_level"] = args.verbosity_level
    if args.log:
        settings["log_path"] = args.log
    if not args.only_write_at_the_end:
        certificate_path = args.certificate or ""
        json_output_path = args.output or ""

        def write_progress(output: Output, message: str) -> None:
            if certificate_path:
                output.solution.write(certificate_path)
            if json_output_path:
                output.write_json_output(json_output_path)

        settings["new_solution_callback"] = write_progress
    return settings


def _local_search_settings(args: argparse.Namespace, initial: Solution | None) -> dict:
    settings = _common_settings(args)
    if args.maximum_number_of_iterations is not None:
        settings["maximum_number_of_iterations"] = args.maximum_number_of_iterations
    if args.maximum_number_of_iterations_without_improvement is not None:
        settings["maximum_number_of_iterations_without_improvement"] = (
            args.maximum_number_of_iterations_without_improvement
        )
    settings["initial_solution"] = initial
    return settings


def _run(instance: Instance, args: argparse.Namespace) -> Output:
    generator = random.Random(args.seed if args.seed is not None else 0)
    initial = (
        Solution.read(instance, args.initial_solution)
        if args.initial_solution
        else None
    )
    algorithm = args.algorithm
    if algorithm == "greedy":
        parameters = GreedyParameters(**_common_settings(args))
        if args.ordering is not None:
            parameters.ordering = args.ordering
        if args.reverse is not None:
            parameters.reverse = args.reverse
        return greedy(instance, parameters)
    if algorithm in ("greedy-dsatur", "dsatur"):
        return greedy_dsatur(instance, Parameters(**_common_settings(args)))
    if algorithm == "local-search-row-weighting":
        return local_search_row_weighting(
            instance,
            generator,
            LocalSearchRowWeightingParameters(**_local_search_settings(args, initial)),
        )
    if algorithm == "local-search-row-weighting-2":
        return local_search_row_weighting_2(
            instance,
            generator,
            LocalSearchRowWeighting2Parameters(**_local_search_settings(args, initial)),
        )
    raise ValueError(f'Unknown algorithm "{algorithm}".')


def main(argv=None) -> int:
    """Solve the instance given on the command line and write the results."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.help or args.algorithm is None or args.input is None:
        parser.print_help()
        return 1

    instance = Instance.read(args.input, args.format or "dimacs")
    output = _run(instance, args)

    if args.certificate:
        output.solution.write(args.certificate)
    if args.output:
        output.write_json_output(args.output)
    return 0