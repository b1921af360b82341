#!/usr/bin/env python3
# building-tour-solver/main.py
"""
Command-Line Interface for the exact building tour solver.

Reads a location file, searches every tour that starts and ends at the
first location, prints the per-partition minima and the overall winner,
and writes the winner to the output file.

Usage:
    python main.py                              # input2.txt -> output2.txt
    python main.py --input campus.txt           # Different input file
    python main.py --threads 2                  # Cap partitions per wave
    python main.py --backend process            # Use worker processes
    python main.py --missing-edge raise         # Fail on absent durations

Exit Codes:
    0: Success (including "no route" for fewer than two locations)
    1: Input loading error
    2: Solve error
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

# Ensure the package is importable when run from a checkout
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from tour_solver import config, utils
from tour_solver.distance import MissingDistanceError
from tour_solver.io import load_locations, write_tour
from tour_solver.models import Location, SolveResult
from tour_solver.solver import TourSolver


def print_header() -> None:
    """Print the CLI header."""
    print("\n" + "=" * 60)
    print("  BUILDING TOUR SOLVER - Exact Minimum Duration Tour")
    print("  Exhaustive search, partitioned by second stop")
    print("=" * 60 + "\n")


def print_partition_table(result: SolveResult) -> None:
    """
    Print every partition's best tour.

    Args:
        result: Completed solve
    """
    print("Minima per partition:")
    print("-" * 60)
    for partition in result.partitions:
        print(f"  {partition.route} : {partition.duration}")
        if partition.missing_edges:
            print(f"      ({partition.missing_edges} missing edge lookups counted as 0)")
    print("-" * 60)


def print_summary(result: SolveResult) -> None:
    """Print the winning tour and timings."""
    if result.best is None:
        print("\nNo route: at least two locations are needed.\n")
    else:
        print(f"\nMinimum Traveling Route\n{result.best.route} {result.best.duration}\n")

    print(f"Tours evaluated:             {result.tours_evaluated:,}")
    print(f"Permutation generation time: {result.search_ms:.0f} milliseconds")
    print(f"Total run time:              {result.total_ms:.0f} milliseconds")


def load_data_safe(path: str) -> Optional[List[Location]]:
    """
    Load locations with graceful error handling.

    Returns:
        Locations, or None if the file is missing or malformed
    """
    try:
        locations = load_locations(path)
    except FileNotFoundError as e:
        print(f"ERROR: {e}")
        return None
    except ValueError as e:
        print(f"ERROR: Failed to load data: {e}")
        return None

    print(f"Building IDs:\t{[location.location_id for location in locations]}")
    return locations


def run_solver_safe(solver: TourSolver, locations: List[Location]) -> Optional[SolveResult]:
    """
    Run the solver, reporting failures instead of raising.

    Returns:
        Solve result or None if the solve failed
    """
    try:
        return solver.solve(locations)
    except MissingDistanceError as e:
        print(f"ERROR: Incomplete distance table: {e}")
        return None
    except ValueError as e:
        print(f"ERROR: Solve failed: {e}")
        return None


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        description="Exact minimum-duration tour over a set of buildings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                                  # Default files
  python main.py -i campus.txt -o best.txt        # Custom files
  python main.py --threads 1                      # One partition at a time
  python main.py --strict                         # Reject short matrices
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        default=config.DEFAULT_INPUT_FILE,
        help=f"Location file (default: {config.DEFAULT_INPUT_FILE})"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=config.DEFAULT_OUTPUT_FILE,
        help=f"File for the winning tour (default: {config.DEFAULT_OUTPUT_FILE})"
    )

    parser.add_argument(
        "--threads", "-t",
        type=int,
        default=None,
        help="Partitions per wave (default: number of CPUs)"
    )

    parser.add_argument(
        "--backend", "-b",
        choices=["thread", "process"],
        default=config.EXECUTION_BACKEND,
        help=f"How a wave's partitions run (default: {config.EXECUTION_BACKEND})"
    )

    parser.add_argument(
        "--missing-edge",
        choices=["zero", "raise"],
        default=config.MISSING_EDGE_POLICY,
        help=f"Treatment of absent durations (default: {config.MISSING_EDGE_POLICY})"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject matrices with fewer rows than locations"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Skip the per-partition table"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging (waves, per-partition timings)"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    args = build_parser().parse_args(argv)

    if args.threads is not None and args.threads < 1:
        print(f"ERROR: --threads must be at least 1, got {args.threads}")
        return 1

    utils.configure_logging(verbose=args.verbose)
    if not args.verbose:
        logging.getLogger("tour_solver").setLevel(logging.WARNING)

    print_header()

    locations = load_data_safe(args.input)
    if locations is None:
        return 1

    solver = TourSolver(
        max_parallelism=args.threads,
        backend=args.backend,
        missing_edge_policy=args.missing_edge,
        strict_table=args.strict,
    )
    result = run_solver_safe(solver, locations)
    if result is None:
        return 2

    print(f"Threads used:\t{result.threads_used}\n")

    if not args.quiet:
        print_partition_table(result)

    print_summary(result)

    if write_tour(args.output, result):
        print(f"\nTour written to {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
