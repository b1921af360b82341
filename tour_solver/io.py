# building-tour-solver/tour_solver/io.py
"""
Reading location files and writing the winning tour.

Input format, one location per line:

    A: 0 12 7 30
    B: 12 0 4 9
    ...

The values after the colon become the location's matrix, one row per
value with the value in column 0. Row i is later read as the duration
from this location to the i-th location of the file.
"""

from __future__ import annotations

import logging
import os
import random
from typing import List, Optional

from .models import Location, SolveResult

logger = logging.getLogger(__name__)


def parse_location_line(line: str, line_number: int = 0, source: str = "<input>") -> Location:
    """
    Parse one 'id: v0 v1 ...' line.

    Raises:
        ValueError: If the line has no ':' separator, an empty id, no
            values, or a value that is not an integer
    """
    if ":" not in line:
        raise ValueError(f"{source}:{line_number}: expected 'id: values', got {line.strip()!r}")

    location_id, _, raw_values = line.partition(":")
    location_id = location_id.strip()
    if not location_id:
        raise ValueError(f"{source}:{line_number}: empty location id")

    values = raw_values.split()
    if not values:
        raise ValueError(f"{source}:{line_number}: location {location_id} has no durations")

    try:
        matrix = [[int(value)] for value in values]
    except ValueError as e:
        raise ValueError(f"{source}:{line_number}: invalid duration for {location_id}: {e}")

    return Location(location_id=location_id, time_matrix=matrix)


def load_locations(path: str) -> List[Location]:
    """
    Load all locations from a file, in file order.

    Blank lines are skipped.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: On a malformed line or a repeated id
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Input file not found: {path}")

    locations: List[Location] = []
    seen = set()
    with open(path, "r") as f:
        for line_number, line in enumerate(f, start=1):
            if not line.strip():
                continue
            location = parse_location_line(line, line_number, path)
            if location.location_id in seen:
                raise ValueError(f"{path}:{line_number}: duplicate location id {location.location_id}")
            seen.add(location.location_id)
            locations.append(location)

    logger.info(f"Loaded {len(locations)} locations from {path}")
    return locations


def format_tour(result: SolveResult) -> Optional[str]:
    """'<route> <duration>' for the best tour, or None without one."""
    if result.best is None:
        return None
    return f"{result.best.route} {result.best.duration}"


def write_tour(path: str, result: SolveResult) -> bool:
    """
    Write the best tour as '<route> <duration>'.

    Nothing is written when the solve produced no tour.

    Returns:
        True if the file was written
    """
    line = format_tour(result)
    if line is None:
        logger.info(f"No tour to write, leaving {path} untouched")
        return False

    with open(path, "w") as f:
        f.write(line)
    logger.info(f"Tour written to {path}")
    return True


def generate_locations(
    count: int,
    seed: Optional[int] = None,
    max_duration: int = 100,
    min_duration: int = 1
) -> List[Location]:
    """
    Random asymmetric instance for benchmarks and demos.

    Ids are 'L0', 'L1', ...; self durations are 0.

    Args:
        count: Number of locations
        seed: Seed for reproducible instances
        max_duration: Largest edge duration
        min_duration: Smallest edge duration
    """
    if min_duration > max_duration:
        raise ValueError(f"min_duration {min_duration} exceeds max_duration {max_duration}")

    rng = random.Random(seed)
    locations: List[Location] = []
    for i in range(count):
        matrix = [
            [0 if i == j else rng.randint(min_duration, max_duration)]
            for j in range(count)
        ]
        locations.append(Location(location_id=f"L{i}", time_matrix=matrix))
    return locations


def write_locations(path: str, locations: List[Location]) -> None:
    """Write locations back out in the input format."""
    with open(path, "w") as f:
        for location in locations:
            values = " ".join(str(row[0]) for row in location.time_matrix)
            f.write(f"{location.location_id}: {values}\n")
