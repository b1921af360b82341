# building-tour-solver/tour_solver/distance.py
"""
Distance table construction and tour evaluation.

The distance table maps an ordered (from_id, to_id) pair to an integer
duration. It is built once per solve and only read afterwards, so worker
threads share it without locking.

Construction rule: the duration for (from_id, to_id) comes from the
*from* location's own matrix, at the row given by to_id's position in the
location list, column 0. The to location's matrix is never consulted.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .models import Location, MissingEdgePolicy

logger = logging.getLogger(__name__)

DistanceTable = Dict[Tuple[str, str], int]


class MissingDistanceError(KeyError):
    """
    Raised when a tour needs a pair the distance table does not hold.

    args is (from_id, to_id) so the error survives pickling back from a
    worker process.
    """

    def __init__(self, from_id: str, to_id: str) -> None:
        super().__init__(from_id, to_id)
        self.from_id = from_id
        self.to_id = to_id

    def __str__(self) -> str:
        return f"no duration for {self.from_id} -> {self.to_id}"


def build_distance_table(locations: Sequence[Location], strict: bool = False) -> DistanceTable:
    """
    Build the (from_id, to_id) -> duration table for all ordered pairs.

    Self-pairs are included even though no tour uses them.

    Args:
        locations: Locations in input order
        strict: Reject matrices too short for the location count instead
            of leaving those pairs out of the table

    Returns:
        Dictionary mapping (from_id, to_id) -> duration

    Raises:
        ValueError: In strict mode, if a matrix has fewer rows than locations
    """
    table: DistanceTable = {}

    for origin in locations:
        for position, target in enumerate(locations):
            try:
                duration = origin.time_matrix[position][0]
            except IndexError:
                if strict:
                    raise ValueError(
                        f"Location {origin.location_id} has {len(origin.time_matrix)} rows, "
                        f"expected at least {len(locations)}"
                    )
                logger.debug(f"No row {position} in matrix of {origin.location_id}, "
                             f"leaving {origin.location_id} -> {target.location_id} unset")
                continue
            table[(origin.location_id, target.location_id)] = duration

    logger.debug(f"Distance table built: {len(table)} entries for {len(locations)} locations")
    return table


def edge_duration(
    table: DistanceTable,
    from_id: str,
    to_id: str,
    policy: MissingEdgePolicy = MissingEdgePolicy.ZERO,
    missing: Optional[Counter] = None
) -> int:
    """
    Look up one edge, applying the missing-entry policy.

    Args:
        table: Distance table
        from_id: Edge origin
        to_id: Edge destination
        policy: ZERO counts a missing edge as 0, RAISE aborts
        missing: Optional tally of missing pairs. When given, each pair is
            logged only the first time it is seen.

    Returns:
        The edge duration, or 0 for a missing edge under ZERO
    """
    try:
        return table[(from_id, to_id)]
    except KeyError:
        if policy is MissingEdgePolicy.RAISE:
            raise MissingDistanceError(from_id, to_id) from None

        pair = (from_id, to_id)
        if missing is None:
            logger.warning(f"Missing duration {from_id} -> {to_id}, counted as 0")
        else:
            if pair not in missing:
                logger.warning(f"Missing duration {from_id} -> {to_id}, counted as 0")
            missing[pair] += 1
        return 0


def evaluate_tour(
    tour: Sequence[str],
    table: DistanceTable,
    policy: MissingEdgePolicy = MissingEdgePolicy.ZERO,
    missing: Optional[Counter] = None
) -> int:
    """
    Sum the durations of consecutive pairs of an explicit tour.

    The tour is taken as given: a closed tour must already end with its
    start id, e.g. ['A', 'B', 'C', 'A'].

    Example:
        >>> evaluate_tour(['A', 'B', 'A'], {('A', 'B'): 2, ('B', 'A'): 3})
        5
    """
    duration = 0
    for i in range(len(tour) - 1):
        duration += edge_duration(table, tour[i], tour[i + 1], policy, missing)
    return duration


def evaluate_closed_tour(
    start: str,
    second: str,
    remainder: Iterable[str],
    table: DistanceTable,
    policy: MissingEdgePolicy = MissingEdgePolicy.ZERO,
    missing: Optional[Counter] = None
) -> int:
    """
    Duration of 'start second *remainder start' without building the tour.

    Used on the permutation buffer directly, so no list is allocated per
    ordering.
    """
    duration = edge_duration(table, start, second, policy, missing)
    previous = second
    for location_id in remainder:
        duration += edge_duration(table, previous, location_id, policy, missing)
        previous = location_id
    return duration + edge_duration(table, previous, start, policy, missing)


def route_to_string(location_ids: Iterable[str]) -> str:
    """Join ids into the space-separated route format used in output."""
    return " ".join(location_ids)


def closed_route(start: str, second: str, remainder: Iterable[str]) -> List[str]:
    """Materialize 'start second *remainder start' as a list."""
    return [start, second, *remainder, start]
