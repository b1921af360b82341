# building-tour-solver/tour_solver/solver.py
"""
Solver facade for the exact building tour search.

TourSolver ties the pieces together:
1. Build the distance table once from the loaded locations
2. Drive the wave scheduler over every second stop
3. Scan the aggregator for the global minimum
4. Time the search and the whole solve

The search is a complete enumeration with no pruning: each of the n - 1
partitions visits (n - 2)! tours, so it is only practical for small n.
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Sequence, Union

from . import config
from .distance import build_distance_table
from .models import ExecutionBackend, Location, MissingEdgePolicy, SolveResult
from .permutation import count_orderings
from .scheduler import WaveScheduler

logger = logging.getLogger(__name__)


class TourSolver:
    """
    Finds the minimum-duration closed tour starting at the first location.

    Attributes:
        max_parallelism: Partitions per wave (None = config / CPU count)
        backend: Thread or process execution of each wave
        missing_edge_policy: Treatment of pairs absent from the table
        strict_table: Reject short matrices while building the table
    """

    def __init__(
        self,
        max_parallelism: Optional[int] = None,
        backend: Union[ExecutionBackend, str, None] = None,
        missing_edge_policy: Union[MissingEdgePolicy, str, None] = None,
        strict_table: bool = False
    ) -> None:
        self.max_parallelism = max_parallelism if max_parallelism is not None else config.MAX_PARALLELISM
        self.backend = ExecutionBackend(backend or config.EXECUTION_BACKEND)
        self.missing_edge_policy = MissingEdgePolicy(missing_edge_policy or config.MISSING_EDGE_POLICY)
        self.strict_table = strict_table

    def solve(self, locations: Sequence[Location]) -> SolveResult:
        """
        Run the full search over the given locations.

        Args:
            locations: Locations in input order; index 0 is the start

        Returns:
            SolveResult with the global minimum (None for fewer than two
            locations) and every partition's best tour

        Raises:
            ValueError: If strict_table is set and a matrix is too short
            MissingDistanceError: Under the RAISE policy
        """
        started = time.perf_counter()
        location_ids = [location.location_id for location in locations]
        logger.info(f"Building IDs: {location_ids}")

        if len(location_ids) > config.MAX_LOCATIONS_WARNING:
            logger.warning(
                f"{len(location_ids)} locations: each partition enumerates "
                f"{count_orderings(len(location_ids)):,} tours, this will take a while"
            )

        table = build_distance_table(locations, strict=self.strict_table)

        scheduler = WaveScheduler(
            parallelism=self.max_parallelism,
            backend=self.backend,
            policy=self.missing_edge_policy,
        )
        search_started = time.perf_counter()
        aggregator = scheduler.run(location_ids, table)
        search_ms = (time.perf_counter() - search_started) * 1000

        best = aggregator.best()
        if best is None:
            logger.info("No route found")
        else:
            logger.info(f"Minimum traveling route: {best.route} {best.duration}")

        return SolveResult(
            location_ids=location_ids,
            best=best,
            partitions=aggregator.results(),
            threads_used=scheduler.threads_used,
            waves=scheduler.waves_run,
            search_ms=search_ms,
            total_ms=(time.perf_counter() - started) * 1000,
            table=table,
        )


def solve_locations(locations: Sequence[Location], **kwargs) -> SolveResult:
    """Convenience wrapper: TourSolver(**kwargs).solve(locations)."""
    return TourSolver(**kwargs).solve(locations)
