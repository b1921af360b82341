# building-tour-solver/tour_solver/worker.py
"""
Partition worker: exhaustive search for one fixed second stop.

A worker owns the pair (start, second) plus a private copy of the
remaining ids. It runs the permutation engine over that copy, scores each
ordering straight off the buffer, and keeps the best one. Nothing it
mutates is visible to other workers; the only output is the single
PartitionResult returned by run().
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from typing import List, MutableSequence, Optional, Sequence, Tuple

from .distance import DistanceTable, closed_route, evaluate_closed_tour, route_to_string
from .models import MissingEdgePolicy, PartitionResult
from .permutation import heap_permute

logger = logging.getLogger(__name__)


class PartitionWorker:
    """
    Finds the minimum-duration tour through one fixed second stop.

    Ties keep the first tour found (strict less-than on replacement). The
    traversal order is deterministic, but which of several equal tours
    wins carries no meaning.

    Attributes:
        start_id: Tour start and end (location index 0)
        second_index: Index of the fixed second stop
        second_id: Id of the fixed second stop
        remaining: Private permutation buffer of all other ids
    """

    def __init__(
        self,
        location_ids: Sequence[str],
        second_index: int,
        table: DistanceTable,
        policy: MissingEdgePolicy = MissingEdgePolicy.ZERO
    ) -> None:
        if not 1 <= second_index < len(location_ids):
            raise ValueError(
                f"Second stop index {second_index} out of range for {len(location_ids)} locations"
            )

        self.start_id: str = location_ids[0]
        self.second_index: int = second_index
        self.second_id: str = location_ids[second_index]
        self.remaining: List[str] = [
            location_id for i, location_id in enumerate(location_ids)
            if i != 0 and i != second_index
        ]
        self.table = table
        self.policy = policy

        # Best-tracking state, private to this worker
        self._best_order: Optional[Tuple[str, ...]] = None
        self._min_duration: Optional[int] = None
        self._tours_evaluated: int = 0
        self._missing: Counter = Counter()

    def _visit(self, buffer: MutableSequence[str]) -> None:
        """Score the buffer's current ordering and keep it if strictly better."""
        duration = evaluate_closed_tour(
            self.start_id, self.second_id, buffer,
            self.table, self.policy, self._missing
        )
        self._tours_evaluated += 1

        if self._min_duration is None or duration < self._min_duration:
            self._min_duration = duration
            self._best_order = tuple(buffer)

    def run(self) -> PartitionResult:
        """
        Enumerate every ordering of the remaining ids and return the best.

        Returns:
            The partition's single result

        Raises:
            MissingDistanceError: Under the RAISE policy, on the first
                missing edge
        """
        started = time.perf_counter()
        buffer = list(self.remaining)
        heap_permute(buffer, len(buffer), self._visit)
        elapsed_ms = (time.perf_counter() - started) * 1000

        route = route_to_string(closed_route(self.start_id, self.second_id, self._best_order))
        missing_total = sum(self._missing.values())

        logger.debug(
            f"Partition {self.second_id}: {self._tours_evaluated} tours in {elapsed_ms:.1f} ms"
        )
        if missing_total:
            logger.info(
                f"Partition {self.second_id}: {missing_total} missing edge lookups "
                f"({len(self._missing)} distinct pairs) counted as 0"
            )

        return PartitionResult(
            second_stop=self.second_index,
            route=route,
            duration=self._min_duration,
            tours_evaluated=self._tours_evaluated,
            missing_edges=missing_total,
            elapsed_ms=elapsed_ms,
        )


def run_partition(
    location_ids: Sequence[str],
    second_index: int,
    table: DistanceTable,
    policy: MissingEdgePolicy = MissingEdgePolicy.ZERO
) -> PartitionResult:
    """Module-level entry point so a partition can be shipped to a process pool."""
    return PartitionWorker(location_ids, second_index, table, policy).run()
