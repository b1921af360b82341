# building-tour-solver/tour_solver/scheduler.py
"""
Partitioner and wave scheduler.

The candidate second stops 1 .. n-1 are cut into consecutive waves of at
most P indices. Every partition of a wave is started at once; the next
wave starts only after every partition of the current one has published.
Wave membership is static and index-ordered, so a slow partition holds
back the next wave even when other execution units are idle.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ALL_COMPLETED, Executor, ProcessPoolExecutor, ThreadPoolExecutor, wait
from typing import List, Optional, Sequence

from . import config, utils
from .aggregator import ResultAggregator
from .distance import DistanceTable
from .models import ExecutionBackend, MissingEdgePolicy, PartitionResult
from .worker import PartitionWorker, run_partition

logger = logging.getLogger(__name__)


def resolve_parallelism(location_count: int, requested: Optional[int] = None) -> int:
    """
    Partitions per wave for a given location count.

    Args:
        location_count: Total locations, start included
        requested: Desired parallelism. None = config.MAX_PARALLELISM,
            or the machine's execution units if that is unset too.

    Returns:
        Value clamped to [1, location_count - 1], or 0 when there is no
        second stop to try
    """
    candidates = location_count - 1
    if candidates < 1:
        return 0

    if requested is None:
        requested = config.MAX_PARALLELISM or utils.available_parallelism()
    return max(1, min(requested, candidates))


def plan_waves(candidates: Sequence[int], parallelism: int) -> List[List[int]]:
    """
    Split candidate indices into consecutive waves of at most `parallelism`.

    Example:
        >>> plan_waves([1, 2, 3, 4, 5], 2)
        [[1, 2], [3, 4], [5]]
    """
    if parallelism < 1:
        raise ValueError(f"Parallelism must be at least 1, got {parallelism}")
    return [list(candidates[i:i + parallelism]) for i in range(0, len(candidates), parallelism)]


class WaveScheduler:
    """
    Runs all partitions of a solve, one wave at a time.

    Attributes:
        parallelism: Requested partitions per wave (None = auto)
        backend: THREAD or PROCESS execution of a wave's partitions
        policy: Missing-edge policy handed to each worker
        threads_used: Effective partitions per wave of the last run
        waves_run: Number of waves in the last run
    """

    def __init__(
        self,
        parallelism: Optional[int] = None,
        backend: ExecutionBackend = ExecutionBackend.THREAD,
        policy: MissingEdgePolicy = MissingEdgePolicy.ZERO
    ) -> None:
        self.parallelism = parallelism
        self.backend = backend
        self.policy = policy
        self.threads_used: int = 0
        self.waves_run: int = 0

    def _make_executor(self, size: int) -> Executor:
        """A fresh executor sized to exactly one wave."""
        if self.backend is ExecutionBackend.PROCESS:
            return ProcessPoolExecutor(max_workers=size)
        return ThreadPoolExecutor(max_workers=size, thread_name_prefix="partition")

    @staticmethod
    def _run_and_publish(worker: PartitionWorker, aggregator: ResultAggregator) -> PartitionResult:
        """Thread backend task: the worker publishes its own result."""
        result = worker.run()
        aggregator.publish(result)
        return result

    def _run_wave(
        self,
        wave: List[int],
        location_ids: Sequence[str],
        table: DistanceTable,
        aggregator: ResultAggregator
    ) -> None:
        """Start every partition of the wave and block until all are done."""
        with self._make_executor(len(wave)) as executor:
            if self.backend is ExecutionBackend.PROCESS:
                # Results come back by value and are published here
                futures = [
                    executor.submit(run_partition, list(location_ids), index, table, self.policy)
                    for index in wave
                ]
            else:
                futures = [
                    executor.submit(
                        self._run_and_publish,
                        PartitionWorker(location_ids, index, table, self.policy),
                        aggregator,
                    )
                    for index in wave
                ]

            # Wave barrier
            wait(futures, return_when=ALL_COMPLETED)

        for future in futures:
            result = future.result()  # re-raises a worker failure
            if self.backend is ExecutionBackend.PROCESS:
                aggregator.publish(result)
            logger.debug(f"  {result.route} : {result.duration}")

    def run(self, location_ids: Sequence[str], table: DistanceTable) -> ResultAggregator:
        """
        Run every partition and collect the results.

        Location index 0 is the fixed start; indices 1 .. n-1 are tried as
        second stop.

        Args:
            location_ids: Ids in input order
            table: Shared read-only distance table

        Returns:
            Aggregator holding one result per second stop
        """
        aggregator = ResultAggregator(len(location_ids) - 1)
        self.threads_used = resolve_parallelism(len(location_ids), self.parallelism)
        self.waves_run = 0

        if self.threads_used == 0:
            logger.info("Fewer than two locations, nothing to search")
            return aggregator

        waves = plan_waves(range(1, len(location_ids)), self.threads_used)
        logger.info(f"Threads used: {self.threads_used} ({self.backend.value} backend, {len(waves)} waves)")

        for number, wave in enumerate(waves, start=1):
            started = time.perf_counter()
            logger.debug(f"Wave {number}/{len(waves)}: second stops {[location_ids[i] for i in wave]}")
            self._run_wave(wave, location_ids, table, aggregator)
            self.waves_run += 1
            logger.info(
                f"Wave {number}/{len(waves)} done in "
                f"{utils.format_elapsed_ms((time.perf_counter() - started) * 1000)}"
            )

        return aggregator
