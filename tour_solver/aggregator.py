# building-tour-solver/tour_solver/aggregator.py
"""
Result aggregator: one slot per partition, scanned once at the end.

Slot i - 1 belongs to the partition whose second stop is location index i,
so results never collide on their route strings. Publishing takes a lock;
the final scan is only meaningful after the last wave has finished.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Optional

from .models import PartitionResult


class ResultAggregator:
    """
    Collects PartitionResults from concurrently running workers.

    Attributes:
        partition_count: Number of slots (locations - 1, never negative)
    """

    def __init__(self, partition_count: int) -> None:
        self.partition_count: int = max(partition_count, 0)
        self._slots: List[Optional[PartitionResult]] = [None] * self.partition_count
        self._lock = threading.Lock()

    def publish(self, result: PartitionResult) -> None:
        """
        Store a partition's result in its reserved slot.

        Raises:
            IndexError: If the second stop has no slot
            ValueError: If the slot was already written
        """
        slot = result.second_stop - 1
        if not 0 <= slot < self.partition_count:
            raise IndexError(f"No result slot for second stop {result.second_stop}")

        with self._lock:
            if self._slots[slot] is not None:
                raise ValueError(f"Second stop {result.second_stop} already published")
            self._slots[slot] = result

    def results(self) -> List[PartitionResult]:
        """Published results in second-stop order."""
        with self._lock:
            return [r for r in self._slots if r is not None]

    def route_durations(self) -> Dict[str, int]:
        """Route string -> duration for every published result."""
        return {r.route: r.duration for r in self.results()}

    def best(self) -> Optional[PartitionResult]:
        """
        Scan all results for the minimum duration.

        Ties go to the lowest second-stop index. Returns None when nothing
        was published, e.g. for fewer than two locations.
        """
        best: Optional[PartitionResult] = None
        for result in self.results():
            if best is None or result.duration < best.duration:
                best = result
        return best

    def __len__(self) -> int:
        return len(self.results())
