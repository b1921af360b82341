# building-tour-solver/tour_solver/models.py
"""
Core domain models for the exact building tour solver.

This module defines the data structures shared by every layer:
- Location: One stop, with its raw duration matrix as read from input
- PartitionResult: The best tour one partition worker found
- SolveResult: Everything a full solve produced, best tour included
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class MissingEdgePolicy(Enum):
    """How the tour evaluator treats a pair with no distance table entry."""
    ZERO = "zero"    # Log and count the edge as 0
    RAISE = "raise"  # Raise MissingDistanceError


class ExecutionBackend(Enum):
    """Execution vehicle for the partitions of one wave."""
    THREAD = "thread"
    PROCESS = "process"


@dataclass(frozen=True)
class Location:
    """
    A stop in the tour.

    Attributes:
        location_id: Unique identifier, used in route strings
        time_matrix: Raw input values. Row i holds the value read at
            position i of this location's input line, in column 0.
    """
    location_id: str
    time_matrix: List[List[int]] = field(repr=False)

    def __str__(self) -> str:
        return self.location_id


@dataclass(frozen=True)
class PartitionResult:
    """
    Best tour of one partition (fixed start and fixed second stop).

    Attributes:
        second_stop: Index of the fixed second stop in the location list
        route: Space-joined ids 'start second p1 ... pk start'
        duration: Total duration of that route
        tours_evaluated: Orderings visited by the permutation engine
        missing_edges: Edge lookups that found no table entry
        elapsed_ms: Wall time the worker spent enumerating
    """
    second_stop: int
    route: str
    duration: int
    tours_evaluated: int = 0
    missing_edges: int = 0
    elapsed_ms: float = 0.0

    def __repr__(self) -> str:
        return f"PartitionResult({self.route!r}, {self.duration})"


@dataclass
class SolveResult:
    """
    Container for one complete solve.

    Attributes:
        location_ids: Ids in input order (index 0 is the start)
        best: Global minimum, or None when no partition ran
        partitions: One result per second stop, in index order
        threads_used: Partitions per wave
        waves: Number of waves executed
        search_ms: Time spent in the wave scheduler
        total_ms: Time including distance table construction
        table: The (from_id, to_id) -> duration table the search used
    """
    location_ids: List[str]
    best: Optional[PartitionResult]
    partitions: List[PartitionResult] = field(default_factory=list)
    threads_used: int = 0
    waves: int = 0
    search_ms: float = 0.0
    total_ms: float = 0.0
    table: Dict[Tuple[str, str], int] = field(default_factory=dict, repr=False)

    @property
    def tours_evaluated(self) -> int:
        """Total orderings visited across all partitions."""
        return sum(p.tours_evaluated for p in self.partitions)

    def route_durations(self) -> Dict[str, int]:
        """Route string -> duration for every partition minimum."""
        return {p.route: p.duration for p in self.partitions}

    def to_dict(self) -> Dict[str, object]:
        """Convert to dictionary for display."""
        return {
            "Locations": len(self.location_ids),
            "Threads Used": self.threads_used,
            "Waves": self.waves,
            "Tours Evaluated": self.tours_evaluated,
            "Best Route": self.best.route if self.best else "N/A",
            "Best Duration": self.best.duration if self.best else "N/A",
            "Search Time": f"{self.search_ms:.0f} ms",
            "Total Time": f"{self.total_ms:.0f} ms",
        }
