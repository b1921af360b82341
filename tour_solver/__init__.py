# building-tour-solver/tour_solver/__init__.py

from .models import Location, PartitionResult, SolveResult, MissingEdgePolicy, ExecutionBackend
from .config import (
    DEFAULT_INPUT_FILE,
    DEFAULT_OUTPUT_FILE,
    MISSING_EDGE_POLICY,
    EXECUTION_BACKEND,
)
from .distance import MissingDistanceError, build_distance_table, evaluate_tour
from .permutation import heap_permute, count_orderings
from .aggregator import ResultAggregator
from .scheduler import WaveScheduler, plan_waves, resolve_parallelism
from .solver import TourSolver, solve_locations
from .io import load_locations, write_tour

__version__ = "1.0.0"

__all__ = [
    # Models
    "Location",
    "PartitionResult",
    "SolveResult",
    "MissingEdgePolicy",
    "ExecutionBackend",
    "MissingDistanceError",
    # Core
    "TourSolver",
    "WaveScheduler",
    "ResultAggregator",
    # Functions
    "solve_locations",
    "build_distance_table",
    "evaluate_tour",
    "heap_permute",
    "count_orderings",
    "plan_waves",
    "resolve_parallelism",
    "load_locations",
    "write_tour",
    # Config
    "DEFAULT_INPUT_FILE",
    "DEFAULT_OUTPUT_FILE",
    "MISSING_EDGE_POLICY",
    "EXECUTION_BACKEND",
]
