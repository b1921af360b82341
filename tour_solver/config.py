# building-tour-solver/tour_solver/config.py
"""
Configuration parameters for the exact building tour solver.

This module centralizes all tunable parameters, making it easy to:
- Point the CLI at different input/output files
- Bound how many partitions run at once
- Choose how missing distance entries are treated

Every value here can be overridden per call on TourSolver or per CLI flag.
"""

from typing import Final, Optional

# =============================================================================
# FILES
# =============================================================================

DEFAULT_INPUT_FILE: Final[str] = "input2.txt"
"""Location description read when no --input is given."""

DEFAULT_OUTPUT_FILE: Final[str] = "output2.txt"
"""File receiving the winning tour as '<route> <duration>'."""

# =============================================================================
# PARALLELISM
# =============================================================================

MAX_PARALLELISM: Optional[int] = None
"""
Upper bound on partitions per wave. None = use os.cpu_count().
The effective value is always clamped to [1, locations - 1].
"""

EXECUTION_BACKEND: str = "thread"
"""
How partitions in a wave are executed:
- "thread": one thread per partition (shares the distance table directly)
- "process": one worker process per partition (real CPU parallelism,
  the distance table is pickled into each worker)
"""

# =============================================================================
# EVALUATION
# =============================================================================

MISSING_EDGE_POLICY: str = "zero"
"""
What a tour evaluation does when a (from, to) pair has no duration:
- "zero": log it and let the edge contribute 0 to the tour
- "raise": abort the solve with MissingDistanceError
"""

MAX_LOCATIONS_WARNING: int = 12
"""
Location count above which a factorial-growth warning is logged.
Each partition enumerates (n - 2)! orderings, so 13 locations already
means 11! = 39,916,800 tours per partition.
"""

# =============================================================================
# LOGGING
# =============================================================================

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)-8s %(threadName)s %(name)s: %(message)s"
LOG_DATE_FORMAT: Final[str] = "%H:%M:%S"
