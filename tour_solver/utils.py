# building-tour-solver/tour_solver/utils.py
"""
Utility functions for the building tour solver.

Provides logging setup, parallelism detection and formatting helpers.
"""

from __future__ import annotations

import logging
import os
from typing import Union

from . import config


def configure_logging(verbose: bool = False) -> None:
    """
    Configure root logging for command-line and benchmark runs.

    Library modules only create loggers; entry points call this once.

    Args:
        verbose: DEBUG level when True, INFO otherwise
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATE_FORMAT,
    )


def available_parallelism() -> int:
    """
    Number of parallel execution units the machine reports.

    Falls back to 1 when the platform can't tell.
    """
    return os.cpu_count() or 1


def format_elapsed_ms(milliseconds: Union[int, float]) -> str:
    """
    Format a duration in milliseconds as a human-readable string.

    Example:
        >>> format_elapsed_ms(950)
        '950 ms'
        >>> format_elapsed_ms(83500)
        '1m 23.5s'
    """
    if milliseconds < 1000:
        return f"{milliseconds:.0f} ms"
    seconds = milliseconds / 1000
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - minutes * 60:.1f}s"
