# building-tour-solver/tour_solver/report.py
"""
Tabular views of a solve for the dashboard and ad-hoc analysis.
"""

from __future__ import annotations

import pandas as pd

from .models import SolveResult

PARTITION_COLUMNS = [
    "Second Stop",
    "Route",
    "Duration",
    "Tours",
    "Missing Edges",
    "Time (ms)",
    "Best",
]


def partitions_frame(result: SolveResult) -> pd.DataFrame:
    """
    One row per partition, in second-stop order.

    The 'Best' column marks the partition holding the global minimum.
    """
    best_stop = result.best.second_stop if result.best else None
    rows = [
        {
            "Second Stop": result.location_ids[p.second_stop],
            "Route": p.route,
            "Duration": p.duration,
            "Tours": p.tours_evaluated,
            "Missing Edges": p.missing_edges,
            "Time (ms)": round(p.elapsed_ms, 2),
            "Best": p.second_stop == best_stop,
        }
        for p in result.partitions
    ]
    return pd.DataFrame(rows, columns=PARTITION_COLUMNS)


def duration_matrix_frame(result: SolveResult, table: dict) -> pd.DataFrame:
    """
    Square from/to view of a distance table, ids in input order.

    Pairs absent from the table show as NaN.
    """
    ids = result.location_ids
    data = [[table.get((origin, target)) for target in ids] for origin in ids]
    frame = pd.DataFrame(data, index=ids, columns=ids, dtype="float")
    frame.index.name = "From"
    frame.columns.name = "To"
    return frame
