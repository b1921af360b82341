import logging
import threading
import time

import pytest

from tour_solver import scheduler as scheduler_module
from tour_solver.distance import MissingDistanceError
from tour_solver.models import ExecutionBackend, MissingEdgePolicy, PartitionResult
from tour_solver.scheduler import WaveScheduler, plan_waves, resolve_parallelism


def test_plan_waves_chunks_in_index_order():
    assert plan_waves([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
    assert plan_waves(range(1, 4), 8) == [[1, 2, 3]]
    assert plan_waves([], 3) == []


def test_plan_waves_rejects_zero_parallelism():
    with pytest.raises(ValueError):
        plan_waves([1, 2], 0)


@pytest.mark.parametrize("count, requested, expected", [
    (0, 4, 0),
    (1, 4, 0),
    (2, 4, 1),
    (5, 100, 4),
    (5, 2, 2),
    (5, 0, 1),
])
def test_resolve_parallelism(count, requested, expected):
    assert resolve_parallelism(count, requested) == expected


def test_resolve_parallelism_defaults_to_cpu_count(monkeypatch):
    monkeypatch.setattr(scheduler_module.config, "MAX_PARALLELISM", None)
    monkeypatch.setattr(scheduler_module.utils, "available_parallelism", lambda: 3)
    assert resolve_parallelism(10) == 3


def test_resolve_parallelism_uses_configured_cap(monkeypatch):
    monkeypatch.setattr(scheduler_module.config, "MAX_PARALLELISM", 2)
    assert resolve_parallelism(10) == 2


class RecordingWorker:
    """Stand-in partition worker that records start/end events."""

    events = []
    lock = threading.Lock()

    def __init__(self, location_ids, index, table, policy):
        self.index = index

    def run(self):
        with self.lock:
            self.events.append(("start", self.index))
        # Later partitions of a wave finish first
        time.sleep(0.02 * (5 - self.index % 3))
        with self.lock:
            self.events.append(("end", self.index))
        return PartitionResult(self.index, f"route {self.index}", 10 * self.index)


def test_next_wave_starts_after_previous_wave_finishes(monkeypatch):
    RecordingWorker.events = []
    monkeypatch.setattr(scheduler_module, "PartitionWorker", RecordingWorker)

    ids = ["S", "A", "B", "C", "D", "E", "F"]
    scheduler = WaveScheduler(parallelism=3)
    aggregator = scheduler.run(ids, {})

    events = RecordingWorker.events
    position = {event: i for i, event in enumerate(events)}
    for index in (4, 5, 6):
        assert position[("start", index)] > max(position[("end", i)] for i in (1, 2, 3))

    assert scheduler.threads_used == 3
    assert scheduler.waves_run == 2
    assert len(aggregator) == 6
    assert aggregator.best().second_stop == 1


def test_wave_runs_partitions_concurrently(monkeypatch):
    RecordingWorker.events = []
    monkeypatch.setattr(scheduler_module, "PartitionWorker", RecordingWorker)

    WaveScheduler(parallelism=3).run(["S", "A", "B", "C"], {})

    first_end = next(i for i, (kind, _) in enumerate(RecordingWorker.events) if kind == "end")
    assert [kind for kind, _ in RecordingWorker.events[:first_end]] == ["start"] * 3


def test_single_location_runs_nothing():
    scheduler = WaveScheduler(parallelism=4)
    aggregator = scheduler.run(["S"], {})

    assert aggregator.best() is None
    assert scheduler.threads_used == 0
    assert scheduler.waves_run == 0


def test_three_stops_on_threads(three_stop_table):
    aggregator = WaveScheduler(parallelism=1).run(["A", "B", "C"], three_stop_table)
    assert aggregator.route_durations() == {"A B C A": 3, "A C B A": 15}


def test_three_stops_on_processes(three_stop_table):
    scheduler = WaveScheduler(parallelism=2, backend=ExecutionBackend.PROCESS)
    aggregator = scheduler.run(["A", "B", "C"], three_stop_table)

    assert aggregator.best().route == "A B C A"
    assert aggregator.best().duration == 3
    assert scheduler.waves_run == 1


@pytest.mark.parametrize("backend", [ExecutionBackend.THREAD, ExecutionBackend.PROCESS])
def test_worker_failure_propagates(three_stop_table, backend):
    del three_stop_table[("C", "A")]
    scheduler = WaveScheduler(parallelism=2, backend=backend, policy=MissingEdgePolicy.RAISE)

    with pytest.raises(MissingDistanceError) as excinfo:
        scheduler.run(["A", "B", "C"], three_stop_table)

    assert (excinfo.value.from_id, excinfo.value.to_id) == ("C", "A")


def test_partition_minima_logged_at_debug_only(three_stop_table, caplog):
    with caplog.at_level(logging.INFO, logger="tour_solver"):
        WaveScheduler(parallelism=2).run(["A", "B", "C"], three_stop_table)
    assert "A B C A : 3" not in caplog.text

    caplog.clear()
    with caplog.at_level(logging.DEBUG, logger="tour_solver"):
        WaveScheduler(parallelism=2).run(["A", "B", "C"], three_stop_table)
    assert "A B C A : 3" in caplog.text
