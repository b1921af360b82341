from concurrent.futures import ThreadPoolExecutor

import pytest

from tour_solver.aggregator import ResultAggregator
from tour_solver.models import PartitionResult


def test_empty_aggregator_has_no_best():
    aggregator = ResultAggregator(0)
    assert aggregator.best() is None
    assert aggregator.results() == []
    assert len(aggregator) == 0


def test_negative_count_means_no_slots():
    assert ResultAggregator(-1).partition_count == 0


def test_results_in_second_stop_order_and_best():
    aggregator = ResultAggregator(3)
    aggregator.publish(PartitionResult(3, "A D B C A", 9))
    aggregator.publish(PartitionResult(1, "A B C D A", 12))
    aggregator.publish(PartitionResult(2, "A C B D A", 7))

    assert [r.second_stop for r in aggregator.results()] == [1, 2, 3]
    assert aggregator.best().route == "A C B D A"
    assert aggregator.route_durations() == {"A B C D A": 12, "A C B D A": 7, "A D B C A": 9}


def test_tie_goes_to_lowest_second_stop():
    aggregator = ResultAggregator(2)
    aggregator.publish(PartitionResult(2, "A C B A", 5))
    aggregator.publish(PartitionResult(1, "A B C A", 5))
    assert aggregator.best().second_stop == 1


def test_slot_written_once():
    aggregator = ResultAggregator(2)
    aggregator.publish(PartitionResult(1, "A B C A", 5))
    with pytest.raises(ValueError):
        aggregator.publish(PartitionResult(1, "A B C A", 4))


@pytest.mark.parametrize("second_stop", [0, 3])
def test_publish_outside_slots(second_stop):
    with pytest.raises(IndexError):
        ResultAggregator(2).publish(PartitionResult(second_stop, "r", 1))


def test_concurrent_publishing_keeps_every_result():
    aggregator = ResultAggregator(64)
    with ThreadPoolExecutor(max_workers=16) as executor:
        for index in range(1, 65):
            executor.submit(aggregator.publish, PartitionResult(index, f"route {index}", 100 - index))

    assert len(aggregator) == 64
    assert aggregator.best().second_stop == 64
