import pytest

from tour_solver.models import Location


def make_locations(ids, durations):
    """
    Locations whose matrices encode durations[(from, to)].

    Pairs missing from durations get no row, which leaves them out of the
    built distance table.
    """
    locations = []
    for origin in ids:
        matrix = []
        for target in ids:
            if (origin, target) not in durations and origin != target:
                break
            matrix.append([durations.get((origin, target), 0)])
        locations.append(Location(location_id=origin, time_matrix=matrix))
    return locations


THREE_STOP_DURATIONS = {
    ("A", "B"): 1, ("B", "C"): 1, ("C", "A"): 1,
    ("A", "C"): 5, ("C", "B"): 5, ("B", "A"): 5,
}


@pytest.fixture
def three_stops():
    return make_locations(["A", "B", "C"], THREE_STOP_DURATIONS)


@pytest.fixture
def three_stop_table():
    table = dict(THREE_STOP_DURATIONS)
    for location_id in "ABC":
        table[(location_id, location_id)] = 0
    return table
