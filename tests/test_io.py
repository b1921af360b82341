import pytest

from tour_solver.io import (
    format_tour,
    generate_locations,
    load_locations,
    parse_location_line,
    write_locations,
    write_tour,
)
from tour_solver.models import PartitionResult, SolveResult


def test_parse_line_puts_values_in_column_zero():
    location = parse_location_line("Library:  0 12\t7 ")
    assert location.location_id == "Library"
    assert location.time_matrix == [[0], [12], [7]]


@pytest.mark.parametrize("line, message", [
    ("A 1 2 3", "expected 'id: values'"),
    (": 1 2", "empty location id"),
    ("A:", "has no durations"),
    ("A: 1 two 3", "invalid duration"),
])
def test_parse_line_errors(line, message):
    with pytest.raises(ValueError, match=message):
        parse_location_line(line, 4, "campus.txt")


def test_load_locations_skips_blank_lines(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text("A: 0 1 5\n\nB: 5 0 1\nC: 1 5 0\n")

    locations = load_locations(str(path))

    assert [l.location_id for l in locations] == ["A", "B", "C"]
    assert locations[1].time_matrix == [[5], [0], [1]]


def test_load_reports_line_of_error(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text("A: 0 1\nB 1 0\n")
    with pytest.raises(ValueError, match=":2:"):
        load_locations(str(path))


def test_load_rejects_duplicate_ids(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text("A: 0 1\nA: 1 0\n")
    with pytest.raises(ValueError, match="duplicate location id A"):
        load_locations(str(path))


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_locations(str(tmp_path / "nope.txt"))


def test_write_tour(tmp_path):
    result = SolveResult(["A", "B", "C"], PartitionResult(1, "A B C A", 3))
    path = tmp_path / "out.txt"

    assert write_tour(str(path), result) is True
    assert path.read_text() == "A B C A 3"


def test_write_tour_without_result(tmp_path):
    path = tmp_path / "out.txt"
    result = SolveResult(["A"], None)

    assert format_tour(result) is None
    assert write_tour(str(path), result) is False
    assert not path.exists()


def test_generate_locations_is_reproducible():
    first = generate_locations(5, seed=3, max_duration=20)
    second = generate_locations(5, seed=3, max_duration=20)

    assert first == second
    assert [l.location_id for l in first] == ["L0", "L1", "L2", "L3", "L4"]
    for i, location in enumerate(first):
        assert location.time_matrix[i] == [0]
        assert all(1 <= row[0] <= 20 for j, row in enumerate(location.time_matrix) if j != i)


def test_generate_locations_rejects_bad_range():
    with pytest.raises(ValueError):
        generate_locations(3, min_duration=10, max_duration=5)


def test_written_locations_load_back(tmp_path):
    locations = generate_locations(4, seed=8)
    path = tmp_path / "instance.txt"
    write_locations(str(path), locations)
    assert load_locations(str(path)) == locations
