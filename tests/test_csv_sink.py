import csv

import pytest

from wiki_author_edits.processing.output.csv_sink import CsvEditCountSink
from wiki_author_edits.processing.shared.error_handling import OutputSinkError


def test_writes_sorted_rows_without_header(tmp_path):
    sink = CsvEditCountSink(tmp_path / "out")
    path = sink.write({"Bob": 1, "Alice": 2, "Zoë": 3})

    assert path == tmp_path / "out" / "author_edits.csv"
    with path.open(encoding="utf-8", newline="") as f:
        rows = list(csv.reader(f))
    assert rows == [["Alice", "2"], ["Bob", "1"], ["Zoë", "3"]]


def test_usernames_with_commas_are_quoted(tmp_path):
    path = CsvEditCountSink(tmp_path).write({"Smith, John": 4})
    assert path.read_text(encoding="utf-8").strip() == '"Smith, John",4'


def test_existing_files_are_cleared(tmp_path):
    stale = tmp_path / "part-0001"
    stale.write_text("old")
    keep_dir = tmp_path / "logs"
    keep_dir.mkdir()

    CsvEditCountSink(tmp_path).write({"Alice": 1})

    assert not stale.exists()
    assert keep_dir.is_dir()
    assert sorted(p.name for p in tmp_path.iterdir()) == ["author_edits.csv", "logs"]


def test_clearing_can_be_disabled(tmp_path):
    other = tmp_path / "other.csv"
    other.write_text("keep")
    CsvEditCountSink(tmp_path, file_name="result.csv", clear_existing=False).write({"Alice": 1})
    assert other.read_text() == "keep"
    assert (tmp_path / "result.csv").exists()


def test_unwritable_destination_raises_output_sink_error(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x")
    with pytest.raises(OutputSinkError) as excinfo:
        CsvEditCountSink(blocker / "out").write({"Alice": 1})
    assert "author_edits.csv" in excinfo.value.destination
