"""
Unit tests for CSV report output.
"""

import csv
import os

import pytest

from reviewstats.models.report import POPULARITY_COLUMNS, RATING_COLUMNS, SEARCH_COLUMNS
from reviewstats.utils.storage import CsvReportWriter, ensure_directory


def _read(path):
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def test_write_header_and_rows(tmp_path):
    """Test display titles in the header and key projection in the rows."""
    path = str(tmp_path / "popularity.csv")
    rows = [{"asin": "A1", "count": 2, "extra": "ignored"}, {"asin": "B2", "count": 1}]

    CsvReportWriter().write(path, rows, POPULARITY_COLUMNS)

    assert _read(path) == "ASIN,Review Count\nA1,2\nB2,1\n"


def test_write_empty_report_has_header_only(tmp_path):
    """Test that no rows still produces a header line."""
    path = str(tmp_path / "empty.csv")

    CsvReportWriter().write(path, [], POPULARITY_COLUMNS)

    assert _read(path) == "ASIN,Review Count\n"


def test_write_number_formatting(tmp_path):
    """Test that integral floats lose the trailing .0 and others keep full precision."""
    path = str(tmp_path / "rating.csv")
    rows = [
        {"asin": "A1", "averageRating": 4.0},
        {"asin": "B1", "averageRating": 14 / 3},
        {"asin": "C1", "averageRating": 3.5},
    ]

    CsvReportWriter().write(path, rows, RATING_COLUMNS)

    assert _read(path) == (
        "ASIN,Average Rating\n"
        "A1,4\n"
        f"B1,{14 / 3!r}\n"
        "C1,3.5\n"
    )


def test_write_escapes_special_characters(tmp_path):
    """Test quoting of commas, quotes and newlines."""
    path = str(tmp_path / "search.csv")
    text = 'Great, "really"\nwould buy again'
    rows = [{"asin": "A1", "reviewerName": "Smith, J.", "reviewText": text}]

    CsvReportWriter().write(path, rows, SEARCH_COLUMNS)

    assert '"Smith, J."' in _read(path)
    assert '""really""' in _read(path)
    with open(path, "r", encoding="utf-8", newline="") as f:
        parsed = list(csv.reader(f))
    assert parsed == [
        ["ASIN", "Reviewer Name", "Review Text"],
        ["A1", "Smith, J.", text],
    ]


def test_write_missing_field_is_empty(tmp_path):
    """Test that a missing reviewer name becomes an empty cell."""
    path = str(tmp_path / "search.csv")

    CsvReportWriter().write(path, [{"asin": "A1", "reviewText": "great"}], SEARCH_COLUMNS)

    assert _read(path).splitlines()[1] == "A1,,great"


def test_submit_and_wait(tmp_path):
    """Test that submitted writes are complete after wait()."""
    writer = CsvReportWriter(max_workers=2)
    paths = [str(tmp_path / f"report_{i}.csv") for i in range(4)]

    for i, path in enumerate(paths):
        writer.submit(path, [{"asin": f"A{i}", "count": i}], POPULARITY_COLUMNS)

    assert writer.wait() == []
    for i, path in enumerate(paths):
        assert _read(path) == f"ASIN,Review Count\nA{i},{i}\n"


def test_wait_reports_each_failure(tmp_path):
    """Test that one failed write does not stop the others."""
    writer = CsvReportWriter()
    bad_path = str(tmp_path / "missing_dir" / "bad.csv")
    good_path = str(tmp_path / "good.csv")

    writer.submit(bad_path, [{"asin": "A1", "count": 1}], POPULARITY_COLUMNS)
    writer.submit(good_path, [{"asin": "A1", "count": 1}], POPULARITY_COLUMNS)
    failures = writer.wait()

    assert len(failures) == 1
    assert failures[0][0] == bad_path
    assert isinstance(failures[0][1], OSError)
    assert os.path.exists(good_path)


def test_write_raises_synchronously(tmp_path):
    """Test that write() propagates errors to the caller."""
    with pytest.raises(OSError):
        CsvReportWriter().write(
            str(tmp_path / "missing_dir" / "bad.csv"), [], POPULARITY_COLUMNS
        )


def test_ensure_directory_creates_parents(tmp_path):
    """Test nested output directory creation, and that it is repeatable."""
    target = tmp_path / "a" / "b" / "c"

    ensure_directory(str(target))
    ensure_directory(str(target))

    assert target.is_dir()
