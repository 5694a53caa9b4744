import csv
import io

import pytest

from app.export import results_to_csv, safe_filename, save_csv
from app.schemas import GenerationResult

RESULTS = [
    GenerationResult(
        url="https://hotel.de/spa",
        meta_title='Wellness "Deluxe" in München',
        meta_description="✓ Spa, Sauna & Pool ➤ Jetzt buchen",
    ),
    GenerationResult(url="https://hotel.de/fehler", meta_title="Error processing", meta_description="Failed to generate meta tags"),
]


def test_csv_layout():
    encoded = results_to_csv(RESULTS)
    lines = encoded.split("\n")

    assert lines[0] == "URL,Meta Title,Meta Description"
    assert lines[1] == '"https://hotel.de/spa","Wellness ""Deluxe"" in München","✓ Spa, Sauna & Pool ➤ Jetzt buchen"'
    assert encoded.endswith("\n")
    assert "\r" not in encoded


def test_csv_round_trip():
    rows = list(csv.reader(io.StringIO(results_to_csv(RESULTS))))
    assert rows[0] == ["URL", "Meta Title", "Meta Description"]
    assert [tuple(r) for r in rows[1:]] == [(r.url, r.meta_title, r.meta_description) for r in RESULTS]


def test_empty_result_set_encodes_to_empty_string():
    assert results_to_csv([]) == ""


def test_save_csv(tmp_path):
    path = save_csv(RESULTS, str(tmp_path / "out" / "metagenius_export.csv"))
    with open(path, encoding="utf-8") as f:
        assert f.read() == results_to_csv(RESULTS)


@pytest.mark.parametrize("name, expected", [
    (None, "metagenius_export.csv"),
    ("hotel.csv", "hotel.csv"),
    ("../../etc/hotel.csv", "hotel.csv"),
    ("C:\\exports\\hotel.csv", "hotel.csv"),
    ('ho"tel\r\n.csv', "hotel.csv"),
    ('"\n"', "metagenius_export.csv"),
])
def test_safe_filename(name, expected):
    assert safe_filename(name) == expected
