"""CSV escaping and the downloadable reports."""

import pytest

from tracker.export.csv_writer import BOM, escape_csv_field, generate_csv
from tracker.export.reports import (
    contractors_report,
    csv_response_headers,
    productivity_report,
    rankings_report,
    under_performers_report,
)


class TestEscaping:
    @pytest.mark.parametrize("value, expected", [
        (None, ""),
        ("plain", "plain"),
        (42, "42"),
        ("=SUM(A1:A2)", "'=SUM(A1:A2)"),
        ("+1", "'+1"),
        ("-5", "'-5"),
        ("@cmd", "'@cmd"),
        ("\tindent", "'\tindent"),
        ("  =padded", "'  =padded"),
        ("a,b", '"a,b"'),
        ('say "hi"', '"say ""hi"""'),
        ("two\nlines", '"two\nlines"'),
        ("cr\r", '"cr\r"'),
    ])
    def test_escape(self, value, expected):
        assert escape_csv_field(value) == expected

    def test_neutralized_value_with_comma_is_also_quoted(self):
        assert escape_csv_field("=1,2") == "\"'=1,2\""

    def test_generate_csv(self):
        content = generate_csv([["A", "B"], ["1", None], ["x,y", "=z"]])
        assert content == BOM + "A,B\n1,\n\"x,y\",'=z"


class TestReports:
    def seed(self, storage):
        storage.update_contractor(1, {"work_location": "Remote", "position": "Editor",
                                      "personal_email": "private@example.com"})
        storage.upsert_productivity_records([
            {"contractor_id": 1, "month": "Aug-25", "productive_hours": 95.0,
             "total_hours": 100.0, "productivity": 95.0},
            {"contractor_id": 3, "month": "Aug-25", "productive_hours": 60.0,
             "total_hours": 62.5, "productivity": 96.0},
            {"contractor_id": 99, "month": "Aug-25", "productive_hours": 10.123,
             "total_hours": 20.0, "productivity": 50.55},
        ])

    def test_contractors_report_leaves_out_pii(self, storage):
        self.seed(storage)
        report = contractors_report(storage)
        lines = report.content.lstrip(BOM).split("\n")
        assert report.filename == "contractors.csv"
        assert lines[0] == "ID,Name,Work Location,Position,Start Date,Status"
        assert lines[1] == "1,Avery Quinn,Remote,Editor,,active"
        assert "private@example.com" not in report.content

    def test_productivity_report_formats_numbers(self, storage):
        self.seed(storage)
        report = productivity_report(storage, "Aug-25")
        lines = report.content.lstrip(BOM).split("\n")
        assert report.filename == "productivity-Aug-25.csv"
        assert lines[0] == "Contractor ID,Name,Month,Productive Hours,Total Hours,Productivity %"
        assert "1,Avery Quinn,Aug-25,95.00,100.00,95.0" in lines
        assert "99,Unknown,Aug-25,10.12,20.00,50.5" in lines or "99,Unknown,Aug-25,10.12,20.00,50.6" in lines

    def test_rankings_report(self, storage):
        self.seed(storage)
        lines = rankings_report(storage, "Aug-25").content.lstrip(BOM).split("\n")
        assert lines == [
            "Rank,Contractor ID,Name,Month,Productive Hours",
            "1,1,Avery Quinn,Aug-25,95.00",
            "2,3,Riley Park,Aug-25,60.00",
            "3,99,Unknown,Aug-25,10.12",
        ]

    def test_under_performers_report(self, storage):
        self.seed(storage)
        lines = under_performers_report(storage, "Aug-25").content.lstrip(BOM).split("\n")
        assert lines == [
            "Contractor ID,Name,Month,Productive Hours,Productivity %,Threshold Type",
            "1,Avery Quinn,Aug-25,95.00,95.0,Full Time < 100h",
        ]

    def test_report_starts_with_bom(self, storage):
        assert contractors_report(storage).content.startswith(BOM)

    def test_response_headers(self):
        headers = csv_response_headers("rankings-Aug-25.csv")
        assert headers["Content-Type"] == "text/csv; charset=utf-8"
        assert headers["Content-Disposition"] == 'attachment; filename="rankings-Aug-25.csv"'
        assert headers["Cache-Control"] == "no-cache, no-store, must-revalidate"
