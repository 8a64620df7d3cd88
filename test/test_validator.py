"""Business-rule checks on parsed productivity rows."""

from tracker.ingest.parser import ProductivityRow
from tracker.ingest.validator import validate_employee_data, validate_productivity_rows


def make_row(row_number=2, emp_no=1, month="Aug-25", productive="100", total=120.0, productivity=90.0):
    return ProductivityRow(
        row_number=row_number,
        emp_no=emp_no,
        name="Avery Quinn",
        month=month,
        productive_hours_raw=productive,
        productive_hours=float(productive) if ":" not in productive else 0.0,
        total_hours=total,
        productivity=productivity,
    )


class TestValidator:
    def test_clean_rows_pass(self):
        report = validate_productivity_rows([make_row(), make_row(row_number=3, emp_no=999)])
        assert report.passed
        assert report.messages == []

    def test_employee_number_range(self):
        messages = validate_employee_data([make_row(emp_no=0), make_row(row_number=3, emp_no=1000)])
        assert messages == [
            "Row 2: Employee number should be between 1 and 999",
            "Row 3: Employee number should be between 1 and 999",
        ]

    def test_bad_month_abbreviation_is_named(self):
        messages = validate_employee_data([make_row(month="Agu-25")])
        assert messages == [
            'Row 2: Invalid month abbreviation "Agu". Use standard 3-letter abbreviations (Jan, Feb, etc.)'
        ]

    def test_productivity_and_hours_ranges(self):
        messages = validate_employee_data([make_row(productivity=120.0, total=-1.0, productive="0")])
        assert "Row 2: Productivity should be between 0 and 100" in messages
        assert "Row 2: Hours cannot be negative" in messages

    def test_productive_hours_cannot_exceed_total(self):
        messages = validate_employee_data([make_row(productive="130:30:00", total=120.0)])
        assert messages == ["Row 2: Productive hours (130.50) cannot exceed total hours (120)"]

    def test_every_failing_rule_is_reported(self):
        report = validate_productivity_rows([make_row(emp_no=0, month="Xyz-25", productivity=-5.0)])
        assert len(report.results) == 3
        assert list(report.failing_rows) == [2]

    def test_rows_are_not_modified(self):
        row = make_row(emp_no=0, productivity=150.0)
        validate_productivity_rows([row])
        assert row.emp_no == 0
        assert row.productivity == 150.0
