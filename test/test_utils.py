"""Field conversion helpers."""

import pytest

from tracker.ingest.utils import (
    is_month_token,
    month_sort_key,
    normalize_month,
    parse_int,
    parse_productive_hours,
    parse_productivity,
    parse_total_hours,
)


class TestProductiveHours:
    def test_hms_is_decoded_to_decimal_hours(self):
        assert parse_productive_hours("114:39:00") == pytest.approx(114.65)

    def test_seconds_are_included(self):
        assert parse_productive_hours("1:30:36") == pytest.approx(1 + 30 / 60 + 36 / 3600)

    def test_missing_parts_count_as_zero(self):
        assert parse_productive_hours("2:30") == pytest.approx(2.5)
        assert parse_productive_hours("7:") == pytest.approx(7.0)

    def test_decimal_passes_through(self):
        assert parse_productive_hours("114.65") == pytest.approx(114.65)

    @pytest.mark.parametrize("value", ["", "   ", "n/a", None])
    def test_unusable_values_become_zero(self, value):
        assert parse_productive_hours(value) == 0.0


class TestTotalHours:
    def test_decimal(self):
        assert parse_total_hours("120.17") == pytest.approx(120.17)

    def test_garbage_is_silently_zero(self):
        assert parse_total_hours("lots") == 0.0


class TestMonth:
    def test_day_first_token_is_rewritten(self):
        assert normalize_month("25-Aug") == "Aug-25"

    def test_canonical_token_is_unchanged(self):
        assert normalize_month("Aug-25") == "Aug-25"

    def test_other_shapes_pass_through(self):
        assert normalize_month("August 2025") == "August 2025"

    def test_is_month_token(self):
        assert is_month_token("Dec-24")
        assert not is_month_token("December-24")
        assert not is_month_token("")

    def test_sort_key_orders_by_year_then_month(self):
        months = ["Jan-26", "Aug-25", "Dec-24"]
        assert sorted(months, key=month_sort_key) == ["Dec-24", "Aug-25", "Jan-26"]

    def test_sort_key_rejects_unknown_abbreviation(self):
        assert month_sort_key("Foo-25") is None


class TestProductivity:
    @pytest.mark.parametrize("raw, expected", [
        ("0.9547", 95.47),
        ("95.47", 95.47),
        ("0", 0.0),
        ("1", 100.0),
        ("95.2%", 95.2),
        ("", 0.0),
    ])
    def test_scaling(self, raw, expected):
        assert parse_productivity(raw) == pytest.approx(expected)

    def test_non_numeric_is_rejected(self):
        assert parse_productivity("high") is None


class TestParseInt:
    def test_plain_and_integral_float(self):
        assert parse_int("42") == 42
        assert parse_int(" 7 ") == 7
        assert parse_int("3.0") == 3

    def test_rejects_non_integers(self):
        assert parse_int("abc") is None
        assert parse_int("2.5") is None
        assert parse_int("") is None
