"""Tests for session record parsing.

Tests validate:
1. Success classification is case-insensitive and untrimmed
2. Condition values parse to finite floats or None
3. Scent labels default to "unknown"
"""

import pytest

from k9fetch.aggregation.records import (
    SessionConditions,
    get_condition_value,
    get_scent_label,
    is_success_result,
    parse_condition_value,
    parse_conditions,
    split_cohorts,
)
from k9fetch.models.domain import TrainingSessionEntity


def make_session(**kwargs) -> TrainingSessionEntity:
    kwargs.setdefault("id", "s-1")
    kwargs.setdefault("dog_id", "dog-1")
    return TrainingSessionEntity(**kwargs)


class TestIsSuccessResult:
    """Test record classifier."""

    @pytest.mark.parametrize("result", ["success", "SUCCESS", "Success", "sUcCeSs"])
    def test_case_insensitive_match(self, result):
        assert is_success_result(result) is True

    def test_trailing_space_is_failure(self):
        """No trimming: "success " is not the token."""
        assert is_success_result("success ") is False
        assert is_success_result(" success") is False

    @pytest.mark.parametrize("result", [None, "", "fail", "false_positive", "successful"])
    def test_everything_else_is_failure(self, result):
        assert is_success_result(result) is False

    def test_non_string_coerced(self):
        assert is_success_result(0) is False
        assert is_success_result(1) is False


class TestParseConditionValue:
    """Test numeric coercion of raw condition entries."""

    def test_numbers_pass_through(self):
        assert parse_condition_value(21) == 21.0
        assert parse_condition_value(21.5) == 21.5

    def test_numeric_text_parsed(self):
        assert parse_condition_value("1013") == 1013.0
        assert parse_condition_value(" 18.5 ") == 18.5
        assert parse_condition_value("-3") == -3.0

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("22°C", 22.0),
            ("15 km/h", 15.0),
            ("12abc", 12.0),
            ("1013hPa", 1013.0),
            (".5 m/s", 0.5),
            ("-2.5e1 units", -25.0),
        ],
    )
    def test_leading_number_kept(self, raw, expected):
        """Readings typed with a unit keep their leading value."""
        assert parse_condition_value(raw) == expected

    @pytest.mark.parametrize("raw", ["not-a-number", "", "n/a", "°C 22", "-", "."])
    def test_unparsable_text_is_absent(self, raw):
        assert parse_condition_value(raw) is None

    @pytest.mark.parametrize("raw", [float("nan"), float("inf"), "inf", "NaN", "-Infinity"])
    def test_non_finite_is_absent(self, raw):
        assert parse_condition_value(raw) is None

    @pytest.mark.parametrize("raw", [None, True, False, [1], {"v": 1}])
    def test_other_types_absent(self, raw):
        assert parse_condition_value(raw) is None

    def test_zero_is_a_value(self):
        """Zero is a real measurement, not absence."""
        assert parse_condition_value(0) == 0.0
        assert parse_condition_value("0") == 0.0


class TestConditionExtraction:
    """Test reading conditions from sessions."""

    def test_reads_named_key(self):
        session = make_session(conditions={"temp": "22.5", "wind": 4})
        assert get_condition_value(session, "temp") == 22.5
        assert get_condition_value(session, "wind") == 4.0

    def test_missing_key_is_absent(self):
        session = make_session(conditions={"temp": 20})
        assert get_condition_value(session, "hum") is None

    def test_empty_conditions(self):
        assert get_condition_value(make_session(), "temp") is None

    def test_parse_conditions_builds_record(self):
        session = make_session(
            conditions={"temp": 20, "wind": "x", "press": "1010", "hum": None, "rain": 3}
        )
        assert parse_conditions(session) == SessionConditions(
            temp=20.0, wind=None, press=1010.0, hum=None
        )


class TestScentLabel:
    """Test scent category extraction."""

    def test_reads_scent(self):
        assert get_scent_label(make_session(type={"scent": "cocaine"})) == "cocaine"

    def test_missing_scent_is_unknown(self):
        assert get_scent_label(make_session()) == "unknown"
        assert get_scent_label(make_session(type={"other": 1})) == "unknown"
        assert get_scent_label(make_session(type={"scent": None})) == "unknown"

    def test_non_string_scent_stringified(self):
        assert get_scent_label(make_session(type={"scent": 7})) == "7"


class TestSplitCohorts:
    """Test cohort partition."""

    def test_preserves_order(self):
        sessions = [
            make_session(id="a", result="success"),
            make_session(id="b", result="fail"),
            make_session(id="c", result="Success"),
        ]
        success, fail = split_cohorts(sessions)
        assert [s.id for s in success] == ["a", "c"]
        assert [s.id for s in fail] == ["b"]
