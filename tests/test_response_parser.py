"""
Tests for model reply parsing and normalization.
"""

import sys

import pytest

from healscan.core.errors import MalformedResponse, NoJsonFound
from healscan.core.response_parser import (
    extract_json_block,
    normalize_assessment,
    normalize_list,
    normalize_severity,
    parse_model_response,
)


class TestExtractJsonBlock:
    """Greedy first-{ to last-} extraction."""

    def test_plain_json(self):
        assert extract_json_block('{"a": 1}') == '{"a": 1}'

    def test_wrapped_in_prose_and_fences(self):
        text = 'Here you go:\n```json\n{"a": {"b": 2}}\n```\nHope it helps.'
        assert extract_json_block(text) == '{"a": {"b": 2}}'

    def test_spans_first_open_to_last_close(self):
        text = 'x {"a": 1} y {"b": 2} z'
        assert extract_json_block(text) == '{"a": 1} y {"b": 2}'

    def test_no_braces(self):
        assert extract_json_block("no json here") is None

    def test_close_before_open(self):
        assert extract_json_block("} then {") is None


class TestParseModelResponse:
    """End-to-end reply parsing."""

    def test_fenced_reply_is_normalized(self):
        """Severity is clamped and empty list entries dropped."""
        text = (
            'Sure! ```json\n{"type":"Burn","stage":"Inflammatory","severity":150,'
            '"precautions":["a","","b"],"meds":[]}\n```'
        )
        result = parse_model_response(text)

        assert result.type == "Burn"
        assert result.stage == "Inflammatory"
        assert result.severity == 100
        assert result.precautions == ["a", "b"]
        assert result.meds == []

    def test_no_json_raises(self):
        with pytest.raises(NoJsonFound):
            parse_model_response("I cannot analyze this image.")

    def test_empty_reply_raises(self):
        with pytest.raises(NoJsonFound):
            parse_model_response("")

    def test_malformed_json_raises(self):
        with pytest.raises(MalformedResponse) as exc_info:
            parse_model_response('{"type": "Burn", severity: }')
        assert exc_info.value.__cause__ is not None

    def test_missing_fields_use_defaults(self):
        result = parse_model_response("{}")

        assert result.type == "Other"
        assert result.stage == "Unknown"
        assert result.severity == 0
        assert result.precautions == []
        assert result.meds == []

    @pytest.mark.skipif(
        not hasattr(sys, "get_int_max_str_digits"),
        reason="interpreter has no integer string length limit"
    )
    def test_oversized_integer_literal_raises(self):
        text = '{"type": "Cut", "severity": ' + "9" * 5000 + "}"

        with pytest.raises(MalformedResponse) as exc_info:
            parse_model_response(text)
        assert exc_info.value.message == "Model returned malformed JSON"

    def test_deeply_nested_json_raises(self):
        text = '{"a": ' + "[" * 100_000 + "]" * 100_000 + "}"

        with pytest.raises(MalformedResponse):
            parse_model_response(text)

    def test_huge_severity_clamped(self):
        result = parse_model_response('{"severity": ' + "9" * 400 + "}")
        assert result.severity == 100


class TestNormalizeAssessment:
    """Field-level defaults."""

    def test_unrecognized_labels_fall_back(self):
        result = normalize_assessment({"type": "Bruise", "stage": "Healing"})
        assert result.type == "Other"
        assert result.stage == "Unknown"

    def test_labels_matched_case_insensitively(self):
        result = normalize_assessment({"type": " diabetic foot ulcer ", "stage": "MATURATION"})
        assert result.type == "Diabetic Foot Ulcer"
        assert result.stage == "Maturation"

    def test_empty_label_falls_back(self):
        assert normalize_assessment({"type": ""}).type == "Other"

    def test_bad_field_does_not_affect_others(self):
        result = normalize_assessment({
            "type": "Cut",
            "severity": {"nested": True},
            "precautions": "not a list",
            "meds": ["Clean gently"],
        })
        assert result.type == "Cut"
        assert result.severity == 0
        assert result.precautions == []
        assert result.meds == ["Clean gently"]


class TestNormalizeSeverity:
    """Severity is always an integer in [0, 100]."""

    @pytest.mark.parametrize("raw, expected", [
        (42, 42),
        (-5, 0),
        (150, 100),
        ("55", 55),
        (" 70 ", 70),
        ("high", 0),
        (None, 0),
        ([], 0),
        (float("nan"), 0),
        (float("inf"), 100),
        (33.6, 34),
        (50.5, 51),
        (51.5, 52),
        (0.5, 1),
        (99.5, 100),
        (int("9" * 400), 100),
        (-int("9" * 400), 0),
        (True, 1),
    ])
    def test_values(self, raw, expected):
        assert normalize_severity(raw) == expected

    def test_always_in_range(self):
        for raw in [-1e9, -1, 0, 1, 99, 100, 101, 1e9, "1e9", "-3", object()]:
            value = normalize_severity(raw)
            assert 0 <= value <= 100


class TestNormalizeList:
    """Lists are capped at four non-empty strings."""

    def test_truncates_to_four_in_order(self):
        assert normalize_list(["1", "2", "3", "4", "5", "6"]) == ["1", "2", "3", "4"]

    def test_drops_empty_and_none(self):
        assert normalize_list(["", None, "a", "   ", "b"]) == ["a", "b"]

    def test_first_four_valid_entries_kept(self):
        assert normalize_list(["", "a", "", "b", "c", "d", "e"]) == ["a", "b", "c", "d"]

    def test_coerces_elements_to_strings(self):
        assert normalize_list([1, 2.5, True]) == ["1", "2.5", "True"]

    def test_tuple_accepted(self):
        assert normalize_list(("a", "b")) == ["a", "b"]

    @pytest.mark.parametrize("raw", [None, "a, b", 3, {"a": 1}])
    def test_non_list_yields_empty(self, raw):
        assert normalize_list(raw) == []
