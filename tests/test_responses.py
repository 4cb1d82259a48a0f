"""Tests for model response parsing and merging."""

import pytest

from candidate_evaluation.errors import LLMMalformedResponseError, ResponseParseError
from candidate_evaluation.llm.responses import merge_results, parse_json_object


class TestParseJsonObject:
    """Tests for parse_json_object."""

    def test_parses_object(self):
        result = parse_json_object('{"cv_match_rate": 0.82, "cv_feedback": "Good."}', "CV evaluation")
        assert result == {"cv_match_rate": 0.82, "cv_feedback": "Good."}

    def test_invalid_json_raises_with_label(self):
        """Prose around the JSON is not recovered; it is a parse failure."""
        with pytest.raises(ResponseParseError, match="CV evaluation"):
            parse_json_object('Sure! {"cv_match_rate": 0.8}', "CV evaluation")

    def test_non_object_raises(self):
        with pytest.raises(ResponseParseError, match="expected an object"):
            parse_json_object("[1, 2, 3]", "overall summary")

    def test_empty_string_raises(self):
        with pytest.raises(ResponseParseError):
            parse_json_object("", "overall summary")


class TestMergeResults:
    """Tests for merge_results."""

    def test_merges_disjoint_objects(self):
        merged = merge_results(
            {"cv_match_rate": 0.8, "cv_feedback": "a"},
            {"project_score": 4.0, "project_feedback": "b"},
            {"overall_summary": "c"},
        )

        assert merged == {
            "cv_match_rate": 0.8,
            "cv_feedback": "a",
            "project_score": 4.0,
            "project_feedback": "b",
            "overall_summary": "c",
        }

    def test_same_key_same_value_is_accepted(self):
        merged = merge_results({"note": "x", "a": 1}, {"note": "x", "b": 2})
        assert merged == {"note": "x", "a": 1, "b": 2}

    def test_conflicting_key_raises(self):
        """A key repeated with a different value is a malformed response."""
        with pytest.raises(LLMMalformedResponseError, match="'cv_feedback'"):
            merge_results({"cv_feedback": "a"}, {"cv_feedback": "b"})

    def test_extra_keys_are_kept(self):
        merged = merge_results({"cv_match_rate": 0.5, "confidence": "high"})
        assert merged["confidence"] == "high"
