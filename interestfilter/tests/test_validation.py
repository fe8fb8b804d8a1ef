from __future__ import annotations

import json
import math

import pytest

from interestfilter.errors import (
    ConfidenceOutOfRange,
    ContradictionViolation,
    MalformedResponse,
    TagCountViolation,
    WhitelistViolation,
)
from interestfilter.validation.config import ValidationConfig
from interestfilter.validation.models import InferenceResult
from interestfilter.validation.validators import (
    check_confidence,
    check_contradictions,
    check_tag_count,
    check_whitelist,
    parse_inference,
    unique,
    validate_inference,
    validate_payload,
)

GOOD_TAGS = ["quiet_spaces", "waterfront_views", "sunset_spots"]


def _result(**overrides) -> InferenceResult:
    data = {
        "tags": list(GOOD_TAGS),
        "exclusions": [],
        "confidence": 0.8,
        "rationale": "Calm water at sunset.",
        "warnings": [],
    }
    data.update(overrides)
    return InferenceResult(**data)


# ── Structural normalization ─────────────────────────────────────────────


class TestParseInference:
    def test_missing_optional_fields_default_to_empty(self):
        result = parse_inference({"confidence": 0.5})
        assert result.tags == []
        assert result.exclusions == []
        assert result.warnings == []
        assert result.rationale == ""
        assert result.confidence == 0.5

    def test_deduplicates_preserving_first_occurrence(self):
        result = parse_inference({
            "tags": ["nature_walks", "quiet_spaces", "nature_walks"],
            "exclusions": ["live_music", "live_music", "lively_nightlife"],
            "confidence": 0.9,
        })
        assert result.tags == ["nature_walks", "quiet_spaces"]
        assert result.exclusions == ["live_music", "lively_nightlife"]

    def test_integer_confidence_accepted(self):
        assert parse_inference({"confidence": 1}).confidence == 1.0

    def test_integer_confidence_too_large_for_float(self):
        raw = json.loads(
            '{"tags": ' + json.dumps(GOOD_TAGS) + ', "confidence": 1' + "0" * 400 + "}"
        )
        result = parse_inference(raw)
        assert result.confidence == math.inf
        with pytest.raises(ConfidenceOutOfRange):
            validate_inference(result)

    def test_extra_keys_ignored(self):
        result = parse_inference({"confidence": 0.7, "mood": "chill"})
        assert result.confidence == 0.7

    def test_missing_confidence_is_malformed(self):
        with pytest.raises(MalformedResponse):
            parse_inference({"tags": GOOD_TAGS})

    @pytest.mark.parametrize("confidence", ["0.8", None, True, [0.8]])
    def test_non_numeric_confidence_is_malformed(self, confidence):
        with pytest.raises(MalformedResponse):
            parse_inference({"tags": GOOD_TAGS, "confidence": confidence})

    def test_non_string_tags_are_malformed(self):
        with pytest.raises(MalformedResponse):
            parse_inference({"tags": ["quiet_spaces", 3], "confidence": 0.8})

    def test_non_object_payload_is_malformed(self):
        with pytest.raises(MalformedResponse):
            parse_inference(["quiet_spaces"])


def test_unique_helper():
    assert unique(["a", "b", "a"]) == ["a", "b"]
    assert unique([]) == []


# ── Individual rules ─────────────────────────────────────────────────────


class TestWhitelist:
    def test_allowed_tags_pass(self):
        check_whitelist(GOOD_TAGS, ["live_music"])

    def test_names_exactly_the_offending_values(self):
        with pytest.raises(WhitelistViolation) as info:
            check_whitelist(["quiet_spaces", "beach_party"], ["rooftop_bars"])
        assert info.value.values == ["beach_party", "rooftop_bars"]
        assert "beach_party" in str(info.value)
        assert "quiet_spaces" not in info.value.values


class TestTagCount:
    @pytest.mark.parametrize("count", [3, 5, 7])
    def test_inside_bounds(self, count):
        check_tag_count(["t"] * count)

    @pytest.mark.parametrize("count", [0, 2, 8])
    def test_outside_bounds(self, count):
        with pytest.raises(TagCountViolation) as info:
            check_tag_count(["t"] * count)
        assert info.value.actual == count
        assert (info.value.min_tags, info.value.max_tags) == (3, 7)

    def test_custom_bounds(self):
        check_tag_count(["a"], min_tags=1, max_tags=1)
        with pytest.raises(TagCountViolation):
            check_tag_count(["a", "b"], min_tags=1, max_tags=1)


class TestContradictions:
    def test_one_side_only_passes(self):
        check_contradictions(["quiet_spaces", "nature_walks"])
        check_contradictions(["live_music", "lively_nightlife"])

    def test_reports_every_conflicting_pair(self):
        with pytest.raises(ContradictionViolation) as info:
            check_contradictions(["quiet_spaces", "live_music", "lively_nightlife"])
        assert info.value.pairs == [
            ("quiet_spaces", "lively_nightlife"),
            ("quiet_spaces", "live_music"),
        ]


class TestConfidence:
    @pytest.mark.parametrize("value", [0.0, 1.0, 0.5])
    def test_inclusive_bounds(self, value):
        check_confidence(value)

    @pytest.mark.parametrize("value", [-0.01, 1.01, float("nan")])
    def test_out_of_range(self, value):
        with pytest.raises(ConfidenceOutOfRange):
            check_confidence(value)

    def test_threshold_is_inclusive(self):
        assert check_confidence(0.65) is True
        assert check_confidence(0.649) is False


# ── Full validation ──────────────────────────────────────────────────────


class TestValidateInference:
    def test_high_confidence_needs_no_confirmation(self):
        assert validate_inference(_result(confidence=0.9)) is False

    def test_low_confidence_needs_confirmation(self):
        assert validate_inference(_result(confidence=0.4)) is True

    def test_confidence_at_threshold_needs_no_confirmation(self):
        assert validate_inference(_result(confidence=0.65)) is False

    def test_custom_threshold(self):
        config = ValidationConfig(advisory_confidence=0.9)
        assert validate_inference(_result(confidence=0.8), config) is True

    def test_whitelist_runs_before_tag_count(self):
        with pytest.raises(WhitelistViolation):
            validate_inference(_result(tags=["not_a_tag"]))

    def test_tag_count_runs_before_contradictions(self):
        with pytest.raises(TagCountViolation):
            validate_inference(_result(tags=["quiet_spaces", "live_music"]))

    def test_contradictions_run_before_confidence(self):
        with pytest.raises(ContradictionViolation):
            validate_inference(_result(
                tags=["quiet_spaces", "live_music", "nature_walks"], confidence=7.0,
            ))

    def test_exclusions_are_whitelisted_but_not_counted(self):
        validate_inference(_result(exclusions=["lively_nightlife", "live_music",
                                               "not_crowded", "short_drive"]))
        with pytest.raises(WhitelistViolation):
            validate_inference(_result(exclusions=["karaoke"]))

    def test_overlapping_tags_and_exclusions_allowed(self):
        validate_inference(_result(exclusions=["quiet_spaces"]))


class TestValidatePayload:
    def test_success_outcome(self):
        outcome = validate_payload({
            "tags": GOOD_TAGS + ["quiet_spaces"],
            "confidence": 0.5,
        })
        assert outcome.ok is True
        assert outcome.result.tags == GOOD_TAGS
        assert outcome.needs_confirmation is True
        assert outcome.error_kind is None

    def test_failure_outcome_reports_kind(self):
        outcome = validate_payload({"tags": GOOD_TAGS, "confidence": 1.5})
        assert outcome.ok is False
        assert outcome.result is None
        assert outcome.error_kind == "ConfidenceOutOfRange"
        assert "1.5" in outcome.error

    def test_malformed_outcome(self):
        outcome = validate_payload({"tags": GOOD_TAGS})
        assert outcome.ok is False
        assert outcome.error_kind == "MalformedResponse"

    @pytest.mark.parametrize("confidence", [10**400, -(10**400)])
    def test_huge_integer_confidence_is_out_of_range(self, confidence):
        outcome = validate_payload({"tags": GOOD_TAGS, "confidence": confidence})
        assert outcome.ok is False
        assert outcome.error_kind == "ConfidenceOutOfRange"

    def test_huge_confidence_still_checked_after_whitelist(self):
        outcome = validate_payload({"tags": ["karaoke"], "confidence": 10**400})
        assert outcome.error_kind == "WhitelistViolation"

    def test_duplicates_can_drop_below_minimum(self):
        outcome = validate_payload({
            "tags": ["quiet_spaces", "quiet_spaces", "nature_walks", "nature_walks"],
            "confidence": 0.9,
        })
        assert outcome.ok is False
        assert outcome.error_kind == "TagCountViolation"
        assert "got 2" in outcome.error
