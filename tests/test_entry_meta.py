"""Tests for the entry metadata codec."""

import json

from food_tracker.domain.entries import EntryMetaV2
from food_tracker.domain.estimates import Estimate
from food_tracker.domain.nutrients import NutrientTotals
from food_tracker.services.entry_meta import (
    build_entry_meta,
    decode_entry_meta,
    encode_entry_meta,
    normalize_string_list,
)


def _meta() -> EntryMetaV2:
    return EntryMetaV2(
        feel_after=4,
        nutrients=NutrientTotals(protein_g=35.5, sodium_mg=820, vitamin_c_mg=45),
        positive=["lots of vegetables", "lean protein"],
        improve=["less sauce"],
        recommendation="Have fruit with lunch.",
        recommendation_options=["apple", "berries"],
        confidence="high",
    )


def test_roundtrip_preserves_every_field() -> None:
    meta = _meta()

    assert decode_entry_meta(encode_entry_meta(meta)) == meta


def test_encoded_notes_carry_version() -> None:
    payload = json.loads(encode_entry_meta(_meta()))

    assert payload["version"] == 2
    assert payload["nutrients"]["protein_g"] == 35.5


def test_decode_rejects_missing_and_corrupt_notes() -> None:
    assert decode_entry_meta(None) is None
    assert decode_entry_meta("") is None
    assert decode_entry_meta("not json") is None
    assert decode_entry_meta("[1, 2, 3]") is None
    assert decode_entry_meta("Had this at a friend's place") is None


def test_decode_survives_deeply_nested_notes() -> None:
    assert decode_entry_meta("[" * 100_000) is None
    assert decode_entry_meta('{"version": 2, "positive": ' + "[" * 100_000) is None


def test_decode_rejects_other_versions() -> None:
    assert decode_entry_meta(json.dumps({"version": 1, "feel_after": 3})) is None
    assert decode_entry_meta(json.dumps({"version": "2"})) is None
    assert decode_entry_meta(json.dumps({"version": True})) is None
    assert decode_entry_meta(json.dumps({"feel_after": 3})) is None


def test_decode_accepts_integral_float_version() -> None:
    meta = decode_entry_meta('{"version": 2.0, "feel_after": 2}')

    assert meta is not None
    assert meta.feel_after == 2
    assert decode_entry_meta('{"version": 2.5}') is None


def test_decode_sanitizes_fields() -> None:
    raw = json.dumps(
        {
            "version": 2,
            "feel_after": 9,
            "nutrients": {"protein_g": 9999, "fiber_g": "7"},
            "positive": ["  a ", "", "b", "c", "d", "e"],
            "improve": "not a list",
            "recommendation": 12,
            "recommendation_options": ["x", None, "y"],
            "confidence": "HIGH",
        }
    )

    meta = decode_entry_meta(raw)

    assert meta is not None
    assert meta.feel_after == 5
    assert meta.nutrients.protein_g == 400
    assert meta.nutrients.fiber_g == 7
    assert meta.positive == ["a", "b", "c", "d"]
    assert meta.improve == []
    assert meta.recommendation == ""
    assert meta.recommendation_options == ["x", "y"]
    assert meta.confidence == "high"


def test_decode_feel_after_below_one_is_none() -> None:
    for value in (0, -2, 0.4, "abc", None):
        meta = decode_entry_meta(json.dumps({"version": 2, "feel_after": value}))
        assert meta is not None
        assert meta.feel_after is None


def test_decode_unknown_confidence_defaults_to_medium() -> None:
    meta = decode_entry_meta(json.dumps({"version": 2, "confidence": "very sure"}))

    assert meta is not None
    assert meta.confidence == "medium"


def test_normalize_string_list_caps_items() -> None:
    assert normalize_string_list(["a", "b", "c", "d", "e"]) == ["a", "b", "c", "d"]
    assert normalize_string_list([1, " two "], limit=3) == ["1", "two"]
    assert normalize_string_list(None) == []
    assert normalize_string_list(["ok", None, "  "]) == ["ok"]


def test_build_entry_meta_from_estimate() -> None:
    estimate = Estimate(
        optimal_score=70,
        positive=["fiber"],
        nutrients=NutrientTotals(fiber_g=12),
        recommendation="Add yogurt.",
        confidence="low",
    )

    meta = build_entry_meta(estimate, feel_after="3")

    assert meta.feel_after == 3
    assert meta.nutrients.fiber_g == 12
    assert meta.positive == ["fiber"]
    assert meta.confidence == "low"
