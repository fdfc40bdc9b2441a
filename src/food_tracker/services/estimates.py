"""Normalizing estimates from the external estimation service."""

import json
import logging
import re
from dataclasses import asdict, dataclass
from typing import Protocol

from food_tracker.domain.entries import EntryValidationError
from food_tracker.domain.estimates import Estimate
from food_tracker.domain.nutrients import NutrientTotals
from food_tracker.domain.profile import NutritionProfile
from food_tracker.domain.summaries import DayContext
from food_tracker.services.entry_meta import normalize_confidence, normalize_string_list
from food_tracker.services.nutrients import sanitize_nutrients, to_record
from food_tracker.services.targets import activity_band
from food_tracker.services.units import (
    clamp,
    feet_inches_to_cm,
    lbs_to_kg,
    round_half_up,
    to_number,
)

MAX_ESTIMATE_NOTES = 3
MAX_RECOMMENDATION_OPTIONS = 4
MIN_SIZE_WEIGHT = 0.5
MAX_SIZE_WEIGHT = 2.0

SIZE_WEIGHT_DEFAULTS: dict[str, float] = {
    "small": 0.7,
    "medium": 1.0,
    "large": 1.3,
    "very large": 1.6,
}

ESTIMATE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "optimal_score": {"type": "integer", "minimum": 0, "maximum": 100},
        "summary": {"type": "string"},
        "positive": {"type": "array", "items": {"type": "string"}},
        "improve": {"type": "array", "items": {"type": "string"}},
        "nutrients": {
            "type": "object",
            "properties": {
                key: {"type": "number"} for key in NutrientTotals.model_fields
            },
            "required": list(NutrientTotals.model_fields),
            "additionalProperties": False,
        },
        "recommendation": {"type": "string"},
        "recommendation_options": {"type": "array", "items": {"type": "string"}},
        "size_label": {"type": "string", "enum": list(SIZE_WEIGHT_DEFAULTS)},
        "size_weight": {"type": "number"},
        "confidence": {"type": "string", "enum": ["low", "medium", "high"]},
    },
    "required": [
        "optimal_score",
        "summary",
        "positive",
        "improve",
        "nutrients",
        "recommendation",
        "recommendation_options",
        "size_label",
        "size_weight",
        "confidence",
    ],
    "additionalProperties": False,
}

_CODE_FENCE_START = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_CODE_FENCE_END = re.compile(r"```$")
_OBJECT_BLOCK = re.compile(r"\{.*\}", re.DOTALL)

_logger = logging.getLogger(__name__)


class EstimateClient(Protocol):
    """Interface for the external meal estimation service."""

    async def estimate(self, *, meal_text: str, context: dict[str, object]) -> str:
        """Return the raw text response for a meal description."""


def parse_json_from_text(text: object) -> dict[str, object]:
    """Extract a JSON object from model output, tolerating code fences."""
    if not isinstance(text, str) or not text.strip():
        return {}
    trimmed = text.strip()
    without_fence = _CODE_FENCE_END.sub("", _CODE_FENCE_START.sub("", trimmed)).strip()
    candidates = [trimmed, without_fence]
    match = _OBJECT_BLOCK.search(without_fence)
    if match:
        candidates.append(match.group(0))
    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except (ValueError, RecursionError):
            continue
        if isinstance(parsed, dict):
            return parsed
    _logger.debug("Estimate response did not contain a JSON object")
    return {}


def normalize_size_label(value: object) -> str:
    raw = value.strip().lower() if isinstance(value, str) else ""
    if raw in SIZE_WEIGHT_DEFAULTS:
        return raw
    return "medium"


def _text(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def normalize_estimate(raw: object) -> Estimate:
    """Turn an arbitrary JSON value into a fully valid estimate."""
    payload = to_record(raw)
    size_label = normalize_size_label(payload.get("size_label"))
    size_weight = clamp(
        to_number(payload.get("size_weight"), SIZE_WEIGHT_DEFAULTS[size_label]),
        MIN_SIZE_WEIGHT,
        MAX_SIZE_WEIGHT,
    )
    return Estimate(
        optimal_score=int(
            clamp(round_half_up(to_number(payload.get("optimal_score"))), 0, 100)
        ),
        summary=_text(payload.get("summary")),
        positive=normalize_string_list(payload.get("positive"), MAX_ESTIMATE_NOTES),
        improve=normalize_string_list(payload.get("improve"), MAX_ESTIMATE_NOTES),
        nutrients=sanitize_nutrients(payload.get("nutrients")),
        recommendation=_text(payload.get("recommendation")),
        recommendation_options=normalize_string_list(
            payload.get("recommendation_options"), MAX_RECOMMENDATION_OPTIONS
        ),
        size_label=size_label,
        size_weight=size_weight,
        confidence=normalize_confidence(payload.get("confidence")),
    )


def build_estimate_context(
    profile: NutritionProfile,
    targets: NutrientTotals,
    optimal_goal: float,
    day_context: DayContext,
) -> dict[str, object]:
    """Assemble the JSON context sent with an estimation request."""
    return {
        "profile": {
            "age": profile.age,
            "height_cm": round_half_up(
                feet_inches_to_cm(profile.height_ft, profile.height_in)
            ),
            "weight_kg": round(lbs_to_kg(profile.weight_lbs), 1),
            "average_steps_day": profile.avg_steps,
            "sex": profile.sex,
            "activity_band": activity_band(profile.avg_steps),
        },
        "targets": {
            **targets.model_dump(),
            "optimal_goal": int(clamp(round_half_up(optimal_goal), 50, 100)),
        },
        "day_context": asdict(day_context)
        | {"nutrients_consumed": day_context.nutrients_consumed.model_dump()},
    }


@dataclass
class EstimateService:
    """Service that calls the estimation collaborator and cleans its output."""

    client: EstimateClient

    async def estimate(
        self,
        meal_text: object,
        *,
        profile: NutritionProfile,
        targets: NutrientTotals,
        optimal_goal: float,
        day_context: DayContext,
    ) -> Estimate:
        """Estimate a meal; raises EntryValidationError for blank text."""
        text = _text(meal_text)
        if not text:
            raise EntryValidationError("Meal text is required.")
        context = build_estimate_context(profile, targets, optimal_goal, day_context)
        try:
            raw_text = await self.client.estimate(meal_text=text, context=context)
        except Exception:
            _logger.exception("Meal estimation request failed")
            raise
        return normalize_estimate(parse_json_from_text(raw_text))

