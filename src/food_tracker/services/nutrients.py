"""Sanitizing and combining nutrient vectors.

Every nutrient record that comes from outside the process (estimation
responses, persisted notes, stored target overrides) passes through
``sanitize_nutrients`` or ``merge_with_defaults`` before it is used.
"""

from collections.abc import Mapping

from food_tracker.domain.nutrients import NUTRIENT_KEYS, NUTRIENT_LIMITS, NutrientTotals
from food_tracker.services.units import clamp, parse_number, to_number


def clamp_nutrient(key: str, value: float) -> float:
    """Clamp a value to the bounds of the given nutrient."""
    limits = NUTRIENT_LIMITS[key]
    return clamp(value, limits.min, limits.max)


def to_record(value: object) -> Mapping[str, object]:
    """Return a mapping view of an untrusted value, or an empty one."""
    if isinstance(value, NutrientTotals):
        return value.model_dump()
    if isinstance(value, Mapping):
        return value
    return {}


def sanitize_nutrients(raw: object) -> NutrientTotals:
    """Build a complete, bounded nutrient vector from untrusted data."""
    values = to_record(raw)
    return NutrientTotals(
        **{
            key: clamp_nutrient(key, to_number(values.get(key)))
            for key in NUTRIENT_KEYS
        }
    )


def add_nutrients(a: NutrientTotals, b: NutrientTotals) -> NutrientTotals:
    """Add two vectors field by field, capping each sum at its bound."""
    return NutrientTotals(
        **{
            key: clamp_nutrient(key, a.value(key) + b.value(key))
            for key in NUTRIENT_KEYS
        }
    )


def merge_with_defaults(defaults: NutrientTotals, override: object) -> NutrientTotals:
    """Overlay numeric override values on top of a valid default vector."""
    values = to_record(override)
    merged: dict[str, float] = {}
    for key in NUTRIENT_KEYS:
        parsed = parse_number(values.get(key))
        merged[key] = (
            defaults.value(key) if parsed is None else clamp_nutrient(key, parsed)
        )
    return NutrientTotals(**merged)


def diff_from_defaults(
    defaults: NutrientTotals, values: NutrientTotals
) -> dict[str, float]:
    """Return only the fields that differ from the defaults."""
    return {
        key: values.value(key)
        for key in NUTRIENT_KEYS
        if values.value(key) != defaults.value(key)
    }
