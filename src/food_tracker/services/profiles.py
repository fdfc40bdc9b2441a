"""Profile normalization and target persistence."""

import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Protocol

from food_tracker.domain.nutrients import NutrientTotals
from food_tracker.domain.profile import NutritionProfile, Sex
from food_tracker.services.nutrients import (
    diff_from_defaults,
    merge_with_defaults,
    to_record,
)
from food_tracker.services.targets import compute_default_targets
from food_tracker.services.units import (
    clamp,
    cm_to_feet_inches,
    kg_to_lbs,
    parse_number,
    round_half_up,
)

_SEXES: tuple[Sex, ...] = ("female", "male", "other")

_logger = logging.getLogger(__name__)


class ProfileStore(Protocol):
    """Persistence port for the user's profile and custom targets."""

    def load_profile(self) -> object | None:
        """Return the stored profile payload, if any."""

    def save_profile(self, profile: dict[str, object]) -> None:
        """Persist a normalized profile payload."""

    def load_target_overrides(self) -> object | None:
        """Return stored target overrides, if any."""

    def save_target_overrides(self, overrides: dict[str, float]) -> None:
        """Persist target overrides."""


def _pick(raw: Mapping[str, object], *names: str) -> float | None:
    for name in names:
        value = parse_number(raw.get(name))
        if value is not None:
            return value
    return None


def normalize_profile(raw: object) -> NutritionProfile:
    """Build a bounded profile from camelCase, snake_case or metric input."""
    values = to_record(raw)
    defaults = NutritionProfile()

    age = _pick(values, "age")
    steps = _pick(values, "avgSteps", "avg_steps", "average_steps_day")

    height_cm = _pick(values, "heightCm", "height_cm")
    if height_cm is not None:
        height = cm_to_feet_inches(clamp(height_cm, 120, 230))
        height_ft, height_in = height.feet, height.inches
    else:
        feet = _pick(values, "heightFt", "height_ft")
        inches = _pick(values, "heightIn", "height_in")
        height_ft = round_half_up(defaults.height_ft if feet is None else feet)
        height_in = round_half_up(defaults.height_in if inches is None else inches)

    weight_kg = _pick(values, "weightKg", "weight_kg")
    weight_lbs = _pick(values, "weightLbs", "weight_lbs")
    if weight_lbs is None and weight_kg is not None:
        weight_lbs = round(kg_to_lbs(clamp(weight_kg, 35, 250)), 1)

    sex = values.get("sex")
    return NutritionProfile(
        age=int(clamp(round_half_up(defaults.age if age is None else age), 13, 100)),
        height_ft=int(clamp(height_ft, 3, 8)),
        height_in=int(clamp(height_in, 0, 11)),
        weight_lbs=clamp(
            defaults.weight_lbs if weight_lbs is None else weight_lbs, 80, 550
        ),
        sex=sex if sex in _SEXES else "other",
        avg_steps=int(
            clamp(
                round_half_up(defaults.avg_steps if steps is None else steps),
                1000,
                40000,
            )
        ),
    )


def profile_payload(profile: NutritionProfile) -> dict[str, object]:
    """Return the client-facing camelCase shape of a profile."""
    return {
        "age": profile.age,
        "heightFt": profile.height_ft,
        "heightIn": profile.height_in,
        "weightLbs": profile.weight_lbs,
        "sex": profile.sex,
        "avgSteps": profile.avg_steps,
    }


@dataclass
class ProfileService:
    """Loads and saves the profile, falling back to defaults."""

    store: ProfileStore

    def get_profile(self) -> NutritionProfile:
        """Return the stored profile, or defaults when absent or corrupt."""
        stored = self.store.load_profile()
        if stored is not None and not isinstance(stored, Mapping):
            _logger.warning("Stored profile is not an object; using defaults")
        return normalize_profile(stored)

    def save_profile(self, raw: object) -> NutritionProfile:
        """Normalize and persist a profile edit."""
        profile = normalize_profile(raw)
        self.store.save_profile(asdict(profile))
        return profile

    def get_targets(self) -> NutrientTotals:
        """Return profile-derived targets with any custom overrides applied."""
        defaults = compute_default_targets(self.get_profile())
        return merge_with_defaults(defaults, self.store.load_target_overrides())

    def save_targets(self, raw: object) -> NutrientTotals:
        """Persist the fields of ``raw`` that differ from the defaults."""
        defaults = compute_default_targets(self.get_profile())
        merged = merge_with_defaults(defaults, raw)
        self.store.save_target_overrides(diff_from_defaults(defaults, merged))
        return merged

    def reset_targets(self) -> NutrientTotals:
        """Drop custom targets and return the profile defaults."""
        self.store.save_target_overrides({})
        return compute_default_targets(self.get_profile())
