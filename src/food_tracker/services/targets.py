"""Default daily nutrient targets derived from a profile."""

from food_tracker.domain.nutrients import NutrientTotals
from food_tracker.domain.profile import ActivityBand, NutritionProfile, Sex
from food_tracker.services.units import clamp, lbs_to_kg, round_half_up

HIGH_ACTIVITY_STEPS = 12000
MODERATE_ACTIVITY_STEPS = 7000

_CARBS_MULTIPLIER: dict[ActivityBand, float] = {
    "high": 3.1,
    "moderate": 2.4,
    "low": 1.8,
}

# (female, male, other)
_SEX_SPECIFIC: dict[str, tuple[float, float, float]] = {
    "fiber_g": (28, 38, 33),
    "iron_mg": (18, 11, 11),
    "zinc_mg": (8, 11, 11),
    "magnesium_mg": (320, 420, 370),
    "vitamin_c_mg": (75, 90, 82),
    "omega3_g": (1.1, 1.6, 1.3),
    "choline_mg": (425, 550, 500),
    "vitamin_a_mcg_rae": (700, 900, 800),
    "vitamin_k_mcg": (90, 120, 105),
}

_FIXED_TARGETS: dict[str, float] = {
    "saturated_fat_g": 20,
    "added_sugar_g": 50,
    "sodium_mg": 2300,
    "cholesterol_mg": 300,
    "potassium_mg": 3500,
    "calcium_mg": 1000,
    "vitamin_d_mcg": 15,
    "vitamin_b12_mcg": 2.4,
    "vitamin_b6_mg": 1.7,
    "folate_mcg": 400,
    "iodine_mcg": 150,
    "selenium_mcg": 55,
    "vitamin_e_mg": 15,
}

_SEX_INDEX: dict[Sex, int] = {"female": 0, "male": 1, "other": 2}


def activity_band(avg_steps: float) -> ActivityBand:
    """Classify average daily steps into an activity band."""
    if avg_steps >= HIGH_ACTIVITY_STEPS:
        return "high"
    if avg_steps >= MODERATE_ACTIVITY_STEPS:
        return "moderate"
    return "low"


def compute_default_targets(profile: NutritionProfile) -> NutrientTotals:
    """Return the daily targets implied by a profile."""
    weight_kg = lbs_to_kg(profile.weight_lbs)
    multiplier = _CARBS_MULTIPLIER[activity_band(profile.avg_steps)]
    index = _SEX_INDEX.get(profile.sex, _SEX_INDEX["other"])

    targets: dict[str, float] = {
        "protein_g": clamp(round_half_up(weight_kg * 1.6), 80, 220),
        "fat_g": clamp(round_half_up(weight_kg * 0.8), 45, 120),
        "carbs_g": clamp(round_half_up(weight_kg * multiplier), 120, 420),
    }
    for key, values in _SEX_SPECIFIC.items():
        targets[key] = values[index]
    targets.update(_FIXED_TARGETS)
    return NutrientTotals(**targets)
