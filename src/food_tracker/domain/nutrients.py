"""Nutrient vector model and its bounds table."""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict

NutrientKind = Literal["target_fill", "upper_bound"]


@dataclass(frozen=True)
class NutrientBounds:
    """Inclusive range a nutrient value is clamped to."""

    min: float
    max: float


NUTRIENT_LIMITS: dict[str, NutrientBounds] = {
    "protein_g": NutrientBounds(0, 400),
    "carbs_g": NutrientBounds(0, 800),
    "fat_g": NutrientBounds(0, 300),
    "fiber_g": NutrientBounds(0, 120),
    "saturated_fat_g": NutrientBounds(0, 120),
    "added_sugar_g": NutrientBounds(0, 300),
    "omega3_g": NutrientBounds(0, 20),
    "sodium_mg": NutrientBounds(0, 12000),
    "cholesterol_mg": NutrientBounds(0, 1200),
    "potassium_mg": NutrientBounds(0, 10000),
    "magnesium_mg": NutrientBounds(0, 2000),
    "calcium_mg": NutrientBounds(0, 3000),
    "iron_mg": NutrientBounds(0, 100),
    "zinc_mg": NutrientBounds(0, 80),
    "choline_mg": NutrientBounds(0, 2000),
    "vitamin_c_mg": NutrientBounds(0, 2000),
    "vitamin_d_mcg": NutrientBounds(0, 250),
    "vitamin_b12_mcg": NutrientBounds(0, 200),
    "vitamin_b6_mg": NutrientBounds(0, 50),
    "folate_mcg": NutrientBounds(0, 2000),
    "iodine_mcg": NutrientBounds(0, 2000),
    "selenium_mcg": NutrientBounds(0, 1000),
    "vitamin_a_mcg_rae": NutrientBounds(0, 4000),
    "vitamin_e_mg": NutrientBounds(0, 1000),
    "vitamin_k_mcg": NutrientBounds(0, 1500),
}

NUTRIENT_KEYS: tuple[str, ...] = tuple(NUTRIENT_LIMITS)

# Lower is better for these; everything else should reach its target.
UPPER_BOUND_NUTRIENTS: frozenset[str] = frozenset(
    {"saturated_fat_g", "added_sugar_g", "sodium_mg", "cholesterol_mg"}
)


def nutrient_kind(key: str) -> NutrientKind:
    """Return how coverage of a nutrient should be judged."""
    if key in UPPER_BOUND_NUTRIENTS:
        return "upper_bound"
    return "target_fill"


class NutrientTotals(BaseModel):
    """Complete nutrient vector; every field is always populated."""

    model_config = ConfigDict(frozen=True)

    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0
    saturated_fat_g: float = 0.0
    added_sugar_g: float = 0.0
    omega3_g: float = 0.0
    sodium_mg: float = 0.0
    cholesterol_mg: float = 0.0
    potassium_mg: float = 0.0
    magnesium_mg: float = 0.0
    calcium_mg: float = 0.0
    iron_mg: float = 0.0
    zinc_mg: float = 0.0
    choline_mg: float = 0.0
    vitamin_c_mg: float = 0.0
    vitamin_d_mcg: float = 0.0
    vitamin_b12_mcg: float = 0.0
    vitamin_b6_mg: float = 0.0
    folate_mcg: float = 0.0
    iodine_mcg: float = 0.0
    selenium_mcg: float = 0.0
    vitamin_a_mcg_rae: float = 0.0
    vitamin_e_mg: float = 0.0
    vitamin_k_mcg: float = 0.0

    def value(self, key: str) -> float:
        """Return the amount stored for a nutrient key."""
        return float(getattr(self, key))
