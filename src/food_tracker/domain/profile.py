"""User profile models."""

from dataclasses import dataclass
from typing import Literal

Sex = Literal["female", "male", "other"]
ActivityBand = Literal["low", "moderate", "high"]


@dataclass(frozen=True)
class FeetInches:
    """Height expressed in whole feet and inches."""

    feet: int
    inches: int


@dataclass(frozen=True)
class NutritionProfile:
    """Body profile used to derive daily nutrient targets."""

    age: int = 30
    height_ft: int = 5
    height_in: int = 8
    weight_lbs: float = 180.0
    sex: Sex = "other"
    avg_steps: int = 8000
