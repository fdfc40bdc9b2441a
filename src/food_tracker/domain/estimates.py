"""Models for meal estimates returned by the estimation service."""

from pydantic import BaseModel, ConfigDict, Field

from food_tracker.domain.entries import Confidence
from food_tracker.domain.nutrients import NutrientTotals


class Estimate(BaseModel):
    """Normalized estimate for a meal that has not been saved yet."""

    model_config = ConfigDict(frozen=True)

    optimal_score: int = Field(default=0, ge=0, le=100)
    summary: str = ""
    positive: list[str] = Field(default_factory=list)
    improve: list[str] = Field(default_factory=list)
    nutrients: NutrientTotals = Field(default_factory=NutrientTotals)
    recommendation: str = ""
    recommendation_options: list[str] = Field(default_factory=list)
    size_label: str = "medium"
    size_weight: float = Field(default=1.0, ge=0.5, le=2.0)
    confidence: Confidence = "medium"
