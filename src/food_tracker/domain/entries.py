"""Domain models for logged meals and their metadata."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from food_tracker.domain.nutrients import NutrientTotals

Confidence = Literal["low", "medium", "high"]


class EntryValidationError(ValueError):
    """Raised when user input cannot become a meal entry."""


@dataclass(frozen=True)
class MealEntry:
    """Persisted meal entry as read by the aggregation layer."""

    id: str
    meal_text: str
    timestamp: datetime
    mood: str
    whole_foods_percent: int
    llm_reason: str = ""
    notes: str | None = None
    size_label: str | None = None
    size_weight: float | None = None


@dataclass(frozen=True)
class EntryDraft:
    """Validated fields for a new meal entry."""

    meal_text: str
    timestamp: datetime
    mood: str
    whole_foods_percent: int
    llm_reason: str
    notes: str | None
    size_label: str | None
    size_weight: float | None


class EntryMetaV2(BaseModel):
    """Versioned metadata packed into an entry's notes field."""

    model_config = ConfigDict(frozen=True)

    version: Literal[2] = 2
    feel_after: int | None = None
    nutrients: NutrientTotals = Field(default_factory=NutrientTotals)
    positive: list[str] = Field(default_factory=list)
    improve: list[str] = Field(default_factory=list)
    recommendation: str = ""
    recommendation_options: list[str] = Field(default_factory=list)
    confidence: Confidence = "medium"


# Decoded notes metadata; new versions are added to this alias.
EntryMeta = EntryMetaV2
