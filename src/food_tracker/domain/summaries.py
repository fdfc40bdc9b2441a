"""Domain models for aggregated daily and weekly views."""

from dataclasses import dataclass, field
from typing import Literal

from food_tracker.domain.nutrients import NutrientKind, NutrientTotals

TrafficColor = Literal["good", "warn", "bad", "unknown"]


@dataclass(frozen=True)
class NutrientCoverage:
    """Coverage of a single nutrient against its target."""

    key: str
    kind: NutrientKind
    actual: float
    target: float
    percent: int
    ratio: float
    color: TrafficColor


@dataclass(frozen=True)
class DaySummary:
    """Aggregated view of one local calendar day."""

    day_key: str
    entry_count: int
    average_score: int
    feel_average: float | None
    totals: NutrientTotals
    coverage: dict[str, NutrientCoverage]


@dataclass(frozen=True)
class WeekSummary:
    """Seven consecutive days ending on the last day key."""

    start_key: str
    end_key: str
    days: list[DaySummary]
    entry_count: int
    average_score: int
    totals: NutrientTotals
    coverage: dict[str, NutrientCoverage]


@dataclass(frozen=True)
class RecentMeal:
    """Short description of a meal eaten earlier in the day."""

    meal_text: str
    optimal_score: int
    feel_after: int | None


@dataclass(frozen=True)
class DayContext:
    """Snapshot of the day sent along with an estimation request."""

    date: str
    meal_count: int
    daily_optimal_average: int
    feel_average: float | None
    nutrients_consumed: NutrientTotals
    recent_meals: list[RecentMeal] = field(default_factory=list)


@dataclass(frozen=True)
class DashboardOverview:
    """Headline numbers for the daily log screen."""

    today_key: str
    today_count: int
    today_average: int
    all_time_average: int
    streak: int
    goal_percent: int


@dataclass(frozen=True)
class GroceryPlan:
    """Weekly staples list sized to macro targets."""

    summary: str
    items: list[str]
    weekly_macros: dict[str, int]
