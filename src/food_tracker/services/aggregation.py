"""Daily and weekly aggregation of meal entries.

All functions here are pure: they read entries, never mutate them, and
return fresh summary values on every call.
"""

from collections.abc import Iterable, Sequence
from datetime import date, timedelta

from food_tracker.domain.entries import MealEntry
from food_tracker.domain.nutrients import (
    NUTRIENT_KEYS,
    NutrientKind,
    NutrientTotals,
    nutrient_kind,
)
from food_tracker.domain.summaries import (
    DayContext,
    DaySummary,
    NutrientCoverage,
    RecentMeal,
    TrafficColor,
    WeekSummary,
)
from food_tracker.services.entry_meta import decode_entry_meta
from food_tracker.services.nutrients import add_nutrients
from food_tracker.services.units import clamp, get_day_key, round_half_up, today_in

MAX_COVERAGE_PERCENT = 140
FILL_GOOD_PERCENT = 100
FILL_WARN_PERCENT = 75
LIMIT_GOOD_RATIO = 70
LIMIT_WARN_RATIO = 100
DAYS_PER_WEEK = 7
MAX_CONTEXT_MEALS = 50
MAX_RECENT_MEALS = 8


def entry_weight(entry: MealEntry) -> float:
    """Return the portion weight of an entry, 1 when unknown."""
    return entry.size_weight if entry.size_weight is not None else 1.0


def weighted_average(entries: Iterable[MealEntry]) -> int:
    """Return the size-weighted average optimal score, 0 when empty."""
    total = 0.0
    weight_sum = 0.0
    for entry in entries:
        weight = entry_weight(entry)
        total += entry.whole_foods_percent * weight
        weight_sum += weight
    if not weight_sum:
        return 0
    return round_half_up(total / weight_sum)


def sum_nutrients_for_entries(entries: Iterable[MealEntry]) -> NutrientTotals:
    """Add up nutrients from every entry that carries decodable metadata."""
    totals = NutrientTotals()
    for entry in entries:
        meta = decode_entry_meta(entry.notes)
        if meta is None:
            continue
        totals = add_nutrients(totals, meta.nutrients)
    return totals


def average_feel(entries: Iterable[MealEntry]) -> float | None:
    """Return the mean feel-after rating, or None when nobody rated."""
    ratings = []
    for entry in entries:
        meta = decode_entry_meta(entry.notes)
        if meta is not None and meta.feel_after is not None:
            ratings.append(meta.feel_after)
    if not ratings:
        return None
    return sum(ratings) / len(ratings)


def group_by_day(
    entries: Iterable[MealEntry], timezone_name: str | None = None
) -> dict[str, list[MealEntry]]:
    """Partition entries by local day key."""
    grouped: dict[str, list[MealEntry]] = {}
    for entry in entries:
        day_key = get_day_key(entry.timestamp, timezone_name)
        grouped.setdefault(day_key, []).append(entry)
    return grouped


def compute_streak(
    entries: Iterable[MealEntry],
    goal_percent: float,
    *,
    today: date | None = None,
    timezone_name: str | None = None,
) -> int:
    """Count consecutive days, ending today, whose average meets the goal.

    A day without entries ends the streak.
    """
    daily = group_by_day(entries, timezone_name)
    if not daily:
        return 0
    cursor = today or today_in(timezone_name)
    streak = 0
    while True:
        day_entries = daily.get(get_day_key(cursor))
        if not day_entries or weighted_average(day_entries) < goal_percent:
            return streak
        streak += 1
        cursor -= timedelta(days=1)


def coverage_ratio(actual: float, target: float) -> float:
    """Return actual as an unclamped percentage of target."""
    if target <= 0:
        return 0.0
    return actual / target * 100


def coverage_percent(actual: float, target: float) -> int:
    """Return coverage as a whole percentage capped at 140."""
    if target <= 0:
        return 0
    percent = round_half_up(coverage_ratio(actual, target))
    return int(clamp(percent, 0, MAX_COVERAGE_PERCENT))


def traffic_color(
    actual: float, target: float, kind: NutrientKind = "target_fill"
) -> TrafficColor:
    """Band coverage into good/warn/bad using the nutrient's policy."""
    if target <= 0:
        return "unknown"
    if kind == "upper_bound":
        ratio = coverage_ratio(actual, target)
        if ratio <= LIMIT_GOOD_RATIO:
            return "good"
        if ratio <= LIMIT_WARN_RATIO:
            return "warn"
        return "bad"
    percent = coverage_percent(actual, target)
    if percent >= FILL_GOOD_PERCENT:
        return "good"
    if percent >= FILL_WARN_PERCENT:
        return "warn"
    return "bad"


def nutrient_coverage(key: str, actual: float, target: float) -> NutrientCoverage:
    kind = nutrient_kind(key)
    return NutrientCoverage(
        key=key,
        kind=kind,
        actual=actual,
        target=target,
        percent=coverage_percent(actual, target),
        ratio=coverage_ratio(actual, target),
        color=traffic_color(actual, target, kind),
    )


def coverage_table(
    totals: NutrientTotals, targets: NutrientTotals, scale: float = 1.0
) -> dict[str, NutrientCoverage]:
    """Compute coverage for every nutrient; ``scale`` multiplies targets."""
    return {
        key: nutrient_coverage(key, totals.value(key), targets.value(key) * scale)
        for key in NUTRIENT_KEYS
    }


def summarize_day(
    entries: Iterable[MealEntry],
    day: date,
    targets: NutrientTotals,
    timezone_name: str | None = None,
) -> DaySummary:
    """Aggregate the entries that fall on one local day."""
    day_key = get_day_key(day)
    day_entries = [
        entry
        for entry in entries
        if get_day_key(entry.timestamp, timezone_name) == day_key
    ]
    totals = sum_nutrients_for_entries(day_entries)
    return DaySummary(
        day_key=day_key,
        entry_count=len(day_entries),
        average_score=weighted_average(day_entries),
        feel_average=average_feel(day_entries),
        totals=totals,
        coverage=coverage_table(totals, targets),
    )


def summarize_week(
    entries: Iterable[MealEntry],
    end_day: date,
    targets: NutrientTotals,
    timezone_name: str | None = None,
) -> WeekSummary:
    """Aggregate the seven days ending on ``end_day``."""
    daily = group_by_day(entries, timezone_name)
    start_day = end_day - timedelta(days=DAYS_PER_WEEK - 1)
    days: list[DaySummary] = []
    week_entries: list[MealEntry] = []
    for offset in range(DAYS_PER_WEEK):
        day = start_day + timedelta(days=offset)
        day_entries = daily.get(get_day_key(day), [])
        week_entries.extend(day_entries)
        days.append(summarize_day(day_entries, day, targets, timezone_name))

    totals = sum_nutrients_for_entries(week_entries)
    return WeekSummary(
        start_key=get_day_key(start_day),
        end_key=get_day_key(end_day),
        days=days,
        entry_count=len(week_entries),
        average_score=weighted_average(week_entries),
        totals=totals,
        coverage=coverage_table(totals, targets, scale=DAYS_PER_WEEK),
    )


def build_day_context(
    entries: Sequence[MealEntry], day: date, timezone_name: str | None = None
) -> DayContext:
    """Describe what has been eaten so far on ``day``."""
    day_key = get_day_key(day)
    day_entries = sorted(
        (
            entry
            for entry in entries
            if get_day_key(entry.timestamp, timezone_name) == day_key
        ),
        key=lambda entry: entry.timestamp,
        reverse=True,
    )
    recent = []
    for entry in day_entries:
        if not entry.meal_text.strip():
            continue
        meta = decode_entry_meta(entry.notes)
        recent.append(
            RecentMeal(
                meal_text=entry.meal_text.strip(),
                optimal_score=int(clamp(entry.whole_foods_percent, 0, 100)),
                feel_after=meta.feel_after if meta else None,
            )
        )
    return DayContext(
        date=day_key,
        meal_count=min(len(day_entries), MAX_CONTEXT_MEALS),
        daily_optimal_average=weighted_average(day_entries),
        feel_average=average_feel(day_entries),
        nutrients_consumed=sum_nutrients_for_entries(day_entries),
        recent_meals=recent[:MAX_RECENT_MEALS],
    )
