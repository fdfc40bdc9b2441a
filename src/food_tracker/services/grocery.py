"""Weekly grocery staples sized to macro targets."""

from food_tracker.domain.summaries import GroceryPlan
from food_tracker.services.nutrients import to_record
from food_tracker.services.units import clamp, round_half_up, to_number

DAYS_PER_WEEK = 7

# key: (default, min, max)
_MACRO_LIMITS: dict[str, tuple[float, float, float]] = {
    "protein_g": (160, 60, 350),
    "carbs_g": (220, 80, 600),
    "fat_g": (70, 30, 220),
    "fiber_g": (30, 10, 80),
}


def normalize_macro_targets(raw: object) -> dict[str, int]:
    """Return daily protein/carbs/fat/fiber targets within sane limits."""
    values = to_record(raw)
    return {
        key: int(clamp(round_half_up(to_number(values.get(key), default)), low, high))
        for key, (default, low, high) in _MACRO_LIMITS.items()
    }


def _servings(amount: float, per_serving: float) -> int:
    return int(clamp(round_half_up(amount / per_serving), 14, 42))


def build_grocery_plan(targets: object) -> GroceryPlan:
    """Build a simple weekly staples list covering macro targets."""
    daily = normalize_macro_targets(targets)
    weekly = {key: value * DAYS_PER_WEEK for key, value in daily.items()}
    protein_servings = _servings(weekly["protein_g"], 30)
    carb_servings = _servings(weekly["carbs_g"], 45)
    fiber_servings = _servings(weekly["fiber_g"], 8)
    bean_cans = max(6, round_half_up(fiber_servings / 2))
    return GroceryPlan(
        summary=(
            "Simple weekly staples to cover your protein, carbs, fat, "
            "and fiber targets."
        ),
        items=[
            "Lean protein base (chicken, turkey, tuna, tofu, or tempeh): "
            f"{protein_servings} servings",
            "Eggs or egg whites: 1-2 cartons/dozen",
            "Greek yogurt or cottage cheese: 4-7 single servings",
            "Carb base (rice, potatoes, oats, or whole-grain wraps): "
            f"{carb_servings} servings",
            f"Beans or lentils (canned works): {bean_cans} cans",
            "Frozen vegetables (any mix): 4-7 bags",
            "Fruit (banana, apple, berries, or frozen fruit): 14-21 servings",
            "Healthy fats (olive oil, avocado, nuts/seeds): 7-14 servings",
        ],
        weekly_macros=weekly,
    )
