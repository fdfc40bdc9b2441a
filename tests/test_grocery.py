"""Tests for the weekly grocery staples plan."""

from food_tracker.domain.nutrients import NutrientTotals
from food_tracker.services.grocery import build_grocery_plan, normalize_macro_targets


def test_normalize_macro_targets_defaults_and_clamps() -> None:
    assert normalize_macro_targets({}) == {
        "protein_g": 160,
        "carbs_g": 220,
        "fat_g": 70,
        "fiber_g": 30,
    }
    assert normalize_macro_targets({"protein_g": 999, "fiber_g": 2})["protein_g"] == 350
    assert normalize_macro_targets({"fiber_g": 2})["fiber_g"] == 10


def test_grocery_plan_scales_servings() -> None:
    plan = build_grocery_plan(
        NutrientTotals(protein_g=131, carbs_g=196, fat_g=65, fiber_g=38)
    )

    assert plan.weekly_macros == {
        "protein_g": 917,
        "carbs_g": 1372,
        "fat_g": 455,
        "fiber_g": 266,
    }
    # 266 / 8 = 33.25 servings of fiber -> 17 cans
    assert "31 servings" in plan.items[0]
    assert "30 servings" in plan.items[3]
    assert "17 cans" in plan.items[4]
    assert len(plan.items) == 8
