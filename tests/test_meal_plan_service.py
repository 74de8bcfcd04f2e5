"""Tests for the weekly meal plan service."""

import random
from datetime import date

import pytest

from meal_planner.domain.food import NutritionInfo
from meal_planner.domain.meals import CustomMeal, Meal, MealPlanEntry, RecipeIngredient
from meal_planner.services.cache import CatalogCache
from meal_planner.services.plans import (
    MealPlanService,
    empty_day_plan,
    fill_empty_slots,
    plan_id_for,
    simplify_days,
    week_start,
)
from tests.conftest import (
    InMemoryFoodItemRepository,
    InMemoryMealPlanRepository,
    InMemoryMealRepository,
)

WEDNESDAY = date(2024, 5, 15)


@pytest.fixture
def service(
    food_item_repository: InMemoryFoodItemRepository,
    meal_repository: InMemoryMealRepository,
    meal_plan_repository: InMemoryMealPlanRepository,
) -> MealPlanService:
    meal_repository.meals["porridge"] = Meal(
        id="porridge",
        name="Porridge",
        categories=["breakfast"],
        ingredients=[RecipeIngredient("milk", 200, "ml")],
        calculated_nutrition=NutritionInfo(calories=300, protein=8, carbs=40, fat=6),
        total_cost=0.5,
    )
    return MealPlanService(
        repository=meal_plan_repository,
        meal_repository=meal_repository,
        catalog_cache=CatalogCache(food_item_repository.list_food_items),
    )


def test_week_helpers_normalize_to_monday() -> None:
    assert week_start(WEDNESDAY) == date(2024, 5, 13)
    assert week_start(date(2024, 5, 13)) == date(2024, 5, 13)
    assert plan_id_for("clara", WEDNESDAY) == "clara-20240513"


def test_unsaved_week_is_empty_template(service: MealPlanService) -> None:
    plan = service.get_week("clara", WEDNESDAY)

    assert plan.id == "clara-20240513"
    assert list(plan.days) == [
        "Monday",
        "Tuesday",
        "Wednesday",
        "Thursday",
        "Friday",
        "Saturday",
        "Sunday",
    ]
    assert plan.days["Monday"] == {
        "Breakfast": None,
        "Lunch": None,
        "Dinner": None,
        "Snack": [],
    }


def test_save_and_load_round_trip(
    service: MealPlanService, meal_plan_repository: InMemoryMealPlanRepository
) -> None:
    plan_data = {
        "Monday": {
            "Breakfast": {"id": "porridge", "portions": 2},
            "Lunch": None,
            "Dinner": {"id": "deleted-meal", "portions": 1},
            "Snack": [
                {
                    "type": "custom",
                    "id": "tmp-1",
                    "name": "Apple",
                    "ingredients": [
                        {"foodItemId": "veg-1", "amount": 200, "unit": "g"}
                    ],
                    "portions": 1,
                }
            ],
        }
    }

    saved = service.save_week("clara", WEDNESDAY, plan_data)
    loaded = service.get_week("clara", date(2024, 5, 19))

    monday = loaded.days["Monday"]
    assert saved.days == loaded.days
    assert monday["Breakfast"].meal.kind == "catalog"
    assert monday["Breakfast"].portions == 2
    assert monday["Dinner"] is None
    assert monday["Snack"][0].meal.kind == "custom"
    stored = meal_plan_repository.plans["clara-20240513"].plan_data
    assert stored["Monday"]["Breakfast"] == {"id": "porridge", "portions": 2.0}
    assert stored["Monday"]["Dinner"] is None

    totals = service.totals(loaded)
    assert totals["Monday"].calories == 600 + 104
    assert totals["Monday"].cost == 2.0


def test_plans_are_per_user(service: MealPlanService) -> None:
    service.save_week(
        "clara", WEDNESDAY, {"Monday": {"Breakfast": {"id": "porridge"}}}
    )

    julien = service.get_week("julien", WEDNESDAY)

    assert julien.days["Monday"]["Breakfast"] is None


def test_clear_week(service: MealPlanService) -> None:
    service.save_week("clara", WEDNESDAY, {"Monday": {"Lunch": None}})

    assert service.clear_week("clara", WEDNESDAY)
    assert not service.clear_week("clara", WEDNESDAY)


def test_simplify_days_keeps_custom_meals_inline() -> None:
    custom = CustomMeal(
        id="tmp", name="Mix", ingredients=[RecipeIngredient("rice", 50, "g")]
    )
    simplified = simplify_days(
        {"Friday": {"Snack": [MealPlanEntry(custom, portions=1.5)], "Lunch": None}}
    )

    assert simplified == {
        "Friday": {
            "Snack": [
                {
                    "type": "custom",
                    "id": "tmp",
                    "name": "Mix",
                    "ingredients": [
                        {"foodItemId": "rice", "amount": 50, "unit": "g"}
                    ],
                    "portions": 1.5,
                }
            ],
            "Lunch": None,
        }
    }


def test_save_accepts_nested_meal_entries(service: MealPlanService) -> None:
    saved = service.save_week(
        "clara",
        WEDNESDAY,
        {
            "Monday": {
                "Lunch": {
                    "meal": {"type": "catalog", "id": "porridge", "name": "Porridge"},
                    "portions": 2,
                },
                "Snack": [
                    {
                        "meal": {
                            "type": "custom",
                            "id": "tmp",
                            "ingredients": [
                                {"foodItemId": "veg-1", "amount": 100, "unit": "g"}
                            ],
                        },
                        "portions": 1,
                    }
                ],
            }
        },
    )

    monday = saved.days["Monday"]
    assert monday["Lunch"].meal.id == "porridge"
    assert monday["Lunch"].portions == 2
    assert monday["Snack"][0].meal.kind == "custom"


def test_invalid_stored_portions_reset_to_one(
    service: MealPlanService, meal_plan_repository: InMemoryMealPlanRepository
) -> None:
    saved = service.save_week(
        "clara",
        WEDNESDAY,
        {
            "Monday": {
                "Breakfast": {"id": "porridge", "portions": "two"},
                "Dinner": {"id": "porridge", "portions": -1},
            }
        },
    )

    assert saved.days["Monday"]["Breakfast"].portions == 1
    assert saved.days["Monday"]["Dinner"].portions == 1


def _meal(meal_id: str, *categories: str) -> Meal:
    return Meal(
        id=meal_id, name=meal_id.title(), categories=list(categories), ingredients=[]
    )


def test_fill_empty_slots_matches_categories() -> None:
    custom = CustomMeal(id="tmp", ingredients=[])
    days = {"Monday": {"Breakfast": MealPlanEntry(custom, portions=2), "Snack": []}}
    meals = [
        _meal("porridge", "breakfast"),
        _meal("stew", "lunch", "dinner"),
        _meal("apple", "snack"),
        _meal("soup", "appetizer"),
    ]

    filled = fill_empty_slots(days, meals, random.Random(3))

    assert list(filled) == [
        "Monday",
        "Tuesday",
        "Wednesday",
        "Thursday",
        "Friday",
        "Saturday",
        "Sunday",
    ]
    assert filled["Monday"]["Breakfast"].meal is custom
    assert filled["Monday"]["Breakfast"].portions == 2
    assert days["Monday"]["Snack"] == []
    for day in list(filled)[1:]:
        assert filled[day]["Breakfast"].meal.id == "porridge"
    for day_plan in filled.values():
        assert day_plan["Lunch"].meal.id == "stew"
        assert day_plan["Dinner"].meal.id == "stew"
        assert [entry.meal.id for entry in day_plan["Snack"]] == ["apple"]
        assert day_plan["Lunch"].portions == 1


def test_fill_empty_slots_avoids_repeats_while_candidates_remain() -> None:
    meals = [_meal(f"breakfast-{index}", "breakfast") for index in range(7)]

    filled = fill_empty_slots({}, meals, random.Random(11), slots=("Breakfast",))
    again = fill_empty_slots({}, meals, random.Random(11), slots=("Breakfast",))

    picks = [filled[day]["Breakfast"].meal.id for day in filled]
    assert len(set(picks)) == 7
    assert picks == [again[day]["Breakfast"].meal.id for day in again]


def test_fill_empty_slots_leaves_slots_without_candidates_empty() -> None:
    filled = fill_empty_slots({"Monday": {"Lunch": None}}, [], random.Random(0))

    assert filled["Monday"] == empty_day_plan()
    assert filled["Tuesday"] == empty_day_plan()


def test_generate_week_keeps_existing_entries(
    food_item_repository: InMemoryFoodItemRepository,
    meal_repository: InMemoryMealRepository,
    meal_plan_repository: InMemoryMealPlanRepository,
) -> None:
    meal_repository.meals["porridge"] = _meal("porridge", "breakfast")
    meal_repository.meals["stew"] = _meal("stew", "lunch")
    service = MealPlanService(
        repository=meal_plan_repository,
        meal_repository=meal_repository,
        catalog_cache=CatalogCache(food_item_repository.list_food_items),
        rng=random.Random(5),
    )
    service.save_week("clara", WEDNESDAY, {"Monday": {"Lunch": {"id": "porridge"}}})

    plan = service.generate_week("clara", WEDNESDAY)

    assert plan.days["Monday"]["Lunch"].meal.id == "porridge"
    assert plan.days["Tuesday"]["Lunch"].meal.id == "stew"
    assert plan.days["Sunday"]["Breakfast"].meal.id == "porridge"
    assert plan.days["Sunday"]["Dinner"] is None
    stored = meal_plan_repository.plans["clara-20240513"].plan_data
    assert stored["Friday"]["Breakfast"] == {"id": "porridge", "portions": 1.0}
