"""Nutrition aggregation over recipe ingredients."""

import logging
import math
from collections.abc import Callable, Iterable

from meal_planner.domain.food import FoodItem, NutritionInfo
from meal_planner.domain.meals import RecipeIngredient
from meal_planner.services.cache import Catalog
from meal_planner.services.units import to_grams

SkipCallback = Callable[[RecipeIngredient], None]

_logger = logging.getLogger(__name__)

ZERO_NUTRITION = NutritionInfo(calories=0, protein=0.0, carbs=0.0, fat=0.0)


def resolve_ingredient(
    catalog: Catalog,
    ingredient: RecipeIngredient,
    on_skip: SkipCallback | None = None,
) -> FoodItem | None:
    """Look up an ingredient's food item, reporting unknown references."""
    food_item = catalog.resolve(ingredient.food_item_id)
    if food_item is None:
        _logger.debug("Skipping unknown food item: id=%s", ingredient.food_item_id)
        if on_skip is not None:
            on_skip(ingredient)
    return food_item


def round_calories(value: float) -> int:
    """Round calories half up to an integer."""
    return int(math.floor(value + 0.5))


def round_macro(value: float) -> float:
    """Round a macro amount to one decimal."""
    return round(value, 1)


def aggregate(
    ingredients: Iterable[RecipeIngredient],
    catalog: Catalog,
    portions: float = 1,
    on_skip: SkipCallback | None = None,
) -> NutritionInfo:
    """Sum nutrition for a recipe, scaled by ``portions``.

    Unknown food items contribute nothing. Fiber and sugar are only present
    in the result when at least one resolved item defines them. Rounding is
    applied once, on the scaled totals.
    """
    calories = protein = carbs = fat = 0.0
    fiber: float | None = None
    sugar: float | None = None
    for ingredient in ingredients:
        food_item = resolve_ingredient(catalog, ingredient, on_skip)
        if food_item is None:
            continue
        ratio = to_grams(ingredient, food_item) / 100
        per_100g = food_item.nutrition_per_100g
        calories += per_100g.calories * ratio
        protein += per_100g.protein * ratio
        carbs += per_100g.carbs * ratio
        fat += per_100g.fat * ratio
        if per_100g.fiber is not None:
            fiber = (fiber or 0.0) + per_100g.fiber * ratio
        if per_100g.sugar is not None:
            sugar = (sugar or 0.0) + per_100g.sugar * ratio

    return NutritionInfo(
        calories=round_calories(calories * portions),
        protein=round_macro(protein * portions),
        carbs=round_macro(carbs * portions),
        fat=round_macro(fat * portions),
        fiber=round_macro(fiber * portions) if fiber is not None else None,
        sugar=round_macro(sugar * portions) if sugar is not None else None,
    )
