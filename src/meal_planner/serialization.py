"""Conversion between domain models and stored JSON rows."""

import logging
from collections.abc import Mapping

from meal_planner.domain.food import FoodItem, NutritionInfo
from meal_planner.domain.meals import CustomMeal, Meal, RecipeIngredient

_logger = logging.getLogger(__name__)


def coerce_amount(raw: object) -> float:
    """Coerce an ingredient amount to a number; "to taste" and blanks become 0.

    The sign is kept so callers can reject negative input.
    """
    if isinstance(raw, bool):
        return 0.0
    if isinstance(raw, int | float):
        return float(raw)
    if isinstance(raw, str):
        cleaned = raw.strip().replace(",", ".")
        try:
            return float(cleaned)
        except ValueError:
            if cleaned:
                _logger.debug("Non-numeric amount coerced to 0: %r", raw)
            return 0.0
    return 0.0


def parse_amount(raw: object) -> float:
    """Coerce a stored ingredient amount, clamping negatives to 0."""
    amount = coerce_amount(raw)
    if amount < 0:
        _logger.warning("Negative amount clamped to 0: %r", raw)
        return 0.0
    return amount


def _optional_float(raw: object) -> float | None:
    if raw is None or raw == "":
        return None
    return float(raw)


def nutrition_from_json(raw: Mapping[str, object] | None) -> NutritionInfo:
    data = raw or {}
    return NutritionInfo(
        calories=float(data.get("calories") or 0),
        protein=float(data.get("protein") or 0),
        carbs=float(data.get("carbs") or 0),
        fat=float(data.get("fat") or 0),
        fiber=_optional_float(data.get("fiber")),
        sugar=_optional_float(data.get("sugar")),
    )


def nutrition_to_json(nutrition: NutritionInfo) -> dict[str, object]:
    payload: dict[str, object] = {
        "calories": nutrition.calories,
        "protein": nutrition.protein,
        "carbs": nutrition.carbs,
        "fat": nutrition.fat,
    }
    if nutrition.fiber is not None:
        payload["fiber"] = nutrition.fiber
    if nutrition.sugar is not None:
        payload["sugar"] = nutrition.sugar
    return payload


def ingredient_from_json(raw: Mapping[str, object]) -> RecipeIngredient:
    return RecipeIngredient(
        food_item_id=str(raw.get("foodItemId") or raw.get("food_item_id") or ""),
        amount=parse_amount(raw.get("amount")),
        unit=str(raw.get("unit") or "g"),
    )


def ingredient_to_json(ingredient: RecipeIngredient) -> dict[str, object]:
    return {
        "foodItemId": ingredient.food_item_id,
        "amount": ingredient.amount,
        "unit": ingredient.unit,
    }


def food_item_from_row(row: Mapping[str, object]) -> FoodItem:
    """Parse a food item row into a domain model."""
    return FoodItem(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        category=str(row.get("category", "")),
        units=str(row.get("units") or "g"),
        nutrition_per_100g=nutrition_from_json(row.get("nutrition_per_100g")),
        price=float(row.get("price") or 0.0),
        price_unit=str(row.get("price_unit") or "per 100g"),
        weight_per_piece=_optional_float(row.get("weight_per_piece")),
    )


def food_item_to_row(item: FoodItem) -> dict[str, object]:
    return {
        "id": item.id,
        "name": item.name,
        "category": item.category,
        "units": item.units,
        "nutrition_per_100g": nutrition_to_json(item.nutrition_per_100g),
        "price": item.price,
        "price_unit": item.price_unit,
        "weight_per_piece": item.weight_per_piece,
    }


def meal_from_row(row: Mapping[str, object]) -> Meal:
    """Parse a meal row into a domain model."""
    nutrition_raw = row.get("calculated_nutrition")
    total_cost = row.get("total_cost")
    return Meal(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        description=str(row.get("description") or ""),
        categories=[str(value) for value in row.get("categories") or []],
        preparation_time=int(row.get("preparation_time") or 30),
        image=row.get("image"),
        ingredients=[
            ingredient_from_json(value) for value in row.get("ingredients") or []
        ],
        instructions=[str(value) for value in row.get("instructions") or []],
        calculated_nutrition=(
            nutrition_from_json(nutrition_raw) if nutrition_raw else None
        ),
        total_cost=float(total_cost) if total_cost is not None else None,
        created_by=row.get("created_by"),
    )


def meal_to_row(meal: Meal) -> dict[str, object]:
    return {
        "id": meal.id,
        "name": meal.name,
        "description": meal.description,
        "categories": list(meal.categories),
        "preparation_time": meal.preparation_time,
        "image": meal.image,
        "ingredients": [ingredient_to_json(value) for value in meal.ingredients],
        "instructions": list(meal.instructions),
        "calculated_nutrition": (
            nutrition_to_json(meal.calculated_nutrition)
            if meal.calculated_nutrition
            else None
        ),
        "total_cost": meal.total_cost,
        "created_by": meal.created_by,
    }


def custom_meal_from_json(raw: Mapping[str, object]) -> CustomMeal:
    return CustomMeal(
        id=str(raw.get("id") or raw.get("tempId") or ""),
        name=str(raw.get("name") or "Snack libre"),
        ingredients=[
            ingredient_from_json(value)
            for value in raw.get("ingredients") or []
            if isinstance(value, Mapping)
        ],
    )


def custom_meal_to_json(meal: CustomMeal) -> dict[str, object]:
    return {
        "type": "custom",
        "id": meal.id,
        "name": meal.name,
        "ingredients": [ingredient_to_json(value) for value in meal.ingredients],
    }
