"""Cost aggregation over recipe ingredients."""

from collections.abc import Iterable

from meal_planner.domain.food import FoodItem
from meal_planner.domain.meals import RecipeIngredient
from meal_planner.services.cache import Catalog
from meal_planner.services.nutrition import SkipCallback, resolve_ingredient
from meal_planner.services.units import DEFAULT_UNIT_MULTIPLIER


def priced_quantity(ingredient: RecipeIngredient, food_item: FoodItem) -> float:
    """Return the quantity the item's price applies to."""
    amount = float(ingredient.amount)
    if ingredient.unit == food_item.units:
        return amount
    if ingredient.unit == "piece" and food_item.priced_per_piece:
        return amount
    if ingredient.unit == "ml" and "ml" in food_item.price_unit:
        return amount
    if ingredient.unit == "g":
        return amount
    return amount * DEFAULT_UNIT_MULTIPLIER


def ingredient_cost(ingredient: RecipeIngredient, food_item: FoodItem) -> float:
    """Return the unrounded cost of one ingredient line."""
    quantity = priced_quantity(ingredient, food_item)
    if food_item.priced_per_100g:
        return quantity / 100 * food_item.price
    return quantity * food_item.price


def aggregate_cost(
    ingredients: Iterable[RecipeIngredient],
    catalog: Catalog,
    portions: float = 1,
    on_skip: SkipCallback | None = None,
) -> float:
    """Sum the cost of a recipe, scaled by ``portions`` and rounded to cents."""
    total = 0.0
    for ingredient in ingredients:
        food_item = resolve_ingredient(catalog, ingredient, on_skip)
        if food_item is None:
            continue
        total += ingredient_cost(ingredient, food_item)
    return round(total * portions, 2)
