"""Conversion of ingredient amounts into gram equivalents."""

from meal_planner.domain.food import FoodItem
from meal_planner.domain.meals import RecipeIngredient

DEFAULT_PIECE_WEIGHT_G = 100.0
DEFAULT_UNIT_MULTIPLIER = 100.0

# Average piece weights in grams, keyed by food item id.
PIECE_WEIGHT_OVERRIDES: dict[str, float] = {
    "egg": 50.0,
    "eggs": 50.0,
    "oeuf": 50.0,
    "avocado": 170.0,
    "avocat": 170.0,
    "bread-slice": 30.0,
    "tranche-pain": 30.0,
}


def piece_weight(food_item: FoodItem) -> float:
    """Return grams per piece for a piece-measured item."""
    if food_item.weight_per_piece and food_item.weight_per_piece > 0:
        return food_item.weight_per_piece
    return PIECE_WEIGHT_OVERRIDES.get(food_item.id, DEFAULT_PIECE_WEIGHT_G)


def to_grams(ingredient: RecipeIngredient, food_item: FoodItem) -> float:
    """Convert an ingredient amount to grams for per-100g scaling.

    ``ml`` is treated as grams. Spoon and cup measures, and pieces of items
    not measured in pieces, fall back to a flat multiplier of 100.
    """
    amount = float(ingredient.amount)
    if ingredient.unit in {"g", "ml"}:
        return amount
    if ingredient.unit == "piece" and food_item.units == "piece":
        return amount * piece_weight(food_item)
    return amount * DEFAULT_UNIT_MULTIPLIER
