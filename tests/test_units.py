"""Tests for gram-equivalent conversion."""

from meal_planner.domain.meals import RecipeIngredient
from meal_planner.services.units import piece_weight, to_grams
from tests.conftest import make_food_item


def test_grams_and_millilitres_pass_through() -> None:
    item = make_food_item("rice")

    assert to_grams(RecipeIngredient("rice", 200, "g"), item) == 200
    assert to_grams(RecipeIngredient("rice", 250, "ml"), item) == 250


def test_piece_uses_override_table() -> None:
    egg = make_food_item("egg", units="piece")
    avocado = make_food_item("avocado", units="piece")

    assert to_grams(RecipeIngredient("egg", 2, "piece"), egg) == 100
    assert to_grams(RecipeIngredient("avocado", 1, "piece"), avocado) == 170


def test_piece_defaults_to_100g() -> None:
    bagel = make_food_item("bagel", units="piece")

    assert piece_weight(bagel) == 100
    assert to_grams(RecipeIngredient("bagel", 1.5, "piece"), bagel) == 150


def test_item_piece_weight_takes_precedence() -> None:
    egg = make_food_item("egg", units="piece", weight_per_piece=60)

    assert to_grams(RecipeIngredient("egg", 2, "piece"), egg) == 120


def test_other_units_use_flat_multiplier() -> None:
    rice = make_food_item("rice")

    assert to_grams(RecipeIngredient("rice", 2, "tbsp"), rice) == 200
    assert to_grams(RecipeIngredient("rice", 1, "cup"), rice) == 100
    assert to_grams(RecipeIngredient("rice", 1, "piece"), rice) == 100
