"""Tests for recipe cost aggregation."""

import pytest

from meal_planner.domain.meals import RecipeIngredient
from meal_planner.services.cache import CatalogSnapshot
from meal_planner.services.cost import aggregate_cost, priced_quantity
from tests.conftest import make_food_item, sample_food_items


@pytest.fixture
def catalog() -> CatalogSnapshot:
    return CatalogSnapshot.from_items(
        [
            *sample_food_items(),
            make_food_item("oil", price=1.0, price_unit="per 100ml"),
            make_food_item("butter", price=1.0, price_unit="per 100g"),
            make_food_item("bun", units="piece", price=2.0, price_unit="per 100g"),
        ]
    )


def test_per_100g_pricing(catalog: CatalogSnapshot) -> None:
    assert aggregate_cost([RecipeIngredient("veg-1", 200, "g")], catalog) == 1.0


def test_piece_priced_item(catalog: CatalogSnapshot) -> None:
    assert aggregate_cost([RecipeIngredient("egg", 3, "piece")], catalog) == 0.9


def test_matching_units_use_amount_directly(catalog: CatalogSnapshot) -> None:
    assert aggregate_cost([RecipeIngredient("milk", 500, "ml")], catalog) == 0.6
    assert aggregate_cost([RecipeIngredient("bun", 3, "piece")], catalog) == 0.06


def test_ml_against_ml_price(catalog: CatalogSnapshot) -> None:
    oil = catalog.resolve("oil")
    assert oil is not None

    assert priced_quantity(RecipeIngredient("oil", 50, "ml"), oil) == 50
    assert aggregate_cost([RecipeIngredient("oil", 50, "ml")], catalog) == 0.5


def test_unmatched_units_fall_back_to_multiplier(catalog: CatalogSnapshot) -> None:
    assert aggregate_cost([RecipeIngredient("butter", 50, "ml")], catalog) == 50.0
    assert aggregate_cost([RecipeIngredient("rice", 2, "tbsp")], catalog) == 0.4


def test_unknown_item_costs_nothing(catalog: CatalogSnapshot) -> None:
    skipped: list[str] = []
    ingredients = [
        RecipeIngredient("veg-1", 200, "g"),
        RecipeIngredient("ghost", 1, "piece"),
    ]

    cost = aggregate_cost(
        ingredients,
        catalog,
        on_skip=lambda ingredient: skipped.append(ingredient.food_item_id),
    )

    assert cost == 1.0
    assert skipped == ["ghost"]


def test_cost_is_linear_in_portions(catalog: CatalogSnapshot) -> None:
    ingredients = [
        RecipeIngredient("veg-1", 200, "g"),
        RecipeIngredient("egg", 2, "piece"),
    ]

    single = aggregate_cost(ingredients, catalog)
    triple = aggregate_cost(ingredients, catalog, portions=3)

    assert single == 1.6
    assert triple == pytest.approx(3 * single)


def test_empty_list_costs_nothing(catalog: CatalogSnapshot) -> None:
    assert aggregate_cost([], catalog) == 0
