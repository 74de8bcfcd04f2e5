"""Services for managing recipes."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol

from meal_planner.domain.food import NutritionInfo
from meal_planner.domain.meals import Meal, RecipeIngredient
from meal_planner.services.cache import CatalogCache
from meal_planner.services.cost import aggregate_cost
from meal_planner.services.ids import generate_id
from meal_planner.services.nutrition import aggregate

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecipePreview:
    """Totals for an ad-hoc ingredient list."""

    nutrition: NutritionInfo
    cost: float
    skipped_ids: list[str]


class MealRepository(Protocol):
    """Persistence interface for recipes."""

    def list_meals(self) -> list[Meal]:
        """Return every meal."""

    def get_meal(self, meal_id: str) -> Meal | None:
        """Return a meal by id, if present."""

    def get_meals(self, meal_ids: list[str]) -> list[Meal]:
        """Return the meals matching the given ids."""

    def create_meal(self, meal: Meal) -> Meal:
        """Insert a meal and return it."""

    def update_meal(self, meal: Meal) -> Meal | None:
        """Replace a meal, returning None when it does not exist."""

    def delete_meal(self, meal_id: str) -> bool:
        """Delete a meal, returning whether a row was removed."""


@dataclass
class RecipeService:
    """Application service for recipe CRUD with denormalized totals."""

    repository: MealRepository
    catalog_cache: CatalogCache

    def list_meals(self, category: str | None = None) -> list[Meal]:
        meals = self.repository.list_meals()
        if category:
            meals = [meal for meal in meals if category in meal.categories]
        return meals

    def get_meal(self, meal_id: str) -> Meal | None:
        return self.repository.get_meal(meal_id)

    def create_meal(self, meal: Meal) -> Meal:
        """Create a meal, filling missing totals from the current catalog."""
        if not meal.id or self.repository.get_meal(meal.id) is not None:
            meal = replace(meal, id=generate_id())
        if meal.calculated_nutrition is None or not meal.total_cost:
            computed = self.with_totals(meal)
            meal = replace(
                meal,
                calculated_nutrition=(
                    meal.calculated_nutrition or computed.calculated_nutrition
                ),
                total_cost=meal.total_cost or computed.total_cost,
            )
        created = self.repository.create_meal(meal)
        _logger.info("Meal created: id=%s", created.id)
        return created

    def update_meal(self, meal: Meal) -> Meal | None:
        """Update a meal, always recomputing its totals."""
        return self.repository.update_meal(self.with_totals(meal))

    def delete_meal(self, meal_id: str) -> bool:
        return self.repository.delete_meal(meal_id)

    def with_totals(self, meal: Meal) -> Meal:
        """Return the meal with 1-portion nutrition and cost recomputed."""
        catalog = self.catalog_cache.get()
        return replace(
            meal,
            calculated_nutrition=aggregate(meal.ingredients, catalog),
            total_cost=aggregate_cost(meal.ingredients, catalog),
        )

    def preview(
        self, ingredients: list[RecipeIngredient], portions: float = 1
    ) -> RecipePreview:
        """Compute nutrition and cost for unsaved ingredients."""
        catalog = self.catalog_cache.get()
        skipped: list[str] = []
        nutrition = aggregate(
            ingredients,
            catalog,
            portions,
            on_skip=lambda ingredient: skipped.append(ingredient.food_item_id),
        )
        cost = aggregate_cost(ingredients, catalog, portions)
        return RecipePreview(nutrition=nutrition, cost=cost, skipped_ids=skipped)
