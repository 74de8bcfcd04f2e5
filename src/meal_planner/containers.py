"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from meal_planner.adapters.supabase_food_item_repository import (
    SupabaseFoodItemRepository,
)
from meal_planner.adapters.supabase_meal_plan_repository import (
    SupabaseMealPlanRepository,
)
from meal_planner.adapters.supabase_meal_repository import SupabaseMealRepository
from meal_planner.config import Settings
from meal_planner.services.cache import CatalogCache
from meal_planner.services.catalog import FoodCatalogService
from meal_planner.services.plans import MealPlanService
from meal_planner.services.recipes import RecipeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_cache: CatalogCache
    catalog_service: FoodCatalogService
    recipe_service: RecipeService
    meal_plan_service: MealPlanService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_item_repository = SupabaseFoodItemRepository(supabase_client)
    meal_repository = SupabaseMealRepository(supabase_client)
    meal_plan_repository = SupabaseMealPlanRepository(supabase_client)
    catalog_cache = CatalogCache(food_item_repository.list_food_items)
    catalog_service = FoodCatalogService(food_item_repository, catalog_cache)
    recipe_service = RecipeService(meal_repository, catalog_cache)
    meal_plan_service = MealPlanService(
        repository=meal_plan_repository,
        meal_repository=meal_repository,
        catalog_cache=catalog_cache,
    )

    async def close_resources() -> None:
        catalog_cache.invalidate()

    return AppContainer(
        settings=resolved_settings,
        catalog_cache=catalog_cache,
        catalog_service=catalog_service,
        recipe_service=recipe_service,
        meal_plan_service=meal_plan_service,
        close_resources=close_resources,
    )
