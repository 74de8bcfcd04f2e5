"""Supabase-backed recipe repository."""

from dataclasses import dataclass

from supabase import Client

from meal_planner.domain.meals import Meal
from meal_planner.serialization import meal_from_row, meal_to_row
from meal_planner.services.recipes import MealRepository

_TABLE = "meals"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for recipe persistence.

    Ingredients, instructions and cached nutrition are stored as JSON columns.
    """

    client: Client

    def list_meals(self) -> list[Meal]:
        """Return every meal, newest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [meal_from_row(row) for row in response.data or []]

    def get_meal(self, meal_id: str) -> Meal | None:
        """Return a meal by id, if present."""
        response = (
            self.client.table(_TABLE).select("*").eq("id", meal_id).limit(1).execute()
        )
        if not response.data:
            return None
        return meal_from_row(response.data[0])

    def get_meals(self, meal_ids: list[str]) -> list[Meal]:
        """Return the meals with the given ids."""
        if not meal_ids:
            return []
        response = self.client.table(_TABLE).select("*").in_("id", meal_ids).execute()
        return [meal_from_row(row) for row in response.data or []]

    def create_meal(self, meal: Meal) -> Meal:
        """Insert a meal and return the stored row."""
        response = self.client.table(_TABLE).insert(meal_to_row(meal)).execute()
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return meal_from_row(response.data[0])

    def update_meal(self, meal: Meal) -> Meal | None:
        """Replace a meal; returns None when no row matched."""
        payload = meal_to_row(meal)
        payload.pop("id")
        response = self.client.table(_TABLE).update(payload).eq("id", meal.id).execute()
        if not response.data:
            return None
        return meal_from_row(response.data[0])

    def delete_meal(self, meal_id: str) -> bool:
        """Delete a meal row."""
        response = self.client.table(_TABLE).delete().eq("id", meal_id).execute()
        return bool(response.data)
