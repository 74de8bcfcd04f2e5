"""Supabase-backed food item repository."""

from dataclasses import dataclass

from supabase import Client

from meal_planner.domain.food import FoodItem
from meal_planner.serialization import food_item_from_row, food_item_to_row
from meal_planner.services.catalog import FoodItemRepository

_TABLE = "food_items"


@dataclass
class SupabaseFoodItemRepository(FoodItemRepository):
    """Supabase implementation for catalog persistence."""

    client: Client

    def list_food_items(self) -> list[FoodItem]:
        """Return every food item ordered by name."""
        response = self.client.table(_TABLE).select("*").order("name").execute()
        return [food_item_from_row(row) for row in response.data or []]

    def get_food_item(self, food_item_id: str) -> FoodItem | None:
        """Return a food item by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", food_item_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return food_item_from_row(response.data[0])

    def create_food_item(self, item: FoodItem) -> FoodItem:
        """Insert a food item and return the stored row."""
        response = self.client.table(_TABLE).insert(food_item_to_row(item)).execute()
        if not response.data:
            raise RuntimeError("Failed to create food item")
        return food_item_from_row(response.data[0])

    def update_food_item(self, item: FoodItem) -> FoodItem | None:
        """Replace a food item; returns None when no row matched."""
        payload = food_item_to_row(item)
        payload.pop("id")
        response = self.client.table(_TABLE).update(payload).eq("id", item.id).execute()
        if not response.data:
            return None
        return food_item_from_row(response.data[0])

    def delete_food_item(self, food_item_id: str) -> bool:
        """Delete a food item row."""
        response = self.client.table(_TABLE).delete().eq("id", food_item_id).execute()
        return bool(response.data)
