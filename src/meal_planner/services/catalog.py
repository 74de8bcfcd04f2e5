"""Services for managing the food catalog."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol

from meal_planner.domain.food import FoodItem
from meal_planner.services.cache import CatalogCache
from meal_planner.services.ids import generate_id

_logger = logging.getLogger(__name__)


class FoodItemRepository(Protocol):
    """Persistence interface for food items."""

    def list_food_items(self) -> list[FoodItem]:
        """Return every food item."""

    def get_food_item(self, food_item_id: str) -> FoodItem | None:
        """Return a food item by id, if present."""

    def create_food_item(self, item: FoodItem) -> FoodItem:
        """Insert a food item and return it."""

    def update_food_item(self, item: FoodItem) -> FoodItem | None:
        """Replace a food item, returning None when it does not exist."""

    def delete_food_item(self, food_item_id: str) -> bool:
        """Delete a food item, returning whether a row was removed."""


@dataclass
class FoodCatalogService:
    """Application service for catalog reads and writes.

    Reads go through the catalog cache; every write invalidates it.
    """

    repository: FoodItemRepository
    cache: CatalogCache

    def list_items(
        self, query: str | None = None, category: str | None = None
    ) -> list[FoodItem]:
        """Return catalog items, optionally filtered by search text and category."""
        items = self.cache.get().all()
        if category:
            items = [item for item in items if item.category == category]
        if query:
            needle = query.lower()
            items = [
                item
                for item in items
                if needle in item.name.lower() or needle in item.category.lower()
            ]
        return sorted(items, key=lambda item: item.name.lower())

    def get_item(self, food_item_id: str) -> FoodItem | None:
        return self.cache.get().resolve(food_item_id)

    def create_item(self, item: FoodItem) -> FoodItem:
        """Create an item, assigning a fresh id when missing or already taken."""
        if not item.id or self.cache.get().resolve(item.id) is not None:
            item = replace(item, id=generate_id())
        created = self.repository.create_food_item(item)
        self.cache.invalidate()
        _logger.info("Food item created: id=%s", created.id)
        return created

    def update_item(self, item: FoodItem) -> FoodItem | None:
        updated = self.repository.update_food_item(item)
        if updated is not None:
            self.cache.invalidate()
        return updated

    def delete_item(self, food_item_id: str) -> bool:
        deleted = self.repository.delete_food_item(food_item_id)
        if deleted:
            self.cache.invalidate()
            _logger.info("Food item deleted: id=%s", food_item_id)
        return deleted
