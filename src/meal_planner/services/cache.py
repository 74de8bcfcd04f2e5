"""Catalog snapshot cache."""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Protocol

from meal_planner.domain.food import FoodItem

_logger = logging.getLogger(__name__)


class Catalog(Protocol):
    """Read-only view used by the aggregators."""

    def resolve(self, food_item_id: str) -> FoodItem | None:
        """Return the food item for an id, if known."""


@dataclass(frozen=True)
class CatalogSnapshot(Catalog):
    """Immutable id-indexed view over a list of food items."""

    items: Mapping[str, FoodItem] = field(default_factory=dict)

    @classmethod
    def from_items(cls, items: Iterable[FoodItem]) -> "CatalogSnapshot":
        return cls({item.id: item for item in items})

    def resolve(self, food_item_id: str) -> FoodItem | None:
        return self.items.get(food_item_id)

    def all(self) -> list[FoodItem]:
        return list(self.items.values())

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class CatalogCache:
    """Read-through cache of the food catalog with manual invalidation."""

    loader: Callable[[], list[FoodItem]]
    _snapshot: CatalogSnapshot | None = field(default=None, init=False)

    def get(self) -> CatalogSnapshot:
        """Return the cached snapshot, loading it on first use."""
        if self._snapshot is None:
            return self.reload()
        return self._snapshot

    def invalidate(self) -> None:
        """Drop the snapshot so the next ``get`` reloads it."""
        self._snapshot = None

    def reload(self) -> CatalogSnapshot:
        """Load a fresh snapshot and cache it."""
        snapshot = CatalogSnapshot.from_items(self.loader())
        self._snapshot = snapshot
        _logger.info("Catalog loaded: items=%s", len(snapshot))
        return snapshot

    @property
    def loaded(self) -> bool:
        return self._snapshot is not None
