"""Domain models for the food catalog."""

from dataclasses import dataclass

FOOD_UNITS = ("g", "ml", "piece", "tbsp", "tsp", "cup")


@dataclass(frozen=True)
class NutritionInfo:
    """Nutrition vector; rates per 100 g on catalog items, totals elsewhere."""

    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float | None = None
    sugar: float | None = None


@dataclass(frozen=True)
class FoodItem:
    """Represents a catalog entry."""

    id: str
    name: str
    category: str
    units: str
    nutrition_per_100g: NutritionInfo
    price: float = 0.0
    price_unit: str = "per 100g"
    weight_per_piece: float | None = None

    @property
    def priced_per_100g(self) -> bool:
        return "100" in self.price_unit

    @property
    def priced_per_piece(self) -> bool:
        return "piece" in self.price_unit
