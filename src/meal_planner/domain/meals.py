"""Domain models for recipes and meal plan entries."""

from dataclasses import dataclass, field
from typing import Literal

from meal_planner.domain.food import NutritionInfo

MEAL_CATEGORIES = ("breakfast", "lunch", "dinner", "snack", "appetizer")


@dataclass(frozen=True)
class RecipeIngredient:
    """A single line of a recipe."""

    food_item_id: str
    amount: float
    unit: str


@dataclass(frozen=True)
class Meal:
    """A catalog recipe with optional denormalized 1-portion totals."""

    id: str
    name: str
    categories: list[str]
    ingredients: list[RecipeIngredient]
    description: str = ""
    preparation_time: int = 30
    image: str | None = None
    instructions: list[str] = field(default_factory=list)
    calculated_nutrition: NutritionInfo | None = None
    total_cost: float | None = None
    created_by: str | None = None
    kind: Literal["catalog"] = "catalog"


@dataclass(frozen=True)
class CustomMeal:
    """An ad-hoc meal placed directly into a plan slot."""

    id: str
    ingredients: list[RecipeIngredient]
    name: str = "Snack libre"
    kind: Literal["custom"] = "custom"


PlannedMeal = Meal | CustomMeal


@dataclass(frozen=True)
class MealPlanEntry:
    """A meal assigned to a slot with a per-placement portion multiplier."""

    meal: PlannedMeal
    portions: float = 1.0

    def __post_init__(self) -> None:
        if self.portions <= 0:
            raise ValueError("portions must be positive")
