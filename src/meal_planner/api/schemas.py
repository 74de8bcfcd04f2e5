"""Pydantic models for the HTTP API (camelCase on the wire)."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from meal_planner.domain.food import FoodItem, NutritionInfo
from meal_planner.domain.meals import CustomMeal, Meal, MealPlanEntry, RecipeIngredient
from meal_planner.domain.plans import DayPlan, DayTotals, WeekPlan
from meal_planner.serialization import coerce_amount, ingredient_to_json

FoodUnit = Literal["g", "ml", "piece", "tbsp", "tsp", "cup"]
MealCategory = Literal["breakfast", "lunch", "dinner", "snack", "appetizer"]


class ApiModel(BaseModel):
    """Base model accepting both camelCase and snake_case input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NutritionModel(ApiModel):
    calories: float = Field(default=0, ge=0)
    protein: float = Field(default=0, ge=0)
    carbs: float = Field(default=0, ge=0)
    fat: float = Field(default=0, ge=0)
    fiber: float | None = Field(default=None, ge=0)
    sugar: float | None = Field(default=None, ge=0)

    @classmethod
    def from_domain(cls, nutrition: NutritionInfo) -> "NutritionModel":
        return cls(
            calories=nutrition.calories,
            protein=nutrition.protein,
            carbs=nutrition.carbs,
            fat=nutrition.fat,
            fiber=nutrition.fiber,
            sugar=nutrition.sugar,
        )

    def to_domain(self) -> NutritionInfo:
        return NutritionInfo(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
            fiber=self.fiber,
            sugar=self.sugar,
        )


class FoodItemModel(ApiModel):
    """Food item payload."""

    id: str = ""
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    units: FoodUnit = "g"
    nutrition_per_100g: NutritionModel = Field(default_factory=NutritionModel)
    price: float = Field(default=0, ge=0)
    price_unit: str = "per 100g"
    weight_per_piece: float | None = Field(default=None, gt=0)

    @classmethod
    def from_domain(cls, item: FoodItem) -> "FoodItemModel":
        return cls(
            id=item.id,
            name=item.name,
            category=item.category,
            units=item.units,
            nutrition_per_100g=NutritionModel.from_domain(item.nutrition_per_100g),
            price=item.price,
            price_unit=item.price_unit,
            weight_per_piece=item.weight_per_piece,
        )

    def to_domain(self, item_id: str | None = None) -> FoodItem:
        return FoodItem(
            id=item_id if item_id is not None else self.id,
            name=self.name,
            category=self.category,
            units=self.units,
            nutrition_per_100g=self.nutrition_per_100g.to_domain(),
            price=self.price,
            price_unit=self.price_unit,
            weight_per_piece=self.weight_per_piece,
        )


class IngredientModel(ApiModel):
    """Recipe line; non-numeric amounts such as "to taste" become 0."""

    food_item_id: str = Field(min_length=1)
    amount: float = Field(default=0, ge=0)
    unit: str = "g"

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount_input(cls, value: object) -> float:
        return coerce_amount(value)

    @classmethod
    def from_domain(cls, ingredient: RecipeIngredient) -> "IngredientModel":
        return cls(
            food_item_id=ingredient.food_item_id,
            amount=ingredient.amount,
            unit=ingredient.unit,
        )

    def to_domain(self) -> RecipeIngredient:
        return RecipeIngredient(
            food_item_id=self.food_item_id, amount=self.amount, unit=self.unit
        )


class MealModel(ApiModel):
    """Catalog recipe payload."""

    id: str = ""
    name: str = Field(min_length=1)
    description: str = ""
    categories: list[MealCategory] = Field(min_length=1)
    preparation_time: int = Field(default=30, ge=0)
    image: str | None = None
    ingredients: list[IngredientModel] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    calculated_nutrition: NutritionModel | None = None
    total_cost: float | None = Field(default=None, ge=0)
    created_by: str | None = None

    @classmethod
    def from_domain(cls, meal: Meal) -> "MealModel":
        return cls(
            id=meal.id,
            name=meal.name,
            description=meal.description,
            categories=meal.categories,
            preparation_time=meal.preparation_time,
            image=meal.image,
            ingredients=[IngredientModel.from_domain(i) for i in meal.ingredients],
            instructions=meal.instructions,
            calculated_nutrition=(
                NutritionModel.from_domain(meal.calculated_nutrition)
                if meal.calculated_nutrition
                else None
            ),
            total_cost=meal.total_cost,
            created_by=meal.created_by,
        )

    def to_domain(self, meal_id: str | None = None) -> Meal:
        return Meal(
            id=meal_id if meal_id is not None else self.id,
            name=self.name,
            description=self.description,
            categories=list(self.categories),
            preparation_time=self.preparation_time,
            image=self.image,
            ingredients=[value.to_domain() for value in self.ingredients],
            instructions=list(self.instructions),
            calculated_nutrition=(
                self.calculated_nutrition.to_domain()
                if self.calculated_nutrition
                else None
            ),
            total_cost=self.total_cost,
            created_by=self.created_by,
        )


class PreviewRequest(ApiModel):
    ingredients: list[IngredientModel]
    portions: float = Field(default=1, gt=0)


class PreviewResponse(ApiModel):
    nutrition: NutritionModel
    cost: float
    skipped_ids: list[str]


class DayTotalsModel(ApiModel):
    calories: float
    protein: float
    carbs: float
    fat: float
    cost: float

    @classmethod
    def from_domain(cls, totals: DayTotals) -> "DayTotalsModel":
        return cls(
            calories=totals.calories,
            protein=totals.protein,
            carbs=totals.carbs,
            fat=totals.fat,
            cost=totals.cost,
        )


class PlanSlotModel(ApiModel):
    """One placed meal.

    Accepts ``{"id", "portions"}`` for a catalog meal,
    ``{"type": "custom", "id", "name", "ingredients", "portions"}`` for a
    custom meal, and the ``{"meal": {...}, "portions"}`` shape returned by
    ``GET``.
    """

    type: Literal["catalog", "custom"] = "catalog"
    id: str = ""
    temp_id: str | None = None
    name: str | None = None
    ingredients: list[IngredientModel] = Field(default_factory=list)
    portions: float = Field(default=1, gt=0)

    @model_validator(mode="before")
    @classmethod
    def unwrap_meal(cls, value: object) -> object:
        if isinstance(value, dict) and isinstance(value.get("meal"), dict):
            return {**value["meal"], "portions": value.get("portions", 1)}
        return value

    def to_stored(self) -> dict[str, object]:
        if self.type == "catalog":
            return {"id": self.id, "portions": self.portions}
        payload: dict[str, object] = {
            "type": "custom",
            "id": self.id or self.temp_id or "",
            "ingredients": [
                ingredient_to_json(value.to_domain()) for value in self.ingredients
            ],
            "portions": self.portions,
        }
        if self.name:
            payload["name"] = self.name
        return payload


SlotModel = PlanSlotModel | list[PlanSlotModel] | None


class WeekPlanRequest(ApiModel):
    """Week plan keyed by day then slot; the snack slot holds a list."""

    days: dict[str, dict[str, SlotModel]]

    def to_plan_data(self) -> dict[str, dict[str, object]]:
        """Return the days in stored form."""
        plan_data: dict[str, dict[str, object]] = {}
        for day, slots in self.days.items():
            plan_data[day] = {}
            for slot, value in slots.items():
                if value is None:
                    plan_data[day][slot] = None
                elif isinstance(value, list):
                    plan_data[day][slot] = [entry.to_stored() for entry in value]
                else:
                    plan_data[day][slot] = value.to_stored()
        return plan_data


class WeekPlanResponse(ApiModel):
    id: str
    user_id: str
    week_start: str
    days: dict[str, dict[str, object]]
    totals: dict[str, DayTotalsModel]

    @classmethod
    def from_domain(
        cls, plan: WeekPlan, totals: dict[str, DayTotals]
    ) -> "WeekPlanResponse":
        return cls(
            id=plan.id,
            user_id=plan.user_id,
            week_start=plan.week_start.isoformat(),
            days={day: _day_to_json(day_plan) for day, day_plan in plan.days.items()},
            totals={
                day: DayTotalsModel.from_domain(value) for day, value in totals.items()
            },
        )


def _entry_to_json(entry: MealPlanEntry) -> dict[str, object]:
    meal = entry.meal
    if isinstance(meal, CustomMeal):
        payload = {
            "type": "custom",
            "id": meal.id,
            "name": meal.name,
            "ingredients": [
                IngredientModel.from_domain(value).model_dump(by_alias=True)
                for value in meal.ingredients
            ],
        }
    else:
        payload = {
            "type": "catalog",
            **MealModel.from_domain(meal).model_dump(by_alias=True),
        }
    return {"meal": payload, "portions": entry.portions}


def _day_to_json(day_plan: DayPlan) -> dict[str, object]:
    day: dict[str, object] = {}
    for slot, value in day_plan.items():
        if value is None:
            day[slot] = None
        elif isinstance(value, list):
            day[slot] = [_entry_to_json(entry) for entry in value]
        else:
            day[slot] = _entry_to_json(value)
    return day
