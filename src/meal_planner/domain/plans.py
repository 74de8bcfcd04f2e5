"""Domain models for weekly meal plans."""

from dataclasses import dataclass
from datetime import date

from meal_planner.domain.meals import MealPlanEntry

DAYS_OF_WEEK = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
MEAL_SLOTS = ("Breakfast", "Lunch", "Dinner", "Snack")
SNACK_SLOT = "Snack"

# Recipe category to the slot it can fill; appetizers have no slot.
CATEGORY_SLOTS = {
    "breakfast": "Breakfast",
    "lunch": "Lunch",
    "dinner": "Dinner",
    "snack": "Snack",
}

SlotValue = MealPlanEntry | list[MealPlanEntry] | None
DayPlan = dict[str, SlotValue]


@dataclass(frozen=True)
class DayTotals:
    """Aggregated nutrition and cost for one day."""

    calories: float
    protein: float
    carbs: float
    fat: float
    cost: float


@dataclass(frozen=True)
class WeekPlan:
    """A user's plan for the week starting on ``week_start`` (a Monday)."""

    id: str
    user_id: str
    week_start: date
    days: dict[str, DayPlan]


@dataclass(frozen=True)
class StoredWeekPlan:
    """Week plan as persisted: slots reference catalog meals by id."""

    id: str
    user_id: str
    week_start: date
    plan_data: dict[str, dict[str, object]]
