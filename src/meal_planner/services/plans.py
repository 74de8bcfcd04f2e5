"""Weekly meal plans: storage format, hydration and daily totals."""

import logging
import random
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Protocol

from meal_planner.domain.food import NutritionInfo
from meal_planner.domain.meals import Meal, MealPlanEntry
from meal_planner.domain.plans import (
    CATEGORY_SLOTS,
    DAYS_OF_WEEK,
    MEAL_SLOTS,
    SNACK_SLOT,
    DayPlan,
    DayTotals,
    StoredWeekPlan,
    WeekPlan,
)
from meal_planner.serialization import custom_meal_from_json, custom_meal_to_json
from meal_planner.services.cache import Catalog, CatalogCache
from meal_planner.services.cost import aggregate_cost
from meal_planner.services.nutrition import aggregate, round_calories, round_macro
from meal_planner.services.recipes import MealRepository

_logger = logging.getLogger(__name__)


class MealPlanRepository(Protocol):
    """Persistence interface for weekly meal plans."""

    def get_plan(self, plan_id: str) -> StoredWeekPlan | None:
        """Return a stored plan by id, if present."""

    def upsert_plan(self, plan: StoredWeekPlan) -> StoredWeekPlan:
        """Create or replace a stored plan."""

    def delete_plan(self, plan_id: str) -> bool:
        """Delete a plan, returning whether a row was removed."""


def week_start(day: date) -> date:
    """Return the Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def plan_id_for(user_id: str, day: date) -> str:
    """Return the plan id for the user's week containing ``day``."""
    return f"{user_id}-{week_start(day):%Y%m%d}"


def empty_day_plan(slots: Iterable[str] = MEAL_SLOTS) -> DayPlan:
    """Return a day with every slot unassigned; the snack slot is an empty list."""
    return {slot: [] if slot == SNACK_SLOT else None for slot in slots}


def empty_days(
    days: Iterable[str] = DAYS_OF_WEEK, slots: Iterable[str] = MEAL_SLOTS
) -> dict[str, DayPlan]:
    """Return an empty day plan for each day of the week."""
    slot_names = tuple(slots)
    return {day: empty_day_plan(slot_names) for day in days}


def iter_entries(day_plan: DayPlan) -> Iterable[MealPlanEntry]:
    """Yield every assigned entry of a day, flattening list slots."""
    for value in day_plan.values():
        if value is None:
            continue
        if isinstance(value, list):
            yield from value
        else:
            yield value


def _scale(nutrition: NutritionInfo, portions: float) -> NutritionInfo:
    return NutritionInfo(
        calories=nutrition.calories * portions,
        protein=nutrition.protein * portions,
        carbs=nutrition.carbs * portions,
        fat=nutrition.fat * portions,
    )


def entry_totals(
    entry: MealPlanEntry, catalog: Catalog, *, use_cached: bool = True
) -> tuple[NutritionInfo, float]:
    """Return nutrition and cost of one placement at its portion count."""
    meal = entry.meal
    cached_nutrition = None
    cached_cost = None
    if use_cached and meal.kind == "catalog":
        cached_nutrition = meal.calculated_nutrition
        cached_cost = meal.total_cost

    if cached_nutrition is not None:
        nutrition = _scale(cached_nutrition, entry.portions)
    else:
        nutrition = aggregate(meal.ingredients, catalog, entry.portions)
    if cached_cost is not None:
        cost = cached_cost * entry.portions
    else:
        cost = aggregate_cost(meal.ingredients, catalog, entry.portions)
    return nutrition, cost


def aggregate_day(
    day_plan: DayPlan, catalog: Catalog, *, use_cached: bool = True
) -> DayTotals:
    """Sum nutrition and cost over every slot of a day."""
    calories = protein = carbs = fat = cost = 0.0
    for entry in iter_entries(day_plan):
        nutrition, entry_cost = entry_totals(entry, catalog, use_cached=use_cached)
        calories += nutrition.calories
        protein += nutrition.protein
        carbs += nutrition.carbs
        fat += nutrition.fat
        cost += entry_cost
    return DayTotals(
        calories=round_calories(calories),
        protein=round_macro(protein),
        carbs=round_macro(carbs),
        fat=round_macro(fat),
        cost=round(cost, 2),
    )


def aggregate_week(
    plan: WeekPlan, catalog: Catalog, *, use_cached: bool = True
) -> dict[str, DayTotals]:
    return {
        day: aggregate_day(day_plan, catalog, use_cached=use_cached)
        for day, day_plan in plan.days.items()
    }


def _simplify_entry(entry: MealPlanEntry) -> dict[str, object]:
    if entry.meal.kind == "custom":
        return {**custom_meal_to_json(entry.meal), "portions": entry.portions}
    return {"id": entry.meal.id, "portions": entry.portions}


def simplify_days(days: Mapping[str, DayPlan]) -> dict[str, dict[str, object]]:
    """Convert hydrated days into the stored form: catalog meals by id only."""
    simplified: dict[str, dict[str, object]] = {}
    for day, day_plan in days.items():
        simplified[day] = {}
        for slot, value in day_plan.items():
            if value is None:
                simplified[day][slot] = None
            elif isinstance(value, list):
                simplified[day][slot] = [_simplify_entry(entry) for entry in value]
            else:
                simplified[day][slot] = _simplify_entry(value)
    return simplified


def _unwrap(raw: object) -> object:
    """Flatten the ``{"meal": {...}, "portions"}`` shape into a stored entry."""
    if isinstance(raw, dict) and isinstance(raw.get("meal"), dict):
        return {**raw["meal"], "portions": raw.get("portions", 1)}
    return raw


def _referenced_meal_ids(plan_data: Mapping[str, Mapping[str, object]]) -> set[str]:
    ids: set[str] = set()
    for day_plan in plan_data.values():
        for value in day_plan.values():
            raw_entries = value if isinstance(value, list) else [value]
            for raw in map(_unwrap, raw_entries):
                if isinstance(raw, dict) and raw.get("type") != "custom":
                    meal_id = raw.get("id")
                    if meal_id:
                        ids.add(str(meal_id))
    return ids


def _portions(raw: Mapping[str, object]) -> float:
    try:
        portions = float(raw.get("portions") or 1)
    except (TypeError, ValueError):
        _logger.warning("Invalid portions reset to 1: %r", raw.get("portions"))
        return 1.0
    return portions if portions > 0 else 1.0


def _hydrate_entry(
    raw: object, meals_by_id: Mapping[str, Meal]
) -> MealPlanEntry | None:
    raw = _unwrap(raw)
    if not isinstance(raw, dict):
        return None
    portions = _portions(raw)
    if raw.get("type") == "custom":
        return MealPlanEntry(meal=custom_meal_from_json(raw), portions=portions)
    meal = meals_by_id.get(str(raw.get("id")))
    if meal is None:
        _logger.warning("Planned meal no longer exists: id=%s", raw.get("id"))
        return None
    return MealPlanEntry(meal=meal, portions=portions)


def hydrate_days(
    plan_data: Mapping[str, Mapping[str, object]], meals_by_id: Mapping[str, Meal]
) -> dict[str, DayPlan]:
    """Replace stored meal references with catalog meals."""
    days: dict[str, DayPlan] = {}
    for day, stored_day in plan_data.items():
        day_plan: DayPlan = {}
        for slot, value in stored_day.items():
            if isinstance(value, list):
                entries = [_hydrate_entry(raw, meals_by_id) for raw in value]
                day_plan[slot] = [entry for entry in entries if entry is not None]
            else:
                day_plan[slot] = _hydrate_entry(value, meals_by_id)
        days[day] = day_plan
    return days


def fill_empty_slots(
    days: Mapping[str, DayPlan],
    meals: Iterable[Meal],
    rng: random.Random,
    *,
    day_names: Iterable[str] = DAYS_OF_WEEK,
    slots: Iterable[str] = MEAL_SLOTS,
) -> dict[str, DayPlan]:
    """Return a copy of ``days`` with unassigned slots filled at random.

    Candidates for a slot are the meals whose categories map to it. Assigned
    slots are kept and missing slots are added empty. A chosen meal leaves
    its slot's candidates while more candidates remain than there are slots.
    """
    slot_names = tuple(slots)
    candidates: dict[str, list[Meal]] = {slot: [] for slot in slot_names}
    for meal in meals:
        for category in meal.categories:
            slot = CATEGORY_SLOTS.get(category)
            if slot in candidates:
                candidates[slot].append(meal)

    filled = {day: dict(day_plan) for day, day_plan in days.items()}
    for day in day_names:
        day_plan = filled.setdefault(day, {})
        for slot in slot_names:
            if day_plan.get(slot):
                continue
            available = candidates[slot]
            if not available:
                day_plan.setdefault(slot, [] if slot == SNACK_SLOT else None)
                continue
            index = rng.randrange(len(available))
            entry = MealPlanEntry(meal=available[index])
            day_plan[slot] = [entry] if slot == SNACK_SLOT else entry
            if len(available) > len(slot_names):
                available.pop(index)
    return filled


@dataclass
class MealPlanService:
    """Service that loads, saves and totals weekly plans per user."""

    repository: MealPlanRepository
    meal_repository: MealRepository
    catalog_cache: CatalogCache
    rng: random.Random = field(default_factory=random.Random)

    def get_week(self, user_id: str, day: date) -> WeekPlan:
        """Return the user's plan for the week of ``day``, empty when unsaved."""
        plan_id = plan_id_for(user_id, day)
        start = week_start(day)
        stored = self.repository.get_plan(plan_id)
        if stored is None or not stored.plan_data:
            return WeekPlan(
                id=plan_id, user_id=user_id, week_start=start, days=empty_days()
            )
        meals = self.meal_repository.get_meals(
            sorted(_referenced_meal_ids(stored.plan_data))
        )
        days = hydrate_days(stored.plan_data, {meal.id: meal for meal in meals})
        return WeekPlan(id=plan_id, user_id=user_id, week_start=start, days=days)

    def save_week(
        self, user_id: str, day: date, plan_data: dict[str, dict[str, object]]
    ) -> WeekPlan:
        """Persist a week plan given in stored form and return it hydrated.

        Entries referencing unknown meals are dropped before saving.
        """
        meals = self.meal_repository.get_meals(
            sorted(_referenced_meal_ids(plan_data))
        )
        days = hydrate_days(plan_data, {meal.id: meal for meal in meals})
        return self._store(user_id, day, days)

    def generate_week(self, user_id: str, day: date) -> WeekPlan:
        """Fill the empty slots of the week from the recipe catalog and save it."""
        plan = self.get_week(user_id, day)
        days = fill_empty_slots(plan.days, self.meal_repository.list_meals(), self.rng)
        return self._store(user_id, day, days)

    def clear_week(self, user_id: str, day: date) -> bool:
        """Delete the user's plan for the week of ``day``."""
        return self.repository.delete_plan(plan_id_for(user_id, day))

    def totals(self, plan: WeekPlan) -> dict[str, DayTotals]:
        """Return per-day totals using the cached catalog."""
        return aggregate_week(plan, self.catalog_cache.get())

    def _store(self, user_id: str, day: date, days: dict[str, DayPlan]) -> WeekPlan:
        plan_id = plan_id_for(user_id, day)
        start = week_start(day)
        self.repository.upsert_plan(
            StoredWeekPlan(
                id=plan_id,
                user_id=user_id,
                week_start=start,
                plan_data=simplify_days(days),
            )
        )
        _logger.info("Meal plan saved: id=%s", plan_id)
        return WeekPlan(id=plan_id, user_id=user_id, week_start=start, days=days)
