"""Recipe endpoints."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from meal_planner.api.schemas import (
    MealModel,
    NutritionModel,
    PreviewRequest,
    PreviewResponse,
)

if TYPE_CHECKING:
    from meal_planner.containers import AppContainer

router = APIRouter(tags=["meals"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/meals")
async def list_meals(request: Request, category: str | None = None) -> list[MealModel]:
    """Return recipes, optionally restricted to one category."""
    meals = _container(request).recipe_service.list_meals(category)
    return [MealModel.from_domain(meal) for meal in meals]


@router.post("/meals", status_code=status.HTTP_201_CREATED)
async def create_meal(payload: MealModel, request: Request) -> MealModel:
    """Create a recipe; missing totals are computed from the catalog."""
    container = _container(request)
    meal = payload.to_domain()
    if meal.created_by is None:
        meal = replace(meal, created_by=container.settings.default_created_by)
    created = container.recipe_service.create_meal(meal)
    return MealModel.from_domain(created)


@router.get("/meals/{meal_id}")
async def get_meal(meal_id: str, request: Request) -> MealModel:
    """Return one recipe."""
    meal = _container(request).recipe_service.get_meal(meal_id)
    if meal is None:
        raise HTTPException(status_code=404, detail="Meal not found")
    return MealModel.from_domain(meal)


@router.put("/meals/{meal_id}")
async def update_meal(meal_id: str, payload: MealModel, request: Request) -> MealModel:
    """Replace a recipe and recompute its totals."""
    updated = _container(request).recipe_service.update_meal(
        payload.to_domain(meal_id)
    )
    if updated is None:
        raise HTTPException(status_code=404, detail="Meal not found")
    return MealModel.from_domain(updated)


@router.delete("/meals/{meal_id}")
async def delete_meal(meal_id: str, request: Request) -> dict[str, bool]:
    """Delete a recipe."""
    if not _container(request).recipe_service.delete_meal(meal_id):
        raise HTTPException(status_code=404, detail="Meal not found")
    return {"success": True}


@router.post("/nutrition/preview")
async def preview_nutrition(
    payload: PreviewRequest, request: Request
) -> PreviewResponse:
    """Compute nutrition and cost for an unsaved ingredient list."""
    preview = _container(request).recipe_service.preview(
        [value.to_domain() for value in payload.ingredients], payload.portions
    )
    return PreviewResponse(
        nutrition=NutritionModel.from_domain(preview.nutrition),
        cost=preview.cost,
        skipped_ids=preview.skipped_ids,
    )
