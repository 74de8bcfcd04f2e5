"""Food catalog endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from meal_planner.api.schemas import FoodItemModel

if TYPE_CHECKING:
    from meal_planner.containers import AppContainer

router = APIRouter(prefix="/food-items", tags=["food-items"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("")
async def list_food_items(
    request: Request, q: str | None = None, category: str | None = None
) -> list[FoodItemModel]:
    """Return catalog items, optionally filtered."""
    items = _container(request).catalog_service.list_items(query=q, category=category)
    return [FoodItemModel.from_domain(item) for item in items]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_food_item(payload: FoodItemModel, request: Request) -> FoodItemModel:
    """Create a catalog item."""
    created = _container(request).catalog_service.create_item(payload.to_domain())
    return FoodItemModel.from_domain(created)


@router.get("/{food_item_id}")
async def get_food_item(food_item_id: str, request: Request) -> FoodItemModel:
    """Return one catalog item."""
    item = _container(request).catalog_service.get_item(food_item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Food item not found")
    return FoodItemModel.from_domain(item)


@router.put("/{food_item_id}")
async def update_food_item(
    food_item_id: str, payload: FoodItemModel, request: Request
) -> FoodItemModel:
    """Replace a catalog item."""
    updated = _container(request).catalog_service.update_item(
        payload.to_domain(food_item_id)
    )
    if updated is None:
        raise HTTPException(status_code=404, detail="Food item not found")
    return FoodItemModel.from_domain(updated)


@router.delete("/{food_item_id}")
async def delete_food_item(food_item_id: str, request: Request) -> dict[str, bool]:
    """Delete a catalog item."""
    if not _container(request).catalog_service.delete_item(food_item_id):
        raise HTTPException(status_code=404, detail="Food item not found")
    return {"success": True}
