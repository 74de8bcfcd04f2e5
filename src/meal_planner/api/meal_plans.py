"""Weekly meal plan endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request

from meal_planner.api.schemas import WeekPlanRequest, WeekPlanResponse
from meal_planner.config import parse_user_ids

if TYPE_CHECKING:
    from meal_planner.containers import AppContainer

router = APIRouter(prefix="/meal-plans", tags=["meal-plans"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _require_user(container: AppContainer, user_id: str) -> None:
    if user_id not in parse_user_ids(container.settings.planner_users):
        raise HTTPException(status_code=404, detail="User not found")


@router.get("/{user_id}/{week}")
async def get_week_plan(user_id: str, week: date, request: Request) -> WeekPlanResponse:
    """Return the user's plan for the week containing ``week`` with daily totals."""
    container = _container(request)
    _require_user(container, user_id)
    service = container.meal_plan_service
    plan = service.get_week(user_id, week)
    return WeekPlanResponse.from_domain(plan, service.totals(plan))


@router.put("/{user_id}/{week}")
async def save_week_plan(
    user_id: str, week: date, payload: WeekPlanRequest, request: Request
) -> WeekPlanResponse:
    """Create or replace the user's plan for the week containing ``week``."""
    container = _container(request)
    _require_user(container, user_id)
    service = container.meal_plan_service
    plan = service.save_week(user_id, week, payload.to_plan_data())
    return WeekPlanResponse.from_domain(plan, service.totals(plan))


@router.delete("/{user_id}/{week}")
async def clear_week_plan(
    user_id: str, week: date, request: Request
) -> dict[str, bool]:
    """Delete the user's plan for the week containing ``week``."""
    container = _container(request)
    _require_user(container, user_id)
    if not container.meal_plan_service.clear_week(user_id, week):
        raise HTTPException(status_code=404, detail="Meal plan not found")
    return {"success": True}


@router.post("/{user_id}/{week}/generate")
async def generate_week_plan(
    user_id: str, week: date, request: Request
) -> WeekPlanResponse:
    """Fill the empty slots of the week with random matching recipes."""
    container = _container(request)
    _require_user(container, user_id)
    service = container.meal_plan_service
    plan = service.generate_week(user_id, week)
    return WeekPlanResponse.from_domain(plan, service.totals(plan))
