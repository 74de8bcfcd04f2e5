"""Supabase-backed weekly meal plan repository."""

from dataclasses import dataclass
from datetime import UTC, date, datetime

from supabase import Client

from meal_planner.domain.plans import StoredWeekPlan
from meal_planner.services.plans import MealPlanRepository

_TABLE = "meal_plans"


@dataclass
class SupabaseMealPlanRepository(MealPlanRepository):
    """Supabase implementation for meal plan persistence."""

    client: Client

    def get_plan(self, plan_id: str) -> StoredWeekPlan | None:
        """Return a stored plan by id, if present."""
        response = (
            self.client.table(_TABLE).select("*").eq("id", plan_id).limit(1).execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def upsert_plan(self, plan: StoredWeekPlan) -> StoredWeekPlan:
        """Create or replace a plan row; last writer wins."""
        response = (
            self.client.table(_TABLE)
            .upsert(
                {
                    "id": plan.id,
                    "user_id": plan.user_id,
                    "week_start": plan.week_start.isoformat(),
                    "plan_data": plan.plan_data,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save meal plan")
        return _parse_plan(response.data[0])

    def delete_plan(self, plan_id: str) -> bool:
        """Delete a plan row."""
        response = self.client.table(_TABLE).delete().eq("id", plan_id).execute()
        return bool(response.data)


def _parse_plan(row: dict[str, object]) -> StoredWeekPlan:
    """Parse a meal plan row into a domain model."""
    return StoredWeekPlan(
        id=str(row["id"]),
        user_id=str(row.get("user_id", "")),
        week_start=date.fromisoformat(str(row["week_start"])),
        plan_data=dict(row.get("plan_data") or {}),
    )
