"""Supabase repository for calorie goals."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.services.goals import GoalRepository


@dataclass
class SupabaseGoalRepository(GoalRepository):
    """Reads and writes the ``calorie_goal`` column of ``users``."""

    client: Client

    def get_calorie_goal(self, user_id: UUID) -> float | None:
        """Return the stored goal for a user."""
        response = (
            self.client.table("users")
            .select("calorie_goal")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        goal = response.data[0].get("calorie_goal")
        return float(goal) if isinstance(goal, int | float) else None

    def set_calorie_goal(self, user_id: UUID, goal: float) -> None:
        """Update the user's goal."""
        self.client.table("users").update(
            {
                "calorie_goal": goal,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", str(user_id)).execute()
