"""Supabase repository for meal logs."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.domain.meals import MealLog, MealLogPatch, ValidatedMealLog
from calorie_tracker.errors import ErrorKind, TrackerError
from calorie_tracker.services.meals import MealLogRepository

_COLUMNS = (
    "id, user_id, meal, calories, protein, carbs, fats, date, created_at, updated_at"
)


@dataclass
class SupabaseMealLogRepository(MealLogRepository):
    """Supabase implementation for meal logs; every query filters by owner."""

    client: Client

    def create(self, owner_id: UUID, draft: ValidatedMealLog) -> MealLog:
        """Insert a meal log row and return it."""
        now = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("meal_logs")
            .insert(
                {
                    "user_id": str(owner_id),
                    "meal": draft.meal,
                    "calories": draft.calories,
                    "protein": draft.protein,
                    "carbs": draft.carbs,
                    "fats": draft.fats,
                    "date": draft.date,
                    "created_at": now,
                    "updated_at": now,
                }
            )
            .execute()
        )
        if not response.data:
            raise TrackerError(
                ErrorKind.PERSISTENCE_FAILURE, "Failed to create meal log"
            )
        return _parse_row(response.data[0])

    def list_by_owner(self, owner_id: UUID) -> list[MealLog]:
        """Return the owner's meal logs, newest first."""
        response = (
            self.client.table("meal_logs")
            .select(_COLUMNS)
            .eq("user_id", str(owner_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def list_by_owner_and_date(self, owner_id: UUID, date: str) -> list[MealLog]:
        """Return the owner's meal logs for an exact calendar date."""
        response = (
            self.client.table("meal_logs")
            .select(_COLUMNS)
            .eq("user_id", str(owner_id))
            .eq("date", date)
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def list_by_owner_between(
        self, owner_id: UUID, start: str, end: str
    ) -> list[MealLog]:
        """Return the owner's meal logs in an inclusive date range."""
        response = (
            self.client.table("meal_logs")
            .select(_COLUMNS)
            .eq("user_id", str(owner_id))
            .gte("date", start)
            .lte("date", end)
            .order("date", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def get(self, owner_id: UUID, meal_id: UUID) -> MealLog | None:
        """Return a meal log by id when the owner matches."""
        response = (
            self.client.table("meal_logs")
            .select(_COLUMNS)
            .eq("id", str(meal_id))
            .eq("user_id", str(owner_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def update(
        self, owner_id: UUID, meal_id: UUID, patch: MealLogPatch
    ) -> MealLog | None:
        """Update provided columns and refresh ``updated_at``."""
        payload = patch.changes()
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("meal_logs")
            .update(payload)
            .eq("id", str(meal_id))
            .eq("user_id", str(owner_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def delete(self, owner_id: UUID, meal_id: UUID) -> bool:
        """Delete a meal log row owned by the owner."""
        response = (
            self.client.table("meal_logs")
            .delete()
            .eq("id", str(meal_id))
            .eq("user_id", str(owner_id))
            .execute()
        )
        return bool(response.data)


def _parse_row(row: dict[str, object]) -> MealLog:
    return MealLog(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        meal=str(row.get("meal", "")),
        calories=float(row.get("calories", 0.0)),
        protein=float(row.get("protein", 0.0)),
        carbs=float(row.get("carbs", 0.0)),
        fats=float(row.get("fats", 0.0)),
        date=str(row.get("date", "")),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )


def _parse_timestamp(value: object) -> datetime:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return datetime.min.replace(tzinfo=UTC)
