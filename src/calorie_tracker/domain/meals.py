"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

MACRO_FIELDS = ("calories", "protein", "carbs", "fats")


@dataclass(frozen=True)
class MealLog:
    """A stored meal log owned by a single user."""

    id: UUID
    user_id: UUID
    meal: str
    calories: float
    protein: float
    carbs: float
    fats: float
    date: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ValidatedMealLog:
    """A meal log that passed validation and is ready to be stored."""

    user_id: UUID
    meal: str
    calories: float
    protein: float
    carbs: float
    fats: float
    date: str


@dataclass(frozen=True)
class MealLogPatch:
    """Partial update for a meal log; ``None`` means leave unchanged."""

    meal: str | None = None
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fats: float | None = None
    date: str | None = None

    def changes(self) -> dict[str, object]:
        """Return only the fields that were provided."""
        values = {
            "meal": self.meal,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fats": self.fats,
            "date": self.date,
        }
        return {key: value for key, value in values.items() if value is not None}
