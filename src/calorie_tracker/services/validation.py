"""Validation and normalization of meal log input.

Validators return either a normalized value or a ``Rejection``; they never
raise and never write anything.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass

from calorie_tracker.domain.meals import MACRO_FIELDS, MealLogPatch, ValidatedMealLog
from calorie_tracker.domain.models import CallerIdentity
from calorie_tracker.errors import ErrorKind, TrackerError

REQUIRED_FIELDS_MESSAGE = (
    "All fields (meal, calories, protein, carbs, fats, date) are required"
)
NEGATIVE_VALUES_MESSAGE = "Calories, protein, carbs, and fats cannot be negative"


@dataclass(frozen=True)
class Rejection:
    """Reason a meal log payload was not admitted."""

    kind: ErrorKind
    message: str

    def to_error(self) -> TrackerError:
        """Return the equivalent exception for raising at a service boundary."""
        return TrackerError(self.kind, self.message)


def validate_new_meal_log(
    payload: Mapping[str, object], caller: CallerIdentity | None
) -> ValidatedMealLog | Rejection:
    """Validate a create payload and bind it to the caller."""
    meal = _clean_text(payload.get("meal"))
    date = _clean_text(payload.get("date"))
    if not meal or not date or any(payload.get(key) is None for key in MACRO_FIELDS):
        return Rejection(ErrorKind.MISSING_FIELD, REQUIRED_FIELDS_MESSAGE)

    numbers: dict[str, float] = {}
    for key in MACRO_FIELDS:
        value = _to_number(payload[key])
        if value is None:
            return _not_a_number(key)
        numbers[key] = value
    if any(value < 0 for value in numbers.values()):
        return Rejection(ErrorKind.NEGATIVE_VALUE, NEGATIVE_VALUES_MESSAGE)

    if caller is None:
        return Rejection(ErrorKind.UNAUTHENTICATED, "User not authenticated")

    # Owner always comes from the caller; payload owner fields are ignored.
    return ValidatedMealLog(
        user_id=caller.user_id,
        meal=meal,
        date=date,
        **numbers,
    )


def validate_meal_log_patch(payload: Mapping[str, object]) -> MealLogPatch | Rejection:
    """Validate the provided fields of an update payload."""
    numbers: dict[str, float] = {}
    for key in MACRO_FIELDS:
        raw = payload.get(key)
        if raw is None:
            continue
        value = _to_number(raw)
        if value is None:
            return _not_a_number(key)
        if value < 0:
            return Rejection(
                ErrorKind.NEGATIVE_VALUE, f"{key.capitalize()} cannot be negative"
            )
        numbers[key] = value

    text: dict[str, str] = {}
    for key in ("meal", "date"):
        if payload.get(key) is None:
            continue
        cleaned = _clean_text(payload[key])
        if not cleaned:
            return Rejection(
                ErrorKind.MISSING_FIELD, f"{key.capitalize()} cannot be empty"
            )
        text[key] = cleaned

    return MealLogPatch(**text, **numbers)


def _clean_text(value: object) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def _to_number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float) and math.isfinite(value):
        return float(value)
    return None


def _not_a_number(key: str) -> Rejection:
    return Rejection(ErrorKind.INVALID_INPUT, f"{key.capitalize()} must be a number")
