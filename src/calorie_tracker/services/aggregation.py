"""Pure aggregation helpers for meal logs.

These functions never raise and never touch storage; they work on records
already loaded by the caller.
"""

import math
from collections.abc import Iterable
from typing import Protocol

from calorie_tracker.domain.stats import DailyTotals

HEALTHY_CALORIES_MAX = 10000


class MacroSource(Protocol):
    """Anything carrying calories and macros."""

    calories: float
    protein: float
    carbs: float
    fats: float


def total_calories(records: Iterable[MacroSource]) -> float:
    """Return the summed calories, 0 for no records."""
    return sum((record.calories for record in records), 0)


def daily_totals(records: Iterable[MacroSource]) -> DailyTotals:
    """Return summed calories and macros across records."""
    total = DailyTotals()
    for record in records:
        total = DailyTotals(
            calories=total.calories + record.calories,
            protein=total.protein + record.protein,
            carbs=total.carbs + record.carbs,
            fats=total.fats + record.fats,
        )
    return total


def add_totals(left: DailyTotals, right: DailyTotals) -> DailyTotals:
    """Return the element-wise sum of two totals."""
    return DailyTotals(
        calories=left.calories + right.calories,
        protein=left.protein + right.protein,
        carbs=left.carbs + right.carbs,
        fats=left.fats + right.fats,
    )


def progress_percent(consumed: float, goal: float) -> int:
    """Return consumed/goal as a whole percentage; 0 when it is undefined."""
    if goal == 0:
        return 0
    percent = consumed / goal * 100
    if not math.isfinite(percent):
        return 0
    # Half-up rounding, not Python's round-half-to-even.
    return math.floor(percent + 0.5)


def remaining_calories(consumed: float, goal: float) -> float:
    """Return calories left before the goal; negative once exceeded."""
    return goal - consumed


def is_within_healthy_range(calories: float) -> bool:
    """Return True when calories fall in the advisory 0-10000 range."""
    return 0 <= calories <= HEALTHY_CALORIES_MAX
