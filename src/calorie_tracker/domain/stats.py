"""Domain models for statistics."""

from dataclasses import dataclass

from calorie_tracker.domain.meals import MealLog


@dataclass(frozen=True)
class DailyTotals:
    """Summed calories and macros."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fats: float = 0.0


@dataclass(frozen=True)
class DailySummary:
    """A day's meal logs reconciled with the calorie goal."""

    date: str
    meals: list[MealLog]
    totals: DailyTotals
    goal: float
    progress_percent: int
    remaining_calories: float
    within_healthy_range: bool


@dataclass(frozen=True)
class DatedTotals:
    """Totals for one calendar date."""

    date: str
    totals: DailyTotals


@dataclass(frozen=True)
class PeriodSummary:
    """Per-day totals across an inclusive date range."""

    start: str
    end: str
    daily: list[DatedTotals]
    totals: DailyTotals
