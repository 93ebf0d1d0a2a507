"""JSON serialization of domain objects."""

from calorie_tracker.domain.meals import MealLog
from calorie_tracker.domain.models import UserRecord
from calorie_tracker.domain.stats import DailySummary, DailyTotals, PeriodSummary
from calorie_tracker.domain.vision import FoodScanResult


def serialize_meal_log(meal: MealLog) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "user_id": str(meal.user_id),
        "meal": meal.meal,
        "calories": meal.calories,
        "protein": meal.protein,
        "carbs": meal.carbs,
        "fats": meal.fats,
        "date": meal.date,
        "created_at": meal.created_at.isoformat(),
        "updated_at": meal.updated_at.isoformat(),
    }


def serialize_totals(totals: DailyTotals) -> dict[str, float]:
    return {
        "calories": totals.calories,
        "protein": totals.protein,
        "carbs": totals.carbs,
        "fats": totals.fats,
    }


def serialize_daily_summary(summary: DailySummary) -> dict[str, object]:
    return {
        "date": summary.date,
        "meals": [serialize_meal_log(meal) for meal in summary.meals],
        "totals": serialize_totals(summary.totals),
        "goal": summary.goal,
        "progress_percent": summary.progress_percent,
        "remaining_calories": summary.remaining_calories,
        "within_healthy_range": summary.within_healthy_range,
    }


def serialize_period_summary(summary: PeriodSummary) -> dict[str, object]:
    return {
        "start": summary.start,
        "end": summary.end,
        "daily": [
            {"date": entry.date, **serialize_totals(entry.totals)}
            for entry in summary.daily
        ],
        "totals": serialize_totals(summary.totals),
    }


def serialize_user(user: UserRecord, calorie_goal: float) -> dict[str, object]:
    """Public view of a user; never includes the password hash."""
    return {
        "id": str(user.id),
        "username": user.username,
        "email": user.email,
        "verified": user.verified,
        "calorie_goal": calorie_goal,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }


def serialize_food_scan(result: FoodScanResult) -> dict[str, object]:
    return {
        "foods": [food.model_dump() for food in result.foods],
        "totals": serialize_totals(result.totals),
    }
