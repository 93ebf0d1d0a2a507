"""Meal log endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from calorie_tracker.api.dependencies import get_caller, get_container
from calorie_tracker.api.schemas import MealLogPayload
from calorie_tracker.api.serializers import (
    serialize_daily_summary,
    serialize_meal_log,
    serialize_period_summary,
)
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.models import CallerIdentity
from calorie_tracker.services.aggregation import daily_totals

router = APIRouter(prefix="/calories", tags=["calories"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_meal_log(
    payload: MealLogPayload,
    caller: CallerIdentity | None = Depends(get_caller),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Add a meal log for the caller."""
    meal = container.meal_log_service.create(
        caller, payload.model_dump(exclude_unset=True)
    )
    return {
        "message": "Calorie log added successfully",
        "meal_log": serialize_meal_log(meal),
    }


@router.get("")
async def list_meal_logs(
    caller: CallerIdentity | None = Depends(get_caller),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's meal logs, newest first."""
    meals = container.meal_log_service.list_all(caller)
    return {"meals": [serialize_meal_log(meal) for meal in meals]}


@router.get("/date/{date}")
async def list_meal_logs_by_date(
    date: str,
    caller: CallerIdentity | None = Depends(get_caller),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's meal logs for a date with their totals."""
    meals = container.meal_log_service.list_by_date(caller, date)
    totals = daily_totals(meals)
    return {
        "date": date,
        "meals": [serialize_meal_log(meal) for meal in meals],
        "total_calories": totals.calories,
        "total_protein": totals.protein,
        "total_carbs": totals.carbs,
        "total_fats": totals.fats,
    }


@router.get("/summary")
async def period_summary(
    start: str,
    end: str,
    caller: CallerIdentity | None = Depends(get_caller),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return per-day totals for an inclusive date range."""
    summary = container.stats_service.get_period_summary(caller, start, end)
    return serialize_period_summary(summary)


@router.get("/summary/{date}")
async def daily_summary(
    date: str,
    caller: CallerIdentity | None = Depends(get_caller),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return a date's totals and progress against the calorie goal."""
    summary = container.stats_service.get_daily_summary(caller, date)
    return serialize_daily_summary(summary)


@router.get("/{meal_id}")
async def get_meal_log(
    meal_id: UUID,
    caller: CallerIdentity | None = Depends(get_caller),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return one of the caller's meal logs."""
    return serialize_meal_log(container.meal_log_service.get(caller, meal_id))


@router.patch("/{meal_id}")
async def update_meal_log(
    meal_id: UUID,
    payload: MealLogPayload,
    caller: CallerIdentity | None = Depends(get_caller),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Apply a partial update to one of the caller's meal logs."""
    meal = container.meal_log_service.update(
        caller, meal_id, payload.model_dump(exclude_unset=True)
    )
    return {
        "message": "Calorie log updated successfully",
        "meal_log": serialize_meal_log(meal),
    }


@router.delete("/{meal_id}")
async def delete_meal_log(
    meal_id: UUID,
    caller: CallerIdentity | None = Depends(get_caller),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Delete one of the caller's meal logs."""
    container.meal_log_service.delete(caller, meal_id)
    return {"message": "Calorie log deleted successfully"}
