"""Statistics service for meal logs."""

from dataclasses import dataclass
from datetime import date, timedelta

from calorie_tracker.domain.models import CallerIdentity
from calorie_tracker.domain.stats import DailySummary, DatedTotals, PeriodSummary
from calorie_tracker.errors import ErrorKind, TrackerError, unauthenticated
from calorie_tracker.services.aggregation import (
    add_totals,
    daily_totals,
    is_within_healthy_range,
    progress_percent,
    remaining_calories,
)
from calorie_tracker.services.goals import GoalService
from calorie_tracker.services.meals import MealLogRepository

MAX_PERIOD_DAYS = 366


@dataclass
class StatsService:
    """Service for daily and period totals, always recomputed from storage."""

    repository: MealLogRepository
    goal_service: GoalService

    def get_daily_summary(self, caller: CallerIdentity | None, day: str) -> DailySummary:
        """Return a date's meal logs, totals and progress against the goal."""
        if caller is None:
            raise unauthenticated()
        meals = self.repository.list_by_owner_and_date(caller.user_id, day)
        totals = daily_totals(meals)
        goal = self.goal_service.resolve(caller.user_id)
        return DailySummary(
            date=day,
            meals=meals,
            totals=totals,
            goal=goal,
            progress_percent=progress_percent(totals.calories, goal),
            remaining_calories=remaining_calories(totals.calories, goal),
            within_healthy_range=is_within_healthy_range(totals.calories),
        )

    def get_period_summary(
        self, caller: CallerIdentity | None, start: str, end: str
    ) -> PeriodSummary:
        """Return per-day totals for each date in ``start..end`` inclusive."""
        if caller is None:
            raise unauthenticated()
        first, last = _parse_range(start, end)
        start, end = first.isoformat(), last.isoformat()
        logs = self.repository.list_by_owner_between(caller.user_id, start, end)

        daily = []
        overall = daily_totals([])
        for offset in range((last - first).days + 1):
            day = (first + timedelta(days=offset)).isoformat()
            totals = daily_totals(log for log in logs if log.date == day)
            daily.append(DatedTotals(date=day, totals=totals))
            overall = add_totals(overall, totals)
        return PeriodSummary(start=start, end=end, daily=daily, totals=overall)


def _parse_range(start: str, end: str) -> tuple[date, date]:
    try:
        first = date.fromisoformat(start)
        last = date.fromisoformat(end)
    except ValueError as exc:
        raise TrackerError(
            ErrorKind.INVALID_INPUT, "Dates must use the YYYY-MM-DD format"
        ) from exc
    if first > last:
        raise TrackerError(ErrorKind.INVALID_INPUT, "Start date must not be after end")
    if (last - first).days >= MAX_PERIOD_DAYS:
        raise TrackerError(
            ErrorKind.INVALID_INPUT, f"Range cannot exceed {MAX_PERIOD_DAYS} days"
        )
    return first, last
