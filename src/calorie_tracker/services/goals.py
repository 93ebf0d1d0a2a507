"""Calorie goal policy."""

import math
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.models import CallerIdentity
from calorie_tracker.errors import ErrorKind, TrackerError, unauthenticated

DEFAULT_CALORIE_GOAL = 2000.0


class GoalRepository(Protocol):
    """Persistence interface for calorie goals."""

    def get_calorie_goal(self, user_id: UUID) -> float | None:
        """Return the user's goal if set."""

    def set_calorie_goal(self, user_id: UUID, goal: float) -> None:
        """Update the user's goal."""


@dataclass
class GoalService:
    """Resolves and updates the daily calorie goal."""

    repository: GoalRepository
    default_goal: float = DEFAULT_CALORIE_GOAL

    def resolve(self, user_id: UUID) -> float:
        """Return the configured goal or the default when unset."""
        goal = self.repository.get_calorie_goal(user_id)
        return self.default_goal if goal is None else goal

    def get_calorie_goal(self, caller: CallerIdentity | None) -> float:
        """Return the caller's effective goal."""
        if caller is None:
            raise unauthenticated()
        return self.resolve(caller.user_id)

    def set_calorie_goal(self, caller: CallerIdentity | None, goal: float) -> float:
        """Persist a new goal for the caller and return it."""
        if caller is None:
            raise unauthenticated()
        if not math.isfinite(goal):
            raise TrackerError(
                ErrorKind.INVALID_INPUT, "Calorie goal must be a number"
            )
        self.repository.set_calorie_goal(caller.user_id, goal)
        return goal
