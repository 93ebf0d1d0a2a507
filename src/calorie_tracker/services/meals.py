"""Meal logging service."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.meals import MealLog, MealLogPatch, ValidatedMealLog
from calorie_tracker.domain.models import CallerIdentity
from calorie_tracker.errors import meal_log_not_found, unauthenticated
from calorie_tracker.services.validation import (
    Rejection,
    validate_meal_log_patch,
    validate_new_meal_log,
)

logger = logging.getLogger(__name__)


class MealLogRepository(Protocol):
    """Owner-scoped persistence interface for meal logs.

    Every method takes the owner id first, so no query can reach another
    user's rows.
    """

    def create(self, owner_id: UUID, draft: ValidatedMealLog) -> MealLog:
        """Store a new meal log and return it with id and timestamps."""

    def list_by_owner(self, owner_id: UUID) -> list[MealLog]:
        """Return the owner's meal logs, newest first."""

    def list_by_owner_and_date(self, owner_id: UUID, date: str) -> list[MealLog]:
        """Return the owner's meal logs whose date equals ``date``."""

    def list_by_owner_between(
        self, owner_id: UUID, start: str, end: str
    ) -> list[MealLog]:
        """Return the owner's meal logs with ``start <= date <= end``."""

    def get(self, owner_id: UUID, meal_id: UUID) -> MealLog | None:
        """Return a meal log if it exists and belongs to the owner."""

    def update(
        self, owner_id: UUID, meal_id: UUID, patch: MealLogPatch
    ) -> MealLog | None:
        """Apply provided fields and return the updated meal log."""

    def delete(self, owner_id: UUID, meal_id: UUID) -> bool:
        """Remove a meal log; return False when nothing matched."""


@dataclass
class MealLogService:
    """Service that validates and persists meal logs for a caller."""

    repository: MealLogRepository

    def create(
        self, caller: CallerIdentity | None, payload: Mapping[str, object]
    ) -> MealLog:
        """Validate a payload and store it for the caller."""
        result = validate_new_meal_log(payload, caller)
        if isinstance(result, Rejection):
            raise result.to_error()
        return self.repository.create(result.user_id, result)

    def list_all(self, caller: CallerIdentity | None) -> list[MealLog]:
        """Return all of the caller's meal logs, newest first."""
        owner_id = _require_owner(caller)
        return self.repository.list_by_owner(owner_id)

    def list_by_date(self, caller: CallerIdentity | None, date: str) -> list[MealLog]:
        """Return the caller's meal logs for a calendar date."""
        owner_id = _require_owner(caller)
        return self.repository.list_by_owner_and_date(owner_id, date)

    def get(self, caller: CallerIdentity | None, meal_id: UUID) -> MealLog:
        """Return one of the caller's meal logs."""
        owner_id = _require_owner(caller)
        meal = self.repository.get(owner_id, meal_id)
        if meal is None:
            raise meal_log_not_found()
        return meal

    def update(
        self,
        caller: CallerIdentity | None,
        meal_id: UUID,
        payload: Mapping[str, object],
    ) -> MealLog:
        """Apply a partial update to one of the caller's meal logs."""
        owner_id = _require_owner(caller)
        current = self.repository.get(owner_id, meal_id)
        if current is None:
            raise meal_log_not_found()
        patch = validate_meal_log_patch(payload)
        if isinstance(patch, Rejection):
            raise patch.to_error()
        updated = self.repository.update(owner_id, meal_id, patch)
        if updated is None:
            raise meal_log_not_found()
        return updated

    def delete(self, caller: CallerIdentity | None, meal_id: UUID) -> None:
        """Permanently remove one of the caller's meal logs."""
        owner_id = _require_owner(caller)
        if not self.repository.delete(owner_id, meal_id):
            raise meal_log_not_found()
        logger.info("Deleted meal log %s", meal_id)


def _require_owner(caller: CallerIdentity | None) -> UUID:
    if caller is None:
        raise unauthenticated()
    return caller.user_id
