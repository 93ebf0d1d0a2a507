"""Domain models for users and request identity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated caller passed explicitly into every core operation."""

    user_id: UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    username: str
    email: str
    password_hash: str
    verified: bool
    calorie_goal: float | None
    created_at: datetime | None = None
