"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from calorie_tracker.domain.models import UserRecord
from calorie_tracker.errors import ErrorKind, TrackerError
from calorie_tracker.services.users import UserRepository

_COLUMNS = "id, username, email, password_hash, verified, calorie_goal, created_at"
_UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""
        return self._find_one("id", str(user_id))

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with the given email, if present."""
        return self._find_one("email", email)

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user with the given username, if present."""
        return self._find_one("username", username)

    def create_user(
        self, user_id: UUID, username: str, email: str, password_hash: str
    ) -> UserRecord:
        """Create a new unverified user row and return it."""
        try:
            response = (
                self.client.table("users")
                .insert(
                    {
                        "id": str(user_id),
                        "username": username,
                        "email": email,
                        "password_hash": password_hash,
                        "verified": False,
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code != _UNIQUE_VIOLATION:
                raise
            raise TrackerError(
                ErrorKind.CONFLICT, "User with this email or username already exists"
            ) from exc
        if not response.data:
            raise TrackerError(
                ErrorKind.PERSISTENCE_FAILURE, "Failed to create user in Supabase"
            )
        return _parse_user(response.data[0])

    def mark_verified(self, user_id: UUID) -> None:
        """Set the verified flag for a user."""
        self._update(user_id, {"verified": True})

    def set_password_hash(self, user_id: UUID, password_hash: str) -> None:
        """Store a new password hash for a user."""
        self._update(user_id, {"password_hash": password_hash})

    def _find_one(self, column: str, value: str) -> UserRecord | None:
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq(column, value)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def _update(self, user_id: UUID, payload: dict[str, object]) -> None:
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        self.client.table("users").update(payload).eq("id", str(user_id)).execute()


def _parse_user(row: dict[str, object]) -> UserRecord:
    created_raw = row.get("created_at")
    goal = row.get("calorie_goal")
    return UserRecord(
        id=UUID(str(row["id"])),
        username=str(row.get("username", "")),
        email=str(row.get("email", "")),
        password_hash=str(row.get("password_hash", "")),
        verified=bool(row.get("verified", False)),
        calorie_goal=float(goal) if isinstance(goal, int | float) else None,
        created_at=datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else None,
    )
