"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.meals import MealLog, MealLogPatch, ValidatedMealLog
from calorie_tracker.domain.models import CallerIdentity, UserRecord
from calorie_tracker.services.goals import GoalRepository, GoalService
from calorie_tracker.services.meals import MealLogRepository, MealLogService
from calorie_tracker.services.stats import StatsService
from calorie_tracker.services.tokens import TokenService
from calorie_tracker.services.users import EmailClient, UserRepository, UserService
from calorie_tracker.services.vision import VisionClient, VisionService

JWT_SECRET = "test-secret-with-at-least-32-bytes!!"


@dataclass
class InMemoryMealLogRepository(MealLogRepository):
    """In-memory meal log repository for tests."""

    rows: list[MealLog] = field(default_factory=list)

    def create(self, owner_id: UUID, draft: ValidatedMealLog) -> MealLog:
        now = datetime.now(tz=UTC)
        meal = MealLog(
            id=uuid4(),
            user_id=owner_id,
            meal=draft.meal,
            calories=draft.calories,
            protein=draft.protein,
            carbs=draft.carbs,
            fats=draft.fats,
            date=draft.date,
            created_at=now,
            updated_at=now,
        )
        self.rows.append(meal)
        return meal

    def list_by_owner(self, owner_id: UUID) -> list[MealLog]:
        return [row for row in reversed(self.rows) if row.user_id == owner_id]

    def list_by_owner_and_date(self, owner_id: UUID, date: str) -> list[MealLog]:
        return [
            row for row in self.rows if row.user_id == owner_id and row.date == date
        ]

    def list_by_owner_between(
        self, owner_id: UUID, start: str, end: str
    ) -> list[MealLog]:
        return [
            row
            for row in self.rows
            if row.user_id == owner_id and start <= row.date <= end
        ]

    def get(self, owner_id: UUID, meal_id: UUID) -> MealLog | None:
        for row in self.rows:
            if row.id == meal_id and row.user_id == owner_id:
                return row
        return None

    def update(
        self, owner_id: UUID, meal_id: UUID, patch: MealLogPatch
    ) -> MealLog | None:
        current = self.get(owner_id, meal_id)
        if current is None:
            return None
        updated = replace(
            current, **patch.changes(), updated_at=datetime.now(tz=UTC)
        )
        self.rows[self.rows.index(current)] = updated
        return updated

    def delete(self, owner_id: UUID, meal_id: UUID) -> bool:
        current = self.get(owner_id, meal_id)
        if current is None:
            return False
        self.rows.remove(current)
        return True


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> UserRecord | None:
        return next((u for u in self.users.values() if u.email == email), None)

    def get_by_username(self, username: str) -> UserRecord | None:
        return next((u for u in self.users.values() if u.username == username), None)

    def create_user(
        self, user_id: UUID, username: str, email: str, password_hash: str
    ) -> UserRecord:
        user = UserRecord(
            id=user_id,
            username=username,
            email=email,
            password_hash=password_hash,
            verified=False,
            calorie_goal=None,
            created_at=datetime.now(tz=UTC),
        )
        self.users[user_id] = user
        return user

    def mark_verified(self, user_id: UUID) -> None:
        self.users[user_id] = replace(self.users[user_id], verified=True)

    def set_password_hash(self, user_id: UUID, password_hash: str) -> None:
        self.users[user_id] = replace(self.users[user_id], password_hash=password_hash)


@dataclass
class InMemoryGoalRepository(GoalRepository):
    """In-memory calorie goal repository for tests."""

    goals: dict[UUID, float] = field(default_factory=dict)

    def get_calorie_goal(self, user_id: UUID) -> float | None:
        return self.goals.get(user_id)

    def set_calorie_goal(self, user_id: UUID, goal: float) -> None:
        self.goals[user_id] = goal


@dataclass
class FakeEmailClient(EmailClient):
    """Fake email client that records sent messages."""

    sent: list[tuple[str, str, str]] = field(default_factory=list)
    fail_with: Exception | None = None

    async def send_email(self, to: str, subject: str, html: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append((to, subject, html))


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "foods": [
                {
                    "name": "rice",
                    "quantity": "1 cup",
                    "calories": 200,
                    "protein": 4,
                    "carbs": 45,
                    "fats": 0.5,
                },
                {
                    "name": "grilled chicken",
                    "quantity": "150g",
                    "calories": 250,
                    "protein": 45,
                    "carbs": 0,
                    "fats": 6,
                },
            ]
        }
    )
    requests: list[dict[str, object]] = field(default_factory=list)
    fail_with: Exception | None = None

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_url: str,
        schema: dict[str, object],
        schema_name: str,
        prompt: str,
    ) -> dict[str, object]:
        self.requests.append(
            {"model": model, "image_url": image_url, "schema_name": schema_name}
        )
        if self.fail_with is not None:
            raise self.fail_with
        return self.payload


def make_caller() -> CallerIdentity:
    return CallerIdentity(user_id=uuid4())


def auth_headers(container: AppContainer, user_id: UUID) -> dict[str, str]:
    token = container.token_service.issue_access_token(user_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        jwt_secret=JWT_SECRET,
        openai_api_key="openai-key",
        email_api_key="email-key",
        email_from="Calorie Tracker <noreply@example.com>",
        client_url="https://app.example.com/",
    )


@pytest.fixture
def meal_log_repository() -> InMemoryMealLogRepository:
    return InMemoryMealLogRepository()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def email_client() -> FakeEmailClient:
    return FakeEmailClient()


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    meal_log_repository: InMemoryMealLogRepository,
    user_repository: InMemoryUserRepository,
    email_client: FakeEmailClient,
    vision_client: FakeVisionClient,
) -> AppContainer:
    token_service = TokenService(secret=settings.jwt_secret)
    goal_service = GoalService(InMemoryGoalRepository())
    user_service = UserService(
        repository=user_repository,
        tokens=token_service,
        email_client=email_client,
        client_url=settings.client_url,
    )
    vision_service = VisionService(
        client=vision_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        token_service=token_service,
        user_service=user_service,
        goal_service=goal_service,
        meal_log_service=MealLogService(meal_log_repository),
        stats_service=StatsService(
            repository=meal_log_repository, goal_service=goal_service
        ),
        vision_service=vision_service,
        close_resources=close_resources,
    )
