"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from calorie_tracker.adapters.email_client import HttpxEmailClient
from calorie_tracker.adapters.openai_vision_client import OpenAIVisionClient
from calorie_tracker.adapters.supabase_goal_repository import SupabaseGoalRepository
from calorie_tracker.adapters.supabase_meal_log_repository import (
    SupabaseMealLogRepository,
)
from calorie_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from calorie_tracker.config import Settings
from calorie_tracker.services.goals import GoalService
from calorie_tracker.services.meals import MealLogService
from calorie_tracker.services.stats import StatsService
from calorie_tracker.services.tokens import TokenService
from calorie_tracker.services.users import UserService
from calorie_tracker.services.vision import VisionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    token_service: TokenService
    user_service: UserService
    goal_service: GoalService
    meal_log_service: MealLogService
    stats_service: StatsService
    vision_service: VisionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    meal_log_repository = SupabaseMealLogRepository(supabase_client)
    token_service = TokenService(
        secret=resolved_settings.jwt_secret,
        algorithm=resolved_settings.jwt_algorithm,
        access_ttl=timedelta(days=resolved_settings.access_token_ttl_days),
        verification_ttl=timedelta(
            hours=resolved_settings.verification_token_ttl_hours
        ),
        password_reset_ttl=timedelta(
            hours=resolved_settings.password_reset_token_ttl_hours
        ),
    )
    email_client = HttpxEmailClient.create(
        api_url=resolved_settings.email_api_url,
        api_key=resolved_settings.email_api_key,
        sender=resolved_settings.email_from,
    )
    user_service = UserService(
        repository=SupabaseUserRepository(supabase_client),
        tokens=token_service,
        email_client=email_client,
        client_url=resolved_settings.client_url,
    )
    goal_service = GoalService(
        repository=SupabaseGoalRepository(supabase_client),
        default_goal=resolved_settings.default_calorie_goal,
    )
    meal_log_service = MealLogService(meal_log_repository)
    stats_service = StatsService(
        repository=meal_log_repository, goal_service=goal_service
    )
    openai_client = OpenAIVisionClient.create(
        resolved_settings.openai_api_key, base_url=resolved_settings.openai_base_url
    )
    vision_service = VisionService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )

    async def close_resources() -> None:
        try:
            await email_client.close()
        finally:
            await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        token_service=token_service,
        user_service=user_service,
        goal_service=goal_service,
        meal_log_service=meal_log_service,
        stats_service=stats_service,
        vision_service=vision_service,
        close_resources=close_resources,
    )
