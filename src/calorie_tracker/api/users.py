"""User account and goal endpoints."""

from fastapi import APIRouter, Depends, status

from calorie_tracker.api.dependencies import get_caller, get_container
from calorie_tracker.api.schemas import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    GoalUpdate,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from calorie_tracker.api.serializers import serialize_user
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.models import CallerIdentity

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest, container: AppContainer = Depends(get_container)
) -> dict[str, str]:
    """Register a user and send the verification email."""
    await container.user_service.register(body.username, body.email, body.password)
    return {
        "message": (
            "User registered successfully. "
            "Please check your email to verify your account."
        )
    }


@router.get("/verify/{token}")
async def verify_email(
    token: str, container: AppContainer = Depends(get_container)
) -> dict[str, str]:
    """Confirm an email address from the emailed link."""
    return {"message": container.user_service.verify_email(token)}


@router.post("/login")
async def login(
    body: LoginRequest, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Exchange credentials for a bearer token."""
    result = container.user_service.login(body.email, body.password)
    goal = container.goal_service.resolve(result.user.id)
    return {"user": serialize_user(result.user, goal), "token": result.token}


@router.post("/forgot-password")
async def forgot_password(
    body: ForgotPasswordRequest, container: AppContainer = Depends(get_container)
) -> dict[str, str]:
    """Email a password reset link if the account exists."""
    return {"message": await container.user_service.forgot_password(body.email)}


@router.post("/reset-password/{token}")
async def reset_password(
    token: str,
    body: ResetPasswordRequest,
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Set a new password from an emailed reset link."""
    container.user_service.reset_password(token, body.new_password)
    return {"message": "Password has been reset successfully"}


@router.get("/me")
async def current_user(
    caller: CallerIdentity | None = Depends(get_caller),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's profile."""
    user = container.user_service.get_profile(caller)
    return serialize_user(user, container.goal_service.resolve(user.id))


@router.patch("/me/password")
async def change_password(
    body: ChangePasswordRequest,
    caller: CallerIdentity | None = Depends(get_caller),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Change the caller's password."""
    container.user_service.change_password(
        caller, body.current_password, body.new_password
    )
    return {"message": "Password updated successfully"}


@router.get("/me/goal")
async def get_goal(
    caller: CallerIdentity | None = Depends(get_caller),
    container: AppContainer = Depends(get_container),
) -> dict[str, float]:
    """Return the caller's effective calorie goal."""
    return {"calorie_goal": container.goal_service.get_calorie_goal(caller)}


@router.put("/me/goal")
async def set_goal(
    body: GoalUpdate,
    caller: CallerIdentity | None = Depends(get_caller),
    container: AppContainer = Depends(get_container),
) -> dict[str, float]:
    """Update the caller's calorie goal."""
    goal = container.goal_service.set_calorie_goal(caller, body.calorie_goal)
    return {"calorie_goal": goal}
