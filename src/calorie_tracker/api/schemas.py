"""Request models for the HTTP API."""

from pydantic import BaseModel, ConfigDict


class MealLogPayload(BaseModel):
    """Meal log body; every field is optional so services decide what is missing."""

    model_config = ConfigDict(extra="ignore")

    meal: str | None = None
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fats: float | None = None
    date: str | None = None


class RegisterRequest(BaseModel):
    """Registration body."""

    username: str = ""
    email: str = ""
    password: str = ""


class LoginRequest(BaseModel):
    """Login body."""

    email: str = ""
    password: str = ""


class ChangePasswordRequest(BaseModel):
    """Password change body."""

    current_password: str = ""
    new_password: str = ""


class ForgotPasswordRequest(BaseModel):
    """Password reset request body."""

    email: str = ""


class ResetPasswordRequest(BaseModel):
    """New password submitted with a reset token."""

    new_password: str = ""


class GoalUpdate(BaseModel):
    """Calorie goal body."""

    calorie_goal: float


class FoodScanRequest(BaseModel):
    """Food photo body; one of the two image fields is required."""

    image_url: str | None = None
    image_base64: str | None = None
