"""Models for food photo recognition results."""

from dataclasses import dataclass

from pydantic import BaseModel, Field

from calorie_tracker.domain.stats import DailyTotals


class FoodItem(BaseModel):
    """Single food item estimated from a photo."""

    name: str
    quantity: str | None = None
    calories: float = Field(ge=0.0)
    protein: float = Field(ge=0.0)
    carbs: float = Field(ge=0.0)
    fats: float = Field(ge=0.0)


class FoodScanExtract(BaseModel):
    """Structured output for food recognition."""

    foods: list[FoodItem]


@dataclass(frozen=True)
class FoodScanResult:
    """Recognized foods with summed totals."""

    foods: list[FoodItem]
    totals: DailyTotals
