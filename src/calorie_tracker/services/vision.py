"""Food photo recognition using LLMs."""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from calorie_tracker.domain.models import CallerIdentity
from calorie_tracker.domain.vision import FoodScanExtract, FoodScanResult
from calorie_tracker.errors import ErrorKind, TrackerError, unauthenticated
from calorie_tracker.services.aggregation import daily_totals

logger = logging.getLogger(__name__)

_NUMBER = {"type": "number", "minimum": 0}

FOOD_SCAN_SCHEMA_NAME = "food_scan"

FOOD_SCAN_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "foods": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "quantity": {"anyOf": [{"type": "string"}, {"type": "null"}]},
                    "calories": _NUMBER,
                    "protein": _NUMBER,
                    "carbs": _NUMBER,
                    "fats": _NUMBER,
                },
                "required": ["name", "quantity", "calories", "protein", "carbs", "fats"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["foods"],
    "additionalProperties": False,
}

FOOD_SCAN_PROMPT = (
    "Analyze this food image and identify all food items and ingredients "
    "visible. For each item return its name, an estimated quantity "
    '(e.g. "1 cup", "200g", "1 serving"), calories, and protein, carbs and '
    "fats in grams. If an item is unclear, estimate from a common serving size."
)


class VisionClient(Protocol):
    """Interface for LLM vision extraction."""

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
        """Return the model's JSON answer for ``schema``."""


@dataclass
class VisionService:
    """Service that prepares food scan prompts and validates results."""

    client: VisionClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def scan(
        self,
        caller: CallerIdentity | None,
        image_base64: str | None = None,
        image_url: str | None = None,
    ) -> FoodScanResult:
        """Estimate foods and macros in an image via the configured client."""
        if caller is None:
            raise unauthenticated()
        if not image_base64 and not image_url:
            raise TrackerError(
                ErrorKind.MISSING_FIELD, "Either image_url or image_base64 is required"
            )
        url = _to_image_url(image_base64) if image_base64 else str(image_url)
        try:
            raw = await self.client.extract(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                image_url=url,
                schema=FOOD_SCAN_SCHEMA,
                schema_name=FOOD_SCAN_SCHEMA_NAME,
                prompt=FOOD_SCAN_PROMPT,
            )
            extract = FoodScanExtract.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Food scan returned invalid output: %s", exc)
            raise TrackerError(
                ErrorKind.UPSTREAM_SERVICE_FAILURE,
                "Failed to scan food: invalid response format from AI",
            ) from exc
        except Exception as exc:
            logger.exception("Food scan request failed")
            raise TrackerError(
                ErrorKind.UPSTREAM_SERVICE_FAILURE, f"Failed to scan food: {exc}"
            ) from exc
        return FoodScanResult(foods=extract.foods, totals=daily_totals(extract.foods))


def _to_image_url(image_base64: str) -> str:
    """Return a data URL, keeping one that already carries its MIME type."""
    if image_base64.startswith("data:"):
        return image_base64
    try:
        head = base64.b64decode(image_base64[:64], validate=False)
    except (binascii.Error, ValueError):
        head = b""
    return f"data:{_detect_mime_type(head)};base64,{image_base64}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
