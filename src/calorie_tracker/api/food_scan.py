"""Food photo recognition endpoint."""

from fastapi import APIRouter, Depends

from calorie_tracker.api.dependencies import get_caller, get_container
from calorie_tracker.api.schemas import FoodScanRequest
from calorie_tracker.api.serializers import serialize_food_scan
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.models import CallerIdentity

router = APIRouter(prefix="/food-scan", tags=["food-scan"])


@router.post("")
async def scan_food(
    body: FoodScanRequest,
    caller: CallerIdentity | None = Depends(get_caller),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Estimate foods and macros in a photo; nothing is stored."""
    result = await container.vision_service.scan(
        caller, image_base64=body.image_base64, image_url=body.image_url
    )
    return serialize_food_scan(result)
