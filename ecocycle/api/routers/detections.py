"""
Waste detection API endpoints.

Routes:
- POST /detections/classify - Classify an uploaded image (optionally record it)
- POST /detections - Record a detection and credit the profile
- GET /detections - List the user's detections, newest first

Dependencies: ecocycle.application.services, ecocycle.models
System role: Detection HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from ecocycle.api.deps import (
    AuthUser,
    get_current_user,
    get_detection_service,
    get_profile_service,
)
from ecocycle.api.routers.router_utils import handle_service_errors
from ecocycle.application.services import DetectionService, ProfileService
from ecocycle.application.services.detection_service import classification_to_dict
from ecocycle.core.exceptions import ValidationError
from ecocycle.core.security import sanitize_url
from ecocycle.models.common import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PaginatedResponse
from ecocycle.models.detection import (
    ClassificationResponse,
    DetectionCreatedResponse,
    DetectionResponse,
    WasteDetectionCreate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/detections", tags=["detections"])


@router.post("/classify", response_model=ClassificationResponse)
@handle_service_errors
async def classify_image(
    file: UploadFile = File(...),
    image_url: str | None = Form(None),
    record: bool = Form(False),
    user: AuthUser = Depends(get_current_user),
    detection_service: DetectionService = Depends(get_detection_service),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ClassificationResponse:
    """
    Classify an e-waste photo.

    With ``record`` set, the result is stored as a detection and its
    EcoCoins credited; ``image_url`` must then point at the stored image.

    Raises:
        HTTPException(413): Image too large
        HTTPException(415): Not a JPEG, PNG or WebP image
        HTTPException(429): Hourly detection quota exhausted
    """
    image_bytes = await file.read()
    logger.info(
        "Classifying image",
        extra={"user_id": str(user.user_id), "size": len(image_bytes), "record": record},
    )

    if not record:
        result = detection_service.classify_image(image_bytes)
        return ClassificationResponse(**classification_to_dict(result))

    clean_url = sanitize_url(image_url) if image_url else None
    if clean_url is None:
        raise ValidationError("A valid image_url is required to record a detection", field="image_url")

    await profile_service.get_or_create_profile(user.user_id, email=user.email)
    result, detection_id = await detection_service.classify_and_record(user.user_id, image_bytes, clean_url)
    return ClassificationResponse(**classification_to_dict(result), detection_id=detection_id)


@router.post("", response_model=DetectionCreatedResponse, status_code=201)
@handle_service_errors
async def create_detection(
    request: WasteDetectionCreate,
    user: AuthUser = Depends(get_current_user),
    detection_service: DetectionService = Depends(get_detection_service),
    profile_service: ProfileService = Depends(get_profile_service),
) -> DetectionCreatedResponse:
    """
    Record a detection.

    The detection insert, the profile credit and the audit entry commit
    together or not at all.

    Raises:
        HTTPException(422): Invalid payload
        HTTPException(429): Hourly detection quota exhausted
    """
    await profile_service.get_or_create_profile(user.user_id, email=user.email)
    detection_id = await detection_service.create_waste_detection(user.user_id, request)
    return DetectionCreatedResponse(detection_id=detection_id)


@router.get("", response_model=PaginatedResponse[DetectionResponse])
@handle_service_errors
async def list_detections(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    user: AuthUser = Depends(get_current_user),
    detection_service: DetectionService = Depends(get_detection_service),
) -> PaginatedResponse[DetectionResponse]:
    data = await detection_service.list_detections(user.user_id, page=page, limit=limit)
    return PaginatedResponse[DetectionResponse](**data)
