"""
Detection service orchestrator.

Runs the simulated classifier and records detections. Recording a
detection is atomic: the detection row, the profile totals and the audit
entry are written in a single transaction or not at all.

Dependencies: ecocycle.boundary.db.CRUD, ecocycle.core, ecocycle.configs
System role: Detection use case orchestration
"""

import logging
from dataclasses import asdict
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ecocycle.application.services.rate_limit_service import WASTE_DETECTION, RateLimitService
from ecocycle.application.services.service_utils import parse_input, transaction
from ecocycle.boundary.db.base import ensure_utc
from ecocycle.boundary.db.CRUD.audit_crud import audit_log_crud
from ecocycle.boundary.db.CRUD.detection_crud import waste_detection_crud
from ecocycle.boundary.db.CRUD.profile_crud import profile_crud
from ecocycle.boundary.db.models.detection_model import HazardLevel, WasteDetectionModel
from ecocycle.configs import get_settings
from ecocycle.configs.limits import LimitSettings
from ecocycle.core.detection import DetectionResult, WasteClassifier
from ecocycle.core.exceptions import NotFoundError
from ecocycle.core.security import sanitize_input
from ecocycle.models.common import Pagination, page_offset
from ecocycle.models.detection import WasteDetectionCreate

logger = logging.getLogger(__name__)

DETECTION_WINDOW_MINUTES = 60


def detection_to_dict(detection: WasteDetectionModel) -> dict[str, Any]:
    return {
        "id": detection.id,
        "detected_item": detection.detected_item,
        "category": detection.category,
        "hazard_level": HazardLevel(detection.hazard_level).value,
        "disposal_method": detection.disposal_method,
        "image_url": detection.image_url,
        "eco_coins_earned": detection.eco_coins_earned,
        "weight_kg": detection.weight_kg,
        "co2_saved_kg": detection.co2_saved_kg,
        "detected_at": ensure_utc(detection.detected_at),
    }


def classification_to_dict(result: DetectionResult) -> dict[str, Any]:
    data = asdict(result)
    data["sorting"] = asdict(result.sorting)
    return data


class DetectionService:
    """Detection service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        classifier: WasteClassifier | None = None,
        limits: LimitSettings | None = None,
    ) -> None:
        """
        Initialize detection service.

        Args:
            db: Async SQLAlchemy session
            classifier: Classifier to use (defaults to one sized by limits)
            limits: Quota settings (defaults to application settings)
        """
        self.db = db
        self.limits = limits or get_settings().limits
        self.classifier = classifier or WasteClassifier(max_file_size=self.limits.max_file_size)
        self.rate_limits = RateLimitService(db)

    def classify_image(self, image_bytes: bytes) -> DetectionResult:
        """
        Classify an image without recording anything.

        Raises:
            FileTooLargeError: Image above the size limit
            UnsupportedImageError: Not a JPEG, PNG or WebP image
        """
        return self.classifier.classify(image_bytes)

    async def classify_and_record(
        self,
        user_id: UUID,
        image_bytes: bytes,
        image_url: str,
    ) -> tuple[DetectionResult, UUID]:
        """
        Classify an image and record the result for the user.

        Args:
            user_id: Authenticated user id
            image_bytes: Raw image payload
            image_url: Where the image is stored

        Returns:
            tuple[DetectionResult, UUID]: Classification and recorded detection id
        """
        result = self.classify_image(image_bytes)
        detection_id = await self.create_waste_detection(
            user_id,
            WasteDetectionCreate(
                detected_item=result.item,
                category=result.category,
                hazard_level=result.hazard_level,
                disposal_method=result.disposal_method,
                image_url=image_url,
                eco_coins_earned=result.eco_coins,
                weight_kg=result.weight_kg,
                co2_saved_kg=result.co2_saved_kg,
            ),
        )
        return result, detection_id

    async def create_waste_detection(
        self,
        user_id: UUID,
        data: WasteDetectionCreate | dict,
    ) -> UUID:
        """
        Record a detection and credit it to the user's profile atomically.

        Steps, in one transaction: insert the detection, add
        eco_coins_earned / 1 item / co2_saved_kg to the profile totals, and
        write a CREATE_WASTE_DETECTION audit entry.

        Args:
            user_id: Authenticated user id
            data: Detection payload

        Returns:
            UUID: Created detection id

        Raises:
            ValidationError: Payload fails validation
            RateLimitExceededError: Hourly detection quota exhausted
            NotFoundError: User has no profile
        """
        payload = parse_input(WasteDetectionCreate, data)
        await self.rate_limits.enforce(
            user_id,
            WASTE_DETECTION,
            self.limits.max_detections_per_hour,
            DETECTION_WINDOW_MINUTES,
        )

        async with transaction(self.db, "create_waste_detection", user_id=str(user_id)):
            detection = await waste_detection_crud.create(
                self.db,
                user_id=user_id,
                detected_item=sanitize_input(payload.detected_item),
                category=payload.category,
                hazard_level=HazardLevel(payload.hazard_level),
                disposal_method=sanitize_input(payload.disposal_method) if payload.disposal_method else None,
                image_url=str(payload.image_url),
                eco_coins_earned=payload.eco_coins_earned,
                weight_kg=payload.weight_kg,
                co2_saved_kg=payload.co2_saved_kg,
            )

            credited = await profile_crud.apply_detection_totals(
                self.db,
                user_id,
                eco_coins=payload.eco_coins_earned,
                co2_saved_kg=payload.co2_saved_kg,
            )
            if not credited:
                raise NotFoundError("Profile not found", {"user_id": str(user_id)})

            await audit_log_crud.record(
                self.db,
                user_id=user_id,
                action="CREATE_WASTE_DETECTION",
                table_name="waste_detections",
                record_id=detection.id,
                new_data={
                    "eco_coins_earned": payload.eco_coins_earned,
                    "category": payload.category,
                    "co2_saved_kg": payload.co2_saved_kg,
                },
            )

        logger.info(
            "Waste detection recorded",
            extra={
                "user_id": str(user_id),
                "detection_id": str(detection.id),
                "category": payload.category,
                "eco_coins_earned": payload.eco_coins_earned,
            },
        )
        return detection.id

    async def list_detections(self, user_id: UUID, page: int = 1, limit: int = 20) -> dict[str, Any]:
        """
        Get a user's detections, newest first.

        Returns:
            dict: items plus pagination {page, limit, total, total_pages}
        """
        detections = await waste_detection_crud.get_by_user_id(
            self.db,
            user_id,
            limit=limit,
            offset=page_offset(page, limit),
        )
        total = await waste_detection_crud.count_by_user_id(self.db, user_id)
        return {
            "items": [detection_to_dict(d) for d in detections],
            "pagination": Pagination.build(page, limit, total).model_dump(),
        }
