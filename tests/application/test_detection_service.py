"""
Test suite for DetectionService.

Runs against an in-memory SQLite database so the atomic write can be
checked end to end: detection row, profile totals and audit entry.

System role: Verification of detection recording
"""

import random
import uuid

import pytest

from ecocycle.application.services.detection_service import DetectionService
from ecocycle.boundary.db.CRUD import audit_log_crud, profile_crud, waste_detection_crud
from ecocycle.configs.limits import LimitSettings
from ecocycle.core.detection import WasteClassifier
from ecocycle.core.exceptions import (
    NotFoundError,
    RateLimitExceededError,
    UnsupportedImageError,
    ValidationError,
)


@pytest.fixture
def detection_payload() -> dict:
    return {
        "detected_item": "iPhone 13 Pro",
        "category": "Smartphones",
        "hazard_level": "medium",
        "disposal_method": "Certified e-waste center",
        "image_url": "https://cdn.example.com/uploads/phone.jpg",
        "eco_coins_earned": 45,
        "weight_kg": 0.18,
        "co2_saved_kg": 1.17,
    }


@pytest.fixture
def detection_service(test_async_db, limits) -> DetectionService:
    return DetectionService(
        db=test_async_db,
        classifier=WasteClassifier(rng=random.Random(7)),
        limits=limits,
    )


class TestCreateWasteDetection:
    """Atomic detection recording."""

    async def test_credits_profile_and_writes_audit(
        self, detection_service, test_async_db, profile, user_id, detection_payload
    ) -> None:
        # Act
        detection_id = await detection_service.create_waste_detection(user_id, detection_payload)

        # Assert
        detection = await waste_detection_crud.get_by_id(test_async_db, detection_id)
        assert detection.user_id == user_id
        assert detection.eco_coins_earned == 45

        refreshed = await profile_crud.get_by_user_id(test_async_db, user_id)
        assert refreshed.eco_coins == 545
        assert refreshed.total_items_recycled == 1
        assert refreshed.total_co2_saved == pytest.approx(1.17)

        audit = await audit_log_crud.get_by_user_id(test_async_db, user_id, action="CREATE_WASTE_DETECTION")
        assert len(audit) == 1
        assert audit[0].record_id == detection_id
        assert audit[0].new_data["eco_coins_earned"] == 45

    async def test_missing_profile_leaves_nothing_behind(
        self, detection_service, test_async_db, detection_payload
    ) -> None:
        stranger = uuid.uuid4()

        with pytest.raises(NotFoundError):
            await detection_service.create_waste_detection(stranger, detection_payload)

        assert await waste_detection_crud.count_by_user_id(test_async_db, stranger) == 0
        assert await audit_log_crud.get_by_user_id(test_async_db, stranger) == []

    async def test_negative_coins_rejected(self, detection_service, profile, user_id, detection_payload) -> None:
        detection_payload["eco_coins_earned"] = -1

        with pytest.raises(ValidationError) as exc_info:
            await detection_service.create_waste_detection(user_id, detection_payload)

        assert exc_info.value.details["field"] == "eco_coins_earned"

    async def test_hourly_quota(self, test_async_db, profile, user_id, detection_payload) -> None:
        # Arrange
        service = DetectionService(db=test_async_db, limits=LimitSettings(max_detections_per_hour=1))
        await service.create_waste_detection(user_id, detection_payload)

        # Act / Assert
        with pytest.raises(RateLimitExceededError):
            await service.create_waste_detection(user_id, detection_payload)

        refreshed = await profile_crud.get_by_user_id(test_async_db, user_id)
        assert refreshed.total_items_recycled == 1


class TestClassify:
    def test_classify_only(self, detection_service, jpeg_bytes) -> None:
        result = detection_service.classify_image(jpeg_bytes)

        assert 75 <= result.confidence <= 99
        assert result.co2_saved_kg >= 0

    def test_rejects_non_image(self, detection_service) -> None:
        with pytest.raises(UnsupportedImageError):
            detection_service.classify_image(b"%PDF-1.7")

    async def test_classify_and_record(self, detection_service, test_async_db, profile, user_id, png_bytes) -> None:
        result, detection_id = await detection_service.classify_and_record(
            user_id, png_bytes, "https://cdn.example.com/uploads/item.png"
        )

        detection = await waste_detection_crud.get_by_id(test_async_db, detection_id)
        assert detection.detected_item == result.item
        assert detection.eco_coins_earned == result.eco_coins

        refreshed = await profile_crud.get_by_user_id(test_async_db, user_id)
        assert refreshed.eco_coins == 500 + result.eco_coins


class TestListDetections:
    async def test_paginates_newest_first(self, detection_service, profile, user_id, detection_payload) -> None:
        for _ in range(3):
            await detection_service.create_waste_detection(user_id, detection_payload)

        page = await detection_service.list_detections(user_id, page=2, limit=2)

        assert len(page["items"]) == 1
        assert page["pagination"] == {"page": 2, "limit": 2, "total": 3, "total_pages": 2}
