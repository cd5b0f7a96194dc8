"""
Fixtures for API route tests.

Routes run against a real application with services replaced by mocks
through FastAPI's dependency_overrides.
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from ecocycle.api.deps import (
    AuthUser,
    get_booking_service,
    get_current_user,
    get_dashboard_service,
    get_detection_service,
    get_profile_service,
    get_reward_service,
    get_settings_dependency,
    get_statistics_service,
)
from ecocycle.api.main import create_app
from ecocycle.application.services import (
    BookingService,
    DashboardService,
    DetectionService,
    ProfileService,
    RewardService,
    StatisticsService,
)

CREATED = datetime(2026, 1, 5, 8, 30, tzinfo=timezone.utc)


@pytest.fixture
def app(test_settings):
    application = create_app()
    application.dependency_overrides[get_settings_dependency] = lambda: test_settings
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def auth_user(user_id) -> AuthUser:
    return AuthUser(user_id=user_id, email="recycler@example.com", role="authenticated")


@pytest.fixture
def client(app, auth_user) -> TestClient:
    """Client whose requests are already authenticated as auth_user."""
    app.dependency_overrides[get_current_user] = lambda: auth_user
    return TestClient(app)


@pytest.fixture
def anonymous_client(app) -> TestClient:
    return TestClient(app)


def _override(app, factory, service_cls) -> MagicMock:
    service = MagicMock(spec=service_cls)
    app.dependency_overrides[factory] = lambda: service
    return service


@pytest.fixture
def profile_service(app) -> MagicMock:
    return _override(app, get_profile_service, ProfileService)


@pytest.fixture
def detection_service(app) -> MagicMock:
    return _override(app, get_detection_service, DetectionService)


@pytest.fixture
def reward_service(app) -> MagicMock:
    return _override(app, get_reward_service, RewardService)


@pytest.fixture
def booking_service(app) -> MagicMock:
    return _override(app, get_booking_service, BookingService)


@pytest.fixture
def statistics_service(app) -> MagicMock:
    return _override(app, get_statistics_service, StatisticsService)


@pytest.fixture
def dashboard_service(app) -> MagicMock:
    return _override(app, get_dashboard_service, DashboardService)


@pytest.fixture
def profile_data(user_id) -> dict:
    return {
        "id": uuid.uuid4(),
        "user_id": user_id,
        "email": "recycler@example.com",
        "full_name": "Test Recycler",
        "avatar_url": None,
        "phone": None,
        "address": None,
        "city": "Mumbai",
        "eco_coins": 500,
        "total_items_recycled": 4,
        "total_co2_saved": 7.25,
        "badges": [],
        "created_at": CREATED,
        "updated_at": CREATED,
    }


@pytest.fixture
def booking_data() -> dict:
    return {
        "id": uuid.uuid4(),
        "collector_id": None,
        "collector": None,
        "pickup_address": "12 MG Road, Bengaluru",
        "pickup_date": datetime(2026, 7, 3, 9, 0, tzinfo=timezone.utc),
        "items_description": "Old phones",
        "estimated_weight": None,
        "notes": None,
        "eco_coins_earned": 36,
        "status": "pending",
        "created_at": CREATED,
        "updated_at": CREATED,
    }
