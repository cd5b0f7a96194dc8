"""
Test suite for ProfileService.
"""

import uuid

import pytest

from ecocycle.application.services.profile_service import ProfileService
from ecocycle.boundary.db.CRUD import profile_crud
from ecocycle.core.exceptions import NotFoundError, ValidationError


@pytest.fixture
def profile_service(test_async_db) -> ProfileService:
    return ProfileService(db=test_async_db)


async def test_get_or_create_creates_once(profile_service, user_id) -> None:
    first = await profile_service.get_or_create_profile(user_id, email="new@example.com")
    second = await profile_service.get_or_create_profile(user_id)

    assert first["id"] == second["id"]
    assert first["email"] == "new@example.com"
    assert first["eco_coins"] == 0
    assert first["badges"] == []


async def test_get_or_create_when_a_concurrent_request_won(profile_service, profile, user_id, monkeypatch) -> None:
    """The row appears between the existence check and the insert."""
    existing_id = profile.id
    real_get = profile_crud.get_by_user_id
    calls = []

    async def stale_then_real(session, uid, **kwargs):
        calls.append(uid)
        if len(calls) == 1:
            return None
        return await real_get(session, uid, **kwargs)

    monkeypatch.setattr(profile_crud, "get_by_user_id", stale_then_real)

    result = await profile_service.get_or_create_profile(user_id, email="late@example.com")

    assert result["id"] == existing_id
    assert result["email"] == "recycler@example.com"
    assert result["eco_coins"] == 500
    assert len(calls) == 2


async def test_get_profile_missing(profile_service) -> None:
    with pytest.raises(NotFoundError):
        await profile_service.get_profile(uuid.uuid4())


async def test_update_only_sent_fields(profile_service, profile, user_id) -> None:
    updated = await profile_service.update_profile(user_id, {"city": "  Navi   Mumbai "})

    assert updated["city"] == "Navi Mumbai"
    assert updated["full_name"] == "Test Recycler"
    assert updated["eco_coins"] == 500


async def test_update_creates_missing_profile(profile_service, user_id) -> None:
    updated = await profile_service.update_profile(user_id, {"full_name": "First Timer"})

    assert updated["user_id"] == user_id
    assert updated["full_name"] == "First Timer"


async def test_update_rejects_bad_phone(profile_service, profile, user_id) -> None:
    with pytest.raises(ValidationError) as exc_info:
        await profile_service.update_profile(user_id, {"phone": "call me"})

    assert exc_info.value.details["field"] == "phone"


async def test_level(profile_service, profile, user_id) -> None:
    level = await profile_service.get_level(user_id)

    assert level["eco_coins"] == 500
    assert 0 <= level["progress"] <= 1
