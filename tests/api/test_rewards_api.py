"""
Tests for the reward and collector routes.
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from ecocycle.api.deps import get_collector_service
from ecocycle.application.services import CollectorService
from ecocycle.core.exceptions import InsufficientCoinsError, NotFoundError, RewardUnavailableError


@pytest.fixture
def collector_service(app) -> MagicMock:
    service = MagicMock(spec=CollectorService)
    app.dependency_overrides[get_collector_service] = lambda: service
    return service


def test_list_rewards(client, reward_service):
    reward_service.list_active_rewards.return_value = [
        {
            "id": uuid.uuid4(),
            "name": "Coffee voucher",
            "description": None,
            "category": "Food",
            "coins_required": 100,
            "discount_value": "100%",
            "icon": "coffee",
            "active": True,
        }
    ]

    response = client.get("/api/v1/rewards")

    assert response.status_code == 200
    assert response.json()[0]["coins_required"] == 100


def test_redeem(client, reward_service, user_id):
    reward_id = uuid.uuid4()
    redemption_id = uuid.uuid4()
    reward_service.redeem_reward.return_value = redemption_id

    response = client.post("/api/v1/rewards/redeem", json={"reward_id": str(reward_id), "coins_spent": 100})

    assert response.status_code == 201
    assert response.json() == {"redemption_id": str(redemption_id)}
    reward_service.redeem_reward.assert_awaited_once_with(user_id, reward_id, 100)


def test_redeem_insufficient_coins(client, reward_service):
    reward_service.redeem_reward.side_effect = InsufficientCoinsError(required=600, available=500)

    response = client.post("/api/v1/rewards/redeem", json={"reward_id": str(uuid.uuid4()), "coins_spent": 600})

    assert response.status_code == 409
    body = response.json()
    assert body["code"] == "INSUFFICIENT_COINS"
    assert body["details"] == {"required": 600, "available": 500}


def test_redeem_inactive_reward(client, reward_service):
    reward_service.redeem_reward.side_effect = RewardUnavailableError("Reward is not active")

    response = client.post("/api/v1/rewards/redeem", json={"reward_id": str(uuid.uuid4()), "coins_spent": 10})

    assert response.status_code == 409
    assert response.json()["code"] == "ITEM_NOT_AVAILABLE"


def test_redeem_zero_coins(client, reward_service):
    response = client.post("/api/v1/rewards/redeem", json={"reward_id": str(uuid.uuid4()), "coins_spent": 0})

    assert response.status_code == 422
    reward_service.redeem_reward.assert_not_called()


def test_list_redemptions(client, reward_service):
    reward_service.list_redemptions.return_value = {
        "items": [
            {
                "id": uuid.uuid4(),
                "reward_id": uuid.uuid4(),
                "reward_name": "Coffee voucher",
                "coins_spent": 100,
                "redeemed_at": datetime(2026, 2, 1, tzinfo=timezone.utc),
            }
        ],
        "pagination": {"page": 1, "limit": 20, "total": 1, "total_pages": 1},
    }

    response = client.get("/api/v1/rewards/redemptions")

    assert response.status_code == 200
    assert response.json()["items"][0]["reward_name"] == "Coffee voucher"


def test_list_collectors_filters(client, collector_service):
    collector_service.list_available_collectors.return_value = []

    response = client.get("/api/v1/collectors", params={"city": "Mumbai", "specialty": "Laptops"})

    assert response.status_code == 200
    collector_service.list_available_collectors.assert_awaited_once_with(city="Mumbai", specialty="Laptops")


def test_unknown_collector(client, collector_service):
    collector_service.get_collector.side_effect = NotFoundError("Collector not found")

    response = client.get(f"/api/v1/collectors/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json()["code"] == "DATA_NOT_FOUND"
