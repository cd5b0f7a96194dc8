"""
Test suite for the read-side services: statistics, dashboard and collectors.

System role: Verification of aggregates, rankings and the analytics view
"""

import uuid
from datetime import date, datetime, timezone

import pytest

from ecocycle.application.services.collector_service import CollectorService
from ecocycle.application.services.dashboard_service import DashboardService, growth_percent, subtract_months
from ecocycle.application.services.statistics_service import StatisticsService
from ecocycle.boundary.db.CRUD import collector_crud, profile_crud, waste_detection_crud
from ecocycle.boundary.db.models import HazardLevel
from ecocycle.core.exceptions import NotFoundError, ValidationError

NOW = datetime(2026, 5, 20, 12, 0, tzinfo=timezone.utc)


async def _record(db, user_id, detected_at, category="Laptops", coins=80):
    await waste_detection_crud.create(
        db,
        user_id=user_id,
        detected_item="Device",
        category=category,
        hazard_level=HazardLevel.HIGH,
        image_url="https://cdn.example.com/d.jpg",
        eco_coins_earned=coins,
        weight_kg=1.8,
        co2_saved_kg=18.0,
        detected_at=detected_at,
    )
    await profile_crud.apply_detection_totals(db, user_id, coins, 18.0)
    await db.commit()


class TestStatistics:
    async def test_leaderboard_ranks_continue_across_pages(self, test_async_db) -> None:
        for coins in (300, 200, 100):
            await profile_crud.create(test_async_db, user_id=uuid.uuid4(), eco_coins=coins)
        await test_async_db.commit()
        service = StatisticsService(db=test_async_db)

        page = await service.get_leaderboard(page=2, limit=2)

        assert [(e["rank"], e["eco_coins"]) for e in page["items"]] == [(3, 100)]
        assert page["pagination"]["total"] == 3

    async def test_user_statistics_without_activity(self, test_async_db, user_id) -> None:
        stats = await StatisticsService(db=test_async_db).get_user_statistics(user_id)

        assert stats["total_detections"] == 0
        assert stats["avg_coins_per_detection"] == 0
        assert stats["most_detected_category"] is None
        assert stats["last_detection_date"] is None

    async def test_user_statistics(self, test_async_db, profile, user_id) -> None:
        await _record(test_async_db, user_id, NOW, category="Audio", coins=20)
        await _record(test_async_db, user_id, NOW, category="Audio", coins=30)
        await _record(test_async_db, user_id, NOW, category="Cables", coins=40)

        stats = await StatisticsService(db=test_async_db).get_user_statistics(user_id)

        assert stats["total_detections"] == 3
        assert stats["categories_detected"] == ["Audio", "Cables"]
        assert stats["most_detected_category"] == "Audio"
        assert stats["avg_coins_per_detection"] == 30
        assert stats["last_detection_date"].tzinfo is not None


class TestDashboard:
    async def test_trend_covers_every_day(self, test_async_db, profile, user_id) -> None:
        await _record(test_async_db, user_id, datetime(2026, 5, 18, 8, 0, tzinfo=timezone.utc))
        await _record(test_async_db, user_id, datetime(2026, 4, 10, 8, 0, tzinfo=timezone.utc))

        dashboard = await DashboardService(db=test_async_db).get_dashboard(user_id, "7d", now=NOW)

        trend = dashboard["trend"]
        assert len(trend) == 8
        assert trend[0]["date"] == date(2026, 5, 13)
        assert trend[-1]["date"] == date(2026, 5, 20)
        busy = next(day for day in trend if day["date"] == date(2026, 5, 18))
        assert busy == {"date": date(2026, 5, 18), "items": 1, "eco_coins": 80, "co2": 2.5}

        assert dashboard["monthly"] == {"this_month": 1, "last_month": 1, "growth_percent": 0.0}
        assert dashboard["categories"] == [{"category": "Laptops", "count": 2}]

    async def test_trend_first_day_counts_from_midnight(self, test_async_db, profile, user_id) -> None:
        # earlier in the day than NOW, on the first day of the 7d range
        await _record(test_async_db, user_id, datetime(2026, 5, 13, 8, 0, tzinfo=timezone.utc))

        dashboard = await DashboardService(db=test_async_db).get_dashboard(user_id, "7d", now=NOW)

        first = dashboard["trend"][0]
        assert first["date"] == date(2026, 5, 13)
        assert first["items"] == 1
        assert first["eco_coins"] == 80

    async def test_impact_block(self, test_async_db, profile, user_id) -> None:
        await _record(test_async_db, user_id, NOW)

        impact = (await DashboardService(db=test_async_db).get_dashboard(user_id, now=NOW))["impact"]

        assert impact["total_items"] == 1
        assert impact["water_saved_liters"] == 1000
        assert impact["energy_saved_kwh"] == 50
        assert impact["landfill_diverted_kg"] == 0.5
        assert impact["trees_equivalent"] == pytest.approx(0.83)

    async def test_invalid_time_range(self, test_async_db, profile, user_id) -> None:
        with pytest.raises(ValidationError):
            await DashboardService(db=test_async_db).get_dashboard(user_id, "1y")

    async def test_missing_profile(self, test_async_db) -> None:
        with pytest.raises(NotFoundError):
            await DashboardService(db=test_async_db).get_dashboard(uuid.uuid4())

    def test_subtract_months_clamps_day(self) -> None:
        assert subtract_months(datetime(2026, 5, 31, tzinfo=timezone.utc), 3).date() == date(2026, 2, 28)
        assert subtract_months(datetime(2026, 1, 15, tzinfo=timezone.utc), 6).date() == date(2025, 7, 15)

    @pytest.mark.parametrize("this_month,last_month,expected", [(3, 0, 0.0), (3, 2, 50.0), (1, 4, -75.0)])
    def test_growth_percent(self, this_month, last_month, expected) -> None:
        assert growth_percent(this_month, last_month) == expected


class TestCollectors:
    async def test_filters(self, test_async_db, collector) -> None:
        await collector_crud.create(
            test_async_db,
            name="Delhi Batteries",
            email="hello@db.example",
            phone="+911111111111",
            city="Delhi",
            rating=4.9,
            specialties=["Batteries"],
        )
        await collector_crud.create(
            test_async_db,
            name="Closed Shop",
            email="x@closed.example",
            phone="+912222222222",
            city="Mumbai",
            available=False,
        )
        await test_async_db.commit()
        service = CollectorService(db=test_async_db)

        assert [c["name"] for c in await service.list_available_collectors()] == [
            "Delhi Batteries",
            "GreenTech Recyclers",
        ]
        assert [c["name"] for c in await service.list_available_collectors(city="mumbai")] == ["GreenTech Recyclers"]
        assert [c["name"] for c in await service.list_available_collectors(specialty="laptops")] == [
            "GreenTech Recyclers"
        ]

    async def test_unknown_collector(self, test_async_db) -> None:
        with pytest.raises(NotFoundError):
            await CollectorService(db=test_async_db).get_collector(uuid.uuid4())
