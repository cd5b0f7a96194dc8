"""
Dashboard and impact API endpoints.

Routes:
- GET /dashboard - Trend, category mix, monthly comparison and impact totals
- GET /impact/estimate - Weight, CO2 and EcoCoin estimate for one item

Dependencies: ecocycle.application.services, ecocycle.core.impact, ecocycle.models
System role: Dashboard HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query

from ecocycle.api.deps import AuthUser, get_current_user, get_dashboard_service
from ecocycle.api.routers.router_utils import handle_service_errors
from ecocycle.application.services import DashboardService
from ecocycle.application.services.dashboard_service import DEFAULT_TIME_RANGE
from ecocycle.core import impact
from ecocycle.models.detection import HazardLevelName, SortingSuggestionSchema
from ecocycle.models.statistics import DashboardResponse, ImpactEstimateResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardResponse)
@handle_service_errors
async def get_dashboard(
    time_range: str = Query(DEFAULT_TIME_RANGE, description="7d, 30d, 3m or 6m"),
    user: AuthUser = Depends(get_current_user),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> DashboardResponse:
    """
    Build the user's dashboard.

    Args:
        time_range: Trend window; the trend has one point per day in it
        user: Authenticated user
        dashboard_service: Injected DashboardService

    Raises:
        HTTPException(400): Unknown time range
        HTTPException(404): User has no profile yet
    """
    logger.info("Building dashboard", extra={"user_id": str(user.user_id), "time_range": time_range})
    return DashboardResponse(**await dashboard_service.get_dashboard(user.user_id, time_range))


@router.get("/impact/estimate", response_model=ImpactEstimateResponse)
async def estimate_impact(
    category: str = Query(..., min_length=1, max_length=100),
    item_name: str | None = Query(None, max_length=200),
    hazard_level: HazardLevelName | None = Query(None),
) -> ImpactEstimateResponse:
    """Estimate an item's impact before it is detected or booked."""
    weight = impact.estimate_weight_kg(category, item_name)
    co2 = impact.compute_co2_saved_kg(category, weight.weight_kg)
    sorting = impact.get_sorting_suggestions(category)
    return ImpactEstimateResponse(
        category=category,
        item_name=item_name,
        weight_kg=weight.weight_kg,
        weight_confidence=weight.confidence,
        co2_saved_kg=co2,
        predicted_eco_coins=impact.predict_eco_coins(category, weight.weight_kg, hazard_level),
        trees_equivalent=impact.trees_equivalent(co2),
        energy_kwh=impact.energy_equivalent_kwh(weight.weight_kg),
        water_liters=impact.water_saved_liters(weight.weight_kg),
        sorting=SortingSuggestionSchema(
            steps=sorting.steps,
            safety=sorting.safety,
            donate_or_resell=sorting.donate_or_resell,
        ),
    )
