"""
Async HTTP client for the EcoCycle API.

Wraps ``httpx.AsyncClient`` with bearer authentication, exponential
backoff on network failures and 5xx responses, client-side rate-limit
hints and optimistic profile updates.

Dependencies: httpx, tenacity (via ecocycle.core.retry), ecocycle.configs
System role: Python consumer of the HTTP API
"""

import logging
from typing import Any
from uuid import UUID

import httpx

from ecocycle.configs import get_settings
from ecocycle.configs.api import ApiSettings
from ecocycle.configs.limits import LimitSettings
from ecocycle.core.exceptions import (
    EcoCycleError,
    NetworkError,
    OperationTimeoutError,
    RateLimitExceededError,
    error_from_code,
)
from ecocycle.core.rate_limiter import SlidingWindowRateLimiter
from ecocycle.core.retry import is_transient_error, retrying

from .optimistic_cache import OptimisticCache

logger = logging.getLogger(__name__)

PROFILE_KEY = "profile"
DETECTION_HINT = "waste_detection"
REDEMPTION_HINT = "reward_redemption"
HOUR_SECONDS = 3600
DAY_SECONDS = 86400


def should_retry(error: BaseException) -> bool:
    """Retry transient failures and server errors, never client errors."""
    if isinstance(error, EcoCycleError):
        return error.retryable or error.status_code >= 500
    return is_transient_error(error)


def error_from_response(response: httpx.Response) -> EcoCycleError:
    """
    Rebuild the server's error from an error response.

    Bodies carrying ``code`` map to the matching exception type; anything
    else (FastAPI's own ``{"detail": ...}`` bodies included) becomes a
    plain EcoCycleError. The HTTP status always wins.
    """
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    message = body.get("error") or body.get("detail")
    if not isinstance(message, str):
        message = f"Request failed with status {response.status_code}"
    details = body.get("details") or {}

    code = body.get("code")
    error = error_from_code(code, message, details) if code else EcoCycleError(message, details)
    error.status_code = response.status_code
    return error


class EcoCycleClient:
    """
    Client for the ``/api/v1`` surface.

    Usage:
        async with EcoCycleClient(token=access_token) as client:
            profile = await client.get_profile()
            await client.redeem_reward(reward_id, coins_spent=100)
    """

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        settings: ApiSettings | None = None,
        limits: LimitSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        cache: OptimisticCache | None = None,
        rate_limiter: SlidingWindowRateLimiter | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            token: Supabase access token sent as a bearer token
            base_url: API root (defaults to ApiSettings.base_url)
            settings: Timeout and retry policy (defaults to application settings)
            limits: Quotas used for rate-limit hints (defaults to application settings)
            transport: Custom httpx transport, e.g. httpx.MockTransport in tests
            cache: Shared response cache
            rate_limiter: Limiter backing the client-side hints
        """
        app_settings = get_settings() if settings is None or limits is None else None
        self.settings = settings or app_settings.api
        self.limits = limits or app_settings.limits
        self.cache = cache or OptimisticCache()
        self.rate_limiter = rate_limiter or SlidingWindowRateLimiter()

        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._http = httpx.AsyncClient(
            base_url=(base_url or self.settings.base_url).rstrip("/"),
            headers=headers,
            timeout=self.settings.timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "EcoCycleClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ---- transport ----

    async def _send(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise OperationTimeoutError(f"{method} {path} timed out", {"path": path}) from e
        except httpx.TransportError as e:
            raise NetworkError(f"{method} {path} failed: {e}", {"path": path}) from e

        if response.is_success:
            if response.status_code == 204 or not response.content:
                return None
            try:
                return response.json()
            except ValueError as e:
                # keeps the 2xx status so the request is not replayed
                error = EcoCycleError(
                    f"{method} {path} returned a malformed body",
                    {"path": path, "content_type": response.headers.get("content-type")},
                )
                error.status_code = response.status_code
                raise error from e

        error = error_from_response(response)
        logger.warning(
            "API request failed",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "error_code": error.code.value,
            },
        )
        raise error

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        async for attempt in retrying(
            self.settings.retry_attempts,
            self.settings.retry_delay_seconds,
            should_retry,
        ):
            with attempt:
                return await self._send(method, path, **kwargs)
        raise RuntimeError("unreachable")  # pragma: no cover

    def _check_hint(self, action: str, max_requests: int, window_seconds: int) -> None:
        if not self.rate_limiter.is_allowed(action, max_requests, window_seconds):
            raise RateLimitExceededError(action, {"limit": max_requests, "source": "client"})

    # ---- profile ----

    async def get_profile(self) -> dict[str, Any]:
        profile = await self._request("GET", "/profile")
        self.cache.set(PROFILE_KEY, profile)
        return profile

    async def update_profile(self, **fields: Any) -> dict[str, Any]:
        profile = await self._request("PUT", "/profile", json=fields)
        self.cache.set(PROFILE_KEY, profile)
        return profile

    async def get_level(self) -> dict[str, Any]:
        return await self._request("GET", "/profile/level")

    # ---- detections ----

    async def classify_image(
        self,
        image: bytes,
        filename: str = "image.jpg",
        content_type: str = "image/jpeg",
        image_url: str | None = None,
        record: bool = False,
    ) -> dict[str, Any]:
        """
        Upload an image for classification.

        With ``record`` the detection is stored server-side and the
        cached profile is invalidated.
        """
        if record:
            self._check_hint(DETECTION_HINT, self.limits.max_detections_per_hour, HOUR_SECONDS)
        data: dict[str, str] = {"record": "true" if record else "false"}
        if image_url:
            data["image_url"] = image_url
        result = await self._request(
            "POST",
            "/detections/classify",
            files={"file": (filename, image, content_type)},
            data=data,
        )
        if record:
            self.cache.invalidate(PROFILE_KEY)
            self.cache.invalidate("detections")
        return result

    async def create_detection(self, detection: dict[str, Any]) -> UUID:
        """
        Record a detection, crediting the cached profile immediately.

        The cached profile gains the detection's coins, one item and its
        CO2 before the request is sent; a failed request restores it.

        Raises:
            RateLimitExceededError: Hourly quota already used up locally
            EcoCycleError: Server rejected the detection
        """
        self._check_hint(DETECTION_HINT, self.limits.max_detections_per_hour, HOUR_SECONDS)

        coins = int(detection.get("eco_coins_earned", 0))
        co2 = float(detection.get("co2_saved_kg", 0))

        def credit(profile: dict[str, Any]) -> dict[str, Any]:
            profile["eco_coins"] = profile.get("eco_coins", 0) + coins
            profile["total_items_recycled"] = profile.get("total_items_recycled", 0) + 1
            profile["total_co2_saved"] = round(profile.get("total_co2_saved", 0) + co2, 2)
            return profile

        with self.cache.optimistic(PROFILE_KEY, credit):
            body = await self._request("POST", "/detections", json=detection)
            detection_id = UUID(body["detection_id"])
        for prefix in ("detections", "statistics", PROFILE_KEY):
            self.cache.invalidate(prefix)
        return detection_id

    async def list_detections(self, page: int = 1, limit: int = 20) -> dict[str, Any]:
        key = f"detections:{page}:{limit}"
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        data = await self._request("GET", "/detections", params={"page": page, "limit": limit})
        self.cache.set(key, data)
        return data

    # ---- rewards ----

    async def list_rewards(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/rewards")

    async def redeem_reward(self, reward_id: UUID | str, coins_spent: int) -> UUID:
        """
        Redeem a reward, debiting the cached profile immediately.

        Raises:
            RateLimitExceededError: Daily quota already used up locally
            InsufficientCoinsError: Server-side balance too low
        """
        self._check_hint(REDEMPTION_HINT, self.limits.max_redemptions_per_day, DAY_SECONDS)

        def debit(profile: dict[str, Any]) -> dict[str, Any]:
            profile["eco_coins"] = profile.get("eco_coins", 0) - coins_spent
            return profile

        with self.cache.optimistic(PROFILE_KEY, debit):
            body = await self._request(
                "POST",
                "/rewards/redeem",
                json={"reward_id": str(reward_id), "coins_spent": coins_spent},
            )
            redemption_id = UUID(body["redemption_id"])
        self.cache.invalidate(PROFILE_KEY)
        self.cache.invalidate("redemptions")
        return redemption_id

    async def list_redemptions(self, page: int = 1, limit: int = 20) -> dict[str, Any]:
        return await self._request("GET", "/rewards/redemptions", params={"page": page, "limit": limit})

    # ---- collectors and bookings ----

    async def list_collectors(self, city: str | None = None, specialty: str | None = None) -> list[dict[str, Any]]:
        params = {k: v for k, v in {"city": city, "specialty": specialty}.items() if v}
        return await self._request("GET", "/collectors", params=params)

    async def get_collector(self, collector_id: UUID | str) -> dict[str, Any]:
        return await self._request("GET", f"/collectors/{collector_id}")

    async def create_booking(self, booking: dict[str, Any]) -> UUID:
        body = await self._request("POST", "/bookings", json=booking)
        self.cache.invalidate("bookings")
        return UUID(body["booking_id"])

    async def list_bookings(self, page: int = 1, limit: int = 20) -> dict[str, Any]:
        return await self._request("GET", "/bookings", params={"page": page, "limit": limit})

    async def list_upcoming_bookings(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/bookings/upcoming")

    async def list_past_bookings(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/bookings/past")

    async def update_booking_status(self, booking_id: UUID | str, status: str) -> dict[str, Any]:
        booking = await self._request("PATCH", f"/bookings/{booking_id}/status", json={"status": status})
        self.cache.invalidate("bookings")
        return booking

    async def delete_booking(self, booking_id: UUID | str) -> None:
        await self._request("DELETE", f"/bookings/{booking_id}")
        self.cache.invalidate("bookings")

    # ---- read models ----

    async def get_leaderboard(self, page: int = 1, limit: int = 50) -> dict[str, Any]:
        return await self._request("GET", "/leaderboard", params={"page": page, "limit": limit})

    async def get_statistics(self) -> dict[str, Any]:
        return await self._request("GET", "/statistics/me")

    async def get_dashboard(self, time_range: str = "30d") -> dict[str, Any]:
        return await self._request("GET", "/dashboard", params={"time_range": time_range})

    async def estimate_impact(
        self,
        category: str,
        item_name: str | None = None,
        hazard_level: str | None = None,
    ) -> dict[str, Any]:
        params = {"category": category}
        if item_name:
            params["item_name"] = item_name
        if hazard_level:
            params["hazard_level"] = hazard_level
        return await self._request("GET", "/impact/estimate", params=params)

    async def presign_upload(self, content_type: str, size: int, purpose: str = "detections") -> dict[str, Any]:
        return await self._request(
            "POST",
            "/uploads/presign",
            json={"purpose": purpose, "content_type": content_type, "size": size},
        )
