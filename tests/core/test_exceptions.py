"""
Unit tests for error categorisation.

System role: Verification of error codes, messages and classification
"""

import asyncio

import pytest

from ecocycle.core.exceptions import (
    ERROR_MESSAGES,
    EcoCycleError,
    ErrorCode,
    InsufficientCoinsError,
    NotFoundError,
    RateLimitExceededError,
    TokenExpiredError,
    ValidationError,
    classify_error,
    create_error,
    error_from_code,
)


class TestEcoCycleError:
    def test_defaults_to_code_message(self) -> None:
        error = NotFoundError()

        assert error.message == ERROR_MESSAGES[ErrorCode.DATA_NOT_FOUND]
        assert error.status_code == 404
        assert error.details == {}

    def test_str_includes_details(self) -> None:
        error = ValidationError("Bad phone", field="phone")

        assert str(error) == "Bad phone | Details: {'field': 'phone'}"

    def test_insufficient_coins_details(self) -> None:
        error = InsufficientCoinsError(required=300, available=120)

        assert error.details == {"required": 300, "available": 120}
        assert error.message == "Insufficient EcoCoins. Required: 300, Available: 120"
        assert error.user_message == ERROR_MESSAGES[ErrorCode.INSUFFICIENT_COINS]

    def test_token_expired_is_authentication_error(self) -> None:
        error = TokenExpiredError()

        assert error.status_code == 401
        assert error.code == ErrorCode.TOKEN_EXPIRED

    def test_rate_limit_records_action(self) -> None:
        error = RateLimitExceededError("waste_detection", {"max_requests": 50})

        assert error.details == {"max_requests": 50, "action": "waste_detection"}
        assert error.status_code == 429


class TestClassifyError:
    def test_categorised_error_keeps_code(self) -> None:
        app_error = classify_error(ValidationError("Address too short"), {"form": "booking"})

        assert app_error.code == ErrorCode.VALIDATION_FAILED
        assert app_error.message == ERROR_MESSAGES[ErrorCode.VALIDATION_FAILED]
        assert app_error.details == "Address too short"
        assert app_error.context == {"form": "booking"}

    def test_timeout(self) -> None:
        assert classify_error(asyncio.TimeoutError()).code == ErrorCode.TIMEOUT_ERROR

    @pytest.mark.parametrize(
        "message,code",
        [
            ("Failed to fetch", ErrorCode.NETWORK_ERROR),
            ("JWT malformed", ErrorCode.AUTH_FAILED),
            ('relation "profiles" does not exist', ErrorCode.DATABASE_ERROR),
            ("field required", ErrorCode.VALIDATION_FAILED),
            ("Upload aborted", ErrorCode.UPLOAD_FAILED),
            ("network upload failed", ErrorCode.NETWORK_ERROR),
            ("boom", ErrorCode.UNKNOWN_ERROR),
        ],
    )
    def test_keyword_buckets(self, message: str, code: ErrorCode) -> None:
        app_error = classify_error(RuntimeError(message))

        assert app_error.code == code
        assert app_error.details == message

    def test_plain_string(self) -> None:
        app_error = classify_error("something odd")

        assert app_error.code == ErrorCode.UNKNOWN_ERROR
        assert app_error.details == "something odd"

    def test_none(self) -> None:
        assert classify_error(None).code == ErrorCode.UNKNOWN_ERROR

    def test_recovery_suggestions(self) -> None:
        assert create_error(ErrorCode.NETWORK_ERROR).recovery
        assert create_error(ErrorCode.DATA_NOT_FOUND).recovery == []


class TestErrorFromCode:
    def test_known_code(self) -> None:
        error = error_from_code("DATA_NOT_FOUND", "Reward not found")

        assert isinstance(error, NotFoundError)
        assert error.message == "Reward not found"

    def test_insufficient_coins(self) -> None:
        error = error_from_code("INSUFFICIENT_COINS", "ignored", {"required": 100, "available": 20})

        assert isinstance(error, InsufficientCoinsError)
        assert error.details == {"required": 100, "available": 20}

    def test_rate_limited(self) -> None:
        error = error_from_code("RATE_LIMITED", None, {"action": "booking", "max_requests": 10})

        assert isinstance(error, RateLimitExceededError)
        assert error.details["action"] == "booking"

    def test_code_without_dedicated_class(self) -> None:
        error = error_from_code("CONNECTION_LOST", "dropped")

        assert type(error) is EcoCycleError
        assert error.code == ErrorCode.CONNECTION_LOST

    def test_unknown_code(self) -> None:
        error = error_from_code("NOT_A_CODE", "mystery")

        assert type(error) is EcoCycleError
        assert error.code == ErrorCode.UNKNOWN_ERROR
