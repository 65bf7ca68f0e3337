"""Tests for the error normalizer and status classification."""
from __future__ import annotations

import httpx
import pytest

from chat_bridge.base.errors import (
    ErrorCode,
    NormalizedError,
    ProviderError,
    classify_exception,
    classify_status,
    normalize_error,
)


class _StatusError(Exception):
    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.status = status
        self.kind = "upstream"


def test_string_becomes_message():
    err = normalize_error("boom")
    assert err == NormalizedError("boom", None, None)  # nosec B101


def test_none_and_unknown_values():
    assert normalize_error(None).message == "Unknown error"  # nosec B101
    assert normalize_error(42).message == "Unknown error"  # nosec B101
    assert normalize_error([]).message == "Unknown error"  # nosec B101


def test_list_normalizes_first_element():
    err = normalize_error([{"message": "first"}, {"message": "second"}], 400)
    assert err.message == "first"  # nosec B101
    assert err.http_status == 400  # nosec B101


def test_nested_error_merges_outer_fields_with_inner_precedence():
    payload = {"request_id": "r1", "type": "outer", "error": {"message": "bad key", "type": "invalid_request_error"}}
    err = normalize_error(payload, 401)
    assert err.message == "bad key"  # nosec B101
    assert err.details == {"request_id": "r1", "type": "invalid_request_error"}  # nosec B101
    assert err.http_status == 401  # nosec B101


def test_exception_uses_message_and_serializable_attributes():
    err = normalize_error(_StatusError("  upstream failed  ", 503))
    assert err.message == "upstream failed"  # nosec B101
    assert err.http_status == 503  # nosec B101
    assert err.details == {"status": 503, "kind": "upstream"}  # nosec B101


def test_empty_exception_message_uses_class_name():
    assert normalize_error(RuntimeError()).message == "RuntimeError"  # nosec B101


def test_explicit_status_wins():
    err = normalize_error({"message": "x", "http_status": 500}, 429)
    assert err.http_status == 429  # nosec B101


def test_details_none_when_nothing_extra():
    assert normalize_error({"message": "only"}).details is None  # nosec B101


@pytest.mark.parametrize(
    "value",
    [
        "plain",
        {"error": {"message": "nested", "code": 7}},
        {"message": "flat", "param": "model"},
        ValueError("exc"),
    ],
)
def test_normalization_is_idempotent(value):
    once = normalize_error(value, 400)
    assert normalize_error(once) == once  # nosec B101
    assert normalize_error(once.to_dict()) == once  # nosec B101


@pytest.mark.parametrize(
    "status,code",
    [
        (400, ErrorCode.VALIDATION),
        (401, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (418, ErrorCode.VALIDATION),
        (429, ErrorCode.RATE_LIMIT),
        (503, ErrorCode.UNAVAILABLE),
        (599, ErrorCode.SERVER_ERROR),
        (200, None),
        (None, None),
    ],
)
def test_classify_status(status, code):
    assert classify_status(status) is code  # nosec B101


def test_classify_exception_paths():
    assert classify_exception(httpx.ReadTimeout("slow")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ConnectError("refused")) is ErrorCode.TRANSIENT  # nosec B101
    assert classify_exception(RuntimeError("Rate limit hit")) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(RuntimeError("???")) is ErrorCode.UNKNOWN  # nosec B101
    pe = ProviderError(code=ErrorCode.AUTH, message="no", provider="openai")
    assert classify_exception(pe) is ErrorCode.AUTH  # nosec B101


def test_provider_error_round_trip_through_normalized():
    err = NormalizedError("slow down", {"retry_after": 2}, 429)
    exc = ProviderError.from_normalized(err, provider="groq", model="m")
    assert exc.code is ErrorCode.RATE_LIMIT  # nosec B101
    assert exc.retryable  # nosec B101
    assert exc.to_normalized() == err  # nosec B101
    assert normalize_error(exc) == err  # nosec B101
