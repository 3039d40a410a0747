"""Tests for error classification and the JSON failure log."""
from __future__ import annotations

import json

import httpx
import pytest

from openrouter_catalog import failure_logger
from openrouter_catalog.error_handler import (
    CacheReadError,
    HTTPError,
    InvalidArgumentError,
    NetworkError,
    RefreshUnavailableError,
    UpstreamDataError,
    classify_error,
)


def _request() -> httpx.Request:
    return httpx.Request("GET", "https://openrouter.ai/api/v1/models/x/y/endpoints")


@pytest.mark.parametrize(
    "status, expected",
    [(401, "authentication"), (404, "not_found"), (429, "rate_limit"), (400, "invalid_request"), (502, "server_error")],
)
def test_http_errors_classified_by_status(status: int, expected: str) -> None:
    classified = classify_error(HTTPError("boom", model_id="x/y", status_code=status))
    assert classified.error_type == expected
    assert classified.status_code == status


def test_raw_httpx_status_error() -> None:
    response = httpx.Response(503, request=_request())
    err = httpx.HTTPStatusError("down", request=response.request, response=response)
    assert classify_error(err).error_type == "server_error"


def test_network_error_with_timeout_cause() -> None:
    try:
        try:
            raise httpx.ReadTimeout("slow", request=_request())
        except httpx.ReadTimeout as e:
            raise NetworkError("timed out", model_id="x/y") from e
    except NetworkError as err:
        assert classify_error(err).error_type == "timeout"


def test_other_classifications() -> None:
    assert classify_error(NetworkError("down")).error_type == "api_connection"
    assert classify_error(UpstreamDataError("no data")).error_type == "upstream_data"
    assert classify_error(CacheReadError("bad")).error_type == "cache_read"
    assert classify_error(RuntimeError("?")).error_type == "unknown"


def test_invalid_argument_is_value_error() -> None:
    assert isinstance(InvalidArgumentError("Model ID is required"), ValueError)


def test_refresh_unavailable_message() -> None:
    err = RefreshUnavailableError("x/y")
    assert err.model_id == "x/y"
    assert "x/y" in str(err)


def test_log_refresh_failure_writes_json_record(tmp_path, caplog) -> None:
    failure_logger.configure_failure_logger(tmp_path / "logs")
    err = HTTPError("HTTP 500", model_id="x/y", status_code=500, response_text='{"error":"boom"}')

    failure_logger.log_refresh_failure("x/y", err)

    lines = (tmp_path / "logs" / "refresh_failures.log").read_text(encoding="utf-8").splitlines()
    record = json.loads(lines[-1])
    assert record["model"] == "x/y"
    assert record["status_code"] == 500
    assert record["classification"] == "server_error"
    assert record["raw_response"] == '{"error":"boom"}'
    assert "x/y" in caplog.text


def test_disabled_failure_log_writes_nothing(tmp_path) -> None:
    failure_logger.configure_failure_logger(tmp_path / "logs", enabled=False)
    failure_logger.log_refresh_failure("x/y", NetworkError("down"))
    assert not (tmp_path / "logs").exists()
    failure_logger.configure_failure_logger(tmp_path / "logs")
