"""Tests for mapping raw upstream endpoint records."""
from __future__ import annotations

import pytest

from openrouter_catalog.mapper import map_endpoint, map_endpoints
from openrouter_catalog.models import Endpoint


FULL_RECORD = {
    "name": "Anthropic | anthropic/claude-3.5-sonnet",
    "context_length": 200000,
    "provider_name": "Anthropic",
    "tag": "anthropic",
    "max_completion_tokens": 8192,
    "max_prompt_tokens": 190000,
    "supported_parameters": ["tools", "temperature", "max_tokens"],
    "status": 1,
    "uptime_last_30m": 99.8,
    "quantization": "fp8",
    "pricing": {
        "prompt": "0.000003",
        "completion": "0.000015",
        "request": "0.5",
        "image": "0.0048",
        "web_search": "0.01",
        "internal_reasoning": "0.000015",
        "input_cache_read": "0.0000003",
        "input_cache_write": "0.00000375",
        "discount": 0.1,
    },
}


def test_fully_populated_record_keeps_every_field() -> None:
    ep = map_endpoint(FULL_RECORD)

    assert ep.name == "Anthropic | anthropic/claude-3.5-sonnet"
    assert ep.context_length == 200000
    assert ep.provider_name == "Anthropic"
    assert ep.tag == "anthropic"
    assert ep.max_completion_tokens == 8192
    assert ep.max_prompt_tokens == 190000
    assert ep.supported_parameters == ["tools", "temperature", "max_tokens"]
    assert ep.status == 1
    assert ep.uptime_last_30m == 99.8
    assert ep.quantization == "fp8"
    assert ep.prompt_price == pytest.approx(3.0)
    assert ep.completion_price == pytest.approx(15.0)
    assert ep.request_price == pytest.approx(500_000)
    assert ep.image_price == pytest.approx(4800)
    assert ep.web_search_price == pytest.approx(10_000)
    assert ep.internal_reasoning_price == pytest.approx(15.0)
    assert ep.input_cache_read_price == pytest.approx(0.3)
    assert ep.input_cache_write_price == pytest.approx(3.75)
    assert ep.discount == 0.1


def test_empty_record_gets_defaults() -> None:
    ep = map_endpoint({})

    assert ep == Endpoint()
    assert ep.name == ""
    assert ep.tag == ""
    assert ep.provider_name == ""
    assert ep.context_length == 0
    assert ep.status == 0
    assert ep.uptime_last_30m == 0
    assert ep.supported_parameters == []
    assert ep.discount == 0
    assert ep.prompt_price is None
    assert ep.max_completion_tokens is None


def test_null_strings_default_to_empty() -> None:
    ep = map_endpoint({"tag": None, "provider_name": None, "name": None})
    assert ep.tag == ""
    assert ep.provider_name == ""
    assert ep.name == ""


@pytest.mark.parametrize("raw", [None, "endpoint", 42, ["a"]])
def test_non_object_record_never_raises(raw) -> None:
    assert map_endpoint(raw) == Endpoint()


def test_bad_field_types_are_defaulted() -> None:
    ep = map_endpoint(
        {
            "context_length": "lots",
            "status": None,
            "uptime_last_30m": -5,
            "supported_parameters": "temperature",
            "pricing": "free",
        }
    )
    assert ep.context_length == 0
    assert ep.status == 0
    assert ep.uptime_last_30m == 0
    assert ep.supported_parameters == []
    assert ep.prompt_price is None


def test_negative_context_length_clamped() -> None:
    assert map_endpoint({"context_length": -1}).context_length == 0


def test_zero_price_kept_distinct_from_missing() -> None:
    ep = map_endpoint({"pricing": {"prompt": "0", "completion": ""}})
    assert ep.prompt_price == 0
    assert ep.completion_price is None


def test_map_endpoints_keeps_upstream_order() -> None:
    eps = map_endpoints([{"tag": "b"}, {"tag": "a"}, {"tag": "c"}])
    assert [ep.tag for ep in eps] == ["b", "a", "c"]


def test_map_endpoints_non_list_is_empty() -> None:
    assert map_endpoints(None) == []
    assert map_endpoints({"tag": "a"}) == []
