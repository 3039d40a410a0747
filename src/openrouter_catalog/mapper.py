# src/openrouter_catalog/mapper.py
"""
Maps raw OpenRouter endpoint records onto Endpoint objects.

The upstream schema is treated as best-effort: missing or oddly typed fields
fall back to defaults instead of rejecting the record.
"""

import logging
from typing import Any, List, Optional

from .models import Endpoint
from .pricing import parse_price

lib_logger = logging.getLogger("openrouter_catalog")

# Endpoint attribute -> key inside the upstream "pricing" object
PRICE_FIELDS = {
    "prompt_price": "prompt",
    "completion_price": "completion",
    "request_price": "request",
    "image_price": "image",
    "web_search_price": "web_search",
    "internal_reasoning_price": "internal_reasoning",
    "input_cache_read_price": "input_cache_read",
    "input_cache_write_price": "input_cache_write",
}


def _as_str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return value if isinstance(value, str) else str(value)


def _as_optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return _as_str(value)


def _as_number(value: Any, cast=int) -> Optional[Any]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return cast(value)
    except (TypeError, ValueError):
        return None


def _as_non_negative(value: Any, cast=int):
    number = _as_number(value, cast)
    if number is None or number < 0:
        return cast(0)
    return number


def _as_str_list(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [_as_str(item) for item in value if item is not None]


def map_endpoint(raw: Any) -> Endpoint:
    """Build an Endpoint from one upstream record. Never raises."""
    if not isinstance(raw, dict):
        lib_logger.debug(f"Endpoint record is not an object: {raw!r}")
        raw = {}

    pricing = raw.get("pricing")
    if not isinstance(pricing, dict):
        pricing = {}

    prices = {attr: parse_price(pricing.get(key)) for attr, key in PRICE_FIELDS.items()}
    discount = _as_number(pricing.get("discount"), float)

    return Endpoint(
        name=_as_str(raw.get("name")),
        context_length=_as_non_negative(raw.get("context_length")),
        provider_name=_as_str(raw.get("provider_name")),
        tag=_as_str(raw.get("tag")),
        max_completion_tokens=_as_number(raw.get("max_completion_tokens")),
        max_prompt_tokens=_as_number(raw.get("max_prompt_tokens")),
        supported_parameters=_as_str_list(raw.get("supported_parameters")),
        status=_as_number(raw.get("status")) or 0,
        uptime_last_30m=_as_non_negative(raw.get("uptime_last_30m"), float),
        quantization=_as_optional_str(raw.get("quantization")),
        discount=discount or 0,
        **prices,
    )


def map_endpoints(raw_endpoints: Any) -> List[Endpoint]:
    """Map every record of an upstream `endpoints` array, keeping its order."""
    if not isinstance(raw_endpoints, list):
        return []
    return [map_endpoint(raw) for raw in raw_endpoints]
