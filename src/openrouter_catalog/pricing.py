# src/openrouter_catalog/pricing.py

import math
import logging
from typing import Any, Optional

lib_logger = logging.getLogger("openrouter_catalog")

# OpenRouter quotes prices per token; everything downstream is per million.
TOKENS_PER_PRICE_UNIT = 1_000_000


def parse_price(value: Any) -> Optional[float]:
    """
    Convert an upstream per-token price into a per-million-token price.

    Returns None when the price is missing, empty, or cannot be parsed.
    A price of "0" is a real price and comes back as 0.0.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None

    try:
        per_token = float(value)
    except (TypeError, ValueError):
        lib_logger.debug(f"Ignoring unparsable price {value!r}")
        return None

    if not math.isfinite(per_token):
        lib_logger.debug(f"Ignoring non-finite price {value!r}")
        return None

    return per_token * TOKENS_PER_PRICE_UNIT
