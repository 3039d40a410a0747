# src/openrouter_catalog/overrides.py
"""
Provider-specific pricing corrections applied after generic mapping.

The endpoints API does not report prompt-cache pricing for every provider, so
known values are kept here as data. Rules are evaluated top to bottom and the
first match wins: exact model IDs first, then prefix rules.

These values are also present in cache files written by older releases;
change them only together with the host's model list.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .models import Endpoint, ModelInfo

lib_logger = logging.getLogger("openrouter_catalog")


# =============================================================================
# Exact-match cache pricing
#
# Structure: model_id -> (cache_writes_price, cache_reads_price), both per
# million tokens. Every model listed here supports prompt caching.
# =============================================================================

EXACT_CACHE_PRICING = {
    # =========================================================================
    # Anthropic - Sonnet / Opus 4
    # =========================================================================
    "anthropic/claude-sonnet-4": (3.75, 0.3),
    "anthropic/claude-opus-4": (3.75, 0.3),
    "anthropic/claude-3-7-sonnet": (3.75, 0.3),
    "anthropic/claude-3-7-sonnet:beta": (3.75, 0.3),
    "anthropic/claude-3.7-sonnet": (3.75, 0.3),
    "anthropic/claude-3.7-sonnet:beta": (3.75, 0.3),
    "anthropic/claude-3.7-sonnet:thinking": (3.75, 0.3),
    "anthropic/claude-3.5-sonnet": (3.75, 0.3),
    "anthropic/claude-3.5-sonnet:beta": (3.75, 0.3),
    "anthropic/claude-3.5-sonnet-20240620": (3.75, 0.3),
    "anthropic/claude-3.5-sonnet-20240620:beta": (3.75, 0.3),
    # =========================================================================
    # Anthropic - Haiku 3.5
    # =========================================================================
    "anthropic/claude-3-5-haiku": (1.25, 0.1),
    "anthropic/claude-3-5-haiku:beta": (1.25, 0.1),
    "anthropic/claude-3-5-haiku-20241022": (1.25, 0.1),
    "anthropic/claude-3-5-haiku-20241022:beta": (1.25, 0.1),
    "anthropic/claude-3.5-haiku": (1.25, 0.1),
    "anthropic/claude-3.5-haiku:beta": (1.25, 0.1),
    "anthropic/claude-3.5-haiku-20241022": (1.25, 0.1),
    "anthropic/claude-3.5-haiku-20241022:beta": (1.25, 0.1),
    # =========================================================================
    # Anthropic - Claude 3
    # =========================================================================
    "anthropic/claude-3-opus": (18.75, 1.5),
    "anthropic/claude-3-opus:beta": (18.75, 1.5),
    "anthropic/claude-3-haiku": (0.3, 0.03),
    "anthropic/claude-3-haiku:beta": (0.3, 0.03),
    # =========================================================================
    # Others
    # =========================================================================
    "deepseek/deepseek-chat": (0.14, 0.014),
    "x-ai/grok-3-beta": (0.75, 0),
}

# Models whose input price is billed through the cache prices instead
ZERO_INPUT_PRICE_MODELS = {"deepseek/deepseek-chat"}

# Providers whose endpoints report their own cache pricing
ENDPOINT_CACHE_PRICING_PREFIXES = ("openai/", "google/")


# =============================================================================
# Rule table
# =============================================================================

Effect = Callable[[ModelInfo, Optional[Endpoint]], ModelInfo]


@dataclass(frozen=True)
class OverrideRule:
    """A matcher plus the effect applied when it matches."""

    pattern: str
    kind: str  # "exact" or "prefix"
    effect: Effect

    def matches(self, model_id: str) -> bool:
        if self.kind == "exact":
            return model_id == self.pattern
        return model_id.startswith(self.pattern)


def fixed_cache_pricing(
    writes: float, reads: float, zero_input_price: bool = False
) -> Effect:
    """Effect that pins cache prices and enables prompt caching."""

    def effect(info: ModelInfo, representative: Optional[Endpoint]) -> ModelInfo:
        changes = {
            "supports_prompt_cache": True,
            "cache_writes_price": writes,
            "cache_reads_price": reads,
        }
        if zero_input_price:
            changes["input_price"] = 0
        return dataclasses.replace(info, **changes)

    return effect


def endpoint_cache_pricing(
    info: ModelInfo, representative: Optional[Endpoint]
) -> ModelInfo:
    """Effect that copies cache prices from the representative endpoint, if any."""
    if representative is None or not representative.input_cache_read_price:
        return info
    return dataclasses.replace(
        info,
        supports_prompt_cache=True,
        cache_reads_price=representative.input_cache_read_price,
        cache_writes_price=representative.input_cache_write_price or 0,
    )


def _build_rules() -> Tuple[OverrideRule, ...]:
    rules: List[OverrideRule] = []
    for model_id, (writes, reads) in EXACT_CACHE_PRICING.items():
        rules.append(
            OverrideRule(
                pattern=model_id,
                kind="exact",
                effect=fixed_cache_pricing(
                    writes, reads, zero_input_price=model_id in ZERO_INPUT_PRICE_MODELS
                ),
            )
        )
    for prefix in ENDPOINT_CACHE_PRICING_PREFIXES:
        rules.append(
            OverrideRule(pattern=prefix, kind="prefix", effect=endpoint_cache_pricing)
        )
    return tuple(rules)


OVERRIDE_RULES: Tuple[OverrideRule, ...] = _build_rules()


def find_override(
    model_id: str, rules: Tuple[OverrideRule, ...] = OVERRIDE_RULES
) -> Optional[OverrideRule]:
    """Return the first rule matching the model ID, or None."""
    for rule in rules:
        if rule.matches(model_id):
            return rule
    return None


def apply_overrides(
    model_id: str,
    info: ModelInfo,
    representative: Optional[Endpoint] = None,
    rules: Tuple[OverrideRule, ...] = OVERRIDE_RULES,
) -> ModelInfo:
    """
    Apply the first matching override to a ModelInfo.

    Args:
        model_id: Canonical upstream model ID (falls back to the requested ID)
        info: ModelInfo built from the representative endpoint
        representative: Endpoint used by prefix rules for cache pricing
        rules: Rule table to evaluate, OVERRIDE_RULES by default

    Returns:
        A new ModelInfo, or `info` itself when no rule matches
    """
    rule = find_override(model_id, rules)
    if rule is None:
        return info

    lib_logger.debug(f"Applying {rule.kind} override '{rule.pattern}' to {model_id}")
    return rule.effect(info, representative)
