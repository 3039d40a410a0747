# src/openrouter_catalog/selector.py

from typing import Any, Dict, Optional, Sequence

from .models import Endpoint, ModelInfo


def select_representative(endpoints: Sequence[Endpoint]) -> Optional[Endpoint]:
    """
    Pick the endpoint with the largest context window.

    On ties the earliest endpoint is kept; a later one only wins when its
    context length is strictly greater.
    """
    best: Optional[Endpoint] = None
    for endpoint in endpoints:
        if best is None or endpoint.context_length > best.context_length:
            best = endpoint
    return best


def supports_images(model_data: Dict[str, Any]) -> bool:
    architecture = model_data.get("architecture")
    if not isinstance(architecture, dict):
        return False
    modalities = architecture.get("input_modalities")
    if not isinstance(modalities, (list, tuple)):
        return False
    return "image" in modalities


def build_model_info(
    model_data: Dict[str, Any],
    endpoints: Sequence[Endpoint],
    representative: Optional[Endpoint] = None,
) -> ModelInfo:
    """
    Build the summary ModelInfo for a model from its mapped endpoints.

    Args:
        model_data: The upstream `data` object (architecture, description, ...)
        endpoints: Endpoints already passed through the mapper
        representative: Precomputed representative, selected here when omitted

    Returns:
        ModelInfo without any overrides applied
    """
    if representative is None:
        representative = select_representative(endpoints)

    max_tokens = 0
    context_window = 0
    input_price = 0.0
    output_price = 0.0

    if representative is not None:
        if representative.max_completion_tokens is not None:
            max_tokens = representative.max_completion_tokens
        else:
            max_tokens = representative.context_length or 0
        context_window = representative.context_length or 0
        if representative.prompt_price is not None:
            input_price = representative.prompt_price
        if representative.completion_price is not None:
            output_price = representative.completion_price

    description = model_data.get("description")

    return ModelInfo(
        max_tokens=max_tokens,
        context_window=context_window,
        supports_images=supports_images(model_data),
        supports_prompt_cache=False,
        input_price=input_price,
        output_price=output_price,
        cache_writes_price=0,
        cache_reads_price=0,
        description=description if isinstance(description, str) else "",
        tiers=[],
        endpoints=[],
    )
