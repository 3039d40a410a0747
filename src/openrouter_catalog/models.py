# src/openrouter_catalog/models.py
"""
Canonical data structures for OpenRouter endpoint metadata.

Everything here is persisted with the camelCase keys the host application
already uses in its cache file, so historical cache entries load unchanged.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional


# ============================================================================
# Endpoint
# ============================================================================

# attribute name -> serialized key
_ENDPOINT_KEYS = {
    "name": "name",
    "context_length": "contextLength",
    "provider_name": "providerName",
    "tag": "tag",
    "max_completion_tokens": "maxCompletionTokens",
    "max_prompt_tokens": "maxPromptTokens",
    "supported_parameters": "supportedParameters",
    "status": "status",
    "uptime_last_30m": "uptimeLast30m",
    "quantization": "quantization",
    "prompt_price": "promptPrice",
    "completion_price": "completionPrice",
    "request_price": "requestPrice",
    "image_price": "imagePrice",
    "web_search_price": "webSearchPrice",
    "internal_reasoning_price": "internalReasoningPrice",
    "input_cache_read_price": "inputCacheReadPrice",
    "input_cache_write_price": "inputCacheWritePrice",
    "discount": "discount",
}


@dataclass
class Endpoint:
    """One provider-specific route to a model, prices per million tokens."""

    name: str = ""
    context_length: int = 0
    provider_name: str = ""
    tag: str = ""
    max_completion_tokens: Optional[int] = None
    max_prompt_tokens: Optional[int] = None
    supported_parameters: List[str] = field(default_factory=list)
    status: int = 0
    uptime_last_30m: float = 0.0
    quantization: Optional[str] = None

    prompt_price: Optional[float] = None
    completion_price: Optional[float] = None
    request_price: Optional[float] = None
    image_price: Optional[float] = None
    web_search_price: Optional[float] = None
    internal_reasoning_price: Optional[float] = None
    input_cache_read_price: Optional[float] = None
    input_cache_write_price: Optional[float] = None

    discount: float = 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with camelCase keys, omitting unset optional fields."""
        result = {}
        for attr, key in _ENDPOINT_KEYS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            if attr == "supported_parameters":
                value = list(value)
            result[key] = value
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Endpoint":
        kwargs = {}
        for attr, key in _ENDPOINT_KEYS.items():
            if key in data and data[key] is not None:
                kwargs[attr] = data[key]
        if "supported_parameters" in kwargs:
            params = kwargs["supported_parameters"]
            kwargs["supported_parameters"] = (
                [str(p) for p in params] if isinstance(params, (list, tuple)) else []
            )
        return cls(**kwargs)


@dataclass
class ModelEndpoint(Endpoint):
    """An Endpoint that carries the ID of the model it serves."""

    model_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["modelId"] = self.model_id
        return result

    @classmethod
    def from_endpoint(cls, model_id: str, endpoint: Endpoint) -> "ModelEndpoint":
        values = {f.name: getattr(endpoint, f.name) for f in fields(Endpoint)}
        values["supported_parameters"] = list(endpoint.supported_parameters)
        return cls(model_id=model_id, **values)


# ============================================================================
# ModelInfo
# ============================================================================

_MODEL_INFO_KEYS = {
    "max_tokens": "maxTokens",
    "context_window": "contextWindow",
    "supports_images": "supportsImages",
    "supports_prompt_cache": "supportsPromptCache",
    "input_price": "inputPrice",
    "output_price": "outputPrice",
    "cache_writes_price": "cacheWritesPrice",
    "cache_reads_price": "cacheReadsPrice",
    "description": "description",
    "tiers": "tiers",
    "endpoints": "endpoints",
}


@dataclass
class ModelInfo:
    """
    Summary of one model, seeded from its representative endpoint.

    Library code never mutates an instance; overrides build a new value with
    dataclasses.replace(). Keys found in a cached entry that are not modelled
    here are kept in `extra` and written back as-is.
    """

    max_tokens: int = 0
    context_window: int = 0
    supports_images: bool = False
    supports_prompt_cache: bool = False
    input_price: float = 0
    output_price: float = 0
    cache_writes_price: float = 0
    cache_reads_price: float = 0
    description: str = ""
    tiers: List[Dict[str, Any]] = field(default_factory=list)
    # Endpoints are kept in a separate ModelEndpointsCollection
    endpoints: List[Endpoint] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        result = dict(self.extra)
        for attr, key in _MODEL_INFO_KEYS.items():
            value = getattr(self, attr)
            if attr == "endpoints":
                value = [ep.to_dict() for ep in value]
            elif attr == "tiers":
                value = list(value)
            result[key] = value
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelInfo":
        kwargs: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        known = {key: attr for attr, key in _MODEL_INFO_KEYS.items()}

        for key, value in data.items():
            attr = known.get(key)
            if attr is None:
                extra[key] = value
                continue
            if value is None:
                continue
            if attr in ("endpoints", "tiers"):
                # Wrongly typed lists in old cache entries load as empty
                if not isinstance(value, list):
                    value = []
                value = [item for item in value if isinstance(item, dict)]
                if attr == "endpoints":
                    value = [Endpoint.from_dict(ep) for ep in value]
            kwargs[attr] = value

        return cls(extra=extra, **kwargs)


# ============================================================================
# Response wrapper and collections
# ============================================================================

# model_id -> endpoints, in upstream order
ModelEndpointsCollection = Dict[str, List[Endpoint]]

# model_id -> endpoint tag chosen by the host
SelectedEndpoints = Dict[str, str]


@dataclass
class OpenRouterCompatibleModelInfo:
    """Refresh result: model ID -> ModelInfo."""

    models: Dict[str, ModelInfo] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "models": {
                model_id: info.to_dict() for model_id, info in self.models.items()
            }
        }
