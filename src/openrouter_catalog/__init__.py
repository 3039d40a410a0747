import logging
from typing import TYPE_CHECKING

from .error_handler import (
    CatalogError,
    InvalidArgumentError,
    NetworkError,
    HTTPError,
    UpstreamDataError,
    CacheReadError,
    CacheWriteError,
    RefreshUnavailableError,
)
from .models import (
    Endpoint,
    ModelEndpoint,
    ModelInfo,
    OpenRouterCompatibleModelInfo,
)

logging.getLogger("openrouter_catalog").addHandler(logging.NullHandler())

# The refresher pulls in aiofiles and python-dotenv; load it on first access.
if TYPE_CHECKING:
    from .refresher import EndpointRefresher, refresh_endpoints, get_endpoint_refresher

__all__ = [
    "EndpointRefresher",
    "refresh_endpoints",
    "get_endpoint_refresher",
    "Endpoint",
    "ModelEndpoint",
    "ModelInfo",
    "OpenRouterCompatibleModelInfo",
    "CatalogError",
    "InvalidArgumentError",
    "NetworkError",
    "HTTPError",
    "UpstreamDataError",
    "CacheReadError",
    "CacheWriteError",
    "RefreshUnavailableError",
]


def __getattr__(name):
    """Lazy-load the refresher to keep module import fast."""
    if name in ("EndpointRefresher", "refresh_endpoints", "get_endpoint_refresher"):
        from . import refresher
        return getattr(refresher, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
