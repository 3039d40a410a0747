# src/openrouter_catalog/refresher.py
"""
Single-model endpoint refresh.

Fetches the OpenRouter endpoints document for one model, turns it into a
ModelInfo, stores it in the shared cache file and returns it. When OpenRouter
cannot be reached, the last cached ModelInfo for the model is returned instead.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import httpx

from .cache import ModelCacheStore
from .config import CatalogSettings
from .endpoints import get_endpoints_for_model
from .error_handler import (
    CacheWriteError,
    FetchError,
    InvalidArgumentError,
    RefreshUnavailableError,
    UpstreamDataError,
)
from .failure_logger import configure_failure_logger, log_refresh_failure
from .fetcher import EndpointsFetcher
from .mapper import map_endpoints
from .models import Endpoint, ModelEndpointsCollection, OpenRouterCompatibleModelInfo
from .overrides import apply_overrides
from .selector import build_model_info, select_representative

lib_logger = logging.getLogger("openrouter_catalog")


class EndpointRefresher:
    """
    Coordinates fetch -> map -> select -> override -> cache for one model.

    Calls are independent; there is no parallelism inside a refresh. Cache
    writes from one refresher are serialized by its ModelCacheStore, but two
    processes sharing a storage root can still overwrite each other's merge.
    """

    def __init__(
        self,
        storage_root: Optional[Union[str, Path]] = None,
        settings: Optional[CatalogSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
        cache: Optional[ModelCacheStore] = None,
        fetcher: Optional[EndpointsFetcher] = None,
    ):
        self.settings = settings or CatalogSettings.from_env()
        root = storage_root if storage_root is not None else self.settings.storage_root

        self.cache = cache or ModelCacheStore.for_storage_root(root)
        self.fetcher = fetcher or EndpointsFetcher(
            client=client,
            api_base=self.settings.api_base,
            timeout=self.settings.timeout,
        )
        self._endpoints: ModelEndpointsCollection = {}

        configure_failure_logger(
            self.settings.log_dir, enabled=self.settings.failure_log_enabled
        )

    async def __aenter__(self) -> "EndpointRefresher":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self):
        await self.fetcher.aclose()

    # ---------- Endpoints collection ----------

    @property
    def endpoints(self) -> ModelEndpointsCollection:
        """Endpoints from the latest successful refresh of each model."""
        return dict(self._endpoints)

    def get_endpoints(self, model_id: str) -> List[Endpoint]:
        return list(get_endpoints_for_model(self._endpoints, model_id))

    def _remember_endpoints(self, model_id: str, endpoints: List[Endpoint]):
        if endpoints:
            self._endpoints[model_id] = list(endpoints)
        else:
            self._endpoints.pop(model_id, None)

    # ---------- Refresh ----------

    async def refresh_endpoints(self, model_id: str) -> OpenRouterCompatibleModelInfo:
        """
        Refresh one model and return `{model_id: ModelInfo}`.

        Raises:
            InvalidArgumentError: model_id is empty
            RefreshUnavailableError: upstream failed and the cache has no entry
        """
        if not isinstance(model_id, str) or not model_id.strip():
            raise InvalidArgumentError("Model ID is required")

        try:
            body = await self.fetcher.fetch(model_id)
            model_data = body.get("data")
            if not isinstance(model_data, dict):
                raise UpstreamDataError(
                    f"Failed to fetch model information for {model_id}", model_id=model_id
                )
        except FetchError as e:
            log_refresh_failure(model_id, e)
            return await self._from_cache(model_id, e)

        info, endpoints = self._build(model_id, model_data)
        self._remember_endpoints(model_id, endpoints)

        try:
            await self.cache.merge({model_id: info})
            lib_logger.info(f"OpenRouter model {model_id} endpoints refreshed and cached")
        except CacheWriteError as e:
            lib_logger.warning(f"Refreshed {model_id} but could not update the cache: {e}")

        return OpenRouterCompatibleModelInfo(models={model_id: info})

    def _build(self, model_id: str, model_data: Dict[str, Any]):
        endpoints = map_endpoints(model_data.get("endpoints"))
        representative = select_representative(endpoints)
        info = build_model_info(model_data, endpoints, representative)

        canonical_id = model_data.get("id")
        if not isinstance(canonical_id, str) or not canonical_id:
            canonical_id = model_id
        info = apply_overrides(canonical_id, info, representative)
        return info, endpoints

    async def _from_cache(
        self, model_id: str, error: Exception
    ) -> OpenRouterCompatibleModelInfo:
        cached = await self.cache.read()
        if cached and model_id in cached:
            lib_logger.info(f"Using cached model information for {model_id}")
            return OpenRouterCompatibleModelInfo(models={model_id: cached[model_id]})
        raise RefreshUnavailableError(model_id, cause=error) from error


# Global singleton
_refresher_instance: Optional[EndpointRefresher] = None


def get_endpoint_refresher() -> EndpointRefresher:
    """Get or create the global refresher, configured from the environment."""
    global _refresher_instance
    if _refresher_instance is None:
        _refresher_instance = EndpointRefresher()
    return _refresher_instance


async def refresh_endpoints(model_id: str) -> OpenRouterCompatibleModelInfo:
    """Refresh one model through the global refresher."""
    return await get_endpoint_refresher().refresh_endpoints(model_id)


async def close_endpoint_refresher():
    """Release the global refresher's HTTP client."""
    global _refresher_instance
    if _refresher_instance is not None:
        await _refresher_instance.aclose()
        _refresher_instance = None
