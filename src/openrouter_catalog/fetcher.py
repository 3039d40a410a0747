# src/openrouter_catalog/fetcher.py

import json
import logging
from typing import Any, Dict, Optional

import httpx

from .error_handler import HTTPError, NetworkError, UpstreamDataError

lib_logger = logging.getLogger("openrouter_catalog")

DEFAULT_API_BASE = "https://openrouter.ai/api/v1"
DEFAULT_TIMEOUT = 30.0


class EndpointsFetcher:
    """
    Fetches the per-model endpoints document from OpenRouter.

    Every failure is translated into the library's FetchError family so the
    caller only has to handle NetworkError, HTTPError and UpstreamDataError.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        api_base: str = DEFAULT_API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    def endpoints_url(self, model_id: str) -> str:
        # Model IDs are inserted verbatim; "/" separates vendor and model.
        return f"{self.api_base}/models/{model_id}/endpoints"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def aclose(self):
        """Close the HTTP client if this fetcher created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def fetch(self, model_id: str) -> Dict[str, Any]:
        """
        Return the full JSON body of the endpoints request.

        Raises:
            NetworkError: transport failure or timeout
            HTTPError: non-2xx response
            UpstreamDataError: body is not a JSON object
        """
        url = self.endpoints_url(model_id)
        client = self._get_client()

        try:
            response = await client.get(
                url,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise HTTPError(
                f"OpenRouter returned HTTP {e.response.status_code} for {model_id}",
                model_id=model_id,
                status_code=e.response.status_code,
                response_text=e.response.text,
            ) from e
        except httpx.TimeoutException as e:
            raise NetworkError(
                f"Timed out after {self.timeout}s fetching endpoints for {model_id}",
                model_id=model_id,
            ) from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise NetworkError(
                f"OpenRouter unavailable for {model_id}: {e}", model_id=model_id
            ) from e

        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise UpstreamDataError(
                f"Invalid JSON from OpenRouter for {model_id}", model_id=model_id
            ) from e

        if not isinstance(body, dict):
            raise UpstreamDataError(
                f"Unexpected response shape from OpenRouter for {model_id}",
                model_id=model_id,
            )

        lib_logger.debug(f"Fetched endpoints document for {model_id} from {url}")
        return body
