from typing import Optional
import httpx


class CatalogError(Exception):
    """Base class for all errors raised by the catalog library."""
    pass

class InvalidArgumentError(CatalogError, ValueError):
    """Raised when a refresh is requested without a model ID."""
    pass

class FetchError(CatalogError):
    """Raised when live endpoint data could not be obtained."""
    def __init__(self, message: str, model_id: Optional[str] = None):
        super().__init__(message)
        self.model_id = model_id

class NetworkError(FetchError):
    """Transport-level failure, including timeouts."""
    pass

class HTTPError(FetchError):
    """Upstream answered with a non-2xx status."""
    def __init__(self, message: str, model_id: Optional[str] = None, status_code: Optional[int] = None, response_text: Optional[str] = None):
        super().__init__(message, model_id)
        self.status_code = status_code
        self.response_text = response_text

class UpstreamDataError(FetchError):
    """Upstream answered 2xx but without a usable `data` object."""
    pass

class CacheReadError(CatalogError):
    """The on-disk cache exists but could not be read or parsed."""
    pass

class CacheWriteError(CatalogError):
    """The merged cache could not be written to disk."""
    pass

class RefreshUnavailableError(CatalogError):
    """Neither upstream nor the cache produced data for the model."""
    def __init__(self, model_id: str, cause: Optional[Exception] = None):
        super().__init__(f"Failed to refresh endpoints for model {model_id} and no cached data available")
        self.model_id = model_id
        self.cause = cause

class ClassifiedError:
    """A structured representation of a classified error."""
    def __init__(self, error_type: str, original_exception: Exception, status_code: Optional[int] = None):
        self.error_type = error_type
        self.original_exception = original_exception
        self.status_code = status_code

    def __str__(self):
        return f"ClassifiedError(type={self.error_type}, status={self.status_code}, original_exc={self.original_exception})"

def classify_error(e: Exception) -> ClassifiedError:
    """
    Classifies an exception into a structured ClassifiedError object.
    Handles both library errors and raw httpx exceptions.
    """
    status_code = getattr(e, 'status_code', None)

    if isinstance(e, httpx.HTTPStatusError):
        status_code = e.response.status_code

    if isinstance(e, (HTTPError, httpx.HTTPStatusError)) and status_code is not None:
        if status_code == 401:
            return ClassifiedError(error_type='authentication', original_exception=e, status_code=status_code)
        if status_code == 404:
            return ClassifiedError(error_type='not_found', original_exception=e, status_code=status_code)
        if status_code == 429:
            return ClassifiedError(error_type='rate_limit', original_exception=e, status_code=status_code)
        if 400 <= status_code < 500:
            return ClassifiedError(error_type='invalid_request', original_exception=e, status_code=status_code)
        if 500 <= status_code:
            return ClassifiedError(error_type='server_error', original_exception=e, status_code=status_code)

    timeout_cause = isinstance(e.__cause__, httpx.TimeoutException)
    if isinstance(e, httpx.TimeoutException) or (isinstance(e, NetworkError) and timeout_cause):
        return ClassifiedError(error_type='timeout', original_exception=e, status_code=status_code)

    if isinstance(e, (NetworkError, httpx.TransportError)):
        return ClassifiedError(error_type='api_connection', original_exception=e, status_code=status_code)

    if isinstance(e, UpstreamDataError):
        return ClassifiedError(error_type='upstream_data', original_exception=e, status_code=status_code)

    if isinstance(e, CacheReadError):
        return ClassifiedError(error_type='cache_read', original_exception=e)

    if isinstance(e, CacheWriteError):
        return ClassifiedError(error_type='cache_write', original_exception=e)

    # Fallback for any other unclassified errors
    return ClassifiedError(
        error_type='unknown',
        original_exception=e,
        status_code=status_code
    )
