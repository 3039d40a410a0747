import logging
import json
from logging.handlers import RotatingFileHandler
import os
from datetime import datetime, timezone
from typing import Optional

from .error_handler import classify_error
from .utils.atomic_io import safe_mkdir

FAILURE_LOG_NAME = "refresh_failures.log"

# Module-level state for resilience
_file_handler = None
_fallback_mode = False
_log_dir = "logs"
_enabled = True


# Custom JSON formatter for structured logs (defined at module level for reuse)
class JsonFormatter(logging.Formatter):
    def format(self, record):
        # The message is already a dict, so we just format it as a JSON string
        return json.dumps(record.msg)


def _create_file_handler():
    """Create file handler with directory auto-recreation."""
    global _file_handler, _fallback_mode

    if not safe_mkdir(_log_dir, main_lib_logger):
        _fallback_mode = True
        return None

    try:
        handler = RotatingFileHandler(
            os.path.join(_log_dir, FAILURE_LOG_NAME),
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=2,
            encoding="utf-8",
            delay=True,
        )
    except (OSError, PermissionError) as e:
        main_lib_logger.warning(f"Cannot create refresh failure log handler: {e}")
        _fallback_mode = True
        return None

    handler.setFormatter(JsonFormatter())
    _file_handler = handler
    _fallback_mode = False
    return handler


def configure_failure_logger(log_dir: str = "logs", enabled: bool = True):
    """
    Point the JSON failure log at `log_dir`.

    The file handler is created on the first logged failure, so configuring
    does not touch the filesystem.
    """
    global _file_handler, _log_dir, _enabled
    _log_dir = str(log_dir)
    _enabled = enabled
    if _file_handler is not None:
        failure_logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None
    if not failure_logger.handlers:
        failure_logger.addHandler(logging.NullHandler())


def _ensure_handler_valid():
    """Check if file handler is still valid, recreate if needed."""
    if not _enabled:
        return
    if _file_handler is None or _fallback_mode:
        handler = _create_file_handler()
        if handler:
            failure_logger.handlers.clear()
            failure_logger.addHandler(handler)


def _setup_failure_logger():
    logger = logging.getLogger("refresh_failures")
    logger.setLevel(logging.INFO)
    logger.propagate = False
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())
    return logger


# Dedicated logger for detailed failure records
failure_logger = _setup_failure_logger()

# Library logger for concise, propagated messages
main_lib_logger = logging.getLogger("openrouter_catalog")


def _extract_response_body(error: Exception) -> Optional[str]:
    """Pull the upstream response body off an error, when it carries one."""
    text = getattr(error, "response_text", None)
    if text:
        return text

    cause = error.__cause__
    response = getattr(cause, "response", None)
    if response is not None and getattr(response, "text", None):
        return response.text

    return None


def log_refresh_failure(model_id: str, error: Exception):
    """
    Logs a detailed JSON record to the failure log and a one-line summary
    to the library logger.

    Args:
        model_id: The model whose refresh failed
        error: The exception that occurred
    """
    classified = classify_error(error)
    raw_response = _extract_response_body(error)

    error_chain = []
    visited = set()  # Track visited exceptions to detect circular references
    current_error = error
    while current_error:
        error_id = id(current_error)
        if error_id in visited:
            break
        visited.add(error_id)

        error_chain.append(
            {
                "type": type(current_error).__name__,
                "message": str(current_error)[:2000],
            }
        )
        current_error = getattr(current_error, "__cause__", None) or getattr(
            current_error, "__context__", None
        )
        if len(error_chain) > 5:
            break

    detailed_log_data = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "model": model_id,
        "error_type": type(error).__name__,
        "classification": classified.error_type,
        "status_code": classified.status_code,
        "error_message": str(error)[:5000],
        "raw_response": raw_response[:10000] if raw_response else None,
        "error_chain": error_chain if len(error_chain) > 1 else None,
    }

    summary_message = (
        f"Error fetching OpenRouter model {model_id}: "
        f"{type(error).__name__} ({classified.error_type}). {error}"
    )

    if _enabled:
        _ensure_handler_valid()
        try:
            failure_logger.error(detailed_log_data)
        except (OSError, IOError) as e:
            global _fallback_mode
            _fallback_mode = True
            main_lib_logger.error(f"Failed to write to {FAILURE_LOG_NAME}: {e}")

    main_lib_logger.error(summary_message)
