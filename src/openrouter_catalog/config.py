# src/openrouter_catalog/config.py
"""
Environment-driven settings for the catalog library.

Recognized variables:
    OPENROUTER_API_BASE             API root (default https://openrouter.ai/api/v1)
    OPENROUTER_ENDPOINTS_TIMEOUT    Fetch timeout in seconds (default 30)
    OPENROUTER_CATALOG_STORAGE      Storage root; the cache lives in <root>/cache
    OPENROUTER_CATALOG_LOG_DIR      Directory for refresh_failures.log
    OPENROUTER_CATALOG_FAILURE_LOG  "false" disables the JSON failure log
"""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import load_dotenv

from .fetcher import DEFAULT_API_BASE, DEFAULT_TIMEOUT

lib_logger = logging.getLogger("openrouter_catalog")

_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_timeout(raw: Optional[str]) -> float:
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        lib_logger.warning(
            f"Invalid OPENROUTER_ENDPOINTS_TIMEOUT '{raw}'. Falling back to {DEFAULT_TIMEOUT}s."
        )
        return DEFAULT_TIMEOUT
    if timeout <= 0:
        lib_logger.warning(
            f"OPENROUTER_ENDPOINTS_TIMEOUT must be positive, got '{raw}'. "
            f"Falling back to {DEFAULT_TIMEOUT}s."
        )
        return DEFAULT_TIMEOUT
    return timeout


@dataclass
class CatalogSettings:
    api_base: str = DEFAULT_API_BASE
    timeout: float = DEFAULT_TIMEOUT
    storage_root: Path = Path("data")
    log_dir: Path = Path("logs")
    failure_log_enabled: bool = True

    @classmethod
    def from_env(
        cls,
        dotenv_path: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "CatalogSettings":
        """
        Build settings from environment variables.

        Args:
            dotenv_path: Optional .env file loaded first; never overrides
                variables that are already set
            environ: Mapping to read instead of os.environ
        """
        if dotenv_path is not None:
            load_dotenv(dotenv_path, override=False)
        env = os.environ if environ is None else environ

        failure_log = env.get("OPENROUTER_CATALOG_FAILURE_LOG", "true")

        return cls(
            api_base=env.get("OPENROUTER_API_BASE") or DEFAULT_API_BASE,
            timeout=_parse_timeout(env.get("OPENROUTER_ENDPOINTS_TIMEOUT")),
            storage_root=Path(env.get("OPENROUTER_CATALOG_STORAGE") or "data"),
            log_dir=Path(env.get("OPENROUTER_CATALOG_LOG_DIR") or "logs"),
            failure_log_enabled=failure_log.strip().lower() not in _FALSE_VALUES,
        )
