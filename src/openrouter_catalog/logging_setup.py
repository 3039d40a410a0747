# src/openrouter_catalog/logging_setup.py

import sys
import logging
from pathlib import Path
from typing import Optional, Union

import colorlog

LIBRARY_LOGGER = "openrouter_catalog"


def setup_logging(
    level: int = logging.INFO,
    log_dir: Optional[Union[str, Path]] = None,
    propagate: bool = False,
) -> logging.Logger:
    """
    Attach console (and optionally file) handlers to the library logger.

    Hosts that configure logging themselves can skip this; the library logger
    only carries a NullHandler until this is called.
    """
    logger = logging.getLogger(LIBRARY_LOGGER)
    logger.setLevel(level)
    logger.propagate = propagate

    # Remove existing handlers to prevent duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Configure a console handler with color
    console_handler = colorlog.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        colorlog.ColoredFormatter(
            "%(log_color)s%(message)s",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red,bg_white",
            },
        )
    )
    logger.addHandler(console_handler)

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path / "catalog.log", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    # Silence other noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logger
