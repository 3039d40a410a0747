# src/openrouter_catalog/utils/atomic_io.py
"""
File helpers for the on-disk model cache.

Writes go to a temp file in the target directory and are then moved over the
destination, so readers never observe a half-written cache.
"""

import json
import os
import shutil
import tempfile
import logging
from pathlib import Path
from typing import Any, Optional, Union


def write_json_atomic(
    path: Union[str, Path],
    data: Any,
    indent: Optional[int] = None,
    ensure_ascii: bool = False,
) -> None:
    """
    Write JSON data to file atomically (tempfile + move).

    Creates parent directories if needed.

    Args:
        path: File path to write to
        data: JSON-serializable data
        indent: JSON indentation level (default: compact)
        ensure_ascii: Escape non-ASCII characters (default: False, file is UTF-8)

    Raises:
        OSError: the file could not be written
        TypeError, ValueError: data is not JSON-serializable
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=indent, ensure_ascii=ensure_ascii)

    tmp_fd = None
    tmp_path = None
    try:
        tmp_fd, tmp_path = tempfile.mkstemp(
            dir=path.parent, prefix=".tmp_", suffix=".json", text=True
        )
        with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
            f.write(content)
            tmp_fd = None  # fdopen closes the fd

        # Atomic move
        shutil.move(tmp_path, path)
        tmp_path = None
    finally:
        # Cleanup on failure
        if tmp_fd is not None:
            try:
                os.close(tmp_fd)
            except OSError:
                pass
        if tmp_path and os.path.exists(tmp_path):
            try:
                os.unlink(tmp_path)
            except OSError:
                pass


def safe_mkdir(path: Union[str, Path], logger: logging.Logger) -> bool:
    """
    Create directory with error handling.

    Args:
        path: Directory path to create
        logger: Logger for warnings

    Returns:
        True on success (or already exists), False on failure
    """
    try:
        Path(path).mkdir(parents=True, exist_ok=True)
        return True
    except (OSError, PermissionError) as e:
        logger.warning(f"Failed to create directory {path}: {e}")
        return False
