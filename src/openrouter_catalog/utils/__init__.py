# src/openrouter_catalog/utils/__init__.py

from .atomic_io import write_json_atomic, safe_mkdir

__all__ = [
    "write_json_atomic",
    "safe_mkdir",
]
