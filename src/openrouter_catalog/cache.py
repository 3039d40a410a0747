# src/openrouter_catalog/cache.py

import os
import json
import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import aiofiles

from .error_handler import CacheReadError, CacheWriteError
from .models import ModelInfo
from .utils.atomic_io import write_json_atomic

lib_logger = logging.getLogger("openrouter_catalog")

CACHE_DIR_NAME = "cache"
# Shared with the host application, which reads the same file.
OPENROUTER_MODELS_FILENAME = "openrouter_models.json"


def ensure_cache_directory(storage_root: Union[str, Path]) -> Path:
    """Create `{storage_root}/cache` if needed and return it."""
    cache_dir = Path(storage_root) / CACHE_DIR_NAME
    cache_dir.mkdir(parents=True, exist_ok=True)
    return cache_dir


def cache_file_path(storage_root: Union[str, Path]) -> Path:
    return Path(storage_root) / CACHE_DIR_NAME / OPENROUTER_MODELS_FILENAME


class ModelCacheStore:
    """
    JSON cache of model ID -> ModelInfo with read-merge-write updates.

    merge() calls on one store instance are serialized with an asyncio lock.
    Nothing coordinates separate instances or processes that share the file:
    two of them merging at the same time can still lose one update.
    """

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = Path(file_path)
        self._write_lock = asyncio.Lock()

    @classmethod
    def for_storage_root(cls, storage_root: Union[str, Path]) -> "ModelCacheStore":
        ensure_cache_directory(storage_root)
        return cls(cache_file_path(storage_root))

    async def _load_raw(self) -> Optional[Dict[str, Any]]:
        if not os.path.exists(self.file_path):
            return None

        try:
            async with aiofiles.open(self.file_path, "r", encoding="utf-8") as f:
                content = await f.read()
            raw = json.loads(content)
        except FileNotFoundError:
            return None
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            raise CacheReadError(f"Cannot read {self.file_path.name}: {e}") from e

        if not isinstance(raw, dict):
            raise CacheReadError(
                f"Cannot read {self.file_path.name}: expected a JSON object, "
                f"got {type(raw).__name__}"
            )

        entries: Dict[str, Any] = {}
        for model_id, entry in raw.items():
            if not isinstance(entry, dict):
                lib_logger.warning(
                    f"Skipping malformed cache entry for {model_id} in {self.file_path.name}"
                )
                continue
            entries[model_id] = entry
        return entries

    async def load(self) -> Optional[Dict[str, ModelInfo]]:
        """
        Read the whole cache file.

        Returns:
            The cached mapping, or None when the file does not exist

        Raises:
            CacheReadError: the file exists but is unreadable or not a JSON object
        """
        entries = await self._load_raw()
        if entries is None:
            return None
        return self._decode(entries)

    def _decode(self, entries: Mapping[str, Any]) -> Dict[str, ModelInfo]:
        models: Dict[str, ModelInfo] = {}
        for model_id, entry in entries.items():
            try:
                models[model_id] = ModelInfo.from_dict(entry)
            except (TypeError, ValueError) as e:
                lib_logger.warning(
                    f"Skipping undecodable cache entry for {model_id} in "
                    f"{self.file_path.name}: {e}"
                )
        return models

    async def read(self) -> Optional[Dict[str, ModelInfo]]:
        """Like load(), but a malformed cache is logged and reported as missing."""
        try:
            return await self.load()
        except CacheReadError as e:
            lib_logger.warning(f"Error reading cached OpenRouter models: {e}")
            return None

    async def merge(self, update: Mapping[str, ModelInfo]) -> Dict[str, ModelInfo]:
        """
        Overlay `update` on the cached mapping and write the result back.

        Entries not named in `update` are written back exactly as they were
        read from disk. The returned mapping leaves out entries that cannot
        be decoded, but they are still kept in the file.

        Raises:
            CacheWriteError: the merged mapping could not be written
        """
        async with self._write_lock:
            try:
                entries = await self._load_raw() or {}
            except CacheReadError as e:
                lib_logger.warning(f"Error reading cached OpenRouter models: {e}")
                entries = {}

            for model_id, info in update.items():
                entries[model_id] = info.to_dict()
            await self._write(entries)

        others = self._decode(
            {model_id: entry for model_id, entry in entries.items() if model_id not in update}
        )
        return {
            model_id: update[model_id] if model_id in update else others[model_id]
            for model_id in entries
            if model_id in update or model_id in others
        }

    async def _write(self, entries: Dict[str, Any]):
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, write_json_atomic, self.file_path, entries)
        except (OSError, TypeError, ValueError) as e:
            raise CacheWriteError(f"Failed to write {self.file_path.name}: {e}") from e
