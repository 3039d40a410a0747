"""Tests for the package's public surface."""
from __future__ import annotations

import pytest

import openrouter_catalog
from openrouter_catalog import refresher


def test_lazy_exports() -> None:
    assert openrouter_catalog.EndpointRefresher is refresher.EndpointRefresher
    assert openrouter_catalog.refresh_endpoints is refresher.refresh_endpoints


def test_unknown_attribute() -> None:
    with pytest.raises(AttributeError):
        openrouter_catalog.does_not_exist


@pytest.mark.asyncio
async def test_global_refresher_singleton(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("OPENROUTER_CATALOG_STORAGE", str(tmp_path / "storage"))
    monkeypatch.setenv("OPENROUTER_CATALOG_LOG_DIR", str(tmp_path / "logs"))
    await refresher.close_endpoint_refresher()

    first = refresher.get_endpoint_refresher()
    assert refresher.get_endpoint_refresher() is first
    assert first.cache.file_path == tmp_path / "storage" / "cache" / "openrouter_models.json"

    await refresher.close_endpoint_refresher()
    assert refresher._refresher_instance is None
