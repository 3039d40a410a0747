"""Shared fixtures: upstream payloads and mock OpenRouter transports."""
from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from openrouter_catalog.config import CatalogSettings


def make_endpoint_record(**overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "name": "Google | google/gemini-2.5-pro",
        "context_length": 2097152,
        "provider_name": "Google",
        "tag": "google-vertex/global",
        "max_completion_tokens": 8192,
        "max_prompt_tokens": None,
        "supported_parameters": ["temperature", "top_p", "max_tokens"],
        "status": 0,
        "uptime_last_30m": 99.5,
        "quantization": None,
        "pricing": {
            "prompt": "0.00000125",
            "completion": "0.000005",
            "image": "0.00000025",
            "discount": 0,
        },
    }
    record.update(overrides)
    return record


def make_payload(model_id: str, endpoints: list[dict[str, Any]], **data: Any) -> dict[str, Any]:
    body: dict[str, Any] = {
        "id": model_id,
        "name": model_id,
        "description": f"{model_id} description",
        "architecture": {
            "input_modalities": ["text", "image"],
            "modality": "text+image->text",
            "tokenizer": "Gemini",
        },
        "endpoints": endpoints,
    }
    body.update(data)
    return {"data": body}


def json_transport(
    body: Any, status_code: int = 200, seen: list[httpx.Request] | None = None
) -> httpx.MockTransport:
    content = json.dumps(body).encode()

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(
            status_code=status_code,
            content=content,
            headers={"content-type": "application/json"},
        )

    return httpx.MockTransport(handler)


def failing_transport(exc_factory: Callable[[httpx.Request], Exception]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_factory(request)

    return httpx.MockTransport(handler)


@pytest.fixture
def settings(tmp_path) -> CatalogSettings:
    return CatalogSettings(
        storage_root=tmp_path / "storage",
        log_dir=tmp_path / "logs",
        timeout=5.0,
    )
