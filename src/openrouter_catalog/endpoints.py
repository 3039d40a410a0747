# src/openrouter_catalog/endpoints.py

from typing import Any, List, Mapping, Optional

from .models import (
    Endpoint,
    ModelEndpoint,
    ModelEndpointsCollection,
    SelectedEndpoints,
)
from .selector import select_representative


def _endpoints_of(model: Any) -> List[Endpoint]:
    if isinstance(model, Mapping):
        endpoints = model.get("endpoints")
    else:
        endpoints = getattr(model, "endpoints", None)
    return list(endpoints) if endpoints else []


def create_model_endpoints(models: Mapping[str, Any]) -> ModelEndpointsCollection:
    """
    Build a collection from any mapping of model ID -> object with `endpoints`.

    Models without endpoints are left out.
    """
    result: ModelEndpointsCollection = {}
    for model_id, model in models.items():
        endpoints = _endpoints_of(model)
        if endpoints:
            result[model_id] = endpoints
    return result


def get_endpoints_for_model(
    collection: ModelEndpointsCollection, model_id: str
) -> List[Endpoint]:
    return collection.get(model_id) or []


def get_model_ids_with_endpoints(collection: ModelEndpointsCollection) -> List[str]:
    return list(collection.keys())


def flatten_model_endpoints(
    collection: ModelEndpointsCollection,
) -> List[ModelEndpoint]:
    """Flatten the collection so every endpoint carries its model ID."""
    result = []
    for model_id, endpoints in collection.items():
        for endpoint in endpoints:
            result.append(ModelEndpoint.from_endpoint(model_id, endpoint))
    return result


def resolve_selected_endpoint(
    collection: ModelEndpointsCollection,
    selected: SelectedEndpoints,
    model_id: str,
) -> Optional[Endpoint]:
    """
    Return the endpoint whose tag was selected for a model.

    Falls back to the representative endpoint when nothing was selected or the
    selected tag no longer exists upstream.
    """
    endpoints = get_endpoints_for_model(collection, model_id)
    tag = selected.get(model_id)
    if tag:
        for endpoint in endpoints:
            if endpoint.tag == tag:
                return endpoint
    return select_representative(endpoints)
