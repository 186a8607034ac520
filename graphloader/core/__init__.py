"""Core routing components."""

from graphloader.core.legacy import load_frozen_model
from graphloader.core.locator import (
    BinaryLocator,
    HandlerLocator,
    JsonLocator,
    ModelLocator,
    TFHubLocator,
    classify_frozen_model_locator,
    classify_graph_model_locator,
)
from graphloader.core.manifest import get_weights_manifest_url
from graphloader.core.router import (
    ModelLoadRouter,
    get_router,
    load_graph_model,
    load_tfhub_module,
)

__all__ = [
    "BinaryLocator",
    "HandlerLocator",
    "JsonLocator",
    "ModelLoadRouter",
    "ModelLocator",
    "TFHubLocator",
    "classify_frozen_model_locator",
    "classify_graph_model_locator",
    "get_router",
    "get_weights_manifest_url",
    "load_frozen_model",
    "load_graph_model",
    "load_tfhub_module",
]
