"""Model backends and loaded model handles."""

from graphloader.inference.backends import (
    BinaryGraphBackend,
    FrozenGraphBackendInterface,
    GraphBackendInterface,
    JsonGraphBackend,
    MockBackend,
    TFHubBackend,
)
from graphloader.inference.graph_model import FrozenModel, GraphModel

__all__ = [
    "BinaryGraphBackend",
    "FrozenGraphBackendInterface",
    "FrozenModel",
    "GraphBackendInterface",
    "GraphModel",
    "JsonGraphBackend",
    "MockBackend",
    "TFHubBackend",
]
