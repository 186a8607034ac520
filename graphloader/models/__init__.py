"""Data models and schemas."""

from graphloader.models.artifacts import (
    ModelArtifacts,
    ModelJSON,
    Quantization,
    WeightEntry,
    WeightsGroup,
    parse_weights_manifest,
)
from graphloader.models.options import LoadOptions, ProgressCallback, RequestOptions

__all__ = [
    "LoadOptions",
    "ModelArtifacts",
    "ModelJSON",
    "ProgressCallback",
    "Quantization",
    "RequestOptions",
    "WeightEntry",
    "WeightsGroup",
    "parse_weights_manifest",
]
