"""
Model artifact models.

Schemas for the JSON documents a converted graph ships with
(model.json and the weights manifest) and the in-memory
container handlers produce from them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator


class Quantization(BaseModel):
    """
    Quantization parameters of a stored weight.

    Integer quantization stores `(value - min) / scale` rounded to
    uint8/uint16; float16 quantization stores half-precision values.
    """

    dtype: Literal["uint8", "uint16", "float16"] = Field(
        ...,
        description="Storage dtype of the quantized values",
    )
    scale: Optional[float] = Field(
        default=None,
        description="Step between consecutive quantized values",
    )
    min: Optional[float] = Field(
        default=None,
        description="Value represented by a stored zero",
    )

    @model_validator(mode="after")
    def validate_affine_params(self) -> "Quantization":
        """Integer quantization needs both scale and min."""
        if self.dtype in ("uint8", "uint16") and (self.scale is None or self.min is None):
            raise ValueError(f"{self.dtype} quantization requires scale and min")
        return self


class WeightEntry(BaseModel):
    """A single named tensor inside a weights group."""

    name: str = Field(..., min_length=1)
    shape: List[int] = Field(default_factory=list)
    dtype: str = Field(..., description="Logical dtype: float32|int32|bool")
    quantization: Optional[Quantization] = None

    @property
    def size(self) -> int:
        """Number of elements in the tensor."""
        n = 1
        for dim in self.shape:
            n *= dim
        return n


class WeightsGroup(BaseModel):
    """
    A group of weights stored across one or more shard files.

    Shards are concatenated in `paths` order before the weights
    are sliced out of the buffer.
    """

    paths: List[str] = Field(default_factory=list)
    weights: List[WeightEntry] = Field(default_factory=list)


_MANIFEST_ADAPTER = TypeAdapter(List[WeightsGroup])


def parse_weights_manifest(raw: Any) -> List[WeightsGroup]:
    """
    Validate a decoded weights manifest document.

    Args:
        raw: The JSON-decoded manifest (a list of groups).

    Returns:
        List of WeightsGroup.
    """
    return _MANIFEST_ADAPTER.validate_python(raw)


class ModelJSON(BaseModel):
    """The model.json document written by the graph converter."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", protected_namespaces=())

    model_topology: Optional[Dict[str, Any]] = Field(default=None, alias="modelTopology")
    weights_manifest: List[WeightsGroup] = Field(default_factory=list, alias="weightsManifest")
    format: Optional[str] = None
    generated_by: Optional[str] = Field(default=None, alias="generatedBy")
    converted_by: Optional[str] = Field(default=None, alias="convertedBy")
    signature: Optional[Dict[str, Any]] = None
    user_defined_metadata: Optional[Dict[str, Any]] = Field(default=None, alias="userDefinedMetadata")


@dataclass
class ModelArtifacts:
    """
    Everything a handler produced for one model.

    Uses a dataclass since the weight buffer is raw bytes.
    `model_topology` is a dict for JSON graphs and the raw graph
    bytes for binary frozen graphs.
    """

    model_topology: Union[Dict[str, Any], bytes, None]
    weight_specs: List[WeightEntry] = field(default_factory=list)
    weight_data: bytes = b""
    format: Optional[str] = None
    generated_by: Optional[str] = None
    converted_by: Optional[str] = None
    signature: Optional[Dict[str, Any]] = None
    user_defined_metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def from_model_json(cls, document: ModelJSON, weight_data: bytes) -> "ModelArtifacts":
        """Build artifacts from a parsed model.json plus its concatenated shards."""
        specs: List[WeightEntry] = []
        for group in document.weights_manifest:
            specs.extend(group.weights)
        return cls(
            model_topology=document.model_topology,
            weight_specs=specs,
            weight_data=weight_data,
            format=document.format,
            generated_by=document.generated_by,
            converted_by=document.converted_by,
            signature=document.signature,
            user_defined_metadata=document.user_defined_metadata,
        )
